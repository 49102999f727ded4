"""
AWS Lambda函数入口点
"""
import os
from datetime import datetime, timezone
from typing import Dict, Any

from .errors import ConfigError
from .models import CheckStatus
from .monitor import CertificateExpiryMonitor
from .services.config_validator import ConfigValidator
from .services.domain_config import HostListLoader
from .services.logger import LoggerService


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Lambda函数入口点

    主机列表来自环境变量 DOMAINS（逗号分隔）和 HOSTS_FILE 指定的文件。

    Args:
        event: EventBridge触发事件
        context: Lambda运行时上下文

    Returns:
        dict: 执行结果和统计信息
    """
    logger_service = LoggerService()

    try:
        loader = HostListLoader()
        hosts = loader.get_hosts(loader.hosts_from_env(), os.getenv('HOSTS_FILE'))
        config = ConfigValidator().config_from_env(hosts)

        monitor = CertificateExpiryMonitor(config, logger_service=logger_service)
        result = monitor.execute()

    except ConfigError as e:
        logger_service.logger.error(f"配置错误: {e}")
        return {
            'statusCode': 500,
            'body': {
                'message': 'Certificate expiry check was not started',
                'error': str(e),
                'timestamp': datetime.now(timezone.utc).isoformat()
            }
        }

    return {
        'statusCode': 200,
        'body': {
            'status': result.status.value,
            'message': (
                'All certificates are valid beyond the look-ahead window'
                if result.status is CheckStatus.PASS
                else 'Some hosts failed the certificate expiry check'
            ),
            'summary': {
                'total_hosts': result.total_hosts,
                'passed': result.passed,
                'failed': result.failed,
                'execution_time_seconds': result.execution_time
            },
            'failures': [
                {'hostname': outcome.hostname, 'error': str(outcome.error)}
                for outcome in result.failures
            ],
            'timestamp': datetime.now(timezone.utc).isoformat()
        }
    }
