"""
证书过期检查主流程
"""
import time
from typing import Optional

from .models import MonitorConfig, CheckResult, CheckStatus
from .services.aggregator import ResultAggregator
from .services.config_validator import ConfigValidator
from .services.connector import TLSConnector
from .services.dispatcher import WorkDispatcher
from .services.logger import LoggerService
from .services.sns_notification import SNSNotificationService
from .services.ssl_checker import CertificateChecker


class CertificateExpiryMonitor:
    """证书过期检查器主类"""

    def __init__(self, config: MonitorConfig, logger_service: Optional[LoggerService] = None):
        """
        初始化检查器，配置在任何网络操作之前验证

        Args:
            config: 检查配置
            logger_service: 日志服务，为None时新建

        Raises:
            ConfigError: 配置无效
        """
        self.config_validator = ConfigValidator()
        self.config = self.config_validator.validate(config)

        self.logger_service = logger_service or LoggerService()
        self.checker = CertificateChecker(
            days=config.days,
            connector=TLSConnector(timeout=config.timeout),
        )
        self.dispatcher = WorkDispatcher(self.checker, concurrency=config.concurrency)
        self.aggregator = ResultAggregator()
        self.notification_service = SNSNotificationService(topic_arn=config.sns_topic_arn)

        self.logger_service.log_configuration_info(self.config_validator.describe(config))

    def execute(self) -> CheckResult:
        """
        执行证书过期检查

        Returns:
            CheckResult: 检查结果
        """
        hostnames = self.config.hostnames
        start = time.monotonic()

        self.logger_service.reset_stats()
        self.logger_service.log_check_start(len(hostnames))

        outcomes = self.dispatcher.run(hostnames)
        for outcome in outcomes:
            self.logger_service.log_outcome(outcome)

        result = self.aggregator.aggregate(outcomes, expected=len(hostnames))
        result.execution_time = time.monotonic() - start

        self.logger_service.log_check_end()
        self.logger_service.log_execution_summary()

        if result.status is CheckStatus.FAIL and self.notification_service.enabled:
            self.notification_service.send_failure_notification(result)

        return result
