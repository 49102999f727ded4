"""
配置验证服务
"""
import os
import re
import logging
from typing import Any, Dict, Optional

from ..errors import ConfigError
from ..models import MonitorConfig, DEFAULT_DAYS, DEFAULT_CONCURRENCY, DEFAULT_TIMEOUT


SNS_TOPIC_ARN_PATTERN = re.compile(r'^arn:aws[a-z-]*:sns:[a-z0-9-]+:\d{12}:[a-zA-Z0-9_.-]+$')


class ConfigValidator:
    """配置验证器"""

    def __init__(self):
        """初始化配置验证器"""
        self.logger = logging.getLogger(__name__)

    def validate(self, config: MonitorConfig) -> MonitorConfig:
        """
        验证检查配置，必须在任何网络操作之前调用

        Args:
            config: 检查配置

        Returns:
            MonitorConfig: 原配置

        Raises:
            ConfigError: 配置无效
        """
        if config.concurrency <= 0:
            raise ConfigError(f"concurrency must be at least 1, got {config.concurrency}")

        if config.timeout <= 0:
            raise ConfigError(f"timeout must be positive, got {config.timeout}")

        if config.sns_topic_arn:
            self.validate_sns_topic_arn(config.sns_topic_arn)

        if not config.hostnames:
            self.logger.warning("没有配置要检查的主机")

        if config.concurrency > len(config.hostnames) > 0:
            self.logger.debug(
                f"并发数 {config.concurrency} 大于主机数量 {len(config.hostnames)}，部分工作线程将空闲"
            )

        return config

    def validate_sns_topic_arn(self, topic_arn: str) -> str:
        """
        验证SNS主题ARN格式

        Args:
            topic_arn: SNS主题ARN

        Returns:
            str: 原ARN

        Raises:
            ConfigError: ARN格式无效
        """
        if not SNS_TOPIC_ARN_PATTERN.match(topic_arn):
            raise ConfigError(f"invalid SNS topic ARN: {topic_arn}")
        return topic_arn

    def config_from_env(self, hostnames=()) -> MonitorConfig:
        """
        从环境变量构建检查配置

        Args:
            hostnames: 主机名列表

        Returns:
            MonitorConfig: 检查配置

        Raises:
            ConfigError: 数值型环境变量格式无效
        """
        return MonitorConfig(
            hostnames=tuple(hostnames),
            days=self._env_number('DAYS', DEFAULT_DAYS, int),
            concurrency=self._env_number('CONCURRENCY', DEFAULT_CONCURRENCY, int),
            timeout=self._env_number('TIMEOUT', DEFAULT_TIMEOUT, float),
            sns_topic_arn=os.getenv('SNS_TOPIC_ARN') or None,
        )

    def describe(self, config: MonitorConfig) -> Dict[str, Any]:
        """
        生成可记录的配置信息，隐藏ARN中的账号

        Args:
            config: 检查配置

        Returns:
            Dict[str, Any]: 配置信息
        """
        return {
            'host_count': len(config.hostnames),
            'days': config.days,
            'concurrency': config.concurrency,
            'timeout': config.timeout,
            'sns_topic_arn': self._sanitize_arn(config.sns_topic_arn),
        }

    def _env_number(self, name: str, default, cast):
        value = os.getenv(name)
        if value is None or not value.strip():
            return default
        try:
            return cast(value.strip())
        except ValueError as e:
            raise ConfigError(f"environment variable {name} must be a number, got {value!r}") from e

    def _sanitize_arn(self, arn: Optional[str]) -> Optional[str]:
        if not arn:
            return None
        parts = arn.split(':')
        if len(parts) >= 6:
            return f"{':'.join(parts[:4])}:***:{parts[-1]}"
        return "***"
