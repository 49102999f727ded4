"""
配置验证器测试
"""
import os
from unittest.mock import patch

import pytest

from cert_expiry_checker.errors import ConfigError
from cert_expiry_checker.models import MonitorConfig
from cert_expiry_checker.services.config_validator import ConfigValidator


class TestConfigValidator:
    """配置验证器测试类"""

    def setup_method(self):
        """测试前准备"""
        self.validator = ConfigValidator()

    def test_validate_defaults(self):
        """测试默认配置有效"""
        config = MonitorConfig(hostnames=("example.com",))

        assert self.validator.validate(config) is config
        assert config.days == 30
        assert config.concurrency == 8

    @pytest.mark.parametrize("concurrency", [0, -3])
    def test_validate_invalid_concurrency(self, concurrency):
        """测试并发数无效"""
        with pytest.raises(ConfigError, match="concurrency"):
            self.validator.validate(MonitorConfig(hostnames=("a.example",), concurrency=concurrency))

    def test_validate_invalid_timeout(self):
        """测试超时时间无效"""
        with pytest.raises(ConfigError, match="timeout"):
            self.validator.validate(MonitorConfig(hostnames=("a.example",), timeout=0))

    def test_validate_sns_topic_arn(self):
        """测试SNS主题ARN格式"""
        arn = "arn:aws:sns:us-east-1:123456789012:cert-alerts"

        assert self.validator.validate_sns_topic_arn(arn) == arn

        with pytest.raises(ConfigError, match="invalid SNS topic ARN"):
            self.validator.validate(MonitorConfig(sns_topic_arn="not-an-arn"))

    def test_validate_empty_hosts_allowed(self):
        """测试没有主机时不报错"""
        config = MonitorConfig()

        assert self.validator.validate(config) is config

    @patch.dict(os.environ, {
        'DAYS': '14',
        'CONCURRENCY': '4',
        'TIMEOUT': '2.5',
        'SNS_TOPIC_ARN': 'arn:aws:sns:eu-west-1:123456789012:certs'
    })
    def test_config_from_env(self):
        """测试从环境变量构建配置"""
        config = self.validator.config_from_env(["a.example"])

        assert config == MonitorConfig(
            hostnames=("a.example",),
            days=14,
            concurrency=4,
            timeout=2.5,
            sns_topic_arn='arn:aws:sns:eu-west-1:123456789012:certs',
        )

    @patch.dict(os.environ, {'CONCURRENCY': 'eight'})
    def test_config_from_env_invalid_number(self):
        """测试数值型环境变量格式无效"""
        with pytest.raises(ConfigError, match="CONCURRENCY"):
            self.validator.config_from_env([])

    def test_describe_hides_account(self):
        """测试配置信息隐藏账号"""
        config = MonitorConfig(
            hostnames=("a.example", "b.example"),
            sns_topic_arn="arn:aws:sns:us-east-1:123456789012:cert-alerts",
        )

        info = self.validator.describe(config)

        assert info['host_count'] == 2
        assert info['sns_topic_arn'] == "arn:aws:sns:us-east-1:***:cert-alerts"
        assert "123456789012" not in str(info)
