"""
SNS通知服务
"""
import os
import logging
from datetime import datetime, timezone
from typing import Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ..interfaces import NotificationServiceInterface
from ..models import CheckResult


# SNS 主题长度上限为100个字符
MAX_SUBJECT_LENGTH = 100


class SNSNotificationService(NotificationServiceInterface):
    """SNS通知服务实现"""

    def __init__(self, topic_arn: Optional[str] = None, region_name: Optional[str] = None):
        """
        初始化SNS通知服务

        Args:
            topic_arn: SNS主题ARN，如果为None则从环境变量读取
            region_name: AWS区域名称，如果为None则从ARN中提取
        """
        self.topic_arn = topic_arn or os.getenv('SNS_TOPIC_ARN')

        if region_name:
            self.region_name = region_name
        elif self.topic_arn and self.topic_arn.startswith('arn:') and self.topic_arn.count(':') >= 5:
            self.region_name = self.topic_arn.split(':')[3]
        else:
            self.region_name = os.getenv('AWS_REGION', 'us-east-1')

        self.logger = logging.getLogger(__name__)
        self._sns_client = None

    @property
    def sns_client(self):
        """SNS客户端，首次使用时创建"""
        if self._sns_client is None:
            self._sns_client = boto3.client('sns', region_name=self.region_name)
            self.logger.debug(f"SNS客户端初始化成功，区域: {self.region_name}")
        return self._sns_client

    @property
    def enabled(self) -> bool:
        """是否配置了SNS主题"""
        return bool(self.topic_arn)

    def send_failure_notification(self, result: CheckResult) -> bool:
        """
        发送检查失败通知，没有失败的主机时不发送

        Args:
            result: 汇总结果

        Returns:
            bool: 发送是否成功
        """
        if not result.failures:
            self.logger.info("没有检查失败的主机，跳过通知发送")
            return True

        if not self.enabled:
            self.logger.error("SNS主题ARN未配置")
            return False

        try:
            response = self.sns_client.publish(
                TopicArn=self.topic_arn,
                Subject=self._format_subject(result),
                Message=self.format_notification_content(result),
            )
        except ClientError as e:
            error = e.response.get('Error', {})
            self.logger.error(f"SNS发送失败 - {error.get('Code')}: {error.get('Message')}")
            return False
        except BotoCoreError as e:
            self.logger.error(f"发送SNS通知时发生错误: {e}")
            return False

        self.logger.info(f"SNS通知发送成功，MessageId: {response.get('MessageId')}")
        return True

    def format_notification_content(self, result: CheckResult) -> str:
        """
        格式化通知内容

        Args:
            result: 汇总结果

        Returns:
            str: 格式化的通知内容
        """
        if not result.failures:
            return "所有主机证书状态正常。"

        lines = [
            "证书过期检查报告",
            "=" * 30,
            f"检查时间: {datetime.now(timezone.utc).strftime('%Y-%m-%d %H:%M:%S')} UTC",
            f"总主机数: {result.total_hosts}",
            f"通过: {result.passed}",
            f"失败: {result.failed}",
            "",
            "检查失败的主机:",
            "",
        ]

        for outcome in result.failures:
            lines.append(f"• {outcome.hostname}")
            lines.append(f"  错误: {outcome.error}")
            lines.append("")

        lines.append("此消息由证书过期检查工具自动发送。")

        return "\n".join(lines)

    def _format_subject(self, result: CheckResult) -> str:
        """
        格式化邮件主题

        Args:
            result: 汇总结果

        Returns:
            str: 邮件主题
        """
        subject = f"证书过期检查: {result.failed}/{result.total_hosts} 个主机失败"
        return subject[:MAX_SUBJECT_LENGTH]
