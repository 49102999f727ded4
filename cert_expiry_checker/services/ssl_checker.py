"""
证书检查服务
"""
import logging
from typing import Optional

from ..errors import ConnectError, ExpiringError
from ..interfaces import CertificateCheckerInterface, ConnectorInterface
from ..models import CheckOutcome, DEFAULT_DAYS
from .connector import TLSConnector
from .expiry_calculator import ExpiryEvaluator


class CertificateChecker(CertificateCheckerInterface):
    """证书检查器实现，组合连接器和过期判断器"""

    def __init__(self, days: int = DEFAULT_DAYS,
                 connector: Optional[ConnectorInterface] = None,
                 evaluator: Optional[ExpiryEvaluator] = None):
        """
        初始化证书检查器

        Args:
            days: 向后检查的天数
            connector: TLS连接器，默认使用TLSConnector
            evaluator: 过期判断器，默认使用ExpiryEvaluator
        """
        self.days = days
        self.connector = connector or TLSConnector()
        self.evaluator = evaluator or ExpiryEvaluator(days)
        self.logger = logging.getLogger(__name__)

    def check(self, hostname: str) -> CheckOutcome:
        """
        检查单个主机的证书链

        单个主机的错误不会抛出，而是记录在返回的检查结果中。

        Args:
            hostname: 主机名，可以带端口

        Returns:
            CheckOutcome: 检查结果
        """
        threshold = self.evaluator.calculate_threshold(self.days)

        try:
            chain = self.connector.connect(hostname)
        except ConnectError as e:
            self.logger.info(f"主机 {hostname} 连接失败: {e}")
            return CheckOutcome(hostname=hostname, error=e)

        try:
            self.evaluator.evaluate(hostname, chain, threshold)
        except ExpiringError as e:
            self.logger.info(f"主机 {hostname} 证书即将过期: {e}")
            return CheckOutcome(hostname=hostname, error=e)

        if chain:
            self.logger.debug(
                f"主机 {hostname} 证书正常，证书链长度 {len(chain)}, "
                f"叶子证书剩余天数: {self.evaluator.days_until_expiry(chain[0])} 天"
            )
        return CheckOutcome(hostname=hostname)
