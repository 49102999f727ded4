"""
证书过期计算服务
"""
from datetime import datetime, timezone, timedelta
from typing import Optional, Sequence

from cryptography import x509
from cryptography.x509.oid import NameOID

from ..errors import ExpiringError
from ..models import DEFAULT_DAYS


def get_not_after(cert: x509.Certificate) -> datetime:
    """证书过期时间（UTC）"""
    try:
        # cryptography >= 42
        return cert.not_valid_after_utc
    except AttributeError:
        return cert.not_valid_after.replace(tzinfo=timezone.utc)


def get_common_name(cert: x509.Certificate) -> str:
    """证书主题的通用名称，缺失时返回完整主题"""
    names = cert.subject.get_attributes_for_oid(NameOID.COMMON_NAME)
    if names:
        return str(names[0].value)
    return cert.subject.rfc4514_string()


class ExpiryEvaluator:
    """证书过期判断器"""

    def __init__(self, days: int = DEFAULT_DAYS):
        """
        初始化过期判断器

        Args:
            days: 向后检查的天数，默认30天
        """
        self.days = days

    def calculate_threshold(self, days: Optional[int] = None, now: Optional[datetime] = None) -> datetime:
        """
        计算过期阈值：当前时间加上检查天数

        Args:
            days: 天数，为None时使用初始化时的配置
            now: 当前时间，为None时取UTC当前时间

        Returns:
            datetime: 阈值时间
        """
        if days is None:
            days = self.days
        if now is None:
            now = datetime.now(timezone.utc)
        return now + timedelta(days=days)

    def evaluate(self, hostname: str, chain: Sequence[x509.Certificate], threshold: datetime) -> None:
        """
        按顺序检查证书链，遇到第一个在阈值之前过期的证书即失败

        恰好在阈值时刻过期的证书不算即将过期。空证书链视为通过。

        Args:
            hostname: 主机名，用于错误信息
            chain: 证书链，叶子证书在前
            threshold: 阈值时间

        Raises:
            ExpiringError: 证书在阈值之前过期
        """
        for index, cert in enumerate(chain):
            not_after = get_not_after(cert)
            if not_after < threshold:
                raise ExpiringError(hostname, index, get_common_name(cert), not_after)

    def days_until_expiry(self, cert: x509.Certificate, now: Optional[datetime] = None) -> int:
        """
        计算距离过期的天数

        Args:
            cert: 证书
            now: 当前时间，为None时取UTC当前时间

        Returns:
            int: 剩余天数（负数表示已过期）
        """
        if now is None:
            now = datetime.now(timezone.utc)
        delta = get_not_after(cert) - now
        return delta.days
