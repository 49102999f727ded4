"""
服务接口定义
"""
from abc import ABC, abstractmethod
from typing import List

from cryptography import x509

from .models import CheckOutcome, CheckResult


class HostSourceInterface(ABC):
    """主机列表来源接口"""

    @abstractmethod
    def read_hosts_file(self, path: str) -> List[str]:
        """从文件读取主机列表"""
        pass


class ConnectorInterface(ABC):
    """TLS连接器接口"""

    @abstractmethod
    def connect(self, hostname: str) -> List[x509.Certificate]:
        """连接主机并返回对端证书链"""
        pass


class CertificateCheckerInterface(ABC):
    """证书检查器接口"""

    @abstractmethod
    def check(self, hostname: str) -> CheckOutcome:
        """检查单个主机的证书链"""
        pass


class NotificationServiceInterface(ABC):
    """通知服务接口"""

    @abstractmethod
    def send_failure_notification(self, result: CheckResult) -> bool:
        """发送检查失败通知"""
        pass

    @abstractmethod
    def format_notification_content(self, result: CheckResult) -> str:
        """格式化通知内容"""
        pass


class LoggerServiceInterface(ABC):
    """日志服务接口"""

    @abstractmethod
    def log_check_start(self, host_count: int):
        """记录检查开始"""
        pass

    @abstractmethod
    def log_outcome(self, outcome: CheckOutcome):
        """记录单个主机的检查结果"""
        pass
