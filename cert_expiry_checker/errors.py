"""
错误类型定义
"""
from datetime import datetime
from typing import Optional


class CertCheckError(Exception):
    """证书检查相关错误的基类"""


class ConfigError(CertCheckError):
    """配置错误，在任何网络操作之前发现，终止整个运行"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class CheckError(CertCheckError):
    """单个主机检查失败的基类，记录在检查结果中而不是向外抛出"""

    def __init__(self, hostname: str):
        super().__init__(hostname)
        self.hostname = hostname


class ConnectError(CheckError):
    """TCP连接或TLS握手失败"""

    def __init__(self, hostname: str, address: str, cause: BaseException):
        super().__init__(hostname)
        self.address = address
        self.cause = cause

    def __str__(self) -> str:
        return f"tls dial {self.address}: {_describe(self.cause)}"


class ExpiringError(CheckError):
    """证书链中存在在阈值之前过期的证书"""

    def __init__(self, hostname: str, index: int, subject: str, not_after: datetime):
        super().__init__(hostname)
        self.index = index
        self.subject = subject
        self.not_after = not_after

    def __str__(self) -> str:
        return f"cert[{self.index}] {self.subject} expires at {self.not_after.strftime('%Y-%m-%d %H:%M:%S %z UTC')}"


class UnexpectedCheckError(CheckError):
    """检查过程中出现的其他异常"""

    def __init__(self, hostname: str, cause: BaseException):
        super().__init__(hostname)
        self.cause = cause

    def __str__(self) -> str:
        return f"unexpected error: {_describe(self.cause)}"


def _describe(error: Optional[BaseException]) -> str:
    """
    格式化底层异常

    Args:
        error: 异常对象

    Returns:
        str: 错误描述，消息为空时使用异常类型名称
    """
    if error is None:
        return "unknown error"
    message = str(error)
    return message if message else type(error).__name__
