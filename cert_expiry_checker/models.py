"""
数据模型定义
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, List, Tuple

from .errors import CheckError


DEFAULT_DAYS = 30
DEFAULT_CONCURRENCY = 8
DEFAULT_TIMEOUT = 10.0


@dataclass(frozen=True)
class MonitorConfig:
    """检查配置，构造时传入各组件，运行期间不可变"""
    hostnames: Tuple[str, ...] = ()
    days: int = DEFAULT_DAYS
    concurrency: int = DEFAULT_CONCURRENCY
    timeout: float = DEFAULT_TIMEOUT
    sns_topic_arn: Optional[str] = None


@dataclass(frozen=True)
class CheckOutcome:
    """单个主机的检查结果"""
    hostname: str
    error: Optional[CheckError] = None

    @property
    def ok(self) -> bool:
        """检查是否通过"""
        return self.error is None


class CheckStatus(Enum):
    """整体检查状态"""
    PASS = "pass"
    FAIL = "fail"


@dataclass
class CheckResult:
    """检查结果统计"""
    status: CheckStatus
    total_hosts: int
    passed: int
    failures: List[CheckOutcome] = field(default_factory=list)
    execution_time: float = 0.0

    @property
    def failed(self) -> int:
        """失败的主机数量"""
        return len(self.failures)

    def report_lines(self) -> List[str]:
        """每个失败主机一行诊断信息"""
        return [f"error: {outcome.hostname}: {outcome.error}" for outcome in self.failures]
