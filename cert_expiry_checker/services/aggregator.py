"""
检查结果汇总服务
"""
import logging
from typing import Iterable, Optional

from ..models import CheckOutcome, CheckResult, CheckStatus


class ResultAggregator:
    """结果汇总器"""

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def aggregate(self, outcomes: Iterable[CheckOutcome], expected: Optional[int] = None) -> CheckResult:
        """
        汇总所有检查结果

        遇到失败不会提前结束，所有结果都会被读取，失败报告包含每个失败的主机。

        Args:
            outcomes: 检查结果
            expected: 预期的结果数量，为None时不校验

        Returns:
            CheckResult: 汇总结果

        Raises:
            ValueError: 结果数量与预期不一致
        """
        total = 0
        passed = 0
        failures = []

        for outcome in outcomes:
            total += 1
            if outcome.ok:
                passed += 1
            else:
                failures.append(outcome)

        if expected is not None and total != expected:
            raise ValueError(f"expected {expected} outcomes, got {total}")

        status = CheckStatus.FAIL if failures else CheckStatus.PASS
        self.logger.info(f"汇总完成: 总计 {total} 个主机, 通过 {passed} 个, 失败 {len(failures)} 个")

        return CheckResult(
            status=status,
            total_hosts=total,
            passed=passed,
            failures=failures,
        )
