"""
并发检查调度服务
"""
import queue
import threading
import logging
from typing import List, Sequence

from ..errors import ConfigError, UnexpectedCheckError
from ..interfaces import CertificateCheckerInterface
from ..models import CheckOutcome, DEFAULT_CONCURRENCY


# 工作队列关闭标记，每个工作线程收到一个后退出
_CLOSED = object()


class WorkDispatcher:
    """
    固定数量工作线程的调度器

    生产者线程把主机名逐个放入工作队列，然后为每个工作线程放入一个关闭标记。
    工作线程从队列取主机名执行检查，把结果放入结果队列。调度器只等待收齐
    与输入数量相同的结果，不等待工作线程退出。
    """

    def __init__(self, checker: CertificateCheckerInterface, concurrency: int = DEFAULT_CONCURRENCY):
        """
        初始化调度器

        Args:
            checker: 证书检查器
            concurrency: 并发工作线程数量
        """
        self.checker = checker
        self.concurrency = concurrency
        self.logger = logging.getLogger(__name__)

    def run(self, hostnames: Sequence[str]) -> List[CheckOutcome]:
        """
        并发检查所有主机

        Args:
            hostnames: 主机名列表

        Returns:
            List[CheckOutcome]: 每个输入主机恰好一个结果，顺序不保证与输入一致

        Raises:
            ConfigError: 并发数小于1
        """
        if self.concurrency <= 0:
            raise ConfigError(f"concurrency must be at least 1, got {self.concurrency}")

        hosts = list(hostnames)
        if not hosts:
            return []

        work_queue: queue.Queue = queue.Queue(maxsize=1)
        results: queue.Queue = queue.Queue()

        self.logger.info(f"启动 {self.concurrency} 个工作线程，共 {len(hosts)} 个主机")

        for i in range(self.concurrency):
            worker = threading.Thread(
                target=self._worker,
                args=(work_queue, results),
                name=f"cert-check-worker-{i}",
                daemon=True,
            )
            worker.start()

        producer = threading.Thread(
            target=self._enqueue,
            args=(hosts, work_queue),
            name="cert-check-producer",
            daemon=True,
        )
        producer.start()

        outcomes = []
        for _ in range(len(hosts)):
            outcomes.append(results.get())

        return outcomes

    def _enqueue(self, hosts: List[str], work_queue: queue.Queue):
        """放入所有主机名，然后关闭队列"""
        for host in hosts:
            work_queue.put(host)

        for _ in range(self.concurrency):
            work_queue.put(_CLOSED)

    def _worker(self, work_queue: queue.Queue, results: queue.Queue):
        """持续从工作队列取主机名检查，直到收到关闭标记"""
        while True:
            host = work_queue.get()
            if host is _CLOSED:
                return

            try:
                outcome = self.checker.check(host)
            except BaseException as e:
                # 每个取出的主机都必须产生一个结果，否则调度器会一直等待
                self.logger.exception(f"检查主机 {host} 时发生未预期的错误")
                outcome = CheckOutcome(hostname=host, error=UnexpectedCheckError(host, e))

            results.put(outcome)
