"""
日志服务
"""
import os
import logging
from datetime import datetime, timezone
from typing import Dict, Any, Optional

from ..interfaces import LoggerServiceInterface
from ..models import CheckOutcome


LOGGER_NAME = "cert_expiry_checker"


class LoggerService(LoggerServiceInterface):
    """日志服务实现"""

    def __init__(self, logger_name: str = LOGGER_NAME, log_level: Optional[str] = None):
        """
        初始化日志服务

        Args:
            logger_name: 日志器名称，各模块的日志器都在它之下
            log_level: 日志级别，如果为None则从环境变量读取
        """
        self.logger_name = logger_name
        self.log_level = log_level or os.getenv('LOG_LEVEL', 'INFO')

        self.logger = logging.getLogger(logger_name)
        self._configure_logger()

        self.execution_stats = self._empty_stats()

    def _configure_logger(self):
        """配置日志器"""
        level = getattr(logging, self.log_level.upper(), logging.INFO)
        self.logger.setLevel(level)

        # 避免重复添加处理器
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            ))
            self.logger.addHandler(handler)

        for handler in self.logger.handlers:
            handler.setLevel(level)

        self.logger.propagate = False

    def log_check_start(self, host_count: int):
        """
        记录检查开始

        Args:
            host_count: 要检查的主机数量
        """
        self.execution_stats['start_time'] = datetime.now(timezone.utc)
        self.execution_stats['total_hosts'] = host_count

        self.logger.info(f"开始证书过期检查，共 {host_count} 个主机")

    def log_outcome(self, outcome: CheckOutcome):
        """
        记录单个主机的检查结果

        Args:
            outcome: 检查结果
        """
        if outcome.ok:
            self.execution_stats['passed'] += 1
            self.logger.info(f"证书正常 - 主机: {outcome.hostname}")
        else:
            self.execution_stats['failed'] += 1
            self.execution_stats['errors'].append({
                'hostname': outcome.hostname,
                'error_type': type(outcome.error).__name__,
                'error_message': str(outcome.error),
            })
            self.logger.info(f"证书检查失败 - 主机: {outcome.hostname}, 错误: {outcome.error}")

    def log_check_end(self):
        """记录检查结束"""
        self.execution_stats['end_time'] = datetime.now(timezone.utc)
        summary = self.get_execution_summary()

        self.logger.info(f"证书过期检查完成，总执行时间: {summary['duration_seconds']:.2f} 秒")

    def log_configuration_info(self, config: Dict[str, Any]):
        """
        记录配置信息

        Args:
            config: 配置信息字典
        """
        self.logger.info("检查配置:")
        for key, value in config.items():
            self.logger.info(f"  {key}: {value}")

    def get_execution_summary(self) -> Dict[str, Any]:
        """
        获取执行摘要

        Returns:
            Dict[str, Any]: 执行摘要信息
        """
        stats = self.execution_stats
        duration = 0.0
        if stats['start_time'] and stats['end_time']:
            duration = (stats['end_time'] - stats['start_time']).total_seconds()

        return {
            'start_time': stats['start_time'].isoformat() if stats['start_time'] else None,
            'end_time': stats['end_time'].isoformat() if stats['end_time'] else None,
            'duration_seconds': duration,
            'total_hosts': stats['total_hosts'],
            'passed': stats['passed'],
            'failed': stats['failed'],
            'errors': stats['errors'],
        }

    def log_execution_summary(self):
        """记录执行摘要"""
        summary = self.get_execution_summary()

        self.logger.info("=" * 50)
        self.logger.info("执行摘要")
        self.logger.info(f"执行时长: {summary['duration_seconds']:.2f} 秒")
        self.logger.info(f"总主机数: {summary['total_hosts']}")
        self.logger.info(f"通过: {summary['passed']}")
        self.logger.info(f"失败: {summary['failed']}")

        for i, error in enumerate(summary['errors'][:5], 1):  # 只显示前5个错误
            self.logger.info(f"  错误 {i}: {error['hostname']} - {error['error_type']}: {error['error_message']}")

        if len(summary['errors']) > 5:
            self.logger.info(f"  ... 还有 {len(summary['errors']) - 5} 个错误")

        self.logger.info("=" * 50)

    def reset_stats(self):
        """重置执行统计"""
        self.execution_stats = self._empty_stats()

    @staticmethod
    def _empty_stats() -> Dict[str, Any]:
        return {
            'start_time': None,
            'end_time': None,
            'total_hosts': 0,
            'passed': 0,
            'failed': 0,
            'errors': [],
        }
