"""
主机列表加载服务
"""
import os
import logging
from typing import List, Optional, Sequence

from ..errors import ConfigError
from ..interfaces import HostSourceInterface


class HostListLoader(HostSourceInterface):
    """主机列表加载器实现"""

    def __init__(self, env_var_name: str = "DOMAINS"):
        """
        初始化主机列表加载器

        Args:
            env_var_name: 环境变量名称，默认为"DOMAINS"
        """
        self.env_var_name = env_var_name
        self.logger = logging.getLogger(__name__)

    def get_hosts(self, args: Sequence[str] = (), hosts_file: Optional[str] = None) -> List[str]:
        """
        合并命令行参数和主机文件中的主机名，参数中的主机在前

        Args:
            args: 命令行传入的主机名
            hosts_file: 主机文件路径，为空时不读取

        Returns:
            List[str]: 主机名列表

        Raises:
            ConfigError: 主机文件不存在或读取失败
        """
        hosts = [host.strip() for host in args if host.strip()]

        if hosts_file:
            hosts.extend(self.read_hosts_file(hosts_file))

        return hosts

    def read_hosts_file(self, path: str) -> List[str]:
        """
        读取主机文件，每行一个主机名

        空行和以#开头的行会被跳过。

        Args:
            path: 主机文件路径

        Returns:
            List[str]: 主机名列表

        Raises:
            ConfigError: 文件不存在或读取失败
        """
        if not os.path.exists(path):
            raise ConfigError(f"provided hosts file {path} does not exist")

        hosts = []
        try:
            with open(path, encoding='utf-8') as f:
                for line in f:
                    host = line.strip()
                    if not host or host.startswith('#'):
                        continue
                    hosts.append(host)
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigError(f"error reading hosts file {path}: {e}") from e

        self.logger.info(f"从 {path} 加载了 {len(hosts)} 个主机")
        return hosts

    def hosts_from_env(self) -> List[str]:
        """
        从环境变量获取主机列表（逗号分隔）

        Returns:
            List[str]: 主机名列表
        """
        hosts_str = os.getenv(self.env_var_name, "")

        if not hosts_str.strip():
            self.logger.warning(f"环境变量 {self.env_var_name} 为空")
            return []

        hosts = [host.strip() for host in hosts_str.split(',') if host.strip()]
        self.logger.info(f"从环境变量 {self.env_var_name} 加载了 {len(hosts)} 个主机")
        return hosts
