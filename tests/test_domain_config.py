"""
主机列表加载器测试
"""
import os
from unittest.mock import patch

import pytest

from cert_expiry_checker.errors import ConfigError
from cert_expiry_checker.services.domain_config import HostListLoader


class TestHostListLoader:
    """主机列表加载器测试类"""

    def setup_method(self):
        """测试前准备"""
        self.loader = HostListLoader()

    def test_read_hosts_file(self, tmp_path):
        """测试读取主机文件"""
        hosts_file = tmp_path / "hosts.txt"
        hosts_file.write_text("example.com\n  example.org:8443  \n\n# comment\nexample.net\n")

        hosts = self.loader.read_hosts_file(str(hosts_file))

        assert hosts == ["example.com", "example.org:8443", "example.net"]

    def test_read_hosts_file_missing(self, tmp_path):
        """测试主机文件不存在"""
        missing = tmp_path / "missing.txt"

        with pytest.raises(ConfigError, match="does not exist"):
            self.loader.read_hosts_file(str(missing))

    def test_read_hosts_file_unreadable(self, tmp_path):
        """测试主机文件读取失败"""
        with pytest.raises(ConfigError, match="error reading hosts file"):
            self.loader.read_hosts_file(str(tmp_path))

    def test_get_hosts_args_first(self, tmp_path):
        """测试命令行主机在文件主机之前"""
        hosts_file = tmp_path / "hosts.txt"
        hosts_file.write_text("from-file.example\n")

        hosts = self.loader.get_hosts(["arg.example"], str(hosts_file))

        assert hosts == ["arg.example", "from-file.example"]

    def test_get_hosts_without_file(self):
        """测试只有命令行主机"""
        assert self.loader.get_hosts(["a.example", " ", "b.example"]) == ["a.example", "b.example"]

    @patch.dict(os.environ, {'DOMAINS': 'a.example, b.example:8443,,'})
    def test_hosts_from_env(self):
        """测试从环境变量读取主机"""
        assert self.loader.hosts_from_env() == ["a.example", "b.example:8443"]

    @patch.dict(os.environ, {'DOMAINS': ''})
    def test_hosts_from_env_empty(self):
        """测试环境变量为空"""
        assert self.loader.hosts_from_env() == []

    @patch.dict(os.environ, {'CUSTOM_HOSTS': 'custom.example'})
    def test_custom_env_var(self):
        """测试自定义环境变量名称"""
        assert HostListLoader(env_var_name="CUSTOM_HOSTS").hosts_from_env() == ["custom.example"]
