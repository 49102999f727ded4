"""
TLS连接服务
"""
import select
import socket
import time
import logging
from ipaddress import ip_address
from typing import List, Tuple

from cryptography import x509
from OpenSSL import SSL

from ..errors import ConnectError
from ..interfaces import ConnectorInterface
from ..models import DEFAULT_TIMEOUT


DEFAULT_PORT = 443


class TLSConnector(ConnectorInterface):
    """TLS连接器实现，只完成握手并读取对端证书链"""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT):
        """
        初始化TLS连接器

        Args:
            timeout: 连接和握手的超时时间（秒）
        """
        self.timeout = timeout
        self.logger = logging.getLogger(__name__)

    @staticmethod
    def normalize_address(hostname: str) -> str:
        """
        补全连接地址，不修改用于报告的原始主机名

        Args:
            hostname: 主机名，可以带端口

        Returns:
            str: host:port 形式的地址
        """
        if ':' not in hostname:
            return f"{hostname}:{DEFAULT_PORT}"
        return hostname

    def connect(self, hostname: str) -> List[x509.Certificate]:
        """
        连接主机并获取证书链

        Args:
            hostname: 主机名，可以带端口

        Returns:
            List[x509.Certificate]: 对端证书链，叶子证书在前

        Raises:
            ConnectError: 连接或握手失败
        """
        address = self.normalize_address(hostname)

        try:
            host, port = self._split_address(address)
            self.logger.debug(f"连接 {address}")
            with socket.create_connection((host, port), timeout=self.timeout) as sock:
                return self._handshake(sock, host)
        except (OSError, SSL.Error, ValueError) as e:
            raise ConnectError(hostname, address, e) from e

    def _split_address(self, address: str) -> Tuple[str, int]:
        """
        拆分地址为主机和端口

        Args:
            address: host:port 形式的地址，IPv6地址使用方括号

        Returns:
            Tuple[str, int]: 主机和端口
        """
        host, _, port = address.rpartition(':')
        host = host.strip('[]')
        if not host:
            raise ValueError(f"missing host in address {address}")
        return host, int(port)

    def _handshake(self, sock: socket.socket, host: str) -> List[x509.Certificate]:
        """
        在已建立的连接上完成TLS握手

        Args:
            sock: 已连接的套接字
            host: 主机名，用于SNI

        Returns:
            List[x509.Certificate]: 对端证书链
        """
        context = SSL.Context(SSL.TLS_CLIENT_METHOD)
        conn = SSL.Connection(context, sock)

        # IP地址不能作为SNI发送
        if not self._is_ip(host):
            conn.set_tlsext_host_name(host.encode('idna'))

        conn.set_connect_state()
        deadline = time.monotonic() + self.timeout

        while True:
            try:
                conn.do_handshake()
                break
            except SSL.WantReadError:
                self._wait(sock, deadline, readable=True)
            except SSL.WantWriteError:
                self._wait(sock, deadline, readable=False)

        chain = conn.get_peer_cert_chain() or []

        try:
            conn.shutdown()
        except SSL.Error as e:
            self.logger.debug(f"关闭TLS连接时出错: {e}")

        return [cert.to_cryptography() for cert in chain]

    def _wait(self, sock: socket.socket, deadline: float, readable: bool):
        """
        等待套接字就绪，超过截止时间时抛出超时

        Args:
            sock: 套接字
            deadline: 截止时间（time.monotonic）
            readable: 等待可读还是可写
        """
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            raise socket.timeout("tls handshake timed out")

        if readable:
            ready, _, _ = select.select([sock], [], [], remaining)
        else:
            _, ready, _ = select.select([], [sock], [], remaining)

        if not ready:
            raise socket.timeout("tls handshake timed out")

    @staticmethod
    def _is_ip(host: str) -> bool:
        try:
            ip_address(host)
        except ValueError:
            return False
        return True
