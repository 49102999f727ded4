"""
测试公共夹具
"""
import socket
import ssl
import threading
from datetime import datetime, timezone, timedelta

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.x509.oid import NameOID


TEST_KEY = ec.generate_private_key(ec.SECP256R1())


def build_certificate(common_name: str, not_after: datetime) -> x509.Certificate:
    """生成一个自签名测试证书"""
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, common_name)])
    return (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(TEST_KEY.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(not_after - timedelta(days=400))
        .not_valid_after(not_after)
        .sign(TEST_KEY, hashes.SHA256())
    )


@pytest.fixture
def make_certificate():
    """按距离现在的天数生成证书"""
    def _make(common_name: str = "example.com", days: float = 90) -> x509.Certificate:
        return build_certificate(common_name, datetime.now(timezone.utc) + timedelta(days=days))
    return _make


@pytest.fixture
def tls_server(tmp_path):
    """
    本地TLS服务器，只完成握手后关闭连接

    返回一个函数，传入证书剩余天数，返回 "127.0.0.1:port"。
    """
    listeners = []

    def _start(days: float, common_name: str = "localhost") -> str:
        cert = build_certificate(common_name, datetime.now(timezone.utc) + timedelta(days=days))
        cert_file = tmp_path / f"{common_name}-{len(listeners)}.pem"
        key_file = tmp_path / f"{common_name}-{len(listeners)}.key"
        cert_file.write_bytes(cert.public_bytes(serialization.Encoding.PEM))
        key_file.write_bytes(TEST_KEY.private_bytes(
            serialization.Encoding.PEM,
            serialization.PrivateFormat.PKCS8,
            serialization.NoEncryption(),
        ))

        context = ssl.SSLContext(ssl.PROTOCOL_TLS_SERVER)
        context.load_cert_chain(str(cert_file), str(key_file))

        listener = socket.create_server(("127.0.0.1", 0))
        listeners.append(listener)

        def serve():
            while True:
                try:
                    conn, _ = listener.accept()
                except OSError:
                    return
                try:
                    with context.wrap_socket(conn, server_side=True):
                        pass
                except (ssl.SSLError, OSError):
                    conn.close()

        threading.Thread(target=serve, daemon=True).start()
        return f"127.0.0.1:{listener.getsockname()[1]}"

    yield _start

    for listener in listeners:
        listener.close()


@pytest.fixture
def closed_port():
    """一个没有服务监听的本地端口"""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        port = sock.getsockname()[1]
    return port
