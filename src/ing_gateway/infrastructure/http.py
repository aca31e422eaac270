"""HTTP client construction for mutual-TLS provider calls."""

import ssl
from collections.abc import Callable

import httpx

ClientFactory = Callable[[str, str], httpx.Client]


def create_mtls_client(
    cert_path: str,
    key_path: str,
    timeout_seconds: float = 10.0,
) -> httpx.Client:
    """
    Create an httpx client that presents a client certificate.

    The identity of the caller is established by the certificate/key pair;
    the server certificate is still verified against the system CA bundle.

    Args:
        cert_path: Path to the PEM client certificate
        key_path: Path to the PEM private key
        timeout_seconds: Connect/read/write/pool timeout

    Raises:
        FileNotFoundError: If the certificate or key is missing
        ssl.SSLError: If the pair cannot be loaded
    """
    ssl_context = ssl.create_default_context()
    ssl_context.load_cert_chain(certfile=cert_path, keyfile=key_path)
    return httpx.Client(verify=ssl_context, timeout=timeout_seconds)
