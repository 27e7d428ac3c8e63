"""Construction of the underlying httpx client.

The client does not add connection-pooling or retry policy of its own; it
relies on httpx defaults apart from the timeout, and the transport is
created with ``retries=0`` so every call is exactly one round trip.
"""

import logging
from typing import Optional

import httpx

logger = logging.getLogger(__name__)


def create_timeout(
    connect: float = 5.0, read: float = 30.0, write: float = 10.0, pool: float = 5.0
) -> httpx.Timeout:
    """Create an httpx timeout configuration.

    :param connect: Connection timeout in seconds
    :type connect: float
    :param read: Read timeout in seconds
    :type read: float
    :param write: Write timeout in seconds
    :type write: float
    :param pool: Pool acquisition timeout in seconds
    :type pool: float
    :return: Timeout configuration
    :rtype: httpx.Timeout
    """
    return httpx.Timeout(connect=connect, read=read, write=write, pool=pool)


def create_http_client(
    timeout: Optional[float] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """Create the async client used for all API traffic.

    :param timeout: Read timeout in seconds; defaults to 30
    :type timeout: Optional[float]
    :param transport: Optional transport, e.g. ``httpx.MockTransport`` in tests
    :type transport: Optional[httpx.AsyncBaseTransport]
    :return: New async client; the caller owns and must close it
    :rtype: httpx.AsyncClient
    """
    read = timeout if timeout is not None else 30.0
    if transport is None:
        transport = httpx.AsyncHTTPTransport(retries=0)
    logger.debug(f"Creating HTTP client with read timeout {read}s")
    return httpx.AsyncClient(
        timeout=create_timeout(read=read),
        transport=transport,
        follow_redirects=False,
    )
