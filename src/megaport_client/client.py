"""Megaport API client.

:class:`MegaportClient` wires together the session credential, the request
executor, the response classifier and the resource services. Every call is
a single awaited round trip; nothing runs in the background.

Examples:
    >>> async with MegaportClient() as client:
    ...     await client.login()
    ...     uid = await client.port_service.buy_single_port(
    ...         name="edge-1", term=12, port_speed=10000, location_id=19
    ...     )
    ...     await client.port_service.wait_for_port_provisioning(uid)
"""

import logging
from typing import Any, Awaitable, Callable, Optional

import httpx

from .auth.credential import CredentialHolder
from .auth.oauth import OAuthLogin
from .config.settings import Settings
from .services.port import PortService
from .services.product import ProductService
from .services.watcher import ProvisioningWatcher
from .utils.http.classifier import classify_response
from .utils.http.client_factory import create_http_client
from .utils.http.executor import RequestExecutor
from .utils.security import setup_logging

logger = logging.getLogger(__name__)


class MegaportClient:
    """Entry point for the Megaport API.

    :param settings: Client settings; loaded from the environment when omitted
    :type settings: Optional[Settings]
    :param http_client: Async HTTP client to use; one is created (and owned)
        when omitted
    :type http_client: Optional[httpx.AsyncClient]
    :param credential: Credential holder to share; a new one is created when
        omitted
    :type credential: Optional[CredentialHolder]
    :param token: Initial session token, for callers that log in elsewhere
    :type token: Optional[str]
    :param configure_logging: Install the sanitizing log handler at the
        configured ``log_level``
    :type configure_logging: bool
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        credential: Optional[CredentialHolder] = None,
        token: Optional[str] = None,
        configure_logging: bool = False,
    ):
        self.settings = settings or Settings()
        if configure_logging:
            setup_logging(self.settings.log_level)
        self.base_url = httpx.URL(self.settings.base_url)
        self.credential = credential or CredentialHolder()
        if token:
            self.credential.set(token)

        self._owns_http_client = http_client is None
        self._http = http_client or create_http_client(timeout=self.settings.request_timeout)

        self.executor = RequestExecutor(
            self._http, self.credential, user_agent=self.settings.user_agent
        )
        self.authentication_service = OAuthLogin(
            self._http, self.settings.token_url, self.credential
        )
        self.product_service = ProductService(self)
        self.port_service = PortService(self)

    def resolve(self, path: str) -> str:
        """Resolve an API path against the base URL.

        Paths are appended to the base URL, so a base URL with a path
        prefix keeps it.

        :param path: Path such as ``/v2/product/abc``
        :type path: str
        :return: Absolute URL
        :rtype: str
        """
        return str(self.base_url.join(path.lstrip("/")))

    async def request(
        self,
        method: str,
        path: str,
        body: Optional[bytes] = None,
        expected_status: int = 200,
    ) -> httpx.Response:
        """Execute a request and classify its response.

        :param method: HTTP method
        :type method: str
        :param path: API path, resolved against the base URL
        :type path: str
        :param body: Pre-serialized JSON body
        :type body: Optional[bytes]
        :param expected_status: The only status code treated as success
        :type expected_status: int
        :return: The successful response, body unread by the classifier
        :rtype: httpx.Response
        :raises TransportError: If the server could not be reached
        :raises APIError: If the status did not match ``expected_status``
        """
        response = await self.executor.execute(method, self.resolve(path), body)
        error = classify_response(
            response,
            expected_status=expected_status,
            credential_present=self.credential.is_set,
        )
        if error is not None:
            logger.debug(f"{method} {path} failed: {error.message}")
            raise error
        return response

    async def login(
        self, access_key: Optional[str] = None, secret_key: Optional[str] = None
    ) -> str:
        """Obtain a session token and attach it to subsequent requests.

        Falls back to the keys in settings when none are given.

        :return: The session token
        :rtype: str
        :raises AuthenticationError: If the exchange fails
        """
        return await self.authentication_service.login(
            access_key or self.settings.access_key,
            secret_key or self.settings.secret_key,
        )

    def create_watcher(
        self, read: Callable[[str], Awaitable[Any]], product_family: str
    ) -> ProvisioningWatcher:
        """Create a provisioning watcher with the configured cadence.

        :param read: Coroutine function that reads a product by id
        :type read: Callable[[str], Awaitable[Any]]
        :param product_family: Family name for messages
        :type product_family: str
        :return: New watcher
        :rtype: ProvisioningWatcher
        """
        return ProvisioningWatcher(
            read,
            product_family,
            interval=self.settings.provisioning_poll_interval,
            max_attempts=self.settings.provisioning_max_attempts,
            deadline=self.settings.provisioning_deadline,
        )

    async def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_http_client:
            await self._http.aclose()

    async def __aenter__(self) -> "MegaportClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
