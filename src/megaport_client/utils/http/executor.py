"""Single authenticated HTTP request execution.

:class:`RequestExecutor` builds one request, attaches the session
credential and sends it. It performs exactly one round trip per call and
does not retry. Transport failures surface as
:class:`~megaport_client.exceptions.TransportError`; any HTTP status,
error or not, is returned for the classifier to judge.
"""

import logging
from typing import Dict, Optional

import httpx

from ...auth.credential import CredentialHolder
from ...exceptions import TransportError
from ..security import TRACE, sanitize_headers

logger = logging.getLogger(__name__)


class RequestExecutor:
    """Sends authenticated requests through a shared httpx client.

    :param http_client: Async HTTP client used for the round trip
    :type http_client: httpx.AsyncClient
    :param credential: Holder of the current session credential
    :type credential: CredentialHolder
    :param user_agent: User-Agent header value
    :type user_agent: str
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        credential: CredentialHolder,
        user_agent: str = "megaport-client",
    ):
        self._http = http_client
        self.credential = credential
        self.user_agent = user_agent

    def build_headers(self, has_body: bool) -> Dict[str, str]:
        """Build the headers sent with every request.

        :param has_body: Whether the request carries a JSON body
        :type has_body: bool
        :return: Request headers
        :rtype: Dict[str, str]
        """
        headers = {
            "Accept": "application/json",
            "User-Agent": self.user_agent,
            "Authorization": self.credential.authorization_header(),
        }
        if has_body:
            headers["Content-Type"] = "application/json"
        return headers

    async def execute(
        self, method: str, url: str, body: Optional[bytes] = None
    ) -> httpx.Response:
        """Send one request and return the raw response.

        :param method: HTTP method
        :type method: str
        :param url: Absolute, already-resolved target URL
        :type url: str
        :param body: Pre-serialized JSON body, if any
        :type body: Optional[bytes]
        :return: The response, whatever its status
        :rtype: httpx.Response
        :raises ValueError: If ``url`` is not absolute
        :raises TransportError: If no response could be obtained
        """
        if not httpx.URL(url).is_absolute_url:
            raise ValueError(f"request target must be an absolute URL, got {url!r}")

        method = method.upper()
        headers = self.build_headers(body is not None)
        request = self._http.build_request(method, url, content=body, headers=headers)

        logger.debug(f"{method} {url}")
        if logger.isEnabledFor(TRACE):
            logger.log(TRACE, f"Request headers: {sanitize_headers(dict(request.headers))}")

        try:
            response = await self._http.send(request)
        except httpx.TransportError as e:
            logger.debug(f"{method} {url} failed before a response: {type(e).__name__}")
            raise TransportError(
                f"could not reach the Megaport API: {str(e) or type(e).__name__}",
                method=method,
                url=url,
                original_error=e,
            ) from e

        logger.log(TRACE, f"{method} {url} -> {response.status_code}")
        return response
