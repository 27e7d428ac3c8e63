"""OAuth client-credentials login for the Megaport API.

Exchanges an access key / secret key pair for a session token using the
OAuth2 client-credentials grant, then stores the token in the client's
:class:`~megaport_client.auth.credential.CredentialHolder`.
"""

import logging
from typing import Optional

import httpx

from ..exceptions import AuthenticationError, TransportError
from .credential import CredentialHolder

logger = logging.getLogger(__name__)


class OAuthLogin:
    """Performs the client-credentials token exchange.

    :param http_client: Shared async HTTP client
    :type http_client: httpx.AsyncClient
    :param token_url: OAuth token endpoint for the environment
    :type token_url: str
    :param credential: Holder that receives the session token
    :type credential: CredentialHolder
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        token_url: str,
        credential: CredentialHolder,
    ):
        self._http = http_client
        self.token_url = token_url
        self.credential = credential

    async def login(self, access_key: Optional[str], secret_key: Optional[str]) -> str:
        """Exchange API keys for a session token.

        :param access_key: API access key
        :type access_key: Optional[str]
        :param secret_key: API secret key
        :type secret_key: Optional[str]
        :return: The session token, which is also stored in the holder
        :rtype: str
        :raises AuthenticationError: If keys are missing or the exchange is rejected
        :raises TransportError: If the token endpoint cannot be reached
        """
        if not access_key or not secret_key:
            raise AuthenticationError(
                "An access key and secret key are required to log in. "
                "Set MEGAPORT_ACCESS_KEY and MEGAPORT_SECRET_KEY."
            )

        logger.debug(f"Requesting session token from {self.token_url}")

        try:
            response = await self._http.post(
                self.token_url,
                data={"grant_type": "client_credentials"},
                auth=(access_key, secret_key),
                headers={"Content-Type": "application/x-www-form-urlencoded"},
            )
        except httpx.TransportError as e:
            raise TransportError(
                f"could not reach the token endpoint: {e}",
                method="POST",
                url=self.token_url,
                original_error=e,
            ) from e

        if response.status_code != 200:
            logger.error(f"Token exchange failed with status {response.status_code}")
            raise AuthenticationError(
                f"token exchange failed with status {response.status_code}",
                details={
                    "status_code": response.status_code,
                    "response_body": response.text,
                },
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise AuthenticationError(
                "token endpoint returned a non-JSON body",
                details={"response_body": response.text},
            ) from e

        token = payload.get("access_token") if isinstance(payload, dict) else None
        if not token:
            raise AuthenticationError("token endpoint response contained no access_token")

        self.credential.set(token)
        logger.info("Logged in to the Megaport API")
        return token
