"""Session credential holder.

The client carries exactly one opaque session credential. It is set once
after login (or directly by the caller), attached to every request, and
never refreshed automatically. Rotation is the caller's job and must happen
while no operations are in flight.
"""

import logging
from typing import Optional

logger = logging.getLogger(__name__)


class CredentialHolder:
    """Holds the current session credential.

    :param token: Optional initial credential
    :type token: Optional[str]
    """

    def __init__(self, token: Optional[str] = None):
        self._token = token or ""

    @property
    def token(self) -> str:
        """The current credential, or an empty string when none is set."""
        return self._token

    @property
    def is_set(self) -> bool:
        return bool(self._token)

    def set(self, token: Optional[str]) -> None:
        """Replace the session credential.

        :param token: New credential; ``None`` or empty clears it
        :type token: Optional[str]
        """
        self._token = token or ""
        if self._token:
            logger.debug("Session credential set")
        else:
            logger.debug("Session credential cleared")

    def clear(self) -> None:
        self.set(None)

    def authorization_header(self) -> str:
        """Build the Authorization header value.

        An empty credential is passed through unchanged; the server decides
        how to reject it.

        :return: Authorization header value
        :rtype: str
        """
        return f"Bearer {self._token}" if self._token else "Bearer"

    def __repr__(self) -> str:
        state = "set" if self._token else "empty"
        return f"CredentialHolder({state})"
