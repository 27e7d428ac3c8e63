"""Authentication for the Megaport API client.

:var __all__: List of public exports from this module
:type __all__: List[str]
"""

from .credential import CredentialHolder
from .oauth import OAuthLogin

__all__ = ["CredentialHolder", "OAuthLogin"]
