"""Centralized environment configuration for the Megaport API.

Single source of truth for the API and OAuth endpoints of every Megaport
environment. All components should resolve endpoints through this module
instead of hard-coding hosts.
"""

from typing import Dict, Literal, Optional

# Type alias for environment names
EnvironmentName = Literal["production", "staging", "development"]


class EnvironmentConfig:
    """Endpoint table for Megaport environments."""

    API_ENDPOINTS: Dict[EnvironmentName, str] = {
        "production": "https://api.megaport.com/",
        "staging": "https://api-staging.megaport.com/",
        "development": "https://api-mpone-dev.megaport.com/",
    }

    OAUTH_ENDPOINTS: Dict[EnvironmentName, str] = {
        "production": "https://auth-m2m.megaport.com/oauth2/token",
        "staging": "https://oauth-m2m-staging.auth.ap-southeast-2.amazoncognito.com/oauth2/token",
        "development": "https://oauth-m2m-mpone-dev.auth.ap-southeast-2.amazoncognito.com/oauth2/token",
    }

    DEFAULT_ENVIRONMENT: EnvironmentName = "production"

    @classmethod
    def get_api_endpoint(cls, environment: Optional[str] = None) -> str:
        """Get the API base URL for an environment.

        :param environment: Environment name or None for the default
        :type environment: Optional[str]
        :return: API base URL with a trailing slash
        :rtype: str

        Example:
            >>> EnvironmentConfig.get_api_endpoint("staging")
            'https://api-staging.megaport.com/'
        """
        if environment is None:
            environment = cls.DEFAULT_ENVIRONMENT
        return cls.API_ENDPOINTS.get(
            environment.lower(), cls.API_ENDPOINTS[cls.DEFAULT_ENVIRONMENT]
        )

    @classmethod
    def get_oauth_endpoint(cls, environment: Optional[str] = None) -> str:
        """Get the OAuth token endpoint for an environment.

        :param environment: Environment name or None for the default
        :type environment: Optional[str]
        :return: OAuth token endpoint URL
        :rtype: str
        """
        if environment is None:
            environment = cls.DEFAULT_ENVIRONMENT
        return cls.OAUTH_ENDPOINTS.get(
            environment.lower(), cls.OAUTH_ENDPOINTS[cls.DEFAULT_ENVIRONMENT]
        )

    @classmethod
    def is_valid_environment(cls, environment: str) -> bool:
        return environment.lower() in cls.API_ENDPOINTS
