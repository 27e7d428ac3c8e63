"""Megaport API client package.

This package provides an async client for the Megaport provisioning API.
It includes session credential handling, request execution and response
classification, product and port operations, and a provisioning watcher
that waits for asynchronously provisioned products to go live.

:var __version__: Current package version
:type __version__: str
"""

from .client import MegaportClient
from .config.settings import Settings
from .exceptions import (
    AlreadyLockedError,
    APIError,
    AuthenticationError,
    ConfigurationError,
    InvalidTermError,
    MegaportError,
    NotFoundError,
    NotLockedError,
    ProvisioningCancelledError,
    ProvisioningTimeoutError,
    ResponseFormatError,
    TransportError,
    UnauthorizedError,
    ValidationError,
    WrongProductTypeError,
)
from .models import Port, ProductType, ProvisioningStatus

__version__ = "0.1.0"

__all__ = [
    "MegaportClient",
    "Settings",
    "Port",
    "ProductType",
    "ProvisioningStatus",
    "MegaportError",
    "APIError",
    "UnauthorizedError",
    "NotFoundError",
    "TransportError",
    "AuthenticationError",
    "ConfigurationError",
    "ResponseFormatError",
    "ValidationError",
    "InvalidTermError",
    "WrongProductTypeError",
    "AlreadyLockedError",
    "NotLockedError",
    "ProvisioningTimeoutError",
    "ProvisioningCancelledError",
]
