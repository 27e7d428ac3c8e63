"""Structured exception classes for the Megaport API client."""

import json
from dataclasses import dataclass
from typing import Any, Dict, List, Optional


class MegaportError(Exception):
    """Base exception for all Megaport client errors.

    This exception serves as the parent class for every error raised by
    the client, providing a consistent interface for error handling.

    :param message: Human-readable error message
    :param code: Optional error code for programmatic handling
    :param details: Optional dictionary containing additional error context
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        """Initialize the exception with message, code, and details."""
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary format.

        :return: Dictionary containing error code, message, and details
        """
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }

    def to_json(self) -> str:
        """Convert exception to JSON string.

        :return: JSON-encoded string representation of the exception
        """
        return json.dumps(self.to_dict())


class ConfigurationError(MegaportError):
    """Raised for configuration-related errors.

    :param message: Description of the configuration error
    :param setting: Optional name of the problematic setting
    """

    def __init__(self, message: str, setting: Optional[str] = None):
        """Initialize configuration error with message and optional setting."""
        details = {}
        if setting:
            details["setting"] = setting
        super().__init__(message=message, code="CONFIGURATION_ERROR", details=details)


class AuthenticationError(MegaportError):
    """Raised when the OAuth token exchange fails.

    :param message: Description of the authentication failure
    :param details: Optional additional context about the failure
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """Initialize authentication error with message and optional details."""
        super().__init__(message=message, code="AUTHENTICATION_ERROR", details=details)


class TransportError(MegaportError):
    """Raised when an HTTP round trip could not be completed.

    The server never produced a response: DNS, connect, TLS, timeout or
    protocol failures all land here. Compare with :class:`APIError`, which
    means the server answered with an unexpected status.

    :param message: Description of the transport failure
    :param method: HTTP method of the failed request
    :param url: Target URL of the failed request
    :param original_error: The underlying httpx exception
    """

    def __init__(
        self,
        message: str,
        method: Optional[str] = None,
        url: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        """Initialize transport error with request context."""
        details: Dict[str, Any] = {}
        if method:
            details["method"] = method
        if url:
            details["url"] = url
        if original_error:
            details["error_type"] = type(original_error).__name__
        super().__init__(message=message, code="TRANSPORT_ERROR", details=details)
        self.method = method
        self.url = url
        self.original_error = original_error


@dataclass(frozen=True)
class FieldError:
    """A single per-field validation failure reported by the API."""

    field: Optional[str]
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {"field": self.field, "message": self.message}


class APIError(MegaportError):
    """Raised when the API answers with an unexpected status code.

    Instances are built by the response classifier only. ``api_message`` is
    the message parsed from the error envelope, or ``None`` when the body
    could not be parsed and the error is a generic fallback.

    :param message: Description of the API error
    :param status_code: HTTP status code from the API response
    :param response_body: Raw response body text
    :param api_message: Message parsed from the error envelope
    :param errors: Per-field validation errors, if any
    :param trace_id: Server trace identifier, if any
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_body: Optional[str] = None,
        api_message: Optional[str] = None,
        errors: Optional[List[FieldError]] = None,
        trace_id: Optional[str] = None,
    ):
        """Initialize API error with message and optional response details."""
        details: Dict[str, Any] = {}
        if status_code:
            details["status_code"] = status_code
        if response_body:
            details["response_body"] = response_body
        if errors:
            details["errors"] = [e.to_dict() for e in errors]
        if trace_id:
            details["trace_id"] = trace_id
        super().__init__(message=message, code="API_ERROR", details=details)
        self.status_code = status_code
        self.response_body = response_body
        self.api_message = api_message
        self.errors = errors or []
        self.trace_id = trace_id


class UnauthorizedError(APIError):
    """Raised for 401/403 responses."""

    def __init__(self, message: str, **kwargs: Any):
        super().__init__(message, **kwargs)
        self.code = "UNAUTHORIZED"


class NotFoundError(APIError):
    """Raised when the API reports no matching product."""

    def __init__(self, message: str, **kwargs: Any):
        super().__init__(message, **kwargs)
        self.code = "NOT_FOUND"


class ResponseFormatError(MegaportError):
    """Raised when a successful response body has an unexpected shape.

    :param message: Description of the format problem
    :param response_body: Optional raw body that failed to parse
    """

    def __init__(self, message: str, response_body: Optional[str] = None):
        details = {}
        if response_body:
            details["response_body"] = response_body
        super().__init__(message=message, code="RESPONSE_FORMAT_ERROR", details=details)
        self.response_body = response_body


class ValidationError(MegaportError):
    """Raised when input is rejected locally, before any request is sent.

    :param message: Description of the validation error
    :param field: Optional name of the field that failed validation
    :param value: Optional value that caused the validation failure
    """

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Optional[Any] = None,
    ):
        """Initialize validation error with message and optional field/value."""
        details = {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = str(value)
        super().__init__(message=message, code="VALIDATION_ERROR", details=details)
        self.field = field
        self.value = value


class InvalidTermError(ValidationError):
    """Raised for a contract term outside the supported set."""

    def __init__(self, term: Any):
        super().__init__(
            "invalid term, valid values are 1, 12, 24, and 36",
            field="term",
            value=term,
        )
        self.code = "INVALID_TERM"


class WrongProductTypeError(ValidationError):
    """Raised when modifying a product type that cannot be modified."""

    def __init__(self, product_type: Any):
        super().__init__(
            "sorry you can only update Ports and MCR2 using this method",
            field="product_type",
            value=product_type,
        )
        self.code = "WRONG_PRODUCT_TYPE"


class ProductStateError(MegaportError):
    """Raised when a product is already in the requested side-channel state.

    :param message: Description of the conflict
    :param product_id: Product the conflict was detected on
    """

    def __init__(self, message: str, product_id: Optional[str] = None):
        details = {}
        if product_id:
            details["product_id"] = product_id
        super().__init__(message=message, code="PRODUCT_STATE_ERROR", details=details)
        self.product_id = product_id


class AlreadyLockedError(ProductStateError):
    """Raised when locking a product that is already locked."""

    def __init__(self, product_family: str, product_id: Optional[str] = None):
        super().__init__(
            f"that {product_family} is already locked, cannot lock", product_id
        )
        self.code = "ALREADY_LOCKED"


class NotLockedError(ProductStateError):
    """Raised when unlocking a product that is not locked."""

    def __init__(self, product_family: str, product_id: Optional[str] = None):
        super().__init__(f"that {product_family} not locked, cannot unlock", product_id)
        self.code = "NOT_LOCKED"


class ProvisioningTimeoutError(MegaportError):
    """Raised when a product does not reach the expected state in time.

    :param product_family: Human name of the product family (port, MCR, ...)
    :param product_id: Product that was being watched
    :param attempts: Number of status reads performed
    :param last_status: Last provisioning status observed
    """

    def __init__(
        self,
        product_family: str,
        product_id: Optional[str] = None,
        attempts: int = 0,
        last_status: Optional[str] = None,
    ):
        details: Dict[str, Any] = {"attempts": attempts}
        if product_id:
            details["product_id"] = product_id
        if last_status:
            details["last_status"] = last_status
        super().__init__(
            message=f"the {product_family} took too long to provision",
            code="PROVISIONING_TIMEOUT",
            details=details,
        )
        self.product_family = product_family
        self.product_id = product_id
        self.attempts = attempts
        self.last_status = last_status


class ProvisioningCancelledError(MegaportError):
    """Raised when a provisioning wait is cancelled by the caller."""

    def __init__(self, product_family: str, product_id: Optional[str] = None):
        details = {}
        if product_id:
            details["product_id"] = product_id
        super().__init__(
            message=f"waiting for the {product_family} to provision was cancelled",
            code="PROVISIONING_CANCELLED",
            details=details,
        )
        self.product_family = product_family
        self.product_id = product_id
