"""Response classification.

Decides whether a completed response is a success or a structured API
error. Error bodies are not uniform across the API, so the known error
envelope is tried first and anything else degrades to a generic error that
carries the raw body. Classification itself never raises.
"""

import logging
from typing import Optional, Type

import httpx
from pydantic import ValidationError

from ...exceptions import APIError, NotFoundError, UnauthorizedError
from ...models.base_models import ErrorEnvelope

logger = logging.getLogger(__name__)

_STATUS_ERRORS = {
    401: UnauthorizedError,
    403: UnauthorizedError,
    404: NotFoundError,
}

MISSING_CREDENTIAL_HINT = (
    "no session credential is set; log in before calling the API"
)


def _error_class(status_code: int) -> Type[APIError]:
    return _STATUS_ERRORS.get(status_code, APIError)


def _body_text(response: httpx.Response) -> str:
    try:
        return response.text
    except (httpx.ResponseNotRead, UnicodeDecodeError) as e:
        return f"<unreadable body: {type(e).__name__}>"


def classify_response(
    response: httpx.Response,
    expected_status: int = 200,
    credential_present: bool = True,
) -> Optional[APIError]:
    """Classify a response against the expected status code.

    :param response: Completed response
    :type response: httpx.Response
    :param expected_status: The only status treated as success
    :type expected_status: int
    :param credential_present: Whether a session credential was attached
    :type credential_present: bool
    :return: ``None`` on success, otherwise the error to raise
    :rtype: Optional[APIError]
    """
    status = response.status_code
    if status == expected_status:
        return None

    body = _body_text(response)
    error_cls = _error_class(status)

    try:
        envelope = ErrorEnvelope.model_validate_json(body)
    except ValidationError as e:
        logger.debug(f"Could not parse error body for status {status}: {e.error_count()} error(s)")
        message = (
            f"status code '{status}' received from api and there has been an error "
            f"parsing an error: {e.errors()[0]['msg'] if e.errors() else e}. "
            f"The error body was:\nBEGIN\n{body}\nEND\n"
        )
        if error_cls is UnauthorizedError and not credential_present:
            message = f"{MISSING_CREDENTIAL_HINT}. {message}"
        return error_cls(message, status_code=status, response_body=body)

    message = envelope.message
    detail = envelope.detail()
    if detail:
        message = f"{message}: {detail}"
    if error_cls is UnauthorizedError and not credential_present:
        message = f"{MISSING_CREDENTIAL_HINT}. {message}"

    return error_cls(
        message,
        status_code=status,
        response_body=body,
        api_message=envelope.message,
        errors=envelope.field_errors(),
        trace_id=envelope.trace_id,
    )
