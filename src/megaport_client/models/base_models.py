"""Shared Pydantic models for Megaport API envelopes.

The API wraps payloads in one of two envelopes: a list envelope
``{message, terms, data: [...]}`` whose elements are heterogeneous, and a
single-object envelope ``{data: {...}}`` used by direct reads. Error bodies
use a third shape, ``{message, data, trace_id}``, where ``data`` varies
between a string, a list of per-field errors and a mapping.
"""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..exceptions import FieldError


class BaseAPIResponse(BaseModel):
    """Base model for all API responses with common fields.

    Extra fields are kept and fields can be populated either by alias
    (the API's camelCase) or by name.
    """

    model_config = ConfigDict(
        extra="allow",
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class ListEnvelope(BaseAPIResponse):
    """List envelope; ``data`` elements are decoded one by one later.

    A ``null`` data field is read as an empty list.

    :param message: Status message from the API
    :type message: Optional[str]
    :param terms: Terms-of-service notice attached by the API
    :type terms: Optional[str]
    :param data: Raw, not-yet-decoded elements
    :type data: List[Any]
    """

    message: Optional[str] = None
    terms: Optional[str] = None
    data: List[Any] = Field(default_factory=list)

    @field_validator("data", mode="before")
    @classmethod
    def null_data_is_empty(cls, v):
        return [] if v is None else v


class ObjectEnvelope(BaseAPIResponse):
    """Single-object envelope returned by direct reads."""

    message: Optional[str] = None
    terms: Optional[str] = None
    data: Optional[Dict[str, Any]] = None


class ErrorEnvelope(BaseAPIResponse):
    """Structured error body.

    :param message: Machine message describing the failure
    :type message: str
    :param data: Extra detail: a string, per-field error list, or mapping
    :type data: Union[str, List[Any], Dict[str, Any], None]
    :param trace_id: Server-side trace identifier
    :type trace_id: Optional[str]
    """

    message: str = Field(..., min_length=1)
    data: Union[str, List[Any], Dict[str, Any], None] = None
    trace_id: Optional[str] = None

    def field_errors(self) -> List[FieldError]:
        """Flatten ``data`` into per-field errors.

        :return: Field errors in the order the API listed them
        :rtype: List[FieldError]
        """
        if isinstance(self.data, list):
            errors = []
            for item in self.data:
                if isinstance(item, dict):
                    message = item.get("message") or item.get("error") or str(item)
                    errors.append(FieldError(field=item.get("field"), message=str(message)))
                else:
                    errors.append(FieldError(field=None, message=str(item)))
            return errors
        if isinstance(self.data, dict):
            return [FieldError(field=str(k), message=str(v)) for k, v in self.data.items()]
        return []

    def detail(self) -> Optional[str]:
        """Return ``data`` when it is plain text."""
        if isinstance(self.data, str) and self.data.strip():
            return self.data.strip()
        return None
