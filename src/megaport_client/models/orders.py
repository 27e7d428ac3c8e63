"""Write-side payloads: orders, product updates and order confirmations."""

import time
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..exceptions import InvalidTermError
from .base_models import BaseAPIResponse
from .products import ProductType

VALID_TERMS = (1, 12, 24, 36)
"""Contract terms, in months, that the API accepts."""


def validate_term(term: int) -> int:
    """Reject contract terms the API does not offer.

    :param term: Contract term in months
    :type term: int
    :return: The term, unchanged
    :rtype: int
    :raises InvalidTermError: If ``term`` is not one of :data:`VALID_TERMS`
    """
    if isinstance(term, bool) or term not in VALID_TERMS:
        raise InvalidTermError(term)
    return term


def current_timestamp_ms() -> int:
    """Current time as epoch milliseconds, the API's ``createDate`` format."""
    return int(time.time() * 1000)


class OrderModel(BaseModel):
    """Base for request payloads serialised with the API's camelCase keys."""

    model_config = ConfigDict(populate_by_name=True)

    def to_payload(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class PortOrder(OrderModel):
    """Order for a single or LAG port.

    ``lag_port_count`` is only sent for LAG orders.
    """

    product_name: str = Field(..., alias="productName")
    term: int
    product_type: ProductType = Field(ProductType.MEGAPORT, alias="productType")
    port_speed: int = Field(..., alias="portSpeed")
    location_id: int = Field(..., alias="locationId")
    create_date: int = Field(default_factory=current_timestamp_ms, alias="createDate")
    virtual: bool = False
    market: Optional[str] = None
    lag_port_count: Optional[int] = Field(None, alias="lagPortCount")
    marketplace_visibility: bool = Field(False, alias="marketplaceVisibility")


class ProductUpdate(OrderModel):
    """Mutable product attributes. Unset fields are left out of the payload."""

    name: Optional[str] = None
    cost_centre: Optional[str] = Field(None, alias="costCentre")
    marketplace_visibility: Optional[bool] = Field(None, alias="marketplaceVisibility")


class OrderConfirmation(BaseAPIResponse):
    """One element of an order response.

    :param technical_service_uid: Identifier of the product being provisioned
    :type technical_service_uid: str
    """

    technical_service_uid: str = Field(..., alias="technicalServiceUid", min_length=1)


class OrderResponse(BaseAPIResponse):
    """Response envelope for ``/v3/networkdesign/buy``."""

    message: Optional[str] = None
    terms: Optional[str] = None
    data: List[OrderConfirmation] = Field(default_factory=list)
