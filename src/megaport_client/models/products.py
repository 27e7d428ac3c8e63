"""Product models and the variant-aware product decoder.

Every provisionable resource (port, MCR, MVE, VXC) is a *product*. Products
share identity, provisioning-status and lock fields and are told apart by
their ``productType`` tag, so they are modelled as a tagged variant: one
model per tag, selected by :func:`decode_product`. Elements that carry an
unknown tag, or that fail to validate against the model for their tag,
decode to :class:`UnrecognizedProduct` instead of raising.
"""

from enum import Enum
from typing import Any, Dict, Optional, Type, Union

from pydantic import ConfigDict, Field, ValidationError, field_validator

from .base_models import BaseAPIResponse


class ProductType(str, Enum):
    """Product type tags used by the API."""

    MEGAPORT = "MEGAPORT"
    MCR = "MCR2"
    MVE = "MVE"
    VXC = "VXC"

    @property
    def family(self) -> str:
        """Human name of the product family, used in messages."""
        return _FAMILY_NAMES[self]


_FAMILY_NAMES = {
    ProductType.MEGAPORT: "port",
    ProductType.MCR: "MCR",
    ProductType.MVE: "MVE",
    ProductType.VXC: "VXC",
}


class ProvisioningStatus(str, Enum):
    """Server-side lifecycle states of a product."""

    NEW = "NEW"
    DESIGN = "DESIGN"
    DEPLOYABLE = "DEPLOYABLE"
    CONFIGURED = "CONFIGURED"
    LIVE = "LIVE"
    CANCELLED = "CANCELLED"
    CANCELLED_PARENT = "CANCELLED_PARENT"
    DECOMMISSIONED = "DECOMMISSIONED"


class ProductBase(BaseAPIResponse):
    """Fields shared by every product variant.

    ``provisioning_status`` is kept as a plain string so states the API adds
    later still decode; compare it against :class:`ProvisioningStatus`
    members, which are ``str`` subclasses. String fields are kept verbatim,
    so a padded status such as ``" LIVE "`` does not equal ``LIVE``.
    ``locked`` is the customer lock and is independent of the provisioning
    status.
    """

    model_config = ConfigDict(str_strip_whitespace=False)

    product_uid: str = Field(..., alias="productUid", min_length=1)
    product_id: Optional[int] = Field(None, alias="productId")
    product_name: str = Field("", alias="productName")
    product_type: ProductType = Field(..., alias="productType")
    provisioning_status: str = Field(..., alias="provisioningStatus")
    locked: bool = False
    admin_locked: bool = Field(False, alias="adminLocked")
    cost_centre: Optional[str] = Field(None, alias="costCentre")
    marketplace_visibility: Optional[bool] = Field(None, alias="marketplaceVisibility")
    create_date: Optional[int] = Field(None, alias="createDate")
    contract_term_months: Optional[int] = Field(None, alias="contractTermMonths")
    location_id: Optional[int] = Field(None, alias="locationId")

    @field_validator("product_type", mode="before")
    @classmethod
    def normalize_product_type(cls, v):
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @property
    def is_live(self) -> bool:
        return self.provisioning_status == ProvisioningStatus.LIVE


class Port(ProductBase):
    """A physical or LAG port (``MEGAPORT``)."""

    port_speed: int = Field(..., alias="portSpeed")
    market: Optional[str] = None
    lag_primary: bool = Field(False, alias="lagPrimary")
    lag_id: Optional[int] = Field(None, alias="lagId")
    virtual: bool = False

    @field_validator("product_type")
    @classmethod
    def check_product_type(cls, v: ProductType) -> ProductType:
        if v is not ProductType.MEGAPORT:
            raise ValueError(f"expected product type MEGAPORT, got {v.value}")
        return v


class MCR(ProductBase):
    """A Megaport Cloud Router (``MCR2``)."""

    port_speed: int = Field(..., alias="portSpeed")

    @field_validator("product_type")
    @classmethod
    def check_product_type(cls, v: ProductType) -> ProductType:
        if v is not ProductType.MCR:
            raise ValueError(f"expected product type MCR2, got {v.value}")
        return v


class MVE(ProductBase):
    """A Megaport Virtual Edge (``MVE``)."""

    vendor: Optional[str] = None
    size: Optional[str] = Field(None, alias="mveSize")

    @field_validator("product_type")
    @classmethod
    def check_product_type(cls, v: ProductType) -> ProductType:
        if v is not ProductType.MVE:
            raise ValueError(f"expected product type MVE, got {v.value}")
        return v


class VXC(ProductBase):
    """A virtual cross connect (``VXC``)."""

    rate_limit: int = Field(..., alias="rateLimit")
    a_end: Optional[Dict[str, Any]] = Field(None, alias="aEnd")
    b_end: Optional[Dict[str, Any]] = Field(None, alias="bEnd")

    @field_validator("product_type")
    @classmethod
    def check_product_type(cls, v: ProductType) -> ProductType:
        if v is not ProductType.VXC:
            raise ValueError(f"expected product type VXC, got {v.value}")
        return v


class UnrecognizedProduct(BaseAPIResponse):
    """An element that did not match any product variant.

    :param raw: The element exactly as received
    :type raw: Any
    :param product_type: The raw ``productType`` tag, if present
    :type product_type: Optional[str]
    :param reason: Why decoding failed
    :type reason: str
    """

    raw: Any = None
    product_type: Optional[str] = None
    reason: str


Product = Union[Port, MCR, MVE, VXC]
"""Any recognized product variant."""

DecodedProduct = Union[Port, MCR, MVE, VXC, UnrecognizedProduct]

PRODUCT_VARIANTS: Dict[ProductType, Type[ProductBase]] = {
    ProductType.MEGAPORT: Port,
    ProductType.MCR: MCR,
    ProductType.MVE: MVE,
    ProductType.VXC: VXC,
}


def decode_product(raw: Any) -> DecodedProduct:
    """Decode one raw product element into its variant.

    Dispatches on the ``productType`` tag and validates against that
    variant's model. Never raises: anything that does not decode cleanly
    comes back as :class:`UnrecognizedProduct` carrying the reason.

    :param raw: A single element from a product envelope
    :type raw: Any
    :return: The typed product, or an unrecognized placeholder
    :rtype: DecodedProduct
    """
    if not isinstance(raw, dict):
        return UnrecognizedProduct(
            raw=raw, reason=f"expected an object, got {type(raw).__name__}"
        )

    tag = raw.get("productType")
    tag_str = str(tag).strip().upper() if tag is not None else None
    try:
        product_type = ProductType(tag_str)
    except ValueError:
        return UnrecognizedProduct(
            raw=raw, product_type=tag_str, reason=f"unknown product type {tag!r}"
        )

    model = PRODUCT_VARIANTS[product_type]
    try:
        return model.model_validate(raw)
    except ValidationError as e:
        return UnrecognizedProduct(
            raw=raw,
            product_type=tag_str,
            reason=f"{e.error_count()} validation error(s) for {model.__name__}: {e}",
        )
