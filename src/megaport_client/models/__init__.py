"""Megaport client models package.

This package contains the Pydantic models used by the client, split into
response envelopes, product variants and write-side orders.
"""

from .base_models import BaseAPIResponse, ErrorEnvelope, ListEnvelope, ObjectEnvelope
from .orders import (
    VALID_TERMS,
    OrderConfirmation,
    OrderResponse,
    PortOrder,
    ProductUpdate,
    current_timestamp_ms,
    validate_term,
)
from .products import (
    MCR,
    MVE,
    PRODUCT_VARIANTS,
    VXC,
    DecodedProduct,
    Port,
    Product,
    ProductBase,
    ProductType,
    ProvisioningStatus,
    UnrecognizedProduct,
    decode_product,
)

__all__ = [
    # Envelopes
    "BaseAPIResponse",
    "ErrorEnvelope",
    "ListEnvelope",
    "ObjectEnvelope",
    # Products
    "ProductType",
    "ProvisioningStatus",
    "ProductBase",
    "Port",
    "MCR",
    "MVE",
    "VXC",
    "UnrecognizedProduct",
    "Product",
    "DecodedProduct",
    "PRODUCT_VARIANTS",
    "decode_product",
    # Orders
    "VALID_TERMS",
    "validate_term",
    "current_timestamp_ms",
    "PortOrder",
    "ProductUpdate",
    "OrderConfirmation",
    "OrderResponse",
]
