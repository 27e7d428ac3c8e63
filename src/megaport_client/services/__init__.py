"""Resource operation services for the Megaport API."""

from .port import PortService
from .product import MODIFIABLE_PRODUCT_TYPES, ProductService, encode_json
from .watcher import ProvisioningWatcher, WatchState

__all__ = [
    "PortService",
    "ProductService",
    "ProvisioningWatcher",
    "WatchState",
    "MODIFIABLE_PRODUCT_TYPES",
    "encode_json",
]
