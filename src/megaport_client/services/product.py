"""Generic product operations.

Verbs shared by every product family: ordering, reading, listing,
modifying, cancelling, restoring, locking and waiting for provisioning.
Family-specific services such as :class:`~megaport_client.services.port.PortService`
build on these.
"""

import json
import logging
from typing import TYPE_CHECKING, Any, List, Optional, Sequence, Union

from pydantic import BaseModel, ValidationError

from ..exceptions import (
    AlreadyLockedError,
    NotFoundError,
    NotLockedError,
    ResponseFormatError,
    WrongProductTypeError,
)
from ..models.base_models import ListEnvelope, ObjectEnvelope
from ..models.orders import OrderConfirmation, OrderResponse, ProductUpdate
from ..models.products import (
    DecodedProduct,
    ProductType,
    ProvisioningStatus,
    UnrecognizedProduct,
    decode_product,
)

if TYPE_CHECKING:
    from ..client import MegaportClient

logger = logging.getLogger(__name__)

MODIFIABLE_PRODUCT_TYPES = (ProductType.MEGAPORT, ProductType.MCR)
"""Product types accepted by :meth:`ProductService.modify_product`."""

CANCEL_ACTION = "CANCEL"
CANCEL_NOW_ACTION = "CANCEL_NOW"
RESTORE_ACTION = "UN_CANCEL"


def encode_json(payload: Any) -> bytes:
    """Serialize a payload (models, dicts or lists of them) to JSON bytes."""

    def _plain(value: Any) -> Any:
        if isinstance(value, BaseModel):
            to_payload = getattr(value, "to_payload", None)
            if to_payload is not None:
                return to_payload()
            return value.model_dump(mode="json", by_alias=True, exclude_none=True)
        if isinstance(value, (list, tuple)):
            return [_plain(v) for v in value]
        return value

    return json.dumps(_plain(payload)).encode("utf-8")


def coerce_product_type(product_type: Union[ProductType, str]) -> ProductType:
    """Resolve a product type tag given as an enum member or a string.

    :raises ValueError: If the tag is not a known product type
    """
    if isinstance(product_type, ProductType):
        return product_type
    return ProductType(str(product_type).strip().upper())


class ProductService:
    """Handles the generic product endpoints of the Megaport API.

    :param client: Owning client, used for request execution and settings
    :type client: MegaportClient
    """

    def __init__(self, client: "MegaportClient"):
        self.client = client

    async def execute_order(
        self, orders: Sequence[Union[BaseModel, dict]]
    ) -> List[OrderConfirmation]:
        """Submit orders to ``/v3/networkdesign/buy``.

        The API takes an array even for a single product.

        :param orders: Order payloads
        :type orders: Sequence[Union[BaseModel, dict]]
        :return: One confirmation per ordered product
        :rtype: List[OrderConfirmation]
        :raises ResponseFormatError: If the response has no confirmations
        """
        body = encode_json(list(orders))
        response = await self.client.request("POST", "/v3/networkdesign/buy", body=body)
        logger.debug(f"Executing product order, status_code={response.status_code}")

        try:
            parsed = OrderResponse.model_validate_json(response.content)
        except ValidationError as e:
            raise ResponseFormatError(
                f"could not parse order response: {e}", response_body=response.text
            ) from e
        if not parsed.data:
            raise ResponseFormatError(
                "order response contained no confirmations", response_body=response.text
            )
        return parsed.data

    async def get_product(self, product_id: str) -> DecodedProduct:
        """Read a single product.

        :param product_id: Product UID
        :type product_id: str
        :return: Decoded product variant
        :rtype: DecodedProduct
        :raises NotFoundError: If the API returns no product
        """
        response = await self.client.request("GET", f"/v2/product/{product_id}")
        try:
            envelope = ObjectEnvelope.model_validate_json(response.content)
        except ValidationError as e:
            raise ResponseFormatError(
                f"could not parse product response: {e}", response_body=response.text
            ) from e
        if not envelope.data:
            raise NotFoundError(
                f"no product found with id {product_id}",
                status_code=response.status_code,
                response_body=response.text,
            )
        return decode_product(envelope.data)

    async def list_products(self) -> List[DecodedProduct]:
        """List every product on the account.

        Elements are decoded independently. An element that matches no
        variant comes back as :class:`UnrecognizedProduct` rather than
        failing the call.

        :return: Decoded products in API order
        :rtype: List[DecodedProduct]
        """
        response = await self.client.request("GET", "/v2/products")
        try:
            envelope = ListEnvelope.model_validate_json(response.content)
        except ValidationError as e:
            raise ResponseFormatError(
                f"could not parse product list: {e}", response_body=response.text
            ) from e

        products = [decode_product(item) for item in envelope.data]
        unrecognized = sum(isinstance(p, UnrecognizedProduct) for p in products)
        if unrecognized:
            logger.debug(f"{unrecognized} of {len(products)} listed products were not recognized")
        return products

    async def modify_product(
        self,
        product_id: str,
        product_type: Union[ProductType, str],
        name: Optional[str] = None,
        cost_centre: Optional[str] = None,
        marketplace_visibility: Optional[bool] = None,
    ) -> bool:
        """Modify the name, cost centre or marketplace visibility of a product.

        Only ports and MCRs can be modified this way.

        :param product_id: Product UID
        :type product_id: str
        :param product_type: Product type tag
        :type product_type: Union[ProductType, str]
        :param name: New product name
        :type name: Optional[str]
        :param cost_centre: New cost centre
        :type cost_centre: Optional[str]
        :param marketplace_visibility: New marketplace visibility
        :type marketplace_visibility: Optional[bool]
        :return: ``True`` when the update was accepted
        :rtype: bool
        :raises WrongProductTypeError: For any other product type; nothing is sent
        """
        try:
            resolved_type = coerce_product_type(product_type)
        except ValueError:
            raise WrongProductTypeError(product_type) from None
        if resolved_type not in MODIFIABLE_PRODUCT_TYPES:
            raise WrongProductTypeError(resolved_type.value)

        update = ProductUpdate(
            name=name,
            cost_centre=cost_centre,
            marketplace_visibility=marketplace_visibility,
        )
        await self.client.request(
            "PUT",
            f"/v2/product/{resolved_type.value}/{product_id}",
            body=encode_json(update),
        )
        return True

    async def delete_product(self, product_id: str, delete_now: bool = False) -> None:
        """Cancel a product.

        :param product_id: Product UID
        :type product_id: str
        :param delete_now: Cancel immediately instead of at the end of the term
        :type delete_now: bool
        """
        action = CANCEL_NOW_ACTION if delete_now else CANCEL_ACTION
        await self.client.request("DELETE", f"/v3/product/{product_id}/action/{action}")
        logger.info(f"Requested {action} for product {product_id}")

    async def restore_product(self, product_id: str) -> None:
        """Undo a scheduled cancellation.

        :param product_id: Product UID
        :type product_id: str
        """
        await self.client.request(
            "POST", f"/v3/product/{product_id}/action/{RESTORE_ACTION}"
        )

    async def manage_product_lock(self, product_id: str, should_lock: bool) -> None:
        """Set the customer lock without checking the current state.

        :param product_id: Product UID
        :type product_id: str
        :param should_lock: Lock when true, unlock when false
        :type should_lock: bool
        """
        method = "POST" if should_lock else "DELETE"
        await self.client.request(method, f"/v2/product/{product_id}/lock")

    async def lock_product(self, product_id: str) -> None:
        """Lock a product after checking it is not already locked.

        :raises AlreadyLockedError: If the product is already locked; no
            lock request is sent
        """
        product = await self._get_known_product(product_id)
        if product.locked:
            raise AlreadyLockedError(product.product_type.family, product_id)
        await self.manage_product_lock(product_id, should_lock=True)

    async def unlock_product(self, product_id: str) -> None:
        """Unlock a product after checking it is locked.

        :raises NotLockedError: If the product is not locked; no unlock
            request is sent
        """
        product = await self._get_known_product(product_id)
        if not product.locked:
            raise NotLockedError(product.product_type.family, product_id)
        await self.manage_product_lock(product_id, should_lock=False)

    async def wait_for_provisioning(
        self,
        product_id: str,
        product_type: Union[ProductType, str],
        expected_status: str = ProvisioningStatus.LIVE,
    ) -> bool:
        """Block until a product reaches ``expected_status``.

        Cadence comes from the client settings (30 reads, 10 seconds apart by
        default).

        :param product_id: Product UID
        :type product_id: str
        :param product_type: Product type, used to name the family in errors
        :type product_type: Union[ProductType, str]
        :param expected_status: Status to wait for
        :type expected_status: str
        :return: ``True`` once reached
        :rtype: bool
        :raises ProvisioningTimeoutError: If the status is not reached in time
        """
        family = coerce_product_type(product_type).family
        watcher = self.client.create_watcher(self._get_known_product, family)
        return await watcher.wait_until_live(product_id, expected_status)

    async def _get_known_product(self, product_id: str):
        product = await self.get_product(product_id)
        if isinstance(product, UnrecognizedProduct):
            raise ResponseFormatError(
                f"product {product_id} could not be decoded: {product.reason}"
            )
        return product
