"""Port operations.

Ports are the ``MEGAPORT`` product family. Most verbs delegate to
:class:`~megaport_client.services.product.ProductService`; ordering and
listing add the port-specific payload and filtering.
"""

import logging
from typing import TYPE_CHECKING, List, Optional

from ..exceptions import ResponseFormatError
from ..models.orders import PortOrder, validate_term
from ..models.products import Port, ProductType, UnrecognizedProduct

if TYPE_CHECKING:
    from ..client import MegaportClient

logger = logging.getLogger(__name__)


class PortService:
    """Handles the port endpoints of the Megaport API.

    :param client: Owning client
    :type client: MegaportClient
    """

    def __init__(self, client: "MegaportClient"):
        self.client = client

    @property
    def products(self):
        return self.client.product_service

    async def buy_port(
        self,
        name: str,
        term: int,
        port_speed: int,
        location_id: int,
        market: Optional[str] = None,
        is_lag: bool = False,
        lag_count: int = 0,
        is_private: bool = False,
    ) -> str:
        """Order a single or LAG port.

        The term is checked before anything is sent.

        :param name: Port name
        :type name: str
        :param term: Contract term in months (1, 12, 24 or 36)
        :type term: int
        :param port_speed: Port speed in Mbps
        :type port_speed: int
        :param location_id: Data centre location id
        :type location_id: int
        :param market: Billing market
        :type market: Optional[str]
        :param is_lag: Order a LAG instead of a single port
        :type is_lag: bool
        :param lag_count: Number of ports in the LAG
        :type lag_count: int
        :param is_private: Hide the port from the marketplace
        :type is_private: bool
        :return: Technical service UID of the new port
        :rtype: str
        :raises InvalidTermError: If ``term`` is not supported
        """
        validate_term(term)

        order = PortOrder(
            product_name=name,
            term=term,
            port_speed=port_speed,
            location_id=location_id,
            market=market,
            lag_port_count=lag_count if is_lag else None,
            marketplace_visibility=not is_private,
        )

        try:
            confirmations = await self.products.execute_order([order])
        except Exception:
            logger.error(f"Port order for {name!r} did not complete")
            raise

        return confirmations[0].technical_service_uid

    async def buy_single_port(
        self,
        name: str,
        term: int,
        port_speed: int,
        location_id: int,
        market: Optional[str] = None,
        is_private: bool = False,
    ) -> str:
        return await self.buy_port(
            name=name,
            term=term,
            port_speed=port_speed,
            location_id=location_id,
            market=market,
            is_lag=False,
            is_private=is_private,
        )

    async def buy_lag_port(
        self,
        name: str,
        term: int,
        port_speed: int,
        location_id: int,
        lag_count: int,
        market: Optional[str] = None,
        is_private: bool = False,
    ) -> str:
        return await self.buy_port(
            name=name,
            term=term,
            port_speed=port_speed,
            location_id=location_id,
            market=market,
            is_lag=True,
            lag_count=lag_count,
            is_private=is_private,
        )

    async def list_ports(self) -> List[Port]:
        """List the ports on the account.

        The products endpoint returns every product family. Elements that do
        not decode as a port are skipped and logged; they never fail the
        call.

        :return: Ports only
        :rtype: List[Port]
        """
        ports = []
        for product in await self.products.list_products():
            if isinstance(product, Port):
                ports.append(product)
            elif isinstance(product, UnrecognizedProduct):
                logger.debug(f"Could not decode element as port: {product.reason}")
            else:
                logger.debug(
                    f"Skipping {product.product_type.value} product {product.product_uid}"
                )
        return ports

    async def get_port(self, port_id: str) -> Port:
        """Read a single port.

        :raises NotFoundError: If no product has this id
        :raises ResponseFormatError: If the product is not a port
        """
        product = await self.products.get_product(port_id)
        if isinstance(product, Port):
            return product
        if isinstance(product, UnrecognizedProduct):
            reason = product.reason
        else:
            reason = f"product is a {product.product_type.value}"
        raise ResponseFormatError(f"product {port_id} is not a port: {reason}")

    async def modify_port(
        self,
        port_id: str,
        name: Optional[str] = None,
        cost_centre: Optional[str] = None,
        marketplace_visibility: Optional[bool] = None,
    ) -> bool:
        return await self.products.modify_product(
            port_id,
            ProductType.MEGAPORT,
            name=name,
            cost_centre=cost_centre,
            marketplace_visibility=marketplace_visibility,
        )

    async def delete_port(self, port_id: str, delete_now: bool = False) -> bool:
        await self.products.delete_product(port_id, delete_now=delete_now)
        return True

    async def restore_port(self, port_id: str) -> bool:
        await self.products.restore_product(port_id)
        return True

    async def lock_port(self, port_id: str) -> bool:
        """Lock a port.

        :raises AlreadyLockedError: If the port is already locked
        """
        await self.products.lock_product(port_id)
        return True

    async def unlock_port(self, port_id: str) -> bool:
        """Unlock a port.

        :raises NotLockedError: If the port is not locked
        """
        await self.products.unlock_product(port_id)
        return True

    async def wait_for_port_provisioning(self, port_id: str) -> bool:
        """Wait until a port is LIVE, about five minutes at most by default.

        :raises ProvisioningTimeoutError: "the port took too long to provision"
        """
        watcher = self.client.create_watcher(self.get_port, ProductType.MEGAPORT.family)
        return await watcher.wait_until_live(port_id)
