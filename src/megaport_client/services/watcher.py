"""Provisioning watcher.

Products are provisioned asynchronously by the API. The watcher re-reads a
product's provisioning status at a fixed interval until it matches the
expected state, the attempt budget runs out, or an optional deadline
passes. It only ever repeats the *read*; the mutating call that started
provisioning is never retried here.

State machine::

    POLLING --match--> LIVE
    POLLING --read error--> ERRORED      (error propagates)
    POLLING --budget/deadline--> TIMED_OUT (ProvisioningTimeoutError)
    POLLING --cancel()--> CANCELLED      (ProvisioningCancelledError)
"""

import asyncio
import logging
from enum import Enum
from typing import Any, Awaitable, Callable, Optional

from ..exceptions import ProvisioningCancelledError, ProvisioningTimeoutError
from ..models.products import ProvisioningStatus

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 10.0
DEFAULT_MAX_ATTEMPTS = 30


class WatchState(str, Enum):
    """Watcher states."""

    IDLE = "idle"
    POLLING = "polling"
    LIVE = "live"
    TIMED_OUT = "timed_out"
    ERRORED = "errored"
    CANCELLED = "cancelled"


class ProvisioningWatcher:
    """Polls a product until it reaches an expected provisioning status.

    The wait between reads is a cancellable timer rather than a bare sleep:
    :meth:`cancel` wakes a pending wait immediately, and ``deadline`` bounds
    the total time spent independently of ``max_attempts``. Cancelling the
    surrounding asyncio task also stops the watcher.

    :param read: Coroutine function returning the product for an id; the
        result must expose ``provisioning_status``
    :type read: Callable[[str], Awaitable[Any]]
    :param product_family: Human name used in errors and logs (port, MCR, ...)
    :type product_family: str
    :param interval: Seconds between reads
    :type interval: float
    :param max_attempts: Maximum number of reads
    :type max_attempts: int
    :param deadline: Optional ceiling on total wait, in seconds
    :type deadline: Optional[float]
    """

    def __init__(
        self,
        read: Callable[[str], Awaitable[Any]],
        product_family: str,
        interval: float = DEFAULT_POLL_INTERVAL,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        deadline: Optional[float] = None,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if interval < 0:
            raise ValueError("interval must not be negative")
        self._read = read
        self.product_family = product_family
        self.interval = interval
        self.max_attempts = max_attempts
        self.deadline = deadline
        self.state = WatchState.IDLE
        self.attempts = 0
        self.last_status: Optional[str] = None
        self._cancelled = asyncio.Event()

    def cancel(self) -> None:
        """Stop waiting; a pending or future wait raises ``ProvisioningCancelledError``."""
        self._cancelled.set()

    async def wait_until_live(
        self, product_id: str, expected_status: str = ProvisioningStatus.LIVE
    ) -> bool:
        """Poll until the product reports ``expected_status``.

        :param product_id: Product to watch
        :type product_id: str
        :param expected_status: Status to wait for, compared by exact match
        :type expected_status: str
        :return: ``True`` once the status matches
        :rtype: bool
        :raises ProvisioningTimeoutError: If attempts or the deadline run out
        :raises ProvisioningCancelledError: If :meth:`cancel` was called
        :raises Exception: Whatever the read raised, unchanged
        """
        loop = asyncio.get_running_loop()
        deadline_at = loop.time() + self.deadline if self.deadline is not None else None

        self.state = WatchState.POLLING
        self.attempts = 0
        self.last_status = None

        while self.attempts < self.max_attempts:
            self._check_cancelled(product_id)

            self.attempts += 1
            try:
                product = await self._read(product_id)
            except Exception:
                self.state = WatchState.ERRORED
                raise

            status = product.provisioning_status
            self.last_status = status
            if status == expected_status:
                self.state = WatchState.LIVE
                logger.info(
                    f"{self.product_family} {product_id} reached {expected_status} "
                    f"after {self.attempts} attempt(s)"
                )
                return True

            if self.attempts >= self.max_attempts:
                break

            pause = self.interval
            if deadline_at is not None:
                remaining = deadline_at - loop.time()
                if remaining <= 0:
                    break
                pause = min(pause, remaining)

            logger.debug(
                f"{self.product_family} status is currently {status!r} - waiting "
                f"(product_id={product_id}, attempt={self.attempts}/{self.max_attempts})"
            )
            await self._pause(pause, product_id)

        self.state = WatchState.TIMED_OUT
        logger.warning(
            f"{self.product_family} {product_id} did not reach {expected_status} "
            f"after {self.attempts} attempt(s); last status {self.last_status!r}"
        )
        raise ProvisioningTimeoutError(
            self.product_family,
            product_id=product_id,
            attempts=self.attempts,
            last_status=self.last_status,
        )

    def _check_cancelled(self, product_id: str) -> None:
        if self._cancelled.is_set():
            self.state = WatchState.CANCELLED
            raise ProvisioningCancelledError(self.product_family, product_id)

    async def _pause(self, seconds: float, product_id: str) -> None:
        if seconds <= 0:
            await asyncio.sleep(0)
        else:
            try:
                await asyncio.wait_for(self._cancelled.wait(), timeout=seconds)
            except asyncio.TimeoutError:
                return
        self._check_cancelled(product_id)
