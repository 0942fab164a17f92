"""In-memory order store used by the demo server."""

from __future__ import annotations

import logging
import random
from typing import Iterable

from ..domain.order_status import OrderStatus, next_status
from .orders_repo import DEFAULT_TRACKER_LINK_BASE, Order, OrdersRepo

logger = logging.getLogger("orders")

DEFAULT_THRESHOLD = 10

# (order_id, time_ordered, status)
SEED_ORDERS: tuple[tuple[int, str, OrderStatus], ...] = (
    (1, "Tue 18 Sep 2018 12:00:00", OrderStatus.DELIVERED),
    (2, "Tue 19 Sep 2018 15:10:00", OrderStatus.UNKNOWN),
)


class InMemoryOrdersRepo(OrdersRepo):
    """Hold a fixed list of orders and advance them in place.

    The random draw used by :meth:`maybe_advance` comes from ``rng`` so
    callers can pass a seeded ``random.Random``. ``threshold`` is the
    percentage chance of a random advance and never changes after
    construction.
    """

    def __init__(
        self,
        orders: Iterable[Order] = (),
        threshold: int = DEFAULT_THRESHOLD,
        rng: random.Random | None = None,
    ) -> None:
        self._orders: list[Order] = list(orders)
        self.threshold = threshold
        self._rng = rng or random.Random()

    @classmethod
    def from_seed(
        cls,
        threshold: int = DEFAULT_THRESHOLD,
        tracker_link_base: str = DEFAULT_TRACKER_LINK_BASE,
        rng: random.Random | None = None,
    ) -> "InMemoryOrdersRepo":
        """Build a store holding the two startup orders."""

        orders = [
            Order(order_id, time_ordered, status, tracker_link_base)
            for order_id, time_ordered, status in SEED_ORDERS
        ]
        return cls(orders, threshold=threshold, rng=rng)

    def __len__(self) -> int:
        return len(self._orders)

    def find_by_id(self, order_id: int) -> Order | None:
        for order in self._orders:
            if order.order_id == order_id:
                return order
        return None

    def list_all(self) -> list[Order]:
        return list(self._orders)

    def advance(self, order: Order) -> OrderStatus:
        previous = order.status
        order.status = next_status(order.status)
        if order.status != previous:
            logger.debug(
                "order %s advanced %s -> %s",
                order.order_id,
                previous.name,
                order.status.name,
            )
        return order.status

    def should_change(self) -> bool:
        """Return ``True`` when a draw from [0, 100) falls below the threshold."""

        return self._rng.randrange(100) < self.threshold

    def maybe_advance(self, order: Order) -> bool:
        # Unknown orders always re-enter the progression
        if self.should_change() or order.status == OrderStatus.UNKNOWN:
            self.advance(order)
            return True
        return False
