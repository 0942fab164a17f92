"""Order record and the repository interface for order operations."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from ..domain.order_status import OrderStatus, image_for_status

DEFAULT_TRACKER_LINK_BASE = "http://localhost:8888/order/"


@dataclass
class Order:
    """A tracked delivery with a free-form order time."""

    order_id: int
    time_ordered: str
    status: OrderStatus = OrderStatus.UNKNOWN
    tracker_link_base: str = DEFAULT_TRACKER_LINK_BASE

    @property
    def tracker_link(self) -> str:
        return f"{self.tracker_link_base}{self.order_id}"

    def to_public(self, with_image: bool = True) -> dict[str, Any]:
        """Return the JSON projection served to clients.

        ``status`` stays internal; only its image link is exposed.
        """

        data: dict[str, Any] = {
            "orderId": self.order_id,
            "orderTrackerLink": self.tracker_link,
        }
        if with_image:
            data["orderStatusImage"] = image_for_status(self.status)
        data["timeOrdered"] = self.time_ordered
        return data


class OrdersRepo(ABC):
    """Contract for order lookup and status progression."""

    @abstractmethod
    def find_by_id(self, order_id: int) -> Order | None:
        """Return the order with ``order_id`` or ``None``."""
        raise NotImplementedError

    @abstractmethod
    def list_all(self) -> list[Order]:
        """List every order in insertion order."""
        raise NotImplementedError

    @abstractmethod
    def advance(self, order: Order) -> OrderStatus:
        """Move ``order`` one step along its status progression."""
        raise NotImplementedError

    @abstractmethod
    def maybe_advance(self, order: Order) -> bool:
        """Advance ``order`` when the random draw allows it."""
        raise NotImplementedError
