"""Polling client that follows orders on a tracker server.

The tracker reads the JSON listing served at ``/``, derives each order's
status from its status image link and reports the transitions a customer
cares about: the kitchen starting on an order and the driver leaving.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Iterable

import httpx

from .domain.order_status import OrderStatus, status_from_image
from .providers import log_stub
from .providers.base import Sender

logger = logging.getLogger("tracker")

NOTIFY_EVENT = "order.status"
NOTIFY_STATUSES = (OrderStatus.COOKING, OrderStatus.OUT_FOR_DELIVERY)
DEFAULT_RETENTION = timedelta(hours=12)

MONTHS: dict[str, int] = {
    "Jan": 1,
    "Feb": 2,
    "Mar": 3,
    "March": 3,
    "Apr": 4,
    "April": 4,
    "May": 5,
    "Jun": 6,
    "June": 6,
    "Jul": 7,
    "July": 7,
    "Aug": 8,
    "Sep": 9,
    "Oct": 10,
    "Nov": 11,
    "Dec": 12,
}


class TrackerError(Exception):
    """Raised when the tracker server cannot be read or understood."""


def parse_time_ordered(text: str) -> datetime:
    """Parse ``"Tue 18 Sep 2018 12:00:00"`` into a naive local datetime.

    The leading weekday is ignored.
    """

    parts = text.split()
    if len(parts) != 5:
        raise TrackerError(f"unexpected order time: {text!r}")
    _dow, day, month_name, year, clock = parts
    month = MONTHS.get(month_name)
    if month is None:
        raise TrackerError(f"unable to parse month: {month_name!r}")
    try:
        hour, minute, second = (int(v) for v in clock.split(":"))
        return datetime(int(year), month, int(day), hour, minute, second)
    except ValueError as exc:
        raise TrackerError(f"unexpected order time: {text!r}") from exc


def format_update(order_id: int, status: OrderStatus) -> str:
    """Return the notification text for ``order_id`` reaching ``status``."""

    return f"Order #{order_id}\n{status.message}"


@dataclass
class TrackedOrder:
    order_id: int
    tracker_link: str
    status_image: str
    time_ordered: datetime
    status: OrderStatus = OrderStatus.UNKNOWN

    @classmethod
    def from_public(cls, data: dict) -> "TrackedOrder":
        try:
            order = cls(
                order_id=int(data["orderId"]),
                tracker_link=str(data["orderTrackerLink"]),
                status_image=str(data.get("orderStatusImage", "")),
                time_ordered=parse_time_ordered(str(data["timeOrdered"])),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise TrackerError(f"malformed order entry: {data!r}") from exc
        order.update_status()
        return order

    def update_status(self) -> bool:
        """Re-derive the status from the image; return whether it changed."""

        previous = self.status
        self.status = status_from_image(self.status_image)
        return previous != self.status


class OrderTracker:
    """Keep the known orders in sync with a tracker server.

    ``client`` is any ``httpx.Client``; ``clock`` returns the current time
    used to expire delivered orders.
    """

    def __init__(
        self,
        client: httpx.Client,
        base_url: str = "/",
        retention: timedelta = DEFAULT_RETENTION,
        clock: Callable[[], datetime] = datetime.now,
        sender: Sender = log_stub.send,
        target: str | None = None,
    ) -> None:
        self.client = client
        self.sender = sender
        self.target = target
        self.base_url = base_url
        self.retention = retention
        self.clock = clock
        self.orders: list[TrackedOrder] = []

    def fetch_orders(self) -> list[TrackedOrder]:
        try:
            resp = self.client.get(self.base_url)
            resp.raise_for_status()
            payload = resp.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise TrackerError(f"unable to read order list: {exc}") from exc

        meta = payload.get("meta") if isinstance(payload, dict) else None
        if not isinstance(meta, dict) or meta.get("code") != 200:
            raise TrackerError(f"unexpected envelope: {payload!r}")
        entries = payload.get("response")
        # A string response carries a server message instead of orders
        if isinstance(entries, str):
            logger.info("tracker message: %s", entries)
            return []
        if not isinstance(entries, list):
            raise TrackerError(f"unexpected response: {entries!r}")
        return [TrackedOrder.from_public(entry) for entry in entries]

    def prune(self) -> int:
        """Forget delivered orders placed longer ago than the retention window."""

        now = self.clock()
        before = len(self.orders)
        self.orders = [
            o
            for o in self.orders
            if not (
                o.status == OrderStatus.DELIVERED
                and now - o.time_ordered > self.retention
            )
        ]
        removed = before - len(self.orders)
        if removed:
            logger.debug("removed %d old orders", removed)
        return removed

    def merge(self, fetched: Iterable[TrackedOrder]) -> list[tuple[int, OrderStatus]]:
        changes: list[tuple[int, OrderStatus]] = []
        known = {o.order_id: o for o in self.orders}
        for order in fetched:
            current = known.get(order.order_id)
            if current is None:
                logger.debug("new order %s", order.order_id)
                self.orders.append(order)
                known[order.order_id] = order
                continue
            current.status_image = order.status_image
            if current.update_status() and current.status in NOTIFY_STATUSES:
                changes.append((current.order_id, current.status))
        return changes

    def poll(self) -> list[tuple[int, OrderStatus]]:
        """Fetch the listing once and return notable status changes."""

        self.prune()
        changes = self.merge(self.fetch_orders())
        logger.info("updated orders, found %d changes", len(changes))
        return changes

    def notify(self, changes: Iterable[tuple[int, OrderStatus]]) -> None:
        for order_id, status in changes:
            payload = {
                "order_id": order_id,
                "status": status.name,
                "message": format_update(order_id, status),
            }
            self.sender(NOTIFY_EVENT, payload, self.target)

    def run(
        self,
        interval: float,
        error_limit: int,
        max_polls: int | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> int:
        """Poll until ``max_polls`` or too many consecutive failures.

        Returns the number of consecutive errors at exit.
        """

        consecutive_errors = 0
        polls = 0
        while max_polls is None or polls < max_polls:
            polls += 1
            try:
                self.notify(self.poll())
            except TrackerError as exc:
                consecutive_errors += 1
                logger.error("error updating orders: %s", exc)
            else:
                consecutive_errors = 0
            if consecutive_errors > error_limit:
                logger.error("too many consecutive errors, stopping tracker")
                break
            if max_polls is not None and polls >= max_polls:
                break
            sleep(interval)
        return consecutive_errors
