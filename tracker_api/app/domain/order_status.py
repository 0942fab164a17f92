"""Order status enumeration and the delivery progression."""

from __future__ import annotations

from enum import IntEnum

IMAGE_PREFIX = "/webfile?name=order-tracker-"


class OrderStatus(IntEnum):
    """Enumerate the delivery stages of an order.

    Ordinals are contiguous; ``UNKNOWN`` is a sentinel outside the
    progression that re-enters it at ``DEFERRED``.
    """

    DEFERRED = 0
    REVIEWING = 1
    PENDING = 2
    COOKING = 3
    OUT_FOR_DELIVERY = 4
    DELIVERED = 5
    UNKNOWN = 6

    @property
    def message(self) -> str:
        return MESSAGES[self]


IMAGE_FILES: dict[OrderStatus, str] = {
    OrderStatus.DEFERRED: "deferred.png",
    OrderStatus.REVIEWING: "reviewing.png",
    OrderStatus.PENDING: "pending.png",
    OrderStatus.COOKING: "cooking.png",
    OrderStatus.OUT_FOR_DELIVERY: "driving.png",
    OrderStatus.DELIVERED: "delivered.png",
    OrderStatus.UNKNOWN: "unknown.png",
}

MESSAGES: dict[OrderStatus, str] = {
    OrderStatus.DEFERRED: "Deferred, The store might not be open?",
    OrderStatus.REVIEWING: "Reviewing, Management is checking things over apparently",
    OrderStatus.PENDING: "Pending, Your order is waiting for the kitchen",
    OrderStatus.COOKING: "The cooks are working on your order now!",
    OrderStatus.OUT_FOR_DELIVERY: "The driver is heading to your house!",
    OrderStatus.DELIVERED: "You are eating pizza!",
    OrderStatus.UNKNOWN: "I don't know what status this is, are you sure you ordered a pizza?",
}


def next_status(status: OrderStatus) -> OrderStatus:
    """Return the status that follows ``status``.

    ``DELIVERED`` is absorbing and ``UNKNOWN`` wraps to ``DEFERRED``.
    """

    if status == OrderStatus.UNKNOWN:
        return OrderStatus.DEFERRED
    if status == OrderStatus.DELIVERED:
        return OrderStatus.DELIVERED
    return OrderStatus(status + 1)


def image_for_status(status: OrderStatus) -> str:
    """Return the tracker image link advertised for ``status``."""

    return IMAGE_PREFIX + IMAGE_FILES[status]


def status_from_image(image: str) -> OrderStatus:
    """Map a tracker image link back to its status.

    Unrecognised links, including the unknown image, yield ``UNKNOWN``.
    """

    for status, filename in IMAGE_FILES.items():
        if status == OrderStatus.UNKNOWN:
            continue
        if IMAGE_PREFIX + filename in image:
            return status
    return OrderStatus.UNKNOWN
