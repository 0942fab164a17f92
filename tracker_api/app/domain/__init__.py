"""Domain models and helpers."""

from .order_status import (
    OrderStatus,
    image_for_status,
    next_status,
    status_from_image,
)

__all__ = ["OrderStatus", "image_for_status", "next_status", "status_from_image"]
