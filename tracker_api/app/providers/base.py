"""Base interface for order notification providers."""

from typing import Any, Callable, Dict, Optional

Sender = Callable[[Any, Dict[str, Any], Optional[str]], None]


def send(event: Any, payload: Dict[str, Any], target: Optional[str]) -> None:
    """Deliver an order status notification.

    Parameters:
        event: Notification event name, e.g. ``"order.status"``.
        payload: ``order_id``, ``status`` and the rendered ``message``.
        target: Recipient identifier such as a phone number, or ``None``.
    """
    raise NotImplementedError
