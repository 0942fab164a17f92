"""Provider that records notifications on the tracker log."""

import logging
from typing import Any, Dict, Optional

logger = logging.getLogger("tracker.notify")


def send(event: Any, payload: Dict[str, Any], target: Optional[str]) -> None:
    logger.info(payload["message"])
