#!/usr/bin/env python3
"""Follow the orders on a tracker server and send status notifications.

Usage::

    python scripts/track_orders.py --url http://localhost:8888/ --interval 30

Defaults come from ``config.json`` and the ``TRACKER_*`` environment
variables.
"""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import timedelta
from pathlib import Path

import httpx
from dotenv import load_dotenv

# Ensure the project root is importable when running as a standalone script
BASE_DIR = Path(__file__).resolve().parents[1]
if str(BASE_DIR) not in sys.path:
    sys.path.append(str(BASE_DIR))

import config  # noqa: E402
from tracker_api.app.obs import configure_logging, level_from_name  # noqa: E402
from tracker_api.app.providers import log_stub, stdout_stub  # noqa: E402
from tracker_api.app.tracker import OrderTracker  # noqa: E402

PROVIDERS = {"log": log_stub.send, "stdout": stdout_stub.send}


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    settings = config.get_settings()

    parser = argparse.ArgumentParser(description="Order status tracker")
    parser.add_argument("--url", default=settings.tracker_url, help="Order list URL")
    parser.add_argument(
        "--interval",
        type=float,
        default=settings.tracker_interval_secs,
        help="Seconds between polls",
    )
    parser.add_argument(
        "--error-limit",
        type=int,
        default=settings.tracker_error_limit,
        help="Consecutive failures tolerated before exiting",
    )
    parser.add_argument("--max-polls", type=int, default=None, help="Stop after N polls")
    parser.add_argument(
        "--provider",
        choices=sorted(PROVIDERS),
        default=settings.tracker_notify_provider,
        help="Where notifications are delivered",
    )
    parser.add_argument(
        "--target",
        default=settings.tracker_notify_target,
        help="Recipient passed to the notification provider",
    )
    args = parser.parse_args(argv)

    configure_logging(level_from_name(settings.log_level))
    with httpx.Client(timeout=10) as client:
        tracker = OrderTracker(
            client,
            args.url,
            retention=timedelta(hours=settings.tracker_retention_hours),
            sender=PROVIDERS[args.provider],
            target=args.target,
        )
        errors = tracker.run(args.interval, args.error_limit, max_polls=args.max_polls)
    logging.getLogger("tracker").info("tracker stopped")
    return 1 if errors > args.error_limit else 0


if __name__ == "__main__":
    raise SystemExit(main())
