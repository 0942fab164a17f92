# start_app.py
"""Launch the order tracker demo server."""

from __future__ import annotations

import argparse
import sys

import uvicorn
from dotenv import load_dotenv

import config


def main(argv: list[str] | None = None) -> None:
    """Load settings, then start the API."""

    parser = argparse.ArgumentParser()
    parser.add_argument("--host", help="Interface to bind (default from settings)")
    parser.add_argument(
        "--port", type=int, help="Port to listen on (default from settings)"
    )
    args = parser.parse_args(argv)

    load_dotenv()  # load environment variables from a .env file

    settings = config.get_settings()  # ensure settings are initialized with any override

    try:
        uvicorn.run(
            "tracker_api.app.main:app",
            host=args.host or settings.host,
            port=args.port or settings.port,
            log_level=settings.log_level.lower(),
        )
    except ModuleNotFoundError as exc:
        missing = exc.name or str(exc)
        print(
            f"Missing dependency: {missing}. Install it with 'pip install {missing}'",
            file=sys.stderr,
        )
        raise SystemExit(1)


if __name__ == "__main__":
    main()
