"""Observability helpers."""

from .logging import configure_logging, level_from_name  # re-export

__all__ = ["configure_logging", "level_from_name"]
