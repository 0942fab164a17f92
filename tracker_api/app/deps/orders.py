"""Dependency helpers resolving the application-owned order store."""

from fastapi import Request

from config import Settings

from ..repos.orders_repo import OrdersRepo


def get_orders_repo(request: Request) -> OrdersRepo:
    """Return the order store attached to the running application."""
    return request.app.state.orders


def get_app_settings(request: Request) -> Settings:
    """Return the settings the application was built with."""
    return request.app.state.settings
