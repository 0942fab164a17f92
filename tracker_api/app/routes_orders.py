"""Order tracking routes: the JSON listing and the per-order status page."""

from __future__ import annotations

import logging

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException
from fastapi.responses import HTMLResponse

from config import Settings

from .deps.orders import get_app_settings, get_orders_repo
from .domain.order_status import OrderStatus
from .repos.orders_repo import OrdersRepo
from .utils.responses import ok

router = APIRouter()
logger = logging.getLogger("api")


def render_status_page(status: OrderStatus) -> str:
    """Return the tracker page embedding the numeric ``status``."""

    return (
        "<html><head></head><body>"
        f'<div id="currentStep">{int(status)}</div>'
        "</body></html>"
    )


async def advance_all(repo: OrdersRepo) -> None:
    """Give every order a chance to move along its progression."""

    for order in repo.list_all():
        repo.maybe_advance(order)


@router.get("/order/{order_id}", response_class=HTMLResponse)
async def order_status_page(
    order_id: int,
    repo: OrdersRepo = Depends(get_orders_repo),
    settings: Settings = Depends(get_app_settings),
) -> HTMLResponse:
    """Advance ``order_id`` one step and render its current status."""

    order = repo.find_by_id(order_id)
    if order is None:
        raise HTTPException(status_code=404, detail="order not found")

    repo.advance(order)
    if settings.double_advance_on_fetch:
        repo.maybe_advance(order)
    logger.debug("order %s now %s", order.order_id, order.status.name)
    return HTMLResponse(render_status_page(order.status))


@router.get("/")
async def list_orders(
    background_tasks: BackgroundTasks,
    repo: OrdersRepo = Depends(get_orders_repo),
    settings: Settings = Depends(get_app_settings),
) -> dict:
    """Return every order in the tracker envelope.

    With ``advance_on_list`` enabled the statuses move on after the
    response is sent, so consecutive listings may differ in status images
    but never in order count or identifiers.
    """

    orders = [o.to_public(with_image=settings.status_images) for o in repo.list_all()]
    if settings.advance_on_list:
        background_tasks.add_task(advance_all, repo)
    return ok(orders)


__all__ = ["router"]
