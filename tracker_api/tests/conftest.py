"""Test configuration for the tracker application."""

import pytest
from fastapi.testclient import TestClient

from config import Settings
from tracker_api.app.main import create_app
from tracker_api.app.repos.memory_orders_repo import InMemoryOrdersRepo


class FixedDraw:
    """Random source whose every draw returns ``value``."""

    def __init__(self, value: int) -> None:
        self.value = value
        self.calls = 0

    def randrange(self, stop: int) -> int:
        self.calls += 1
        return self.value


class NoDraw:
    """Random source that fails the test when consulted."""

    def randrange(self, stop: int) -> int:
        raise AssertionError("random draw not expected")


@pytest.fixture
def fixed_draw():
    return FixedDraw


@pytest.fixture
def no_draw():
    return NoDraw()


@pytest.fixture
def never():
    return FixedDraw(99)


@pytest.fixture
def always():
    return FixedDraw(0)


@pytest.fixture
def make_client():
    def _make(rng=None, **overrides):
        settings = Settings(**overrides)
        repo = InMemoryOrdersRepo.from_seed(
            threshold=settings.advance_threshold,
            tracker_link_base=settings.tracker_link_base,
            rng=rng or FixedDraw(99),
        )
        return TestClient(create_app(settings, repo)), repo

    return _make
