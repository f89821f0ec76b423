"""Shared fixtures: settings without latency and mocked collaborators."""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from core.config import AppSettings
from core.services.user_aggregator import UserAggregator

PROFILE_5 = {"username": "alice", "website": "a.com", "company": "Acme"}
SECURE_5 = {"email": "a@x.com"}


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(sim_latency_min_ms=0, sim_latency_max_ms=0, sim_seed=1)


@pytest.fixture
def collaborators():
    """Resolver -> db2, every store and the vault mocked with `AsyncMock`."""

    resolver = SimpleNamespace(resolve=AsyncMock(return_value="db2"))
    stores = {
        name: SimpleNamespace(get=AsyncMock(return_value=dict(PROFILE_5)))
        for name in ("db1", "db2", "db3")
    }
    vault = SimpleNamespace(get=AsyncMock(return_value=dict(SECURE_5)))
    return SimpleNamespace(resolver=resolver, stores=stores, vault=vault)


@pytest.fixture
def aggregator(collaborators, settings) -> UserAggregator:
    return UserAggregator(
        resolver=collaborators.resolver,
        stores=collaborators.stores,
        secure_store=collaborators.vault,
        settings=settings,
    )
