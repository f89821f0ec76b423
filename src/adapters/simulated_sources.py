"""Simulated collaborators: central resolver, profile databases and vault.

In-memory stand-ins with random latency so the aggregator can be exercised
end-to-end (CLI, benchmarks) without any real backing store. Every source
raises `SourceError` tagged with its own name when it has no row for an id.
"""

from __future__ import annotations

import asyncio
import random
from dataclasses import dataclass, field
from typing import Any, Mapping

from core.config import AppSettings
from core.domain.errors import SourceError
from core.registry import StoreSet
from core.services.user_aggregator import UserAggregator

# id -> store name
DEFAULT_ASSIGNMENTS: dict[int, str] = {
    1: "db1",
    2: "db1",
    3: "db1",
    4: "db1",
    5: "db2",
    6: "db2",
    7: "db2",
    8: "db3",
    9: "db3",
    10: "db3",
}

DEFAULT_PROFILES: dict[int, dict[str, Any]] = {
    1: {"username": "Bret", "website": "hildegard.org", "company": "Romaguera-Crona"},
    2: {"username": "Antonette", "website": "anastasia.net", "company": "Deckow-Crist"},
    3: {"username": "Samantha", "website": "ramiro.info", "company": "Romaguera-Jacobson"},
    4: {"username": "Karianne", "website": "kale.biz", "company": "Robel-Corkery"},
    5: {"username": "Kamren", "website": "demarco.info", "company": "Keebler LLC"},
    6: {"username": "Leopoldo_Corkery", "website": "ola.org", "company": "Considine-Lockman"},
    7: {"username": "Elwyn.Skiles", "website": "elvis.io", "company": "Johns Group"},
    8: {"username": "Maxime_Nienow", "website": "jacynthe.com", "company": "Abernathy Group"},
    9: {"username": "Delphine", "website": "conrad.com", "company": "Yost and Sons"},
    10: {"username": "Moriah.Stanton", "website": "ambrose.net", "company": "Hoeger LLC"},
}

DEFAULT_SECURE: dict[int, dict[str, Any]] = {
    1: {"name": "Leanne Graham", "email": "Sincere@april.biz", "phone": "1-770-736-8031"},
    2: {"name": "Ervin Howell", "email": "Shanna@melissa.tv", "phone": "010-692-6593"},
    3: {"name": "Clementine Bauch", "email": "Nathan@yesenia.net", "phone": "1-463-123-4447"},
    4: {"name": "Patricia Lebsack", "email": "Julianne.OConner@kory.org", "phone": "493-170-9623"},
    5: {"name": "Chelsey Dietrich", "email": "Lucio_Hettinger@annie.ca", "phone": "(254)954-1289"},
    6: {"name": "Dennis Schulist", "email": "Karley_Dach@jasper.info", "phone": "1-477-935-8478"},
    7: {"name": "Kurtis Weissnat", "email": "Telly.Hoeger@billy.biz", "phone": "210.067.6132"},
    8: {"name": "Nicholas Runolfsdottir", "email": "Sherwood@rosamond.me", "phone": "586.493.6943"},
    9: {"name": "Glenna Reichert", "email": "Chaim_McDermott@dana.io", "phone": "(775)976-6794"},
    10: {"name": "Clementina DuBuque", "email": "Rey.Padberg@karina.biz", "phone": "024-648-3804"},
}


@dataclass
class SimulatedLatency:
    """Random delay in `[min_ms, max_ms]` applied before every simulated call."""

    min_ms: int = 10
    max_ms: int = 50
    rng: random.Random = field(default_factory=random.Random)

    @classmethod
    def from_settings(cls, settings: AppSettings) -> "SimulatedLatency":
        return cls(
            min_ms=settings.sim_latency_min_ms,
            max_ms=settings.sim_latency_max_ms,
            rng=random.Random(settings.sim_seed),
        )

    async def wait(self) -> None:
        delay_ms = self.rng.randint(self.min_ms, self.max_ms)
        if delay_ms:
            await asyncio.sleep(delay_ms / 1000)


class CentralResolver:
    """Resolver backed by a static id -> store table."""

    name = "central"

    def __init__(
        self,
        assignments: Mapping[int, str] | None = None,
        latency: SimulatedLatency | None = None,
    ) -> None:
        self._assignments = dict(DEFAULT_ASSIGNMENTS if assignments is None else assignments)
        self._latency = latency or SimulatedLatency()

    async def resolve(self, user_id: int) -> str | None:
        await self._latency.wait()
        if user_id not in self._assignments:
            raise SourceError(self.name, f"{self.name}: no assignment for ID {user_id}")
        return self._assignments[user_id]


class ProfileDatabase:
    """One member of the Store Set serving profile rows."""

    def __init__(
        self,
        name: str,
        rows: Mapping[int, Mapping[str, Any]],
        latency: SimulatedLatency | None = None,
    ) -> None:
        self.name = name
        self._rows = {key: dict(value) for key, value in rows.items()}
        self._latency = latency or SimulatedLatency()

    async def get(self, user_id: int) -> dict[str, Any]:
        await self._latency.wait()
        row = self._rows.get(user_id)
        if row is None:
            raise SourceError(self.name, f"{self.name}: no record for ID {user_id}")
        return dict(row)


class Vault:
    """Secure store serving contact fields."""

    name = "vault"

    def __init__(
        self,
        rows: Mapping[int, Mapping[str, Any]] | None = None,
        latency: SimulatedLatency | None = None,
    ) -> None:
        source = DEFAULT_SECURE if rows is None else rows
        self._rows = {key: dict(value) for key, value in source.items()}
        self._latency = latency or SimulatedLatency()

    async def get(self, user_id: int) -> dict[str, Any]:
        await self._latency.wait()
        row = self._rows.get(user_id)
        if row is None:
            raise SourceError(self.name, f"{self.name}: no record for ID {user_id}")
        return dict(row)


def build_store_set(latency: SimulatedLatency | None = None) -> StoreSet:
    """Split the default profile rows across db1..db3 following the assignments."""

    rows_by_store: dict[str, dict[int, dict[str, Any]]] = {}
    for user_id, store_name in DEFAULT_ASSIGNMENTS.items():
        rows_by_store.setdefault(store_name, {})[user_id] = DEFAULT_PROFILES[user_id]
    return StoreSet(
        {
            name: ProfileDatabase(name, rows, latency=latency)
            for name, rows in sorted(rows_by_store.items())
        }
    )


def build_default_aggregator(settings: AppSettings | None = None) -> UserAggregator:
    """Wire the simulated resolver, db1..db3 and vault into a `UserAggregator`."""

    settings = settings or AppSettings()
    latency = SimulatedLatency.from_settings(settings)
    return UserAggregator(
        resolver=CentralResolver(latency=latency),
        stores=build_store_set(latency),
        secure_store=Vault(latency=latency),
        settings=settings,
    )
