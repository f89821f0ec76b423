"""Contracts for the aggregator's collaborators.

Why Protocol:
- Structural contract (duck typing) without rigid inheritance.
- Lets simulated sources, real databases and test doubles be swapped freely.
"""

from __future__ import annotations

from typing import Any, Mapping, Protocol, runtime_checkable


@runtime_checkable
class Resolver(Protocol):
    """Maps an identifier to the name of the store that serves it."""

    async def resolve(self, user_id: int) -> str | None:
        """Return a Store Set name (or `None` when no store is assigned)."""

        ...


@runtime_checkable
class ProfileStore(Protocol):
    """One of the interchangeable providers of the profile partial record."""

    async def get(self, user_id: int) -> Mapping[str, Any]:
        ...


@runtime_checkable
class SecureStore(Protocol):
    """Provider of the secure (contact/address) partial record."""

    async def get(self, user_id: int) -> Mapping[str, Any]:
        ...
