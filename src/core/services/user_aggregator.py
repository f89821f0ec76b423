"""User aggregation orchestration.

This module owns the whole request flow: identifier validation, store
resolution, the parallel fetch of both partial records, the merge and the
translation of collaborator failures into the `core.domain.errors` taxonomy.
Entry-points (CLI, batch jobs, tests) call `UserAggregator.fetch` and keep
side-effects (printing, timing) out of the core logic.
"""

from __future__ import annotations

import asyncio
import logging
import math
import numbers
from decimal import Decimal
from typing import Any, Iterable, Mapping

from pydantic import BaseModel

from core.config import AppSettings
from core.domain.errors import (
    AggregationError,
    BackingStoreError,
    DataShapeError,
    ResolutionError,
    SourceError,
    ValidationError,
)
from core.domain.models import FetchOutcome, ProfileRecord, UserRecord
from core.interfaces.sources import ProfileStore, Resolver, SecureStore
from core.registry import StoreSet

logger = logging.getLogger(__name__)


def validate_user_id(value: Any, *, minimum: int = 1, maximum: int = 10) -> int:
    """Return `value` as an `int` or raise `ValidationError`.

    Accepts integers and integral finite reals or decimals (`5.0` -> `5`). Booleans,
    strings, containers, `None`, fractional and non-finite numbers are
    rejected, as is anything outside `[minimum, maximum]`.
    """

    expected = f"Please provide a whole number between {minimum} and {maximum}."
    type_name = type(value).__name__

    if isinstance(value, bool) or not isinstance(value, (numbers.Real, Decimal)):
        raise ValidationError(f"Id {value!r} (a {type_name}) is not a number. {expected}", value=value)

    if isinstance(value, numbers.Integral):
        normalized = int(value)
    elif isinstance(value, Decimal):
        if not value.is_finite() or value != value.to_integral_value():
            raise ValidationError(
                f"Id {value!r} (a {type_name}) is not a whole number. {expected}", value=value
            )
        normalized = int(value)
    else:
        as_float = float(value)
        if not math.isfinite(as_float) or not as_float.is_integer():
            raise ValidationError(
                f"Id {value!r} (a {type_name}) is not a whole number. {expected}", value=value
            )
        normalized = int(as_float)

    if normalized < minimum or normalized > maximum:
        raise ValidationError(
            f"Id {value!r} (a {type_name}) is out of range of {minimum}-{maximum}. {expected}",
            value=value,
        )
    return normalized


def merge_records(
    user_id: int,
    profile: Mapping[str, Any],
    secure: Mapping[str, Any],
) -> UserRecord:
    """Build the composite record `{id, **secure, username, website, company}`.

    Later keys win: a secure field named `id` replaces the identifier and the
    profile fields replace secure fields with the same name.
    """

    merged: dict[str, Any] = {"id": user_id}
    merged.update(secure)
    merged.update(ProfileRecord.model_validate(dict(profile)).model_dump())
    return UserRecord.model_validate(merged)


def _as_record(value: Any, *, label: str, user_id: int) -> Mapping[str, Any]:
    if value is None:
        raise DataShapeError(f"Null pointer reference when retrieving {label} data for ID {user_id}")
    if isinstance(value, BaseModel):
        value = value.model_dump()
    if not isinstance(value, Mapping):
        raise DataShapeError(
            f"{label.capitalize()} data for ID {user_id} is not an object (got {type(value).__name__})"
        )
    if not all(isinstance(key, str) for key in value):
        raise DataShapeError(f"{label.capitalize()} data for ID {user_id} has non-string field names")
    return value


class UserAggregator:
    """Builds a `UserRecord` from the resolver, the Store Set and the secure store."""

    def __init__(
        self,
        *,
        resolver: Resolver,
        stores: Mapping[str, ProfileStore],
        secure_store: SecureStore,
        settings: AppSettings | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._resolver = resolver
        self._stores = stores if isinstance(stores, StoreSet) else StoreSet(stores)
        self._secure_store = secure_store

    @property
    def stores(self) -> StoreSet:
        return self._stores

    def is_store_failure(self, exc: BaseException) -> bool:
        """Tell whether a collaborator error counts as a backing store failure.

        A `SourceError` tagged with a Store Set name always counts. Any error
        whose message contains the configured marker counts as well.
        """

        if isinstance(exc, SourceError) and exc.source in self._stores:
            return True
        return self._settings.store_error_marker in str(exc)

    def _tagged_store(self, exc: BaseException) -> str | None:
        if isinstance(exc, SourceError) and exc.source in self._stores:
            return exc.source
        return None

    async def fetch(self, user_id: Any) -> UserRecord:
        """Validate, resolve, fetch both partial records in parallel and merge."""

        valid_id = validate_user_id(
            user_id,
            minimum=self._settings.id_min,
            maximum=self._settings.id_max,
        )

        store_name = await self._resolve(valid_id)
        profile, secure = await self._fetch_partials(store_name, valid_id)

        profile = _as_record(profile, label="profile", user_id=valid_id)
        secure = _as_record(secure, label="secure", user_id=valid_id)

        record = merge_records(valid_id, profile, secure)
        logger.debug("Aggregated user %s from store %s", valid_id, store_name)
        return record

    async def fetch_many(self, user_ids: Iterable[Any]) -> list[FetchOutcome]:
        """Run `fetch` concurrently for every id and collect one outcome per id."""

        async def safe_fetch(user_id: Any) -> FetchOutcome:
            try:
                record = await self.fetch(user_id)
            except AggregationError as exc:
                return FetchOutcome(user_id=user_id, error_kind=exc.kind, error=exc.message)
            except Exception as exc:
                return FetchOutcome(user_id=user_id, error=str(exc))
            return FetchOutcome(user_id=user_id, record=record)

        return list(await asyncio.gather(*(safe_fetch(user_id) for user_id in user_ids)))

    async def _resolve(self, user_id: int) -> str:
        try:
            token = await self._resolver.resolve(user_id)
        except AggregationError:
            raise
        except Exception as exc:
            logger.warning("Resolver failed for ID %s: %s", user_id, exc)
            if self.is_store_failure(exc):
                raise BackingStoreError(str(exc), store=self._tagged_store(exc)) from exc
            raise ResolutionError(f"Resolver failed for ID {user_id}: {exc}") from exc

        if token is None or token == "":
            raise ResolutionError(f"Database identifier for ID {user_id} is null", token=token)
        if token not in self._stores:
            raise ResolutionError(
                f"invalid store identifier {token!r} for ID {user_id} "
                f"(known stores: {', '.join(self._stores.names)})",
                token=token,
            )
        logger.debug("Resolved ID %s to store %s", user_id, token)
        return token

    async def _fetch_partials(self, store_name: str, user_id: int) -> tuple[Any, Any]:
        profile_task = asyncio.create_task(
            self._call_store(store_name, user_id), name=f"profile:{store_name}:{user_id}"
        )
        secure_task = asyncio.create_task(self._call_secure(user_id), name=f"secure:{user_id}")
        tasks = (profile_task, secure_task)

        try:
            profile, secure = await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                if not task.done():
                    task.cancel()
            # Drain so the sibling's outcome is retrieved before surfacing.
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
        return profile, secure

    async def _call_store(self, store_name: str, user_id: int) -> Any:
        try:
            return await self._stores[store_name].get(user_id)
        except AggregationError:
            raise
        except Exception as exc:
            logger.warning("Store %s failed for ID %s: %s", store_name, user_id, exc)
            if self.is_store_failure(exc):
                raise BackingStoreError(str(exc), store=store_name) from exc
            raise

    async def _call_secure(self, user_id: int) -> Any:
        try:
            return await self._secure_store.get(user_id)
        except AggregationError:
            raise
        except Exception as exc:
            logger.warning("Secure store failed for ID %s: %s", user_id, exc)
            if self.is_store_failure(exc):
                raise BackingStoreError(str(exc), store=self._tagged_store(exc)) from exc
            raise
