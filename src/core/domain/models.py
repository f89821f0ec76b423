"""Domain models (Pydantic v2).

Why Pydantic in the domain:
- Strict validation and self-contained documentation (Field) without coupling
  the Core to I/O libraries.
- Makes normalizing partial records from heterogeneous sources explicit.

Note:
- These models describe *what* the data is, not *how* it is fetched.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from core.domain.errors import ErrorKind

PROFILE_FIELDS: tuple[str, ...] = ("username", "website", "company")


class ProfileRecord(BaseModel):
    """Partial record served by a member of the Store Set.

    Only the three profile fields are part of the contract; anything else a
    store returns is dropped.
    """

    model_config = ConfigDict(extra="ignore")

    username: Any = Field(default=None, description="Public handle of the user.")
    website: Any = Field(default=None, description="Personal or company website.")
    company: Any = Field(default=None, description="Company the user belongs to.")


class UserRecord(BaseModel):
    """Composite result: identifier + secure fields + profile fields.

    Secure fields are not declared; they travel as extra attributes so any
    field the secure store adds shows up untouched in `model_dump()`.
    """

    model_config = ConfigDict(extra="allow")

    id: Any = Field(..., description="Identifier (may be overridden by a secure field).")
    username: Any = Field(default=None, description="From the profile store.")
    website: Any = Field(default=None, description="From the profile store.")
    company: Any = Field(default=None, description="From the profile store.")

    def secure_fields(self) -> dict[str, Any]:
        """Fields contributed by the secure store."""

        return dict(self.model_extra or {})


class FetchOutcome(BaseModel):
    """Result of one `fetch` inside a batch: either a record or an error."""

    user_id: Any = Field(..., description="Identifier as supplied by the caller.")
    record: UserRecord | None = Field(default=None)
    error_kind: ErrorKind | None = Field(default=None)
    error: str | None = Field(default=None, description="Error message when the fetch failed.")

    @property
    def ok(self) -> bool:
        return self.record is not None
