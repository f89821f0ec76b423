"""Error taxonomy of the aggregator.

Every error raised by the Core carries a structured `kind` tag so callers can
branch on it instead of parsing messages. Messages stay human readable and
keep the wording existing consumers already match on.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Failure categories surfaced by `UserAggregator.fetch`."""

    VALIDATION = "validation"
    RESOLUTION = "resolution"
    BACKING_STORE = "backing_store"
    DATA_SHAPE = "data_shape"


class AggregationError(Exception):
    """Base class for every failure classified by the aggregator."""

    kind: ErrorKind

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(AggregationError):
    """The identifier is not a whole number inside the accepted range."""

    kind = ErrorKind.VALIDATION

    def __init__(self, message: str, *, value: object = None) -> None:
        super().__init__(message)
        self.value = value


class ResolutionError(AggregationError):
    """The resolver failed or returned a token outside the Store Set."""

    kind = ErrorKind.RESOLUTION

    def __init__(self, message: str, *, token: object = None) -> None:
        super().__init__(message)
        self.token = token


class BackingStoreError(AggregationError):
    """A backing store failed; `store` names it when known."""

    kind = ErrorKind.BACKING_STORE

    def __init__(self, original: str, *, store: str | None = None) -> None:
        super().__init__(f"Database {original} failed")
        self.original = original
        self.store = store


class DataShapeError(AggregationError):
    """A partial record is missing or is not a structured record."""

    kind = ErrorKind.DATA_SHAPE


class SourceError(Exception):
    """Error raised by a collaborator that knows which source it came from.

    `source` is the collaborator name (`"db2"`, `"vault"`, `"central"`). The
    aggregator uses it to classify the failure without looking at the text.
    """

    def __init__(self, source: str, message: str | None = None) -> None:
        super().__init__(message or source)
        self.source = source
