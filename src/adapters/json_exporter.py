"""JSON export of aggregation outcomes.

Why JSON:
- Interoperability with other tools and pipelines.
- Keeps a stable, sorted payload that diffs cleanly between runs.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Sequence

from core.domain.models import FetchOutcome


def outcomes_to_payload(outcomes: Sequence[FetchOutcome]) -> list[dict[str, Any]]:
    """Flatten outcomes into JSON-ready dicts (secure fields included)."""

    payload: list[dict[str, Any]] = []
    for outcome in outcomes:
        item: dict[str, Any] = {"user_id": outcome.user_id, "ok": outcome.ok}
        if outcome.record is not None:
            item["record"] = outcome.record.model_dump(mode="json")
        else:
            item["error_kind"] = outcome.error_kind.value if outcome.error_kind else None
            item["error"] = outcome.error
        payload.append(item)
    return payload


def dumps_outcomes(outcomes: Sequence[FetchOutcome]) -> str:
    return json.dumps(outcomes_to_payload(outcomes), ensure_ascii=False, indent=2, sort_keys=True, default=str)


def export_outcomes_json(*, outcomes: Sequence[FetchOutcome], output_path: Path) -> Path:
    """Write outcomes to UTF-8 JSON with a stable layout."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(dumps_outcomes(outcomes) + "\n", encoding="utf-8")
    return output_path
