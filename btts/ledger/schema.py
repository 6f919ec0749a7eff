"""
Ledger document schema and migrations.

Current document (schema 2):
    {"schema_version": 2, "predictions": [<MatchPrediction.to_dict()>, ...]}

Schema 1 is the legacy layout: a bare JSON array of camelCase objects
(homeTeam, awayTeam, actualResult, h2hStats, formTrend, ...). Timestamps were
either ISO strings or epoch milliseconds.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Optional

from btts.models import MatchPrediction

logger = logging.getLogger(__name__)

CURRENT_SCHEMA_VERSION = 2

_V1_KEY_MAP = {
    "homeTeam": "home_team",
    "awayTeam": "away_team",
    "probability": "probability",
    "timestamp": "timestamp",
    "verified": "verified",
    "actualResult": "actual_result",
    "isDerby": "is_derby",
    "isSeasonEnd": "is_season_end",
    "formTrend": "form_trend",
}

_V1_H2H_KEY_MAP = {
    "totalMatches": "total_matches",
    "homeWins": "home_wins",
    "awayWins": "away_wins",
    "draws": "draws",
    "recentForm": "recent_form",
}


class LedgerSchemaError(Exception):
    """Raised when a stored ledger cannot be read."""

    def __init__(self, version: Any, reason: str):
        self.version = version
        super().__init__(f"Unreadable ledger (schema {version}): {reason}")


def _v1_timestamp(value: Any) -> str:
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value / 1000, tz=timezone.utc).isoformat()
    # JS Date.toISOString() ends in "Z"
    return str(value).replace("Z", "+00:00")


def migrate_v1_entry(entry: dict) -> dict:
    """Convert one legacy camelCase entry to the schema 2 layout."""
    migrated = {new: entry[old] for old, new in _V1_KEY_MAP.items() if old in entry}
    migrated["timestamp"] = _v1_timestamp(entry.get("timestamp", 0))
    h2h = entry.get("h2hStats")
    if h2h:
        migrated["h2h_stats"] = {
            new: h2h[old] for old, new in _V1_H2H_KEY_MAP.items() if old in h2h
        }
    migrated.setdefault("verified", False)
    return migrated


def decode_ledger(raw: Optional[str]) -> list[MatchPrediction]:
    """Parse a stored ledger document, migrating older schemas."""
    if not raw:
        return []
    try:
        document = json.loads(raw)
    except json.JSONDecodeError as e:
        raise LedgerSchemaError("unknown", f"invalid JSON: {e}") from e

    if isinstance(document, list):
        logger.info(f"Migrating legacy ledger with {len(document)} entries to schema {CURRENT_SCHEMA_VERSION}")
        entries = [migrate_v1_entry(e) for e in document]
    elif isinstance(document, dict):
        version = document.get("schema_version")
        if version != CURRENT_SCHEMA_VERSION:
            raise LedgerSchemaError(version, f"expected {CURRENT_SCHEMA_VERSION}")
        entries = document.get("predictions", [])
    else:
        raise LedgerSchemaError("unknown", f"unexpected top-level {type(document).__name__}")

    try:
        return [MatchPrediction.from_dict(e) for e in entries]
    except (KeyError, TypeError, ValueError) as e:
        raise LedgerSchemaError(CURRENT_SCHEMA_VERSION, f"bad entry: {e}") from e


def encode_ledger(predictions: list[MatchPrediction]) -> str:
    """Serialize the whole ledger as the current schema."""
    return json.dumps({
        "schema_version": CURRENT_SCHEMA_VERSION,
        "predictions": [p.to_dict() for p in predictions],
    })
