"""Prediction ledger and accuracy tracking."""

from btts.ledger.export import export_ledger_csv
from btts.ledger.schema import LedgerSchemaError
from btts.ledger.service import (
    AccuracySummary,
    LedgerEntryNotFound,
    PredictionAlreadyVerified,
    PredictionLedger,
)
from btts.ledger.store import InMemoryKeyValueStore, JsonFileKeyValueStore, KeyValueStore

__all__ = [
    "export_ledger_csv",
    "LedgerSchemaError",
    "AccuracySummary",
    "LedgerEntryNotFound",
    "PredictionAlreadyVerified",
    "PredictionLedger",
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "KeyValueStore",
]
