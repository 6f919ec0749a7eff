"""
Prediction ledger: append-only log of predictions with user verification.

Entries are stored chronologically and shown newest first. Every mutation is
a whole-document cycle: read the ledger, apply one change, write it back.
Callers running on several threads must serialize verify() themselves.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from btts.config import get_settings
from btts.ledger.schema import decode_ledger, encode_ledger
from btts.ledger.store import KeyValueStore
from btts.models import MatchPrediction
from btts.telemetry.metrics import record_prediction, record_verification

logger = logging.getLogger(__name__)


class LedgerEntryNotFound(IndexError):
    """Raised when verifying an entry that does not exist."""

    def __init__(self, display_index: int, size: int):
        self.display_index = display_index
        self.size = size
        super().__init__(f"No ledger entry at display index {display_index} (ledger has {size})")


class PredictionAlreadyVerified(Exception):
    """Raised when an entry is verified a second time."""

    def __init__(self, prediction: MatchPrediction):
        self.prediction = prediction
        super().__init__(
            f"Prediction {prediction.home_team} vs {prediction.away_team} "
            f"({prediction.timestamp.isoformat()}) is already verified"
        )


@dataclass(frozen=True)
class AccuracySummary:
    """Accuracy over verified predictions."""

    total: int
    correct: int
    accuracy_percent: float


def storage_index_for(display_index: int, size: int) -> int:
    """
    Map a newest-first display index to the chronological storage index.

    storage = size - 1 - display. Raises LedgerEntryNotFound when out of range.
    """
    if not 0 <= display_index < size:
        raise LedgerEntryNotFound(display_index, size)
    return size - 1 - display_index


class PredictionLedger:
    """Persisted prediction log."""

    def __init__(self, store: KeyValueStore, key: Optional[str] = None):
        self.store = store
        self.key = key or get_settings().LEDGER_STORAGE_KEY

    def _read(self) -> list[MatchPrediction]:
        return decode_ledger(self.store.get(self.key))

    def _write(self, predictions: list[MatchPrediction]) -> None:
        self.store.set(self.key, encode_ledger(predictions))

    def entries(self) -> list[MatchPrediction]:
        """All entries, oldest first."""
        return self._read()

    def display_entries(self, limit: Optional[int] = None) -> list[MatchPrediction]:
        """Entries newest first, optionally only the most recent `limit`."""
        newest_first = list(reversed(self._read()))
        return newest_first[:limit] if limit is not None else newest_first

    def __len__(self) -> int:
        return len(self._read())

    def record(self, prediction: MatchPrediction) -> None:
        """Append a prediction and persist."""
        predictions = self._read()
        predictions.append(prediction)
        self._write(predictions)
        record_prediction(prediction.mode.value)
        logger.info(
            f"Recorded prediction {prediction.home_team} vs {prediction.away_team}: "
            f"{prediction.probability}% ({prediction.mode.value})"
        )

    def verify(self, display_index: int, outcome: bool) -> MatchPrediction:
        """
        Mark the entry shown at `display_index` as correct/incorrect.

        Args:
            display_index: Position in the newest-first view.
            outcome: True if the prediction turned out correct.

        Returns:
            The updated entry.

        Raises:
            LedgerEntryNotFound: no entry at that position.
            PredictionAlreadyVerified: entry was verified before.
            TypeError: outcome is not a bool.
        """
        if not isinstance(outcome, bool):
            raise TypeError(f"outcome must be a bool, got {type(outcome).__name__}")
        predictions = self._read()
        index = storage_index_for(display_index, len(predictions))
        target = predictions[index]
        if target.verified:
            raise PredictionAlreadyVerified(target)

        target.verified = True
        target.actual_result = outcome
        self._write(predictions)
        record_verification(outcome)
        logger.info(
            f"Verified {target.home_team} vs {target.away_team} "
            f"(storage #{index}) as {'correct' if outcome else 'incorrect'}"
        )
        return target

    def accuracy(self) -> AccuracySummary:
        """Correct / verified * 100; 0.0 when nothing is verified."""
        verified = [p for p in self._read() if p.verified]
        correct = sum(1 for p in verified if p.actual_result)
        total = len(verified)
        percent = correct / total * 100 if total else 0.0
        return AccuracySummary(total=total, correct=correct, accuracy_percent=percent)
