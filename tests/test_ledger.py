"""
Tests for the prediction ledger.

Validates:
1. Accuracy over verified entries (0 when none verified, never NaN)
2. Newest-first display index maps to storage index N-1-i
3. Out-of-range and repeated verification fail loudly
4. Versioned persistence, legacy migration and CSV export
"""

import json
from datetime import datetime, timezone

import pytest

from btts.ledger.export import export_ledger_csv
from btts.ledger.schema import CURRENT_SCHEMA_VERSION, LedgerSchemaError
from btts.ledger.service import (
    LedgerEntryNotFound,
    PredictionAlreadyVerified,
    PredictionLedger,
    storage_index_for,
)
from btts.ledger.store import InMemoryKeyValueStore, JsonFileKeyValueStore
from btts.models import HeadToHeadStats, MatchPrediction, PredictionMode

KEY = "btts_predictions"


def _prediction(home="A", away="B", probability=50, day=1, **kwargs):
    return MatchPrediction(
        home_team=home,
        away_team=away,
        probability=probability,
        timestamp=datetime(2024, 3, day, 12, 0, tzinfo=timezone.utc),
        **kwargs,
    )


@pytest.fixture
def ledger():
    return PredictionLedger(InMemoryKeyValueStore(), key=KEY)


class TestAccuracy:

    def test_one_correct_one_incorrect(self, ledger):
        ledger.record(_prediction("A", "B"))
        ledger.record(_prediction("C", "D"))
        ledger.verify(0, True)
        ledger.verify(1, False)
        summary = ledger.accuracy()
        assert summary.total == 2
        assert summary.correct == 1
        assert summary.accuracy_percent == 50

    def test_nothing_verified_is_zero(self, ledger):
        ledger.record(_prediction())
        summary = ledger.accuracy()
        assert summary.total == 0
        assert summary.correct == 0
        assert summary.accuracy_percent == 0.0

    def test_empty_ledger(self, ledger):
        assert ledger.accuracy().accuracy_percent == 0.0

    def test_unverified_entries_ignored(self, ledger):
        for day in (1, 2, 3):
            ledger.record(_prediction(day=day))
        ledger.verify(0, True)
        assert ledger.accuracy().total == 1
        assert ledger.accuracy().accuracy_percent == 100


class TestVerifyIndexMapping:

    def test_mapping_formula(self):
        assert storage_index_for(0, 3) == 2
        assert storage_index_for(2, 3) == 0

    def test_display_zero_is_newest(self, ledger):
        for i, team in enumerate(["First", "Second", "Third"], start=1):
            ledger.record(_prediction(home=team, day=i))

        updated = ledger.verify(0, True)

        assert updated.home_team == "Third"
        stored = ledger.entries()
        assert [p.verified for p in stored] == [False, False, True]

    def test_last_display_index_is_oldest(self, ledger):
        for i, team in enumerate(["First", "Second", "Third"], start=1):
            ledger.record(_prediction(home=team, day=i))
        ledger.verify(2, False)
        stored = ledger.entries()
        assert stored[0].verified is True
        assert stored[0].actual_result is False
        assert not stored[1].verified and not stored[2].verified

    @pytest.mark.parametrize("index", [3, -1, 10])
    def test_out_of_range_raises(self, ledger, index):
        for day in (1, 2, 3):
            ledger.record(_prediction(day=day))
        with pytest.raises(LedgerEntryNotFound):
            ledger.verify(index, True)

    def test_empty_ledger_raises(self, ledger):
        with pytest.raises(IndexError):
            ledger.verify(0, True)

    def test_second_verification_rejected(self, ledger):
        ledger.record(_prediction())
        ledger.verify(0, True)
        with pytest.raises(PredictionAlreadyVerified):
            ledger.verify(0, False)
        assert ledger.entries()[0].actual_result is True

    @pytest.mark.parametrize("outcome", ["false", 1, None])
    def test_non_bool_outcome_rejected(self, ledger, outcome):
        ledger.record(_prediction())
        with pytest.raises(TypeError):
            ledger.verify(0, outcome)
        assert ledger.entries()[0].verified is False
        assert ledger.entries()[0].status == "Unverified"

    def test_display_entries(self, ledger):
        for day in (1, 2, 3):
            ledger.record(_prediction(day=day))
        days = [p.timestamp.day for p in ledger.display_entries(limit=2)]
        assert days == [3, 2]


class TestPersistence:

    def test_versioned_document(self, ledger):
        ledger.record(_prediction())
        document = json.loads(ledger.store.get(KEY))
        assert document["schema_version"] == CURRENT_SCHEMA_VERSION
        assert len(document["predictions"]) == 1

    def test_snapshot_round_trip(self, ledger):
        h2h = HeadToHeadStats(12, 5, 4, 3, ("W", "D"), 6)
        ledger.record(_prediction(
            is_derby=True, is_season_end=False, h2h_stats=h2h,
            form_trend={"home": [1, 0], "away": [1]},
            mode=PredictionMode.PROFESSIONAL,
        ))
        stored = ledger.entries()[0]
        assert stored.h2h_stats == h2h
        assert stored.form_trend == {"home": [1, 0], "away": [1]}
        assert stored.mode is PredictionMode.PROFESSIONAL
        assert stored.is_derby is True

    def test_file_store_survives_new_instance(self, tmp_path):
        path = tmp_path / "nested" / "ledger.json"
        PredictionLedger(JsonFileKeyValueStore(path), key=KEY).record(_prediction())
        reopened = PredictionLedger(JsonFileKeyValueStore(path), key=KEY)
        assert len(reopened) == 1
        reopened.verify(0, True)
        assert PredictionLedger(JsonFileKeyValueStore(path), key=KEY).accuracy().correct == 1

    def test_legacy_array_migrated(self):
        legacy = [
            {
                "homeTeam": "Arsenal", "awayTeam": "Chelsea", "probability": 64,
                "timestamp": "2024-05-02T18:00:00.000Z", "verified": True,
                "actualResult": True, "isDerby": True,
                "h2hStats": {"totalMatches": 14, "homeWins": 6, "awayWins": 5,
                             "draws": 3, "recentForm": ["W", "L"]},
                "formTrend": {"home": [1, 1], "away": [0, 1]},
            },
            {"homeTeam": "Inter", "awayTeam": "Milan", "probability": 55,
             "timestamp": 1714672800000},
        ]
        store = InMemoryKeyValueStore({KEY: json.dumps(legacy)})
        entries = PredictionLedger(store, key=KEY).entries()

        assert entries[0].h2h_stats.total_matches == 14
        assert entries[0].actual_result is True
        assert entries[0].timestamp.year == 2024
        assert entries[1].verified is False
        assert entries[1].timestamp.tzinfo is not None

    def test_migrated_ledger_rewritten_on_next_write(self):
        legacy = [{"homeTeam": "A", "awayTeam": "B", "probability": 10,
                   "timestamp": "2024-01-01T00:00:00Z"}]
        store = InMemoryKeyValueStore({KEY: json.dumps(legacy)})
        ledger = PredictionLedger(store, key=KEY)
        ledger.verify(0, False)
        assert json.loads(store.get(KEY))["schema_version"] == CURRENT_SCHEMA_VERSION

    def test_unknown_version_rejected(self):
        store = InMemoryKeyValueStore({KEY: json.dumps({"schema_version": 99, "predictions": []})})
        with pytest.raises(LedgerSchemaError):
            PredictionLedger(store, key=KEY).entries()

    def test_corrupt_json_rejected(self):
        store = InMemoryKeyValueStore({KEY: "{not json"})
        with pytest.raises(LedgerSchemaError):
            PredictionLedger(store, key=KEY).entries()

    def test_corrupt_file_rejected(self, tmp_path):
        path = tmp_path / "ledger.json"
        path.write_text("{not json", encoding="utf-8")
        ledger = PredictionLedger(JsonFileKeyValueStore(path), key=KEY)
        with pytest.raises(LedgerSchemaError) as exc:
            ledger.entries()
        assert isinstance(exc.value.__cause__, json.JSONDecodeError)
        with pytest.raises(LedgerSchemaError):
            ledger.record(_prediction())
        assert path.read_text(encoding="utf-8") == "{not json"

    def test_non_object_file_rejected(self, tmp_path):
        path = tmp_path / "ledger.json"
        path.write_text("[]", encoding="utf-8")
        with pytest.raises(LedgerSchemaError):
            PredictionLedger(JsonFileKeyValueStore(path), key=KEY).entries()

    def test_bad_entry_keeps_cause(self):
        document = {"schema_version": CURRENT_SCHEMA_VERSION, "predictions": [{"home_team": "A"}]}
        store = InMemoryKeyValueStore({KEY: json.dumps(document)})
        with pytest.raises(LedgerSchemaError) as exc:
            PredictionLedger(store, key=KEY).entries()
        assert isinstance(exc.value.__cause__, KeyError)


class TestCsvExport:

    def test_header_and_statuses(self, ledger):
        ledger.record(_prediction("Arsenal", "Chelsea", 64, day=1))
        ledger.record(_prediction("Inter", "Milan", 41, day=2))
        ledger.record(_prediction("PSG", "Lyon", 77, day=3))
        ledger.verify(2, True)   # Arsenal
        ledger.verify(1, False)  # Inter

        lines = export_ledger_csv(ledger.entries()).splitlines()

        assert lines[0] == "Date,HomeTeam,AwayTeam,Probability%,Status"
        assert lines[1] == "2024-03-01,Arsenal,Chelsea,64,Correct"
        assert lines[2] == "2024-03-02,Inter,Milan,41,Incorrect"
        assert lines[3] == "2024-03-03,PSG,Lyon,77,Unverified"

    def test_empty_ledger_header_only(self):
        assert export_ledger_csv([]) == "Date,HomeTeam,AwayTeam,Probability%,Status\n"
