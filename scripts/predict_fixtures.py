#!/usr/bin/env python3
"""
Predict BTTS probabilities for a slate of fixtures.

Usage:
    python scripts/predict_fixtures.py "Arsenal:Chelsea" "Inter:Milan"
    python scripts/predict_fixtures.py --mode professional --record "Arsenal:Chelsea"
    python scripts/predict_fixtures.py --feed ./matches.csv --rankings 10

Fixtures are HOME:AWAY pairs. With --record every prediction is appended to
the ledger at BTTS_LEDGER_PATH.
"""

import argparse
import logging
import os
import sys
from pathlib import Path

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from btts.config import get_settings
from btts.engine import Fixture, PredictionEngine
from btts.etl.csv_feed import parse_match_feed
from btts.etl.feed_client import DataFetchFailure, fetch_match_feed
from btts.features.history import MatchHistory
from btts.ledger.service import PredictionLedger
from btts.ledger.store import JsonFileKeyValueStore
from btts.ml.weights import PredictionRequest, WeightConfig
from btts.models import PredictionMode

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger("predict_fixtures")


def parse_fixture(value: str) -> Fixture:
    home, sep, away = value.partition(":")
    if not sep or not home.strip() or not away.strip():
        raise argparse.ArgumentTypeError(f"expected HOME:AWAY, got '{value}'")
    return Fixture(home.strip(), away.strip())


def main():
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Predict BTTS for fixtures")
    parser.add_argument("fixtures", nargs="*", type=parse_fixture, help="HOME:AWAY pairs")
    parser.add_argument("--feed", help="Local CSV file instead of the remote feed")
    parser.add_argument("--mode", choices=[m.value for m in PredictionMode],
                        default=PredictionMode.STANDARD.value)
    parser.add_argument("--weight", action="append", default=[], metavar="NAME=VALUE",
                        help="Override a weight, e.g. --weight home_btts=40")
    parser.add_argument("--record", action="store_true", help="Append predictions to the ledger")
    parser.add_argument("--rankings", type=int, default=0, metavar="N",
                        help="Also print the top N of the leaderboard")
    args = parser.parse_args()

    try:
        overrides = dict(w.split("=", 1) for w in args.weight)
        weights = WeightConfig.from_dict({**WeightConfig().to_dict(), **overrides})
    except ValueError as e:
        logger.error(f"Invalid weights: {e}")
        sys.exit(2)
    mode = PredictionMode(args.mode)

    try:
        if args.feed:
            feed = parse_match_feed(Path(args.feed).read_text(encoding="utf-8"))
        else:
            feed = fetch_match_feed()
    except DataFetchFailure as e:
        logger.error(str(e))
        sys.exit(1)

    if feed.skipped_count:
        logger.warning(f"{feed.skipped_count} feed rows skipped")

    ledger = PredictionLedger(JsonFileKeyValueStore(settings.LEDGER_PATH))
    engine = PredictionEngine(MatchHistory(feed.matches), ledger)
    logger.info(f"Weights total: {weights.total:g}")

    for result in engine.predict_slate(args.fixtures, weights, mode):
        print(f"{result.home_team:>25} vs {result.away_team:<25} {result.probability:3d}%")

    if args.record:
        for fixture in args.fixtures[-settings.MAX_SLATE_FIXTURES:]:
            engine.record_prediction(
                PredictionRequest(fixture.home_team, fixture.away_team, weights, mode)
            )
        summary = ledger.accuracy()
        logger.info(
            f"Ledger: {len(ledger)} predictions, accuracy {summary.accuracy_percent:.1f}% "
            f"({summary.correct}/{summary.total} verified)"
        )

    if args.rankings:
        print()
        for pos, row in enumerate(engine.rankings()[:args.rankings], start=1):
            print(f"{pos:3d}. {row.team:<25} score={row.score:6.2f} "
                  f"btts={row.btts_rate:5.1f}% matches={row.matches}")


if __name__ == "__main__":
    main()
