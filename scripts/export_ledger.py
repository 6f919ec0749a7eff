#!/usr/bin/env python3
"""
Export the prediction ledger to CSV, or verify an entry.

Usage:
    python scripts/export_ledger.py --output /tmp/predictions.csv
    python scripts/export_ledger.py --verify 0 --correct
    python scripts/export_ledger.py --verify 2 --incorrect

--verify takes the newest-first position shown by --list.
"""

import argparse
import logging
import os
import sys
from pathlib import Path

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from btts.config import get_settings
from btts.ledger.export import export_ledger_csv
from btts.ledger.schema import LedgerSchemaError
from btts.ledger.service import LedgerEntryNotFound, PredictionAlreadyVerified, PredictionLedger
from btts.ledger.store import JsonFileKeyValueStore

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger("export_ledger")


def main():
    parser = argparse.ArgumentParser(description="Export or verify ledger predictions")
    parser.add_argument("--output", default="predictions.csv", help="CSV output path")
    parser.add_argument("--list", action="store_true", help="Print entries newest first")
    parser.add_argument("--verify", type=int, metavar="INDEX", help="Display index to verify")
    outcome = parser.add_mutually_exclusive_group()
    outcome.add_argument("--correct", action="store_true")
    outcome.add_argument("--incorrect", action="store_true")
    args = parser.parse_args()

    ledger = PredictionLedger(JsonFileKeyValueStore(get_settings().LEDGER_PATH))

    if args.verify is not None:
        if not (args.correct or args.incorrect):
            parser.error("--verify needs --correct or --incorrect")
        try:
            ledger.verify(args.verify, args.correct)
        except (LedgerEntryNotFound, PredictionAlreadyVerified, LedgerSchemaError) as e:
            logger.error(str(e))
            sys.exit(1)

    if args.list:
        for i, p in enumerate(ledger.display_entries()):
            print(f"{i:3d}. {p.timestamp:%Y-%m-%d} {p.home_team} vs {p.away_team} "
                  f"{p.probability}% [{p.status}]")
        return

    Path(args.output).write_text(export_ledger_csv(ledger.entries()), encoding="utf-8")
    summary = ledger.accuracy()
    logger.info(
        f"Exported {len(ledger)} predictions to {args.output} "
        f"(accuracy {summary.accuracy_percent:.1f}%, {summary.correct}/{summary.total})"
    )


if __name__ == "__main__":
    main()
