"""CSV export of the prediction ledger."""

import csv
import io
from typing import Iterable

from btts.models import MatchPrediction

EXPORT_COLUMNS = ["Date", "HomeTeam", "AwayTeam", "Probability%", "Status"]


def export_ledger_csv(predictions: Iterable[MatchPrediction]) -> str:
    """One row per entry, header first, in the order given."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(EXPORT_COLUMNS)
    for p in predictions:
        writer.writerow([
            p.timestamp.date().isoformat(),
            p.home_team,
            p.away_team,
            p.probability,
            p.status,
        ])
    return buffer.getvalue()
