"""
Match feed parsing and row validation.

Feed format (one match per line, header first):
    home_team,away_team,home_score,away_score,both_teams_scored

The BTTS flag is the literal string "True" (surrounding whitespace ignored);
anything else is False. Rows that cannot become a valid MatchRecord are
skipped and reported, never turned into NaN scores.
"""

import csv
import io
import logging
from dataclasses import dataclass, field
from typing import Optional

from btts.models import MatchRecord
from btts.telemetry.metrics import record_feed_rows, record_row_rejected

logger = logging.getLogger(__name__)

BTTS_TRUE_TOKEN = "True"
EXPECTED_COLUMNS = 5


@dataclass
class RowRejection:
    """A feed row that was skipped."""

    line_number: int
    reason: str
    raw: str


@dataclass
class RowValidationResult:
    """Result of validating a single feed row."""

    record: Optional[MatchRecord]
    violations: list[str]
    warnings: list[str]

    @property
    def is_usable(self) -> bool:
        return self.record is not None and not self.violations


@dataclass
class FeedParseResult:
    """Parsed feed: accepted matches in feed order plus skipped rows."""

    matches: list[MatchRecord] = field(default_factory=list)
    rejected: list[RowRejection] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def skipped_count(self) -> int:
        return len(self.rejected)


def _parse_score(value: str) -> Optional[int]:
    try:
        return int(value.strip())
    except (ValueError, AttributeError):
        return None


def validate_row(fields: list[str]) -> RowValidationResult:
    """
    Validate one split feed row.

    Checks:
    1. At least home, away and both scores are present
    2. Team names are non-empty
    3. Scores are non-negative integers

    A missing BTTS column is tolerated: the flag is derived from the
    scoreline and a warning is returned.
    """
    violations = []
    warnings = []

    if len(fields) < EXPECTED_COLUMNS - 1:
        return RowValidationResult(None, ["missing_fields"], warnings)

    home_team = fields[0].strip()
    away_team = fields[1].strip()
    if not home_team or not away_team:
        return RowValidationResult(None, ["missing_team"], warnings)

    home_score = _parse_score(fields[2])
    away_score = _parse_score(fields[3])
    if home_score is None or away_score is None:
        return RowValidationResult(None, ["score_not_numeric"], warnings)
    if home_score < 0 or away_score < 0:
        violations.append("score_negative")
        return RowValidationResult(None, violations, warnings)

    if len(fields) >= EXPECTED_COLUMNS and fields[4].strip():
        both_scored = fields[4].strip() == BTTS_TRUE_TOKEN
    else:
        both_scored = home_score > 0 and away_score > 0
        warnings.append("btts_derived_from_score")

    record = MatchRecord(
        home_team=home_team,
        away_team=away_team,
        home_score=home_score,
        away_score=away_score,
        both_teams_scored=both_scored,
    )
    return RowValidationResult(record, violations, warnings)


def parse_match_feed(text: str) -> FeedParseResult:
    """
    Parse CSV feed text into match records.

    The first line is a header and is skipped, blank lines are skipped,
    malformed rows are skipped with a recorded reason.

    Args:
        text: Raw CSV text.

    Returns:
        FeedParseResult with matches in feed (chronological) order.
    """
    result = FeedParseResult()
    lines = text.splitlines()

    for line_number, line in enumerate(lines[1:], start=2):
        if not line.strip():
            continue

        fields = next(csv.reader(io.StringIO(line)), [])
        validation = validate_row(fields)

        if not validation.is_usable:
            reason = validation.violations[0]
            result.rejected.append(RowRejection(line_number, reason, line))
            record_row_rejected(reason)
            logger.warning(f"Skipping feed line {line_number}: {reason}")
            continue

        for warning in validation.warnings:
            result.warnings.append(f"line {line_number}: {warning}")
        result.matches.append(validation.record)

    record_feed_rows(len(result.matches), result.skipped_count)
    logger.info(
        f"Parsed feed: {len(result.matches)} matches, "
        f"{result.skipped_count} rows skipped"
    )
    return result
