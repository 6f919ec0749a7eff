"""
Prometheus metrics for the BTTS engine.

Design principles:
- Low cardinality (controlled labels)
- Best-effort (never block main flow)

ALLOWED LABELS (bounded sets):
- status:   "accepted", "rejected"
- reason:   "missing_fields", "missing_team", "score_not_numeric", "score_negative"
- mode:     "standard", "professional"
- outcome:  "correct", "incorrect"
- view:     "team_stats", "rankings"

FORBIDDEN AS LABELS: team names, fixture pairs, timestamps, raw CSV rows.
Use logs for anything that identifies a specific team or match.
"""

import logging

from prometheus_client import (
    Counter,
    generate_latest,
    CONTENT_TYPE_LATEST,
    REGISTRY,
)

from btts.config import get_settings

logger = logging.getLogger(__name__)

# =============================================================================
# FEED INGESTION METRICS
# =============================================================================

btts_feed_rows_total = Counter(
    "btts_feed_rows_total",
    "Match feed rows processed",
    ["status"],
)

btts_feed_rows_rejected_total = Counter(
    "btts_feed_rows_rejected_total",
    "Match feed rows skipped during parsing",
    ["reason"],
)

# =============================================================================
# PREDICTION METRICS
# =============================================================================

btts_predictions_total = Counter(
    "btts_predictions_total",
    "Predictions recorded in the ledger",
    ["mode"],
)

btts_verifications_total = Counter(
    "btts_verifications_total",
    "Ledger entries verified by the user",
    ["outcome"],
)

btts_stats_recomputations_total = Counter(
    "btts_stats_recomputations_total",
    "Full recomputations of derived statistics",
    ["view"],
)


def _enabled() -> bool:
    return get_settings().METRICS_ENABLED


def record_feed_rows(accepted: int, rejected: int) -> None:
    """Record accepted/rejected row counts for one parsed feed."""
    if not _enabled():
        return
    try:
        btts_feed_rows_total.labels(status="accepted").inc(accepted)
        btts_feed_rows_total.labels(status="rejected").inc(rejected)
    except Exception as e:
        logger.warning(f"Failed to record feed rows metric: {e}")


def record_row_rejected(reason: str) -> None:
    """Record a skipped feed row."""
    if not _enabled():
        return
    try:
        btts_feed_rows_rejected_total.labels(reason=reason).inc()
    except Exception as e:
        logger.warning(f"Failed to record row rejection metric: {e}")


def record_prediction(mode: str) -> None:
    """Record a prediction appended to the ledger."""
    if not _enabled():
        return
    try:
        btts_predictions_total.labels(mode=mode).inc()
    except Exception as e:
        logger.warning(f"Failed to record prediction metric: {e}")


def record_verification(correct: bool) -> None:
    """Record a user verification."""
    if not _enabled():
        return
    try:
        btts_verifications_total.labels(
            outcome="correct" if correct else "incorrect"
        ).inc()
    except Exception as e:
        logger.warning(f"Failed to record verification metric: {e}")


def record_recomputation(view: str) -> None:
    """Record a full recomputation of a derived view."""
    if not _enabled():
        return
    try:
        btts_stats_recomputations_total.labels(view=view).inc()
    except Exception as e:
        logger.warning(f"Failed to record recomputation metric: {e}")


def get_metrics_text() -> tuple[str, str]:
    """
    Generate Prometheus metrics text output.

    Returns:
        Tuple of (content, content_type)
    """
    return generate_latest(REGISTRY).decode("utf-8"), CONTENT_TYPE_LATEST
