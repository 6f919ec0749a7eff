"""
Engine telemetry.

Provides Prometheus counters for feed ingestion, predictions,
verifications and statistics recomputation.
"""

from btts.telemetry.metrics import (
    btts_feed_rows_total,
    btts_feed_rows_rejected_total,
    btts_predictions_total,
    btts_verifications_total,
    btts_stats_recomputations_total,
    record_feed_rows,
    record_row_rejected,
    record_prediction,
    record_verification,
    record_recomputation,
    get_metrics_text,
)

__all__ = [
    "btts_feed_rows_total",
    "btts_feed_rows_rejected_total",
    "btts_predictions_total",
    "btts_verifications_total",
    "btts_stats_recomputations_total",
    "record_feed_rows",
    "record_row_rejected",
    "record_prediction",
    "record_verification",
    "record_recomputation",
    "get_metrics_text",
]
