"""Match feed ingestion."""

from btts.etl.csv_feed import FeedParseResult, RowRejection, parse_match_feed
from btts.etl.feed_client import DataFetchFailure, fetch_match_feed

__all__ = [
    "FeedParseResult",
    "RowRejection",
    "parse_match_feed",
    "DataFetchFailure",
    "fetch_match_feed",
]
