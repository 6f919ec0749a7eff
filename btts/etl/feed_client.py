"""
Match feed fetcher.

Downloads the historical match CSV and hands it to the parser. This is the
only network boundary of the engine: a failure here raises before any
statistics are touched, so no partial state is produced.

Usage:
    result = fetch_match_feed()
    history = MatchHistory(result.matches)
"""

import logging
from typing import Optional

import httpx

from btts.config import get_settings
from btts.etl.csv_feed import FeedParseResult, parse_match_feed

logger = logging.getLogger(__name__)


class DataFetchFailure(Exception):
    """Raised when the match feed cannot be downloaded."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Failed to fetch match feed from {url}: {reason}")


def fetch_feed_text(
    url: Optional[str] = None,
    client: Optional[httpx.Client] = None,
    timeout: Optional[float] = None,
) -> str:
    """
    GET the raw feed text.

    Args:
        url: Feed URL (defaults to settings.FEED_URL).
        client: Optional httpx.Client (tests inject a MockTransport client).
        timeout: Request timeout in seconds.

    Raises:
        DataFetchFailure: on transport errors or non-2xx responses.
    """
    settings = get_settings()
    url = url or settings.FEED_URL
    timeout = timeout if timeout is not None else settings.FEED_TIMEOUT_SECONDS

    owns_client = client is None
    if owns_client:
        client = httpx.Client(timeout=timeout, follow_redirects=True)

    try:
        response = client.get(url)
        response.raise_for_status()
    except httpx.TimeoutException as e:
        raise DataFetchFailure(url, "timeout") from e
    except httpx.HTTPStatusError as e:
        raise DataFetchFailure(url, f"http_{e.response.status_code}") from e
    except httpx.HTTPError as e:
        raise DataFetchFailure(url, f"transport_error: {e}") from e
    finally:
        if owns_client:
            client.close()

    logger.info(f"Fetched match feed ({len(response.text)} chars) from {url}")
    return response.text


def fetch_match_feed(
    url: Optional[str] = None,
    client: Optional[httpx.Client] = None,
) -> FeedParseResult:
    """Fetch and parse the match feed."""
    return parse_match_feed(fetch_feed_text(url, client=client))
