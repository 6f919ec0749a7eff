"""Append-only match history."""

import hashlib
import logging
from typing import Iterable, Iterator

from btts.models import MatchRecord

logger = logging.getLogger(__name__)


def compute_history_key(matches: Iterable[MatchRecord]) -> str:
    """
    Compute a deterministic content key for a match sequence.

    Formula: SHA256(home|away|hs|as|btts per line, in feed order)[:32]
    Same matches in the same order always produce the same key.
    """
    digest = hashlib.sha256()
    for m in matches:
        raw = f"{m.home_team}|{m.away_team}|{m.home_score}|{m.away_score}|{int(m.both_teams_scored)}\n"
        digest.update(raw.encode())
    return digest.hexdigest()[:32]


class MatchHistory:
    """
    Chronological, append-only list of matches for a session.

    Feed order is preserved exactly; "last N" windows everywhere rely on it.
    `version` increases on every append so derived views know when to
    recompute.
    """

    def __init__(self, matches: Iterable[MatchRecord] = ()):
        self._matches: list[MatchRecord] = list(matches)
        self._version = 0

    @property
    def version(self) -> int:
        return self._version

    @property
    def matches(self) -> tuple[MatchRecord, ...]:
        return tuple(self._matches)

    def extend(self, matches: Iterable[MatchRecord]) -> int:
        """Append matches in order. Returns the number appended."""
        new = list(matches)
        if not new:
            return 0
        self._matches.extend(new)
        self._version += 1
        logger.debug(f"Match history v{self._version}: +{len(new)} ({len(self._matches)} total)")
        return len(new)

    def append(self, match: MatchRecord) -> None:
        self.extend([match])

    def content_key(self) -> str:
        return compute_history_key(self._matches)

    def __len__(self) -> int:
        return len(self._matches)

    def __iter__(self) -> Iterator[MatchRecord]:
        return iter(self._matches)
