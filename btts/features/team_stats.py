"""Per-team statistics derived from the match history."""

import logging
from typing import Iterable, Optional, Sequence

from btts.config import get_settings
from btts.models import MatchRecord, TeamStats
from btts.utils.rounding import round_half_up

logger = logging.getLogger(__name__)


class _TeamAccumulator:
    """Mutable counters for one team during a single aggregation pass."""

    __slots__ = (
        "total", "home", "away", "btts",
        "home_scored", "home_conceded", "away_scored", "away_conceded",
        "btts_sequence", "win_sequence",
    )

    def __init__(self):
        self.total = 0
        self.home = 0
        self.away = 0
        self.btts = 0
        self.home_scored = 0
        self.home_conceded = 0
        self.away_scored = 0
        self.away_conceded = 0
        self.btts_sequence: list[bool] = []
        self.win_sequence: list[bool] = []

    def add_home(self, match: MatchRecord) -> None:
        self.total += 1
        self.home += 1
        self.home_scored += match.home_score
        self.home_conceded += match.away_score
        self._add_common(match, won=match.home_score > match.away_score)

    def add_away(self, match: MatchRecord) -> None:
        self.total += 1
        self.away += 1
        self.away_scored += match.away_score
        self.away_conceded += match.home_score
        self._add_common(match, won=match.away_score > match.home_score)

    def _add_common(self, match: MatchRecord, won: bool) -> None:
        if match.both_teams_scored:
            self.btts += 1
        self.btts_sequence.append(match.both_teams_scored)
        self.win_sequence.append(won)

    def finalize(self, form_window: int, wins_window: int, trend_window: int) -> TeamStats:
        last_five = tuple(_tail(self.btts_sequence, form_window))
        return TeamStats(
            total_matches=self.total,
            home_matches=self.home,
            away_matches=self.away,
            both_teams_scored_count=self.btts,
            both_teams_scored_percentage=_percentage(self.btts, self.total),
            home_goals_scored=self.home_scored,
            home_goals_conceded=self.home_conceded,
            away_goals_scored=self.away_scored,
            away_goals_conceded=self.away_conceded,
            average_goals_scored=_average(self.home_scored + self.away_scored, self.total),
            average_goals_conceded=_average(self.home_conceded + self.away_conceded, self.total),
            last_five_matches=last_five,
            form_percentage=_percentage(sum(last_five), len(last_five)),
            recent_wins=tuple(_tail(self.win_sequence, wins_window)),
            btts_trend=tuple(int(b) for b in _tail(self.btts_sequence, trend_window)),
        )


def _tail(values: list, n: int) -> list:
    return values[-n:] if n > 0 else []


def _percentage(count: int, total: int) -> Optional[float]:
    # None = no data; callers pick their own fallback
    if total == 0:
        return None
    return count / total * 100


def _average(total: int, count: int) -> Optional[float]:
    if count == 0:
        return None
    return total / count


def aggregate_team_stats(
    matches: Iterable[MatchRecord],
    form_window: Optional[int] = None,
    wins_window: Optional[int] = None,
    trend_window: Optional[int] = None,
) -> dict[str, TeamStats]:
    """
    Reduce a match list into per-team statistics.

    Single pass over the matches (both sides of every match updated with
    venue-appropriate fields) followed by a finalization pass per team.
    Pure: the same input always yields an equal result.

    Args:
        matches: Matches in feed (chronological) order.
        form_window: BTTS form window (default settings.FORM_WINDOW).
        wins_window: Win form window (default settings.RANKING_FORM_WINDOW).
        trend_window: BTTS trend window (default settings.FORM_TREND_WINDOW).

    Returns:
        Dict mapping team name -> TeamStats, in first-encounter order.
    """
    settings = get_settings()
    form_window = form_window if form_window is not None else settings.FORM_WINDOW
    wins_window = wins_window if wins_window is not None else settings.RANKING_FORM_WINDOW
    trend_window = trend_window if trend_window is not None else settings.FORM_TREND_WINDOW

    accumulators: dict[str, _TeamAccumulator] = {}
    for match in matches:
        home = accumulators.get(match.home_team)
        if home is None:
            home = accumulators[match.home_team] = _TeamAccumulator()
        away = accumulators.get(match.away_team)
        if away is None:
            away = accumulators[match.away_team] = _TeamAccumulator()
        home.add_home(match)
        away.add_away(match)

    return {
        team: acc.finalize(form_window, wins_window, trend_window)
        for team, acc in accumulators.items()
    }


def list_teams(matches: Iterable[MatchRecord]) -> list[str]:
    """Sorted unique team names appearing as home or away."""
    teams = set()
    for match in matches:
        teams.add(match.home_team)
        teams.add(match.away_team)
    return sorted(teams)


def recent_team_matches(
    matches: Sequence[MatchRecord],
    team: str,
    limit: int = 10,
) -> list[MatchRecord]:
    """Most recent matches involving `team`, oldest first."""
    involved = [m for m in matches if m.involves(team)]
    return involved[-limit:] if limit > 0 else []


def comparison_profile(stats: Optional[TeamStats]) -> list[int]:
    """
    Values for the team comparison chart.

    Order: BTTS %, avg goals scored x20, avg goals conceded x20, form %,
    home goals scored, away goals scored, total matches. All zero for a
    team without stats.
    """
    if stats is None:
        return [0] * 7
    return [
        round_half_up(stats.both_teams_scored_percentage or 0),
        round_half_up((stats.average_goals_scored or 0) * 20),
        round_half_up((stats.average_goals_conceded or 0) * 20),
        round_half_up(stats.form_percentage or 0),
        stats.home_goals_scored,
        stats.away_goals_scored,
        stats.total_matches,
    ]
