"""Head-to-head statistics between two named teams."""

import logging
from typing import Iterable, Optional

from btts.config import get_settings
from btts.models import HeadToHeadStats, MatchRecord

logger = logging.getLogger(__name__)


def _result_for(match: MatchRecord, team: str) -> str:
    """W/D/L for `team` in `match`, whichever side it played on."""
    if team == match.home_team:
        scored, conceded = match.home_score, match.away_score
    else:
        scored, conceded = match.away_score, match.home_score
    if scored > conceded:
        return "W"
    if scored < conceded:
        return "L"
    return "D"


def head_to_head_matches(
    matches: Iterable[MatchRecord],
    team_a: str,
    team_b: str,
    window: Optional[int] = None,
) -> list[MatchRecord]:
    """Encounters between the two teams in either orientation, last `window` in feed order."""
    window = window if window is not None else get_settings().H2H_WINDOW
    pair = {team_a, team_b}
    encounters = [
        m for m in matches
        if {m.home_team, m.away_team} == pair and m.home_team != m.away_team
    ]
    return encounters[-window:] if window > 0 else []


def analyze_head_to_head(
    matches: Iterable[MatchRecord],
    team_a: str,
    team_b: str,
    window: Optional[int] = None,
    recent: Optional[int] = None,
) -> HeadToHeadStats:
    """
    Compute the pairwise record of team_a against team_b.

    Wins are attributed by the actual scoreline, from team_a's side, no matter
    which physical side team_a occupied in each fixture. `home_wins` counts
    team_a wins and `away_wins` counts team_b wins, so swapping the arguments
    swaps those two fields while total_matches and draws stay equal.

    Args:
        matches: Match history in feed order.
        team_a: First team (the "home" side of the query).
        team_b: Second team.
        window: Number of most recent encounters (default settings.H2H_WINDOW).
        recent: Length of recent_form (default settings.H2H_RECENT_FORM).
    """
    settings = get_settings()
    recent = recent if recent is not None else settings.H2H_RECENT_FORM

    encounters = head_to_head_matches(matches, team_a, team_b, window)
    results = [_result_for(m, team_a) for m in encounters]

    stats = HeadToHeadStats(
        total_matches=len(encounters),
        home_wins=results.count("W"),
        away_wins=results.count("L"),
        draws=results.count("D"),
        recent_form=tuple(results[-recent:]) if recent > 0 else (),
        both_teams_scored_count=sum(1 for m in encounters if m.both_teams_scored),
    )
    logger.debug(
        f"H2H {team_a} vs {team_b}: {stats.total_matches} meetings "
        f"({stats.home_wins}-{stats.draws}-{stats.away_wins})"
    )
    return stats


def is_derby(h2h: HeadToHeadStats, min_meetings: Optional[int] = None) -> bool:
    """A fixture is a derby when the teams have met more than `min_meetings` times."""
    min_meetings = min_meetings if min_meetings is not None else get_settings().DERBY_MIN_MEETINGS
    return h2h.total_matches > min_meetings
