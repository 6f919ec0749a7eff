"""Team leaderboard."""

import logging
from typing import Iterable, Mapping, Union

from btts.features.team_stats import aggregate_team_stats
from btts.models import MatchRecord, TeamRanking, TeamStats

logger = logging.getLogger(__name__)


def ranking_score(avg_goals_scored: float, btts_rate: float, avg_goals_conceded: float) -> float:
    """score = avg scored * 2 + (100 - BTTS rate) / 10 - avg conceded"""
    return (avg_goals_scored * 2 + (100 - btts_rate) / 10) - avg_goals_conceded


def to_ranking(team: str, stats: TeamStats) -> TeamRanking:
    # A team only exists in the stats if it played, so total_matches > 0
    btts_rate = stats.both_teams_scored_percentage or 0.0
    avg_scored = stats.average_goals_scored or 0.0
    avg_conceded = stats.average_goals_conceded or 0.0
    return TeamRanking(
        team=team,
        matches=stats.total_matches,
        btts_rate=btts_rate,
        form=stats.recent_wins,
        avg_goals_scored=avg_scored,
        avg_goals_conceded=avg_conceded,
        total_btts=stats.both_teams_scored_count,
        score=ranking_score(avg_scored, btts_rate, avg_conceded),
    )


def rank_teams(
    source: Union[Iterable[MatchRecord], Mapping[str, TeamStats]],
) -> list[TeamRanking]:
    """
    Leaderboard sorted by score, highest first.

    Accepts either the match list or an already computed team stats mapping.
    Equal scores keep first-encounter order (sorted() is stable).
    """
    if isinstance(source, Mapping):
        team_stats = source
    else:
        team_stats = aggregate_team_stats(source)

    rankings = [to_ranking(team, stats) for team, stats in team_stats.items()]
    rankings = sorted(rankings, key=lambda r: r.score, reverse=True)
    logger.debug(f"Ranked {len(rankings)} teams")
    return rankings
