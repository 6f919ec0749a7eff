"""Statistics derived from the match history."""

from btts.features.history import MatchHistory, compute_history_key
from btts.features.team_stats import (
    aggregate_team_stats,
    comparison_profile,
    list_teams,
    recent_team_matches,
)
from btts.features.head_to_head import analyze_head_to_head, is_derby

__all__ = [
    "MatchHistory", "compute_history_key",
    "aggregate_team_stats", "comparison_profile", "list_teams", "recent_team_matches",
    "analyze_head_to_head", "is_derby",
]
