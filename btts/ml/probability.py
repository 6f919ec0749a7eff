"""
Heuristic BTTS probability model.

Two formulas:

Standard
    sum of eight weighted terms, each stat * (weight / 100). BTTS and form
    terms are percentages; goal terms are venue goal averages scaled x100.

Professional (blended)
    the same eight terms with weight / 200, plus
        expected goals  ((home avg scored + away avg scored) / 4) * 15
        form            ((home form + away form) / 200) * 15
        h2h             ((home BTTS% + away BTTS%) / 2) * 0.20

    The "h2h" term uses each team's overall BTTS percentage, not the pairwise
    record.

Both modes round half-up and clamp to [0, 100]. Stats with no data (None)
contribute 0.
"""

import logging
from typing import Mapping, Optional

from btts.ml.weights import PredictionRequest, WeightConfig
from btts.models import PredictionMode, TeamStats
from btts.utils.rounding import clamp, round_half_up

logger = logging.getLogger(__name__)

STANDARD_WEIGHT_DIVISOR = 100.0
PROFESSIONAL_WEIGHT_DIVISOR = 200.0
GOAL_AVERAGE_SCALE = 100.0

XG_TERM_FACTOR = 15.0
FORM_TERM_FACTOR = 15.0
H2H_TERM_FACTOR = 0.20


def _v(value: Optional[float]) -> float:
    return value if value is not None else 0.0


def _scaled_avg(value: Optional[float]) -> float:
    return _v(value) * GOAL_AVERAGE_SCALE


def weighted_terms(
    home: TeamStats,
    away: TeamStats,
    weights: WeightConfig,
    divisor: float = STANDARD_WEIGHT_DIVISOR,
) -> dict[str, float]:
    """Individual contributions of the eight weighted terms."""
    return {
        "home_btts": _v(home.both_teams_scored_percentage) * weights.home_btts / divisor,
        "away_btts": _v(away.both_teams_scored_percentage) * weights.away_btts / divisor,
        "home_form": _v(home.form_percentage) * weights.home_form / divisor,
        "away_form": _v(away.form_percentage) * weights.away_form / divisor,
        "home_goals_scored": _scaled_avg(home.home_goals_scored_avg) * weights.home_goals_scored / divisor,
        "home_goals_conceded": _scaled_avg(home.home_goals_conceded_avg) * weights.home_goals_conceded / divisor,
        "away_goals_scored": _scaled_avg(away.away_goals_scored_avg) * weights.away_goals_scored / divisor,
        "away_goals_conceded": _scaled_avg(away.away_goals_conceded_avg) * weights.away_goals_conceded / divisor,
    }


def blended_terms(home: TeamStats, away: TeamStats) -> dict[str, float]:
    """The second, weight-independent formula of professional mode."""
    return {
        "expected_goals": (
            (_v(home.average_goals_scored) + _v(away.average_goals_scored)) / 4
        ) * XG_TERM_FACTOR,
        "form": ((_v(home.form_percentage) + _v(away.form_percentage)) / 200) * FORM_TERM_FACTOR,
        "h2h": (
            (_v(home.both_teams_scored_percentage) + _v(away.both_teams_scored_percentage)) / 2
        ) * H2H_TERM_FACTOR,
    }


def raw_score(home: TeamStats, away: TeamStats, weights: WeightConfig, mode: PredictionMode) -> float:
    """Unrounded model score."""
    if mode == PredictionMode.PROFESSIONAL:
        terms = weighted_terms(home, away, weights, PROFESSIONAL_WEIGHT_DIVISOR)
        return sum(terms.values()) + sum(blended_terms(home, away).values())
    return sum(weighted_terms(home, away, weights).values())


def predict_probability(
    request: PredictionRequest,
    team_stats: Mapping[str, TeamStats],
) -> int:
    """
    BTTS probability for one fixture.

    Args:
        request: Fixture, weights and mode.
        team_stats: Output of aggregate_team_stats.

    Returns:
        Integer in [0, 100]. 0 when either team has no statistics.
    """
    home = team_stats.get(request.home_team)
    away = team_stats.get(request.away_team)
    if home is None or away is None:
        missing = request.home_team if home is None else request.away_team
        logger.warning(f"No statistics for '{missing}', probability defaults to 0")
        return 0

    score = raw_score(home, away, request.weights, request.mode)
    return clamp(round_half_up(score))
