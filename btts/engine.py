"""
Prediction engine facade.

Ties the match history, the derived statistics and the ledger together for a
UI shell:

    engine = PredictionEngine(MatchHistory(feed.matches), PredictionLedger(store))
    prediction = engine.make_prediction(PredictionRequest("Arsenal", "Chelsea"))
    engine.ledger.record(prediction)

Team stats and rankings are memoized on the history version and recomputed
only after the history changes. Both are returned read-only (a mapping proxy
and a tuple).
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from btts.config import get_settings
from btts.features.head_to_head import analyze_head_to_head, is_derby
from btts.features.history import MatchHistory
from btts.features.team_stats import (
    aggregate_team_stats,
    comparison_profile,
    list_teams,
    recent_team_matches,
)
from btts.ledger.service import PredictionLedger
from btts.ml.probability import predict_probability
from btts.ml.rankings import rank_teams
from btts.ml.weights import PredictionRequest, WeightConfig
from btts.models import (
    HeadToHeadStats,
    MatchPrediction,
    MatchRecord,
    PredictionMode,
    TeamRanking,
    TeamStats,
)
from btts.telemetry.metrics import record_recomputation
from btts.utils.cache import KeyedCache

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Fixture:
    """An upcoming fixture selected by the user."""

    home_team: str
    away_team: str


@dataclass(frozen=True)
class SlatePrediction:
    home_team: str
    away_team: str
    probability: int


def is_season_end(moment: datetime, start_month: Optional[int] = None) -> bool:
    """True from `start_month` (default May) to the end of the calendar year."""
    start_month = start_month if start_month is not None else get_settings().SEASON_END_MONTH
    return moment.month >= start_month


class PredictionEngine:
    """Stateful entry point over an append-only match history."""

    def __init__(self, history: MatchHistory, ledger: Optional[PredictionLedger] = None):
        self.history = history
        self.ledger = ledger
        self._stats_cache = KeyedCache()
        self._rankings_cache = KeyedCache()

    # ------------------------------------------------------------------
    # Derived views
    # ------------------------------------------------------------------

    def team_stats(self) -> Mapping[str, TeamStats]:
        hit, data = self._stats_cache.get(key=self.history.version)
        if hit:
            return data
        data = MappingProxyType(aggregate_team_stats(self.history))
        self._stats_cache.set(data, key=self.history.version)
        record_recomputation("team_stats")
        logger.info(f"Recomputed stats for {len(data)} teams (history v{self.history.version})")
        return data

    def rankings(self) -> tuple[TeamRanking, ...]:
        hit, data = self._rankings_cache.get(key=self.history.version)
        if hit:
            return data
        data = tuple(rank_teams(self.team_stats()))
        self._rankings_cache.set(data, key=self.history.version)
        record_recomputation("rankings")
        return data

    def teams(self) -> list[str]:
        return list_teams(self.history)

    def head_to_head(self, team_a: str, team_b: str) -> HeadToHeadStats:
        return analyze_head_to_head(self.history.matches, team_a, team_b)

    def team_profile(self, team: str) -> list[int]:
        return comparison_profile(self.team_stats().get(team))

    def recent_matches(self, team: str, limit: int = 10) -> list[MatchRecord]:
        return recent_team_matches(self.history.matches, team, limit)

    def add_matches(self, matches: Iterable[MatchRecord]) -> int:
        return self.history.extend(matches)

    # ------------------------------------------------------------------
    # Predictions
    # ------------------------------------------------------------------

    def predict(self, request: PredictionRequest) -> int:
        return predict_probability(request, self.team_stats())

    def make_prediction(
        self,
        request: PredictionRequest,
        now: Optional[datetime] = None,
    ) -> MatchPrediction:
        """
        Build a ledger entry with its creation-time snapshot.

        The derby flag, season-end flag, H2H record and BTTS form trends are
        captured here and never recomputed afterwards.
        """
        now = now or datetime.now(timezone.utc)
        stats = self.team_stats()
        h2h = self.head_to_head(request.home_team, request.away_team)
        home = stats.get(request.home_team)
        away = stats.get(request.away_team)

        return MatchPrediction(
            home_team=request.home_team,
            away_team=request.away_team,
            probability=predict_probability(request, stats),
            timestamp=now,
            is_derby=is_derby(h2h),
            is_season_end=is_season_end(now),
            h2h_stats=h2h,
            form_trend={
                "home": list(home.btts_trend) if home else [],
                "away": list(away.btts_trend) if away else [],
            },
            mode=request.mode,
        )

    def record_prediction(
        self,
        request: PredictionRequest,
        now: Optional[datetime] = None,
    ) -> MatchPrediction:
        if self.ledger is None:
            raise RuntimeError("PredictionEngine has no ledger attached")
        prediction = self.make_prediction(request, now=now)
        self.ledger.record(prediction)
        return prediction

    def predict_slate(
        self,
        fixtures: Iterable[Fixture],
        weights: Optional[WeightConfig] = None,
        mode: PredictionMode = PredictionMode.STANDARD,
    ) -> list[SlatePrediction]:
        """
        Predict a slate of selected fixtures, best first.

        Only the most recently selected MAX_SLATE_FIXTURES are kept; ties keep
        selection order.
        """
        weights = weights or WeightConfig()
        limit = get_settings().MAX_SLATE_FIXTURES
        selected = list(fixtures)[-limit:]

        results = [
            SlatePrediction(
                home_team=f.home_team,
                away_team=f.away_team,
                probability=self.predict(
                    PredictionRequest(f.home_team, f.away_team, weights, mode)
                ),
            )
            for f in selected
        ]
        return sorted(results, key=lambda r: r.probability, reverse=True)
