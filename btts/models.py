"""Domain records shared across the engine."""

from dataclasses import asdict, dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class MatchRecord:
    """One historical match as parsed from the feed."""

    home_team: str
    away_team: str
    home_score: int
    away_score: int
    both_teams_scored: bool

    def involves(self, team: str) -> bool:
        return team in (self.home_team, self.away_team)


def _ratio(numerator: float, denominator: int) -> Optional[float]:
    """numerator / denominator, or None when there is no data."""
    if denominator == 0:
        return None
    return numerator / denominator


@dataclass(frozen=True)
class TeamStats:
    """
    Per-team aggregate statistics.

    Derived in full from the match list on every recomputation. Fields that
    have no data (a team that never played at a venue, an empty form window)
    are None rather than 0 so "no data" stays distinct from "zero".
    """

    total_matches: int
    home_matches: int
    away_matches: int
    both_teams_scored_count: int
    both_teams_scored_percentage: Optional[float]
    home_goals_scored: int
    home_goals_conceded: int
    away_goals_scored: int
    away_goals_conceded: int
    average_goals_scored: Optional[float]
    average_goals_conceded: Optional[float]
    last_five_matches: tuple[bool, ...]
    form_percentage: Optional[float]
    # Superset fields used by the leaderboard and the prediction snapshot
    recent_wins: tuple[bool, ...] = ()
    btts_trend: tuple[int, ...] = ()

    @property
    def home_goals_scored_avg(self) -> Optional[float]:
        return _ratio(self.home_goals_scored, self.home_matches)

    @property
    def home_goals_conceded_avg(self) -> Optional[float]:
        return _ratio(self.home_goals_conceded, self.home_matches)

    @property
    def away_goals_scored_avg(self) -> Optional[float]:
        return _ratio(self.away_goals_scored, self.away_matches)

    @property
    def away_goals_conceded_avg(self) -> Optional[float]:
        return _ratio(self.away_goals_conceded, self.away_matches)


@dataclass(frozen=True)
class HeadToHeadStats:
    """Pairwise record between two teams, from the first team's side."""

    total_matches: int
    home_wins: int       # wins of the first queried team
    away_wins: int       # wins of the second queried team
    draws: int
    recent_form: tuple[str, ...]  # "W" / "D" / "L", oldest first
    both_teams_scored_count: int = 0

    def to_dict(self) -> dict:
        data = asdict(self)
        data["recent_form"] = list(self.recent_form)
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "HeadToHeadStats":
        return cls(
            total_matches=int(data.get("total_matches", 0)),
            home_wins=int(data.get("home_wins", 0)),
            away_wins=int(data.get("away_wins", 0)),
            draws=int(data.get("draws", 0)),
            recent_form=tuple(data.get("recent_form", ())),
            both_teams_scored_count=int(data.get("both_teams_scored_count", 0)),
        )


@dataclass(frozen=True)
class TeamRanking:
    """One leaderboard row."""

    team: str
    matches: int
    btts_rate: float
    form: tuple[bool, ...]
    avg_goals_scored: float
    avg_goals_conceded: float
    total_btts: int
    score: float


class PredictionMode(str, Enum):
    """Probability formula selector."""

    STANDARD = "standard"
    PROFESSIONAL = "professional"


@dataclass
class MatchPrediction:
    """
    A prediction as stored in the ledger.

    Everything except verified/actual_result is a snapshot taken when the
    prediction was made and is never recomputed.
    """

    home_team: str
    away_team: str
    probability: int
    timestamp: datetime
    verified: bool = False
    actual_result: Optional[bool] = None
    is_derby: Optional[bool] = None
    is_season_end: Optional[bool] = None
    h2h_stats: Optional[HeadToHeadStats] = None
    form_trend: Optional[dict[str, list[int]]] = None
    mode: PredictionMode = PredictionMode.STANDARD

    @property
    def status(self) -> str:
        """Correct / Incorrect / Unverified."""
        if not self.verified:
            return "Unverified"
        return "Correct" if self.actual_result else "Incorrect"

    def to_dict(self) -> dict:
        return {
            "home_team": self.home_team,
            "away_team": self.away_team,
            "probability": self.probability,
            "timestamp": self.timestamp.isoformat(),
            "verified": self.verified,
            "actual_result": self.actual_result,
            "is_derby": self.is_derby,
            "is_season_end": self.is_season_end,
            "h2h_stats": self.h2h_stats.to_dict() if self.h2h_stats else None,
            "form_trend": self.form_trend,
            "mode": self.mode.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "MatchPrediction":
        h2h = data.get("h2h_stats")
        return cls(
            home_team=data["home_team"],
            away_team=data["away_team"],
            probability=int(data["probability"]),
            timestamp=datetime.fromisoformat(data["timestamp"]),
            verified=bool(data.get("verified", False)),
            actual_result=data.get("actual_result"),
            is_derby=data.get("is_derby"),
            is_season_end=data.get("is_season_end"),
            h2h_stats=HeadToHeadStats.from_dict(h2h) if h2h else None,
            form_trend=data.get("form_trend"),
            mode=PredictionMode(data.get("mode", PredictionMode.STANDARD.value)),
        )
