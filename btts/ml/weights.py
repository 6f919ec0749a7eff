"""Weight vector and request value for the BTTS probability model."""

from dataclasses import asdict, dataclass, field, fields

from btts.models import PredictionMode

WEIGHT_MIN = 0.0
WEIGHT_MAX = 50.0


@dataclass(frozen=True)
class WeightConfig:
    """
    Eight user-adjustable weights, each a percentage in [0, 50].

    No sum constraint: `total` is reported but never clamped to 100.
    Defaults reproduce the fixed weighting of the first release
    (BTTS 30/30, form 10/10, goals scored 10/10).
    """

    home_btts: float = 30.0
    away_btts: float = 30.0
    home_form: float = 10.0
    away_form: float = 10.0
    home_goals_scored: float = 10.0
    home_goals_conceded: float = 0.0
    away_goals_scored: float = 10.0
    away_goals_conceded: float = 0.0

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if not WEIGHT_MIN <= value <= WEIGHT_MAX:
                raise ValueError(
                    f"Weight {f.name}={value} outside [{WEIGHT_MIN:g}, {WEIGHT_MAX:g}]"
                )

    @property
    def total(self) -> float:
        return sum(getattr(self, f.name) for f in fields(self))

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def zeros(cls, **overrides) -> "WeightConfig":
        """All weights zero except the given overrides."""
        base = {f.name: 0.0 for f in fields(cls)}
        base.update(overrides)
        return cls(**base)

    @classmethod
    def from_dict(cls, data: dict) -> "WeightConfig":
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown weights: {sorted(unknown)}")
        return cls(**{k: float(v) for k, v in data.items()})


@dataclass(frozen=True)
class PredictionRequest:
    """Everything the model needs for one fixture; no ambient config."""

    home_team: str
    away_team: str
    weights: WeightConfig = field(default_factory=WeightConfig)
    mode: PredictionMode = PredictionMode.STANDARD
