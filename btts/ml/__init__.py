"""Probability model and team rankings."""

from btts.ml.weights import PredictionRequest, WeightConfig
from btts.ml.probability import predict_probability
from btts.ml.rankings import rank_teams

__all__ = [
    "PredictionRequest", "WeightConfig",
    "predict_probability",
    "rank_teams",
]
