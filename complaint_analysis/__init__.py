"""Topic modeling and product classification of CFPB consumer complaint narratives."""

from .scoring import InvalidInputError, RankAccuracyScorer, ScoreResult, kendall_acc

__all__ = ["InvalidInputError", "RankAccuracyScorer", "ScoreResult", "kendall_acc"]
