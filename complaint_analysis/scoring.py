"""
Rank-concordance accuracy for comparing predictions against a ground truth.

Accuracy is Kendall-style concordance rescaled to [0, 100]: 50 is chance,
100 means every untied pair is ordered the same way by truth and prediction,
0 means every untied pair is ordered the opposite way. Pairs tied on either
side are left out of both numerator and denominator.
"""

import math
from dataclasses import dataclass
from typing import Optional

import numpy as np
from scipy.stats import norm

from .config import CONFIDENCE, PAIRWISE_THRESHOLD


class InvalidInputError(ValueError):
    """Inputs the concordance accuracy is undefined for."""


@dataclass(frozen=True)
class ScoreResult:
    accuracy: float
    lower: float
    upper: float
    n: int
    label: Optional[str] = None

    def to_dict(self):
        return {
            "label": self.label,
            "accuracy": self.accuracy,
            "lower": self.lower,
            "upper": self.upper,
            "n": self.n,
        }


def _as_vector(values, name):
    try:
        arr = np.asarray(values)
    except ValueError as exc:
        raise InvalidInputError(f"{name} is not a flat sequence: {exc}") from exc
    # bool, signed, unsigned and float only; numeric strings are not numbers
    if arr.dtype.kind not in "biuf":
        raise InvalidInputError(f"{name} must be numeric, got dtype {arr.dtype}")
    arr = arr.astype(float)
    if arr.ndim != 1:
        raise InvalidInputError(f"{name} must be one-dimensional, got shape {arr.shape}")
    if not np.all(np.isfinite(arr)):
        raise InvalidInputError(f"{name} contains NaN or infinite values")
    return arr


def _tied_pairs(*columns):
    """Pairs sharing the same value on every given column."""
    if len(columns) == 1:
        _, counts = np.unique(columns[0], return_counts=True)
    else:
        _, counts = np.unique(np.column_stack(columns), axis=0, return_counts=True)
    counts = counts.astype(np.int64)
    return int((counts * (counts - 1) // 2).sum())


def _count_inversions(values):
    """Number of pairs i < j with values[i] > values[j] (bottom-up merge sort)."""
    seq = list(values)
    buf = seq[:]
    n = len(seq)
    inversions = 0
    width = 1
    while width < n:
        for lo in range(0, n, 2 * width):
            mid = min(lo + width, n)
            hi = min(lo + 2 * width, n)
            i, j, k = lo, mid, lo
            while i < mid and j < hi:
                if seq[j] < seq[i]:
                    buf[k] = seq[j]
                    j += 1
                    inversions += mid - i
                else:
                    buf[k] = seq[i]
                    i += 1
                k += 1
            buf[k:hi] = seq[i:mid] + seq[j:hi]
        seq, buf = buf, seq
        width *= 2
    return inversions


def concordance_counts(x, y):
    """
    Concordant and discordant pair counts in O(N log N).

    After sorting by x then y, every strict inversion in y is a discordant
    pair, since pairs tied on x come out ordered by y. Untied pairs are all
    pairs minus those tied on x or on y, which is an inclusion-exclusion over
    the tie groups.
    """
    n = len(x)
    order = np.lexsort((y, x))
    discordant = _count_inversions(y[order].tolist())
    untied = n * (n - 1) // 2 - _tied_pairs(x) - _tied_pairs(y) + _tied_pairs(x, y)
    return untied - discordant, discordant


def pairwise_concordance_counts(x, y):
    """Same counts as concordance_counts, by an explicit O(N^2) comparison."""
    dx = np.sign(x[:, None] - x[None, :])
    dy = np.sign(y[:, None] - y[None, :])
    signs = np.triu(dx * dy, k=1)
    return int((signs > 0).sum()), int((signs < 0).sum())


def kendall_standard_error(n):
    return math.sqrt(2.0 * (2 * n + 5) / (9.0 * n * (n - 1)))


class RankAccuracyScorer:
    """
    Scores a prediction vector against a truth vector.

    Parameters
    ----------
    confidence:
        Coverage of the normal-approximation interval (0.95 gives z = 1.96).
    pairwise_threshold:
        Inputs shorter than this are counted with the direct pairwise scan,
        longer ones with the merge-sort count.
    """

    def __init__(self, confidence=CONFIDENCE, pairwise_threshold=PAIRWISE_THRESHOLD):
        if not 0 < confidence < 1:
            raise ValueError(f"confidence must be in (0, 1), got {confidence}")
        self.confidence = confidence
        self.pairwise_threshold = pairwise_threshold
        self.z = float(norm.ppf(0.5 + confidence / 2))

    def score(self, truth, prediction, label=None) -> ScoreResult:
        x = _as_vector(truth, "truth")
        y = _as_vector(prediction, "prediction")
        if len(x) != len(y):
            raise InvalidInputError(
                f"truth and prediction differ in length ({len(x)} vs {len(y)})"
            )
        n = len(x)
        if n < 2:
            raise InvalidInputError(f"need at least 2 observations, got {n}")
        if np.unique(x).size < 2:
            raise InvalidInputError("truth has a single distinct value")
        if np.unique(y).size < 2:
            raise InvalidInputError("prediction has a single distinct value")

        if n < self.pairwise_threshold:
            concordant, discordant = pairwise_concordance_counts(x, y)
        else:
            concordant, discordant = concordance_counts(x, y)

        # Both sides have two distinct values, so at least one pair is untied
        tau = (concordant - discordant) / (concordant + discordant)
        accuracy = 50.0 + 50.0 * tau
        half_width = self.z * 50.0 * kendall_standard_error(n)
        return ScoreResult(
            accuracy=accuracy,
            lower=max(0.0, accuracy - half_width),
            upper=min(100.0, accuracy + half_width),
            n=n,
            label=label,
        )


_default_scorer = RankAccuracyScorer()


def kendall_acc(truth, prediction, label=None) -> ScoreResult:
    return _default_scorer.score(truth, prediction, label=label)
