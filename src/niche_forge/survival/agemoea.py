"""AGE-MOEA survival scores.

AGE-MOEA estimates the geometry of the first front as a Minkowski-p unit
sphere and scores candidates with that metric:

- front 0: extreme points get an infinite score; the others are picked
  greedily, each time taking the candidate whose two nearest already-picked
  neighbours are farthest away (relative to its own norm). The value at pick
  time is its score, so well spread candidates score high.
- later fronts: the inverse Minkowski-p norm, so candidates closer to the
  ideal point score high.

References:
    Panichella, A. (2019). An adaptive evolutionary algorithm based on
    non-Euclidean geometry for many-objective optimization. GECCO '19.
"""

import numpy as np

from niche_forge.normalization import point_to_line_distance
from niche_forge.protocols import SurvivalScorer

MIN_GEOMETRY = 0.1
MAX_GEOMETRY = 20.0


def minkowski_norm(points: np.ndarray, p: float) -> np.ndarray:
    """Minkowski-p norm of each row. Shape (n, n_obj) -> (n,)."""
    return np.sum(np.abs(points) ** p, axis=1) ** (1.0 / p)


def pairwise_minkowski(points: np.ndarray, p: float) -> np.ndarray:
    """Minkowski-p distance between every pair of rows. Shape (n, n_obj) -> (n, n)."""
    diff = np.abs(points[:, np.newaxis, :] - points[np.newaxis, :, :])
    return np.sum(diff**p, axis=2) ** (1.0 / p)


def estimate_geometry(front: np.ndarray, extreme: np.ndarray) -> float:
    """Estimate the curvature p of a normalized front.

    The non-extreme member closest to the central direction (1, ..., 1) is
    assumed to lie on the unit Minkowski-p sphere, which gives
    p = ln(M) / ln(1 / mean(member)).

    Args:
        front: Normalized front. Shape (m, n_obj).
        extreme: Indices of the extreme points in front.

    Returns:
        p in [MIN_GEOMETRY, MAX_GEOMETRY]; 1.0 when the estimate is not finite
        or not above MIN_GEOMETRY.

    Example:
        >>> f1 = np.linspace(0, 1, 11)
        >>> front = np.column_stack([f1, 1 - f1])
        >>> round(estimate_geometry(front, np.array([10, 0])), 6)
        1.0
    """
    n_obj = front.shape[1]
    distances = point_to_line_distance(front, np.zeros(n_obj), np.ones(n_obj))
    distances[extreme] = np.inf
    central = front[int(np.argmin(distances))]

    with np.errstate(divide="ignore", invalid="ignore"):
        p = float(np.log(n_obj) / np.log(1.0 / np.mean(central)))

    if not np.isfinite(p) or p <= MIN_GEOMETRY:
        return 1.0
    return min(p, MAX_GEOMETRY)


def front_survival_scores(front: np.ndarray, extreme: np.ndarray, p: float) -> np.ndarray:
    """Greedy diversity scores for the members of a normalized first front.

    Args:
        front: Normalized front. Shape (m, n_obj).
        extreme: Indices of the extreme points in front (all distinct).
        p: Front geometry, as returned by estimate_geometry.

    Returns:
        Array of shape (m,). Extreme points score inf.
    """
    m = len(front)
    scores = np.zeros(m, dtype=np.float64)
    scores[extreme] = np.inf

    selected = np.zeros(m, dtype=bool)
    selected[extreme] = True

    norms = minkowski_norm(front, p)
    norms[norms == 0.0] = 1.0
    distances = pairwise_minkowski(front, p) / norms[:, np.newaxis]

    remaining = np.flatnonzero(~selected).tolist()
    while remaining:
        to_selected = distances[np.ix_(remaining, np.flatnonzero(selected))]
        if to_selected.shape[1] > 1:
            crowding = np.sum(np.partition(to_selected, 1, axis=1)[:, :2], axis=1)
        else:
            crowding = to_selected[:, 0]

        k = int(np.argmax(crowding))
        best = remaining.pop(k)
        selected[best] = True
        scores[best] = crowding[k]

    return scores


def agemoea_survival() -> SurvivalScorer:
    """Create an AGE-MOEA survival scorer.

    Returns:
        A SurvivalScorer. The rng argument is accepted but unused; the
        AGE-MOEA scores are deterministic.

    Example:
        >>> scorer = agemoea_survival()
    """

    def scorer(
        objectives: np.ndarray,
        fronts: list[np.ndarray],
        n_survive: int,
        *,
        ideal_point: np.ndarray,
        normalization: np.ndarray,
        extreme: np.ndarray,
        rng: np.random.Generator,
    ) -> np.ndarray:
        n_obj = objectives.shape[1]
        normalized = (objectives - ideal_point) / normalization
        scores = np.zeros(len(objectives), dtype=np.float64)

        if not fronts:
            return scores

        first = fronts[0]
        p = 1.0
        if len(first) >= n_obj:
            front = normalized[first]
            p = estimate_geometry(front, extreme)
            scores[first] = front_survival_scores(front, extreme, p)

        for front_idx in fronts[1:]:
            with np.errstate(divide="ignore"):
                scores[front_idx] = 1.0 / minkowski_norm(normalized[front_idx], p)

        return scores

    return scorer
