"""Ideal point, extreme points and hyperplane normalization.

These functions turn a front of raw objective vectors into the scale used by
the survival scorers:

- ideal_point: per-objective minimum of a set of objective vectors
- point_to_line_distance: squared perpendicular distance to a line
- find_extreme_points: one corner solution per objective axis
- solve_hyperplane: fit of the hyperplane through the extreme points
- normalize_front: per-objective intercepts, with a maxima fallback

Degenerate geometry is never an error here. Every function has a
deterministic fallback, because flat or tiny fronts are routine during
evolutionary search.
"""

import numpy as np

AXIS_PERTURBATION = 1e-6
"""Added to every entry of the identity matrix used as search directions."""


def ideal_point(objectives: np.ndarray) -> np.ndarray:
    """Per-objective minimum over a set of objective vectors.

    Args:
        objectives: Objective values. Shape (n, n_obj), n >= 1.

    Returns:
        Array of shape (n_obj,).
    """
    return objectives.min(axis=0)


def point_to_line_distance(points: np.ndarray, point_a: np.ndarray, point_b: np.ndarray) -> np.ndarray:
    """Squared perpendicular distance of each point from the line through a and b.

    Uses the projection formula |v - ((v.d)/(d.d)) d|^2 with d = b - a and
    v = point - a.

    Args:
        points: Points to measure. Shape (n, n_obj).
        point_a: First point on the line. Shape (n_obj,).
        point_b: Second point on the line. Shape (n_obj,).

    Returns:
        Array of shape (n,) with squared distances.

    Examples:
        >>> pts = np.array([[1.0, 1.0], [2.0, 0.0]])
        >>> point_to_line_distance(pts, np.zeros(2), np.array([1.0, 0.0]))
        array([1., 0.])
    """
    direction = point_b - point_a
    v = points - point_a
    t = (v @ direction) / (direction @ direction)
    residual = v - t[:, np.newaxis] * direction
    return np.sum(residual**2, axis=1)


def find_extreme_points(front: np.ndarray, ideal: np.ndarray) -> np.ndarray:
    """Find one extreme (corner) solution per objective axis.

    For axis i the search direction is the i-th column of the identity matrix
    plus a small perturbation. The front member closest to the line through
    the ideal point along that direction is chosen; members already chosen for
    an earlier axis are excluded.

    When the front has fewer members than objectives no meaningful corner
    exists, and the indices 0..len(front)-1 are returned as they are.

    Args:
        front: Objective values of the front members. Shape (n, n_obj).
        ideal: Ideal point. Shape (n_obj,).

    Returns:
        Integer array of indices into front. Length n_obj, or n when the
        front is smaller than the objective count.
    """
    n, n_obj = front.shape
    if n < n_obj:
        return np.arange(n, dtype=np.intp)

    directions = np.eye(n_obj) + AXIS_PERTURBATION
    selected = np.zeros(n, dtype=bool)
    indices = np.empty(n_obj, dtype=np.intp)

    for i in range(n_obj):
        dists = point_to_line_distance(front, ideal, ideal + directions[:, i])
        dists[selected] = np.inf
        best = int(np.argmin(dists))
        indices[i] = best
        selected[best] = True

    return indices


def solve_hyperplane(points: np.ndarray) -> np.ndarray | None:
    """Solve points @ w = 1 for the hyperplane weights w.

    Args:
        points: Square matrix, one extreme point per row. Shape (n_obj, n_obj).

    Returns:
        The weight vector of shape (n_obj,), or None when the system is
        singular or the solution is not finite.
    """
    try:
        weights = np.linalg.solve(points, np.ones(points.shape[0]))
    except np.linalg.LinAlgError:
        return None
    if not np.all(np.isfinite(weights)):
        return None
    return weights


def normalize_front(front: np.ndarray, extreme: np.ndarray) -> np.ndarray:
    """Compute the per-objective normalization vector of a front.

    The normalization vector holds the intercepts of the hyperplane through the
    extreme points. It falls back to the per-objective maxima of the front when
    the front is smaller than the objective count, when the extreme indices
    are not all distinct, when the hyperplane cannot be solved or has a
    negative weight, or when the intercepts are not finite. Zero entries are
    replaced by 1.

    Args:
        front: Objective values of the front, normally shifted by the ideal
            point. Shape (n, n_obj).
        extreme: Indices into front, as returned by find_extreme_points.

    Returns:
        Strictly positive array of shape (n_obj,).

    Examples:
        >>> front = np.array([[1.0, 0.0], [0.5, 0.5], [0.0, 2.0]])
        >>> normalize_front(front, np.array([0, 2]))
        array([1., 2.])
    """
    n, n_obj = front.shape
    maxima = front.max(axis=0)

    if n < n_obj or len(np.unique(extreme)) != len(extreme):
        normalization = maxima
    else:
        weights = solve_hyperplane(front[extreme])
        if weights is None or np.any(weights < 0.0):
            normalization = maxima
        else:
            with np.errstate(divide="ignore"):
                normalization = 1.0 / weights
            if not np.all(np.isfinite(normalization)):
                normalization = maxima

    normalization = normalization.astype(np.float64, copy=True)
    normalization[normalization == 0.0] = 1.0
    return normalization
