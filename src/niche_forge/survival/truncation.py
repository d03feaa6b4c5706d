"""Front accumulation and rank/score truncation."""

import numpy as np


def boundary_front_index(fronts: list[np.ndarray], n_survive: int) -> int:
    """Index of the last front needed to reach n_survive candidates.

    Fronts are accumulated in rank order; the front whose inclusion brings the
    running total to at least n_survive is the boundary front, which may only
    partially survive. If all fronts together are smaller than n_survive, the
    last front is returned.

    Args:
        fronts: Index arrays of the Pareto fronts, front 0 first. Not empty.
        n_survive: Number of candidates that survive truncation.

    Returns:
        Index into fronts.

    Example:
        >>> fronts = [np.array([0, 1]), np.array([2, 3, 4]), np.array([5])]
        >>> boundary_front_index(fronts, 4)
        1
    """
    count = 0
    for i, front in enumerate(fronts):
        count += len(front)
        if count >= n_survive:
            return i
    return len(fronts) - 1


def selection_set(fronts: list[np.ndarray], n_survive: int) -> np.ndarray:
    """Indices of every front up to and including the boundary front."""
    boundary = boundary_front_index(fronts, n_survive)
    return np.concatenate(fronts[: boundary + 1])


def truncate(ranks: np.ndarray, scores: np.ndarray, n_survive: int) -> np.ndarray:
    """Keep the n_survive best candidates by rank, then by survival score.

    The sort runs on an index array, so candidates never have to be looked
    up by value.

    Args:
        ranks: Pareto front ranks. Shape (n,).
        scores: Survival scores, higher is better. Shape (n,).
        n_survive: Number of survivors.

    Returns:
        Integer array of shape (min(n, n_survive),): survivor indices ordered
        by (rank ascending, score descending).

    Example:
        >>> truncate(np.array([1, 0, 0, 1]), np.array([5.0, 1.0, 2.0, 9.0]), 3)
        array([2, 1, 3])
    """
    order = np.lexsort((-scores, ranks))
    return order[:n_survive].astype(np.intp)
