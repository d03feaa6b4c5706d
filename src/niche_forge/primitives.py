"""Pareto dominance and front classification.

All objectives are minimized. The sort returns both the fronts (as index
arrays, best first) and the per-candidate rank, since survival needs the former
and the driver stores the latter.
"""

import numpy as np


def dominates(a: np.ndarray, b: np.ndarray) -> bool:
    """Return whether objective vector a Pareto-dominates b.

    a dominates b when it is no worse in every objective and strictly better
    in at least one. Equal vectors do not dominate each other.

    Examples:
        >>> dominates(np.array([1.0, 2.0]), np.array([1.0, 3.0]))
        True
        >>> dominates(np.array([1.0, 2.0]), np.array([2.0, 1.0]))
        False
    """
    return bool(np.all(a <= b) and np.any(a < b))


def dominates_matrix(objectives: np.ndarray) -> np.ndarray:
    """Pairwise dominance over an (n, n_obj) objective array.

    Returns:
        (n, n) boolean array; entry [i, j] is True when row i dominates row j.
        The diagonal is always False.
    """
    rows = objectives[:, np.newaxis, :]
    cols = objectives[np.newaxis, :, :]
    return np.all(rows <= cols, axis=2) & np.any(rows < cols, axis=2)


def fast_non_dominated_sort(objectives: np.ndarray) -> tuple[list[np.ndarray], np.ndarray]:
    """Partition candidates into ranked Pareto fronts using Deb's fast algorithm.

    Every candidate gets a domination count (how many candidates dominate it)
    and a dominated set (which candidates it dominates). Candidates with a zero
    count form front 0. Fronts are then peeled in order: each member of the
    current front decrements the count of everything it dominates, and those
    reaching zero join the next front. Time complexity: O(M * N^2).

    Args:
        objectives: Objective values for all candidates. Shape (n, n_obj).

    Returns:
        Tuple of (fronts, ranks):
        - fronts: List of integer index arrays, front 0 first. Every index in
          range(n) appears in exactly one front.
        - ranks: Integer array of shape (n,), ranks[i] is the front index of
          candidate i.

    Examples:
        >>> fronts, ranks = fast_non_dominated_sort(np.array([[1.0, 1.0], [2.0, 2.0], [1.0, 3.0]]))
        >>> [f.tolist() for f in fronts]
        [[0], [1, 2]]
        >>> ranks
        array([0, 1, 1])
    """
    n = objectives.shape[0]
    ranks = np.zeros(n, dtype=np.int64)

    if n == 0:
        return [], ranks

    dominance = dominates_matrix(objectives)
    domination_count = dominance.sum(axis=0)
    dominated_sets = [np.flatnonzero(row) for row in dominance]

    fronts: list[np.ndarray] = []
    current = np.flatnonzero(domination_count == 0)

    while len(current) > 0:
        ranks[current] = len(fronts)
        fronts.append(current)

        next_front: list[int] = []
        for p in current:
            dominated = dominated_sets[p]
            domination_count[dominated] -= 1
            next_front.extend(dominated[domination_count[dominated] == 0].tolist())

        current = np.array(sorted(next_front), dtype=np.int64)

    return fronts, ranks


def non_dominated_sort(objectives: np.ndarray) -> np.ndarray:
    """Assign each candidate the index of its Pareto front.

    Args:
        objectives: Objective values for all candidates. Shape (n, n_obj).

    Returns:
        Integer array of shape (n,). Rank 0 = non-dominated.

    Examples:
        >>> non_dominated_sort(np.array([[1.0, 1.0], [2.0, 2.0], [3.0, 3.0]]))
        array([0, 1, 2])
    """
    _, ranks = fast_non_dominated_sort(objectives)
    return ranks
