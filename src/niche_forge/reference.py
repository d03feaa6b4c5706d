"""Reference directions for NSGA-III niching."""

from itertools import combinations
from math import comb

import numpy as np


def das_dennis(n_partitions: int, n_obj: int) -> np.ndarray:
    """Generate Das-Dennis reference directions on the unit simplex.

    Every direction has coordinates k / n_partitions (k integer) summing to 1.

    Args:
        n_partitions: Number of divisions along each objective axis. Must be
            non-negative.
        n_obj: Number of objectives. Must be positive.

    Returns:
        Array of shape (comb(n_partitions + n_obj - 1, n_obj - 1), n_obj).

    Raises:
        ValueError: If n_partitions is negative or n_obj is not positive.

    Example:
        >>> das_dennis(2, 2)
        array([[0. , 1. ],
               [0.5, 0.5],
               [1. , 0. ]])
    """
    if n_obj <= 0:
        raise ValueError(f"n_obj must be positive, got {n_obj}")
    if n_partitions < 0:
        raise ValueError(f"n_partitions must be non-negative, got {n_partitions}")
    if n_partitions == 0:
        return np.full((1, n_obj), 1.0 / n_obj)

    # Stars and bars: choose where the n_obj - 1 bars go among the slots
    n_slots = n_partitions + n_obj - 1
    directions = []
    for bars in combinations(range(n_slots), n_obj - 1):
        edges = (-1, *bars, n_slots)
        counts = [edges[i + 1] - edges[i] - 1 for i in range(n_obj)]
        directions.append(counts)

    return np.array(directions, dtype=np.float64) / n_partitions


def default_reference_directions(n_obj: int, n_points: int) -> np.ndarray:
    """Das-Dennis directions with the largest lattice that fits n_points.

    Args:
        n_obj: Number of objectives.
        n_points: Upper bound on the number of directions, typically the
            population size. At least one partition is always used.

    Returns:
        Array of shape (n_dirs, n_obj).

    Raises:
        ValueError: If n_obj is smaller than 2.
    """
    if n_obj < 2:
        raise ValueError(f"reference directions need at least 2 objectives, got {n_obj}")
    n_partitions = 1
    while comb(n_partitions + n_obj, n_obj - 1) <= n_points:
        n_partitions += 1
    return das_dennis(n_partitions, n_obj)
