"""Quality indicators comparing a computed front against a reference front.

Fronts are arrays of shape (n, n_obj) with one objective vector per row, as
returned by ``NSGA3.pareto_front``. Lower values are better for all three
indicators.

- epsilon: multiplicative epsilon indicator
- igd: inverted generational distance
- igd_plus: IGD+, the weakly Pareto-compliant variant of IGD

References:
    Zitzler, E., et al. (2003). Performance assessment of multiobjective
    optimizers: an analysis and review. IEEE TEC, 7(2), 117-132.
    Ishibuchi, H., et al. (2015). Modified distance calculation in generational
    distance and inverted generational distance. EMO 2015.
"""

import numpy as np


def _check_fronts(front: np.ndarray, reference: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    front = np.asarray(front, dtype=np.float64)
    reference = np.asarray(reference, dtype=np.float64)
    if front.ndim != 2 or reference.ndim != 2:
        raise ValueError(f"fronts must be 2D arrays, got shapes {front.shape} and {reference.shape}")
    if front.shape[0] == 0 or reference.shape[0] == 0:
        raise ValueError("fronts must not be empty")
    if front.shape[1] != reference.shape[1]:
        raise ValueError(
            f"fronts must have the same number of objectives, got {front.shape[1]} and {reference.shape[1]}"
        )
    return front, reference


def epsilon(front: np.ndarray, reference: np.ndarray) -> float:
    """Multiplicative epsilon indicator.

    The smallest factor by which the front has to be scaled down so that every
    reference point is weakly dominated by some front member. Objectives are
    assumed positive.

    Args:
        front: Computed front. Shape (n, n_obj).
        reference: Reference front. Shape (m, n_obj).

    Returns:
        max over reference points r of min over front members a of max_i a_i / r_i.

    Raises:
        ValueError: If a front is empty or the objective counts differ.

    Example:
        >>> ref = np.array([[0.1, 0.9], [0.5, 0.5]])
        >>> round(epsilon(ref * 1.1, ref), 10)
        1.1
    """
    front, reference = _check_fronts(front, reference)
    ratios = front[np.newaxis, :, :] / reference[:, np.newaxis, :]
    return float(ratios.max(axis=2).min(axis=1).max())


def igd(front: np.ndarray, reference: np.ndarray, p: float = 1.0) -> float:
    """Inverted generational distance.

    Args:
        front: Computed front. Shape (n, n_obj).
        reference: Reference front. Shape (m, n_obj).
        p: Power of the generalized mean (default 1.0).

    Returns:
        (sum over reference points of the Euclidean distance to the nearest
        front member, to the power p) ** (1 / p), divided by m.

    Raises:
        ValueError: If a front is empty, the objective counts differ, or p is
            not positive.
    """
    if p <= 0:
        raise ValueError(f"p must be positive, got {p}")
    front, reference = _check_fronts(front, reference)
    distances = np.linalg.norm(reference[:, np.newaxis, :] - front[np.newaxis, :, :], axis=2)
    nearest = distances.min(axis=1)
    return float(np.sum(nearest**p) ** (1.0 / p) / len(reference))


def igd_plus(front: np.ndarray, reference: np.ndarray) -> float:
    """IGD+ indicator.

    Like IGD, but only the components in which a front member is worse than
    the reference point count towards the distance.

    Args:
        front: Computed front. Shape (n, n_obj).
        reference: Reference front. Shape (m, n_obj).

    Returns:
        Mean over reference points r of min over front members a of
        sqrt(sum_i max(a_i - r_i, 0)^2).

    Raises:
        ValueError: If a front is empty or the objective counts differ.
    """
    front, reference = _check_fronts(front, reference)
    excess = np.maximum(front[np.newaxis, :, :] - reference[:, np.newaxis, :], 0.0)
    distances = np.sqrt(np.sum(excess**2, axis=2))
    return float(distances.min(axis=1).mean())
