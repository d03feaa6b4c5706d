"""NSGA-III survival scores.

Candidates are placed in a normalized objective space and associated with the
reference direction they lie closest to. The boundary front, the one that only
partially survives, is ordered by the NSGA-III niching procedure: the least
crowded reference direction is served first, so survivors spread across all
directions before any direction receives a second member.

References:
    Deb, K., & Jain, H. (2014). An evolutionary many-objective optimization
    algorithm using reference-point-based nondominated sorting approach,
    part I. IEEE Transactions on Evolutionary Computation, 18(4), 577-601.
"""

import numpy as np

from niche_forge.protocols import SurvivalScorer
from niche_forge.survival.truncation import boundary_front_index


def associate(normalized: np.ndarray, directions: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """Associate each point with its nearest reference direction.

    Args:
        normalized: Normalized objective vectors. Shape (n, n_obj).
        directions: Unit-length reference directions. Shape (n_dirs, n_obj).

    Returns:
        Tuple of (niche, distance): the index of the nearest direction and the
        perpendicular distance to it, both of shape (n,).
    """
    projection = normalized @ directions.T
    squared = np.sum(normalized**2, axis=1)[:, np.newaxis] - projection**2
    perpendicular = np.sqrt(np.maximum(squared, 0.0))

    niche = np.argmin(perpendicular, axis=1)
    distance = perpendicular[np.arange(len(normalized)), niche]
    return niche, distance


def niching_order(
    niche: np.ndarray,
    distance: np.ndarray,
    niche_count: np.ndarray,
    rng: np.random.Generator,
) -> np.ndarray:
    """Order the members of a front by the NSGA-III niching procedure.

    At each step the reference direction with the fewest members so far is
    picked (ties broken at random) among the directions that still have
    unpicked front members. An empty direction takes its closest member; a
    direction that already has members takes a random one.

    Args:
        niche: Associated direction of each front member. Shape (m,).
        distance: Perpendicular distance of each front member. Shape (m,).
        niche_count: Members per direction among already surviving
            candidates. Shape (n_dirs,). Not modified.
        rng: Random number generator for tie-breaking.

    Returns:
        Integer array of shape (m,): positions into the front in pick order.
    """
    count = niche_count.copy()
    remaining = np.ones(len(niche), dtype=bool)
    order = np.empty(len(niche), dtype=np.intp)

    for step in range(len(niche)):
        active = np.unique(niche[remaining])
        active_counts = count[active]
        direction = rng.choice(active[active_counts == active_counts.min()])

        members = np.flatnonzero(remaining & (niche == direction))
        if count[direction] == 0:
            pick = members[np.argmin(distance[members])]
        else:
            pick = rng.choice(members)

        order[step] = pick
        remaining[pick] = False
        count[direction] += 1

    return order


def nsga3_survival(reference_directions: np.ndarray) -> SurvivalScorer:
    """Create an NSGA-III survival scorer.

    Scores:
    - boundary front members: len(front) - pick position under niching, so
      earlier picks score higher;
    - every other candidate: minus its perpendicular distance to the nearest
      reference direction.

    Args:
        reference_directions: Reference directions. Shape (n_dirs, n_obj),
            non-negative, no all-zero rows.

    Returns:
        A SurvivalScorer.

    Raises:
        ValueError: If reference_directions is not a non-empty 2D array with
            non-zero rows.

    Example:
        >>> from niche_forge.reference import das_dennis
        >>> scorer = nsga3_survival(das_dennis(12, 2))
    """
    directions = np.asarray(reference_directions, dtype=np.float64)
    if directions.ndim != 2 or directions.shape[0] == 0:
        raise ValueError(f"reference_directions must be a non-empty 2D array, got shape {directions.shape}")
    lengths = np.linalg.norm(directions, axis=1)
    if np.any(lengths == 0.0):
        raise ValueError("reference_directions must not contain all-zero rows")
    unit = directions / lengths[:, np.newaxis]

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
        if objectives.shape[1] != unit.shape[1]:
            raise ValueError(
                f"reference directions have {unit.shape[1]} objectives, population has {objectives.shape[1]}"
            )

        normalized = (objectives - ideal_point) / normalization
        niche, distance = associate(normalized, unit)
        scores = -distance

        if not fronts:
            return scores

        boundary = boundary_front_index(fronts, n_survive)
        survived = fronts[:boundary]
        niche_count = np.zeros(len(unit), dtype=np.int64)
        if survived:
            niche_count = np.bincount(niche[np.concatenate(survived)], minlength=len(unit))

        last = fronts[boundary]
        order = niching_order(niche[last], distance[last], niche_count, rng)
        scores[last[order]] = len(last) - np.arange(len(last), dtype=np.float64)
        return scores

    return scorer
