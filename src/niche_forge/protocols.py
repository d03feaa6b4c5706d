"""Protocol definitions for objectives and survival scorers.

This module defines the interfaces the generational driver relies on:

1. **Objective**: one scalar objective to minimize. Plain callables work too;
   objects exposing an ``evaluate`` method are accepted for callers that
   bundle state (a model, a dataset) with the function.

2. **SurvivalScorer**: assigns a survival score to every member of a combined
   parent+offspring population. The driver orders candidates by rank first
   and by descending score second, then keeps the first ``n_survive``.

Example usage:
    ```python
    def my_scorer(objectives, fronts, n_survive, *, ideal_point,
                  normalization, extreme, rng):
        shifted = (objectives - ideal_point) / normalization
        return -np.linalg.norm(shifted, axis=1)

    optimizer = NSGA3(population_size=40, survival=my_scorer)
    ```
"""

from typing import Protocol, runtime_checkable

import numpy as np


@runtime_checkable
class Objective(Protocol):
    """An objective exposing an ``evaluate`` method.

    The method must be pure: the same candidate always yields the same value,
    and evaluating one candidate must not affect another.
    """

    def evaluate(self, x: np.ndarray) -> float:
        """Return the objective value of candidate x (shape (n_vars,))."""
        ...


@runtime_checkable
class SurvivalScorer(Protocol):
    """Protocol for survival score assignment strategies.

    Parameters:
        objectives: Objective values of the combined population. Shape (n, n_obj).
        fronts: Index arrays of the Pareto fronts, front 0 first.
        n_survive: Number of candidates that survive truncation.
        ideal_point: Per-objective minimum over the selection set.
        normalization: Strictly positive per-objective scale of front 0.
        extreme: Indices into fronts[0] of the extreme points.
        rng: Random number generator for stochastic tie-breaking.

    Returns:
        Float array of shape (n,). Higher scores are preferred among
        candidates of equal rank. Scores are never compared across ranks.
    """

    def __call__(
        self,
        objectives: np.ndarray,
        fronts: list[np.ndarray],
        n_survive: int,
        *,
        ideal_point: np.ndarray,
        normalization: np.ndarray,
        extreme: np.ndarray,
        rng: np.random.Generator,
    ) -> np.ndarray: ...
