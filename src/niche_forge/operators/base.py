"""Objective evaluation helpers.

This module turns caller-supplied objectives into population-level evaluators:

- stack_objectives: combine scalar objectives into one vector-valued function
- lift: apply a per-individual function to a whole population
- lift_parallel: the same, with joblib workers
"""

from collections.abc import Callable, Sequence

import numpy as np

from niche_forge.protocols import Objective

ObjectiveLike = Callable[[np.ndarray], float] | Objective


def _as_callable(objective: ObjectiveLike) -> Callable[[np.ndarray], float]:
    if isinstance(objective, Objective):
        return objective.evaluate
    if callable(objective):
        return objective
    raise TypeError(f"objective must be callable or expose evaluate(), got {type(objective).__name__}")


def stack_objectives(objectives: Sequence[ObjectiveLike]) -> Callable[[np.ndarray], np.ndarray]:
    """Combine scalar objectives into a single vector-valued function.

    Args:
        objectives: Sequence of objectives. Each is a callable x -> float or
            an object with an ``evaluate(x) -> float`` method.

    Returns:
        A function with signature (n_vars,) -> (n_obj,).

    Raises:
        ValueError: If objectives is empty.
        TypeError: If an objective is neither callable nor has evaluate().

    Example:
        >>> f = stack_objectives([lambda x: x[0], lambda x: 1 - x[0]])
        >>> f(np.array([0.25]))
        array([0.25, 0.75])
    """
    if len(objectives) == 0:
        raise ValueError("at least one objective is required")
    functions = [_as_callable(objective) for objective in objectives]

    def evaluate(x: np.ndarray) -> np.ndarray:
        return np.array([float(fn(x)) for fn in functions], dtype=np.float64)

    return evaluate


def lift(fn: Callable[[np.ndarray], np.ndarray]) -> Callable[[np.ndarray], np.ndarray]:
    """Turn a one-candidate evaluator into a row-wise population evaluator.

    Args:
        fn: Maps one decision vector (n_vars,) to an output vector (n_out,).

    Returns:
        A function mapping an (n, n_vars) population to (n, n_out), one row
        per candidate, evaluated in order.

    Example:
        >>> evaluate = lift(stack_objectives([np.sum, np.prod]))
        >>> evaluate(np.array([[1.0, 2.0], [3.0, 4.0]]))
        array([[ 3.,  2.],
               [ 7., 12.]])
    """

    def lifted(x: np.ndarray) -> np.ndarray:
        return np.stack([fn(row) for row in x])

    return lifted


def lift_parallel(fn: Callable[[np.ndarray], np.ndarray], n_workers: int) -> Callable[[np.ndarray], np.ndarray]:
    """Like lift, but candidates are evaluated by a joblib worker pool.

    Args:
        fn: Maps one decision vector to an output vector. It is shipped to the
            workers, so it has to be picklable.
        n_workers: Pool size passed to joblib as n_jobs; -1 uses every core.

    Returns:
        A function mapping an (n, n_vars) population to (n, n_out). Row order
        matches the input regardless of which worker finished first.
    """
    from joblib import Parallel, delayed

    def lifted(x: np.ndarray) -> np.ndarray:
        outputs: list[np.ndarray] = Parallel(n_jobs=n_workers)(  # type: ignore[assignment]
            delayed(fn)(row) for row in x
        )
        return np.stack(outputs)

    return lifted
