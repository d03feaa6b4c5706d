"""ZDT test problems for multi-objective optimization benchmarking.

The ZDT (Zitzler-Deb-Thiele) test suite is a standard benchmark for
multi-objective evolutionary algorithms. All problems have:
- n decision variables in [0, 1]
- 2 objectives to minimize
- Known Pareto-optimal fronts for validation

Each problem is a tuple of scalar objectives, the form ``optimize()`` takes.

References:
    Zitzler, E., Deb, K., & Thiele, L. (2000). Comparison of multiobjective
    evolutionary algorithms: Empirical results. Evolutionary computation, 8(2), 173-195.
"""

from collections.abc import Callable

import numpy as np

from niche_forge import non_dominated_sort

# Problem configuration
N_VARS: int = 30
BOUNDS: tuple[float, float] = (0.0, 1.0)

Objective = Callable[[np.ndarray], float]


def f1(x: np.ndarray) -> float:
    """First objective shared by all ZDT problems."""
    return float(x[0])


def _g(x: np.ndarray) -> float:
    return 1.0 + 9.0 * float(np.sum(x[1:])) / (len(x) - 1)


def zdt1_f2(x: np.ndarray) -> float:
    """ZDT1: Convex Pareto front, f2 = 1 - sqrt(f1) at g = 1."""
    g = _g(x)
    return g * (1.0 - np.sqrt(x[0] / g))


def zdt2_f2(x: np.ndarray) -> float:
    """ZDT2: Non-convex (concave) Pareto front, f2 = 1 - f1^2 at g = 1."""
    g = _g(x)
    return g * (1.0 - (x[0] / g) ** 2)


def zdt3_f2(x: np.ndarray) -> float:
    """ZDT3: Discontinuous Pareto front made of several convex parts."""
    g = _g(x)
    ratio = x[0] / g
    return g * (1.0 - np.sqrt(ratio) - ratio * np.sin(10.0 * np.pi * x[0]))


def pareto_front(problem_name: str, n_points: int = 500) -> np.ndarray:
    """Sample the true Pareto front of a ZDT problem.

    Args:
        problem_name: One of the keys of PROBLEMS.
        n_points: Number of f1 samples in [0, 1].

    Returns:
        (k, 2) objective values on the front. For ZDT3 only the
        non-dominated samples are kept, so k < n_points.
    """
    front_f1 = np.linspace(0.0, 1.0, n_points)
    if problem_name == "zdt1":
        front_f2 = 1.0 - np.sqrt(front_f1)
    elif problem_name == "zdt2":
        front_f2 = 1.0 - front_f1**2
    elif problem_name == "zdt3":
        front_f2 = 1.0 - np.sqrt(front_f1) - front_f1 * np.sin(10.0 * np.pi * front_f1)
    else:
        raise KeyError(f"unknown problem '{problem_name}', available: {', '.join(PROBLEMS)}")

    front = np.column_stack([front_f1, front_f2])
    return front[non_dominated_sort(front) == 0]


# Registry of all ZDT problems
PROBLEMS: dict[str, tuple[Objective, Objective]] = {
    "zdt1": (f1, zdt1_f2),
    "zdt2": (f1, zdt2_f2),
    "zdt3": (f1, zdt3_f2),
}
