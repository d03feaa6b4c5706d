"""Shared test fixtures for niche-forge tests.

This module provides common fixtures used across test modules:
- rng: Seeded random number generator
- linear_front: Objective vectors on the line f1 + f2 = 1
- layered_objectives: Combined population with three clear fronts
- Objective tuples for the end-to-end optimizer tests
"""

import numpy as np
import pytest

from niche_forge import Population, non_dominated_sort


@pytest.fixture
def rng() -> np.random.Generator:
    """Provide a seeded random number generator for deterministic tests."""
    return np.random.default_rng(42)


@pytest.fixture
def linear_front() -> np.ndarray:
    """Eleven evenly spaced points on the linear front f1 + f2 = 1."""
    f1 = np.linspace(0.0, 1.0, 11)
    return np.column_stack([f1, 1.0 - f1])


@pytest.fixture
def layered_objectives() -> np.ndarray:
    """Combined population with three fronts.

    Front 0: indices 0, 1, 2
    Front 1: indices 3, 4
    Front 2: index 5
    """
    return np.array([
        [0.0, 1.0],
        [0.5, 0.5],
        [1.0, 0.0],
        [0.6, 1.1],
        [1.1, 0.6],
        [1.2, 1.2],
    ])


@pytest.fixture
def simple_population(layered_objectives) -> Population:
    """Population over layered_objectives with ranks and survival scores."""
    x = np.arange(12, dtype=np.float64).reshape(6, 2)
    ranks = non_dominated_sort(layered_objectives)
    scores = np.linspace(1.0, 0.0, 6)
    return Population(x=x, objectives=layered_objectives, rank=ranks, survival_score=scores)


@pytest.fixture
def sqrt_front_objectives():
    """Bi-objective problem with the convex front f2 = 1 - sqrt(f1).

    Single decision variable x[0] in [0, 1]; every x is Pareto optimal.
    """

    def f1(x: np.ndarray) -> float:
        return x[0]

    def f2(x: np.ndarray) -> float:
        return 1.0 - np.sqrt(x[0])

    return (f1, f2)


@pytest.fixture
def zdt1_objectives():
    """ZDT1 with 5 decision variables, as a tuple of scalar objectives."""

    def f1(x: np.ndarray) -> float:
        return x[0]

    def f2(x: np.ndarray) -> float:
        g = 1.0 + 9.0 * np.mean(x[1:])
        return g * (1.0 - np.sqrt(x[0] / g))

    return (f1, f2)


@pytest.fixture
def dtlz1_like_objectives():
    """Three objectives on a linear front, 3 decision variables in [0, 1]."""

    def f1(x: np.ndarray) -> float:
        return x[0] * x[1] + x[2] ** 2

    def f2(x: np.ndarray) -> float:
        return x[0] * (1.0 - x[1]) + x[2] ** 2

    def f3(x: np.ndarray) -> float:
        return (1.0 - x[0]) + x[2] ** 2

    return (f1, f2, f3)
