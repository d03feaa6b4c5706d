"""niche-forge: Reference-direction based many-objective optimization.

A pure numpy implementation of NSGA-III and AGE-MOEA for box-bounded
multi-objective problems, together with the building blocks they are made of
(non-dominated sorting, normalization, variation operators, survival scorers)
and offline quality indicators.

Example:
    >>> import numpy as np
    >>> from niche_forge import NSGA3
    >>> def f1(x): return x[0]
    >>> def f2(x): return 1.0 - np.sqrt(x[0])
    >>> optimizer = NSGA3(population_size=12, max_generations=5, seed=42)
    >>> summary = optimizer.optimize((f1, f2), np.array([0.5]))
    >>> optimizer.pareto_front.shape[1]
    2
"""

from niche_forge.callbacks import Callback, ProgressLogger, QueryFront
from niche_forge.indicators import epsilon, igd, igd_plus
from niche_forge.normalization import find_extreme_points, ideal_point, normalize_front, point_to_line_distance
from niche_forge.operators import (
    create_offspring,
    lift,
    lift_parallel,
    polynomial_mutation,
    sbx_crossover,
    select_parent_pairs,
    stack_objectives,
)
from niche_forge.optimizer import AGEMOEA, NSGA3
from niche_forge.population import IndividualView, Population
from niche_forge.primitives import dominates, dominates_matrix, fast_non_dominated_sort, non_dominated_sort
from niche_forge.reference import das_dennis, default_reference_directions
from niche_forge.registry import SurvivalRegistry, list_survivals
from niche_forge.results import NSGA3Result
from niche_forge.survival import agemoea_survival, nsga3_survival, truncate

__all__ = [
    # Algorithms
    "NSGA3",
    "AGEMOEA",
    # Callbacks
    "Callback",
    "ProgressLogger",
    "QueryFront",
    # Survival strategies
    "nsga3_survival",
    "agemoea_survival",
    "truncate",
    # Genetic operators
    "stack_objectives",
    "lift",
    "lift_parallel",
    "select_parent_pairs",
    "create_offspring",
    "sbx_crossover",
    "polynomial_mutation",
    # Primitives
    "dominates",
    "dominates_matrix",
    "fast_non_dominated_sort",
    "non_dominated_sort",
    # Normalization
    "ideal_point",
    "point_to_line_distance",
    "find_extreme_points",
    "normalize_front",
    # Reference directions
    "das_dennis",
    "default_reference_directions",
    # Registry system
    "SurvivalRegistry",
    "list_survivals",
    # Data structures
    "Population",
    "IndividualView",
    "NSGA3Result",
    # Quality indicators
    "epsilon",
    "igd",
    "igd_plus",
]
