"""Variation operators and objective evaluation.

This package provides:
- stack_objectives, lift, lift_parallel: objective evaluation over populations
- sbx_crossover: bounded Simulated Binary Crossover factory
- polynomial_mutation: polynomial mutation factory
- select_parent_pairs: uniform random parent pairing
- create_offspring: offspring via pairing, crossover, and mutation
"""

from niche_forge.operators.base import lift, lift_parallel, stack_objectives
from niche_forge.operators.selection import create_offspring, select_parent_pairs
from niche_forge.operators.standard import Bounds, polynomial_mutation, sbx_crossover

__all__ = [
    "Bounds",
    "lift",
    "lift_parallel",
    "stack_objectives",
    "sbx_crossover",
    "polynomial_mutation",
    "select_parent_pairs",
    "create_offspring",
]
