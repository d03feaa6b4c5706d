"""Survival score strategies."""

from niche_forge.registry import SurvivalRegistry
from niche_forge.survival.agemoea import agemoea_survival
from niche_forge.survival.nsga3 import nsga3_survival
from niche_forge.survival.truncation import boundary_front_index, selection_set, truncate

# Register built-in survival strategies
SurvivalRegistry.register("agemoea", agemoea_survival)
SurvivalRegistry.register("nsga3", nsga3_survival)

__all__ = ["agemoea_survival", "nsga3_survival", "boundary_front_index", "selection_set", "truncate"]
