"""Result type of a generational optimization run.

NSGA3Result is immutable (a frozen dataclass); numpy arrays are copied on
construction.
"""

from dataclasses import dataclass

import numpy as np

from niche_forge.population import Population


@dataclass(frozen=True)
class NSGA3Result:
    """Final state of an NSGA-III or AGE-MOEA run.

    Attributes:
        population: The final population with objectives, rank and (after at
            least one generation) survival scores.
        generations: Number of generations completed.
        evaluations: Total number of objective vector evaluations performed.

    Example:
        >>> x = np.array([[0.1], [0.5], [0.9]])
        >>> obj = np.array([[0.1, 0.9], [0.5, 0.5], [0.9, 0.95]])
        >>> pop = Population(x=x, objectives=obj, rank=np.array([0, 0, 1]))
        >>> result = NSGA3Result(population=pop, generations=10, evaluations=80)
        >>> len(result.pareto_front)
        2
    """

    population: Population
    generations: int
    evaluations: int

    def __post_init__(self) -> None:
        """Validate the population and counters.

        Raises:
            ValueError: If the population lacks objectives or ranks, or a
                counter is negative.
        """
        if self.population.objectives is None:
            raise ValueError("result population must have objectives")
        if self.population.rank is None:
            raise ValueError("result population must have ranks")
        if self.generations < 0:
            raise ValueError(f"generations must be non-negative, got {self.generations}")
        if self.evaluations < 0:
            raise ValueError(f"evaluations must be non-negative, got {self.evaluations}")

    @property
    def rank(self) -> np.ndarray:
        """Pareto rank of each candidate of the final population."""
        assert self.population.rank is not None
        return self.population.rank

    @property
    def pareto_front(self) -> Population:
        """The rank-0 candidates as a new Population."""
        return self.population.take(np.flatnonzero(self.rank == 0))
