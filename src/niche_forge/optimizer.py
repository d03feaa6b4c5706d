"""Generational drivers: NSGA-III and AGE-MOEA.

Both optimizers share one loop and differ only in the survival scorer:

    optimizer = NSGA3(population_size=40, max_generations=100, seed=7)
    summary = optimizer.optimize((f1, f2), x0)
    optimizer.pareto_set     # (k, n_vars) decision variables of front 0
    optimizer.pareto_front   # (k, n_obj) objective values of front 0

Each generation:
    1. Create P offspring by random pairing, SBX crossover and polynomial mutation
    2. Evaluate the combined population of 2P candidates
    3. Sort it into Pareto fronts
    4. Accumulate fronts until at least P candidates are selected
    5. Compute the ideal point, extreme points and normalization vector
    6. Assign survival scores
    7. Keep the P best candidates by (rank, descending score)
    8. Notify callbacks; any of them may stop the run
"""

import logging
from collections.abc import Sequence

import numpy as np

# Import the survival package to trigger strategy registration
import niche_forge.survival  # noqa: F401
from niche_forge.callbacks import Callback
from niche_forge.normalization import find_extreme_points, ideal_point, normalize_front
from niche_forge.operators import create_offspring, lift, lift_parallel, polynomial_mutation, sbx_crossover
from niche_forge.operators.base import ObjectiveLike, stack_objectives
from niche_forge.population import Population
from niche_forge.primitives import fast_non_dominated_sort
from niche_forge.protocols import SurvivalScorer
from niche_forge.reference import default_reference_directions
from niche_forge.registry import SurvivalRegistry
from niche_forge.results import NSGA3Result
from niche_forge.survival.truncation import selection_set, truncate

logger = logging.getLogger(__name__)

BoundLike = float | Sequence[float] | np.ndarray


class NSGA3:
    """Reference-direction based many-objective evolutionary optimizer.

    All configuration is fixed at construction. ``optimize()`` can be called
    repeatedly; each call overwrites the stored Pareto set and front.

    Args:
        reference_directions: Reference directions, shape (n_dirs, n_obj).
            None generates Das-Dennis directions sized to the population once
            the number of objectives is known.
        population_size: Population size P. Must be at least 4 and a multiple
            of 4.
        max_generations: Maximum number of generations G.
        crossover_prob: Probability of crossing a parent pair.
        mutation_prob: Per-variable mutation probability. None uses 1/n_vars.
        crossover_eta: SBX distribution index (crossover strength).
        mutation_eta: Polynomial mutation distribution index (mutation strength).
        epsilon: Parents closer than this on every variable are not crossed.
        lower_bound: Lower box bound, scalar or per-variable.
        upper_bound: Upper box bound, scalar or per-variable.
        survival: Survival strategy: a registered name ("nsga3", "agemoea") or
            a SurvivalScorer callable.
        n_workers: Workers for objective evaluation. 1 is sequential, -1 uses
            all cores (objectives must be picklable).
        seed: Seed of the run's random number generator. None draws fresh
            entropy on every optimize() call.

    Raises:
        ValueError: If a probability is outside [0, 1], max_generations is
            negative, epsilon or a distribution index is negative, or
            n_workers is invalid.
    """

    def __init__(
        self,
        reference_directions: np.ndarray | None = None,
        population_size: int = 100,
        max_generations: int = 2000,
        crossover_prob: float = 0.6,
        mutation_prob: float | None = None,
        crossover_eta: float = 20.0,
        mutation_eta: float = 20.0,
        epsilon: float = 1e-6,
        lower_bound: BoundLike = 0.0,
        upper_bound: BoundLike = 1.0,
        survival: str | SurvivalScorer = "nsga3",
        n_workers: int = 1,
        seed: int | None = None,
    ) -> None:
        if max_generations < 0:
            raise ValueError(f"max_generations must be non-negative, got {max_generations}")
        if not 0.0 <= crossover_prob <= 1.0:
            raise ValueError(f"crossover_prob must be in [0, 1], got {crossover_prob}")
        if mutation_prob is not None and not 0.0 <= mutation_prob <= 1.0:
            raise ValueError(f"mutation_prob must be in [0, 1], got {mutation_prob}")
        if crossover_eta < 0 or mutation_eta < 0:
            raise ValueError(
                f"distribution indices must be non-negative, got crossover_eta={crossover_eta}, "
                f"mutation_eta={mutation_eta}"
            )
        if epsilon < 0:
            raise ValueError(f"epsilon must be non-negative, got {epsilon}")
        if n_workers < 1 and n_workers != -1:
            raise ValueError(f"n_workers must be positive or -1 (all cores), got {n_workers}")

        self.reference_directions = (
            None if reference_directions is None else np.asarray(reference_directions, dtype=np.float64)
        )
        self.population_size = population_size
        self.max_generations = max_generations
        self.crossover_prob = crossover_prob
        self.mutation_prob = mutation_prob
        self.crossover_eta = crossover_eta
        self.mutation_eta = mutation_eta
        self.epsilon = epsilon
        self.lower_bound = lower_bound
        self.upper_bound = upper_bound
        self.survival = survival
        self.n_workers = n_workers
        self.seed = seed

        self._result: NSGA3Result | None = None
        self._pareto_set: np.ndarray | None = None
        self._pareto_front: np.ndarray | None = None

    @property
    def result(self) -> NSGA3Result | None:
        """Final state of the last completed run, or None."""
        return self._result

    @property
    def pareto_set(self) -> np.ndarray | None:
        """Read-only decision variables of the final front 0, shape (k, n_vars), or None."""
        return self._pareto_set

    @property
    def pareto_front(self) -> np.ndarray | None:
        """Read-only objective values of the final front 0, shape (k, n_obj), or None."""
        return self._pareto_front

    def _check_population_size(self) -> None:
        if self.population_size < 4 or self.population_size % 4 != 0:
            raise ValueError(
                f"population_size must be at least 4 and a multiple of 4, got {self.population_size}"
            )

    def _resolve_bounds(self, n_vars: int) -> tuple[np.ndarray, np.ndarray]:
        lower = np.asarray(self.lower_bound, dtype=np.float64).reshape(-1)
        upper = np.asarray(self.upper_bound, dtype=np.float64).reshape(-1)

        for name, bound in (("lower_bound", lower), ("upper_bound", upper)):
            if bound.shape[0] not in (1, n_vars):
                raise ValueError(
                    f"{name} has {bound.shape[0]} entries, expected 1 or {n_vars} to match the decision variables"
                )

        lower = np.broadcast_to(lower, (n_vars,)).copy()
        upper = np.broadcast_to(upper, (n_vars,)).copy()
        if np.any(lower > upper):
            raise ValueError("lower_bound must not exceed upper_bound")
        return lower, upper

    def _resolve_survival(self, n_obj: int) -> SurvivalScorer:
        if not isinstance(self.survival, str):
            return self.survival
        if self.survival != "nsga3":
            return SurvivalRegistry.get(self.survival)

        directions = self.reference_directions
        if directions is None:
            directions = default_reference_directions(n_obj, self.population_size)
        elif directions.ndim != 2 or directions.shape[1] != n_obj:
            raise ValueError(
                f"reference_directions must have shape (n_dirs, {n_obj}), got {directions.shape}"
            )
        return SurvivalRegistry.get("nsga3", reference_directions=directions)

    def optimize(
        self,
        objectives: Sequence[ObjectiveLike],
        iterate: np.ndarray,
        *callbacks: Callback,
    ) -> float:
        """Search for the Pareto set of the given objectives.

        Args:
            objectives: Objectives to minimize. Each is a callable x -> float
                or an object with an ``evaluate(x) -> float`` method.
            iterate: Starting point, a float array of shape (n_vars,). The
                initial population is sampled around it. On completion it is
                overwritten in place with the first Pareto set member.
            *callbacks: Observers notified at the start, after every
                generation and at the end.

        Returns:
            The smallest sum of objective values over the final population.

        Raises:
            ValueError: If the population size is invalid, the bounds do not
                match the decision variables, or the reference directions do
                not match the objectives. Nothing is evaluated in that case.
            TypeError: If iterate is not a float numpy array.
        """
        self._check_population_size()
        if not isinstance(iterate, np.ndarray) or not np.issubdtype(iterate.dtype, np.floating):
            raise TypeError("iterate must be a floating point numpy array, it is updated in place")

        n_vars = iterate.size
        n_obj = len(objectives)
        lower, upper = self._resolve_bounds(n_vars)
        scorer = self._resolve_survival(n_obj)

        pop_size = self.population_size
        evaluate_one = stack_objectives(objectives)
        evaluate = lift_parallel(evaluate_one, self.n_workers) if self.n_workers != 1 else lift(evaluate_one)
        crossover = sbx_crossover(eta=self.crossover_eta, bounds=(lower, upper), epsilon=self.epsilon)
        mutate = polynomial_mutation(eta=self.mutation_eta, prob=self.mutation_prob, bounds=(lower, upper))
        rng = np.random.default_rng(self.seed)

        start = iterate.reshape(-1)
        x = np.clip(start + rng.random((pop_size, n_vars)) - 0.5, lower, upper)
        survival_score = np.zeros(pop_size, dtype=np.float64)

        logger.info(
            "%s initialized: %d candidates, %d variables, %d objectives; optimization started",
            type(self).__name__,
            pop_size,
            n_vars,
            n_obj,
        )

        terminate = False
        for callback in callbacks:
            terminate |= bool(callback.on_begin(self, iterate))

        evaluations = 0
        generations_completed = 0

        for generation in range(1, self.max_generations + 1):
            if terminate:
                logger.warning("termination requested, stopping before generation %d", generation)
                break

            offspring = create_offspring(x, pop_size, crossover, mutate, self.crossover_prob, rng)
            combined_x = np.concatenate([x, offspring])

            combined_obj = evaluate(combined_x)
            evaluations += len(combined_x)

            fronts, ranks = fast_non_dominated_sort(combined_obj)
            selected = selection_set(fronts, pop_size)

            ideal = ideal_point(combined_obj[selected])
            first = combined_obj[fronts[0]]
            extreme = find_extreme_points(first, ideal)
            normalization = normalize_front(first - ideal, extreme)

            scores = scorer(
                combined_obj,
                fronts,
                pop_size,
                ideal_point=ideal,
                normalization=normalization,
                extreme=extreme,
                rng=rng,
            )
            survivors = truncate(ranks, scores, pop_size)
            x = combined_x[survivors]
            survival_score = scores[survivors].astype(np.float64)

            logger.debug(
                "generation %d: %d fronts, %d non-dominated, %d selected before truncation",
                generation,
                len(fronts),
                len(fronts[0]),
                len(selected),
            )

            generations_completed = generation
            for callback in callbacks:
                terminate |= bool(callback.on_generation_end(self, generation, combined_obj, fronts))

        final_obj = evaluate(x)
        evaluations += len(x)
        fronts, ranks = fast_non_dominated_sort(final_obj)

        self._result = NSGA3Result(
            population=Population(x=x, objectives=final_obj, rank=ranks, survival_score=survival_score),
            generations=generations_completed,
            evaluations=evaluations,
        )
        self._pareto_set = x[fronts[0]]
        self._pareto_front = final_obj[fronts[0]]
        self._pareto_set.flags.writeable = False
        self._pareto_front.flags.writeable = False

        iterate[...] = self._pareto_set[0].reshape(iterate.shape)

        for callback in callbacks:
            callback.on_end(self, iterate)

        logger.info(
            "%s finished after %d generations: %d Pareto-optimal candidates, %d evaluations",
            type(self).__name__,
            generations_completed,
            len(fronts[0]),
            evaluations,
        )

        return float(final_obj.sum(axis=1).min())


class AGEMOEA(NSGA3):
    """Adaptive geometry estimation based optimizer (AGE-MOEA).

    Same generational loop as NSGA3 with the "agemoea" survival scorer, which
    needs no reference directions. Accepts the same keyword arguments as
    NSGA3 except reference_directions and survival.
    """

    def __init__(self, **kwargs) -> None:
        if "reference_directions" in kwargs or "survival" in kwargs:
            raise TypeError("AGEMOEA does not accept reference_directions or survival")
        super().__init__(survival="agemoea", **kwargs)
