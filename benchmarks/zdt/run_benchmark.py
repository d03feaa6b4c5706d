"""Benchmark runner comparing niche-forge, Pymoo, and DEAP on ZDT problems.

This script runs NSGA-III (and AGE-MOEA where available) on ZDT1-3 using three
different libraries with consistent parameters to enable fair comparison. All
NSGA-III runs share the same Das-Dennis reference directions.

Usage:
    python benchmarks/zdt/run_benchmark.py
"""

import json
import logging
import random
import sys
import time
from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path

# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent.parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

import numpy as np
from pymoo.algorithms.moo.age import AGEMOEA as PymooAGEMOEA
from pymoo.algorithms.moo.nsga3 import NSGA3 as PymooNSGA3
from pymoo.core.problem import Problem as PymooProblem
from pymoo.operators.crossover.sbx import SBX
from pymoo.operators.mutation.pm import PM
from pymoo.operators.sampling.rnd import FloatRandomSampling
from pymoo.optimize import minimize
from pymoo.termination import get_termination

from benchmarks.metrics import front_quality
from benchmarks.zdt.problems import BOUNDS, N_VARS, PROBLEMS, Objective, pareto_front
from niche_forge import AGEMOEA, NSGA3, das_dennis

# Configure logging
logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)


# Experiment parameters
POP_SIZE = 92
N_PARTITIONS = 91
N_GENERATIONS = 250
CROSSOVER_PROB = 0.9
SBX_ETA = 15.0
PM_ETA = 20.0
MUTATION_PROB = 1.0 / N_VARS
N_RUNS = 10
SEEDS = list(range(N_RUNS))
REFERENCE_DIRECTIONS = das_dennis(N_PARTITIONS, 2)

Runner = Callable[[tuple[Objective, ...], int], np.ndarray]


def _niche_forge_kwargs(seed: int) -> dict:
    return {
        "population_size": POP_SIZE,
        "max_generations": N_GENERATIONS,
        "crossover_prob": CROSSOVER_PROB,
        "mutation_prob": MUTATION_PROB,
        "crossover_eta": SBX_ETA,
        "mutation_eta": PM_ETA,
        "lower_bound": BOUNDS[0],
        "upper_bound": BOUNDS[1],
        "seed": seed,
    }


def run_niche_forge_nsga3(objectives: tuple[Objective, ...], seed: int) -> np.ndarray:
    """Run NSGA-III using niche-forge.

    Args:
        objectives: The ZDT objectives.
        seed: Seed handed to the optimizer.

    Returns:
        Objective values of the final Pareto front.
    """
    optimizer = NSGA3(reference_directions=REFERENCE_DIRECTIONS, **_niche_forge_kwargs(seed))
    optimizer.optimize(objectives, np.full(N_VARS, 0.5 * (BOUNDS[0] + BOUNDS[1])))
    return np.asarray(optimizer.pareto_front)


def run_niche_forge_agemoea(objectives: tuple[Objective, ...], seed: int) -> np.ndarray:
    """Run AGE-MOEA using niche-forge."""
    optimizer = AGEMOEA(**_niche_forge_kwargs(seed))
    optimizer.optimize(objectives, np.full(N_VARS, 0.5 * (BOUNDS[0] + BOUNDS[1])))
    return np.asarray(optimizer.pareto_front)


class ScalarObjectivesProblem(PymooProblem):
    """Pymoo problem evaluating a tuple of scalar objectives row by row."""

    def __init__(self, objectives: tuple[Objective, ...]) -> None:
        super().__init__(n_var=N_VARS, n_obj=len(objectives), xl=BOUNDS[0], xu=BOUNDS[1])
        self._objectives = objectives

    def _evaluate(self, x: np.ndarray, out: dict, *args, **kwargs) -> None:
        out["F"] = np.array([[f(row) for f in self._objectives] for row in x])


def _pymoo_front(algorithm, objectives: tuple[Objective, ...], seed: int) -> np.ndarray:
    result = minimize(
        ScalarObjectivesProblem(objectives),
        algorithm,
        get_termination("n_gen", N_GENERATIONS),
        seed=seed,
        verbose=False,
    )
    return result.opt.get("F")


def _pymoo_variation() -> dict:
    return {
        "pop_size": POP_SIZE,
        "sampling": FloatRandomSampling(),
        "crossover": SBX(eta=SBX_ETA, prob=CROSSOVER_PROB),
        "mutation": PM(eta=PM_ETA, prob_var=MUTATION_PROB),
        "eliminate_duplicates": False,
    }


def run_pymoo_nsga3(objectives: tuple[Objective, ...], seed: int) -> np.ndarray:
    """Run NSGA-III using Pymoo with the shared reference directions."""
    return _pymoo_front(PymooNSGA3(ref_dirs=REFERENCE_DIRECTIONS, **_pymoo_variation()), objectives, seed)


def run_pymoo_agemoea(objectives: tuple[Objective, ...], seed: int) -> np.ndarray:
    """Run AGE-MOEA using Pymoo."""
    return _pymoo_front(PymooAGEMOEA(**_pymoo_variation()), objectives, seed)


def _deap_toolbox(objectives: tuple[Objective, ...]):
    """Build a DEAP toolbox for minimizing the given objectives.

    DEAP's creator registers classes globally, so the fitness and individual
    types are recreated on every call to match the number of objectives.
    """
    from deap import base, creator, tools

    for name in ("FitnessMulti", "Point"):
        if hasattr(creator, name):
            delattr(creator, name)
    creator.create("FitnessMulti", base.Fitness, weights=(-1.0,) * len(objectives))
    creator.create("Point", list, fitness=creator.FitnessMulti)

    def evaluate(individual: list) -> tuple[float, ...]:
        x = np.asarray(individual)
        return tuple(f(x) for f in objectives)

    toolbox = base.Toolbox()
    toolbox.register("coordinate", random.uniform, BOUNDS[0], BOUNDS[1])
    toolbox.register("point", tools.initRepeat, creator.Point, toolbox.coordinate, n=N_VARS)
    toolbox.register("evaluate", evaluate)
    toolbox.register("mate", tools.cxSimulatedBinaryBounded, eta=SBX_ETA, low=BOUNDS[0], up=BOUNDS[1])
    toolbox.register(
        "mutate", tools.mutPolynomialBounded, eta=PM_ETA, low=BOUNDS[0], up=BOUNDS[1], indpb=MUTATION_PROB
    )
    toolbox.register("select", tools.selNSGA3, ref_points=REFERENCE_DIRECTIONS)
    return toolbox


def _deap_assign_fitness(toolbox, individuals: list) -> None:
    for ind in individuals:
        if not ind.fitness.valid:
            ind.fitness.values = toolbox.evaluate(ind)


def run_deap_nsga3(objectives: tuple[Objective, ...], seed: int) -> np.ndarray:
    """Run NSGA-III using DEAP's selNSGA3 in a (mu + lambda) loop."""
    from deap import algorithms, tools

    toolbox = _deap_toolbox(objectives)
    random.seed(seed)
    np.random.seed(seed)

    pop = [toolbox.point() for _ in range(POP_SIZE)]
    _deap_assign_fitness(toolbox, pop)
    for _ in range(N_GENERATIONS):
        offspring = algorithms.varAnd(pop, toolbox, CROSSOVER_PROB, 1.0)
        _deap_assign_fitness(toolbox, offspring)
        pop = toolbox.select(pop + offspring, POP_SIZE)

    first_front = tools.sortNondominated(pop, len(pop), first_front_only=True)[0]
    return np.array([ind.fitness.values for ind in first_front])


RUNNERS: dict[str, Runner] = {
    "niche-forge-nsga3": run_niche_forge_nsga3,
    "niche-forge-agemoea": run_niche_forge_agemoea,
    "pymoo-nsga3": run_pymoo_nsga3,
    "pymoo-agemoea": run_pymoo_agemoea,
    "deap-nsga3": run_deap_nsga3,
}


def run_benchmark() -> dict:
    """Run every runner on every problem for every seed.

    Returns:
        Dictionary with a "metadata" entry holding the experiment parameters
        and a "results" list with one record per run.
    """
    metadata = {
        "timestamp": datetime.now(UTC).isoformat(),
        "parameters": {
            "pop_size": POP_SIZE,
            "n_partitions": N_PARTITIONS,
            "n_generations": N_GENERATIONS,
            "n_vars": N_VARS,
            "bounds": list(BOUNDS),
            "crossover_prob": CROSSOVER_PROB,
            "sbx_eta": SBX_ETA,
            "pm_eta": PM_ETA,
            "mutation_prob": MUTATION_PROB,
            "n_runs": N_RUNS,
            "seeds": SEEDS,
        },
    }

    records = []
    n_total = len(PROBLEMS) * len(RUNNERS) * len(SEEDS)
    for problem_name, objectives in PROBLEMS.items():
        true_front = pareto_front(problem_name)
        for library_name, runner in RUNNERS.items():
            for seed in SEEDS:
                logger.info(
                    "[%d/%d] %s on %s (seed=%d)", len(records) + 1, n_total, library_name, problem_name, seed
                )
                tic = time.perf_counter()
                front = runner(objectives, seed)
                elapsed = time.perf_counter() - tic

                quality = front_quality(front, true_front)
                logger.info(
                    "  hv=%.4f igd=%.5f igd+=%.5f in %.2fs",
                    quality["hypervolume"],
                    quality["igd"],
                    quality["igd_plus"],
                    elapsed,
                )
                records.append(
                    {
                        "library": library_name,
                        "problem": problem_name,
                        "seed": seed,
                        **quality,
                        "front_size": len(front),
                        "time_seconds": elapsed,
                    }
                )

    return {"metadata": metadata, "results": records}


def print_summary(results: dict, metrics: tuple[str, ...] = ("hypervolume", "igd_plus", "time_seconds")) -> None:
    """Print one mean +/- std table per metric, problems as rows and runners as columns."""
    records = results["results"]
    problems = sorted({r["problem"] for r in records})
    width = max(len(name) for name in RUNNERS) + 2

    print(f"\nZDT benchmark: pop_size={POP_SIZE}, generations={N_GENERATIONS}, runs={N_RUNS}")
    for metric in metrics:
        header = f"{metric:<12}" + "".join(f"{name:>{width}}" for name in RUNNERS)
        print("\n" + header)
        print("-" * len(header))
        for problem in problems:
            cells = []
            for name in RUNNERS:
                values = [r[metric] for r in records if r["problem"] == problem and r["library"] == name]
                cell = f"{np.mean(values):.4f}+/-{np.std(values):.3f}" if values else "n/a"
                cells.append(f"{cell:>{width}}")
            print(f"{problem.upper():<12}" + "".join(cells))
    print()


def main() -> None:
    results = run_benchmark()

    output_path = Path(__file__).parent / "results" / "benchmark_results.json"
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(results, indent=2))
    logger.info("Wrote %d records to %s", len(results["results"]), output_path)

    print_summary(results)


if __name__ == "__main__":
    main()
