"""End-to-end tests for the NSGA3 and AGEMOEA drivers."""

import logging

import numpy as np
import pytest

from niche_forge import AGEMOEA, NSGA3, das_dennis
from niche_forge.indicators import igd


def _sqrt_front_deviation(front: np.ndarray) -> float:
    """Mean squared deviation from the curve f2 = 1 - sqrt(f1)."""
    return float(np.mean((front[:, 1] - (1.0 - np.sqrt(front[:, 0]))) ** 2))


# =============================================================================
# Convergence
# =============================================================================


class TestConvergence:
    def test_sqrt_front(self, sqrt_front_objectives):
        optimizer = NSGA3(population_size=20, max_generations=50, lower_bound=0.0, upper_bound=1.0, seed=0)
        optimizer.optimize(sqrt_front_objectives, np.array([0.5]))

        front = optimizer.pareto_front
        assert front.shape[1] == 2
        assert _sqrt_front_deviation(front) < 0.01

    def test_sqrt_front_is_spread(self, sqrt_front_objectives):
        optimizer = NSGA3(population_size=20, max_generations=50, seed=0)
        optimizer.optimize(sqrt_front_objectives, np.array([0.5]))

        f1 = optimizer.pareto_front[:, 0]
        assert f1.min() < 0.1
        assert f1.max() > 0.9

    def test_zdt1(self, zdt1_objectives):
        optimizer = NSGA3(population_size=40, max_generations=150, seed=3)
        optimizer.optimize(zdt1_objectives, np.full(5, 0.5))

        f1 = np.linspace(0.0, 1.0, 100)
        reference = np.column_stack([f1, 1.0 - np.sqrt(f1)])
        assert igd(optimizer.pareto_front, reference) < 0.1

    def test_agemoea_sqrt_front(self, sqrt_front_objectives):
        optimizer = AGEMOEA(population_size=20, max_generations=50, seed=0)
        optimizer.optimize(sqrt_front_objectives, np.array([0.5]))

        assert _sqrt_front_deviation(optimizer.pareto_front) < 0.01

    def test_agemoea_zdt1(self, zdt1_objectives):
        optimizer = AGEMOEA(population_size=40, max_generations=150, seed=3)
        optimizer.optimize(zdt1_objectives, np.full(5, 0.5))

        f1 = np.linspace(0.0, 1.0, 100)
        reference = np.column_stack([f1, 1.0 - np.sqrt(f1)])
        assert igd(optimizer.pareto_front, reference) < 0.1

    def test_three_objectives(self, dtlz1_like_objectives):
        optimizer = NSGA3(population_size=28, max_generations=60, seed=5)
        optimizer.optimize(dtlz1_like_objectives, np.full(3, 0.5))

        front = optimizer.pareto_front
        assert front.shape[1] == 3
        # The optimal front is the plane f1 + f2 + f3 = 1
        assert np.mean(front.sum(axis=1)) < 1.1


# =============================================================================
# Configuration errors
# =============================================================================


class TestConfigurationErrors:
    @pytest.mark.parametrize("population_size", [10, 2, 0, 6])
    def test_invalid_population_size(self, population_size):
        calls = []

        def f(x):
            calls.append(x)
            return float(x[0])

        optimizer = NSGA3(population_size=population_size, max_generations=5)
        with pytest.raises(ValueError, match="population_size must be at least 4 and a multiple of 4"):
            optimizer.optimize((f, f), np.array([0.5]))

        assert calls == []
        assert optimizer.pareto_set is None
        assert optimizer.pareto_front is None
        assert optimizer.result is None

    def test_negative_generations(self):
        with pytest.raises(ValueError, match="max_generations must be non-negative"):
            NSGA3(max_generations=-1)

    @pytest.mark.parametrize("kwargs", [{"crossover_prob": 1.5}, {"crossover_prob": -0.1}])
    def test_crossover_probability_range(self, kwargs):
        with pytest.raises(ValueError, match="crossover_prob must be in"):
            NSGA3(**kwargs)

    def test_mutation_probability_range(self):
        with pytest.raises(ValueError, match="mutation_prob must be in"):
            NSGA3(mutation_prob=2.0)

    def test_negative_distribution_index(self):
        with pytest.raises(ValueError, match="distribution indices must be non-negative"):
            NSGA3(mutation_eta=-1.0)

    def test_negative_epsilon(self):
        with pytest.raises(ValueError, match="epsilon must be non-negative"):
            NSGA3(epsilon=-1e-6)

    @pytest.mark.parametrize("n_workers", [0, -2])
    def test_invalid_n_workers(self, n_workers):
        with pytest.raises(ValueError, match="n_workers must be positive or -1"):
            NSGA3(n_workers=n_workers)

    def test_bound_dimension_mismatch(self, sqrt_front_objectives):
        optimizer = NSGA3(population_size=8, max_generations=2, lower_bound=[0.0, 0.0], upper_bound=1.0)
        with pytest.raises(ValueError, match="lower_bound has 2 entries, expected 1 or 3"):
            optimizer.optimize(sqrt_front_objectives, np.full(3, 0.5))
        assert optimizer.pareto_set is None

    def test_lower_above_upper(self, sqrt_front_objectives):
        optimizer = NSGA3(population_size=8, max_generations=2, lower_bound=1.0, upper_bound=0.0)
        with pytest.raises(ValueError, match="must not exceed upper_bound"):
            optimizer.optimize(sqrt_front_objectives, np.array([0.5]))

    def test_integer_iterate_rejected(self, sqrt_front_objectives):
        optimizer = NSGA3(population_size=8, max_generations=2)
        with pytest.raises(TypeError, match="floating point numpy array"):
            optimizer.optimize(sqrt_front_objectives, np.array([0]))

    def test_unknown_survival(self, sqrt_front_objectives):
        optimizer = NSGA3(population_size=8, max_generations=2, survival="missing")
        with pytest.raises(KeyError, match="unknown survival strategy 'missing'"):
            optimizer.optimize(sqrt_front_objectives, np.array([0.5]))

    def test_reference_directions_objective_mismatch(self, sqrt_front_objectives):
        optimizer = NSGA3(reference_directions=das_dennis(4, 3), population_size=8, max_generations=2)
        with pytest.raises(ValueError, match=r"reference_directions must have shape \(n_dirs, 2\)"):
            optimizer.optimize(sqrt_front_objectives, np.array([0.5]))

    def test_agemoea_rejects_reference_directions(self):
        with pytest.raises(TypeError, match="AGEMOEA does not accept"):
            AGEMOEA(reference_directions=das_dennis(4, 2))


# =============================================================================
# Results and accessors
# =============================================================================


class TestResults:
    def test_accessors_none_before_run(self):
        optimizer = NSGA3()
        assert optimizer.pareto_set is None
        assert optimizer.pareto_front is None
        assert optimizer.result is None

    def test_pareto_set_matches_front(self, sqrt_front_objectives):
        optimizer = NSGA3(population_size=12, max_generations=10, seed=0)
        optimizer.optimize(sqrt_front_objectives, np.array([0.5]))

        expected = np.column_stack([optimizer.pareto_set[:, 0], 1.0 - np.sqrt(optimizer.pareto_set[:, 0])])
        np.testing.assert_allclose(optimizer.pareto_front, expected)

    def test_accessors_are_read_only(self, sqrt_front_objectives):
        optimizer = NSGA3(population_size=8, max_generations=3, seed=0)
        optimizer.optimize(sqrt_front_objectives, np.array([0.5]))

        with pytest.raises(ValueError, match="read-only"):
            optimizer.pareto_set[0, 0] = 0.0
        with pytest.raises(ValueError, match="read-only"):
            optimizer.pareto_front[0, 0] = 0.0

    def test_iterate_set_to_first_pareto_member(self, zdt1_objectives):
        optimizer = NSGA3(population_size=12, max_generations=10, seed=0)
        iterate = np.full(5, 0.5)
        optimizer.optimize(zdt1_objectives, iterate)

        np.testing.assert_array_equal(iterate, optimizer.pareto_set[0])

    def test_returns_best_aggregate_objective(self, zdt1_objectives):
        optimizer = NSGA3(population_size=12, max_generations=10, seed=0)
        summary = optimizer.optimize(zdt1_objectives, np.full(5, 0.5))

        assert isinstance(summary, float)
        assert summary == pytest.approx(optimizer.result.population.objectives.sum(axis=1).min())

    def test_result_population(self, zdt1_objectives):
        optimizer = NSGA3(population_size=12, max_generations=10, seed=0)
        optimizer.optimize(zdt1_objectives, np.full(5, 0.5))
        result = optimizer.result

        assert len(result.population) == 12
        assert result.generations == 10
        assert result.evaluations == 2 * 12 * 10 + 12
        np.testing.assert_array_equal(result.pareto_front.x, optimizer.pareto_set)

    def test_zero_generations_evaluates_initial_population(self, sqrt_front_objectives):
        optimizer = NSGA3(population_size=8, max_generations=0, seed=0)
        optimizer.optimize(sqrt_front_objectives, np.array([0.5]))

        assert optimizer.result.generations == 0
        assert optimizer.result.evaluations == 8

    def test_population_within_bounds(self, zdt1_objectives):
        lower = np.array([0.0, 0.0, 0.1, 0.2, 0.3])
        upper = np.array([1.0, 0.5, 0.6, 0.7, 0.8])
        optimizer = NSGA3(population_size=12, max_generations=10, lower_bound=lower, upper_bound=upper, seed=0)
        optimizer.optimize(zdt1_objectives, np.full(5, 0.5))

        x = optimizer.result.population.x
        assert np.all(x >= lower)
        assert np.all(x <= upper)

    def test_second_run_overwrites_results(self, sqrt_front_objectives, zdt1_objectives):
        optimizer = NSGA3(population_size=8, max_generations=3, seed=0)
        optimizer.optimize(zdt1_objectives, np.full(5, 0.5))
        optimizer.optimize(sqrt_front_objectives, np.array([0.5]))

        assert optimizer.pareto_set.shape[1] == 1


# =============================================================================
# Reproducibility and strategies
# =============================================================================


class TestReproducibility:
    def test_same_seed_same_front(self, zdt1_objectives):
        a = NSGA3(population_size=12, max_generations=10, seed=42)
        b = NSGA3(population_size=12, max_generations=10, seed=42)
        a.optimize(zdt1_objectives, np.full(5, 0.5))
        b.optimize(zdt1_objectives, np.full(5, 0.5))

        np.testing.assert_array_equal(a.pareto_front, b.pareto_front)

    def test_parallel_matches_sequential(self, zdt1_objectives):
        sequential = NSGA3(population_size=12, max_generations=5, seed=7)
        parallel = NSGA3(population_size=12, max_generations=5, seed=7, n_workers=2)
        sequential.optimize(zdt1_objectives, np.full(5, 0.5))
        parallel.optimize(zdt1_objectives, np.full(5, 0.5))

        np.testing.assert_allclose(parallel.pareto_front, sequential.pareto_front)

    def test_custom_survival_callable(self, sqrt_front_objectives):
        calls = []

        def closest_to_ideal(objectives, fronts, n_survive, *, ideal_point, normalization, extreme, rng):
            calls.append(n_survive)
            return -np.linalg.norm((objectives - ideal_point) / normalization, axis=1)

        optimizer = NSGA3(population_size=8, max_generations=4, survival=closest_to_ideal, seed=0)
        optimizer.optimize(sqrt_front_objectives, np.array([0.5]))

        assert calls == [8, 8, 8, 8]

    def test_explicit_reference_directions(self, dtlz1_like_objectives):
        optimizer = NSGA3(reference_directions=das_dennis(3, 3), population_size=12, max_generations=5, seed=0)
        optimizer.optimize(dtlz1_like_objectives, np.full(3, 0.5))

        assert optimizer.pareto_front.shape[1] == 3


class TestLogging:
    def test_start_and_end_logged(self, sqrt_front_objectives, caplog):
        with caplog.at_level(logging.INFO, logger="niche_forge"):
            NSGA3(population_size=8, max_generations=2, seed=0).optimize(sqrt_front_objectives, np.array([0.5]))

        assert "optimization started" in caplog.text
        assert "finished after 2 generations" in caplog.text

    def test_generations_logged_at_debug(self, sqrt_front_objectives, caplog):
        with caplog.at_level(logging.DEBUG, logger="niche_forge"):
            NSGA3(population_size=8, max_generations=2, seed=0).optimize(sqrt_front_objectives, np.array([0.5]))

        debug = [r for r in caplog.records if r.levelno == logging.DEBUG]
        assert len(debug) == 2
