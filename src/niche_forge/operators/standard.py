"""Standard bounded variation operators.

This module provides the variation operators used to produce offspring:

- SBX (Simulated Binary Crossover): blends two parents into two children
  using a polynomial probability distribution that respects the bounds
- Polynomial Mutation: a bounded perturbation with controllable spread

Both operators are factory functions. The returned operators take the random
number generator as an explicit argument so a single seeded generator drives
a whole run.
"""

from collections.abc import Callable

import numpy as np

Bounds = tuple[float, float] | tuple[np.ndarray, np.ndarray]
"""(lower, upper) box for the decision vector: two scalars shared by every
variable, or two arrays with one entry per variable."""

Crossover = Callable[[np.ndarray, np.ndarray, np.random.Generator], tuple[np.ndarray, np.ndarray]]
Mutation = Callable[[np.ndarray, np.random.Generator], np.ndarray]

MIN_SPREAD = 1e-10
"""Lower limit on the parent distance used as SBX denominator."""


def sbx_crossover(
    eta: float = 20.0,
    bounds: Bounds = (0.0, 1.0),
    epsilon: float = 1e-14,
) -> Crossover:
    """Create a bounded Simulated Binary Crossover operator (Deb & Agrawal, 1995).

    For every variable the two parent values y1 <= y2 are spread into a lower
    child value and an upper child value. The spread factor accounts for the
    distance of each parent value to its bound, so children never need more
    than a final clamp to stay feasible. An independent coin flip per variable
    decides whether child A receives the lower or the upper value; child B
    receives the other one.

    Args:
        eta: Distribution index (default 20.0). Higher values produce children
            closer to the parents.
        bounds: Lower and upper bounds, scalar or per-variable
            (default (0.0, 1.0)).
        epsilon: Variables whose parent values differ by less than this are
            not blended. If that holds for every variable, the parents are
            returned unchanged.

    Returns:
        A function (parent_a, parent_b, rng) -> (child_a, child_b).

    Example:
        >>> crossover = sbx_crossover(eta=15.0, bounds=(0.0, 1.0))
        >>> rng = np.random.default_rng(42)
        >>> a, b = crossover(np.array([0.2, 0.4]), np.array([0.3, 0.9]), rng)
        >>> a.shape, b.shape
        ((2,), (2,))
    """
    lower, upper = bounds
    exponent = 1.0 / (eta + 1.0)

    def crossover(
        parent_a: np.ndarray, parent_b: np.ndarray, rng: np.random.Generator
    ) -> tuple[np.ndarray, np.ndarray]:
        """Apply SBX to two parents, returning two children."""
        same = np.abs(parent_a - parent_b) < epsilon
        if np.all(same):
            return parent_a.copy(), parent_b.copy()

        n_vars = len(parent_a)
        y1 = np.minimum(parent_a, parent_b)
        y2 = np.maximum(parent_a, parent_b)
        spread = np.maximum(y2 - y1, MIN_SPREAD)

        u = rng.random(n_vars)

        def betaq(beta: np.ndarray) -> np.ndarray:
            alpha = 2.0 - beta ** -(eta + 1.0)
            ua = u * alpha
            with np.errstate(divide="ignore", invalid="ignore"):
                return np.where(u <= 1.0 / alpha, ua**exponent, (1.0 / (2.0 - ua)) ** exponent)

        beta_low = 1.0 + 2.0 * (y1 - lower) / spread
        beta_high = 1.0 + 2.0 * (upper - y2) / spread

        c_low = np.clip(0.5 * ((y1 + y2) - betaq(beta_low) * spread), lower, upper)
        c_high = np.clip(0.5 * ((y1 + y2) + betaq(beta_high) * spread), lower, upper)

        swap = rng.random(n_vars) > 0.5
        child_a = np.where(swap, c_high, c_low)
        child_b = np.where(swap, c_low, c_high)

        # Coinciding variables are inherited, which parent goes where is a coin flip
        keep = rng.random(n_vars) <= 0.5
        child_a = np.where(same, np.where(keep, parent_a, parent_b), child_a)
        child_b = np.where(same, np.where(keep, parent_b, parent_a), child_b)

        return np.clip(child_a, lower, upper), np.clip(child_b, lower, upper)

    return crossover


def polynomial_mutation(
    eta: float = 20.0,
    prob: float | None = None,
    bounds: Bounds = (0.0, 1.0),
) -> Mutation:
    """Create a bounded polynomial mutation operator (Deb & Goyal, 1996).

    Each variable is perturbed independently with probability prob. The step
    is drawn from a polynomial distribution scaled to the bound width and
    shaped by the variable's distance to each bound, so the result only needs
    a final clamp.

    Args:
        eta: Distribution index. Large values keep mutants close to the
            original; small values allow long jumps.
        prob: Per-variable mutation rate. None means 1 / n_vars, which
            mutates one variable per call on average.
        bounds: Scalar or per-variable (lower, upper).

    Returns:
        A function (x, rng) -> mutated copy of x.

    Example:
        >>> mutate = polynomial_mutation(prob=0.0)
        >>> mutate(np.array([0.5, 0.5, 0.5]), np.random.default_rng(0))
        array([0.5, 0.5, 0.5])
    """
    lower, upper = bounds
    width = np.asarray(upper, dtype=np.float64) - np.asarray(lower, dtype=np.float64)
    power = 1.0 / (eta + 1.0)

    def mutate(x: np.ndarray, rng: np.random.Generator) -> np.ndarray:
        n_vars = len(x)
        rate = 1.0 / n_vars if prob is None else prob

        selected = rng.random(n_vars) < rate
        if not selected.any():
            return x.copy()

        u = rng.random(n_vars)

        # Zero-width bounds give nan here, nan_to_num below turns them into no-ops
        with np.errstate(divide="ignore", invalid="ignore"):
            room_below = (x - lower) / width
            room_above = (upper - x) / width

            step_down = (2.0 * u + (1.0 - 2.0 * u) * (1.0 - room_below) ** (eta + 1.0)) ** power - 1.0
            step_up = 1.0 - (2.0 * (1.0 - u) + 2.0 * (u - 0.5) * (1.0 - room_above) ** (eta + 1.0)) ** power

        step = np.where(u < 0.5, step_down, step_up)
        mutated = np.where(selected, x + np.nan_to_num(step) * width, x)
        return np.clip(mutated, lower, upper)

    return mutate
