"""Parent pairing and offspring creation.

- select_parent_pairs: uniform random parent pairs with distinct members
- create_offspring: pair parents, cross over, mutate
"""

import numpy as np

from niche_forge.operators.standard import Crossover, Mutation


def select_parent_pairs(n_pop: int, n_pairs: int, rng: np.random.Generator) -> np.ndarray:
    """Draw parent index pairs uniformly at random.

    When both indices of a pair collide, the second one is shifted by +1, or
    by -1 when it already is the last index.

    Args:
        n_pop: Size of the population to draw from. Must be at least 2.
        n_pairs: Number of pairs to draw.
        rng: Random number generator for reproducibility.

    Returns:
        Integer array of shape (n_pairs, 2) with distinct indices per row.

    Raises:
        ValueError: If n_pop is smaller than 2.

    Example:
        >>> pairs = select_parent_pairs(8, 4, np.random.default_rng(0))
        >>> pairs.shape
        (4, 2)
        >>> bool(np.all(pairs[:, 0] != pairs[:, 1]))
        True
    """
    if n_pop < 2:
        raise ValueError(f"parent pairing needs at least 2 candidates, got {n_pop}")

    pairs = rng.integers(0, n_pop, size=(n_pairs, 2))
    collide = pairs[:, 0] == pairs[:, 1]
    shift = np.where(pairs[:, 1] < n_pop - 1, 1, -1)
    pairs[:, 1] = np.where(collide, pairs[:, 1] + shift, pairs[:, 1])
    return pairs.astype(np.intp)


def create_offspring(
    x: np.ndarray,
    n_offspring: int,
    crossover: Crossover,
    mutate: Mutation,
    crossover_prob: float,
    rng: np.random.Generator,
) -> np.ndarray:
    """Create offspring via random pairing, crossover, and mutation.

    Each pair is crossed with probability crossover_prob; otherwise the
    children start as copies of their parents. Both children are always
    mutated.

    Args:
        x: Decision variables of the parent population. Shape (n, n_vars).
        n_offspring: Number of offspring to create.
        crossover: Crossover operator (parent_a, parent_b, rng) -> (child_a, child_b).
        mutate: Mutation operator (x, rng) -> x'.
        crossover_prob: Probability of applying crossover to a pair.
        rng: Random number generator for reproducibility.

    Returns:
        Array of shape (n_offspring, n_vars) containing unevaluated offspring.

    Example:
        >>> from niche_forge.operators.standard import polynomial_mutation, sbx_crossover
        >>> rng = np.random.default_rng(0)
        >>> x = rng.uniform(0, 1, size=(8, 3))
        >>> create_offspring(x, 8, sbx_crossover(), polynomial_mutation(), 0.9, rng).shape
        (8, 3)
    """
    n_pairs = (n_offspring + 1) // 2
    pairs = select_parent_pairs(len(x), n_pairs, rng)

    children: list[np.ndarray] = []
    for idx_a, idx_b in pairs:
        child_a, child_b = x[idx_a].copy(), x[idx_b].copy()
        if rng.random() <= crossover_prob:
            child_a, child_b = crossover(x[idx_a], x[idx_b], rng)
        children.append(mutate(child_a, rng))
        children.append(mutate(child_b, rng))

    return np.stack(children[:n_offspring])
