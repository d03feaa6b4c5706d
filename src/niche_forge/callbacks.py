"""Observers invoked at the boundaries of an optimization run.

Callbacks are passed to ``optimize()`` as an ordered sequence. Every hook of
every callback is called; any ``True`` returned from ``on_begin`` or
``on_generation_end`` requests termination, which takes effect once the
current generation (or the start-up phase) has completed.

Example:
    ```python
    class StopWhenFrontIsLarge(Callback):
        def on_generation_end(self, optimizer, generation, objectives, fronts):
            return len(fronts[0]) >= 30

    optimizer.optimize(objectives, x0, ProgressLogger(every=10), StopWhenFrontIsLarge())
    ```
"""

import logging
from typing import Any

import numpy as np

logger = logging.getLogger(__name__)


class Callback:
    """Base class for optimization observers. Every hook is a no-op by default."""

    def on_begin(self, optimizer: Any, iterate: np.ndarray) -> bool:
        """Called once after the initial population is created.

        Args:
            optimizer: The running optimizer.
            iterate: The starting point passed to optimize().

        Returns:
            True to stop before the first generation.
        """
        return False

    def on_generation_end(
        self,
        optimizer: Any,
        generation: int,
        objectives: np.ndarray,
        fronts: list[np.ndarray],
    ) -> bool:
        """Called after each generation's truncation.

        Args:
            optimizer: The running optimizer.
            generation: Generation number, starting at 1.
            objectives: Objective values of the combined parent+offspring
                population of this generation. Shape (2P, n_obj).
            fronts: Pareto fronts of the combined population.

        Returns:
            True to stop after this generation.
        """
        return False

    def on_end(self, optimizer: Any, iterate: np.ndarray) -> None:
        """Called once after the Pareto set has been stored.

        Args:
            optimizer: The finished optimizer.
            iterate: The first member of the Pareto set.
        """


class ProgressLogger(Callback):
    """Log generation progress through the ``logging`` module.

    Args:
        every: Log every ``every`` generations.
        level: Logging level of the progress lines.
    """

    def __init__(self, every: int = 1, level: int = logging.INFO) -> None:
        if every <= 0:
            raise ValueError(f"every must be positive, got {every}")
        self.every = every
        self.level = level

    def on_begin(self, optimizer: Any, iterate: np.ndarray) -> bool:
        logger.log(self.level, "%s: starting from %s", type(optimizer).__name__, np.array2string(iterate))
        return False

    def on_generation_end(
        self,
        optimizer: Any,
        generation: int,
        objectives: np.ndarray,
        fronts: list[np.ndarray],
    ) -> bool:
        if generation % self.every == 0:
            logger.log(
                self.level,
                "generation %d: %d fronts, %d non-dominated, best aggregate objective %.6g",
                generation,
                len(fronts),
                len(fronts[0]),
                float(objectives.sum(axis=1).min()),
            )
        return False

    def on_end(self, optimizer: Any, iterate: np.ndarray) -> None:
        logger.log(self.level, "%s: finished at %s", type(optimizer).__name__, np.array2string(iterate))


class QueryFront(Callback):
    """Record the non-dominated objective vectors every few generations.

    Attributes:
        fronts: List of (generation, front objectives) tuples, oldest first.
            Each front is a copy of shape (k, n_obj).

    Args:
        every: Record every ``every`` generations.
    """

    def __init__(self, every: int = 1) -> None:
        if every <= 0:
            raise ValueError(f"every must be positive, got {every}")
        self.every = every
        self.fronts: list[tuple[int, np.ndarray]] = []

    def on_begin(self, optimizer: Any, iterate: np.ndarray) -> bool:
        self.fronts = []
        return False

    def on_generation_end(
        self,
        optimizer: Any,
        generation: int,
        objectives: np.ndarray,
        fronts: list[np.ndarray],
    ) -> bool:
        if generation % self.every == 0:
            self.fronts.append((generation, objectives[fronts[0]].copy()))
        return False
