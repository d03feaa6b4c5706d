"""Frozen containers for a generation of candidates.

A Population stores every candidate column-wise (one array per attribute) so
sorting, scoring and truncation operate on whole arrays. Indexing it yields an
IndividualView for a single row.
"""

from dataclasses import dataclass

import numpy as np

# Optional per-candidate arrays: name -> (ndim, required dtype kind or None)
_OPTIONAL_FIELDS: dict[str, tuple[int, type | None]] = {
    "objectives": (2, None),
    "rank": (1, np.integer),
    "survival_score": (1, np.floating),
}

_KIND_NAMES: dict[type, str] = {np.integer: "integer", np.floating: "float"}


def _check_array(name: str, value: object, ndim: int) -> None:
    if not isinstance(value, np.ndarray):
        raise TypeError(f"{name} must be a numpy array, got {type(value).__name__}")
    if value.ndim != ndim:
        raise ValueError(f"{name} must be {ndim}D, got shape {value.shape}")


def _rows(value: np.ndarray | None, indices) -> np.ndarray | None:
    return None if value is None else value[indices]


@dataclass(frozen=True)
class IndividualView:
    """A single candidate read out of a Population.

    Attributes:
        x: Decision vector, shape (n_vars,).
        objectives: Objective vector, shape (n_obj,), or None before evaluation.
        rank: Front index (0 is non-dominated), or None before sorting.
        survival_score: Survival score, or None before scoring.

    Example:
        >>> pop = Population(x=np.array([[1.0, 2.0], [3.0, 4.0]]))
        >>> pop[-1].x
        array([3., 4.])
    """

    x: np.ndarray
    objectives: np.ndarray | None
    rank: int | None
    survival_score: float | None


@dataclass(frozen=True)
class Population:
    """Column-wise store of n candidates.

    Every array is validated against x and copied when the population is
    built, so later mutation of the caller's arrays cannot leak in.

    Attributes:
        x: Decision vectors, shape (n, n_vars).
        objectives: Objective vectors, shape (n, n_obj).
        rank: Front index per candidate, shape (n,), integer dtype.
        survival_score: Score per candidate, shape (n,), float dtype. Among
            candidates of equal rank, higher is kept first.

    Example:
        >>> pop = Population(x=np.zeros((3, 4)), objectives=np.ones((3, 2)))
        >>> len(pop), pop.n_vars, pop.n_obj
        (3, 4, 2)
    """

    x: np.ndarray
    objectives: np.ndarray | None = None
    rank: np.ndarray | None = None
    survival_score: np.ndarray | None = None

    def __post_init__(self) -> None:
        """Check every array against x and store private copies.

        Raises:
            TypeError: If a supplied field is not a numpy array.
            ValueError: If a field has the wrong dimensionality, row count or dtype.
        """
        _check_array("x", self.x, ndim=2)
        object.__setattr__(self, "x", self.x.copy())
        n = self.x.shape[0]

        for name, (ndim, kind) in _OPTIONAL_FIELDS.items():
            value = getattr(self, name)
            if value is None:
                continue
            _check_array(name, value, ndim=ndim)
            if value.shape[0] != n:
                raise ValueError(f"{name} has {value.shape[0]} entries, expected {n} to match x")
            if kind is not None and not np.issubdtype(value.dtype, kind):
                raise ValueError(f"{name} must have {_KIND_NAMES[kind]} dtype, got {value.dtype}")
            object.__setattr__(self, name, value.copy())

    def __len__(self) -> int:
        return len(self.x)

    def __getitem__(self, idx: int) -> IndividualView:
        """Return the candidate at position idx; negative positions count from the end.

        Raises:
            TypeError: If idx is not an integer.
            IndexError: If idx is outside the population.
        """
        if not isinstance(idx, (int, np.integer)):
            raise TypeError(f"indices must be integers, got {type(idx).__name__}")
        n = len(self)
        if not -n <= idx < n:
            raise IndexError(f"index {idx} is out of bounds for population with {n} candidates")

        rank = _rows(self.rank, idx)
        score = _rows(self.survival_score, idx)
        return IndividualView(
            x=self.x[idx],
            objectives=_rows(self.objectives, idx),
            rank=None if rank is None else int(rank),
            survival_score=None if score is None else float(score),
        )

    def take(self, indices: np.ndarray) -> "Population":
        """Return a new Population holding the rows at the given indices, in order."""
        return Population(
            x=self.x[indices],
            objectives=_rows(self.objectives, indices),
            rank=_rows(self.rank, indices),
            survival_score=_rows(self.survival_score, indices),
        )

    @property
    def n_vars(self) -> int:
        """Length of each decision vector."""
        return self.x.shape[1]

    @property
    def n_obj(self) -> int | None:
        """Length of each objective vector, or None before evaluation."""
        return None if self.objectives is None else self.objectives.shape[1]
