"""Tests for Population and IndividualView data structures."""

from dataclasses import FrozenInstanceError

import numpy as np
import pytest

from niche_forge import IndividualView, Population


class TestPopulationConstruction:
    """Tests for Population construction and validation."""

    def test_constructs_with_x_only(self) -> None:
        pop = Population(x=np.array([[1.0, 2.0], [3.0, 4.0], [5.0, 6.0]]))

        assert len(pop) == 3
        assert pop.n_vars == 2
        assert pop.objectives is None
        assert pop.n_obj is None

    def test_constructs_with_all_fields(self, simple_population) -> None:
        assert len(simple_population) == 6
        assert simple_population.n_obj == 2
        np.testing.assert_array_equal(simple_population.rank, [0, 0, 0, 1, 1, 2])

    def test_rejects_non_array_x(self) -> None:
        with pytest.raises(TypeError, match="x must be a numpy array"):
            Population(x=[[1.0, 2.0], [3.0, 4.0]])

    def test_rejects_1d_x(self) -> None:
        with pytest.raises(ValueError, match="x must be 2D"):
            Population(x=np.array([1.0, 2.0, 3.0]))

    def test_rejects_1d_objectives(self) -> None:
        with pytest.raises(ValueError, match="objectives must be 2D"):
            Population(x=np.zeros((2, 2)), objectives=np.zeros(2))

    def test_rejects_mismatched_objectives_rows(self) -> None:
        with pytest.raises(ValueError, match="objectives has 3 entries, expected 2"):
            Population(x=np.zeros((2, 2)), objectives=np.zeros((3, 2)))

    def test_rejects_non_array_rank(self) -> None:
        with pytest.raises(TypeError, match="rank must be a numpy array"):
            Population(x=np.zeros((2, 2)), rank=[0, 1])

    def test_rejects_float_rank(self) -> None:
        with pytest.raises(ValueError, match="rank must have integer dtype"):
            Population(x=np.zeros((2, 2)), rank=np.array([0.0, 1.0]))

    def test_rejects_mismatched_survival_score_size(self) -> None:
        with pytest.raises(ValueError, match="survival_score has 3 entries, expected 2"):
            Population(x=np.zeros((2, 2)), survival_score=np.zeros(3))

    def test_rejects_integer_survival_score(self) -> None:
        with pytest.raises(ValueError, match="survival_score must have float dtype, got int"):
            Population(x=np.zeros((2, 2)), survival_score=np.array([1, 2]))


class TestPopulationImmutability:
    def test_frozen_dataclass_rejects_attribute_assignment(self, simple_population) -> None:
        with pytest.raises(FrozenInstanceError):
            simple_population.x = np.zeros((6, 2))

    def test_arrays_are_copied_on_construction(self) -> None:
        x = np.array([[1.0, 2.0]])
        objectives = np.array([[0.5, 0.5]])
        rank = np.array([0])
        pop = Population(x=x, objectives=objectives, rank=rank)

        x[0, 0] = 99.0
        objectives[0, 0] = 99.0
        rank[0] = 5

        assert pop.x[0, 0] == 1.0
        assert pop.objectives[0, 0] == 0.5
        assert pop.rank[0] == 0


class TestPopulationGetItem:
    def test_returns_individual_view(self, simple_population) -> None:
        view = simple_population[3]

        assert isinstance(view, IndividualView)
        np.testing.assert_array_equal(view.x, [6.0, 7.0])
        np.testing.assert_array_equal(view.objectives, [0.6, 1.1])
        assert view.rank == 1
        assert view.survival_score == pytest.approx(0.4)

    def test_negative_indexing(self, simple_population) -> None:
        np.testing.assert_array_equal(simple_population[-1].x, [10.0, 11.0])

    def test_accepts_numpy_integer(self, simple_population) -> None:
        assert simple_population[np.int64(0)].rank == 0

    def test_returns_none_fields_when_not_set(self) -> None:
        view = Population(x=np.zeros((1, 2)))[0]
        assert view.objectives is None
        assert view.rank is None
        assert view.survival_score is None

    def test_index_out_of_bounds(self, simple_population) -> None:
        with pytest.raises(IndexError, match="index 6 is out of bounds"):
            simple_population[6]
        with pytest.raises(IndexError, match="index -7 is out of bounds"):
            simple_population[-7]

    def test_rejects_slice_index(self, simple_population) -> None:
        with pytest.raises(TypeError, match="indices must be integers"):
            simple_population[0:2]


class TestPopulationTake:
    def test_takes_rows_in_order(self, simple_population) -> None:
        subset = simple_population.take(np.array([4, 0]))

        assert len(subset) == 2
        np.testing.assert_array_equal(subset.x, [[8.0, 9.0], [0.0, 1.0]])
        np.testing.assert_array_equal(subset.rank, [1, 0])
        np.testing.assert_allclose(subset.survival_score, [0.2, 1.0])

    def test_empty_selection(self, simple_population) -> None:
        subset = simple_population.take(np.array([], dtype=np.intp))
        assert len(subset) == 0
        assert subset.n_vars == 2
