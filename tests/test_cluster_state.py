from __future__ import annotations

import numpy as np
import pytest

from bioclust.algorithms import CentersNotInitializedError, ClusterState


def _square() -> list[list[float]]:
    return [[0.0, 0.0], [0.0, 1.0], [10.0, 0.0], [10.0, 1.0]]


@pytest.mark.parametrize(
    "points",
    [
        [],
        [[]],
        [[1.0, 2.0], [1.0]],
        [[1.0, 2.0], None],
        [1.0, 2.0],
    ],
)
def test_invalid_point_sets_are_rejected(points) -> None:
    with pytest.raises(ValueError):
        ClusterState(points)


def test_points_cannot_be_changed_through_getters() -> None:
    state = ClusterState(_square())
    state.get_point(0)[0] = 99.0
    state.points[1, 1] = 99.0
    assert np.allclose(state.get_point(0), [0.0, 0.0])
    assert np.allclose(state.get_point(1), [0.0, 1.0])


def test_centers_are_uninitialized_until_allocated() -> None:
    state = ClusterState(_square())
    assert not state.has_centers
    assert state.n_centers == 0

    with pytest.raises(CentersNotInitializedError):
        state.distortion()
    with pytest.raises(CentersNotInitializedError):
        state.center_copy()
    with pytest.raises(CentersNotInitializedError):
        state.min_distance([0.0, 0.0])
    with pytest.raises(CentersNotInitializedError):
        state.set_center(0, [0.0, 0.0])

    state.new_centers(3)
    assert state.n_centers == 3
    assert np.allclose(state.center_copy(), 0.0)


@pytest.mark.parametrize("n", [0, -1, 5])
def test_new_centers_bounds(n: int) -> None:
    with pytest.raises(ValueError):
        ClusterState(_square()).new_centers(n)


def test_accessor_bounds_and_dimensions() -> None:
    state = ClusterState(_square())
    state.new_centers(2)

    for bad in (-1, 2):
        with pytest.raises(IndexError):
            state.get_center(bad)
        with pytest.raises(IndexError):
            state.set_center(bad, [0.0, 0.0])
    for bad in (-1, 4):
        with pytest.raises(IndexError):
            state.get_point(bad)

    with pytest.raises(ValueError):
        state.set_center(0, [1.0, 2.0, 3.0])


def test_center_copies_are_independent() -> None:
    state = ClusterState(_square())
    state.new_centers(2)
    state.set_center(1, [10.0, 1.0])

    copy = state.center_copy()
    copy[1, 0] = -5.0
    state.get_center(1)[0] = -5.0
    assert np.allclose(state.get_center(1), [10.0, 1.0])


def test_min_distance_respects_limit() -> None:
    state = ClusterState(_square())
    state.new_centers(2)
    state.set_center(0, [0.0, 0.0])
    state.set_center(1, [10.0, 1.0])

    assert np.isclose(state.min_distance([10.0, 1.0], limit=1), np.sqrt(101.0))
    assert np.isclose(state.min_distance([10.0, 1.0]), 0.0)

    for bad in (0, -1, 3):
        with pytest.raises(ValueError):
            state.min_distance([0.0, 0.0], limit=bad)
    with pytest.raises(ValueError):
        state.min_distance([0.0])


def test_nearest_center_ties_go_to_lowest_index() -> None:
    state = ClusterState([[0.0], [1.0], [2.0]])
    state.new_centers(2)
    state.set_center(0, [0.0])
    state.set_center(1, [2.0])
    assert state.nearest_center([1.0]) == 0
    assert state.assign().tolist() == [0, 0, 1]


def test_distortion_is_mean_squared_min_distance() -> None:
    state = ClusterState(_square())
    state.new_centers(2)
    state.set_center(0, [0.0, 0.5])
    state.set_center(1, [10.0, 0.5])
    assert np.isclose(state.distortion(), 0.25)
    assert np.isclose(ClusterState.distance([0.0, 0.0], [3.0, 4.0]), 5.0)
