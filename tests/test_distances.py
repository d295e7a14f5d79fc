from __future__ import annotations

import numpy as np
import pytest

from bioclust.distances import (
    AverageLinkageMatrix,
    MembershipTracker,
    euclidean,
    pairwise_euclidean,
    radius_from_centers,
)


def _three_leaf_matrix() -> np.ndarray:
    return np.array(
        [
            [0.0, 2.0, 4.0],
            [2.0, 0.0, 4.0],
            [4.0, 4.0, 0.0],
        ]
    )


def test_pairwise_euclidean_matches_manual_norm() -> None:
    X = np.array([[0.0, 0.0], [1.0, 0.0], [0.0, 2.0]], dtype=float)
    D = pairwise_euclidean(X)

    expected = np.array(
        [
            [0.0, 1.0, 2.0],
            [1.0, 0.0, np.sqrt(5.0)],
            [2.0, np.sqrt(5.0), 0.0],
        ]
    )
    assert np.allclose(D, expected)
    assert np.isclose(euclidean(X[1], X[2]), np.sqrt(5.0))


def test_euclidean_rejects_dimension_mismatch() -> None:
    with pytest.raises(ValueError):
        euclidean([0.0, 1.0], [0.0, 1.0, 2.0])


def test_radius_from_centers() -> None:
    X = np.arange(4, dtype=float).reshape(-1, 1)
    assert np.isclose(radius_from_centers(X, X[[0, 3]]), 1.0)


def test_closest_pair_and_weighted_merge() -> None:
    D = np.array(
        [
            [0.0, 1.0, 6.0, 10.0],
            [1.0, 0.0, 8.0, 12.0],
            [6.0, 8.0, 0.0, 3.0],
            [10.0, 12.0, 3.0, 0.0],
        ]
    )
    matrix = AverageLinkageMatrix(D)
    assert matrix.closest() == (0, 1)

    new_id = matrix.merge(0, 1)
    assert new_id == 4
    assert matrix.max_node == 4
    assert matrix.nodes() == [2, 3, 4]
    assert matrix.leaf_count(4) == 2
    assert np.isclose(matrix.get(4, 2), 7.0)
    assert np.isclose(matrix.get(3, 4), 11.0)
    assert matrix.get(4, 4) == 0.0

    assert matrix.closest() == (2, 3)
    assert matrix.merge(2, 3) == 5
    # Both sides now hold two leaves: (6 + 8 + 10 + 12) / 4
    assert np.isclose(matrix.get(4, 5), 9.0)
    assert matrix.size() == 2


def test_leaf_counts_weight_later_merges() -> None:
    D = np.array(
        [
            [0.0, 2.0, 2.0, 9.0],
            [2.0, 0.0, 2.0, 6.0],
            [2.0, 2.0, 0.0, 3.0],
            [9.0, 6.0, 3.0, 0.0],
        ]
    )
    matrix = AverageLinkageMatrix(D)
    first = matrix.merge(0, 1)
    second = matrix.merge(first, 2)
    # Leaf 3 is 9, 6 and 3 away from the three merged leaves.
    assert np.isclose(matrix.get(second, 3), 6.0)


def test_closest_breaks_ties_by_lowest_ids() -> None:
    D = np.full((3, 3), 5.0)
    np.fill_diagonal(D, 0.0)
    assert AverageLinkageMatrix(D).closest() == (0, 1)


def test_linkage_matrix_rejects_bad_input() -> None:
    with pytest.raises(ValueError):
        AverageLinkageMatrix(np.zeros((2, 3)))
    with pytest.raises(ValueError):
        AverageLinkageMatrix(np.array([[0.0, 1.0], [2.0, 0.0]]))

    matrix = AverageLinkageMatrix(_three_leaf_matrix())
    with pytest.raises(ValueError):
        matrix.merge(0, 7)
    with pytest.raises(ValueError):
        matrix.merge(1, 1)
    with pytest.raises(ValueError):
        AverageLinkageMatrix([[0.0]]).closest()


def test_tracker_keeps_a_partition_of_the_leaves() -> None:
    rng = np.random.default_rng(3)
    D = pairwise_euclidean(rng.normal(size=(7, 2)))
    tracker = MembershipTracker(AverageLinkageMatrix(D))
    assert tracker.membership() == {i: [i] for i in range(7)}

    while tracker.size() > 1:
        tracker.merge(*tracker.closest())
        leaves = sorted(leaf for members in tracker.membership().values() for leaf in members)
        assert leaves == list(range(7))
        assert set(tracker.membership()) == set(tracker.nodes())

    (root,) = tracker.nodes()
    assert sorted(tracker.members(root)) == list(range(7))
    assert len(tracker.trace) == 6


def test_tracker_orders_members_by_merge_arguments() -> None:
    tracker = MembershipTracker(AverageLinkageMatrix(_three_leaf_matrix()))

    assert tracker.merge(0, 1) == 3
    assert tracker.merge(2, 3) == 4
    assert tracker.members(4) == [2, 0, 1]
    assert tracker.trace == [[1, 2], [3, 1, 2]]

    with pytest.raises(ValueError):
        tracker.members(0)


def test_tracker_membership_is_a_copy() -> None:
    tracker = MembershipTracker(AverageLinkageMatrix(_three_leaf_matrix()))
    tracker.membership()[0].append(99)
    tracker.members(1).append(99)
    assert tracker.members(0) == [0]
    assert tracker.members(1) == [1]
