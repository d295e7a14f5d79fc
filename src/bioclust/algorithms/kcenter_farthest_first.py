from __future__ import annotations

from typing import Tuple

import numpy as np

from ._shared import (
    ClusterState,
    PointsLike,
    initialize_min_distances,
    update_min_distances,
    validate_k,
)


def farthest_first_state(state: ClusterState, k: int) -> np.ndarray:
    """Seed `state` with `k` centers by farthest-first traversal.

    The first center is the first point; each following center is the point
    whose distance to its nearest chosen center is largest (ties go to the
    lowest point index). Returns the indices of the chosen points.
    """
    validate_k(k, state.n_points)
    X = state.points

    state.new_centers(k)
    state.set_center(0, X[0])
    chosen = [0]
    min_dists = initialize_min_distances(X, X[0])

    while len(chosen) < k:
        next_point = int(np.argmax(min_dists))
        state.set_center(len(chosen), X[next_point])
        chosen.append(next_point)
        update_min_distances(X, min_dists, X[next_point])

    return np.array(chosen, dtype=int)


def farthest_first_k_center(points: PointsLike, k: int) -> Tuple[np.ndarray, np.ndarray, float]:
    """Run the deterministic farthest-first 2-approximation for k-center.

    Parameters
    ----------
    points:
        Sequence of equal-length coordinate vectors, or an array of shape
        (n_samples, n_features).
    k:
        Number of centers to select.

    Returns
    -------
    centers:
        Indices of the points chosen as centers (shape: (k,)).
    labels:
        Index of the nearest chosen center per point, as a point index
        (shape: (n_samples,)).
    radius:
        Achieved k-center radius (maximum distance to the nearest center).
    """
    state = ClusterState(points)
    centers = farthest_first_state(state, k)
    labels = centers[state.assign()]
    radius = float(np.max(state.min_distances()))
    return centers, labels, radius
