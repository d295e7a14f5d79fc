from __future__ import annotations

import logging
from typing import Literal

import numpy as np

from ._shared import ClusterState, PointsLike
from .kcenter_farthest_first import farthest_first_state
from .kmeans_lloyd import LloydConfig, d2_seed_centers, lloyd_refine

logger = logging.getLogger(__name__)

Method = Literal["lloyd", "farthest_first"]
METHODS = ("lloyd", "farthest_first")


def cluster_points(
    points: PointsLike,
    k: int,
    method: Method = "lloyd",
    random_state: int | None = None,
) -> ClusterState:
    """Choose `k` centers for `points` with one of the supported strategies.

    ``"lloyd"`` seeds with D² sampling and refines to convergence;
    ``"farthest_first"`` runs the deterministic greedy k-center seeding
    with no refinement. Returns the populated :class:`ClusterState`.

    Raises
    ------
    ValueError
        If `method` is not supported or `k` is out of range.
    """
    if method not in METHODS:
        raise ValueError(f"Unknown clustering method: {method!r}. Supported: {', '.join(METHODS)}")

    state = ClusterState(points)
    logger.info(f"Clustering {state.n_points} points (dimension {state.dimension}) into {k} with {method}")

    if method == "lloyd":
        d2_seed_centers(state, k, np.random.default_rng(random_state))
        result = lloyd_refine(state, LloydConfig(random_state=random_state))
        logger.info(f"  Lloyd converged after {result.n_iterations} iterations")
    else:
        farthest_first_state(state, k)

    logger.info(f"  distortion={state.distortion():.6f}")
    return state
