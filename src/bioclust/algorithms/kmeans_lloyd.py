from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List

import numpy as np

from ._shared import (
    ClusterState,
    EmptyClusterError,
    PointsLike,
    initialize_min_distances,
    update_min_distances,
    validate_k,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LloydConfig:
    """Configuration for Lloyd's k-means.

    Attributes
    ----------
    random_state:
        Seed for the D² seeding draws. ``None`` draws fresh OS entropy.
    tolerance:
        Refinement stops once no center coordinate moves by more than this.
    max_iter:
        Optional cap on refinement passes; ``None`` iterates until convergence.
    """

    random_state: int | None = None
    tolerance: float = 1e-3
    max_iter: int | None = None

    def __post_init__(self) -> None:
        if self.tolerance < 0:
            raise ValueError("tolerance must be non-negative.")
        if self.max_iter is not None and self.max_iter <= 0:
            raise ValueError("max_iter must be positive when given.")


@dataclass
class LloydResult:
    centers: np.ndarray
    labels: np.ndarray
    distortion: float
    n_iterations: int
    converged: bool
    history: List[float] = field(default_factory=list)


def _draw_weighted(weights: np.ndarray, rng: np.random.Generator) -> int:
    """Draw an index with probability proportional to `weights`.

    A uniform value in [0, total) is compared against the running sum; the
    first index whose cumulative weight reaches the draw is selected.
    """
    cumulative = np.cumsum(weights)
    total = float(cumulative[-1])
    if total <= 0:
        raise ValueError(
            "Cannot seed another center: every point coincides with an existing center "
            "(fewer distinct points than clusters)."
        )

    draw = rng.random() * total
    if draw > 0:
        idx = int(np.searchsorted(cumulative, draw, side="left"))
    else:
        idx = int(np.searchsorted(cumulative, 0.0, side="right"))
    return min(idx, weights.shape[0] - 1)


def d2_seed_centers(state: ClusterState, k: int, rng: np.random.Generator) -> None:
    """Populate `state` with `k` centers using probability-weighted (D²) seeding.

    The first center is the first point. Every following center is a point
    drawn with probability proportional to its squared distance to the
    nearest center chosen so far. Centers are only written once every draw
    has succeeded.
    """
    validate_k(k, state.n_points)
    X = state.points
    chosen = [0]
    mins = initialize_min_distances(X, X[0])

    for i in range(1, k):
        idx = _draw_weighted(mins * mins, rng)
        chosen.append(idx)
        update_min_distances(X, mins, X[idx])
        logger.debug(f"D² seeding: center {i} <- point {idx}")

    state.new_centers(k)
    for i, idx in enumerate(chosen):
        state.set_center(i, X[idx])


def _centroids(points: np.ndarray, labels: np.ndarray, k: int, iteration: int) -> np.ndarray:
    centers = np.empty((k, points.shape[1]), dtype=float)
    for c in range(k):
        bucket = points[labels == c]
        if bucket.shape[0] == 0:
            raise EmptyClusterError(
                f"Center {c} has no assigned points at iteration {iteration}; "
                "its centroid is undefined."
            )
        centers[c] = bucket.mean(axis=0)
    return centers


def lloyd_refine(state: ClusterState, config: LloydConfig | None = None) -> LloydResult:
    """Run Lloyd's relocate-and-recompute loop on already seeded centers.

    Each pass assigns every point to its nearest center (ties to the lowest
    center index) and moves each center to the centroid of its bucket. The
    loop stops when no coordinate of any center moved by more than
    ``config.tolerance``.
    """
    if config is None:
        config = LloydConfig()

    points = state.points
    k = state.n_centers
    history: List[float] = []
    iteration = 0
    converged = False

    while config.max_iter is None or iteration < config.max_iter:
        iteration += 1
        previous = state.center_copy()
        labels = state.assign()
        for c, center in enumerate(_centroids(points, labels, k, iteration)):
            state.set_center(c, center)

        history.append(state.distortion())
        shift = float(np.max(np.abs(state.center_copy() - previous)))
        logger.debug(
            f"Lloyd iteration {iteration}: max shift={shift:.6f}, distortion={history[-1]:.6f}"
        )
        if shift <= config.tolerance:
            converged = True
            break

    if not converged:
        logger.warning(f"Lloyd refinement stopped after {iteration} iterations without converging")

    return LloydResult(
        centers=state.center_copy(),
        labels=state.assign(),
        distortion=state.distortion(),
        n_iterations=iteration,
        converged=converged,
        history=history,
    )


def lloyd_k_means(points: PointsLike, k: int, config: LloydConfig | None = None) -> LloydResult:
    """Cluster `points` into `k` groups with D² seeding followed by Lloyd refinement.

    Parameters
    ----------
    points:
        Sequence of equal-length coordinate vectors, or an array of shape
        (n_samples, n_features).
    k:
        Number of clusters.
    config:
        Optional configuration (seed, tolerance, iteration cap).

    Returns
    -------
    LloydResult
        Final centers, labels (center index per point), distortion, number
        of refinement passes and the distortion after each pass.
    """
    if config is None:
        config = LloydConfig()

    state = ClusterState(points)
    rng = np.random.default_rng(config.random_state)
    d2_seed_centers(state, k, rng)
    return lloyd_refine(state, config)
