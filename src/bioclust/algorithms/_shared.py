from __future__ import annotations

from typing import Sequence, Union

import numpy as np

from bioclust.distances.euclidean import euclidean, pairwise_euclidean

PointsLike = Union[np.ndarray, Sequence[Sequence[float]]]


class CentersNotInitializedError(RuntimeError):
    """Raised when centers are used before :meth:`ClusterState.new_centers`."""


class EmptyClusterError(ValueError):
    """Raised when a refinement step leaves a center with no assigned points."""


def validate_points(points: PointsLike) -> np.ndarray:
    """Check that `points` is a non-empty set of equal-length, non-empty vectors.

    Returns a float array of shape (n_points, dimension).
    """
    if points is None or len(points) == 0:
        raise ValueError("No points.")

    first = points[0]
    if first is None or np.ndim(first) != 1 or len(first) == 0:
        raise ValueError("Points must have coordinates.")

    dimension = len(first)
    for i, point in enumerate(points):
        if point is None or np.ndim(point) != 1:
            raise ValueError(f"Point {i} must have coordinates.")
        if len(point) != dimension:
            raise ValueError(
                f"Points must have same dimensions (point {i} has {len(point)}, expected {dimension})."
            )

    return np.array(points, dtype=float)


def validate_k(k: int, n: int) -> None:
    if k <= 0 or k > n:
        raise ValueError("k must satisfy 1 <= k <= n.")


def initialize_min_distances(X: np.ndarray, center: np.ndarray) -> np.ndarray:
    """Return the initial min-distance vector for a chosen center."""
    return pairwise_euclidean(X, center[None, :])[:, 0]


def update_min_distances(X: np.ndarray, mins: np.ndarray, center: np.ndarray) -> None:
    """Tighten the running min-distance vector with a new center."""
    np.minimum(mins, pairwise_euclidean(X, center[None, :])[:, 0], out=mins)


class ClusterState:
    """Points to cluster plus the centers of one clustering run.

    The point set is validated once and never changes. Centers are absent
    until :meth:`new_centers` allocates them (all zero) and are then filled
    in by a seeding routine and moved by refinement. Every getter returns a
    copy, so callers cannot alter the stored points or centers.
    """

    def __init__(self, points: PointsLike):
        self._points = validate_points(points)
        self._points.setflags(write=False)
        self._centers: np.ndarray | None = None

    # Points

    @property
    def n_points(self) -> int:
        return self._points.shape[0]

    @property
    def dimension(self) -> int:
        return self._points.shape[1]

    @property
    def points(self) -> np.ndarray:
        """Copy of all points, shape (n_points, dimension)."""
        return self._points.copy()

    def get_point(self, index: int) -> np.ndarray:
        if index < 0:
            raise IndexError(f"Invalid point # {index} (< 0).")
        if index >= self.n_points:
            raise IndexError(f"Invalid point # {index} (>= {self.n_points} points).")
        return self._points[index].copy()

    # Centers

    @property
    def has_centers(self) -> bool:
        return self._centers is not None

    @property
    def n_centers(self) -> int:
        return 0 if self._centers is None else self._centers.shape[0]

    def new_centers(self, n: int) -> None:
        """Allocate `n` fresh all-zero centers, discarding any previous ones."""
        if n > self.n_points:
            raise ValueError("Can't have more cluster centers than points.")
        if n <= 0:
            raise ValueError("Have to have some centers.")
        self._centers = np.zeros((n, self.dimension), dtype=float)

    def _require_centers(self) -> np.ndarray:
        if self._centers is None:
            raise CentersNotInitializedError("Centers have not been initialized.")
        return self._centers

    def get_center(self, index: int) -> np.ndarray:
        centers = self._require_centers()
        if index < 0:
            raise IndexError(f"Invalid center # {index} (< 0).")
        if index >= centers.shape[0]:
            raise IndexError(f"Invalid center # {index} (>= {centers.shape[0]} centers).")
        return centers[index].copy()

    def set_center(self, index: int, vector: Sequence[float] | np.ndarray) -> None:
        centers = self._require_centers()
        if index < 0:
            raise IndexError(f"Invalid center # {index} (< 0).")
        if index >= centers.shape[0]:
            raise IndexError(f"Invalid center # {index} (>= {centers.shape[0]} centers).")
        vector = np.asarray(vector, dtype=float)
        if vector.shape != (self.dimension,):
            raise ValueError("Center cannot be in different dimension than the points.")
        centers[index] = vector

    def center_copy(self) -> np.ndarray:
        """Deep copy of all centers, shape (n_centers, dimension)."""
        return self._require_centers().copy()

    # Distances

    @staticmethod
    def distance(a: Sequence[float] | np.ndarray, b: Sequence[float] | np.ndarray) -> float:
        return euclidean(a, b)

    def _check_limit(self, limit: int | None) -> int:
        centers = self._require_centers()
        if limit is None:
            return centers.shape[0]
        if limit <= 0:
            raise ValueError("No centers to find distance with (limit must be positive).")
        if limit > centers.shape[0]:
            raise ValueError("Cannot use more centers than exist.")
        return limit

    def min_distance(self, point: Sequence[float] | np.ndarray, limit: int | None = None) -> float:
        """Minimum distance from `point` to the first `limit` centers (all by default)."""
        limit = self._check_limit(limit)
        point = np.asarray(point, dtype=float)
        if point.shape != (self.dimension,):
            raise ValueError("Point is not in the same dimension as centers.")
        dists = pairwise_euclidean(point[None, :], self._centers[:limit])
        return float(np.min(dists))

    def min_distances(self, limit: int | None = None) -> np.ndarray:
        """Minimum distance from every point to the first `limit` centers."""
        limit = self._check_limit(limit)
        return np.min(pairwise_euclidean(self._points, self._centers[:limit]), axis=1)

    def nearest_center(self, point: Sequence[float] | np.ndarray) -> int:
        """Index of the nearest center; ties go to the lowest index."""
        centers = self._require_centers()
        point = np.asarray(point, dtype=float)
        if point.shape != (self.dimension,):
            raise ValueError("Point has different dimensions than centers.")
        return int(np.argmin(pairwise_euclidean(point[None, :], centers)[0]))

    def assign(self) -> np.ndarray:
        """Nearest center index for every point (shape: (n_points,))."""
        centers = self._require_centers()
        return np.argmin(pairwise_euclidean(self._points, centers), axis=1)

    def distortion(self) -> float:
        """Mean squared distance from each point to its nearest center."""
        if self._centers is None:
            raise CentersNotInitializedError("No centers to find distortion from.")
        mins = self.min_distances()
        return float(np.mean(mins * mins))
