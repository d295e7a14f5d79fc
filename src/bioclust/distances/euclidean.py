from __future__ import annotations

from typing import Sequence

import numpy as np


def euclidean(a: Sequence[float] | np.ndarray, b: Sequence[float] | np.ndarray) -> float:
    """Euclidean distance between two vectors of the same dimension."""
    a = np.asarray(a, dtype=float)
    b = np.asarray(b, dtype=float)
    if a.shape != b.shape:
        raise ValueError(f"Points not in the same dimension: {a.shape} vs {b.shape}.")
    diff = a - b
    return float(np.sqrt(np.sum(diff * diff)))


def pairwise_euclidean(x: np.ndarray, y: np.ndarray | None = None) -> np.ndarray:
    """Compute the pairwise Euclidean distance matrix between rows of `x` and `y`.

    Parameters
    ----------
    x:
        Array of shape (n_samples_x, n_features).
    y:
        Optional array of shape (n_samples_y, n_features). If ``None``,
        distances are computed between all pairs of rows in `x`.

    Returns
    -------
    np.ndarray
        Distance matrix of shape (n_samples_x, n_samples_y).
    """
    x = np.asarray(x, dtype=float)
    if y is None:
        y = x
    else:
        y = np.asarray(y, dtype=float)

    if x.ndim != 2 or y.ndim != 2 or x.shape[1] != y.shape[1]:
        raise ValueError("Both inputs must be 2-D with the same number of features.")

    # Broadcasting to shape (n_samples_x, n_samples_y, n_features)
    diff = x[:, None, :] - y[None, :, :]
    return np.sqrt(np.sum(diff * diff, axis=-1))


def radius_from_centers(X: np.ndarray, centers: np.ndarray) -> float:
    """Compute the k-center radius (maximum distance to nearest center).

    Parameters
    ----------
    X:
        Data array of shape (n_samples, n_features).
    centers:
        Center coordinates of shape (n_centers, n_features).
    """
    dists = pairwise_euclidean(X, centers)
    closest = np.min(dists, axis=1)
    return float(np.max(closest))
