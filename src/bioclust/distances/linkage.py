from __future__ import annotations

from typing import Dict, List, Protocol, Sequence, Tuple

import numpy as np


class LinkageMatrix(Protocol):
    """Protocol for a pairwise distance matrix that shrinks as nodes merge.

    Rows and columns are indexed by live node IDs. Merging two nodes removes
    both and inserts a single node with the next unused ID.
    """

    @property
    def max_node(self) -> int:
        """Highest node ID ever assigned."""
        ...

    def size(self) -> int:
        """Number of live nodes."""
        ...

    def nodes(self) -> List[int]:
        """Live node IDs in ascending order."""
        ...

    def get(self, one: int, two: int) -> float:
        """Distance between two live nodes."""
        ...

    def closest(self) -> Tuple[int, int]:
        """IDs of the two distinct live nodes with the smallest distance."""
        ...

    def merge(self, one: int, two: int) -> int:
        """Merge two live nodes and return the ID of the new node."""
        ...


def _validate_square(matrix: np.ndarray) -> None:
    if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]:
        raise ValueError("Distance matrix must be square.")
    if matrix.shape[0] == 0:
        raise ValueError("Distance matrix must have at least one row.")
    if not np.all(np.isfinite(matrix)):
        raise ValueError("Distances must be finite.")
    if not np.allclose(matrix, matrix.T):
        raise ValueError("Distance matrix must be symmetric.")


class AverageLinkageMatrix:
    """Average-linkage (UPGMA) distance matrix backed by a dict of dicts.

    Each live node remembers how many leaves it stands for, so that a merged
    row is the leaf-count weighted average of the two rows it replaces.
    """

    def __init__(self, distances: Sequence[Sequence[float]] | np.ndarray):
        D = np.asarray(distances, dtype=float)
        _validate_square(D)

        n = D.shape[0]
        self._rows: Dict[int, Dict[int, float]] = {
            i: {j: float(D[i, j]) for j in range(n)} for i in range(n)
        }
        self._leaf_counts: Dict[int, int] = {i: 1 for i in range(n)}
        self._max_node = n - 1

    @property
    def max_node(self) -> int:
        return self._max_node

    def size(self) -> int:
        return len(self._rows)

    def nodes(self) -> List[int]:
        return sorted(self._rows)

    def leaf_count(self, node: int) -> int:
        self._check_live(node)
        return self._leaf_counts[node]

    def get(self, one: int, two: int) -> float:
        self._check_live(one)
        self._check_live(two)
        return self._rows[one][two]

    def closest(self) -> Tuple[int, int]:
        if self.size() < 2:
            raise ValueError("At least two live nodes are required to find a closest pair.")

        best: Tuple[int, int] | None = None
        best_dist = np.inf
        live = self.nodes()
        # First strictly smaller distance wins, so ties keep the lowest IDs.
        for row in live:
            for col in live:
                if row != col and (best is None or self._rows[row][col] < best_dist):
                    best_dist = self._rows[row][col]
                    best = (row, col)

        return best

    def _weighted_average(self, one: int, two: int, other: int) -> float:
        n_one = self._leaf_counts[one]
        n_two = self._leaf_counts[two]
        return (self._rows[one][other] * n_one + self._rows[two][other] * n_two) / (n_one + n_two)

    def merge(self, one: int, two: int) -> int:
        self._check_live(one)
        self._check_live(two)
        if one == two:
            raise ValueError(f"Cannot merge node {one} with itself.")

        merged_row = {
            other: self._weighted_average(one, two, other)
            for other in self._rows
            if other != one and other != two
        }
        self._max_node += 1
        new_id = self._max_node

        for other, dist in merged_row.items():
            self._rows[other][new_id] = dist
        merged_row[new_id] = 0.0
        self._rows[new_id] = merged_row
        self._leaf_counts[new_id] = self._leaf_counts[one] + self._leaf_counts[two]

        for old in (one, two):
            del self._rows[old]
            del self._leaf_counts[old]
            for row in self._rows.values():
                row.pop(old, None)

        return new_id

    def _check_live(self, node: int) -> None:
        if node not in self._rows:
            raise ValueError(f"Node with ID#{node} is not in matrix.")

    def __repr__(self) -> str:
        return f"AverageLinkageMatrix(nodes={self.nodes()!r})"
