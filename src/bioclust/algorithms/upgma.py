from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Protocol, Sequence, Union

import numpy as np

from bioclust.distances.linkage import AverageLinkageMatrix, LinkageMatrix
from bioclust.distances.tracker import MembershipTracker
from bioclust.tree import RootedTree

_AGE_RTOL = 1e-9


def _path_length(parent_age: float, child_age: float) -> float:
    length = parent_age - child_age
    # Averaging equal distances can undershoot by rounding, relative to the ages.
    if length < 0 and np.isclose(parent_age, child_age, rtol=_AGE_RTOL, atol=0.0):
        return 0.0
    return length


class TreeLike(Protocol):
    """Minimal tree interface the UPGMA builder writes into."""

    def add_node(self, node_id: int, age: float) -> int:
        ...

    def add_path(self, parent: int, child: int, length: float) -> None:
        ...

    def age(self, node_id: int) -> float:
        ...


@dataclass
class UPGMAResult:
    tree: TreeLike
    root: int
    membership: Dict[int, List[int]]
    trace: List[List[int]]


def build_upgma_tree(
    distances: Union[np.ndarray, Sequence[Sequence[float]], LinkageMatrix],
    tree: TreeLike | None = None,
) -> UPGMAResult:
    """Build an ultrametric tree by repeatedly joining the closest pair of clusters.

    Every leaf enters the tree at age 0. Each merge creates a node one ID
    above the current maximum, at half the distance between the merged
    pair, with paths to both children weighted by the age difference.

    Parameters
    ----------
    distances:
        Square symmetric distance matrix, or any :class:`LinkageMatrix`
        (wrapped as-is, so its linkage rule and tie-breaking apply).
    tree:
        Tree to populate; a fresh :class:`RootedTree` by default.

    Returns
    -------
    UPGMAResult
        The populated tree, the root ID, the final membership map (root ->
        all leaves) and the 1-indexed member list of every merge in order.
    """
    if hasattr(distances, "closest") and hasattr(distances, "merge"):
        matrix = distances  # type: ignore[assignment]
    else:
        matrix = AverageLinkageMatrix(distances)  # type: ignore[arg-type]

    if tree is None:
        tree = RootedTree()

    tracker = MembershipTracker(matrix)
    for leaf in tracker.nodes():
        tree.add_node(leaf, 0.0)

    while tracker.size() > 1:
        one, two = tracker.closest()
        new_id = tracker.max_node + 1
        age = tracker.get(one, two) / 2
        lengths = [_path_length(age, tree.age(child)) for child in (one, two)]

        merged = tracker.merge(one, two)
        if merged != new_id:
            raise ValueError(f"Linkage matrix created node {merged}, expected {new_id}.")

        tree.add_node(new_id, age)
        for child, length in zip((one, two), lengths):
            tree.add_path(new_id, child, length)

    (root,) = tracker.nodes()
    return UPGMAResult(
        tree=tree,
        root=root,
        membership=tracker.membership(),
        trace=list(tracker.trace),
    )
