from __future__ import annotations

from typing import Dict, List, Tuple


class RootedTree:
    """Rooted tree of aged nodes joined by weighted parent -> child paths.

    Node IDs are integers; leaves are usually ``0..n-1`` and internal nodes
    get higher IDs as they are created.
    """

    def __init__(self) -> None:
        self._ages: Dict[int, float] = {}
        self._children: Dict[int, List[Tuple[int, float]]] = {}
        self._parent: Dict[int, int] = {}

    def add_node(self, node_id: int, age: float = 0.0) -> int:
        if node_id in self._ages:
            raise ValueError(f"Node with id#{node_id} already exists.")
        self._ages[node_id] = float(age)
        self._children[node_id] = []
        return node_id

    def add_path(self, parent: int, child: int, length: float) -> None:
        """Attach `child` below `parent` with the given path length."""
        self._check_node(parent)
        self._check_node(child)
        if length < 0:
            raise ValueError(
                f"Path from {parent}->{child} can't have negative weight of {length}."
            )
        if child in self._parent:
            raise ValueError(f"Node {child} already has parent {self._parent[child]}.")
        self._children[parent].append((child, float(length)))
        self._parent[child] = parent

    def age(self, node_id: int) -> float:
        self._check_node(node_id)
        return self._ages[node_id]

    def children(self, node_id: int) -> List[Tuple[int, float]]:
        """(child, path length) pairs in insertion order."""
        self._check_node(node_id)
        return list(self._children[node_id])

    def parent(self, node_id: int) -> int | None:
        self._check_node(node_id)
        return self._parent.get(node_id)

    def nodes(self) -> List[int]:
        return sorted(self._ages)

    def leaves(self) -> List[int]:
        return [node for node in self.nodes() if not self._children[node]]

    def root(self) -> int:
        roots = [node for node in self.nodes() if node not in self._parent]
        if len(roots) != 1:
            raise ValueError(f"Tree has {len(roots)} parentless nodes, expected exactly one.")
        return roots[0]

    def __len__(self) -> int:
        return len(self._ages)

    def adjacency_lines(self) -> List[str]:
        """Render the tree as ``a->b:weight`` lines, both directions, sorted by ID."""
        adjacency: Dict[int, Dict[int, float]] = {node: {} for node in self._ages}
        for parent, kids in self._children.items():
            for child, length in kids:
                adjacency[parent][child] = length
                adjacency[child][parent] = length

        lines = []
        for node in sorted(adjacency):
            for other in sorted(adjacency[node]):
                lines.append(f"{node}->{other}:{adjacency[node][other]:.3f}")
        return lines

    def _check_node(self, node_id: int) -> None:
        if node_id not in self._ages:
            raise ValueError(f"Node with id#{node_id} does not exist.")
