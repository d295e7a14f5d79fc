from __future__ import annotations

import logging
from typing import Dict, List, Tuple

from .linkage import LinkageMatrix

logger = logging.getLogger(__name__)


class MembershipTracker:
    """Linkage matrix wrapper that tracks which leaves each live node holds.

    Every query is delegated to the wrapped matrix. On each merge the leaves
    of both merged nodes move, in argument order, under the new node ID, so
    the member lists of the live nodes always partition the original leaves.

    The 1-indexed member list of each newly created node is logged and kept
    in :attr:`trace` for auditing.
    """

    def __init__(self, matrix: LinkageMatrix):
        self._matrix = matrix
        self._members: Dict[int, List[int]] = {node: [node] for node in matrix.nodes()}
        self.trace: List[List[int]] = []

    @property
    def max_node(self) -> int:
        return self._matrix.max_node

    def size(self) -> int:
        return self._matrix.size()

    def nodes(self) -> List[int]:
        return self._matrix.nodes()

    def get(self, one: int, two: int) -> float:
        return self._matrix.get(one, two)

    def closest(self) -> Tuple[int, int]:
        return self._matrix.closest()

    def merge(self, one: int, two: int) -> int:
        if one not in self._members or two not in self._members:
            raise ValueError(f"Cannot merge nodes {one} & {two}, at least one is not live.")

        new_id = self._matrix.merge(one, two)
        if new_id in self._members:
            raise ValueError(f"Matrix reused live node ID#{new_id} for a merge.")

        self._members[new_id] = self._members.pop(one) + self._members.pop(two)

        one_indexed = [leaf + 1 for leaf in self._members[new_id]]
        self.trace.append(one_indexed)
        logger.info(f"Merged {one} + {two} -> {new_id}: {' '.join(map(str, one_indexed))}")
        return new_id

    def members(self, node: int) -> List[int]:
        """Original leaf IDs (0-indexed) subsumed by a live node."""
        if node not in self._members:
            raise ValueError(f"Node with ID#{node} is not live.")
        return list(self._members[node])

    def membership(self) -> Dict[int, List[int]]:
        """Copy of the full live-node -> leaves mapping."""
        return {node: list(leaves) for node, leaves in self._members.items()}
