from ._shared import CentersNotInitializedError, ClusterState, EmptyClusterError
from .clustering import cluster_points
from .kcenter_farthest_first import farthest_first_k_center, farthest_first_state
from .kmeans_lloyd import LloydConfig, LloydResult, d2_seed_centers, lloyd_k_means, lloyd_refine
from .marker_search import MarkerSearch, MarkerSearchConfig, MarkerSearchResult
from .upgma import UPGMAResult, build_upgma_tree

__all__ = [
    "CentersNotInitializedError",
    "ClusterState",
    "EmptyClusterError",
    "LloydConfig",
    "LloydResult",
    "MarkerSearch",
    "MarkerSearchConfig",
    "MarkerSearchResult",
    "UPGMAResult",
    "build_upgma_tree",
    "cluster_points",
    "d2_seed_centers",
    "farthest_first_k_center",
    "farthest_first_state",
    "lloyd_k_means",
    "lloyd_refine",
]
