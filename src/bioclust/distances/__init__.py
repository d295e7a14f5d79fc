from .euclidean import euclidean, pairwise_euclidean, radius_from_centers
from .linkage import AverageLinkageMatrix, LinkageMatrix
from .tracker import MembershipTracker

__all__ = [
    "AverageLinkageMatrix",
    "LinkageMatrix",
    "MembershipTracker",
    "euclidean",
    "pairwise_euclidean",
    "radius_from_centers",
]
