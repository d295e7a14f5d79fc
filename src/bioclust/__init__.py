"""
bioclust - clustering and hierarchical grouping for biological datasets.

This package provides:
- Euclidean distances and a shrinking average-linkage distance matrix
- center-based clustering (Lloyd k-means with D² seeding, farthest-first k-center)
- UPGMA hierarchical clustering with cluster membership tracking
- local search for explanatory SNP marker subsets
- plain-text loaders, a CLI and a benchmark/summary pipeline
"""

__all__ = ["distances", "algorithms", "data", "tree"]
