from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List

import numpy as np

from bioclust.algorithms import MarkerSearch, build_upgma_tree, cluster_points
from bioclust.data import read_binary_matrix, read_binary_vector, read_distance_matrix, read_points

logger = logging.getLogger(__name__)


def _format_row(values: np.ndarray) -> str:
    return " ".join(f"{v:.3f}" for v in values)


def _run_centers(args: argparse.Namespace, method: str) -> None:
    k, points = read_points(args.points)
    if args.k is not None:
        k = args.k
    state = cluster_points(points, k, method=method, random_state=args.seed)
    for center in state.center_copy():
        print(_format_row(center))
    logger.info(f"Distortion: {state.distortion():.3f}")


def _run_upgma(args: argparse.Namespace) -> None:
    D = read_distance_matrix(args.matrix)
    logger.info(f"Building UPGMA tree over {D.shape[0]} leaves")
    result = build_upgma_tree(D)
    for members in result.trace:
        print(" ".join(map(str, members)))

    if args.output is not None:
        lines = result.tree.adjacency_lines()
        args.output.write_text("\n".join(lines) + "\n", encoding="utf-8")
        logger.info(f"Wrote {len(lines)} adjacency lines to {args.output}")


def _run_markers(args: argparse.Namespace) -> None:
    snps = read_binary_matrix(args.snps)
    explain = read_binary_vector(args.explain)
    result = MarkerSearch(snps).search(explain, args.k)
    print(" ".join(str(m) for m in result.markers))
    logger.info(f"Score: {result.score:.4f} after {result.n_passes} passes")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Cluster biological datasets.")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose (DEBUG) logging.")
    sub = parser.add_subparsers(dest="command", required=True)

    for name, help_text in (
        ("kmeans", "Lloyd k-means with D² seeding."),
        ("farthest-first", "Farthest-first k-center seeding."),
    ):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("points", type=Path, help="Point file: k, dimension, then coordinates.")
        p.add_argument("-k", type=int, default=None, help="Override the cluster count in the file.")
        p.add_argument("--seed", type=int, default=None, help="Random seed for D² seeding.")

    p = sub.add_parser("upgma", help="UPGMA hierarchical clustering of a distance matrix.")
    p.add_argument("matrix", type=Path, help="Distance matrix file: n, then n*n values.")
    p.add_argument("--output", type=Path, default=None, help="Write the tree adjacency list here.")

    p = sub.add_parser("markers", help="Local search for explanatory SNP markers.")
    p.add_argument("snps", type=Path, help="0/1 matrix, one marker per line.")
    p.add_argument("explain", type=Path, help="0/1 vector, one value per sample.")
    p.add_argument("-k", type=int, required=True, help="Number of markers to select.")

    return parser


def main(argv: List[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    if args.command == "kmeans":
        _run_centers(args, "lloyd")
    elif args.command == "farthest-first":
        _run_centers(args, "farthest_first")
    elif args.command == "upgma":
        _run_upgma(args)
    else:
        _run_markers(args)


if __name__ == "__main__":
    main()
