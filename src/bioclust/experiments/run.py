from __future__ import annotations

import argparse
import logging
import time
import traceback
from pathlib import Path
from typing import Dict, Iterable, List, Tuple

import numpy as np
import pandas as pd
from sklearn.cluster import KMeans
from sklearn.datasets import make_blobs
from sklearn.metrics import adjusted_rand_score, silhouette_score
from tqdm.auto import tqdm

from bioclust.algorithms import (
    ClusterState,
    LloydConfig,
    d2_seed_centers,
    farthest_first_state,
    lloyd_refine,
)
from bioclust.data import read_points
from bioclust.distances import radius_from_centers

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)

Dataset = Tuple[str, np.ndarray, int, np.ndarray | None]


def _iter_point_files(roots: Iterable[Path]) -> Iterable[Dataset]:
    """Yield (dataset_id, points, k, labels) for every point file under `roots`."""
    for root in roots:
        files = [root] if root.is_file() else sorted(root.rglob("*.txt"))
        for path in files:
            try:
                k, X = read_points(path)
            except ValueError as exc:
                logger.warning(f"Skipping {path}: {exc}")
                continue
            yield f"{path.parent.name}/{path.stem}", X, k, None


def _synthetic_datasets(count: int, n_samples: int, n_features: int, k: int) -> Iterable[Dataset]:
    for i in range(count):
        X, y = make_blobs(
            n_samples=n_samples, n_features=n_features, centers=k, random_state=i
        )
        yield f"synthetic/blobs_{i}", X, k, y


def _safe_dataset_name(dataset_id: str) -> str:
    return dataset_id.replace("/", "_").replace("\\", "_")


def _append_results(output_root: Path, dataset_id: str, rows: List[Dict]) -> None:
    if not rows:
        return
    df = pd.DataFrame(rows)
    output_path = output_root / f"{_safe_dataset_name(dataset_id)}.parquet"
    if output_path.exists():
        df = pd.concat([pd.read_parquet(output_path), df], ignore_index=True)
    df.to_parquet(output_path, index=False)
    logger.info(f"  Saved {len(rows)} results to {output_path}")
    rows.clear()


def _scores(X: np.ndarray, labels: np.ndarray, y: np.ndarray | None) -> Tuple[float, float]:
    sil = float("nan")
    if 1 < np.unique(labels).size < X.shape[0]:
        sil = float(silhouette_score(X, labels, metric="euclidean"))
    ari = float("nan") if y is None else float(adjusted_rand_score(y, labels))
    return sil, ari


def _row(
    dataset_id: str,
    algorithm: str,
    rep: int,
    k: int,
    state: ClusterState,
    y: np.ndarray | None,
    n_iterations: int,
    runtime: float,
) -> Dict:
    X = state.points
    labels = state.assign()
    sil, ari = _scores(X, labels, y)
    return {
        "dataset_id": dataset_id,
        "algorithm": algorithm,
        "k": k,
        "repetition": rep,
        "seed": rep,
        "distortion": state.distortion(),
        "radius": radius_from_centers(X, state.center_copy()),
        "silhouette": sil,
        "ari": ari,
        "n_iterations": n_iterations,
        "runtime_sec": runtime,
    }


def _run_suite(
    dataset_id: str, X: np.ndarray, k: int, y: np.ndarray | None, repetitions: int
) -> List[Dict]:
    rows: List[Dict] = []

    # Farthest-first is deterministic, one run is enough.
    try:
        state = ClusterState(X)
        t0 = time.perf_counter()
        farthest_first_state(state, k)
        rows.append(_row(dataset_id, "farthest_first", 0, k, state, y, 0, time.perf_counter() - t0))

        t0 = time.perf_counter()
        result = lloyd_refine(state, LloydConfig())
        rows.append(
            _row(dataset_id, "lloyd_farthest_first", 0, k, state, y, result.n_iterations,
                 time.perf_counter() - t0)
        )
    except Exception as exc:
        logger.warning(f"  Error in farthest-first: {exc}")

    for rep in tqdm(range(repetitions), desc="Repetitions", leave=False):
        try:
            state = ClusterState(X)
            config = LloydConfig(random_state=rep)
            t0 = time.perf_counter()
            d2_seed_centers(state, k, np.random.default_rng(config.random_state))
            result = lloyd_refine(state, config)
            rows.append(
                _row(dataset_id, "lloyd_d2", rep, k, state, y, result.n_iterations,
                     time.perf_counter() - t0)
            )
        except Exception as exc:
            logger.warning(f"  Error in Lloyd (rep={rep}): {exc}")

        try:
            km = KMeans(n_clusters=k, n_init="auto", random_state=rep)
            t0 = time.perf_counter()
            labels_km = km.fit_predict(X)
            t1 = time.perf_counter()
            sil_km, ari_km = _scores(X, labels_km, y)
            dists = np.linalg.norm(X - km.cluster_centers_[labels_km], axis=1)
            rows.append(
                {
                    "dataset_id": dataset_id,
                    "algorithm": "sklearn_kmeans",
                    "k": k,
                    "repetition": rep,
                    "seed": rep,
                    "distortion": float(km.inertia_) / X.shape[0],
                    "radius": float(np.max(dists)),
                    "silhouette": sil_km,
                    "ari": ari_km,
                    "n_iterations": int(km.n_iter_),
                    "runtime_sec": float(t1 - t0),
                }
            )
        except Exception as exc:
            logger.warning(f"  Error in K-Means (rep={rep}): {exc}")

    return rows


def run_experiments(
    point_roots: List[Path],
    output_root: Path,
    repetitions: int = 10,
    synthetic: int = 0,
    synthetic_samples: int = 300,
    synthetic_features: int = 2,
    synthetic_k: int = 4,
    verbose: bool = False,
) -> None:
    """Benchmark the center-based algorithms on point files and synthetic blobs.

    Args:
        point_roots: Point files, or directories searched for ``*.txt`` point files
        output_root: Directory to save result Parquet files
        repetitions: Number of seeded repetitions for the randomized algorithms
        synthetic: Number of synthetic ``make_blobs`` datasets to add
        synthetic_samples: Samples per synthetic dataset
        synthetic_features: Dimension of synthetic points
        synthetic_k: Number of blobs (and clusters) per synthetic dataset
        verbose: If True, enable DEBUG logging
    """
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    output_root.mkdir(parents=True, exist_ok=True)
    datasets = list(_iter_point_files(point_roots))
    datasets.extend(
        _synthetic_datasets(synthetic, synthetic_samples, synthetic_features, synthetic_k)
    )
    logger.info(f"Found {len(datasets)} datasets to process")

    processed_count = 0
    for dataset_id, X, k, y in tqdm(datasets, desc="Datasets", unit="dataset"):
        try:
            logger.info(f"Processing dataset: {dataset_id}")
            logger.info(f"  Dataset shape: {X.shape}, k={k}")
            rows = _run_suite(dataset_id, X, k, y, repetitions)
            _append_results(output_root, dataset_id, rows)
            processed_count += 1
        except Exception as exc:
            logger.error(f"Error processing dataset {dataset_id}: {exc}")
            logger.error(traceback.format_exc())
            continue

    logger.info("=" * 60)
    logger.info("Experiment summary:")
    logger.info(f"  Processed: {processed_count} datasets")
    logger.info(f"  Result files in: {output_root}")
    logger.info("=" * 60)


def main(argv: List[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Benchmark bioclust center-based clustering.")
    parser.add_argument(
        "--points",
        type=Path,
        nargs="*",
        default=[],
        help="Point files or folders of *.txt point files (k, dimension, coordinates).",
    )
    parser.add_argument(
        "--output",
        type=Path,
        required=True,
        help="Directory where raw result Parquet files will be stored.",
    )
    parser.add_argument("--repetitions", type=int, default=10, help="Seeded repetitions per dataset.")
    parser.add_argument("--synthetic", type=int, default=0, help="Number of synthetic blob datasets.")
    parser.add_argument("--synthetic-samples", type=int, default=300)
    parser.add_argument("--synthetic-features", type=int, default=2)
    parser.add_argument("--synthetic-k", type=int, default=4)
    parser.add_argument("--verbose", action="store_true", help="Enable verbose (DEBUG) logging.")

    args = parser.parse_args(argv)
    if not args.points and args.synthetic <= 0:
        parser.error("give --points and/or --synthetic N")

    run_experiments(
        args.points,
        args.output,
        repetitions=args.repetitions,
        synthetic=args.synthetic,
        synthetic_samples=args.synthetic_samples,
        synthetic_features=args.synthetic_features,
        synthetic_k=args.synthetic_k,
        verbose=args.verbose,
    )


if __name__ == "__main__":
    main()
