from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Dict, List

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

METRICS = ["distortion", "radius", "silhouette", "ari", "n_iterations", "runtime_sec"]

ALGORITHM_NAMES = {
    "farthest_first": "Farthest-First",
    "lloyd_farthest_first": "Lloyd (FF seeds)",
    "lloyd_d2": "Lloyd (D² seeds)",
    "sklearn_kmeans": "scikit-learn KMeans",
}


def _format_mean_std(mean_val: float, std_val: float, precision: int = 3) -> str:
    if np.isnan(mean_val):
        return "N/A"
    if np.isnan(std_val):
        std_val = 0.0
    fmt = f"{{:.{precision}f}} ± {{:.{precision}f}}"
    return fmt.format(mean_val, std_val)


def _load_raw(raw_root: Path) -> pd.DataFrame:
    parquet_files = sorted(raw_root.glob("*.parquet"))
    if not parquet_files:
        raise FileNotFoundError(
            f"No Parquet files found under {raw_root}. "
            f"Make sure experiments completed successfully and generated result files."
        )
    print(f"Loading {len(parquet_files)} result files from {raw_root}")
    return pd.concat([pd.read_parquet(p) for p in parquet_files], ignore_index=True)


def aggregate(df: pd.DataFrame) -> pd.DataFrame:
    """Mean and standard deviation of every metric per (dataset, algorithm)."""
    agg = df.groupby(["dataset_id", "algorithm"], dropna=False)[METRICS].agg(["mean", "std"])
    # Flatten MultiIndex columns
    agg.columns = [f"{m}_{stat}" for m, stat in agg.columns]
    return agg.reset_index()


def algorithm_table(summary: pd.DataFrame) -> pd.DataFrame:
    """Table comparing algorithms averaged over all datasets."""
    rows: List[Dict] = []
    for alg in sorted(summary["algorithm"].unique()):
        alg_data = summary[summary["algorithm"] == alg]
        row = {"Algorithm": ALGORITHM_NAMES.get(alg, alg)}
        for metric, label, precision in (
            ("distortion", "Distortion", 3),
            ("radius", "Radius", 3),
            ("silhouette", "Silhouette", 3),
            ("ari", "ARI", 3),
            ("runtime_sec", "Runtime (s)", 4),
        ):
            row[label] = _format_mean_std(
                float(alg_data[f"{metric}_mean"].mean()),
                float(alg_data[f"{metric}_std"].mean()),
                precision=precision,
            )
        rows.append(row)
    return pd.DataFrame(rows)


def _save_tables(summary: pd.DataFrame, output_root: Path) -> None:
    output_root.mkdir(parents=True, exist_ok=True)
    summary.to_csv(output_root / "summary.csv", index=False)

    table = algorithm_table(summary)
    table.to_csv(output_root / "table_algorithm_comparison.csv", index=False)
    latex = table.to_latex(index=False, escape=False)
    latex = latex.replace(" ± ", " $\\pm$ ")
    (output_root / "table_algorithm_comparison.tex").write_text(latex, encoding="utf-8")

    meta: Dict = {
        "tables": ["table_algorithm_comparison"],
        "description": "Center-based clustering results aggregated over datasets.",
    }
    (output_root / "summary.json").write_text(json.dumps(meta, indent=2), encoding="utf-8")


def _plot_metric(summary: pd.DataFrame, output_root: Path, metric: str, ylabel: str) -> Path:
    """Bar chart of a metric per algorithm, one bar group per dataset."""
    datasets = sorted(summary["dataset_id"].unique())
    algorithms = sorted(summary["algorithm"].unique())
    x = np.arange(len(datasets))
    width = 0.8 / max(len(algorithms), 1)

    fig, ax = plt.subplots(figsize=(max(6, 1.5 * len(datasets)), 4))
    for i, alg in enumerate(algorithms):
        sub = summary[summary["algorithm"] == alg].set_index("dataset_id")
        heights = [sub[f"{metric}_mean"].get(d, np.nan) for d in datasets]
        ax.bar(x + i * width, heights, width=width, label=ALGORITHM_NAMES.get(alg, alg))

    ax.set_xticks(x + width * (len(algorithms) - 1) / 2)
    ax.set_xticklabels(datasets, rotation=45, ha="right")
    ax.set_ylabel(ylabel)
    ax.set_title(f"{ylabel} by dataset and algorithm")
    ax.legend()
    fig.tight_layout()

    img_path = output_root / f"{metric}_by_algorithm.png"
    fig.savefig(img_path, dpi=200)
    plt.close(fig)
    return img_path


def main(argv: List[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Aggregate bioclust benchmark results.")
    parser.add_argument("--raw", type=Path, required=True, help="Directory containing raw Parquet logs.")
    parser.add_argument("--output", type=Path, required=True, help="Directory for summary tables and plots.")
    args = parser.parse_args(argv)

    summary = aggregate(_load_raw(args.raw))
    _save_tables(summary, args.output)
    _plot_metric(summary, args.output, "distortion", "Distortion")
    _plot_metric(summary, args.output, "runtime_sec", "Runtime (s)")


if __name__ == "__main__":
    main()
