from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest

from bioclust.algorithms import cluster_points
from bioclust.cli import main


@pytest.fixture
def points_file(tmp_path: Path) -> Path:
    path = tmp_path / "points.txt"
    path.write_text("2 2\n0 0\n0 1\n10 0\n10 1\n", encoding="utf-8")
    return path


def test_farthest_first_command_prints_centers(points_file: Path, capsys) -> None:
    main(["farthest-first", str(points_file)])
    assert capsys.readouterr().out.splitlines() == ["0.000 0.000", "10.000 1.000"]


def test_kmeans_command_prints_k_centers(points_file: Path, capsys) -> None:
    main(["kmeans", str(points_file), "--seed", "3", "-k", "1"])
    assert capsys.readouterr().out.splitlines() == ["5.000 0.500"]


def test_upgma_command_writes_adjacency(tmp_path: Path, capsys) -> None:
    matrix = tmp_path / "dist.txt"
    matrix.write_text("3\n0 2 4\n2 0 4\n4 4 0\n", encoding="utf-8")
    output = tmp_path / "tree.txt"

    main(["upgma", str(matrix), "--output", str(output)])
    assert capsys.readouterr().out.splitlines() == ["1 2", "3 1 2"]
    assert output.read_text(encoding="utf-8").splitlines()[0] == "0->3:1.000"


def test_markers_command(tmp_path: Path, capsys) -> None:
    snps = tmp_path / "snps.txt"
    snps.write_text("0000\n0101\n0011\n", encoding="utf-8")
    explain = tmp_path / "explain.txt"
    explain.write_text("0011\n", encoding="utf-8")

    main(["markers", str(snps), str(explain), "-k", "1"])
    assert capsys.readouterr().out.strip() == "2"


def test_cluster_points_dispatch() -> None:
    X = np.array([[0.0, 0.0], [0.0, 1.0], [10.0, 0.0], [10.0, 1.0]])
    state = cluster_points(X, 2, method="farthest_first")
    assert np.allclose(state.center_copy(), [[0.0, 0.0], [10.0, 1.0]])

    with pytest.raises(ValueError):
        cluster_points(X, 2, method="ward")
