from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest

from bioclust.data import read_binary_matrix, read_binary_vector, read_distance_matrix, read_points


def test_read_points_skips_non_numeric_tokens(tmp_path: Path) -> None:
    path = tmp_path / "points.txt"
    path.write_text("2 2\n0 0\ngeneA 0 1\n10 0 # tail\n10 1\n", encoding="utf-8")

    k, X = read_points(path)
    assert k == 2
    assert np.allclose(X, [[0, 0], [0, 1], [10, 0], [10, 1]])


def test_read_points_rejects_partial_point(tmp_path: Path) -> None:
    path = tmp_path / "points.txt"
    path.write_text("2 2\n0 0\n1\n", encoding="utf-8")
    with pytest.raises(ValueError):
        read_points(path)


@pytest.mark.parametrize("content", ["", "2", "x 2\n0 0", "2 0\n1 1", "2 2\nfoo"])
def test_read_points_rejects_bad_headers(tmp_path: Path, content: str) -> None:
    path = tmp_path / "points.txt"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(ValueError):
        read_points(path)


def test_read_distance_matrix(tmp_path: Path) -> None:
    path = tmp_path / "dist.txt"
    path.write_text("3\n0 2 4\n2 0 4\n4 4 0\n", encoding="utf-8")
    D = read_distance_matrix(path)
    assert D.shape == (3, 3)
    assert D[0, 2] == 4.0

    path.write_text("3\n0 2 4\n2 0 4\n", encoding="utf-8")
    with pytest.raises(ValueError):
        read_distance_matrix(path)


def test_read_binary_inputs(tmp_path: Path) -> None:
    snps = tmp_path / "snps.txt"
    snps.write_text("0 1 0 1\n0011\n\n1 1 1 1\n", encoding="utf-8")
    M = read_binary_matrix(snps)
    assert M.shape == (3, 4)
    assert M[1].tolist() == [False, False, True, True]

    explain = tmp_path / "explain.txt"
    explain.write_text("0 0\n1 1\n", encoding="utf-8")
    assert read_binary_vector(explain).tolist() == [False, False, True, True]

    snps.write_text("0 1\n0 1 1\n", encoding="utf-8")
    with pytest.raises(ValueError):
        read_binary_matrix(snps)
    explain.write_text("0 2\n", encoding="utf-8")
    with pytest.raises(ValueError):
        read_binary_vector(explain)
