from __future__ import annotations

from pathlib import Path
from typing import Iterator, List, Tuple

import numpy as np


def _tokens(path: Path) -> Iterator[str]:
    with open(path, encoding="utf-8") as handle:
        for line in handle:
            yield from line.split()


def _as_float(token: str) -> float | None:
    try:
        return float(token)
    except ValueError:
        return None


def _as_int(token: str, what: str, path: Path) -> int:
    try:
        return int(token)
    except ValueError:
        raise ValueError(f"{path}: expected integer {what}, got {token!r}.") from None


def read_points(path: Path | str) -> Tuple[int, np.ndarray]:
    """Read a cluster count and a point set from a whitespace-separated file.

    The first token is the number of clusters, the second the dimension
    ``m``; the rest are coordinates, consumed ``m`` at a time. Tokens that
    are not numbers are skipped. A trailing partial point is rejected.

    Returns
    -------
    (k, points):
        The requested cluster count and an array of shape (n_points, m).
    """
    path = Path(path)
    tokens = _tokens(path)
    header = [next(tokens, None), next(tokens, None)]
    if header[1] is None:
        raise ValueError(f"{path}: missing cluster count and dimension header.")
    k = _as_int(header[0], "cluster count", path)
    m = _as_int(header[1], "dimension", path)
    if m <= 0:
        raise ValueError(f"{path}: dimension must be positive, got {m}.")

    coords = [value for value in map(_as_float, tokens) if value is not None]
    if not coords:
        raise ValueError(f"{path}: no coordinates found.")
    if len(coords) % m != 0:
        raise ValueError(
            f"{path}: {len(coords)} coordinates do not form whole points of dimension {m} "
            f"({len(coords) % m} left over)."
        )
    return k, np.array(coords, dtype=float).reshape(-1, m)


def read_distance_matrix(path: Path | str) -> np.ndarray:
    """Read ``n`` followed by ``n * n`` distances, row by row."""
    path = Path(path)
    tokens = list(_tokens(path))
    if not tokens:
        raise ValueError(f"{path}: empty distance matrix file.")
    n = _as_int(tokens[0], "matrix size", path)
    if n <= 0:
        raise ValueError(f"{path}: matrix size must be positive, got {n}.")
    values = tokens[1:]
    if len(values) != n * n:
        raise ValueError(f"{path}: expected {n * n} distances, found {len(values)}.")
    try:
        return np.array([float(v) for v in values], dtype=float).reshape(n, n)
    except ValueError as exc:
        raise ValueError(f"{path}: non-numeric distance ({exc}).") from None


def _binary_row(line: str, path: Path, lineno: int) -> List[bool]:
    # Rows may be written as "0 1 1" or packed as "011".
    cells = line.split() if len(line.split()) > 1 else list(line.strip())
    if any(cell not in ("0", "1") for cell in cells):
        raise ValueError(f"{path}:{lineno}: expected only 0/1 values.")
    return [cell == "1" for cell in cells]


def read_binary_matrix(path: Path | str) -> np.ndarray:
    """Read a 0/1 matrix, one row per non-blank line (e.g. markers x samples)."""
    path = Path(path)
    rows: List[List[bool]] = []
    with open(path, encoding="utf-8") as handle:
        for lineno, line in enumerate(handle, start=1):
            if line.strip():
                rows.append(_binary_row(line, path, lineno))
    if not rows:
        raise ValueError(f"{path}: no rows found.")
    if len({len(row) for row in rows}) != 1:
        raise ValueError(f"{path}: rows have different lengths.")
    return np.array(rows, dtype=bool)


def read_binary_vector(path: Path | str) -> np.ndarray:
    """Read a single 0/1 vector (all non-blank lines are concatenated)."""
    path = Path(path)
    values: List[bool] = []
    with open(path, encoding="utf-8") as handle:
        for lineno, line in enumerate(handle, start=1):
            if line.strip():
                values.extend(_binary_row(line, path, lineno))
    if not values:
        raise ValueError(f"{path}: no values found.")
    return np.array(values, dtype=bool)
