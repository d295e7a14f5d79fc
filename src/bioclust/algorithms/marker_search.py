from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

import numpy as np

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MarkerSearchConfig:
    """Configuration for the marker local search.

    Attributes
    ----------
    max_passes:
        Optional cap on full improvement passes; ``None`` runs until a pass
        accepts no swap.
    """

    max_passes: int | None = None

    def __post_init__(self) -> None:
        if self.max_passes is not None and self.max_passes <= 0:
            raise ValueError("max_passes must be positive when given.")


@dataclass
class MarkerSearchResult:
    markers: np.ndarray
    score: float
    n_passes: int


class MarkerSearch:
    """Pick `k` SNP markers that best distinguish samples with differing traits.

    Parameters
    ----------
    snps:
        Binary matrix of shape (n_markers, n_samples); entry ``[m, s]`` is
        the allele of sample ``s`` at marker ``m``.
    """

    def __init__(self, snps: Sequence[Sequence[bool]] | np.ndarray):
        snps = np.asarray(snps)
        if snps.ndim != 2 or snps.shape[0] == 0 or snps.shape[1] == 0:
            raise ValueError("snps must be a non-empty 2-D array (n_markers, n_samples).")
        if not np.all((snps == 0) | (snps == 1)):
            raise ValueError("snps must be binary.")
        self._snps = snps.astype(bool)
        self._snps.setflags(write=False)

    @property
    def n_markers(self) -> int:
        return self._snps.shape[0]

    @property
    def n_samples(self) -> int:
        return self._snps.shape[1]

    def _explain_pairs(self, explain: Sequence[bool] | np.ndarray) -> np.ndarray:
        """Upper-triangular mask of sample pairs whose explain bits differ."""
        explain = np.asarray(explain)
        if explain.shape != (self.n_samples,):
            raise ValueError(
                f"explain must have one entry per sample ({self.n_samples}), got shape {explain.shape}."
            )
        if not np.all((explain == 0) | (explain == 1)):
            raise ValueError("explain must be binary.")
        explain = explain.astype(bool)
        differ = explain[:, None] != explain[None, :]
        return np.triu(differ, k=1)

    def _score(self, markers: np.ndarray, must_explain: np.ndarray, total: int) -> float:
        if total == 0:
            return 0.0
        chosen = self._snps[markers]
        distinguished = np.any(chosen[:, :, None] != chosen[:, None, :], axis=0)
        return float(np.count_nonzero(distinguished & must_explain)) / total

    def score(self, markers: Sequence[int] | np.ndarray, explain: Sequence[bool] | np.ndarray) -> float:
        """Fraction of differing-explain sample pairs that some chosen marker also separates.

        Returns 0.0 when the explain vector is constant (no pair to explain).
        """
        markers = self._check_markers(markers)
        must_explain = self._explain_pairs(explain)
        return self._score(markers, must_explain, int(np.count_nonzero(must_explain)))

    def search(
        self,
        explain: Sequence[bool] | np.ndarray,
        k: int,
        config: MarkerSearchConfig | None = None,
    ) -> MarkerSearchResult:
        """Hill-climb from markers ``0..k-1`` using first-improvement single swaps.

        Each pass tries every position against every marker and adopts any
        strictly better swap immediately. The search stops after a pass with
        no accepted swap.
        """
        if config is None:
            config = MarkerSearchConfig()
        if k <= 0 or k > self.n_markers:
            raise ValueError("k must satisfy 1 <= k <= n_markers.")

        must_explain = self._explain_pairs(explain)
        total = int(np.count_nonzero(must_explain))
        best = np.arange(k, dtype=int)
        if total == 0:
            logger.warning("explain vector is constant; no sample pair needs explaining")
            return MarkerSearchResult(markers=best, score=0.0, n_passes=0)

        best_score = self._score(best, must_explain, total)
        passes = 0
        improved = True
        while improved and (config.max_passes is None or passes < config.max_passes):
            improved = False
            passes += 1
            for pos in range(k):
                for marker in range(self.n_markers):
                    if best[pos] == marker:
                        continue
                    candidate = best.copy()
                    candidate[pos] = marker
                    cand_score = self._score(candidate, must_explain, total)
                    if cand_score > best_score:
                        logger.debug(
                            f"pass {passes}: position {pos} -> marker {marker}, score {cand_score:.4f}"
                        )
                        best, best_score = candidate, cand_score
                        improved = True

        return MarkerSearchResult(markers=best, score=best_score, n_passes=passes)

    def _check_markers(self, markers: Sequence[int] | np.ndarray) -> np.ndarray:
        markers = np.asarray(markers, dtype=int)
        if markers.ndim != 1 or markers.size == 0:
            raise ValueError("markers must be a non-empty 1-D sequence of indices.")
        if np.any(markers < 0) or np.any(markers >= self.n_markers):
            raise IndexError(f"Marker indices must lie in [0, {self.n_markers}).")
        return markers
