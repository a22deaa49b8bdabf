"""
Latitude mechanics of the round planet.

The round planet is an (N, n_colors) coverage table; row 0 is the most polar
band and row N-1 the most equatorial. This module holds the pure functions of
band indices (insolation weighting, coarse display bands) and a read-only
aggregator computing per-color habitat statistics over such a table.

Sentinels
- average latitude of a color whose total proportion is below the sparse
  threshold is NO_LATITUDE (NaN). It is a normal outcome, not an error;
  callers must check it (math.isnan / HabitatStats.defined) before use.
- min latitude of an absent color is N (one past the last band), max latitude
  is -1.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from . import constants as const
from .cover import Color

NO_LATITUDE = float("nan")


def insolation_multiplier(
    i: int,
    n_bands: int = const.N_BANDS,
    pole: float = const.POLE_INSOLATION,
    equator: float = const.EQUATOR_INSOLATION,
) -> float:
    """Share of baseline sunlight reaching band i (linear from pole to equator)."""
    if n_bands <= 1:
        return float(pole)
    return pole + (equator - pole) / (n_bands - 1) * i


def insolation_multipliers(
    n_bands: int = const.N_BANDS,
    pole: float = const.POLE_INSOLATION,
    equator: float = const.EQUATOR_INSOLATION,
) -> np.ndarray:
    """Vector form of insolation_multiplier for all bands."""
    return np.array(
        [insolation_multiplier(i, n_bands, pole, equator) for i in range(n_bands)], dtype=float
    )


def display_band_slice(
    d: int, n_bands: int = const.N_BANDS, n_display: int = const.N_DISPLAY_BANDS
) -> slice:
    """
    Internal bands aggregated into display band d.

    Display band 0 is the most equatorial: it covers [N - w, N), with
    w = N // n_display.
    """
    if not 0 <= d < n_display:
        raise IndexError(f"display band {d} out of range [0, {n_display})")
    w = n_bands // n_display
    return slice(n_bands - w * (d + 1), n_bands - w * d)


@dataclass(frozen=True)
class HabitatStats:
    """Min/mean/max band index at which a color lives."""

    min: int
    mean: float
    max: int

    @property
    def defined(self) -> bool:
        return not math.isnan(self.mean)


class LatitudeAggregator:
    """Read-only view over a round planet's (N, n_colors) coverage table."""

    def __init__(
        self,
        table: np.ndarray,
        *,
        n_display: int = const.N_DISPLAY_BANDS,
        sparse_threshold: float = const.SPARSE_THRESHOLD,
    ):
        self._table = table
        self.n_bands = int(table.shape[0])
        self.n_display = int(n_display)
        self.sparse_threshold = float(sparse_threshold)

    def display_band(self, d: int) -> np.ndarray:
        """Unweighted per-color mean over the internal bands of display band d."""
        rows = self._table[display_band_slice(d, self.n_bands, self.n_display)]
        return np.mean(rows, axis=0)

    def display_proportion(self, color: Color, d: int) -> float:
        return float(self.display_band(d)[color])

    def display_bands(self) -> np.ndarray:
        """(n_display, n_colors) array of all display bands."""
        return np.stack([self.display_band(d) for d in range(self.n_display)])

    def average_latitude(self, color: Color) -> float:
        col = self._table[:, color]
        total = float(np.sum(col))
        if total < self.sparse_threshold:
            return NO_LATITUDE
        return float(np.dot(np.arange(self.n_bands), col)) / total

    def min_latitude(self, color: Color) -> int:
        nz = np.flatnonzero(self._table[:, color] > 0.0)
        return int(nz[0]) if nz.size else self.n_bands

    def max_latitude(self, color: Color) -> int:
        nz = np.flatnonzero(self._table[:, color] > 0.0)
        return int(nz[-1]) if nz.size else -1

    def habitat(self, color: Color) -> HabitatStats:
        return HabitatStats(
            min=self.min_latitude(color),
            mean=self.average_latitude(color),
            max=self.max_latitude(color),
        )


__all__ = [
    "NO_LATITUDE",
    "insolation_multiplier",
    "insolation_multipliers",
    "display_band_slice",
    "HabitatStats",
    "LatitudeAggregator",
]
