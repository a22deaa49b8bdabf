from __future__ import annotations

from enum import IntEnum

import numpy as np

from . import constants as const


class Color(IntEnum):
    """Daisy pigments. The integer value is the column in coverage tables."""

    WHITE = 0
    BLACK = 1
    GRAY = 2

    @property
    def albedo(self) -> float:
        return float(ALBEDOS[self])


N_COLORS = len(Color)

# Indexed by Color
ALBEDOS = np.array([const.WHITE_ALBEDO, const.BLACK_ALBEDO, const.GRAY_ALBEDO], dtype=float)


def snap_extinct(values: np.ndarray, floor: float = const.EXTINCTION_FLOOR) -> np.ndarray:
    """Return `values` with every entry below `floor` set to exactly 0."""
    values = np.asarray(values, dtype=float)
    return np.where(values < floor, 0.0, values)


class GroundCover:
    """
    Coverage proportions of each daisy color in one region.

    The proportions live in a 1-D float array indexed by Color. When the region
    belongs to a planet, that array is a row view into the planet's coverage
    table, so writes here are seen by the planet and vice versa.

    Bare ground is whatever the colors leave uncovered. No upper clamp is
    applied here; the integrator decides what to do with totals above 1.
    """

    def __init__(
        self,
        proportions: np.ndarray | None = None,
        *,
        floor: float = const.EXTINCTION_FLOOR,
        ground_albedo: float = const.GROUND_ALBEDO,
    ):
        if proportions is None:
            proportions = np.zeros(N_COLORS, dtype=float)
        elif not isinstance(proportions, np.ndarray):
            proportions = np.asarray(proportions, dtype=float)
        if proportions.shape != (N_COLORS,):
            raise ValueError(
                f"GroundCover expects {N_COLORS} proportions, got shape {proportions.shape}."
            )
        self._p = proportions
        self.floor = float(floor)
        self.ground_albedo = float(ground_albedo)

    @classmethod
    def from_mapping(cls, mapping: dict[Color, float], **kwargs) -> GroundCover:
        p = np.zeros(N_COLORS, dtype=float)
        for color, value in mapping.items():
            p[Color(color)] = float(value)
        return cls(p, **kwargs)

    def proportion(self, color: Color) -> float:
        return float(self._p[color])

    def proportions(self) -> np.ndarray:
        return self._p.copy()

    def proportion_of_ground(self) -> float:
        return 1.0 - float(np.sum(self._p))

    def set_proportion(self, color: Color, value: float) -> None:
        self._p[color] = float(value)

    def increment_color(self, color: Color, delta: float) -> None:
        value = float(self._p[color]) + float(delta)
        self._p[color] = 0.0 if value < self.floor else value

    def total_albedo(self) -> float:
        return float(np.dot(self._p, ALBEDOS)) + self.proportion_of_ground() * self.ground_albedo

    def __repr__(self) -> str:
        parts = ", ".join(f"{c.name.lower()}={self._p[c]:.4f}" for c in Color)
        return f"GroundCover({parts}, ground={self.proportion_of_ground():.4f})"
