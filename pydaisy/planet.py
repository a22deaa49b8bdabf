"""
planet.py

The Daisyworld planet: coverage state, radiative/thermal equations, explicit
time stepping, topology switch and extinction recovery.

Equations (temperatures in deg C, A = planetary albedo, L = luminosity):
- Global temperature (Stefan-Boltzmann inversion):
    T_e = (F * L * (1 - A) / sigma)^(1/4) - 273
- Local temperature of color c (conduction from the planet average):
    flat:   T_c   = q * (A - a_c) + T_e
    round:  T_c,i = q * (m_i * (1 - a_c) - (1 - A)) + T_e
  where m_i is band i's insolation multiplier. At m_i = 1 the round form is the
  flat one. No latitudinal conduction between bands.
- Growth potential (shared by all colors):
    beta(T) = 1 - k * (T_opt - T)^2
- Growth rate:
    r_c = p_c * (beta(T_c) * x - gamma),   x = bare ground proportion
- Round albedo: A = sum_i (m_i / N) * A_i

Step semantics
- Coverage for all regions lives in one (n_regions, n_colors) table: one row
  for a flat planet, N rows for a round one (row 0 polar, row N-1 equatorial).
- update() computes every delta from the pre-step table and the pre-step
  albedo/temperature, then applies them all at once. Order of colors and bands
  never affects the result.
- Albedo and temperature are memoized in CachedValue cells and invalidated by
  every mutator.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, Mapping

import numpy as np

from . import constants as const
from .clock import SimulationClock
from .config import DaisyConfig
from .cover import ALBEDOS, Color, GroundCover, snap_extinct
from .latitude import HabitatStats, LatitudeAggregator, insolation_multipliers


class Topology(Enum):
    FLAT = "flat"
    ROUND = "round"


@dataclass
class CachedValue:
    """Memoized float with an explicit validity flag."""

    value: float = 0.0
    valid: bool = False

    def get(self, compute: Callable[[], float]) -> float:
        if not self.valid:
            self.value = float(compute())
            self.valid = True
        return self.value

    def invalidate(self) -> None:
        self.valid = False


def growth_potential(
    temperature,
    optimal: float = const.OPTIMAL_TEMPERATURE,
    curvature: float = const.GROWTH_CURVATURE,
):
    """Growth suitability: 1 at the optimum, negative more than 17.5 C away from it."""
    return 1.0 - curvature * (optimal - temperature) ** 2


DEFAULT_BOOST_THRESHOLDS: dict[Color, float] = {c: const.BOOST_THRESHOLD for c in Color}


class PlanetModel:
    """
    Daisyworld planet driven by discrete update() calls.

    A color passed as None starts disabled (gray by default). Disabled colors
    hold exactly 0 everywhere and never grow.
    """

    def __init__(
        self,
        white: float | None = 0.5,
        black: float | None = 0.5,
        luminosity: float = 1.0,
        *,
        gray: float | None = None,
        topology: Topology = Topology.FLAT,
        config: DaisyConfig | None = None,
    ) -> None:
        self.config = config or DaisyConfig()
        initial = [white, black, gray]
        p = np.array([0.0 if v is None else float(v) for v in initial], dtype=float)
        if np.any(p < 0.0) or np.any(p > 1.0):
            raise ValueError(f"Initial proportions must lie in [0, 1], got {p.tolist()}.")
        if float(np.sum(p)) > 1.0 + 1e-12:
            raise ValueError(f"Initial proportions sum to {float(np.sum(p)):.6f} > 1.")
        if luminosity < 0.0:
            raise ValueError(f"Luminosity must be non-negative, got {luminosity}.")

        self._luminosity = float(luminosity)
        self._enabled = np.array([v is not None for v in initial], dtype=bool)
        self._growth_enabled = True
        self._topology = Topology.FLAT
        self._albedo = CachedValue()
        self._temperature = CachedValue()
        self._sinks: list = []
        self.clock = SimulationClock(time_per_update=self.config.time_per_update)

        self._set_table(p[None, :])
        if topology is Topology.ROUND:
            self.set_topology(Topology.ROUND)

    # ---- internal state management ----

    def _set_table(self, table: np.ndarray) -> None:
        """Install a new coverage table and rebuild the per-region views."""
        self._table = np.array(table, dtype=float)
        self._regions = tuple(
            GroundCover(self._table[i], floor=self.config.extinction_floor)
            for i in range(self._table.shape[0])
        )
        if self._topology is Topology.ROUND:
            self._multipliers = insolation_multipliers(
                self._table.shape[0], self.config.pole_insolation, self.config.equator_insolation
            )
        else:
            self._multipliers = np.ones(1, dtype=float)
        self._invalidate()

    def _invalidate(self) -> None:
        self._albedo.invalidate()
        self._temperature.invalidate()

    def _diag(self, msg: str) -> None:
        if self.config.diag:
            print(f"[Daisy] {msg}")

    def _band_index(self, band: int | None) -> int:
        if self._topology is Topology.FLAT:
            if band not in (None, 0):
                raise IndexError(f"band {band} requested on a flat planet")
            return 0
        if band is None:
            raise ValueError("A band index is required on a round planet.")
        if not 0 <= band < self.n_bands:
            raise IndexError(f"band {band} out of range [0, {self.n_bands})")
        return int(band)

    # ---- thermal equations ----

    def _band_albedos(self) -> np.ndarray:
        bare = 1.0 - np.sum(self._table, axis=1)
        return self._table @ ALBEDOS + bare * const.GROUND_ALBEDO

    def _compute_albedo(self) -> float:
        if self._topology is Topology.FLAT:
            return self._regions[0].total_albedo()
        weights = self._multipliers / float(self.n_bands)
        return float(np.dot(weights, self._band_albedos()))

    def _compute_temperature(self) -> float:
        cfg = self.config
        absorbed = cfg.flux_constant * self._luminosity * (1.0 - self.global_albedo())
        return (absorbed / cfg.stefan_constant) ** 0.25 - cfg.celsius_to_kelvin

    def global_albedo(self) -> float:
        return self._albedo.get(self._compute_albedo)

    def global_temperature(self) -> float:
        return self._temperature.get(self._compute_temperature)

    def _local_temperature_table(self) -> np.ndarray:
        """Local temperature for every (region, color), shape (n_regions, n_colors)."""
        q = self.config.conductivity
        A = self.global_albedo()
        T = self.global_temperature()
        if self._topology is Topology.FLAT:
            return (q * (A - ALBEDOS) + T)[None, :]
        absorptivity = self._multipliers[:, None] * (1.0 - ALBEDOS)[None, :]
        return q * (absorptivity - (1.0 - A)) + T

    def local_temperature(self, color: Color, band: int | None = None) -> float:
        i = self._band_index(band)
        return float(self._local_temperature_table()[i, Color(color)])

    def growth_potential(self, temperature: float) -> float:
        return float(
            growth_potential(
                temperature, self.config.optimal_temperature, self.config.growth_curvature
            )
        )

    def _growth_rate_table(self) -> np.ndarray:
        beta = growth_potential(
            self._local_temperature_table(),
            self.config.optimal_temperature,
            self.config.growth_curvature,
        )
        bare = 1.0 - np.sum(self._table, axis=1)
        rates = self._table * (beta * bare[:, None] - self.config.death_rate)
        rates[:, ~self._enabled] = 0.0
        return rates

    def growth_rate(self, color: Color, band: int | None = None) -> float:
        i = self._band_index(band)
        return float(self._growth_rate_table()[i, Color(color)])

    # ---- integration ----

    def update(self) -> None:
        """Advance the clock one update and, if growth is on, integrate one step."""
        self.clock.advance()
        if self._growth_enabled:
            # Pre-step albedo/temperature land in the cache before any delta is computed
            self.global_albedo()
            self.global_temperature()
            deltas = self._growth_rate_table() * self.config.time_per_update
            self._apply_deltas(deltas)
            self._invalidate()
        for sink in self._sinks:
            sink.tick(self.clock.update)

    def _apply_deltas(self, deltas: np.ndarray) -> None:
        nxt = snap_extinct(self._table + deltas, self.config.extinction_floor)
        # In-place writes keep the GroundCover row views valid
        self._table[:, self._enabled] = nxt[:, self._enabled]
        self._table[:, ~self._enabled] = 0.0
        if self.config.clamp_total:
            totals = np.sum(self._table, axis=1)
            over = totals > 1.0
            if np.any(over):
                self._table[over] /= totals[over, None]

    def run(self, n_updates: int) -> None:
        for _ in range(int(n_updates)):
            self.update()

    # ---- mutators ----

    def set_luminosity(self, luminosity: float) -> None:
        if luminosity < 0.0:
            raise ValueError(f"Luminosity must be non-negative, got {luminosity}.")
        self._luminosity = float(luminosity)
        self._invalidate()

    def set_color_enabled(self, color: Color, enabled: bool) -> None:
        color = Color(color)
        self._enabled[color] = bool(enabled)
        if not enabled:
            self._table[:, color] = 0.0
        self._invalidate()

    def set_white_enabled(self, enabled: bool) -> None:
        self.set_color_enabled(Color.WHITE, enabled)

    def set_black_enabled(self, enabled: bool) -> None:
        self.set_color_enabled(Color.BLACK, enabled)

    def set_gray_enabled(self, enabled: bool) -> None:
        self.set_color_enabled(Color.GRAY, enabled)

    def set_growth_enabled(self, enabled: bool) -> None:
        self._growth_enabled = bool(enabled)

    def set_topology(self, topology: Topology) -> None:
        """
        Switch between one homogeneous region and N latitude bands.

        flat -> round copies the flat proportions into every band; round -> flat
        averages the bands, conserving each color's aggregate proportion.
        """
        topology = Topology(topology)
        if topology is self._topology:
            return
        if topology is Topology.ROUND:
            table = np.tile(self._table[0], (self.config.n_bands, 1))
        else:
            table = np.mean(self._table, axis=0, keepdims=True)
        previous = self._topology
        self._topology = topology
        self._set_table(table)
        self._diag(
            f"topology {previous.value} -> {topology.value} ({self.n_bands} region(s))"
        )

    def increment_color(self, color: Color, delta: float, band: int | None = None) -> None:
        """Increment one region (or, on a round planet with band=None, every band)."""
        color = Color(color)
        if not self._enabled[color]:
            raise ValueError(f"{color.name.lower()} daisies are disabled.")
        if self._topology is Topology.ROUND and band is None:
            for region in self._regions:
                region.increment_color(color, delta)
        else:
            self._regions[self._band_index(band)].increment_color(color, delta)
        self._invalidate()

    def boost_if_extinct(
        self, thresholds: Mapping[Color, float] | None = None
    ) -> list[Color]:
        """
        Reseed enabled colors whose aggregate proportion fell below threshold.

        Flat: the proportion is set to the threshold. Round: every band below
        threshold * band_boost_fraction is raised to that value.
        Returns the colors that were boosted.
        """
        thresholds = DEFAULT_BOOST_THRESHOLDS if thresholds is None else thresholds
        boosted: list[Color] = []
        for color, threshold in thresholds.items():
            color = Color(color)
            if not self._enabled[color] or self.proportion(color) >= threshold:
                continue
            if self._topology is Topology.FLAT:
                self._regions[0].set_proportion(color, threshold)
            else:
                per_band = float(threshold) * self.config.band_boost_fraction
                low = self._table[:, color] < per_band
                if not low.any():
                    continue
                self._table[low, color] = per_band
            boosted.append(color)
        if boosted:
            self._invalidate()
            self._diag(
                "boosted "
                + ", ".join(f"{c.name.lower()}={self.proportion(c):.4f}" for c in boosted)
                + f" at L={self._luminosity:.3f}"
            )
        return boosted

    def attach(self, sink) -> None:
        """Tick `sink` (anything with tick(update)) after every completed update."""
        self._sinks.append(sink)

    def detach(self, sink) -> None:
        self._sinks.remove(sink)

    # ---- queries ----

    @property
    def luminosity(self) -> float:
        return self._luminosity

    @property
    def topology(self) -> Topology:
        return self._topology

    @property
    def growth_enabled(self) -> bool:
        return self._growth_enabled

    @property
    def n_bands(self) -> int:
        return int(self._table.shape[0])

    @property
    def update_count(self) -> int:
        return self.clock.update

    @property
    def time(self) -> float:
        return self.clock.time

    @property
    def updates_per_time_unit(self) -> int:
        return self.clock.updates_per_time_unit

    def is_enabled(self, color: Color) -> bool:
        return bool(self._enabled[Color(color)])

    def enabled_colors(self) -> list[Color]:
        return [c for c in Color if self._enabled[c]]

    def proportion(self, color: Color) -> float:
        """Planet-wide proportion (mean over bands on a round planet)."""
        return float(np.mean(self._table[:, Color(color)]))

    def proportion_white(self) -> float:
        return self.proportion(Color.WHITE)

    def proportion_black(self) -> float:
        return self.proportion(Color.BLACK)

    def proportion_gray(self) -> float:
        return self.proportion(Color.GRAY)

    def proportion_of_ground(self) -> float:
        return 1.0 - float(np.sum(np.mean(self._table, axis=0)))

    def band(self, i: int) -> GroundCover:
        return self._regions[self._band_index(i)]

    def bands(self) -> Iterable[GroundCover]:
        return iter(self._regions)

    def coverage_table(self) -> np.ndarray:
        """Copy of the (n_regions, n_colors) coverage table."""
        return self._table.copy()

    def latitudes(self) -> LatitudeAggregator:
        if self._topology is not Topology.ROUND:
            raise ValueError("Latitude statistics require a round planet.")
        return LatitudeAggregator(
            self._table,
            n_display=self.config.n_display_bands,
            sparse_threshold=self.config.sparse_threshold,
        )

    def display_proportion(self, color: Color, d: int) -> float:
        return self.latitudes().display_proportion(Color(color), d)

    def average_latitude(self, color: Color) -> float:
        return self.latitudes().average_latitude(Color(color))

    def min_latitude(self, color: Color) -> int:
        return self.latitudes().min_latitude(Color(color))

    def max_latitude(self, color: Color) -> int:
        return self.latitudes().max_latitude(Color(color))

    def habitat(self, color: Color) -> HabitatStats:
        return self.latitudes().habitat(Color(color))

    def __repr__(self) -> str:
        props = ", ".join(f"{c.name.lower()}={self.proportion(c):.4f}" for c in self.enabled_colors())
        return (
            f"PlanetModel({self._topology.value}, L={self._luminosity:.3f}, {props}, "
            f"update={self.clock.update})"
        )


__all__ = [
    "Topology",
    "CachedValue",
    "growth_potential",
    "DEFAULT_BOOST_THRESHOLDS",
    "PlanetModel",
]
