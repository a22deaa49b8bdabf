"""
The canonical Daisyworld experiments (Watson & Lovelock 1983, figures a-d).

- temperature_check: 50/50 planet with growth off; albedo 0.5, T_e about 26 C,
  black daisies about 31 C, white about 21 C.
- run_constant_luminosity: constant sun, daisies grow and die. Black only
  settles near a_b = 0.15; black and white near a_b = 0.3, a_w = 0.4,
  T_e = 22.
- luminosity_sweep: raise luminosity from min to max, then lower it back,
  letting the planet settle at each value and reseeding extinct colors. With
  no daisies the temperature rises monotonically and concave-down; with both
  colors it plateaus near the 22.5 C growth optimum.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

import numpy as np

from .config import DaisyConfig
from .cover import Color
from .planet import PlanetModel, Topology
from .recorder import standard_fields


def temperature_check(config: DaisyConfig | None = None) -> dict[str, float]:
    world = PlanetModel(0.5, 0.5, 1.0, config=config)
    world.set_growth_enabled(False)
    return {
        "albedo": world.global_albedo(),
        "temperature": world.global_temperature(),
        "black_temperature": world.local_temperature(Color.BLACK),
        "white_temperature": world.local_temperature(Color.WHITE),
    }


def update_world_times(world: PlanetModel, updates: int) -> None:
    for _ in range(int(updates)):
        world.update()


def run_constant_luminosity(
    white: float,
    black: float,
    luminosity: float = 1.0,
    *,
    time_units: int = 100,
    white_enabled: bool = True,
    black_enabled: bool = True,
    topology: Topology = Topology.FLAT,
    recorder=None,
    latitude: bool = False,
    config: DaisyConfig | None = None,
) -> PlanetModel:
    """
    Run `time_units` of constant sunlight (plus the initial sampling update).

    A recorder, if given, gets the standard fields and samples once per time unit.
    """
    world = PlanetModel(white, black, luminosity, topology=topology, config=config)
    world.set_white_enabled(white_enabled)
    world.set_black_enabled(black_enabled)
    if recorder is not None:
        standard_fields(recorder, world, latitude=latitude)
        recorder.set_timing_repeat(world.updates_per_time_unit)
        world.attach(recorder)
    update_world_times(world, world.updates_per_time_unit * time_units + 1)
    return world


def run_at_luminosity(
    world: PlanetModel,
    luminosity: float,
    updates: int,
    thresholds: Mapping[Color, float] | None = None,
) -> None:
    """Set the luminosity, reseed extinct colors, and let the planet settle."""
    world.set_luminosity(luminosity)
    world.boost_if_extinct(thresholds)
    update_world_times(world, updates)


@dataclass
class SweepResult:
    """Settled state at the end of each luminosity step, in sweep order."""

    white_enabled: bool
    black_enabled: bool
    luminosity: list[float] = field(default_factory=list)
    rising: list[bool] = field(default_factory=list)
    temperature: list[float] = field(default_factory=list)
    white: list[float] = field(default_factory=list)
    black: list[float] = field(default_factory=list)

    def record(self, world: PlanetModel, rising: bool) -> None:
        self.luminosity.append(world.luminosity)
        self.rising.append(rising)
        self.temperature.append(world.global_temperature())
        self.white.append(world.proportion(Color.WHITE))
        self.black.append(world.proportion(Color.BLACK))

    @property
    def label(self) -> str:
        names = [n for n, on in (("white", self.white_enabled), ("black", self.black_enabled)) if on]
        return "_and_".join(names) if names else "no_daisies"

    def leg(self, rising: bool) -> dict[str, np.ndarray]:
        """Arrays for the rising (or falling) half of the sweep."""
        mask = np.asarray(self.rising, dtype=bool) == rising
        return {
            "luminosity": np.asarray(self.luminosity)[mask],
            "temperature": np.asarray(self.temperature)[mask],
            "white": np.asarray(self.white)[mask],
            "black": np.asarray(self.black)[mask],
        }


def luminosity_sweep(
    white_enabled: bool,
    black_enabled: bool,
    *,
    min_luminosity: float = 0.5,
    max_luminosity: float = 1.7,
    luminosity_step: float = 0.01,
    time_per_luminosity: int = 50,
    topology: Topology = Topology.FLAT,
    thresholds: Mapping[Color, float] | None = None,
    recorder=None,
    latitude: bool = False,
    config: DaisyConfig | None = None,
) -> SweepResult:
    """
    Raise luminosity from min to max, then lower it back to min.

    The planet starts at 0.5/0.5 for each enabled color. The recorder, if given,
    samples once per luminosity, on the last update spent at that value.
    """
    world = PlanetModel(
        0.5 if white_enabled else 0.0,
        0.5 if black_enabled else 0.0,
        min_luminosity,
        topology=topology,
        config=config,
    )
    world.set_white_enabled(white_enabled)
    world.set_black_enabled(black_enabled)
    updates_per_luminosity = time_per_luminosity * world.updates_per_time_unit
    if recorder is not None:
        standard_fields(recorder, world, latitude=latitude)
        recorder.set_timing_repeat(updates_per_luminosity)
        world.attach(recorder)

    result = SweepResult(white_enabled=white_enabled, black_enabled=black_enabled)
    n_trials = int(round((max_luminosity - min_luminosity) / luminosity_step))
    for trial in range(n_trials):
        run_at_luminosity(
            world, min_luminosity + luminosity_step * trial, updates_per_luminosity, thresholds
        )
        result.record(world, rising=True)
    for trial in range(n_trials, -1, -1):
        run_at_luminosity(
            world, min_luminosity + luminosity_step * trial, updates_per_luminosity, thresholds
        )
        result.record(world, rising=False)
    return result


__all__ = [
    "temperature_check",
    "update_world_times",
    "run_constant_luminosity",
    "run_at_luminosity",
    "SweepResult",
    "luminosity_sweep",
]
