from __future__ import annotations

# Re-export public API for pydaisy

from .clock import SimulationClock
from .config import DaisyConfig
from .cover import ALBEDOS, Color, GroundCover
from .latitude import (
    NO_LATITUDE,
    HabitatStats,
    LatitudeAggregator,
    display_band_slice,
    insolation_multiplier,
    insolation_multipliers,
)
from .planet import PlanetModel, Topology, growth_potential
from .recorder import DataRecorder, DataSink, standard_fields

__all__ = [
    "SimulationClock",
    "DaisyConfig",
    "ALBEDOS",
    "Color",
    "GroundCover",
    "NO_LATITUDE",
    "HabitatStats",
    "LatitudeAggregator",
    "display_band_slice",
    "insolation_multiplier",
    "insolation_multipliers",
    "PlanetModel",
    "Topology",
    "growth_potential",
    "DataRecorder",
    "DataSink",
    "standard_fields",
]
