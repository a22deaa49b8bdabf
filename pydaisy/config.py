"""
Environment-driven configuration for the Daisyworld model.

Every tunable of the planet lives in one frozen dataclass. Defaults come from
pydaisy.constants; `DaisyConfig.from_env()` lets runs override any of them via
DW_* variables without touching code:

    DW_N_BANDS=90 DW_DISPLAY_BANDS=10
    DW_TIME_PER_UPDATE=0.01
    DW_DEATH_RATE=0.3 DW_CONDUCTIVITY=20
    DW_OPTIMAL_T=22.5 DW_GROWTH_CURVATURE=0.003265
    DW_EXTINCTION_FLOOR=0.001 DW_SPARSE_THRESHOLD=0.0001
    DW_POLE_INSOLATION=0.6 DW_EQUATOR_INSOLATION=1.5
    DW_BAND_BOOST_FRACTION=0.5
    DW_CLAMP_TOTAL=1   (rescale a region whose cover exceeds 1 after a step)
    DW_DIAG=0          (print [Daisy] diagnostics)
    DW_LUMINOSITY=1.0  (initial luminosity used by the experiment CLI)

Unparsable values fall back to the default silently.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace

from . import constants as const


@dataclass(frozen=True)
class DaisyConfig:
    """Model parameters (env-driven)."""

    n_bands: int = const.N_BANDS
    n_display_bands: int = const.N_DISPLAY_BANDS
    time_per_update: float = const.TIME_PER_UPDATE
    death_rate: float = const.DEATH_RATE
    conductivity: float = const.CONDUCTIVITY_CONSTANT
    flux_constant: float = const.FLUX_CONSTANT
    stefan_constant: float = const.STEFAN_CONSTANT
    celsius_to_kelvin: float = const.CELSIUS_TO_KELVIN
    optimal_temperature: float = const.OPTIMAL_TEMPERATURE
    growth_curvature: float = const.GROWTH_CURVATURE
    extinction_floor: float = const.EXTINCTION_FLOOR
    sparse_threshold: float = const.SPARSE_THRESHOLD
    pole_insolation: float = const.POLE_INSOLATION
    equator_insolation: float = const.EQUATOR_INSOLATION
    band_boost_fraction: float = const.BAND_BOOST_FRACTION
    clamp_total: bool = True
    diag: bool = False
    luminosity: float = 1.0

    @property
    def updates_per_time_unit(self) -> int:
        return int(round(1.0 / self.time_per_update))

    @property
    def display_band_width(self) -> int:
        return self.n_bands // self.n_display_bands

    def with_overrides(self, **kwargs) -> DaisyConfig:
        return replace(self, **kwargs)

    @classmethod
    def from_env(cls) -> DaisyConfig:
        def _ibool(name: str, default: str) -> bool:
            try:
                return int(os.getenv(name, default)) == 1
            except Exception:
                return default == "1"

        def _int(name: str, default: int) -> int:
            try:
                return int(os.getenv(name, str(default)))
            except Exception:
                return int(default)

        def _float(name: str, default: float) -> float:
            try:
                return float(os.getenv(name, str(default)))
            except Exception:
                return float(default)

        return cls(
            n_bands=max(1, _int("DW_N_BANDS", const.N_BANDS)),
            n_display_bands=max(1, _int("DW_DISPLAY_BANDS", const.N_DISPLAY_BANDS)),
            time_per_update=_float("DW_TIME_PER_UPDATE", const.TIME_PER_UPDATE),
            death_rate=_float("DW_DEATH_RATE", const.DEATH_RATE),
            conductivity=_float("DW_CONDUCTIVITY", const.CONDUCTIVITY_CONSTANT),
            optimal_temperature=_float("DW_OPTIMAL_T", const.OPTIMAL_TEMPERATURE),
            growth_curvature=_float("DW_GROWTH_CURVATURE", const.GROWTH_CURVATURE),
            extinction_floor=_float("DW_EXTINCTION_FLOOR", const.EXTINCTION_FLOOR),
            sparse_threshold=_float("DW_SPARSE_THRESHOLD", const.SPARSE_THRESHOLD),
            pole_insolation=_float("DW_POLE_INSOLATION", const.POLE_INSOLATION),
            equator_insolation=_float("DW_EQUATOR_INSOLATION", const.EQUATOR_INSOLATION),
            band_boost_fraction=_float("DW_BAND_BOOST_FRACTION", const.BAND_BOOST_FRACTION),
            clamp_total=_ibool("DW_CLAMP_TOTAL", "1"),
            diag=_ibool("DW_DIAG", "0"),
            luminosity=_float("DW_LUMINOSITY", 1.0),
        )


__all__ = ["DaisyConfig"]
