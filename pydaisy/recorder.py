"""
Data recording for Daisyworld runs.

A driver owns a DataRecorder, registers named fields (zero-argument queries
against a model) and attaches it to the model. After every completed update the
model calls tick(update); on each sampling tick the recorder reads all fields
and appends one row. Rows can be written to CSV or NetCDF.

NaN (the undefined-latitude sentinel) is kept as NaN throughout: "nan" in CSV,
NaN in NetCDF. It is never written as 0.
"""

from __future__ import annotations

import csv
import math
import os
from typing import Any, Callable, Protocol

import numpy as np

from .planet import Topology


class DataSink(Protocol):
    def register_field(self, name: str, query: Callable[[], Any]) -> None: ...

    def tick(self, update: int) -> None: ...


class DataRecorder:
    """
    Sample registered fields every `repeat` updates.

    Construction:
      rec = DataRecorder(repeat=model.updates_per_time_unit)
      standard_fields(rec, model)
      model.attach(rec)
    """

    def __init__(self, repeat: int = 1):
        self._fields: dict[str, Callable[[], Any]] = {}
        self.rows: list[dict[str, Any]] = []
        self.set_timing_repeat(repeat)

    def register_field(self, name: str, query: Callable[[], Any]) -> None:
        if name in self._fields:
            raise ValueError(f"Field '{name}' is already registered.")
        self._fields[name] = query

    def set_timing_repeat(self, repeat: int) -> DataRecorder:
        if int(repeat) < 1:
            raise ValueError(f"Sampling repeat must be >= 1, got {repeat}.")
        self.repeat = int(repeat)
        return self

    @property
    def field_names(self) -> list[str]:
        return list(self._fields)

    def sample(self) -> dict[str, Any]:
        row = {name: query() for name, query in self._fields.items()}
        self.rows.append(row)
        return row

    def tick(self, update: int) -> None:
        if update % self.repeat == 0:
            self.sample()

    def column(self, name: str) -> np.ndarray:
        return np.asarray([row[name] for row in self.rows])

    def columns(self) -> dict[str, np.ndarray]:
        return {name: self.column(name) for name in self._fields}

    def clear(self) -> None:
        self.rows.clear()

    # ---- export ----

    def write_csv(self, path: str) -> None:
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
        with open(path, "w", newline="") as fh:
            writer = csv.writer(fh)
            writer.writerow(self.field_names)
            for row in self.rows:
                writer.writerow([_format_value(row[name]) for name in self.field_names])

    def write_netcdf(self, path: str) -> None:
        """Write numeric fields as f8 variables along a `sample` dimension."""
        from netCDF4 import Dataset

        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
        with Dataset(path, "w") as ds:
            ds.createDimension("sample", len(self.rows))
            for name in self.field_names:
                values = [row[name] for row in self.rows]
                if any(isinstance(v, str) for v in values):
                    continue
                var = ds.createVariable(name, "f8", ("sample",))
                var[:] = np.asarray(values, dtype=float)
            ds.setncattr("repeat", self.repeat)


def _format_value(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, float) and math.isnan(value):
        return "nan"
    return repr(value) if isinstance(value, float) else str(value)


def standard_fields(sink: DataSink, model, *, latitude: bool = False) -> None:
    """
    Register the usual columns: time, luminosity, each enabled color's
    proportion, optional min/mean/max latitude per color, temperature.
    """
    if latitude and model.topology is Topology.FLAT:
        raise ValueError("Latitude fields need a round planet.")
    sink.register_field("time", lambda: model.time)
    sink.register_field("luminosity", lambda: model.luminosity)
    for color in model.enabled_colors():
        name = color.name.lower()
        sink.register_field(name, lambda c=color: model.proportion(c))
    if latitude:
        for color in model.enabled_colors():
            name = color.name.lower()
            sink.register_field(f"{name}_min_lat", lambda c=color: model.min_latitude(c))
            sink.register_field(f"{name}_avg_lat", lambda c=color: model.average_latitude(c))
            sink.register_field(f"{name}_max_lat", lambda c=color: model.max_latitude(c))
    sink.register_field("temperature", lambda: model.global_temperature())


__all__ = ["DataSink", "DataRecorder", "standard_fields"]
