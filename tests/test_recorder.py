import csv
import math

import numpy as np
import pytest
from pydaisy import Color, DataRecorder, PlanetModel, Topology, standard_fields


def test_tick_samples_on_cadence():
    rec = DataRecorder(repeat=3)
    counter = {"n": 0}
    rec.register_field("n", lambda: counter["n"])
    for update in range(1, 10):
        counter["n"] = update
        rec.tick(update)
    np.testing.assert_array_equal(rec.column("n"), [3, 6, 9])


def test_duplicate_field_and_bad_repeat_rejected():
    rec = DataRecorder()
    rec.register_field("a", lambda: 1)
    with pytest.raises(ValueError):
        rec.register_field("a", lambda: 2)
    with pytest.raises(ValueError):
        rec.set_timing_repeat(0)


def test_attached_recorder_sees_completed_steps():
    world = PlanetModel(0.5, 0.5, 1.0)
    rec = DataRecorder(repeat=world.updates_per_time_unit)
    standard_fields(rec, world)
    world.attach(rec)
    world.run(world.updates_per_time_unit * 3)
    assert rec.field_names == ["time", "luminosity", "white", "black", "temperature"]
    np.testing.assert_allclose(rec.column("time"), [1.0, 2.0, 3.0])
    assert rec.rows[-1]["black"] == world.proportion_black()
    assert rec.rows[-1]["temperature"] == world.global_temperature()
    world.detach(rec)
    world.run(world.updates_per_time_unit)
    assert len(rec.rows) == 3


def test_latitude_fields_and_csv_keep_nan(tmp_path):
    world = PlanetModel(0.0, 0.5, 1.0, topology=Topology.ROUND)
    rec = DataRecorder()
    standard_fields(rec, world, latitude=True)
    assert "white_avg_lat" in rec.field_names
    assert "black_max_lat" in rec.field_names
    rec.sample()
    assert math.isnan(rec.rows[0]["white_avg_lat"])

    path = tmp_path / "out" / "lat.csv"
    rec.write_csv(str(path))
    with open(path, newline="") as fh:
        rows = list(csv.DictReader(fh))
    assert rows[0]["white_avg_lat"] == "nan"
    assert rows[0]["white_min_lat"] == "90"
    assert float(rows[0]["black"]) == pytest.approx(0.5)


def test_latitude_fields_rejected_on_flat_planet():
    world = PlanetModel(0.0, 0.5, 1.0)
    rec = DataRecorder()
    with pytest.raises(ValueError):
        standard_fields(rec, world, latitude=True)
    assert rec.field_names == []


def test_write_netcdf(tmp_path):
    netCDF4 = pytest.importorskip("netCDF4")
    world = PlanetModel(0.0, 0.5, 1.0, topology=Topology.ROUND)
    rec = DataRecorder()
    standard_fields(rec, world, latitude=True)
    rec.register_field("label", lambda: "round")
    rec.sample()
    world.run(10)
    rec.sample()

    path = tmp_path / "run.nc"
    rec.write_netcdf(str(path))
    with netCDF4.Dataset(str(path)) as ds:
        assert len(ds.dimensions["sample"]) == 2
        assert "label" not in ds.variables
        black = np.asarray(ds.variables["black"][:])
        white_avg = np.ma.filled(ds.variables["white_avg_lat"][:], np.nan)
    assert black[0] == pytest.approx(0.5)
    assert np.all(np.isnan(white_avg))


def test_enabled_colors_only():
    world = PlanetModel(0.0, 0.5, 1.0)
    world.set_white_enabled(False)
    rec = DataRecorder()
    standard_fields(rec, world)
    assert "white" not in rec.field_names
    assert rec.sample()["black"] == world.proportion(Color.BLACK)
