import numpy as np
import pytest
from pydaisy import DataRecorder, Topology
from pydaisy.experiments import (
    luminosity_sweep,
    run_at_luminosity,
    run_constant_luminosity,
    temperature_check,
)
from pydaisy.planet import PlanetModel


def test_temperature_check():
    res = temperature_check()
    assert res["albedo"] == 0.5
    assert 26.0 <= res["temperature"] < 27.5
    assert res["black_temperature"] == pytest.approx(31.9, abs=0.5)
    assert res["white_temperature"] == pytest.approx(21.9, abs=0.5)


def test_run_constant_luminosity_records_each_time_unit():
    rec = DataRecorder()
    world = run_constant_luminosity(
        0.0, 0.5, time_units=5, white_enabled=False, recorder=rec
    )
    assert world.update_count == 501
    np.testing.assert_allclose(rec.column("time"), [1.0, 2.0, 3.0, 4.0, 5.0])
    assert "white" not in rec.field_names


def test_run_at_luminosity_boosts_then_runs():
    world = PlanetModel(0.0, 0.0, 0.5)
    run_at_luminosity(world, 1.0, 0)
    assert world.luminosity == 1.0
    assert world.proportion_white() == 0.01
    assert world.proportion_black() == 0.01


def test_sweep_shape_and_recorder():
    rec = DataRecorder()
    res = luminosity_sweep(
        False, False,
        min_luminosity=0.6, max_luminosity=1.0, luminosity_step=0.1,
        time_per_luminosity=1, recorder=rec,
    )
    assert res.label == "no_daisies"
    # 4 rising steps, 5 falling steps
    assert len(res.leg(True)["luminosity"]) == 4
    assert len(res.leg(False)["luminosity"]) == 5
    assert len(rec.rows) == 9
    np.testing.assert_allclose(rec.column("luminosity"), res.luminosity)


def test_daisies_regulate_temperature():
    kwargs = dict(
        min_luminosity=0.6, max_luminosity=1.6, luminosity_step=0.1, time_per_luminosity=30
    )
    control = luminosity_sweep(False, False, **kwargs).leg(True)
    daisies = luminosity_sweep(True, True, **kwargs).leg(True)

    # Without daisies: monotone and concave-down in luminosity
    assert np.all(np.diff(control["temperature"]) > 0)
    assert np.all(np.diff(control["temperature"], 2) < 0)

    band = (control["luminosity"] > 0.75) & (control["luminosity"] < 1.25)
    control_span = np.ptp(control["temperature"][band])
    daisy_temps = daisies["temperature"][band]
    assert np.ptp(daisy_temps) < 0.5 * control_span
    assert np.all((daisy_temps > 12.0) & (daisy_temps < 32.0))


def test_round_sweep_runs():
    res = luminosity_sweep(
        True, True,
        min_luminosity=0.9, max_luminosity=1.1, luminosity_step=0.1,
        time_per_luminosity=2, topology=Topology.ROUND,
    )
    assert res.label == "white_and_black"
    assert all(np.isfinite(res.temperature))


def test_latitude_recording_needs_round_topology():
    with pytest.raises(ValueError):
        run_constant_luminosity(0.0, 0.5, time_units=1, recorder=DataRecorder(), latitude=True)
