import numpy as np
import pytest
from pydaisy.cover import ALBEDOS, Color, GroundCover, snap_extinct


def test_albedo_constants():
    assert Color.WHITE.albedo == 0.75
    assert Color.BLACK.albedo == 0.25
    assert Color.GRAY.albedo == 0.50
    assert ALBEDOS.shape == (len(Color),)


def test_proportion_of_ground_and_lookup():
    gc = GroundCover.from_mapping({Color.WHITE: 0.2, Color.BLACK: 0.3})
    assert gc.proportion(Color.WHITE) == 0.2
    assert gc.proportion(Color.BLACK) == 0.3
    assert gc.proportion(Color.GRAY) == 0.0
    assert gc.proportion_of_ground() == pytest.approx(0.5)


def test_total_albedo_is_area_weighted():
    gc = GroundCover.from_mapping({Color.WHITE: 0.5, Color.BLACK: 0.5})
    assert gc.total_albedo() == 0.5
    gc = GroundCover.from_mapping({Color.WHITE: 0.4, Color.BLACK: 0.1})
    expected = 0.4 * 0.75 + 0.1 * 0.25 + 0.5 * 0.5
    assert gc.total_albedo() == pytest.approx(expected)
    # Bare planet reflects like bare ground
    assert GroundCover().total_albedo() == 0.5


def test_increment_snaps_below_extinction_floor():
    gc = GroundCover.from_mapping({Color.BLACK: 0.01})
    for _ in range(100):
        gc.increment_color(Color.BLACK, -0.0004)
        value = gc.proportion(Color.BLACK)
        assert value == 0.0 or value >= 0.001
    assert gc.proportion(Color.BLACK) == 0.0
    # Stays exactly zero, never negative residue
    gc.increment_color(Color.BLACK, -0.5)
    assert gc.proportion(Color.BLACK) == 0.0


def test_increment_has_no_upper_clamp():
    gc = GroundCover.from_mapping({Color.WHITE: 0.9})
    gc.increment_color(Color.WHITE, 0.2)
    assert gc.proportion(Color.WHITE) == pytest.approx(1.1)
    assert gc.proportion_of_ground() == pytest.approx(-0.1)


def test_row_view_writes_through():
    table = np.zeros((2, len(Color)))
    gc = GroundCover(table[1])
    gc.increment_color(Color.WHITE, 0.3)
    assert table[1, Color.WHITE] == pytest.approx(0.3)
    assert table[0, Color.WHITE] == 0.0


def test_bad_shape_rejected():
    with pytest.raises(ValueError):
        GroundCover(np.zeros(5))


def test_snap_extinct_vectorized():
    out = snap_extinct(np.array([0.0005, 0.001, -0.2, 0.5]))
    np.testing.assert_array_equal(out, [0.0, 0.001, 0.0, 0.5])
