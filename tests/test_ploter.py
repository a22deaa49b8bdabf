import os

from pydaisy import DataRecorder
from pydaisy.experiments import luminosity_sweep, run_constant_luminosity


def test_plot_time_series(tmp_path):
    from pydaisy import ploter

    rec = DataRecorder()
    run_constant_luminosity(0.5, 0.5, time_units=3, recorder=rec)
    out = tmp_path / "figs" / "series.png"
    fig, axes = ploter.plot_time_series(rec.columns(), str(out), title="test")
    assert os.path.exists(out)
    assert len(axes) == 2
    ploter.plt.close(fig)


def test_plot_luminosity_sweep(tmp_path):
    from pydaisy import ploter

    res = luminosity_sweep(
        True, True, min_luminosity=0.8, max_luminosity=1.0, luminosity_step=0.1,
        time_per_luminosity=1,
    )
    out = tmp_path / "sweep.png"
    fig, _ = ploter.plot_luminosity_sweep([res], str(out))
    assert os.path.exists(out)
    ploter.plt.close(fig)
