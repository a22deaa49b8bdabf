from __future__ import annotations

import os
from typing import Mapping, Sequence

import numpy as np

try:
    import matplotlib.pyplot as plt  # type: ignore
except Exception:
    plt = None

_COLOR_STYLE = {
    "white": dict(color="0.6", linestyle="-"),
    "black": dict(color="k", linestyle="-"),
    "gray": dict(color="0.4", linestyle=":"),
}


def _require_matplotlib():
    if plt is None:
        raise RuntimeError("matplotlib is required for plotting. Please install 'matplotlib'.")


def _save(fig, out_png: str | None):
    if out_png:
        os.makedirs(os.path.dirname(out_png) or ".", exist_ok=True)
        fig.savefig(out_png, dpi=120, bbox_inches="tight")


def plot_time_series(
    columns: Mapping[str, np.ndarray], out_png: str | None = None, title: str = ""
):
    """
    Cover proportions (top) and temperature (bottom) against time.

    `columns` is what DataRecorder.columns() returns; it needs 'time' and
    'temperature', and plots any of 'white', 'black', 'gray' that are present.
    """
    _require_matplotlib()
    t = np.asarray(columns["time"], dtype=float)
    fig, (ax_cov, ax_t) = plt.subplots(2, 1, figsize=(7, 6), sharex=True)
    for name, style in _COLOR_STYLE.items():
        if name in columns:
            ax_cov.plot(t, np.asarray(columns[name], dtype=float), label=name, **style)
    ax_cov.set_ylabel("area fraction")
    ax_cov.set_ylim(0.0, 1.0)
    ax_cov.legend(loc="upper right")
    ax_t.plot(t, np.asarray(columns["temperature"], dtype=float), color="tab:red")
    ax_t.set_ylabel("temperature (°C)")
    ax_t.set_xlabel("time")
    if title:
        ax_cov.set_title(title)
    fig.tight_layout()
    _save(fig, out_png)
    return fig, (ax_cov, ax_t)


def plot_luminosity_sweep(results: Sequence, out_png: str | None = None):
    """
    Temperature and cover against luminosity for one or more SweepResults.

    Rising legs are solid, falling legs dashed.
    """
    _require_matplotlib()
    fig, (ax_cov, ax_t) = plt.subplots(2, 1, figsize=(7, 7), sharex=True)
    for res in results:
        for rising, ls in ((True, "-"), (False, "--")):
            leg = res.leg(rising)
            if leg["luminosity"].size == 0:
                continue
            suffix = "up" if rising else "down"
            ax_t.plot(
                leg["luminosity"], leg["temperature"], linestyle=ls,
                label=f"{res.label} ({suffix})",
            )
            if res.white_enabled:
                ax_cov.plot(leg["luminosity"], leg["white"], color="0.6", linestyle=ls)
            if res.black_enabled:
                ax_cov.plot(leg["luminosity"], leg["black"], color="k", linestyle=ls)
    ax_t.axhline(22.5, color="0.7", linewidth=0.8)
    ax_t.set_ylabel("temperature (°C)")
    ax_t.set_xlabel("luminosity")
    ax_t.legend(loc="upper left", fontsize="small")
    ax_cov.set_ylabel("area fraction")
    ax_cov.set_ylim(0.0, 1.0)
    fig.tight_layout()
    _save(fig, out_png)
    return fig, (ax_cov, ax_t)
