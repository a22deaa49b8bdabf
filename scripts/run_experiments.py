#!/usr/bin/env python3
"""
Run the Daisyworld experiments and write their data (and optional figures).

Experiments:
  temperature   50/50 planet, growth off: albedo and temperatures (stdout only)
  black         black daisies only at constant luminosity, 100 time units
  black-white   black and white daisies at constant luminosity, 100 time units
  sweep         raise/lower luminosity for the four daisy combinations
  all           everything above

Usage:
  python3 -m scripts.run_experiments --experiment black-white --out-dir output
  python3 -m scripts.run_experiments --experiment sweep --step 0.05 --time-per-luminosity 20 --plot

Optional:
  --round           run on the latitude-resolved planet (adds latitude columns)
  --netcdf          also write .nc files next to the CSVs
"""

from __future__ import annotations

import argparse
import os
import sys

# Add the project root to the Python path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from pydaisy import DaisyConfig, DataRecorder, Topology
from pydaisy.diagnostics import diagnostics_report, invariants
from pydaisy.experiments import luminosity_sweep, run_constant_luminosity, temperature_check

try:
    from pydaisy import ploter
except Exception:
    ploter = None

SWEEP_CASES = (
    (False, False),
    (False, True),
    (True, False),
    (True, True),
)


def _write(rec: DataRecorder, out_dir: str, stem: str, netcdf: bool) -> None:
    csv_path = os.path.join(out_dir, f"{stem}.csv")
    rec.write_csv(csv_path)
    print(f"[Data] wrote {csv_path} ({len(rec.rows)} rows)")
    if netcdf:
        nc_path = os.path.join(out_dir, f"{stem}.nc")
        rec.write_netcdf(nc_path)
        print(f"[Data] wrote {nc_path}")


def run_temperature() -> None:
    res = temperature_check()
    print(f"Global Albedo: {res['albedo']:.4f}")
    print(f"Global Temperature: {res['temperature']:.4f}")
    print(f"Temperature of Black Daisies: {res['black_temperature']:.4f}")
    print(f"Temperature of White Daisies: {res['white_temperature']:.4f}")


def run_constant(white: float, black: float, white_enabled: bool, args, cfg: DaisyConfig) -> None:
    topology = Topology.ROUND if args.round else Topology.FLAT
    stem = "constant_luminosity_black_and_white" if white_enabled else "constant_luminosity_black"
    rec = DataRecorder()
    world = run_constant_luminosity(
        white, black, cfg.luminosity,
        time_units=args.time_units,
        white_enabled=white_enabled,
        topology=topology,
        recorder=rec,
        latitude=args.round,
        config=cfg,
    )
    msg = (
        f"{'Black and white' if white_enabled else 'Black'} test completed. "
        f"Temperature = {world.global_temperature():.6f}; "
        f"black daisy proportion = {world.proportion_black():.6f}"
    )
    if white_enabled:
        msg += f"; white daisy proportion = {world.proportion_white():.6f}"
    print(msg)
    if args.round:
        prev = invariants(world)
        world.set_topology(Topology.FLAT)
        rep = diagnostics_report(prev, invariants(world))
        print(
            f"[Daisy] round->flat deltas: d_white={rep['d_white']:.2e} d_black={rep['d_black']:.2e}"
        )
    _write(rec, args.out_dir, stem, args.netcdf)
    if args.plot and ploter is not None:
        ploter.plot_time_series(
            rec.columns(), os.path.join(args.out_dir, f"{stem}.png"), title=stem.replace("_", " ")
        )


def run_sweeps(args, cfg: DaisyConfig) -> None:
    topology = Topology.ROUND if args.round else Topology.FLAT
    results = []
    for white_on, black_on in SWEEP_CASES:
        rec = DataRecorder()
        res = luminosity_sweep(
            white_on, black_on,
            min_luminosity=args.min_luminosity,
            max_luminosity=args.max_luminosity,
            luminosity_step=args.step,
            time_per_luminosity=args.time_per_luminosity,
            topology=topology,
            recorder=rec,
            latitude=args.round,
            config=cfg,
        )
        _write(rec, args.out_dir, res.label, args.netcdf)
        results.append(res)
        print(f"Raising and lowering luminosity test completed ({res.label}).")
    if args.plot and ploter is not None:
        ploter.plot_luminosity_sweep(results, os.path.join(args.out_dir, "luminosity_sweep.png"))


def main(argv: list[str] | None = None) -> None:
    ap = argparse.ArgumentParser(description="Run the Daisyworld experiments.")
    ap.add_argument(
        "--experiment",
        choices=["temperature", "black", "black-white", "sweep", "all"],
        default="all",
    )
    ap.add_argument("--out-dir", type=str, default="output", help="directory for CSV/NetCDF/PNG")
    ap.add_argument("--time-units", type=int, default=100, help="duration of constant runs")
    ap.add_argument("--min-luminosity", type=float, default=0.5)
    ap.add_argument("--max-luminosity", type=float, default=1.7)
    ap.add_argument("--step", type=float, default=0.01, help="luminosity step of sweeps")
    ap.add_argument("--time-per-luminosity", type=int, default=50, help="time units per step")
    ap.add_argument("--round", action="store_true", help="use the latitude-resolved planet")
    ap.add_argument("--netcdf", action="store_true", help="also write NetCDF files")
    ap.add_argument("--plot", action="store_true", help="write PNG figures")
    args = ap.parse_args(argv)

    cfg = DaisyConfig.from_env()
    if args.plot and ploter is None:
        print("[Plot] matplotlib unavailable; skipping figures.", file=sys.stderr)

    exp = args.experiment
    if exp in ("temperature", "all"):
        run_temperature()
    if exp in ("black", "all"):
        run_constant(0.0, 0.5, False, args, cfg)
    if exp in ("black-white", "all"):
        run_constant(0.5, 0.5, True, args, cfg)
    if exp in ("sweep", "all"):
        run_sweeps(args, cfg)


if __name__ == "__main__":
    main()
