from __future__ import annotations

"""
Side-effect-free invariants of a planet.

Purpose
- Snapshot the aggregate quantities that must be conserved or monitored
  across an operation (topology switch, boost, a batch of updates) so that
  before/after deltas can be checked without touching the model.

Notes
- All functions only read the model. Callers decide where to print/assert.
- Aggregate proportions use the same reduction as the model (mean over bands).
"""

from dataclasses import dataclass

from .cover import Color


@dataclass
class CoverInvariants:
    white: float
    black: float
    gray: float
    ground: float
    albedo: float
    temperature: float


def invariants(model) -> CoverInvariants:
    """Aggregate cover, albedo and temperature of the model's current state."""
    return CoverInvariants(
        white=model.proportion(Color.WHITE),
        black=model.proportion(Color.BLACK),
        gray=model.proportion(Color.GRAY),
        ground=model.proportion_of_ground(),
        albedo=model.global_albedo(),
        temperature=model.global_temperature(),
    )


def step_deltas(prev: CoverInvariants, nxt: CoverInvariants) -> dict[str, float]:
    """
    Return simple deltas (next - prev) for quick checks.
    """
    return {
        "d_white": nxt.white - prev.white,
        "d_black": nxt.black - prev.black,
        "d_gray": nxt.gray - prev.gray,
        "d_ground": nxt.ground - prev.ground,
        "d_albedo": nxt.albedo - prev.albedo,
        "d_temperature": nxt.temperature - prev.temperature,
    }


def diagnostics_report(prev: CoverInvariants, nxt: CoverInvariants) -> dict[str, float]:
    """
    Convenience helper returning both absolute values and deltas in one dict.
    """
    d = step_deltas(prev, nxt)
    return {
        "white_old": prev.white,
        "black_old": prev.black,
        "gray_old": prev.gray,
        "temperature_old": prev.temperature,
        "white_new": nxt.white,
        "black_new": nxt.black,
        "gray_new": nxt.gray,
        "temperature_new": nxt.temperature,
        **d,
    }


# Example usage pattern (experiment drivers):
#
#   prev = invariants(model)
#   model.set_topology(Topology.FLAT)
#   rep = diagnostics_report(prev, invariants(model))
#   # per-color deltas must be ~0 for round -> flat
