"""
pytest configuration

Goals:
- keep tests fast and deterministic
- never pick up DW_* overrides from the caller's shell
- avoid display requirements when plotting
"""

import os
import sys

import pytest

# Ensure project root on sys.path for 'pydaisy' and 'scripts' imports
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

# Force non-interactive backend before anything imports pyplot
os.environ.setdefault("MPLBACKEND", "Agg")


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in list(os.environ):
        if name.startswith("DW_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("MPLBACKEND", "Agg")
    yield


@pytest.fixture
def flat_world():
    from pydaisy import PlanetModel

    return PlanetModel(0.5, 0.5, 1.0)


@pytest.fixture
def round_world():
    from pydaisy import PlanetModel, Topology

    return PlanetModel(0.3, 0.3, 1.0, topology=Topology.ROUND)
