from __future__ import annotations

from dataclasses import dataclass

from . import constants as const


@dataclass
class SimulationClock:
    """Monotonic update counter; `time` is the published model time."""

    time_per_update: float = const.TIME_PER_UPDATE
    update: int = 0

    def advance(self) -> int:
        self.update += 1
        return self.update

    def reset(self) -> None:
        self.update = 0

    @property
    def time(self) -> float:
        return self.update * self.time_per_update

    @property
    def updates_per_time_unit(self) -> int:
        return int(round(1.0 / self.time_per_update))
