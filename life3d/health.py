from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import numpy as np

from .exceptions import ConfigError
from .rules import Rules


# health_ticks is an 8-bit counter
HEALTH_MIN = 0
HEALTH_MAX = int(np.iinfo(np.uint8).max)


class CellStatus(Enum):
    ALIVE = "alive"
    DECAYING = "decaying"
    DEAD = "dead"

    @property
    def code(self) -> int:
        """Small integer code used by array views (alive=2, decaying=1, dead=0)."""
        return _STATUS_CODES[self]


_STATUS_CODES = {CellStatus.DEAD: 0, CellStatus.DECAYING: 1, CellStatus.ALIVE: 2}


@dataclass(frozen=True)
class HealthStatus:
    """Health magnitudes handed to presentation code alongside a CellStatus."""

    max_health: int
    curr_health: int
    min_health: int


def _is_int(x: object) -> bool:
    return isinstance(x, (int, np.integer)) and not isinstance(x, bool)


def saturating_add(a: int, b: int) -> int:
    return min(a + b, HEALTH_MAX)


def saturating_sub(a: int, b: int) -> int:
    return max(a - b, HEALTH_MIN)


@dataclass
class Health:
    """Hysteresis counter behind a cell's life state.

    A cell is alive only while `health_ticks > decay_ticks`, dead only at exactly 0, and
    decaying anywhere in between. Each generation moves the counter by one step, so a
    cell needs several consecutive bad generations to die and several good ones to
    come back.
    """

    health_ticks: int
    decay_ticks: int

    def __post_init__(self) -> None:
        if not _is_int(self.decay_ticks) or not HEALTH_MIN < self.decay_ticks <= HEALTH_MAX:
            raise ConfigError(f"decay_ticks must be an int in (0, {HEALTH_MAX}], got {self.decay_ticks!r}")
        if not _is_int(self.health_ticks) or not HEALTH_MIN <= self.health_ticks <= HEALTH_MAX:
            raise ConfigError(f"health_ticks must be an int in [0, {HEALTH_MAX}], got {self.health_ticks!r}")
        self.health_ticks = int(self.health_ticks)
        self.decay_ticks = int(self.decay_ticks)

    @classmethod
    def build(cls, base: int, decay_ticks: int) -> "Health":
        if not _is_int(base) or not HEALTH_MIN <= base <= HEALTH_MAX:
            raise ConfigError(f"base must be an int in [0, {HEALTH_MAX}], got {base!r}")
        if not _is_int(decay_ticks):
            raise ConfigError(f"decay_ticks must be an int in (0, {HEALTH_MAX}], got {decay_ticks!r}")
        return cls(health_ticks=saturating_add(base, decay_ticks), decay_ticks=decay_ticks)

    def update(self, rules: Rules, neighbour_count: int) -> None:
        if rules.is_sustaining(neighbour_count):
            # also applies at 0: a dead cell with a sustaining count is reborn
            self.health_ticks = saturating_add(self.health_ticks, 1)
        else:
            self.health_ticks = saturating_sub(self.health_ticks, 1)

    def is_alive(self) -> bool:
        return self.health_ticks > self.decay_ticks

    def is_decaying(self) -> bool:
        return 0 < self.health_ticks <= self.decay_ticks

    def is_dead(self) -> bool:
        return self.health_ticks == 0

    def status(self) -> CellStatus:
        if self.is_alive():
            return CellStatus.ALIVE
        if self.is_decaying():
            return CellStatus.DECAYING
        return CellStatus.DEAD

    def copy(self) -> "Health":
        return Health(health_ticks=self.health_ticks, decay_ticks=self.decay_ticks)
