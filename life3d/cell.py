from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, Sequence, Tuple, Type, TypeVar

import numpy as np

from .exceptions import ConfigError
from .health import Health, HealthStatus, CellStatus, HEALTH_MAX
from .rules import Index, Rules


C = TypeVar("C", bound="Cell")


@dataclass(frozen=True)
class Species:
    """Per-kind health parameters.

    - max_health: base health of a fresh cell, and exclusive upper bound of random seeding
    - min_health: decay threshold; the cell is alive only above it
    """

    max_health: int = 90
    min_health: int = 40

    def __post_init__(self) -> None:
        if not 0 < self.max_health <= HEALTH_MAX:
            raise ConfigError(f"max_health must be in (0, {HEALTH_MAX}], got {self.max_health!r}")
        if not 0 < self.min_health <= HEALTH_MAX:
            raise ConfigError(f"min_health must be in (0, {HEALTH_MAX}], got {self.min_health!r}")


DEFAULT_SPECIES = Species()


class Cell(Protocol):
    """Contract every grid cell variant implements."""

    index: Index

    @classmethod
    def from_index(cls: Type[C], index: Index, species: Species = DEFAULT_SPECIES) -> C: ...

    def randomize_health(self, rng: np.random.Generator) -> None: ...

    def update(self, rules: Rules, cells: Sequence["Cell"]) -> None: ...

    def status(self) -> Tuple[CellStatus, HealthStatus]: ...

    def copy(self: C) -> C: ...


@dataclass
class CubeCell:
    neighbours: int
    health: Health
    index: Index
    species: Species = field(default=DEFAULT_SPECIES)

    @classmethod
    def from_index(cls, index: Index, species: Species = DEFAULT_SPECIES) -> "CubeCell":
        return cls(
            neighbours=0,
            health=Health.build(species.max_health, species.min_health),
            index=tuple(int(x) for x in index),
            species=species,
        )

    def randomize_health(self, rng: np.random.Generator) -> None:
        self.health.health_ticks = int(rng.integers(0, self.species.max_health))

    def clear_neighbours(self) -> None:
        self.neighbours = 0

    def update_neighbours(self, rules: Rules, cells: Sequence[Cell]) -> None:
        """Count living cells among this cell's neighbours in `cells`.

        `cells` must be the previous-generation snapshot. Offsets that leave the grid
        are skipped; there is no wraparound.
        """
        d = rules.dims
        i0, j0, k0 = self.index
        for di, dj, dk in rules.offsets:
            i, j, k = i0 - di, j0 - dj, k0 - dk
            if not (0 <= i < d and 0 <= j < d and 0 <= k < d):
                continue
            if cells[i * d * d + j * d + k].status()[0] is CellStatus.ALIVE:
                self.neighbours += 1

    def update_health(self, rules: Rules) -> None:
        self.health.update(rules, self.neighbours)

    def update(self, rules: Rules, cells: Sequence[Cell]) -> None:
        self.clear_neighbours()
        self.update_neighbours(rules, cells)
        self.update_health(rules)

    def status(self) -> Tuple[CellStatus, HealthStatus]:
        magnitudes = HealthStatus(
            max_health=self.species.max_health,
            curr_health=self.health.health_ticks,
            min_health=self.species.min_health,
        )
        return self.health.status(), magnitudes

    def copy(self) -> "CubeCell":
        return CubeCell(
            neighbours=self.neighbours,
            health=self.health.copy(),
            index=self.index,
            species=self.species,  # Species is immutable
        )
