from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, Type

import numpy as np

from .cell import Cell, CubeCell, Species, DEFAULT_SPECIES
from .exceptions import ConfigError, GenerationError
from .rules import Index, Rules
from .rng import resolve_rng


logger = logging.getLogger(__name__)

DEFAULT_TASKS = 8
MIN_CHUNK_SIZE = 4


def chunk_bounds(n_cells: int, tasks: int) -> List[Tuple[int, int]]:
    """Contiguous [start, stop) ranges covering n_cells, none of them empty."""
    if not isinstance(tasks, int) or isinstance(tasks, bool) or tasks <= 0:
        raise ConfigError(f"tasks must be a positive int, got {tasks!r}")
    size = max(n_cells // tasks, MIN_CHUNK_SIZE)
    return [(start, min(start + size, n_cells)) for start in range(0, n_cells, size)]


def _advance_chunk(rules: Rules, chunk: Sequence[Cell], snapshot: Sequence[Cell]) -> int:
    for cell in chunk:
        cell.update(rules, snapshot)
    return len(chunk)


@dataclass
class World:
    """Cubic grid of cells advanced one generation at a time.

    `cells` is flattened row-major, so `cells[rules.flatten(c.index)] is c` for every
    cell. Worlds come in pairs: the caller keeps the `previous` buffer returned by
    `build` and passes it back into every `update`.
    """

    rules: Rules
    cells: List[Cell]

    @classmethod
    def build(
        cls,
        dims: int,
        *,
        rules: Optional[Rules] = None,
        species: Species = DEFAULT_SPECIES,
        rng: Optional[np.random.Generator] = None,
        seed: Optional[int] = None,
        cell_type: Type[Cell] = CubeCell,
    ) -> Tuple["World", "World"]:
        """Return (previous, current): two equal, independently owned, randomly seeded worlds."""
        if rules is None:
            rules = Rules.build(dims)
        elif rules.dims != dims:
            raise ConfigError(f"rules.dims={rules.dims} does not match dims={dims}")
        rng = resolve_rng(rng, seed)

        cells: List[Cell] = []
        for i in range(rules.dims):
            for j in range(rules.dims):
                for k in range(rules.dims):
                    cell = cell_type.from_index((i, j, k), species)
                    cell.randomize_health(rng)
                    cells.append(cell)

        previous = cls(rules=rules, cells=cells)
        world = previous.copy()
        logger.debug("Built world dims=%d cells=%d offsets=%d", rules.dims, len(cells), len(rules.offsets))
        return previous, world

    @property
    def dims(self) -> int:
        return self.rules.dims

    def copy(self) -> "World":
        return World(rules=self.rules, cells=[cell.copy() for cell in self.cells])  # Rules is immutable

    def cell_at(self, index: Index) -> Cell:
        return self.cells[self.rules.flatten(index)]

    def update(self, previous: "World", *, tasks: int = DEFAULT_TASKS) -> None:
        """Advance every cell by exactly one generation.

        `previous` is overwritten with the current state first and is the only thing
        neighbour scans read. The live cells are split into contiguous chunks that run
        on a thread pool, each worker writing only its own chunk. The call returns after
        all chunks finished. If any worker raised, the live cells are restored from
        `previous` and GenerationError is raised.
        """
        if previous is self:
            raise ValueError("previous must be a separate World buffer")
        bounds = chunk_bounds(len(self.cells), tasks)

        previous.rules = self.rules
        previous.cells = [cell.copy() for cell in self.cells]
        snapshot = previous.cells

        with ThreadPoolExecutor(max_workers=min(tasks, len(bounds)), thread_name_prefix="life3d") as pool:
            futures = [
                pool.submit(_advance_chunk, self.rules, self.cells[start:stop], snapshot)
                for start, stop in bounds
            ]

        errors = [e for e in (f.exception() for f in futures) if e is not None]
        if errors:
            logger.error("Rolling back generation: %d of %d chunk(s) failed", len(errors), len(bounds))
            self.cells = [cell.copy() for cell in snapshot]
            raise GenerationError(len(errors), len(bounds)) from errors[0]
        logger.debug("Advanced %d cells in %d chunk(s)", len(self.cells), len(bounds))

    def health_array(self) -> np.ndarray:
        """health_ticks as uint8, shape (dims, dims, dims), indexed [i, j, k]."""
        d = self.dims
        ticks = [cell.status()[1].curr_health for cell in self.cells]
        return np.asarray(ticks, dtype=np.uint8).reshape(d, d, d)

    def status_array(self) -> np.ndarray:
        """CellStatus codes (dead=0, decaying=1, alive=2) as int8, shape (dims, dims, dims)."""
        d = self.dims
        codes = [cell.status()[0].code for cell in self.cells]
        return np.asarray(codes, dtype=np.int8).reshape(d, d, d)
