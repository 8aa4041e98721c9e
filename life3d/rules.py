from __future__ import annotations

from dataclasses import dataclass, field
from itertools import product
from typing import FrozenSet, Iterable, Optional, Tuple

from .exceptions import ConfigError


Index = Tuple[int, int, int]
Offset = Tuple[int, int, int]

DEFAULT_DIMS = 6
DEFAULT_NEIGHBOURS: FrozenSet[int] = frozenset({3, 5})

# Subtracting these from a cell index gives the 6 face-adjacent cells.
VON_NEUMANN_OFFSETS: Tuple[Offset, ...] = (
    (1, 0, 0),
    (-1, 0, 0),
    (0, 1, 0),
    (0, -1, 0),
    (0, 0, 1),
    (0, 0, -1),
)

MOORE_OFFSETS: Tuple[Offset, ...] = tuple(
    (di, dj, dk) for di, dj, dk in product((-1, 0, 1), repeat=3) if (di, dj, dk) != (0, 0, 0)
)

_NEIGHBOURHOODS = {
    "von_neumann": VON_NEUMANN_OFFSETS,
    "moore": MOORE_OFFSETS,
}


def neighbourhood_offsets(name: str) -> Tuple[Offset, ...]:
    """Resolve a named adjacency ("von_neumann" | "moore") to its offset tuple."""
    try:
        return _NEIGHBOURHOODS[name]
    except KeyError:
        raise ConfigError(
            f"Unknown neighbourhood={name!r} (use one of {sorted(_NEIGHBOURHOODS)})"
        ) from None


def flatten(index: Index, dims: int) -> int:
    """Row-major position of (i, j, k) in a cube of edge `dims`."""
    i, j, k = index
    return i * dims * dims + j * dims + k


def unflatten(position: int, dims: int) -> Index:
    i, rem = divmod(int(position), dims * dims)
    j, k = divmod(rem, dims)
    return (i, j, k)


def in_bounds(coord: Tuple[int, int, int], dims: int) -> bool:
    return all(0 <= c < dims for c in coord)


def _normalize_offsets(offsets: Iterable[Iterable[int]]) -> Tuple[Offset, ...]:
    out = []
    for off in offsets:
        off = tuple(off)
        if len(off) != 3 or not all(isinstance(x, int) and not isinstance(x, bool) for x in off):
            raise ConfigError(f"Offsets must be 3-tuples of ints, got {off!r}")
        out.append(off)
    return tuple(out)


def _normalize_neighbours(neighbours: Iterable[int]) -> FrozenSet[int]:
    out = set()
    for n in neighbours:
        if not isinstance(n, int) or isinstance(n, bool) or n < 0:
            raise ConfigError(f"Neighbour counts must be non-negative ints, got {n!r}")
        out.add(n)
    return frozenset(out)


@dataclass(frozen=True)
class Rules:
    """Immutable automaton configuration shared by every cell of a world.

    - dims: edge length of the cube (> 0)
    - neighbours: neighbour counts that sustain a living cell or revive a dead one
    - offsets: adjacency deltas; a cell's neighbours are `index - offset`

    Instances are never mutated, so one Rules object can be read from any number of
    worker threads at once. Build a new one to change behaviour.
    """

    dims: int = DEFAULT_DIMS
    neighbours: FrozenSet[int] = field(default=DEFAULT_NEIGHBOURS)
    offsets: Tuple[Offset, ...] = field(default=VON_NEUMANN_OFFSETS)

    def __post_init__(self) -> None:
        if not isinstance(self.dims, int) or isinstance(self.dims, bool) or self.dims <= 0:
            raise ConfigError(f"dims must be a positive int, got {self.dims!r}")
        object.__setattr__(self, "neighbours", _normalize_neighbours(self.neighbours))
        object.__setattr__(self, "offsets", _normalize_offsets(self.offsets))

    @classmethod
    def build(
        cls,
        dims: int,
        *,
        neighbours: Optional[Iterable[int]] = None,
        offsets: Optional[Iterable[Iterable[int]]] = None,
    ) -> "Rules":
        return cls(
            dims=dims,
            neighbours=DEFAULT_NEIGHBOURS if neighbours is None else neighbours,
            offsets=VON_NEUMANN_OFFSETS if offsets is None else offsets,
        )

    @classmethod
    def default(cls) -> "Rules":
        return cls()

    @property
    def size(self) -> int:
        """Number of cells in the grid (dims**3)."""
        return self.dims ** 3

    def is_sustaining(self, count: int) -> bool:
        return count in self.neighbours

    def flatten(self, index: Index) -> int:
        return flatten(index, self.dims)

    def unflatten(self, position: int) -> Index:
        return unflatten(position, self.dims)
