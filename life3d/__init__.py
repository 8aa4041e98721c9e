"""life3d: a 3D cellular automaton whose cells live and die through a hysteresis counter.

Core components:

- **Rules**: grid edge length, sustaining neighbour counts, adjacency offsets (immutable).
- **Health**: saturating 8-bit counter; alive above the decay threshold, dead at 0,
  decaying in between.
- **CubeCell**: the grid cell; counts living neighbours in the previous generation
  and moves its health one step per generation.
- **World**: the flattened cube of cells plus the double-buffered, chunked parallel
  generational update.

Reporting and tooling live in `metrics`, `plots`, `run`, `bench` and `validate`.
"""

from .cell import Cell, CubeCell, Species
from .exceptions import ConfigError, GenerationError, Life3DError
from .health import CellStatus, Health, HealthStatus
from .rules import MOORE_OFFSETS, VON_NEUMANN_OFFSETS, Rules
from .world import World

__all__ = [
    "Cell",
    "CellStatus",
    "ConfigError",
    "CubeCell",
    "GenerationError",
    "Health",
    "HealthStatus",
    "Life3DError",
    "MOORE_OFFSETS",
    "Rules",
    "Species",
    "VON_NEUMANN_OFFSETS",
    "World",
]
