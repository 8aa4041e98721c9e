import numpy as np
import pytest

from life3d.cell import CubeCell, Species, DEFAULT_SPECIES
from life3d.exceptions import ConfigError
from life3d.health import CellStatus, Health, HealthStatus
from life3d.rules import MOORE_OFFSETS, Rules

from helpers import full_grid


MAX = DEFAULT_SPECIES.max_health
MIN = DEFAULT_SPECIES.min_health


def test_from_index():
    cell = CubeCell.from_index((1, 2, 3))
    assert cell.neighbours == 0
    assert cell.health == Health.build(MAX, MIN)
    assert cell.index == (1, 2, 3)


def test_species_is_configurable():
    species = Species(max_health=20, min_health=7)
    cell = CubeCell.from_index((0, 0, 0), species)
    assert cell.health == Health(health_ticks=27, decay_ticks=7)
    assert cell.status()[1] == HealthStatus(max_health=20, curr_health=27, min_health=7)


@pytest.mark.parametrize("kwargs", [{"min_health": 0}, {"max_health": 0}, {"max_health": 300}])
def test_species_rejects_bad_values(kwargs):
    with pytest.raises(ConfigError):
        Species(**kwargs)


def test_update_neighbours_corner_von_neumann():
    rules = Rules.build(2)
    cells = full_grid(2)
    cell = CubeCell.from_index((0, 0, 0))
    cell.update_neighbours(rules, cells)
    assert cell.neighbours == 3


def test_update_neighbours_corner_moore():
    rules = Rules.build(2, offsets=MOORE_OFFSETS)
    cells = full_grid(2)
    for corner in [(0, 0, 0), (1, 1, 1), (0, 1, 0)]:
        cell = CubeCell.from_index(corner)
        cell.update_neighbours(rules, cells)
        assert cell.neighbours == 7


def test_update_neighbours_interior_moore():
    rules = Rules.build(3, offsets=MOORE_OFFSETS)
    cell = CubeCell.from_index((1, 1, 1))
    cell.update_neighbours(rules, full_grid(3))
    assert cell.neighbours == 26


def test_update_neighbours_counts_only_alive():
    rules = Rules.build(3)
    cells = full_grid(3)
    d = rules.dims
    # (1,1,1)'s face neighbours: one decaying, one dead, the rest alive
    cells[0 * d * d + 1 * d + 1].health.health_ticks = MIN
    cells[2 * d * d + 1 * d + 1].health.health_ticks = 0
    cell = CubeCell.from_index((1, 1, 1))
    cell.update_neighbours(rules, cells)
    assert cell.neighbours == 4


def test_update_neighbours_subtracts_offsets():
    # A single one-sided offset: neighbour of (1,0,0) is (0,0,0), (0,0,0) has none
    rules = Rules.build(2, offsets=[(1, 0, 0)])
    cells = full_grid(2)
    edge = CubeCell.from_index((1, 0, 0))
    edge.update_neighbours(rules, cells)
    assert edge.neighbours == 1
    origin = CubeCell.from_index((0, 0, 0))
    origin.update_neighbours(rules, cells)
    assert origin.neighbours == 0


@pytest.mark.parametrize(
    "neighbours, expected",
    [
        (4, MAX + MIN + 1),
        (5, MAX + MIN - 1),
    ],
)
def test_update_health(neighbours, expected):
    rules = Rules.build(6, neighbours=[4])
    cell = CubeCell.from_index((1, 2, 3))
    cell.neighbours = neighbours
    cell.update_health(rules)
    assert cell.health == Health(health_ticks=expected, decay_ticks=MIN)


def test_clear_neighbours():
    cell = CubeCell.from_index((1, 2, 3))
    cell.neighbours = 10
    cell.clear_neighbours()
    assert cell.neighbours == 0


def test_update_does_not_accumulate_across_ticks():
    rules = Rules.build(2, neighbours=[3])
    cells = full_grid(2)
    cell = CubeCell.from_index((0, 0, 0))
    cell.update(rules, cells)
    cell.update(rules, cells)
    assert cell.neighbours == 3
    assert cell.health.health_ticks == MAX + MIN + 2


def test_randomize_health():
    rng = np.random.default_rng(0)
    cell = CubeCell.from_index((1, 2, 3))
    for _ in range(200):
        cell.randomize_health(rng)
        assert 0 <= cell.health.health_ticks < MAX


def test_status():
    cell = CubeCell.from_index((1, 2, 3))
    for ticks, expected in [(MAX, CellStatus.ALIVE), (MIN + 1, CellStatus.ALIVE), (MIN, CellStatus.DECAYING), (0, CellStatus.DEAD)]:
        cell.health.health_ticks = ticks
        status, magnitudes = cell.status()
        assert status is expected
        assert magnitudes == HealthStatus(max_health=MAX, curr_health=ticks, min_health=MIN)


def test_copy_is_independent():
    cell = CubeCell.from_index((1, 2, 3))
    other = cell.copy()
    assert other == cell
    other.health.health_ticks = 0
    other.neighbours = 6
    assert cell.health.health_ticks == MAX + MIN
    assert cell.neighbours == 0
