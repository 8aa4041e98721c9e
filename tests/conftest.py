import pytest

from life3d.world import World


@pytest.fixture
def seeded_pair():
    """(previous, current) for a 5-cube seeded with 42."""
    return World.build(5, seed=42)
