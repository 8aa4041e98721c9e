from __future__ import annotations

import hashlib
from typing import Any, Dict, List, Mapping

import numpy as np
import pandas as pd

from .world import World


def census(world: World) -> Dict[str, Any]:
    """Status counts and health statistics for one generation."""
    codes = world.status_array()
    health = world.health_array().astype(np.float64)
    alive = int((codes == 2).sum())
    decaying = int((codes == 1).sum())
    dead = int((codes == 0).sum())
    return {
        "alive": alive,
        "decaying": decaying,
        "dead": dead,
        "alive_fraction": alive / codes.size,
        "mean_health": float(health.mean()),
        "max_health": int(health.max()),
    }


def state_digest(world: World) -> str:
    """blake2b over dims + health_ticks; equal worlds give equal digests."""
    h = hashlib.blake2b(digest_size=16)
    h.update(str(world.dims).encode("utf-8"))
    h.update(b"|")
    h.update(np.ascontiguousarray(world.health_array()).tobytes())
    return h.hexdigest()


def summarize_history(rows: List[Mapping[str, Any]]) -> pd.DataFrame:
    """One row per generation; adds the net change in living cells."""
    df = pd.DataFrame(list(rows))
    if df.empty:
        return df
    df = df.sort_values("generation").reset_index(drop=True)
    df["alive_delta"] = df["alive"].diff().fillna(0).astype(int)
    return df
