from __future__ import annotations

from pathlib import Path
from typing import Optional

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
import pandas as pd

from .world import World


def plot_population(df: pd.DataFrame, out_path: Path, title: Optional[str] = None) -> None:
    plt.figure()
    for col in ("alive", "decaying", "dead"):
        plt.plot(df["generation"], df[col], label=col)
    plt.xlabel("generation")
    plt.ylabel("# cells")
    plt.title(title or "Population by status")
    plt.legend()
    out_path.parent.mkdir(parents=True, exist_ok=True)
    plt.tight_layout()
    plt.savefig(out_path, dpi=200)
    plt.close()


def plot_health_slice(world: World, k: int, out_path: Path, title: Optional[str] = None) -> None:
    """Heatmap of health_ticks over the (i, j) plane at depth k."""
    mat = world.health_array()[:, :, int(k)]
    plt.figure()
    plt.imshow(mat, origin="lower", vmin=0, aspect="equal")
    plt.xlabel("j")
    plt.ylabel("i")
    plt.title(title or f"health_ticks at k={k}")
    plt.colorbar(label="health_ticks")
    out_path.parent.mkdir(parents=True, exist_ok=True)
    plt.tight_layout()
    plt.savefig(out_path, dpi=200)
    plt.close()
