from __future__ import annotations

import argparse
import time
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import numpy as np
import pandas as pd

from .rng import derive_seed
from .world import World, DEFAULT_TASKS


DEFAULT_SIZES = (10, 20, 40, 50, 60, 70, 80, 100)


def bench_update(dims: int, *, tasks: int = DEFAULT_TASKS, repeats: int = 5, seed: int = 1) -> Dict[str, Any]:
    """Wall-clock seconds per World.update for one grid size."""
    previous, world = World.build(dims, seed=derive_seed(seed, "bench", dims))
    times: List[float] = []
    for _ in range(int(repeats)):
        t0 = time.perf_counter()
        world.update(previous, tasks=tasks)
        times.append(time.perf_counter() - t0)
    arr = np.asarray(times, dtype=float)
    return {
        "dims": int(dims),
        "cells": int(dims) ** 3,
        "tasks": int(tasks),
        "repeats": int(repeats),
        "mean_s": float(arr.mean()),
        "min_s": float(arr.min()),
        "cells_per_s": float((int(dims) ** 3) / arr.mean()) if arr.mean() > 0 else float("inf"),
    }


def run_bench(sizes: Sequence[int], tasks_list: Sequence[int], *, repeats: int, seed: int) -> pd.DataFrame:
    rows = []
    for dims in sizes:
        for tasks in tasks_list:
            row = bench_update(int(dims), tasks=int(tasks), repeats=repeats, seed=seed)
            print(f"[life3d] dims={row['dims']} tasks={row['tasks']} mean={row['mean_s']:.4f}s")
            rows.append(row)
    return pd.DataFrame(rows)


def main(argv: Optional[List[str]] = None) -> None:
    ap = argparse.ArgumentParser(description="Time World.update across grid sizes and task counts")
    ap.add_argument("--sizes", type=int, nargs="+", default=list(DEFAULT_SIZES))
    ap.add_argument("--tasks", type=int, nargs="+", default=[DEFAULT_TASKS])
    ap.add_argument("--repeats", type=int, default=5)
    ap.add_argument("--seed", type=int, default=1)
    ap.add_argument("--out", type=str, default="results/life3d_bench/bench.csv")
    args = ap.parse_args(argv)

    df = run_bench(args.sizes, args.tasks, repeats=args.repeats, seed=args.seed)
    out = Path(args.out)
    out.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(out, index=False)
    print(f"[life3d] wrote benchmark table to: {out}")


if __name__ == "__main__":
    main()
