from __future__ import annotations

import argparse
import json
import logging
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd

from .config import SimulationConfig, default_config, load_simulation_config
from .logging_config import setup_logging
from .metrics import census, state_digest, summarize_history
from .plots import plot_health_slice, plot_population
from .repro import write_meta
from .world import World


logger = logging.getLogger(__name__)


def simulate(cfg: SimulationConfig) -> tuple[pd.DataFrame, World]:
    """Run cfg.run.generations generations; returns the per-generation census and the final world."""
    previous, world = World.build(
        cfg.rules.dims,
        rules=cfg.build_rules(),
        species=cfg.build_species(),
        seed=cfg.run.seed,
    )
    rows: List[Dict[str, Any]] = [{"generation": 0, **census(world), "digest": state_digest(world)}]
    for gen in range(1, int(cfg.run.generations) + 1):
        world.update(previous, tasks=cfg.run.tasks)
        rows.append({"generation": gen, **census(world), "digest": state_digest(world)})
        logger.debug("generation %d alive=%d", gen, rows[-1]["alive"])
    return summarize_history(rows), world


def run(cfg: SimulationConfig, out_dir: Path, *, plots: bool = True) -> pd.DataFrame:
    out_dir.mkdir(parents=True, exist_ok=True)
    df, world = simulate(cfg)

    df.to_csv(out_dir / "population.csv", index=False)
    (out_dir / "config.json").write_text(json.dumps(cfg.to_dict(), indent=2), encoding="utf-8")

    if plots:
        plot_population(df, out_dir / "plots/population.png",
                        title=f"Population dims={cfg.rules.dims} seed={cfg.run.seed}")
        plot_health_slice(world, cfg.rules.dims // 2, out_dir / "plots/health_mid_slice.png")

    write_meta(out_dir / "meta.json", extra={
        "config": cfg.to_dict(),
        "final_digest": str(df["digest"].iloc[-1]),
        "final_alive": int(df["alive"].iloc[-1]),
    })
    return df


def _apply_overrides(cfg: SimulationConfig, args: argparse.Namespace) -> SimulationConfig:
    rules = cfg.rules
    if args.dims is not None:
        rules = replace(rules, dims=int(args.dims))
    if args.neighbourhood is not None:
        rules = replace(rules, neighbourhood=args.neighbourhood, offsets=None)
    if args.neighbours is not None:
        rules = replace(rules, neighbours=tuple(int(n) for n in args.neighbours))

    run_cfg = cfg.run
    if args.generations is not None:
        run_cfg = replace(run_cfg, generations=int(args.generations))
    if args.tasks is not None:
        run_cfg = replace(run_cfg, tasks=int(args.tasks))
    if args.seed is not None:
        run_cfg = replace(run_cfg, seed=int(args.seed))
    if args.out_dir is not None:
        run_cfg = replace(run_cfg, out_dir=str(args.out_dir))

    cfg = replace(cfg, rules=rules, run=run_cfg)
    cfg.build_rules()  # validate overrides before running
    return cfg


def main(argv: Optional[List[str]] = None) -> None:
    ap = argparse.ArgumentParser(description="Run a 3D life world for a number of generations and report its population")
    ap.add_argument("--config", type=str, default=None, help="YAML simulation config (see configs/)")
    ap.add_argument("--dims", type=int, default=None)
    ap.add_argument("--neighbours", type=int, nargs="+", default=None, help="Sustaining neighbour counts")
    ap.add_argument("--neighbourhood", choices=["von_neumann", "moore"], default=None)
    ap.add_argument("--generations", type=int, default=None)
    ap.add_argument("--tasks", type=int, default=None, help="Parallel chunks per generation")
    ap.add_argument("--seed", type=int, default=None)
    ap.add_argument("--out_dir", type=str, default=None)
    ap.add_argument("--no_plots", action="store_true")
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args(argv)

    if args.verbose:
        setup_logging(logging.DEBUG)

    cfg = load_simulation_config(args.config) if args.config else default_config()
    cfg = _apply_overrides(cfg, args)

    out_dir = Path(cfg.run.out_dir)
    df = run(cfg, out_dir, plots=not args.no_plots)

    last = df.iloc[-1]
    print(f"[life3d] {int(last['generation'])} generations, alive={int(last['alive'])} "
          f"decaying={int(last['decaying'])} dead={int(last['dead'])}")
    print(f"[life3d] wrote run outputs to: {out_dir}")


if __name__ == "__main__":
    main()
