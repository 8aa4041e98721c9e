from __future__ import annotations

import argparse
import json
from typing import Dict, List, Optional, Sequence, Tuple

from .metrics import state_digest
from .rules import Rules, neighbourhood_offsets
from .world import World


def digest_trace(rules: Rules, *, seed: int, generations: int, tasks: int) -> List[str]:
    """State digests for generations 0..generations of one seeded world."""
    previous, world = World.build(rules.dims, rules=rules, seed=seed)
    trace = [state_digest(world)]
    for _ in range(int(generations)):
        world.update(previous, tasks=tasks)
        trace.append(state_digest(world))
    return trace


def validate_task_independence(
    rules: Rules,
    *,
    seed: int,
    generations: int,
    tasks_list: Sequence[int],
) -> Tuple[bool, Dict[str, object]]:
    """Check that every task count yields the same sequence of generations.

    Returns (ok, report); the report lists, per task count, the first generation whose
    digest differs from the first task count's trace (None when identical).
    """
    traces = {int(t): digest_trace(rules, seed=seed, generations=generations, tasks=int(t)) for t in tasks_list}
    reference_tasks = int(tasks_list[0])
    reference = traces[reference_tasks]

    first_mismatch: Dict[int, Optional[int]] = {}
    for t, trace in traces.items():
        first_mismatch[t] = next((g for g, (a, b) in enumerate(zip(reference, trace)) if a != b), None)

    ok = all(v is None for v in first_mismatch.values())
    report = {
        "reference_tasks": reference_tasks,
        "generations": int(generations),
        "final_digest": reference[-1],
        "first_mismatch": {str(t): g for t, g in first_mismatch.items()},
    }
    return ok, report


def main(argv: Optional[List[str]] = None) -> None:
    ap = argparse.ArgumentParser(description="Check that World.update is independent of the parallel task count")
    ap.add_argument("--dims", type=int, default=12)
    ap.add_argument("--neighbourhood", choices=["von_neumann", "moore"], default="von_neumann")
    ap.add_argument("--generations", type=int, default=20)
    ap.add_argument("--tasks", type=int, nargs="+", default=[1, 2, 3, 8, 64])
    ap.add_argument("--seed", type=int, default=1)
    args = ap.parse_args(argv)

    rules = Rules.build(args.dims, offsets=neighbourhood_offsets(args.neighbourhood))
    ok, report = validate_task_independence(
        rules, seed=args.seed, generations=args.generations, tasks_list=args.tasks
    )
    print(json.dumps(report, indent=2))
    if not ok:
        raise SystemExit(1)
    print("[life3d] task-count independence OK")


if __name__ == "__main__":
    main()
