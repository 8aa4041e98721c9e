from __future__ import annotations

from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

import yaml

from .cell import Species
from .exceptions import ConfigError
from .rules import DEFAULT_NEIGHBOURS, Rules, neighbourhood_offsets


@dataclass(frozen=True)
class RulesConfig:
    dims: int
    neighbours: Tuple[int, ...] = tuple(sorted(DEFAULT_NEIGHBOURS))
    neighbourhood: str = "von_neumann"  # "von_neumann" | "moore"
    # Explicit offsets win over `neighbourhood` when given
    offsets: Optional[Tuple[Tuple[int, int, int], ...]] = None


@dataclass(frozen=True)
class SpeciesConfig:
    max_health: int = 90
    min_health: int = 40


@dataclass(frozen=True)
class RunConfig:
    generations: int = 50
    tasks: int = 8
    seed: Optional[int] = 1
    out_dir: str = "results/life3d"


@dataclass(frozen=True)
class SimulationConfig:
    rules: RulesConfig
    species: SpeciesConfig
    run: RunConfig

    def build_rules(self) -> Rules:
        r = self.rules
        offsets = r.offsets if r.offsets is not None else neighbourhood_offsets(r.neighbourhood)
        return Rules.build(r.dims, neighbours=r.neighbours, offsets=offsets)

    def build_species(self) -> Species:
        return Species(max_health=self.species.max_health, min_health=self.species.min_health)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _require(d: Mapping[str, Any], key: str) -> Any:
    if key not in d:
        raise KeyError(f"Missing required config key: {key}")
    return d[key]


def _section(d: Mapping[str, Any], key: str) -> Dict[str, Any]:
    sec = d.get(key) or {}
    if not isinstance(sec, dict):
        raise ConfigError(f"Config section {key!r} must be a mapping")
    return dict(sec)


def _reject_unknown(sec: Mapping[str, Any], name: str, allowed: Tuple[str, ...]) -> None:
    unknown = sorted(set(sec) - set(allowed))
    if unknown:
        raise ConfigError(f"Unknown key(s) in section {name!r}: {unknown} (allowed: {list(allowed)})")


def _int(sec: Mapping[str, Any], key: str, default: int) -> int:
    value = sec.get(key, default)
    if isinstance(value, bool):
        raise ConfigError(f"Config key {key!r} must be an int, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"Config key {key!r} must be an int, got {value!r}") from None


def default_config(dims: int = 6) -> SimulationConfig:
    return SimulationConfig(rules=RulesConfig(dims=dims), species=SpeciesConfig(), run=RunConfig())


def parse_simulation_config(data: Mapping[str, Any]) -> SimulationConfig:
    rdict = _section(data, "rules")
    offsets: Optional[List[Any]] = rdict.get("offsets")
    rules = RulesConfig(
        dims=int(_require(rdict, "dims")),
        neighbours=tuple(int(n) for n in rdict.get("neighbours", sorted(DEFAULT_NEIGHBOURS))),
        neighbourhood=str(rdict.get("neighbourhood", "von_neumann")),
        offsets=None if offsets is None else tuple(tuple(int(x) for x in off) for off in offsets),
    )

    sdict = _section(data, "species")
    _reject_unknown(sdict, "species", ("max_health", "min_health"))
    species = SpeciesConfig(
        max_health=_int(sdict, "max_health", 90),
        min_health=_int(sdict, "min_health", 40),
    )

    rundict = _section(data, "run")
    seed = rundict.get("seed", 1)
    run = RunConfig(
        generations=_int(rundict, "generations", 50),
        tasks=_int(rundict, "tasks", 8),
        seed=None if seed is None else int(seed),
        out_dir=str(rundict.get("out_dir", "results/life3d")),
    )

    cfg = SimulationConfig(rules=rules, species=species, run=run)
    # fail at load time, not at the first generation
    cfg.build_rules()
    cfg.build_species()
    return cfg


def load_simulation_config(path: str | Path) -> SimulationConfig:
    return parse_simulation_config(load_yaml(path))


def load_yaml(path: str | Path) -> Dict[str, Any]:
    path = Path(path)
    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"YAML file {path} must contain a mapping at the top level")
    return data
