from __future__ import annotations

import hashlib
import json
import platform
import sys
from pathlib import Path
from typing import Any, Dict

import numpy as np


def _package_root() -> Path:
    return Path(__file__).resolve().parent


def sha256_file(path: Path) -> str:
    h = hashlib.sha256()
    with path.open("rb") as f:
        for chunk in iter(lambda: f.read(1024 * 1024), b""):
            h.update(chunk)
    return h.hexdigest()


def source_hashes(root: Path) -> Dict[str, str]:
    return {p.relative_to(root).as_posix(): sha256_file(p) for p in sorted(root.rglob("*.py"))}


def environment_stamp() -> Dict[str, Any]:
    return {
        "python": sys.version,
        "platform": platform.platform(),
        "numpy": np.__version__,
    }


def write_meta(path: Path, extra: Dict[str, Any]) -> None:
    """Write run metadata (environment + life3d source hashes) next to run outputs."""
    meta = {
        "env": environment_stamp(),
        "code_sha256": source_hashes(_package_root()),
        "extra": extra,
    }
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(meta, indent=2, sort_keys=True, default=str), encoding="utf-8")
