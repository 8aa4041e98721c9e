from __future__ import annotations

import hashlib
from typing import Optional, Union

import numpy as np


SeedPart = Union[int, str]


def derive_seed(base_seed: int, *parts: SeedPart) -> int:
    """Deterministic 32-bit seed for one run of a sweep, e.g. derive_seed(1, "dims", 20, "rep", 3)."""
    h = hashlib.blake2b(digest_size=8)
    for part in (base_seed, *parts):
        h.update(str(part).encode("utf-8"))
        h.update(b"|")
    return int.from_bytes(h.digest(), "big") % (2**32 - 1)


def make_rng(seed: Optional[int]) -> np.random.Generator:
    """NumPy Generator; `None` draws fresh OS entropy."""
    return np.random.default_rng(None if seed is None else int(seed))


def resolve_rng(rng: Optional[np.random.Generator], seed: Optional[int]) -> np.random.Generator:
    if rng is not None and seed is not None:
        raise ValueError("Pass either rng or seed, not both")
    return rng if rng is not None else make_rng(seed)
