"""Random source used by every probabilistic step.

Anything with a ``random() -> float`` method in [0, 1) qualifies; the
default is the global :mod:`random` module so unseeded behavior matches a
plain ambient source. Integer ranges are derived by scaling.
"""
from __future__ import annotations
import math
import random
from typing import Optional, Protocol, Sequence, TypeVar

T = TypeVar("T")


class RandomSource(Protocol):
    def random(self) -> float: ...


def default_source() -> RandomSource:
    return random  # type: ignore[return-value]


def resolve(rng: Optional[RandomSource]) -> RandomSource:
    return rng if rng is not None else default_source()


def seeded(seed: Optional[int]) -> RandomSource:
    """Private ``random.Random`` when a seed is given, else the global source."""
    if seed is None:
        return default_source()
    return random.Random(seed)


def below(rng: RandomSource, n: int) -> int:
    """Uniform integer in [0, n)."""
    return min(n - 1, math.floor(rng.random() * n))


def pick(rng: RandomSource, items: Sequence[T]) -> T:
    return items[below(rng, len(items))]
