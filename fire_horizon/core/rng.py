from __future__ import annotations

import math
from typing import Optional, Union

import numpy as np

_INT32_MASK = 0xFFFFFFFF
_INT32_SIGN = 0x80000000
_INT32_MAX = 2147483647
_MIN_UNIFORM = 0.0001  # keeps log(u1) finite


def _to_int32(value: int) -> int:
    """Wrap an arbitrary Python int to a signed 32-bit value."""
    value &= _INT32_MASK
    return value - (1 << 32) if value & _INT32_SIGN else value


def _box_muller(u1: float, u2: float, mean: float, stddev: float) -> float:
    z = math.sqrt(-2.0 * math.log(u1)) * math.cos(2.0 * math.pi * u2)
    return mean + stddev * z


class SeededRandom:
    """xorshift32 generator whose draws are a pure function of seed and draw count."""

    def __init__(self, seed: int):
        self.state = _to_int32(seed) or 1

    def next(self) -> float:
        s = self.state
        s = _to_int32(s ^ (s << 13))
        s = _to_int32(s ^ (s >> 17))
        s = _to_int32(s ^ (s << 5))
        self.state = s
        return abs(s) / _INT32_MAX

    def normal(self, mean: float, stddev: float) -> float:
        u1 = max(self.next(), _MIN_UNIFORM)
        u2 = self.next()
        return _box_muller(u1, u2, mean, stddev)


class UnseededRandom:
    """Same draw primitives backed by an unseeded numpy generator."""

    def __init__(self, rng: Optional[np.random.Generator] = None):
        self._rng = rng if rng is not None else np.random.default_rng()

    def next(self) -> float:
        return float(self._rng.random())

    def normal(self, mean: float, stddev: float) -> float:
        u1 = max(self.next(), _MIN_UNIFORM)
        u2 = self.next()
        return _box_muller(u1, u2, mean, stddev)


def random_source(seed: Optional[int] = None) -> Union[SeededRandom, UnseededRandom]:
    if seed is None:
        return UnseededRandom()
    return SeededRandom(seed)
