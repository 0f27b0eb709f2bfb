"""Estimate the running time of a function with the K-best scheme."""

import bisect
from collections.abc import Callable
from dataclasses import dataclass

from .cycles import CompensatedCounter, CycleCounter


@dataclass
class FcycConfig:
    """Parameters of the K-best measurement.

    ``k`` smallest samples must lie within ``epsilon`` of each other; at most
    ``maxsamples`` measurements are taken. ``clock`` replaces the counter's
    clock when given.
    """

    k: int = 3
    maxsamples: int = 20
    epsilon: float = 0.01
    compensate: bool = False
    clear_cache: bool = False
    cache_bytes: int = 1 << 19
    cache_block: int = 32
    clock: Callable[[], int] | None = None

    def __post_init__(self):
        if self.k < 1:
            raise ValueError("k must be at least 1")
        if self.maxsamples < 1:
            raise ValueError("maxsamples must be at least 1")
        if self.cache_bytes <= 0 or self.cache_block <= 0:
            raise ValueError("cache sizes must be positive")


class KBestSampler:
    """Keep the ``k`` smallest samples seen, in ascending order."""

    def __init__(self, k: int = 3, epsilon: float = 0.01):
        if k < 1:
            raise ValueError("k must be at least 1")
        self.k = k
        self.epsilon = epsilon
        self.samplecount = 0
        self._values: list[float] = []

    @property
    def values(self) -> tuple[float, ...]:
        return tuple(self._values)

    def add(self, value: float) -> None:
        """Record one sample."""
        if len(self._values) < self.k:
            bisect.insort_right(self._values, value)
        elif value < self._values[-1]:
            self._values.pop()
            bisect.insort_right(self._values, value)
        self.samplecount += 1

    def converged(self) -> bool:
        """Whether the k smallest samples lie within epsilon of each other."""
        return (
            self.samplecount >= self.k
            and (1 + self.epsilon) * self._values[0] >= self._values[self.k - 1]
        )

    def best(self) -> float:
        """The smallest sample."""
        if not self._values:
            raise ValueError("no samples recorded")
        return self._values[0]


_cache_buffer = bytearray()
_sink = 0
_compensated: CompensatedCounter | None = None


def _clear_cache(config: FcycConfig) -> None:
    global _cache_buffer, _sink
    if len(_cache_buffer) != config.cache_bytes:
        _cache_buffer = bytearray(config.cache_bytes)
    _sink += sum(_cache_buffer[::config.cache_block])


def _counter(config: FcycConfig):
    global _compensated
    if not config.compensate:
        return CycleCounter(config.clock)
    if config.clock is not None:
        return CompensatedCounter(CycleCounter(config.clock))
    if _compensated is None:
        _compensated = CompensatedCounter()
    return _compensated


def fcyc(func: Callable[[], object], config: FcycConfig | None = None) -> float:
    """Return the smallest measured running time of ``func`` in counter units."""
    config = config if config is not None else FcycConfig()
    sampler = KBestSampler(config.k, config.epsilon)
    counter = _counter(config)
    while True:
        if config.clear_cache:
            _clear_cache(config)
        counter.start()
        func()
        sampler.add(counter.read())
        if sampler.converged() or sampler.samplecount >= config.maxsamples:
            break
    return sampler.best()