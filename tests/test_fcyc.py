import random

import pytest

from labkit.fcyc import FcycConfig, KBestSampler, fcyc


class Ticker:
    def __init__(self):
        self.now = 0

    def __call__(self):
        return self.now


def test_sampler_keeps_k_smallest_sorted():
    rng = random.Random(1)
    samples = [rng.uniform(0, 1000) for _ in range(50)]
    sampler = KBestSampler(3, 0.01)
    for value in samples:
        sampler.add(value)
    assert sampler.values == tuple(sorted(samples)[:3])
    assert sampler.samplecount == 50
    assert sampler.best() == min(samples)


def test_sampler_not_converged_before_k_samples():
    sampler = KBestSampler(3, 0.5)
    sampler.add(10.0)
    sampler.add(10.0)
    assert not sampler.converged()
    sampler.add(10.0)
    assert sampler.converged()


def test_sampler_converges_within_epsilon():
    sampler = KBestSampler(2, 0.1)
    sampler.add(100.0)
    sampler.add(120.0)
    assert not sampler.converged()
    sampler.add(105.0)
    assert sampler.values == (100.0, 105.0)
    assert sampler.converged()


def test_larger_sample_is_not_kept():
    sampler = KBestSampler(2)
    for value in (5.0, 6.0, 9.0):
        sampler.add(value)
    assert sampler.values == (5.0, 6.0)


def test_best_of_empty_sampler_raises():
    with pytest.raises(ValueError):
        KBestSampler().best()


def test_sampler_rejects_invalid_k():
    with pytest.raises(ValueError):
        KBestSampler(0)


def test_config_rejects_invalid_values():
    with pytest.raises(ValueError):
        FcycConfig(k=0)
    with pytest.raises(ValueError):
        FcycConfig(maxsamples=0)
    with pytest.raises(ValueError):
        FcycConfig(cache_block=0)


def test_fcyc_stops_after_k_equal_samples():
    clock = Ticker()
    calls = []

    def func():
        calls.append(1)
        clock.now += 50

    result = fcyc(func, FcycConfig(k=3, clock=clock))
    assert result == 50.0
    assert len(calls) == 3


def test_fcyc_gives_up_after_maxsamples():
    clock = Ticker()
    calls = []

    def func():
        calls.append(1)
        clock.now += 100 * len(calls)

    result = fcyc(func, FcycConfig(k=3, maxsamples=7, epsilon=0.0, clock=clock))
    assert len(calls) == 7
    assert result == 100.0


def test_fcyc_with_cache_clearing_returns_best():
    clock = Ticker()
    durations = iter([30, 20, 20, 20])

    def func():
        clock.now += next(durations)

    config = FcycConfig(k=3, clear_cache=True, cache_bytes=4096, clock=clock)
    assert fcyc(func, config) == 20.0


def test_fcyc_real_clock_is_nonnegative():
    result = fcyc(lambda: sum(range(100)), FcycConfig(maxsamples=5))
    assert result >= 0