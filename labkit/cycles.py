"""Counters that measure elapsed clock units, and clock-rate estimation.

The counter reads a monotonic high-resolution clock; by default that is the
performance counter in nanoseconds, so one "cycle" is one nanosecond.
"""

import os
import sys
import time
from collections.abc import Callable

# Number of timer-interrupt events observed while calibrating.
NEVENT = 100
# Smallest gap between two counter reads that may hide a timer interrupt.
THRESHOLD = 1000
# Smallest cycles-per-tick ratio that is believed.
RECORDTHRESH = 3000


def _clock_ticks_per_second() -> int:
    try:
        return int(os.sysconf("SC_CLK_TCK"))
    except (AttributeError, ValueError, OSError):
        return 100


_CLK_TCK = _clock_ticks_per_second()


def _user_ticks() -> int:
    """User CPU time of this process, in clock ticks."""
    return int(os.times().user * _CLK_TCK)


class CycleCounter:
    """Count clock units elapsed since the last call to :meth:`start`.

    Until :meth:`start` is called the origin is zero.
    """

    def __init__(self, clock: Callable[[], int] | None = None):
        self._clock = clock if clock is not None else time.perf_counter_ns
        self._start = 0

    def start(self) -> None:
        """Record the current value of the clock."""
        self._start = self._clock()

    def read(self) -> float:
        """Return the number of clock units since the last :meth:`start`."""
        result = float(self._clock() - self._start)
        if result < 0:
            print(f"Error: counter returns neg value: {result:.0f}", file=sys.stderr)
        return result


class CompensatedCounter:
    """A counter that subtracts the time taken by timer interrupts.

    The cost of one timer tick is calibrated on first use, unless it is
    given as ``cyc_per_tick``.
    """

    def __init__(
        self,
        counter: CycleCounter | None = None,
        *,
        cyc_per_tick: float = 0.0,
        nevent: int = NEVENT,
        ticks: Callable[[], int] | None = None,
        verbose: bool = False,
    ):
        if nevent <= 0:
            raise ValueError("nevent must be positive")
        self.counter = counter if counter is not None else CycleCounter()
        self.cyc_per_tick = cyc_per_tick
        self._nevent = nevent
        self._ticks = ticks if ticks is not None else _user_ticks
        self._verbose = verbose
        self._start_tick = 0

    def _calibrate(self) -> None:
        events = 0
        oldc = self._ticks()
        self.counter.start()
        oldt = self.counter.read()
        while events < self._nevent:
            newt = self.counter.read()
            if newt - oldt >= THRESHOLD:
                newc = self._ticks()
                if newc > oldc:
                    cpt = (newt - oldt) / (newc - oldc)
                    if (self.cyc_per_tick == 0.0 or self.cyc_per_tick > cpt) and cpt > RECORDTHRESH:
                        self.cyc_per_tick = cpt
                    events += 1
                    oldc = newc
                oldt = newt
        if self._verbose:
            print(f"Setting cyc_per_tick to {self.cyc_per_tick:f}")

    def start(self) -> None:
        """Calibrate if needed, then start counting."""
        if self.cyc_per_tick == 0.0:
            self._calibrate()
        self._start_tick = self._ticks()
        self.counter.start()

    def read(self) -> float:
        """Return elapsed units less the estimated cost of timer ticks."""
        elapsed = self.counter.read()
        ticks = self._ticks() - self._start_tick
        return elapsed - ticks * self.cyc_per_tick


def overhead(counter: CycleCounter | None = None) -> float:
    """Measure the cost of one start/read pair, done twice to warm caches."""
    counter = counter if counter is not None else CycleCounter()
    result = 0.0
    for _ in range(2):
        counter.start()
        result = counter.read()
    return result


def mhz(verbose: bool = False, sleeptime: float = 2) -> float:
    """Estimate the counter rate in MHz by sleeping for ``sleeptime`` seconds."""
    if sleeptime <= 0:
        raise ValueError("sleeptime must be positive")
    counter = CycleCounter()
    counter.start()
    time.sleep(sleeptime)
    rate = counter.read() / (1e6 * sleeptime)
    if verbose:
        print(f"Processor clock rate ~= {rate:.1f} MHz")
    return rate