# labkit

Building blocks for exercising memory allocators and for handling shell
command lines:

- `labkit.traces` reads and parses allocator trace files.
- `labkit.cycles` and `labkit.fcyc` provide elapsed-time counters and a K-best
  timing scheme.
- `labkit.rio` does robust reads and writes on file descriptors.
- `labkit.cmdline` and `labkit.history` parse command lines and keep a
  numbered command history.

The package is a library only. It installs no commands.

## Trace files

A trace file begins with four integers: suggested heap size, number of block
ids, number of requests, and weight. After these comes one request per line:

```
a <id> <size>    allocate
r <id> <size>    reallocate
f <id>           free
```

```python
from labkit.traces import parse_trace, read_trace, OpType

trace = parse_trace("0\n1\n2\n1\na 0 16\nf 0\n", "tiny")
assert trace.num_ops == 2
assert trace.ops[0].type is OpType.ALLOC and trace.ops[0].size == 16

trace = read_trace("./tracefiles", "amptjp-bal.rep")
```

`TraceFormatError`, a subclass of `ValueError`, is raised in these cases:

- the type character is unknown;
- a number is missing or malformed;
- the highest id used does not match the declared id count;
- the number of requests does not match the header.

`read_trace` raises `OSError` if the file cannot be opened.

## Timing

`CycleCounter` counts nanoseconds of `time.perf_counter_ns` since `start()`.
`CompensatedCounter` subtracts an estimate of the time spent in timer ticks.
That estimate is calibrated on first use. `overhead()` measures the cost of
one start/read pair. `mhz(verbose, sleeptime)` estimates the counter rate.

`fcyc(func, config)` runs `func` repeatedly and returns its smallest running
time. It stops when the `k` smallest samples lie within `epsilon` of each
other, or after `maxsamples` runs:

```python
from labkit.fcyc import fcyc, FcycConfig, KBestSampler

best = fcyc(lambda: sum(range(1000)), FcycConfig(k=3, maxsamples=20, epsilon=0.01))

sampler = KBestSampler(k=3, epsilon=0.01)
for value in (10.0, 10.05, 10.08):
    sampler.add(value)
assert sampler.converged() and sampler.best() == 10.0
```

## Robust I/O

- `readn(fd, n)` reads up to `n` bytes and stops early only at end of file.
- `writen(fd, data)` writes all of `data`.
- `RobustReader(fd)` buffers reads. It offers `read(n)` and `readline(maxlen)`;
  `readline` returns at most `maxlen - 1` bytes, newline included, and `b""`
  at end of file.
- `ltoa(value, base)` renders a non-negative integer in base 2 to 36.

## Command lines and history

```python
from labkit.cmdline import parseline, parsepipe, check_mark, REPEAT_LAST
from labkit.history import History

parseline("ls -al &\n")            # ParsedLine(argv=['ls', '-al'], bg=True)
parsepipe("echo 'a|b' | wc -c\n")  # ['echo a|b ', ' wc -c\n']
check_mark("!!\n") == REPEAT_LAST
check_mark("!3\n")                 # 3

history = History.load("history.txt")  # creates the file if missing
history.add("ls\n")
print(history.format(), end="")         # "1  ls\n"
history.save("history.txt")             # the most recent entry is not written
```

## What this package does not do

The package includes no allocator, no simulated heap, and no driver that
replays traces against an allocator or scores it. It also includes no
interactive shell that runs programs, builds pipelines or handles `cd`. The
pieces above parse command lines and keep history, but nothing executes
commands.

## Tests

```
pip install -e .[test]
pytest
```