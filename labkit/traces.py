"""Trace files: a header followed by allocation, reallocation and free requests.

A trace starts with four integers: the suggested heap size, the number of
block ids, the number of requests and a weight. Each request is one of
``a <id> <size>``, ``r <id> <size>`` or ``f <id>``.
"""

import os
from dataclasses import dataclass, field
from enum import Enum

# Number of header lines in a trace file.
HDRLINES = 4


class TraceFormatError(ValueError):
    """Raised when a trace file is malformed."""


class OpType(Enum):
    """Kind of allocator request."""

    ALLOC = "a"
    FREE = "f"
    REALLOC = "r"


@dataclass(frozen=True)
class TraceOp:
    """One request: the block id it refers to and, for alloc/realloc, a size."""

    type: OpType
    index: int
    size: int = 0


@dataclass
class Trace:
    """A parsed trace together with per-id slots for blocks and their sizes."""

    sugg_heapsize: int
    num_ids: int
    num_ops: int
    weight: int
    ops: list[TraceOp]
    name: str = ""
    blocks: list = field(init=False, repr=False)
    block_sizes: list[int] = field(init=False, repr=False)

    def __post_init__(self):
        self.blocks = [None] * self.num_ids
        self.block_sizes = [0] * self.num_ids


def line_number(opnum: int) -> int:
    """Line in the trace file (counting from 1) of request number ``opnum``."""
    return opnum + HDRLINES + 1


def _integer(tokens, what: str, name: str, *, unsigned: bool = False) -> int:
    try:
        token = next(tokens)
    except StopIteration:
        raise TraceFormatError(f"Missing {what} in tracefile {name}") from None
    try:
        value = int(token)
    except ValueError:
        raise TraceFormatError(f"Bad {what} ({token}) in tracefile {name}") from None
    if unsigned and value < 0:
        raise TraceFormatError(f"Negative {what} ({token}) in tracefile {name}")
    return value


def parse_trace(text: str, name: str = "<trace>") -> Trace:
    """Parse the contents of a trace file."""
    tokens = iter(text.split())
    sugg_heapsize = _integer(tokens, "heap size", name)
    num_ids = _integer(tokens, "number of ids", name, unsigned=True)
    num_ops = _integer(tokens, "number of ops", name, unsigned=True)
    weight = _integer(tokens, "weight", name)

    ops: list[TraceOp] = []
    max_index = 0
    for token in tokens:
        kind = token[0]
        if kind in ("a", "r"):
            index = _integer(tokens, "block id", name, unsigned=True)
            size = _integer(tokens, "size", name, unsigned=True)
            op_type = OpType.ALLOC if kind == "a" else OpType.REALLOC
            ops.append(TraceOp(op_type, index, size))
            max_index = max(max_index, index)
        elif kind == "f":
            index = _integer(tokens, "block id", name, unsigned=True)
            ops.append(TraceOp(OpType.FREE, index))
        else:
            raise TraceFormatError(
                f"Bogus type character ({kind}) in tracefile {name}"
            )

    if max_index != num_ids - 1:
        raise TraceFormatError(
            f"Tracefile {name} uses ids up to {max_index} but declares {num_ids}"
        )
    if len(ops) != num_ops:
        raise TraceFormatError(
            f"Tracefile {name} holds {len(ops)} requests but declares {num_ops}"
        )
    for opnum, op in enumerate(ops):
        if op.index >= num_ids:
            raise TraceFormatError(
                f"Block id {op.index} out of range in tracefile {name}, "
                f"line {line_number(opnum)}"
            )

    return Trace(sugg_heapsize, num_ids, num_ops, weight, ops, name=name)


def read_trace(tracedir: str | os.PathLike, filename: str) -> Trace:
    """Read and parse the trace file ``filename`` in ``tracedir``."""
    path = os.path.join(os.fspath(tracedir), filename)
    try:
        with open(path, encoding="ascii") as stream:
            text = stream.read()
    except OSError as exc:
        raise OSError(exc.errno, f"Could not open {path} in read_trace") from exc
    return parse_trace(text, path)