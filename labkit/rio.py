"""Robust I/O: reads and writes that cope with short transfers."""

import os

RIO_BUFSIZE = 8192
MAXLINE = 8192

_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"


def readn(fd: int, n: int) -> bytes:
    """Read up to ``n`` bytes from ``fd``, stopping early only at end of file."""
    chunks = []
    left = n
    while left > 0:
        data = os.read(fd, left)
        if not data:
            break
        chunks.append(data)
        left -= len(data)
    return b"".join(chunks)


def writen(fd: int, data) -> int:
    """Write all of ``data`` to ``fd`` and return the number of bytes written."""
    view = memoryview(data).cast("B")
    written = 0
    while written < len(view):
        count = os.write(fd, view[written:])
        if count <= 0:
            raise OSError("write made no progress")
        written += count
    return len(view)


def ltoa(value: int, base: int = 10) -> str:
    """Render a non-negative integer in ``base`` with lower-case digits."""
    if not 2 <= base <= len(_DIGITS):
        raise ValueError("base must be between 2 and 36")
    if value < 0:
        raise ValueError("value must not be negative")
    digits = []
    while True:
        value, digit = divmod(value, base)
        digits.append(_DIGITS[digit])
        if value == 0:
            break
    return "".join(reversed(digits))


class RobustReader:
    """Buffered reader over a file descriptor."""

    def __init__(self, fd: int, bufsize: int = RIO_BUFSIZE):
        if bufsize <= 0:
            raise ValueError("bufsize must be positive")
        self.fd = fd
        self._bufsize = bufsize
        self._buf = b""
        self._pos = 0

    def _fill(self) -> bool:
        """Refill the buffer if it is empty; return False at end of file."""
        if self._pos < len(self._buf):
            return True
        self._buf = os.read(self.fd, self._bufsize)
        self._pos = 0
        return bool(self._buf)

    def _take(self, n: int) -> bytes:
        chunk = self._buf[self._pos:self._pos + n]
        self._pos += len(chunk)
        return chunk

    def read(self, n: int) -> bytes:
        """Read up to ``n`` bytes, stopping early only at end of file."""
        chunks = []
        left = n
        while left > 0 and self._fill():
            chunk = self._take(left)
            chunks.append(chunk)
            left -= len(chunk)
        return b"".join(chunks)

    def readline(self, maxlen: int = MAXLINE) -> bytes:
        """Read one line, newline included, of at most ``maxlen - 1`` bytes.

        Returns an empty string at end of file.
        """
        limit = maxlen - 1
        chunks = []
        taken = 0
        while taken < limit and self._fill():
            window = self._buf[self._pos:self._pos + (limit - taken)]
            newline = window.find(b"\n")
            if newline >= 0:
                chunks.append(self._take(newline + 1))
                break
            chunk = self._take(len(window))
            chunks.append(chunk)
            taken += len(chunk)
        return b"".join(chunks)