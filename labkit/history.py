"""Numbered command history kept in memory and persisted to a file."""

import os
from collections.abc import Iterable, Iterator


class History:
    """Commands in the order entered, numbered from 1.

    Commands are stored as given, normally with their trailing newline.
    """

    def __init__(self, entries: Iterable[str] = ()):
        self._entries = list(entries)

    @classmethod
    def load(cls, path: str | os.PathLike) -> "History":
        """Read the history file at ``path``, creating it empty if missing."""
        if not os.path.exists(path):
            with open(path, "w", encoding="utf-8"):
                pass
        with open(path, encoding="utf-8") as stream:
            return cls(stream)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def add(self, cmd: str) -> int:
        """Append a command and return its history number."""
        self._entries.append(cmd)
        return len(self._entries)

    def last(self) -> str:
        """The most recent command."""
        if not self._entries:
            raise IndexError("history is empty")
        return self._entries[-1]

    def get(self, number: int) -> str:
        """The command with history number ``number``."""
        if not 1 <= number <= len(self._entries):
            raise IndexError(f"no history entry {number}")
        return self._entries[number - 1]

    def format(self) -> str:
        """Every entry as its number, two spaces and the command."""
        return "".join(
            f"{number}  {cmd}" for number, cmd in enumerate(self._entries, start=1)
        )

    def save(self, path: str | os.PathLike) -> None:
        """Write the history to ``path``.

        The most recent entry, the command that ends the session, is not
        written.
        """
        with open(path, "w", encoding="utf-8") as stream:
            stream.writelines(self._entries[:-1])