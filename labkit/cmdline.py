"""Parsing of shell command lines: arguments, pipelines and history marks."""

import re
from typing import NamedTuple

# Value of check_mark for a line that does not refer to the history.
NO_MARK = 0
# Value of check_mark for "!!", which repeats the most recent command.
REPEAT_LAST = -1

_LEADING_DIGITS = re.compile(r"\d*")


class ParsedLine(NamedTuple):
    """Arguments of one command and whether it runs in the background."""

    argv: list[str]
    bg: bool


def parseline(cmdline: str) -> ParsedLine:
    """Split a command line on spaces into its arguments.

    A trailing newline is dropped. A blank line yields no arguments and
    counts as a background job. If the last argument starts with ``&`` the
    job runs in the background and that argument is removed.
    """
    if cmdline.endswith("\n"):
        cmdline = cmdline[:-1]
    argv = [word for word in cmdline.split(" ") if word]
    if not argv:
        return ParsedLine([], True)
    bg = argv[-1].startswith("&")
    if bg:
        argv.pop()
    return ParsedLine(argv, bg)


def parsepipe(cmdline: str) -> list[str]:
    """Split a command line at every ``|`` that is not inside quotes.

    Single and double quote characters that open or close a quotation are
    removed; a quote of one kind inside a quotation of the other is kept.
    The number of pipes is one less than the number of segments returned.
    """
    segments: list[str] = []
    current: list[str] = []
    in_double = False
    in_single = False
    for char in cmdline:
        if char == '"' and not in_single:
            in_double = not in_double
        elif char == "'" and not in_double:
            in_single = not in_single
        elif char == "|" and not in_single and not in_double:
            segments.append("".join(current))
            current = []
        else:
            current.append(char)
    segments.append("".join(current))
    return segments


def check_mark(cmdline: str) -> int:
    """Classify a command line by its history mark.

    Returns :data:`REPEAT_LAST` for ``!!``, the history number for ``!N``,
    and :data:`NO_MARK` for anything else, including ``!!!`` and ``!``
    followed by something other than digits.
    """
    if cmdline.startswith("!!!"):
        return NO_MARK
    if cmdline.startswith("!!"):
        return REPEAT_LAST
    if cmdline.startswith("!"):
        # Every character but the last (normally the newline) must be a digit.
        body = cmdline[1:-1]
        if any(char not in "0123456789" for char in body):
            return NO_MARK
        digits = _LEADING_DIGITS.match(cmdline[1:]).group()
        return int(digits) if digits else NO_MARK
    return NO_MARK