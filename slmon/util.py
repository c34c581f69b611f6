"""Shared helpers: diagnostics, human-readable sizes and small file readers."""

from __future__ import annotations

import re
import sys
from pathlib import Path

# Size of the shared output buffer the components format into.
BUFSIZE = 1024

_PREFIXES = {
    1000: ("", "k", "M", "G", "T", "P", "E", "Z", "Y"),
    1024: ("", "Ki", "Mi", "Gi", "Ti", "Pi", "Ei", "Zi", "Yi"),
}

_LEADING_INT = re.compile(r"\s*\+?(\d+)")


def warn(message: str) -> None:
    """Write a diagnostic to stderr.

    A message ending in ':' is followed by the description of the error
    currently being handled, if any.
    """
    if message.endswith(":"):
        exc = sys.exc_info()[1]
        if isinstance(exc, OSError) and exc.strerror:
            detail = exc.strerror
        elif exc is not None:
            detail = str(exc)
        else:
            detail = "Unknown error"
        print(f"{message} {detail}", file=sys.stderr)
    else:
        print(message, file=sys.stderr)


def die(message: str) -> None:
    """Write a diagnostic to stderr and exit with status 1."""
    warn(message)
    raise SystemExit(1)


def fmt_human(num: float, base: int) -> str:
    """Scale ``num`` by ``base`` and attach an SI (1000) or IEC (1024) prefix."""
    try:
        prefixes = _PREFIXES[base]
    except KeyError:
        raise ValueError(f"fmt_human: Invalid base {base!r}") from None

    scaled = float(num)
    index = 0
    while index < len(prefixes) - 1 and scaled >= base:
        scaled /= base
        index += 1
    return f"{scaled:.1f} {prefixes[index]}"


def read_first_line(path: str | Path) -> str | None:
    """Return the first line of a file without its newline.

    Returns None if the file cannot be opened or the line is empty.
    """
    try:
        with open(path, encoding="utf-8", errors="replace") as handle:
            line = handle.readline(BUFSIZE - 2)
    except OSError:
        warn(f"fopen '{path}':")
        return None
    if line.endswith("\n"):
        line = line[:-1]
    return line or None


def read_int(path: str | Path) -> int | None:
    """Return the unsigned integer at the start of a file, or None."""
    try:
        with open(path, encoding="utf-8", errors="replace") as handle:
            text = handle.read(BUFSIZE)
    except OSError:
        warn(f"fopen '{path}':")
        return None
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else None