"""Keyboard indicator formatting and XKB layout name parsing."""

from __future__ import annotations

import re

# Symbols from the xkb rules configuration that name no layout.
_INVALID = ("evdev", "inet", "pc", "base")

_SEPARATORS = re.compile(r"[+:]")


def format_indicators(fmt, led_mask):
    """Render caps and num lock state according to ``fmt``.

    ``fmt`` holds 'c' (caps lock) and/or 'n' (num lock) in either case, each
    optionally followed by '?'. With '?', the letter is shown as written only
    when its indicator is on; without, it is always shown, upper case when on.
    Only the first four characters of ``fmt`` are used.
    """
    fmt = fmt[:4]
    out = []
    for i, char in enumerate(fmt):
        key = char.lower()
        if key not in ("c", "n"):
            continue
        toggle_case = i + 1 >= len(fmt) or fmt[i + 1] != "?"
        is_set = bool(led_mask & (1 << (key == "n")))
        if toggle_case:
            out.append(key.upper() if is_set else key)
        elif is_set:
            out.append(char)
    return "".join(out)


def valid_layout_or_variant(sym):
    """Return False for xkb rule symbols that do not name a layout."""
    return not sym.startswith(_INVALID)


def get_layout(symbols, group):
    """Return the layout of keyboard group ``group`` from an xkb symbols string.

    Falls back to the last layout found when there are fewer groups; returns
    None when there is no layout at all.
    """
    layout = None
    found = 0
    for token in filter(None, _SEPARATORS.split(symbols)):
        if found > group:
            break
        if not valid_layout_or_variant(token):
            continue
        if len(token) == 1 and token.isdigit():
            continue
        layout = token
        found += 1
    return layout