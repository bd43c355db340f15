"""Hex color normalization used by the comparison engine."""

from __future__ import annotations

import re

_HEX_RE = re.compile(r"[0-9A-F]+")


def normalize_hex(value: str) -> str:
    """Return a canonical ``RRGGBBAA`` form of *value*.

    Case and a leading ``#`` are ignored, 3/4-digit short forms are expanded
    and a missing alpha channel defaults to ``FF``. Anything that is not a
    hex color is returned stripped and upper-cased so it still compares
    deterministically.
    """
    raw = value.strip().lstrip("#").upper()
    if not _HEX_RE.fullmatch(raw):
        return raw
    if len(raw) in (3, 4):
        raw = "".join(ch * 2 for ch in raw)
    if len(raw) == 6:
        return raw + "FF"
    return raw


def colors_equal(left: str, right: str) -> bool:
    """True when both strings denote the same color channels."""
    return normalize_hex(left) == normalize_hex(right)
