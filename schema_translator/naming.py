"""Identifier transforms shared by the code emitters."""

import re
from typing import Iterable

# Oracle allows $ and # in identifiers; C# does not
_WORD_SPLIT = re.compile(r"[^0-9A-Za-z]+")
_SIBILANT_ENDINGS = ("s", "x", "z", "ch", "sh")


def title_case(identifier: str) -> str:
    """Catalog identifier to a C# member name: 'EMP_ID' -> 'EmpId', 'EMP$HIST' -> 'EmpHist'.

    Names with no letters or digits left become '_', and names starting with a
    digit get a leading underscore, so the result is always a valid C# identifier.
    """
    words = [w for w in _WORD_SPLIT.split((identifier or "").lower()) if w]
    name = "".join(w[0].upper() + w[1:] for w in words)
    if not name or name[0].isdigit():
        return f"_{name}"
    return name


def pluralize(name: str) -> str:
    """Naive English plural used for collection navigation members."""
    if not name:
        return name
    lowered = name.lower()
    if lowered.endswith("y") and len(name) > 1 and lowered[-2] not in "aeiou":
        return name[:-1] + "ies"
    if lowered.endswith(_SIBILANT_ENDINGS):
        return name + "es"
    return name + "s"


def unique_member(name: str, taken: Iterable[str]) -> str:
    """Return `name`, or `name` with the lowest free numeric suffix when already taken."""
    taken = set(taken)
    if name not in taken:
        return name
    n = 2
    while f"{name}{n}" in taken:
        n += 1
    return f"{name}{n}"
