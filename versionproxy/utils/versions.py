"""Minecraft version classification helpers.

Three concerns live here because every Minecraft source needs all of them:

1. **Lenient numeric parsing** -- ``parse_leading_int`` reads the longest
   integer prefix of a string and ignores the rest, so ``"20-pre1"`` reads as
   ``20`` and ``"1-alpine"`` as ``1``.  ``parse_version_pair`` applies it to
   the first two dotted components.  ``parse_leading_float`` reads the longest
   decimal prefix, so ``"1.16.5"`` reads as ``1.16`` and ``"1.8.9"`` as
   ``1.8``.  Identifiers with no numeric prefix at all (``"latest"``) parse to
   ``None`` and fall through every threshold.

2. **Classification** -- ``classify`` derives the recommended Java runtime and
   data-pack support from a version identifier.

3. **The historical floor** -- ``take_until_inclusive`` cuts a newest-first
   list at ``HISTORICAL_FLOOR`` (1.7.10).  Older versions are of no interest to
   any consumer.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import TypeVar

_T = TypeVar("_T")

# Oldest Minecraft version any source reports.  Not configurable.
HISTORICAL_FLOOR = "1.7.10"

# Latest Java LTS at the time the classification table was written.
DEFAULT_JAVA = 21
MAXIMUM_JAVA = 21

JAVA_17_LINE = (1, 20)
JAVA_8_LINE = (1, 16)
# Compared against the decimal reading of the identifier, so "1.8.9" (1.8)
# sits above it while "1.12.2" (1.12) and "1.10.2" (1.1) sit below.
JAVA_8_CEILING = 1.16
DATAPACK_CEILING = (1, 12)

# Patch releases that never shipped data packs.  Both already fall under the
# <= 1.12 rule; they are listed explicitly so the rule survives any change
# to the numeric threshold.
_DATAPACK_QUIRKS = frozenset({"1.9.4", "1.8.8"})

_INT_PREFIX = re.compile(r"^\s*[+-]?\d+")
_FLOAT_PREFIX = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)")


def parse_leading_int(text: str) -> int | None:
    """Parse the longest base-10 integer prefix of *text*, or ``None``.

    >>> parse_leading_int("17-alpine")
    17
    >>> parse_leading_int("lts") is None
    True
    """
    match = _INT_PREFIX.match(text)
    if match is None:
        return None
    return int(match.group(0))


def parse_leading_float(text: str) -> float | None:
    """Parse the longest decimal prefix of *text*, or ``None``.

    Only the first ``.`` belongs to the number, so a dotted version reads as
    ``major.minor`` with the minor taken as a decimal fraction.

    >>> parse_leading_float("1.16.5")
    1.16
    >>> parse_leading_float("1.8.9")
    1.8
    >>> parse_leading_float("latest") is None
    True
    """
    match = _FLOAT_PREFIX.match(text)
    if match is None:
        return None
    return float(match.group(0))


def parse_version_pair(version_id: str) -> tuple[int, int] | None:
    """Return ``(major, minor)`` from the first two dotted components.

    A missing or non-numeric minor component counts as ``0``; a non-numeric
    major makes the whole identifier unparseable.

    >>> parse_version_pair("1.16.5")
    (1, 16)
    >>> parse_version_pair("24w14a")
    (24, 0)
    >>> parse_version_pair("latest") is None
    True
    """
    parts = version_id.split(".", 2)
    major = parse_leading_int(parts[0])
    if major is None:
        return None
    minor = parse_leading_int(parts[1]) if len(parts) > 1 else None
    return (major, minor if minor is not None else 0)


def _at_most(pair: tuple[int, int] | None, ceiling: tuple[int, int]) -> bool:
    # Unparseable identifiers never satisfy a threshold.
    return pair is not None and pair <= ceiling


@dataclass(frozen=True)
class Classification:
    """Runtime and capability metadata derived from a version identifier."""

    recommended_java: int
    supports_datapacks: bool

    @property
    def minimum_java(self) -> int:
        return 17 if self.recommended_java >= 17 else 8

    @property
    def maximum_java(self) -> int:
        return MAXIMUM_JAVA


def classify(version_id: str) -> Classification:
    """Classify a Minecraft version identifier such as ``"1.20.4"``.

    Recommended Java:
        * ``1.20.x``                                   -> 17
        * ``1.16.x``, or a decimal reading <= 1.16     -> 8
        * everything else                              -> 21

    The Java rule reads the identifier as a decimal, so ``1.12.2`` (1.12)
    and ``1.10.2`` (1.1) recommend Java 8 while ``1.8.9`` (1.8) and
    ``1.7.10`` (1.7) fall through to 21.  Published records have always
    carried these values.

    Data packs are unsupported for ``<= (1, 12)`` (first two components read
    as integers) and for the quirk list; supported otherwise.
    """
    pair = parse_version_pair(version_id)
    number = parse_leading_float(version_id)

    recommended = DEFAULT_JAVA
    if pair == JAVA_17_LINE:
        recommended = 17
    elif pair == JAVA_8_LINE or (number is not None and number <= JAVA_8_CEILING):
        recommended = 8

    supports_datapacks = not (
        _at_most(pair, DATAPACK_CEILING) or version_id in _DATAPACK_QUIRKS
    )

    return Classification(recommended_java=recommended, supports_datapacks=supports_datapacks)


def take_until_inclusive(
    items: Iterable[_T],
    sentinel: str = HISTORICAL_FLOOR,
    key: Callable[[_T], str] | None = None,
) -> list[_T]:
    """Return items up to and including the first one whose key is *sentinel*.

    If the sentinel never appears, every item is returned.

    Args:
        items: Items in upstream order (expected newest-first).
        sentinel: Version identifier that ends the run.
        key: Extracts the version identifier from an item.  Defaults to the
            item itself, for plain lists of strings.
    """
    extract = key if key is not None else (lambda item: item)  # type: ignore[assignment,return-value]
    kept: list[_T] = []
    for item in items:
        kept.append(item)
        if extract(item) == sentinel:
            break
    return kept
