"""Outcome types returned by every version source.

Sources report success or failure as a value instead of raising, so the
refresh orchestrator decides the fallback policy in one place by matching on
:data:`FetchResult`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, TypeVar, Union

_T = TypeVar("_T")


@dataclass(frozen=True)
class FetchSuccess(Generic[_T]):
    """A completed fetch.  ``records`` may legitimately be empty."""

    records: list[_T] = field(default_factory=list)


@dataclass(frozen=True)
class FetchFailure:
    """A fetch that raised; ``error`` is the exception that ended it."""

    error: Exception
    source: str = ""


FetchResult = Union[FetchSuccess[_T], FetchFailure]
