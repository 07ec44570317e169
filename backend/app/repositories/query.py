"""Search query criteria.

Criteria are immutable and composed into a tree with LogicalAnd. The search
service translates the tree into SQL.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Criterion:
    """Marker base class for query criteria."""


@dataclass(frozen=True)
class ContentId(Criterion):
    """Matches content whose id is one of the given raw identifiers."""

    values: tuple[str | int, ...]

    def __post_init__(self):
        object.__setattr__(self, "values", tuple(self.values))


class VisibilityState(str, Enum):
    VISIBLE = "visible"
    HIDDEN = "hidden"


@dataclass(frozen=True)
class Visibility(Criterion):
    """Matches content by visibility of the item and its main location."""

    value: VisibilityState = VisibilityState.VISIBLE


@dataclass(frozen=True)
class LanguageCode(Criterion):
    """Matches content that has a version in the given language."""

    value: str


@dataclass(frozen=True)
class LogicalAnd(Criterion):
    """Conjunction of criteria."""

    criteria: tuple[Criterion, ...]

    def __post_init__(self):
        object.__setattr__(self, "criteria", tuple(self.criteria))


@dataclass(frozen=True)
class Query:
    """A content search query."""

    filter: Criterion
