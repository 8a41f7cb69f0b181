"""Stylesheet model: tagged node variants produced by the CSS parser."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union


@dataclass(frozen=True)
class Position:
    """A 1-based line/column location in the parsed (compiled) file."""

    line: int = 1
    column: int = 1


@dataclass(frozen=True)
class Declaration:
    """A ``property: value`` pair inside a rule body."""

    property: str
    value: str
    position: Position = field(default_factory=Position)

    @property
    def key(self) -> str:
        """The ``property:value`` form used to compare declaration sets."""
        return f"{self.property}:{self.value}"


@dataclass(frozen=True)
class Comment:
    """A ``/* ... */`` comment, either top-level or inside a rule body."""

    text: str
    position: Position = field(default_factory=Position)


@dataclass(frozen=True)
class RawNode:
    """Any other construct (``@import``, ``@font-face``, ``@keyframes``...).

    Kept verbatim so a rewritten stylesheet still contains it.
    """

    text: str
    position: Position = field(default_factory=Position)


@dataclass(frozen=True)
class Rule:
    """A style rule: a selector list and its body."""

    selectors: list[str]
    declarations: list[Declaration | Comment] = field(default_factory=list)
    position: Position = field(default_factory=Position)

    def with_selectors(self, selectors: list[str]) -> Rule:
        return Rule(selectors=list(selectors), declarations=self.declarations, position=self.position)


@dataclass(frozen=True)
class AtRule:
    """A block at-rule that holds rules (``@media``, ``@supports``, ``@layer``)."""

    name: str
    prelude: str
    rules: list[Node] = field(default_factory=list)
    position: Position = field(default_factory=Position)


Node = Union[Rule, AtRule, Comment, RawNode]
BodyNode = Union[Declaration, Comment]


@dataclass(frozen=True)
class Stylesheet:
    """A parsed stylesheet: its file name and its top-level nodes in order."""

    source: str
    nodes: list[Node] = field(default_factory=list)
