"""Report records produced by analysis, classification and pruning."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class SelectorOccurrence:
    """A class/id token found in a rule, attributed to its source file.

    ``source_file`` is the original file named by the source map when one
    resolves the rule position, otherwise the compiled CSS file.
    """

    selector: str
    source_file: str


@dataclass(frozen=True)
class NestedSelectorRecord:
    """A selector with more whitespace-separated segments than the threshold."""

    selector: str
    source_file: str
    nest_level: int


@dataclass(frozen=True)
class DuplicateDeclarationGroup:
    """Rules sharing an identical declaration set.

    Attributes:
        declarations: Canonical key, sorted ``property:value`` pairs joined by ``;``.
        selectors: One selector list per rule carrying that declaration set.
    """

    declarations: str
    selectors: list[list[str]]

    @property
    def size(self) -> int:
        return len(self.selectors)


@dataclass(frozen=True)
class DuplicatedSelector:
    """How many times a token/source pair appears across a file's rules."""

    selector: str
    source_file: str
    occurrences: int


@dataclass
class AnalysisResult:
    """Everything learned about one CSS file."""

    css_selectors: list[SelectorOccurrence] = field(default_factory=list)
    nested_selectors: list[NestedSelectorRecord] = field(default_factory=list)
    duplicated_selectors: list[DuplicatedSelector] = field(default_factory=list)
    duplicated_declarations: list[DuplicateDeclarationGroup] = field(default_factory=list)


@dataclass(frozen=True)
class SelectorPartition:
    """A rule's selector list split into used and unused, order preserved."""

    used_selectors: list[str]
    unused_selectors: list[str]

    @property
    def all_unused(self) -> bool:
        return not self.used_selectors


@dataclass
class PruneResult:
    """Outcome of pruning one CSS file."""

    css_file: str
    unused_selectors: list[str] = field(default_factory=list)
    rules_removed: int = 0
    written: bool = False
    error: str | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None
