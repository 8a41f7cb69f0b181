"""csssweep model layer -- public type re-exports."""

from csssweep.model.report import (
    AnalysisResult,
    DuplicateDeclarationGroup,
    DuplicatedSelector,
    NestedSelectorRecord,
    PruneResult,
    SelectorOccurrence,
    SelectorPartition,
)
from csssweep.model.stylesheet import (
    AtRule,
    BodyNode,
    Comment,
    Declaration,
    Node,
    Position,
    RawNode,
    Rule,
    Stylesheet,
)

__all__ = [
    # stylesheet
    "Position",
    "Declaration",
    "Comment",
    "RawNode",
    "Rule",
    "AtRule",
    "Node",
    "BodyNode",
    "Stylesheet",
    # report
    "SelectorOccurrence",
    "NestedSelectorRecord",
    "DuplicateDeclarationGroup",
    "DuplicatedSelector",
    "AnalysisResult",
    "SelectorPartition",
    "PruneResult",
]
