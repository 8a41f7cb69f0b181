"""Tolerant CSS parser built on tinycss2.

Produces the tagged node model in :mod:`csssweep.model.stylesheet`. Malformed
constructs are skipped rather than failing the whole file, so a stylesheet
with a few broken rules still yields a best-effort result.
"""

from __future__ import annotations

import logging

import tinycss2

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
from csssweep.selectors import normalize_selector

__all__ = ["parse_stylesheet", "CONTAINER_AT_RULES"]

logger = logging.getLogger(__name__)

# Block at-rules whose content is a list of style rules.
CONTAINER_AT_RULES = frozenset({"media", "supports", "layer"})


def _position(node: object) -> Position:
    return Position(
        line=getattr(node, "source_line", 1) or 1,
        column=getattr(node, "source_column", 1) or 1,
    )


def _serialize(tokens: list) -> str:
    return tinycss2.serialize([t for t in tokens if t.type != "comment"])


def _split_selectors(prelude: list) -> list[str]:
    """Split a rule prelude on top-level commas into normalized selectors.

    Commas nested in ``:is(...)`` or ``[attr="a,b"]`` belong to blocks or
    string tokens and never split.
    """
    groups: list[list] = [[]]
    for token in prelude:
        if token.type == "literal" and token.value == ",":
            groups.append([])
        else:
            groups[-1].append(token)
    selectors = [normalize_selector(_serialize(group)) for group in groups]
    return [s for s in selectors if s]


def _parse_body(content: list, source: str) -> list[BodyNode]:
    body: list[BodyNode] = []
    for item in tinycss2.parse_declaration_list(content, skip_whitespace=True):
        if item.type == "declaration":
            value = _serialize(item.value).strip()
            if item.important:
                value += " !important"
            body.append(Declaration(property=item.name, value=value, position=_position(item)))
        elif item.type == "comment":
            body.append(Comment(text=item.value, position=_position(item)))
        elif item.type == "error":
            logger.debug(
                "%s:%d:%d: skipping malformed declaration (%s)",
                source, item.source_line, item.source_column, item.message,
            )
    return body


def _convert(node: object, source: str) -> Node | None:
    node_type = getattr(node, "type", "")
    if node_type == "qualified-rule":
        selectors = _split_selectors(node.prelude)
        if not selectors:
            logger.debug("%s:%d: skipping rule without selectors", source, node.source_line)
            return None
        return Rule(
            selectors=selectors,
            declarations=_parse_body(node.content, source),
            position=_position(node),
        )
    if node_type == "at-rule":
        if node.lower_at_keyword in CONTAINER_AT_RULES and node.content is not None:
            children = tinycss2.parse_rule_list(node.content, skip_whitespace=True)
            return AtRule(
                name=node.lower_at_keyword,
                prelude=normalize_selector(_serialize(node.prelude)),
                rules=_convert_all(children, source),
                position=_position(node),
            )
        return RawNode(text=tinycss2.serialize([node]).strip(), position=_position(node))
    if node_type == "comment":
        return Comment(text=node.value, position=_position(node))
    if node_type == "error":
        logger.debug(
            "%s:%d:%d: skipping malformed rule (%s)",
            source, node.source_line, node.source_column, node.message,
        )
    return None


def _convert_all(nodes: list, source: str) -> list[Node]:
    converted = (_convert(node, source) for node in nodes)
    return [node for node in converted if node is not None]


def parse_stylesheet(text: str, source: str = "") -> Stylesheet:
    """Parse CSS *text* into a :class:`Stylesheet` named *source*.

    Positions are 1-based line/column in *text*.
    """
    nodes = tinycss2.parse_stylesheet(text, skip_whitespace=True)
    return Stylesheet(source=source, nodes=_convert_all(nodes, source))
