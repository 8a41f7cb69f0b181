"""Flatten container at-rules into a plain list of style rules."""

from __future__ import annotations

from csssweep.model.stylesheet import AtRule, Node, Rule


def flatten_rules(nodes: list[Node]) -> list[Rule]:
    """Pull rules out of ``@media`` (and similar) blocks, keeping source order.

    Comments and verbatim nodes such as ``@font-face`` are dropped.
    """
    flat: list[Rule] = []
    for node in nodes:
        if isinstance(node, Rule):
            flat.append(node)
        elif isinstance(node, AtRule):
            flat.extend(flatten_rules(node.rules))
    return flat
