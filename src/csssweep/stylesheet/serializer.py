"""Render a :class:`Stylesheet` back to CSS, optionally with a source map."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

from csssweep.model.stylesheet import (
    AtRule,
    Comment,
    Declaration,
    Node,
    Position,
    RawNode,
    Rule,
    Stylesheet,
)
from csssweep.stylesheet.sourcemap import SourceMapBuilder, original_position

if TYPE_CHECKING:
    from sourcemap.objects import SourceMapIndex

__all__ = ["stringify", "StringifyResult"]

_INDENT = "  "
_MAP_URL_PREFIX = "# sourceMappingURL="


@dataclass(frozen=True)
class StringifyResult:
    code: str
    map: dict[str, Any] | None = None


class _Writer:
    """Accumulates output text while tracking the 0-based write position."""

    def __init__(
        self,
        source: str,
        builder: SourceMapBuilder | None,
        consumer: SourceMapIndex | None,
    ) -> None:
        self._source = source
        self._builder = builder
        self._consumer = consumer
        self._chunks: list[str] = []
        self.line = 0
        self.column = 0

    def write(self, text: str, position: Position | None = None) -> None:
        if position is not None and self._builder is not None:
            self._map(position)
        self._chunks.append(text)
        newlines = text.count("\n")
        if newlines:
            self.line += newlines
            self.column = len(text) - text.rfind("\n") - 1
        else:
            self.column += len(text)

    def _map(self, position: Position) -> None:
        # Chain through the input map so positions point at the real source.
        origin = original_position(self._consumer, position)
        if origin is not None:
            self._builder.add_mapping(self.line, self.column, origin.source, origin.line, origin.column)
        else:
            self._builder.add_mapping(
                self.line, self.column, self._source, position.line - 1, position.column - 1
            )

    def getvalue(self) -> str:
        return "".join(self._chunks)


def _is_map_url(node: Node) -> bool:
    return isinstance(node, Comment) and node.text.strip().startswith(_MAP_URL_PREFIX)


def _visible(nodes: list[Node], compress: bool) -> list[Node]:
    kept = [n for n in nodes if not _is_map_url(n)]
    if compress:
        kept = [
            n for n in kept
            if not isinstance(n, Comment)
            and not (isinstance(n, Rule) and not _declarations(n))
        ]
    return kept


def _declarations(rule: Rule) -> list[Declaration]:
    return [d for d in rule.declarations if isinstance(d, Declaration)]


def _write_compressed(out: _Writer, nodes: list[Node]) -> None:
    for node in _visible(nodes, compress=True):
        if isinstance(node, Rule):
            out.write(",".join(node.selectors), node.position)
            out.write("{")
            for i, decl in enumerate(_declarations(node)):
                if i:
                    out.write(";")
                out.write(f"{decl.property}:{decl.value}", decl.position)
            out.write("}")
        elif isinstance(node, AtRule):
            out.write(f"@{node.name} {node.prelude}".rstrip(), node.position)
            out.write("{")
            _write_compressed(out, node.rules)
            out.write("}")
        elif isinstance(node, RawNode):
            out.write(node.text, node.position)


def _write_pretty(out: _Writer, nodes: list[Node], depth: int = 0) -> None:
    indent = _INDENT * depth
    for i, node in enumerate(_visible(nodes, compress=False)):
        if i:
            out.write("\n\n")
        out.write(indent)
        if isinstance(node, Rule):
            out.write(f",\n{indent}".join(node.selectors), node.position)
            out.write(" {\n")
            for item in node.declarations:
                out.write(indent + _INDENT)
                if isinstance(item, Declaration):
                    out.write(f"{item.property}: {item.value};", item.position)
                else:
                    out.write(f"/*{item.text}*/", item.position)
                out.write("\n")
            out.write(indent + "}")
        elif isinstance(node, AtRule):
            out.write(f"@{node.name} {node.prelude}".rstrip(), node.position)
            out.write(" {\n")
            _write_pretty(out, node.rules, depth + 1)
            out.write("\n" + indent + "}")
        elif isinstance(node, Comment):
            out.write(f"/*{node.text}*/", node.position)
        elif isinstance(node, RawNode):
            out.write(node.text, node.position)


def stringify(
    stylesheet: Stylesheet,
    compress: bool = False,
    source_map: bool = False,
    consumer: SourceMapIndex | None = None,
    map_url: str | None = None,
) -> StringifyResult:
    """Serialize *stylesheet* to CSS text.

    Args:
        stylesheet: The stylesheet to render.
        compress: Emit minified CSS; comments and empty rules are dropped.
        source_map: Also build a source map for the output.
        consumer: Source map of the parsed input; generated mappings are
            chained through it when it resolves a position.
        map_url: When set, append a ``sourceMappingURL`` comment.
    """
    builder = None
    if source_map:
        builder = SourceMapBuilder(file=Path(stylesheet.source).name if stylesheet.source else "")
    out = _Writer(stylesheet.source, builder, consumer)
    if compress:
        _write_compressed(out, stylesheet.nodes)
    else:
        _write_pretty(out, stylesheet.nodes)
    if map_url:
        out.write(f"\n/*{_MAP_URL_PREFIX}{map_url} */")
    return StringifyResult(code=out.getvalue(), map=builder.to_dict() if builder else None)
