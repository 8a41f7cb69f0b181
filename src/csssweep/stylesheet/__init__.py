from csssweep.stylesheet.parser import CONTAINER_AT_RULES, parse_stylesheet
from csssweep.stylesheet.serializer import StringifyResult, stringify
from csssweep.stylesheet.sourcemap import (
    SourceMapBuilder,
    load_source_map,
    original_position,
    resolve_source_file,
)

__all__ = [
    "CONTAINER_AT_RULES",
    "parse_stylesheet",
    "stringify",
    "StringifyResult",
    "SourceMapBuilder",
    "load_source_map",
    "original_position",
    "resolve_source_file",
]
