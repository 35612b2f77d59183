# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Parsing and traversal substrate.

Components:
- SourceParser: file content -> tree-sitter syntax tree, with parse caching
- traverse/NodeKind: visitor dispatch keyed by node kind
- Helpers: imports, exports, call sites, JSX presence and elements
"""

from nextscope.parsing.helpers import (
    contains_jsx,
    find_exports,
    find_function_calls,
    find_imports,
    find_jsx_elements,
)
from nextscope.parsing.parser import SourceParser, select_dialect
from nextscope.parsing.traversal import NodeKind, node_text, string_value, traverse, walk

__all__ = [
    "NodeKind",
    "SourceParser",
    "contains_jsx",
    "find_exports",
    "find_function_calls",
    "find_imports",
    "find_jsx_elements",
    "node_text",
    "select_dialect",
    "string_value",
    "traverse",
    "walk",
]
