# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Visitor dispatch over tree-sitter syntax trees.

Visitors are registered in a table keyed by NodeKind. Node kinds outside the
enum are walked through but never dispatched. A failing callback is logged
and traversal continues with the next node.
"""

import logging
from enum import Enum
from typing import Any, Callable, Dict, Iterator, Mapping, Optional

import tree_sitter

from nextscope.models import ParsedArtifact

logger = logging.getLogger(__name__)

Visitor = Callable[[tree_sitter.Node], None]


class NodeKind(str, Enum):
    """Syntax node kinds the extractors dispatch on (tree-sitter type names)."""

    PROGRAM = "program"
    IMPORT_STATEMENT = "import_statement"
    EXPORT_STATEMENT = "export_statement"
    FUNCTION_DECLARATION = "function_declaration"
    FUNCTION_EXPRESSION = "function_expression"
    ARROW_FUNCTION = "arrow_function"
    CLASS_DECLARATION = "class_declaration"
    METHOD_DEFINITION = "method_definition"
    LEXICAL_DECLARATION = "lexical_declaration"
    VARIABLE_DECLARATION = "variable_declaration"
    VARIABLE_DECLARATOR = "variable_declarator"
    ASSIGNMENT_EXPRESSION = "assignment_expression"
    CALL_EXPRESSION = "call_expression"
    MEMBER_EXPRESSION = "member_expression"
    RETURN_STATEMENT = "return_statement"
    OBJECT = "object"
    PAIR = "pair"
    STRING = "string"
    TEMPLATE_STRING = "template_string"
    IDENTIFIER = "identifier"
    JSX_ELEMENT = "jsx_element"
    JSX_SELF_CLOSING_ELEMENT = "jsx_self_closing_element"
    JSX_OPENING_ELEMENT = "jsx_opening_element"
    JSX_ATTRIBUTE = "jsx_attribute"
    JSX_EXPRESSION = "jsx_expression"
    JSX_TEXT = "jsx_text"


_KIND_BY_TYPE: Dict[str, NodeKind] = {kind.value: kind for kind in NodeKind}


def kind_of(node: tree_sitter.Node) -> Optional[NodeKind]:
    return _KIND_BY_TYPE.get(node.type)


def root_of(target: Any) -> tree_sitter.Node:
    """Accept a ParsedArtifact, a Tree or a Node and return the node to walk."""
    if isinstance(target, ParsedArtifact):
        return target.root
    if isinstance(target, tree_sitter.Tree):
        return target.root_node
    return target


def walk(target: Any) -> Iterator[tree_sitter.Node]:
    """Yield every node in document order (pre-order, depth first)."""
    stack = [root_of(target)]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def traverse(target: Any, visitors: Mapping[NodeKind, Visitor]) -> None:
    """Walk target and call visitors[kind](node) for every matching node.

    Args:
        target: ParsedArtifact, tree_sitter.Tree or tree_sitter.Node.
        visitors: Callback per node kind.
    """
    if not visitors:
        return

    try:
        for node in walk(target):
            kind = kind_of(node)
            if kind is None:
                continue
            visitor = visitors.get(kind)
            if visitor is None:
                continue
            try:
                visitor(node)
            except Exception as e:
                logger.error(
                    f"Error in visitor for {kind.value} at line {node.start_point[0] + 1}: {e}"
                )
    except Exception as e:
        logger.error(f"Error traversing syntax tree: {e}")


def node_text(node: Optional[tree_sitter.Node]) -> str:
    if node is None or node.text is None:
        return ""
    return node.text.decode("utf-8", errors="replace")


def line_of(node: tree_sitter.Node) -> int:
    """1-based line number of a node."""
    return node.start_point[0] + 1


def string_value(node: Optional[tree_sitter.Node]) -> Optional[str]:
    """Literal value of a string or substitution-free template string.

    Returns None for anything that is not a static string.
    """
    if node is None:
        return None
    if node.type == NodeKind.STRING.value:
        return node_text(node)[1:-1]
    if node.type == NodeKind.TEMPLATE_STRING.value:
        if any(child.type == "template_substitution" for child in node.children):
            return None
        return node_text(node)[1:-1]
    return None


def callee_name(call: tree_sitter.Node) -> Optional[str]:
    """Dotted name of a call's callee: "t", "console.log", "i18n.t".

    Returns None when the callee is not an identifier/member chain.
    """
    function = call.child_by_field_name("function")
    return dotted_name(function)


def dotted_name(node: Optional[tree_sitter.Node]) -> Optional[str]:
    if node is None:
        return None
    if node.type in ("identifier", "property_identifier", "this"):
        return node_text(node)
    if node.type == NodeKind.MEMBER_EXPRESSION.value:
        obj = dotted_name(node.child_by_field_name("object"))
        prop = node.child_by_field_name("property")
        if obj is None or prop is None:
            return None
        return f"{obj}.{node_text(prop)}"
    return None
