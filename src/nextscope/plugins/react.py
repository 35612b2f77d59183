# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""React-specific helpers shared by the component and hook extractors.

Heuristics are intentionally simple:
- A component is a capitalized top-level function, arrow function or class
  whose body renders JSX (or, for classes, extends a React component base).
- A hook is any call or definition named use + capital letter/digit.
"""

import re
from dataclasses import dataclass
from typing import Dict, List, Optional

import tree_sitter

from nextscope.models import ParsedArtifact
from nextscope.parsing.helpers import contains_jsx, find_function_calls, find_jsx_elements
from nextscope.parsing.traversal import NodeKind, line_of, node_text

BUILTIN_HOOKS = frozenset(
    {
        "useState",
        "useEffect",
        "useContext",
        "useReducer",
        "useCallback",
        "useMemo",
        "useRef",
        "useImperativeHandle",
        "useLayoutEffect",
        "useDebugValue",
        "useDeferredValue",
        "useTransition",
        "useId",
        "useSyncExternalStore",
        "useInsertionEffect",
    }
)

_HOOK_NAME_RE = re.compile(r"^use[A-Z0-9]")

FUNCTION_TYPES = frozenset(
    {
        NodeKind.FUNCTION_DECLARATION.value,
        NodeKind.FUNCTION_EXPRESSION.value,
        NodeKind.ARROW_FUNCTION.value,
        "generator_function_declaration",
    }
)

REACT_CLASS_BASES = ("Component", "PureComponent")


class ComponentKind:
    """Design: Using class constants (not Enum) for JSON-compatible strings."""

    FUNCTIONAL = "functional"
    CLASS = "class"


class HookKind:
    BUILTIN = "builtin"
    CUSTOM = "custom"


@dataclass
class Definition:
    """A named top-level function, arrow function or class."""

    name: str
    node: tree_sitter.Node  # The function/class node itself
    is_class: bool
    line: int


def is_hook_name(name: str) -> bool:
    return _HOOK_NAME_RE.match(name) is not None


def hook_kind(name: str) -> str:
    return HookKind.BUILTIN if name in BUILTIN_HOOKS else HookKind.CUSTOM


def is_component_name(name: str) -> bool:
    return bool(name) and name[0].isupper()


def _unwrap_value(value: Optional[tree_sitter.Node]) -> Optional[tree_sitter.Node]:
    """Function inside `memo(() => ...)`/`forwardRef(function ...)`, or value itself."""
    if value is None:
        return None
    if value.type in FUNCTION_TYPES:
        return value
    if value.type == NodeKind.CALL_EXPRESSION.value:
        arguments = value.child_by_field_name("arguments")
        if arguments is not None:
            for arg in arguments.named_children:
                if arg.type in FUNCTION_TYPES:
                    return arg
    return None


def top_level_definitions(artifact: ParsedArtifact) -> List[Definition]:
    """Functions and classes declared at module level, exported or not."""
    definitions: List[Definition] = []

    for statement in artifact.root.named_children:
        declaration = statement
        if statement.type == NodeKind.EXPORT_STATEMENT.value:
            declaration = statement.child_by_field_name("declaration")
            if declaration is None:
                declaration = statement.child_by_field_name("value")
            if declaration is None:
                continue

        if declaration.type in FUNCTION_TYPES or declaration.type == NodeKind.CLASS_DECLARATION.value:
            name = declaration.child_by_field_name("name")
            if name is not None:
                definitions.append(
                    Definition(
                        name=node_text(name),
                        node=declaration,
                        is_class=declaration.type == NodeKind.CLASS_DECLARATION.value,
                        line=line_of(declaration),
                    )
                )
        elif declaration.type in (
            NodeKind.LEXICAL_DECLARATION.value,
            NodeKind.VARIABLE_DECLARATION.value,
        ):
            for declarator in declaration.named_children:
                if declarator.type != NodeKind.VARIABLE_DECLARATOR.value:
                    continue
                name = declarator.child_by_field_name("name")
                function = _unwrap_value(declarator.child_by_field_name("value"))
                if name is None or function is None or name.type != "identifier":
                    continue
                definitions.append(
                    Definition(
                        name=node_text(name),
                        node=function,
                        is_class=False,
                        line=line_of(declarator),
                    )
                )

    return definitions


def extends_react_component(class_node: tree_sitter.Node) -> bool:
    for child in class_node.named_children:
        if child.type == "class_heritage":
            heritage = node_text(child)
            return any(base in heritage for base in REACT_CLASS_BASES)
    return False


def is_component(definition: Definition) -> bool:
    if not is_component_name(definition.name):
        return False
    if definition.is_class:
        return extends_react_component(definition.node) or contains_jsx(definition.node)
    return contains_jsx(definition.node)


def parameter_names(function: tree_sitter.Node) -> List[str]:
    """Declared parameter names; destructured patterns are kept as written."""
    single = function.child_by_field_name("parameter")
    if single is not None:
        return [node_text(single)]

    parameters = function.child_by_field_name("parameters")
    if parameters is None:
        return []

    names: List[str] = []
    for param in parameters.named_children:
        if param.type == "comment":
            continue
        pattern = param.child_by_field_name("pattern")
        names.append(node_text(pattern if pattern is not None else param))
    return names


def hooks_called(node: tree_sitter.Node) -> List[str]:
    """Distinct hook names called within node, in first-call order.

    `React.useState` counts as `useState`.
    """
    seen: Dict[str, None] = {}
    for call in find_function_calls(node):
        if is_hook_name(call.name) and (call.full_name == call.name or call.full_name == f"React.{call.name}"):
            seen.setdefault(call.name, None)
    return list(seen)


def rendered_elements(node: tree_sitter.Node) -> List[str]:
    """Distinct JSX tag names rendered within node, in document order."""
    seen: Dict[str, None] = {}
    for element in find_jsx_elements(node):
        seen.setdefault(element.name, None)
    return list(seen)


def enclosing_function_name(node: tree_sitter.Node) -> Optional[str]:
    """Name of the nearest named function (or function-valued variable) around node."""
    current = node.parent
    while current is not None:
        if current.type in FUNCTION_TYPES:
            name = current.child_by_field_name("name")
            if name is not None:
                return node_text(name)
            parent = current.parent
            # Arrow functions wrapped in memo()/forwardRef() sit inside arguments
            while parent is not None and parent.type in ("arguments", NodeKind.CALL_EXPRESSION.value):
                parent = parent.parent
            if parent is not None and parent.type == NodeKind.VARIABLE_DECLARATOR.value:
                declared = parent.child_by_field_name("name")
                if declared is not None:
                    return node_text(declared)
        elif current.type == NodeKind.METHOD_DEFINITION.value:
            name = current.child_by_field_name("name")
            return node_text(name) if name is not None else None
        current = current.parent
    return None
