# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Generic fact helpers over parsed JavaScript/TypeScript trees.

These helpers know nothing about any particular extractor. Each accepts a
ParsedArtifact, tree or node and walks the whole subtree.
"""

import logging
from typing import Any, List, Optional

import tree_sitter

from nextscope.models import (
    CallSite,
    ExportInfo,
    ExportType,
    ImportBinding,
    ImportInfo,
    JsxElementInfo,
)
from nextscope.parsing.traversal import NodeKind, dotted_name, line_of, node_text, string_value, walk

logger = logging.getLogger(__name__)

JSX_ELEMENT_TYPES = frozenset(
    {NodeKind.JSX_ELEMENT.value, NodeKind.JSX_SELF_CLOSING_ELEMENT.value}
)


def find_imports(target: Any) -> List[ImportInfo]:
    """Collect import declarations.

    Handles default (`import React from`), named (`import { a as b } from`),
    namespace (`import * as ns from`) and side-effect (`import "./x.css"`)
    imports.
    """
    imports: List[ImportInfo] = []
    for node in walk(target):
        if node.type != NodeKind.IMPORT_STATEMENT.value:
            continue

        source = string_value(node.child_by_field_name("source"))
        if source is None:
            continue

        info = ImportInfo(source=source, line=line_of(node))
        for clause in node.named_children:
            if clause.type != "import_clause":
                continue
            for part in clause.named_children:
                if part.type == "identifier":
                    info.is_default = True
                    info.bindings.append(ImportBinding(local=node_text(part), imported="default"))
                elif part.type == "namespace_import":
                    info.is_namespace = True
                    for ident in part.named_children:
                        if ident.type == "identifier":
                            info.bindings.append(ImportBinding(local=node_text(ident), imported="*"))
                elif part.type == "named_imports":
                    for spec in part.named_children:
                        if spec.type != "import_specifier":
                            continue
                        name = node_text(spec.child_by_field_name("name"))
                        alias = spec.child_by_field_name("alias")
                        local = node_text(alias) if alias is not None else name
                        info.bindings.append(ImportBinding(local=local, imported=name))
        imports.append(info)

    return imports


def _declared_names(declaration: tree_sitter.Node) -> List[str]:
    """Names introduced by a declaration (function, class, const a = ..., b = ...)."""
    if declaration.type in (NodeKind.LEXICAL_DECLARATION.value, NodeKind.VARIABLE_DECLARATION.value):
        names = []
        for declarator in declaration.named_children:
            if declarator.type == NodeKind.VARIABLE_DECLARATOR.value:
                name = declarator.child_by_field_name("name")
                if name is not None and name.type == "identifier":
                    names.append(node_text(name))
        return names

    name = declaration.child_by_field_name("name")
    return [node_text(name)] if name is not None else []


def find_exports(target: Any) -> List[ExportInfo]:
    """Collect export declarations.

    Default exports are reported under the declared or referenced name when
    there is one, "default" otherwise. `export *` is reported as "*".
    """
    exports: List[ExportInfo] = []
    for node in walk(target):
        if node.type != NodeKind.EXPORT_STATEMENT.value:
            continue

        line = line_of(node)
        source = string_value(node.child_by_field_name("source"))
        declaration = node.child_by_field_name("declaration")
        is_default = any(child.type == "default" for child in node.children)

        if is_default:
            name = "default"
            if declaration is not None:
                name = (_declared_names(declaration) or ["default"])[0]
            else:
                value = node.child_by_field_name("value")
                if value is not None and value.type == "identifier":
                    name = node_text(value)
            exports.append(ExportInfo(name=name, export_type=ExportType.DEFAULT, line=line))
            continue

        if declaration is not None:
            for name in _declared_names(declaration):
                exports.append(ExportInfo(name=name, export_type=ExportType.NAMED, line=line))
            continue

        star = False
        namespace_named = False
        for child in node.children:
            if child.type == "export_clause":
                for spec in child.named_children:
                    if spec.type != "export_specifier":
                        continue
                    alias = spec.child_by_field_name("alias")
                    name = spec.child_by_field_name("name")
                    exported = alias if alias is not None else name
                    exports.append(
                        ExportInfo(
                            name=node_text(exported),
                            export_type=ExportType.NAMED,
                            source=source,
                            line=line,
                        )
                    )
            elif child.type == "namespace_export":
                namespace_named = True
                idents = [c for c in child.named_children if c.type in ("identifier", "string")]
                name = node_text(idents[0]) if idents else "*"
                exports.append(
                    ExportInfo(name=name, export_type=ExportType.NAMESPACE, source=source, line=line)
                )
            elif child.type == "*":
                star = True

        if star and not namespace_named:
            exports.append(
                ExportInfo(name="*", export_type=ExportType.NAMESPACE, source=source, line=line)
            )

    return exports


def find_function_calls(target: Any, name: Optional[str] = None) -> List[CallSite]:
    """Collect call sites, optionally only those whose callee matches name.

    name matches either the bare callee ("log") or the dotted one ("console.log").
    """
    calls: List[CallSite] = []
    for node in walk(target):
        if node.type != NodeKind.CALL_EXPRESSION.value:
            continue

        function = node.child_by_field_name("function")
        if function is None:
            continue

        if function.type == "identifier":
            callee = node_text(function)
            full_name = callee
        elif function.type == NodeKind.MEMBER_EXPRESSION.value:
            prop = function.child_by_field_name("property")
            if prop is None:
                continue
            callee = node_text(prop)
            full_name = dotted_name(function) or callee
        else:
            continue

        if name is not None and name not in (callee, full_name):
            continue

        arguments = node.child_by_field_name("arguments")
        argument_count = 0
        if arguments is not None:
            argument_count = sum(1 for arg in arguments.named_children if arg.type != "comment")

        calls.append(
            CallSite(
                name=callee,
                full_name=full_name,
                argument_count=argument_count,
                line=line_of(node),
                column=node.start_point[1],
            )
        )

    return calls


def contains_jsx(target: Any) -> bool:
    """True if the subtree holds any JSX element or fragment."""
    return any(node.type in JSX_ELEMENT_TYPES for node in walk(target))


def jsx_tag_name(element: tree_sitter.Node) -> str:
    """Tag name of a jsx_element or jsx_self_closing_element."""
    tag = element
    if element.type == NodeKind.JSX_ELEMENT.value:
        tag = element.child_by_field_name("open_tag") or element.named_children[0]
    name = tag.child_by_field_name("name")
    return node_text(name) if name is not None else "Fragment"


def jsx_attributes(element: tree_sitter.Node) -> List[tree_sitter.Node]:
    tag = element
    if element.type == NodeKind.JSX_ELEMENT.value:
        tag = element.child_by_field_name("open_tag") or element.named_children[0]
    return [child for child in tag.named_children if child.type == NodeKind.JSX_ATTRIBUTE.value]


def jsx_attribute_name(attribute: tree_sitter.Node) -> str:
    return node_text(attribute.named_children[0]) if attribute.named_children else ""


def find_jsx_elements(target: Any) -> List[JsxElementInfo]:
    """Collect JSX elements in document order."""
    elements: List[JsxElementInfo] = []
    for node in walk(target):
        if node.type not in JSX_ELEMENT_TYPES:
            continue
        elements.append(
            JsxElementInfo(
                name=jsx_tag_name(node),
                line=line_of(node),
                column=node.start_point[1],
                attributes=[jsx_attribute_name(attr) for attr in jsx_attributes(node)],
                self_closing=node.type == NodeKind.JSX_SELF_CLOSING_ELEMENT.value,
            )
        )
    return elements
