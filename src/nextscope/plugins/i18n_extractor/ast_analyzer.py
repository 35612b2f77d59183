# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Syntax-tree analysis for the i18n extractor.

Walks one parsed file and collects:
- String candidates: JSX text, JSX attribute values, variable values,
  object property values, assignment values and call arguments. Each
  candidate is classified by the ValidatorRegistry under the kind matching
  where it was found.
- Translation usage: calls to configured translation functions, with the
  key and any default value.
- Issues: hardcoded strings, untranslated JSX text and dynamic keys.

Strings inside translation calls, import/export sources, object keys and
type annotations are never candidates.
"""

import logging
import re
from typing import List, Optional, Tuple

import tree_sitter

from nextscope.models import ParsedArtifact
from nextscope.parsing.helpers import JSX_ELEMENT_TYPES
from nextscope.parsing.traversal import (
    NodeKind,
    callee_name,
    dotted_name,
    line_of,
    node_text,
    string_value,
    traverse,
)
from nextscope.plugins.i18n_extractor.config import I18nSettings
from nextscope.plugins.i18n_extractor.models import (
    I18nIssue,
    IssueType,
    StringCandidate,
    TranslationUsage,
)
from nextscope.validators import (
    ValidationInput,
    ValidationKind,
    ValidatorRegistry,
    generate_translation_key,
)

logger = logging.getLogger(__name__)

_WHITESPACE_RE = re.compile(r"\s+")

_JSX_TAG_TYPES = frozenset(
    {NodeKind.JSX_OPENING_ELEMENT.value, NodeKind.JSX_SELF_CLOSING_ELEMENT.value}
)

# Parents under which a string is never user-facing text
_IGNORED_PARENTS = frozenset(
    {
        NodeKind.IMPORT_STATEMENT.value,
        NodeKind.EXPORT_STATEMENT.value,
        "literal_type",
        "subscript_expression",
        "binary_expression",
        "switch_case",
    }
)


class I18nAnalyzer:
    """Collects i18n facts from one parsed file."""

    def __init__(self, settings: I18nSettings, registry: ValidatorRegistry) -> None:
        self.settings = settings
        self.registry = registry
        self._functions = frozenset(settings.translation_functions)

    def analyze(
        self, artifact: ParsedArtifact
    ) -> Tuple[List[StringCandidate], List[TranslationUsage], List[I18nIssue]]:
        strings: List[StringCandidate] = []
        usages: List[TranslationUsage] = []

        def on_jsx_text(node: tree_sitter.Node) -> None:
            text = _WHITESPACE_RE.sub(" ", node_text(node)).strip()
            if not self.settings.is_candidate_text(text):
                return
            strings.append(
                self._classify(text, node, [(ValidationKind.JSX_TEXT, {})], _jsx_context(node))
            )

        def on_string(node: tree_sitter.Node) -> None:
            text = string_value(node)
            if text is None or not self.settings.is_candidate_text(text):
                return
            if self._in_translation_call(node):
                return
            located = self._locate(node)
            if located is None:
                return
            attempts, context = located
            strings.append(self._classify(text, node, attempts, context))

        def on_call(node: tree_sitter.Node) -> None:
            usage = self._translation_usage(node)
            if usage is not None:
                usages.append(usage)

        visitors = {NodeKind.CALL_EXPRESSION: on_call}
        if self.settings.analyze_jsx_text:
            visitors[NodeKind.JSX_TEXT] = on_jsx_text
        if self.settings.analyze_string_literals:
            visitors[NodeKind.STRING] = on_string
            visitors[NodeKind.TEMPLATE_STRING] = on_string
        traverse(artifact, visitors)
        logger.debug(
            f"{artifact.file_path}: {len(strings)} string candidates, "
            f"{len(usages)} translation calls"
        )

        return strings, usages, build_issues(strings, usages)

    def _classify(
        self,
        text: str,
        node: tree_sitter.Node,
        attempts: List[Tuple[ValidationKind, dict]],
        context: str,
    ) -> StringCandidate:
        """Try each (kind, names) in turn; the first accepting kind wins.

        When none accepts, the candidate keeps the first kind and its reason.
        """
        first = None
        for kind, names in attempts:
            outcome = self.registry.validate(ValidationInput(text, kind.value, names))
            if first is None:
                first = outcome
            if outcome.is_valid:
                break
        else:
            outcome = first

        return StringCandidate(
            text=text,
            kind=outcome.kind,
            line=line_of(node),
            column=node.start_point[1],
            context=context,
            is_likely_translatable=outcome.is_valid,
            validator=outcome.validator_name,
            reason=outcome.reason,
            suggested_key=generate_translation_key(text),
        )

    def _locate(
        self, node: tree_sitter.Node
    ) -> Optional[Tuple[List[Tuple[ValidationKind, dict]], str]]:
        """Validation kinds to try for a string, by its syntactic position.

        Returns None for positions that never hold user-facing text.
        """
        parent = node.parent
        if parent is None or parent.type in _IGNORED_PARENTS:
            return None

        if parent.type == NodeKind.JSX_EXPRESSION.value:
            holder = parent.parent
            if holder is None:
                return None
            if holder.type == NodeKind.JSX_ATTRIBUTE.value:
                parent = holder
            elif holder.type == NodeKind.JSX_ELEMENT.value:
                return [(ValidationKind.JSX_TEXT, {})], _jsx_context(parent)
            else:
                return None

        if parent.type == NodeKind.JSX_ATTRIBUTE.value:
            attribute = node_text(parent.named_children[0]) if parent.named_children else ""
            tag = _tag_name(parent.parent)
            names = {"attribute_name": attribute}
            if tag[:1].isupper() or "." in tag:
                return [(ValidationKind.COMPONENT_PROP, names)], f"<{tag} {attribute}>"
            return [(ValidationKind.JSX_ATTRIBUTE, names)], f"<{tag} {attribute}>"

        if parent.type == NodeKind.VARIABLE_DECLARATOR.value:
            if parent.child_by_field_name("value") != node:
                return None
            variable = node_text(parent.child_by_field_name("name"))
            names = {"variable_name": variable}
            return (
                [(ValidationKind.VARIABLE_DECLARATION, names), (ValidationKind.FORM_VALIDATION, names)],
                f"const {variable}",
            )

        if parent.type == NodeKind.ASSIGNMENT_EXPRESSION.value:
            if parent.child_by_field_name("right") != node:
                return None
            target = dotted_name(parent.child_by_field_name("left")) or ""
            variable = target.rsplit(".", 1)[-1]
            names = {"variable_name": variable}
            return (
                [(ValidationKind.VARIABLE_DECLARATION, names), (ValidationKind.FORM_VALIDATION, names)],
                target,
            )

        if parent.type == NodeKind.PAIR.value:
            if parent.child_by_field_name("value") != node:
                return None
            key = parent.child_by_field_name("key")
            prop = string_value(key) if key is not None and key.type == "string" else node_text(key)
            names = {"property_name": prop}
            return (
                [(ValidationKind.OBJECT_PROPERTY, names), (ValidationKind.FORM_VALIDATION, names)],
                f"{{ {prop} }}",
            )

        if parent.type == "arguments" and parent.parent is not None:
            function = callee_name(parent.parent)
            if function is None:
                return None
            return [(ValidationKind.ALERT_MESSAGE, {"function_name": function})], f"{function}()"

        return None

    def _in_translation_call(self, node: tree_sitter.Node) -> bool:
        current = node.parent
        while current is not None:
            if current.type == NodeKind.CALL_EXPRESSION.value:
                if callee_name(current) in self._functions:
                    return True
            current = current.parent
        return False

    def _translation_usage(self, call: tree_sitter.Node) -> Optional[TranslationUsage]:
        function = callee_name(call)
        if function not in self._functions:
            return None

        arguments = call.child_by_field_name("arguments")
        args = [] if arguments is None else [a for a in arguments.named_children if a.type != "comment"]
        if not args:
            return None

        first = args[0]
        key = string_value(first)
        is_dynamic = key is None
        if key is None:
            text = node_text(first)
            key = text[1:-1] if first.type == NodeKind.TEMPLATE_STRING.value else text

        default_value = None
        if len(args) > 1:
            default_value = _default_value(args[1])

        return TranslationUsage(
            function_name=function,
            key=key,
            line=line_of(call),
            column=call.start_point[1],
            default_value=default_value,
            is_dynamic=is_dynamic or "${" in key or "+" in key,
        )


def build_issues(strings: List[StringCandidate], usages: List[TranslationUsage]) -> List[I18nIssue]:
    """Issues for one file, in source order."""
    issues: List[I18nIssue] = []
    for candidate in strings:
        if not candidate.is_likely_translatable:
            continue
        if candidate.kind == ValidationKind.JSX_TEXT.value:
            issue_type = IssueType.UNTRANSLATED_JSX
            description = f'Untranslated JSX text: "{candidate.text}"'
        else:
            issue_type = IssueType.HARDCODED_STRING
            description = f'Hardcoded string should be translated: "{candidate.text}"'
        issues.append(
            I18nIssue(
                issue_type=issue_type,
                description=description,
                line=candidate.line,
                suggestion=f"Replace with t('{candidate.suggested_key}')",
            )
        )

    for usage in usages:
        if usage.is_dynamic:
            issues.append(
                I18nIssue(
                    issue_type=IssueType.DYNAMIC_KEY,
                    description=f"Dynamic translation key: {usage.key}",
                    line=usage.line,
                    suggestion="Prefer static keys so they can be checked against locale files",
                )
            )

    issues.sort(key=lambda issue: issue.line)
    return issues


def _default_value(node: tree_sitter.Node) -> Optional[str]:
    """Default text from t("key", "Default") or t("key", { defaultValue: "Default" })."""
    value = string_value(node)
    if value is not None:
        return value
    if node.type != NodeKind.OBJECT.value:
        return None
    for pair in node.named_children:
        if pair.type != NodeKind.PAIR.value:
            continue
        if node_text(pair.child_by_field_name("key")) == "defaultValue":
            return string_value(pair.child_by_field_name("value"))
    return None


def _tag_name(tag: Optional[tree_sitter.Node]) -> str:
    if tag is None or tag.type not in _JSX_TAG_TYPES:
        return ""
    return node_text(tag.child_by_field_name("name"))


def _jsx_context(node: tree_sitter.Node) -> str:
    """Tag of the element holding a JSX child node, as "<tag>"."""
    current = node.parent
    while current is not None and current.type not in JSX_ELEMENT_TYPES:
        current = current.parent
    if current is None:
        return "<>"
    opening = current.child_by_field_name("open_tag") if current.type == NodeKind.JSX_ELEMENT.value else current
    name = _tag_name(opening)
    return f"<{name}>" if name else "<>"
