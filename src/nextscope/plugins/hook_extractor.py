# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Hook extractor: built-in and custom hook calls, and custom hook definitions."""

from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from nextscope.models import PluginMetadata
from nextscope.parsing.helpers import find_exports
from nextscope.parsing.traversal import NodeKind, callee_name, line_of, walk
from nextscope.plugins.extractor import BaseExtractor
from nextscope.plugins.react import (
    HookKind,
    enclosing_function_name,
    hook_kind,
    hooks_called,
    is_hook_name,
    parameter_names,
    top_level_definitions,
)


@dataclass
class HookCall:
    name: str
    kind: str  # HookKind value
    line: int
    caller: Optional[str] = None  # Enclosing component or hook


@dataclass
class CustomHookDefinition:
    name: str
    file: str
    line: int
    is_exported: bool
    params: List[str] = field(default_factory=list)
    hooks_used: List[str] = field(default_factory=list)


@dataclass
class HookFileResult:
    file_path: str
    calls: List[HookCall] = field(default_factory=list)
    definitions: List[CustomHookDefinition] = field(default_factory=list)


@dataclass
class HookSummary:
    total_files: int  # Files calling or defining hooks
    total_hook_calls: int
    builtin_hook_calls: int
    custom_hook_calls: int
    total_custom_hooks: int
    hook_usage: List[Dict[str, Any]]
    hooks_by_file: List[Dict[str, Any]]
    custom_hooks: List[CustomHookDefinition]


class HookExtractor(BaseExtractor[HookFileResult, HookSummary]):
    """Finds React hook usage across a project."""

    @property
    def metadata(self) -> PluginMetadata:
        return PluginMetadata(
            name="hook-extractor",
            version="2.0.0",
            description="React hook usage and custom hook extractor",
            tags=["react", "hooks"],
        )

    async def process_file(self, file_path: str) -> Optional[HookFileResult]:
        artifact = await self.parse_file_with_cache(file_path)
        if artifact is None:
            return None

        relative = self.get_relative_path(file_path)
        exported = {e.name for e in find_exports(artifact)}

        calls: List[HookCall] = []
        for node in walk(artifact):
            if node.type != NodeKind.CALL_EXPRESSION.value:
                continue
            callee = callee_name(node)
            if callee is None:
                continue
            name = callee[len("React.") :] if callee.startswith("React.") else callee
            if "." in name or not is_hook_name(name):
                continue
            calls.append(
                HookCall(
                    name=name,
                    kind=hook_kind(name),
                    line=line_of(node),
                    caller=enclosing_function_name(node),
                )
            )

        definitions = [
            CustomHookDefinition(
                name=definition.name,
                file=relative,
                line=definition.line,
                is_exported=definition.name in exported,
                params=parameter_names(definition.node),
                hooks_used=hooks_called(definition.node),
            )
            for definition in top_level_definitions(artifact)
            if not definition.is_class and is_hook_name(definition.name)
        ]

        return HookFileResult(file_path=relative, calls=calls, definitions=definitions)

    async def aggregate_results(self, results: List[HookFileResult], target_path: str) -> HookSummary:
        active = [r for r in results if r.calls or r.definitions]
        calls = [c for r in active for c in r.calls]

        usage: Counter = Counter(c.name for c in calls)
        hook_usage = [
            {"name": name, "count": count, "kind": hook_kind(name)}
            for name, count in sorted(usage.items(), key=lambda item: (-item[1], item[0]))
        ]

        hooks_by_file = sorted(
            (
                {
                    "file": r.file_path,
                    "calls": len(r.calls),
                    "custom_hooks": [d.name for d in r.definitions],
                    "hooks_called": sorted({c.name for c in r.calls}),
                }
                for r in active
            ),
            key=lambda entry: (-entry["calls"], entry["file"]),
        )

        builtin = sum(1 for c in calls if c.kind == HookKind.BUILTIN)
        custom_hooks = [d for r in active for d in r.definitions]
        self.logger.info(
            f"Hook extraction complete: {len(calls)} hook calls, {len(custom_hooks)} custom hooks"
        )

        return HookSummary(
            total_files=len(active),
            total_hook_calls=len(calls),
            builtin_hook_calls=builtin,
            custom_hook_calls=len(calls) - builtin,
            total_custom_hooks=len(custom_hooks),
            hook_usage=hook_usage,
            hooks_by_file=hooks_by_file,
            custom_hooks=custom_hooks,
        )
