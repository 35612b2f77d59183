# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Component extractor: React components, the hooks they call and what they render."""

from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from nextscope.models import ExportType, PluginMetadata
from nextscope.parsing.helpers import contains_jsx, find_exports, find_imports
from nextscope.parsing.traversal import node_text
from nextscope.plugins.extractor import BaseExtractor, ExtractorConfig
from nextscope.plugins.react import (
    ComponentKind,
    hooks_called,
    is_component,
    parameter_names,
    rendered_elements,
    top_level_definitions,
)

TOP_N = 10


@dataclass
class ComponentInfo:
    name: str
    kind: str  # ComponentKind value
    file: str
    line: int
    is_exported: bool
    is_default: bool
    has_props: bool
    has_state: bool
    hooks: List[str] = field(default_factory=list)
    child_elements: List[str] = field(default_factory=list)


@dataclass
class ComponentFileResult:
    file_path: str  # Relative to the project root
    components: List[ComponentInfo] = field(default_factory=list)
    is_react_file: bool = False


@dataclass
class ComponentSummary:
    total_files: int
    total_components: int
    functional_components: int
    class_components: int
    exported_components: int
    most_used_hooks: List[Dict[str, Any]]
    most_used_elements: List[Dict[str, Any]]
    components_by_file: List[Dict[str, Any]]
    components: List[ComponentInfo]


def ranked(counter: Counter, limit: int = TOP_N) -> List[Dict[str, Any]]:
    """Top entries by count, ties broken by name."""
    items = sorted(counter.items(), key=lambda item: (-item[1], item[0]))
    return [{"name": name, "count": count} for name, count in items[:limit]]


class ComponentExtractor(BaseExtractor[ComponentFileResult, ComponentSummary]):
    """Finds React components in .js/.jsx/.ts/.tsx files.

    Test, spec and story files are excluded by default.
    """

    @classmethod
    def default_extractor_config(cls) -> ExtractorConfig:
        config = ExtractorConfig(batch_size=5)
        config.exclude_patterns += ["**/*.test.*", "**/*.spec.*", "**/*.stories.*"]
        return config

    @property
    def metadata(self) -> PluginMetadata:
        return PluginMetadata(
            name="component-extractor",
            version="2.0.0",
            description="React component extractor",
            tags=["react", "components"],
        )

    async def process_file(self, file_path: str) -> Optional[ComponentFileResult]:
        artifact = await self.parse_file_with_cache(file_path)
        if artifact is None:
            self.logger.debug(f"Skipping file (empty or parsing failed): {file_path}")
            return None

        relative = self.get_relative_path(file_path)
        exports = find_exports(artifact)
        exported_names = {e.name for e in exports}
        default_names = {e.name for e in exports if e.export_type == ExportType.DEFAULT}

        components: List[ComponentInfo] = []
        for definition in top_level_definitions(artifact):
            if not is_component(definition):
                continue

            if definition.is_class:
                body = node_text(definition.node)
                hooks: List[str] = []
                has_props = "props" in body
                has_state = "this.state" in body or "this.setState" in body
                kind = ComponentKind.CLASS
            else:
                hooks = hooks_called(definition.node)
                has_props = bool(parameter_names(definition.node))
                has_state = "useState" in hooks or "useReducer" in hooks
                kind = ComponentKind.FUNCTIONAL

            components.append(
                ComponentInfo(
                    name=definition.name,
                    kind=kind,
                    file=relative,
                    line=definition.line,
                    is_exported=definition.name in exported_names,
                    is_default=definition.name in default_names,
                    has_props=has_props,
                    has_state=has_state,
                    hooks=hooks,
                    child_elements=rendered_elements(definition.node),
                )
            )

        is_react_file = bool(components) or contains_jsx(artifact) or any(
            imp.source == "react" for imp in find_imports(artifact)
        )

        self.logger.debug(f"Found {len(components)} components in {relative}")
        return ComponentFileResult(
            file_path=relative, components=components, is_react_file=is_react_file
        )

    async def aggregate_results(
        self, results: List[ComponentFileResult], target_path: str
    ) -> ComponentSummary:
        react_files = [r for r in results if r.is_react_file]
        components = [c for r in react_files for c in r.components]

        hook_usage: Counter = Counter(h for c in components for h in c.hooks)
        element_usage: Counter = Counter(e for c in components for e in c.child_elements)

        by_file = [
            {
                "file": r.file_path,
                "count": len(r.components),
                "component_names": [c.name for c in r.components],
            }
            for r in react_files
            if r.components
        ]
        by_file.sort(key=lambda entry: (-entry["count"], entry["file"]))

        functional = sum(1 for c in components if c.kind == ComponentKind.FUNCTIONAL)
        self.logger.info(
            f"Component extraction complete: {len(components)} components "
            f"in {len(react_files)} files"
        )

        return ComponentSummary(
            total_files=len(react_files),
            total_components=len(components),
            functional_components=functional,
            class_components=len(components) - functional,
            exported_components=sum(1 for c in components if c.is_exported),
            most_used_hooks=ranked(hook_usage),
            most_used_elements=ranked(element_usage),
            components_by_file=by_file,
            components=components,
        )
