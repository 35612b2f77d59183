# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Core data models for the extraction engine.

This module defines the structures that flow between the manager, the
extraction pipeline and the parsing substrate:
- PluginMetadata / PluginConfig: Plugin identity and scheduling knobs
- PluginResult: Structured success/failure envelope returned by every plugin
- FileCandidate: A discovered file awaiting filtering
- ParsedArtifact: Syntax tree plus source text for one file
- ImportInfo / ExportInfo / CallSite: Generic facts produced by the helpers
- CacheEntry / CacheStatistics: Bookkeeping for the keyed cache

Result payloads use JSON-compatible primitives so they can be serialized
without custom encoders (see to_jsonable).
"""

import dataclasses
import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


@dataclass
class PluginMetadata:
    """Identity of a plugin."""

    name: str
    version: str
    description: str = ""
    author: Optional[str] = None
    tags: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to JSON-compatible dict."""
        result: Dict[str, Any] = {
            "name": self.name,
            "version": self.version,
            "description": self.description,
            "tags": list(self.tags),
        }
        if self.author is not None:
            result["author"] = self.author
        return result


@dataclass
class PluginConfig:
    """Scheduling and behaviour settings for a plugin.

    Lower priority runs earlier. `options` carries plugin-specific settings,
    including the `critical` flag consulted by PluginManager.execute_all().
    """

    enabled: bool = True
    priority: int = 100
    dependencies: List[str] = field(default_factory=list)
    options: Dict[str, Any] = field(default_factory=dict)


@dataclass
class PluginResult:
    """Result envelope returned by Plugin.extract() and the manager."""

    success: bool
    data: Any = None
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def failure(cls, message: str, **metadata: Any) -> "PluginResult":
        return cls(success=False, errors=[message], metadata=dict(metadata))

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to JSON-compatible dict."""
        result: Dict[str, Any] = {"success": self.success}
        if self.data is not None:
            result["data"] = to_jsonable(self.data)
        if self.errors:
            result["errors"] = list(self.errors)
        if self.warnings:
            result["warnings"] = list(self.warnings)
        if self.metadata:
            result["metadata"] = to_jsonable(self.metadata)
        return result


@dataclass
class FileCandidate:
    """A discovered file. Transient: produced by discovery, consumed by filtering."""

    path: str  # Absolute path
    size: int  # Size in bytes
    extension: str  # Lower-cased, including the dot (".tsx")


class Dialect(str, Enum):
    """Grammar profile used to parse a file.

    TypeScript syntax is always enabled; TSX adds JSX markup on top of it.
    """

    TYPESCRIPT = "typescript"
    TSX = "tsx"


@dataclass
class ParsedArtifact:
    """Syntax tree, source text and originating path of one parsed file.

    Cached by path for the lifetime of one run. Never persisted.
    """

    tree: Any  # tree_sitter.Tree
    content: str
    file_path: str
    dialect: Dialect

    @property
    def root(self) -> Any:
        return self.tree.root_node

    @property
    def source_bytes(self) -> bytes:
        return self.content.encode("utf-8")


class ExportType:
    """Kinds of export declarations.

    Design: Using class constants (not Enum) for JSON-compatible strings.
    """

    DEFAULT = "default"  # export default Foo
    NAMED = "named"  # export const foo / export { foo }
    NAMESPACE = "namespace"  # export * from "./mod"


@dataclass
class ImportBinding:
    """One local binding introduced by an import declaration."""

    local: str  # Local name in the importing file
    imported: str  # "default", "*", or the exported name


@dataclass
class ImportInfo:
    """An import declaration: `import React, { useState } from "react"`."""

    source: str
    bindings: List[ImportBinding] = field(default_factory=list)
    is_default: bool = False
    is_namespace: bool = False
    line: int = 0

    @property
    def names(self) -> List[str]:
        return [binding.local for binding in self.bindings]


@dataclass
class ExportInfo:
    """An export declaration."""

    name: str
    export_type: str  # ExportType value
    source: Optional[str] = None  # Re-export source module, if any
    line: int = 0


@dataclass
class CallSite:
    """A call expression."""

    name: str  # Callee name; member calls use the property name ("log" for console.log)
    full_name: str  # Dotted callee when resolvable ("console.log"), else name
    argument_count: int
    line: int  # 1-based
    column: int  # 0-based


@dataclass
class JsxElementInfo:
    """A JSX element or fragment."""

    name: str  # Tag name ("div", "Button", "Foo.Bar"); "Fragment" for <>...</>
    line: int  # 1-based
    column: int  # 0-based
    attributes: List[str] = field(default_factory=list)
    self_closing: bool = False


@dataclass
class CacheEntry:
    """Single keyed-cache entry. Times come from the cache's clock."""

    value: Any
    expires_at: float
    created_at: float
    last_accessed: float


@dataclass
class CacheStatistics:
    """Keyed-cache performance counters."""

    hits: int = 0
    misses: int = 0
    sets: int = 0
    expirations: int = 0  # Entries evicted lazily or by cleanup() because they expired
    current_entries: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to JSON-compatible dict."""
        return dataclasses.asdict(self)


def to_jsonable(value: Any) -> Any:
    """Convert dataclasses, enums, paths and containers into JSON primitives."""
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        if hasattr(value, "to_dict"):
            return to_jsonable(value.to_dict())
        return {f.name: to_jsonable(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, dict):
        return {str(k): to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        items = [to_jsonable(v) for v in value]
        return sorted(items, key=str) if isinstance(value, (set, frozenset)) else items
    return value
