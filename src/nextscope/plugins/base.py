# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Base interface for extraction plugins.

A plugin is a named unit of work scheduled by the PluginManager. Its
lifecycle is:
1. Constructed once (optionally with a PluginConfig)
2. init(context) when registered, and again whenever the context is rebound
3. Zero or more extract(target_path) calls
4. cleanup() when unregistered

Output rendering is an optional capability: a plugin may carry a Formatter;
without one, format_data() falls back to JSON serialization.
"""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, List, Optional, Protocol, runtime_checkable

from nextscope.context import ExecutionContext
from nextscope.models import PluginConfig, PluginMetadata, PluginResult, to_jsonable

logger = logging.getLogger(__name__)


class OutputFormat:
    """Format selectors accepted by format_data().

    Design: Using class constants (not Enum) for JSON-compatible strings.
    """

    TEXT = "text"
    MARKDOWN = "markdown"
    JSON = "json"

    ALL = (TEXT, MARKDOWN, JSON)


@runtime_checkable
class Formatter(Protocol):
    """Renders a plugin summary for humans or machines."""

    def format(self, data: Any, fmt: str) -> str:
        ...


class BasePlugin(ABC):
    """Abstract base class for extraction plugins.

    Subclasses provide metadata, should_process() and extract(). Scheduling
    settings (enabled, priority, dependencies, options) live in self.config
    and are read by the manager through the properties below.
    """

    def __init__(
        self,
        config: Optional[PluginConfig] = None,
        formatter: Optional[Formatter] = None,
    ) -> None:
        self.config = config if config is not None else PluginConfig()
        self.formatter = formatter
        self.context: Optional[ExecutionContext] = None
        self.logger = logger

    @property
    @abstractmethod
    def metadata(self) -> PluginMetadata:
        """Return plugin identity (name, version, description)."""
        pass

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def version(self) -> str:
        return self.metadata.version

    @property
    def enabled(self) -> bool:
        return self.config.enabled

    @property
    def priority(self) -> int:
        return self.config.priority

    @property
    def dependencies(self) -> List[str]:
        return list(self.config.dependencies)

    @property
    def is_critical(self) -> bool:
        """A failed critical plugin stops PluginManager.execute_all()."""
        return self.config.options.get("critical") is True

    def init(self, context: ExecutionContext) -> None:
        """Bind the plugin to an execution context.

        Called on registration and again after every context rebind.
        """
        self.context = context
        self.logger = context.logger.getChild(self.name)

    def require_context(self) -> ExecutionContext:
        """Return the bound context.

        Raises:
            RuntimeError: If init() has not been called.
        """
        if self.context is None:
            raise RuntimeError(f"Plugin {self.name} used before init()")
        return self.context

    @abstractmethod
    def should_process(self, target_path: Path) -> bool:
        """Whether this plugin has anything to do for target_path."""
        pass

    @abstractmethod
    async def extract(self, target_path: Path) -> PluginResult:
        """Run the plugin over target_path.

        Returns:
            PluginResult whose data is the plugin summary.
        """
        pass

    def validate(self) -> bool:
        """Self-check run by the manager before registration.

        Returns:
            True if metadata and scheduling settings are well formed.
        """
        metadata = self.metadata
        if not metadata.name or not metadata.version:
            return False
        if isinstance(self.config.priority, bool) or not isinstance(self.config.priority, int):
            return False
        if not all(isinstance(dep, str) and dep for dep in self.config.dependencies):
            return False
        return True

    def cleanup(self) -> None:
        """Release resources. Called when the plugin is unregistered."""
        self.context = None

    def format_data(self, data: Any, fmt: str = OutputFormat.TEXT) -> str:
        """Render a summary with the plugin's formatter, or as JSON without one."""
        if self.formatter is not None:
            return self.formatter.format(data, fmt)
        return json.dumps(to_jsonable(data), indent=2)
