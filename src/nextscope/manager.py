# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Plugin manager: registration, dependency ordering and execution.

The manager owns the plugin instances and one ExecutionContext. Execution
order is recomputed whenever the registry changes:
1. Stable sort by priority, ascending (ties keep registration order)
2. Depth-first topological visit seeded in that order, dependencies first

Dependencies on plugins that are not registered are ignored. A registration
that would introduce a cycle is rejected before the registry is touched.

Error Handling:
- register(): ValidationError / CircularDependencyError are raised
- execute_plugin()/execute_all(): every failure becomes a PluginResult
"""

import logging
import time
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from nextscope.context import ExecutionContext
from nextscope.errors import (
    CircularDependencyError,
    DisabledError,
    NotFoundError,
    ValidationError,
)
from nextscope.models import PluginResult
from nextscope.plugins.base import BasePlugin

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def compute_execution_order(plugins: Dict[str, BasePlugin]) -> List[str]:
    """Dependency-respecting order of plugin names.

    Args:
        plugins: Plugins keyed by name, in registration order.

    Returns:
        Names with every (registered) dependency before its dependents.

    Raises:
        CircularDependencyError: If the dependency graph has a cycle.
    """
    visited: set = set()
    visiting: set = set()
    order: List[str] = []

    def visit(name: str) -> None:
        if name in visiting:
            raise CircularDependencyError(name)
        if name in visited:
            return

        plugin = plugins.get(name)
        if plugin is None:
            return

        visiting.add(name)
        for dependency in plugin.dependencies:
            if dependency in plugins:
                visit(dependency)
        visiting.discard(name)

        visited.add(name)
        order.append(name)

    for plugin in sorted(plugins.values(), key=lambda p: p.priority):
        visit(plugin.name)

    return order


class PluginManager:
    """Registers plugins and runs them in dependency order.

    Usage:
        manager = PluginManager(project_path="/path/to/app")
        manager.register(ComponentExtractor())
        results = await manager.execute_all()

    Concurrency:
        execute_all() runs plugins strictly one after another. Running
        execute_plugin() concurrently for several plugins sharing this
        manager's context is unsupported.
    """

    def __init__(
        self,
        project_path: Optional[PathLike] = None,
        target_path: Optional[PathLike] = None,
        context: Optional[ExecutionContext] = None,
    ) -> None:
        """Initialize manager.

        Args:
            project_path: Project root. Ignored when context is given.
                Defaults to the current directory.
            target_path: Optional target override. Ignored when context is given.
            context: Pre-built execution context.
        """
        if context is None:
            context = ExecutionContext.create(project_path or Path.cwd(), target_path)

        self._context = context
        self._plugins: Dict[str, BasePlugin] = {}
        self._execution_order: List[str] = []

    @property
    def context(self) -> ExecutionContext:
        return self._context

    @property
    def execution_order(self) -> List[str]:
        return list(self._execution_order)

    def register(self, plugin: BasePlugin) -> None:
        """Validate, order-check, insert and init a plugin.

        Raises:
            ValidationError: If the plugin fails validate() or its name is taken.
            CircularDependencyError: If the plugin would close a dependency
                cycle. The registry is left unchanged.
        """
        if not plugin.validate():
            raise ValidationError(plugin.metadata.name)

        name = plugin.name
        if name in self._plugins:
            raise ValidationError(name, "is already registered")

        candidate = dict(self._plugins)
        candidate[name] = plugin
        order = compute_execution_order(candidate)

        self._plugins = candidate
        self._execution_order = order
        plugin.init(self._context)

        logger.debug(f"Registered plugin '{name}' (priority {plugin.priority}), order: {order}")

    def unregister(self, name: str) -> None:
        """Clean up and remove a plugin. Unknown names are ignored."""
        plugin = self._plugins.get(name)
        if plugin is None:
            return

        plugin.cleanup()
        del self._plugins[name]
        self._execution_order = compute_execution_order(self._plugins)
        logger.debug(f"Unregistered plugin '{name}'")

    def get_plugin(self, name: str) -> Optional[BasePlugin]:
        return self._plugins.get(name)

    def get_all_plugins(self) -> List[BasePlugin]:
        """Registered plugins in registration order."""
        return list(self._plugins.values())

    async def execute_plugin(
        self, name: str, target_path: Optional[PathLike] = None
    ) -> PluginResult:
        """Run one plugin. Never raises.

        Args:
            name: Plugin name.
            target_path: Path to analyse. Defaults to the context target.

        Returns:
            The plugin's result with processing_time_ms added, or a failure
            result for unknown/disabled plugins and raised exceptions.
        """
        plugin = self._plugins.get(name)
        if plugin is None:
            return PluginResult.failure(str(NotFoundError(name)))

        if not plugin.enabled:
            return PluginResult.failure(str(DisabledError(name)))

        target = Path(target_path) if target_path is not None else self._context.effective_target

        try:
            if not plugin.should_process(target):
                return PluginResult(
                    success=True,
                    data=None,
                    warnings=[f"Plugin {name} skipped processing {target}"],
                )

            start_time = time.perf_counter()
            result = await plugin.extract(target)
            elapsed_ms = round((time.perf_counter() - start_time) * 1000, 3)
        except Exception as e:
            logger.error(f"Plugin {name} failed: {e}")
            return PluginResult.failure(f"Plugin {name} failed: {e}")

        result.metadata = {**result.metadata, "processing_time_ms": elapsed_ms}
        return result

    async def execute_all(
        self, target_path: Optional[PathLike] = None
    ) -> Dict[str, PluginResult]:
        """Run every enabled plugin in execution order.

        A failed plugin marked critical (options["critical"] is True) stops
        the run; other failures are recorded and the run continues.

        Returns:
            Results keyed by plugin name, in execution order.
        """
        results: Dict[str, PluginResult] = {}

        for name in self._execution_order:
            plugin = self._plugins[name]
            if not plugin.enabled:
                continue

            result = await self.execute_plugin(name, target_path)
            results[name] = result

            if not result.success and plugin.is_critical:
                logger.warning(f"Critical plugin {name} failed, stopping execution")
                break

        return results

    def update_context(
        self, project_path: PathLike, target_path: Optional[PathLike] = None
    ) -> None:
        """Rebind the context to a new project path and re-init every plugin.

        Parse results cached for the previous run are dropped; other cache
        entries are kept.
        """
        self._context = self._context.rebind(project_path, target_path)
        self.start_run()
        for plugin in self._plugins.values():
            plugin.init(self._context)

    def start_run(self) -> None:
        """Forget parse results of earlier runs so edited files are re-parsed."""
        self._context.parser.forget_parses(self._context.cache)

    def get_stats(self) -> Dict[str, Any]:
        return {
            "total_plugins": len(self._plugins),
            "enabled_plugins": sum(1 for p in self._plugins.values() if p.enabled),
            "execution_order": list(self._execution_order),
        }
