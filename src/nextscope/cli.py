# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Command-line runner for the built-in extractors.

Usage:
    nextscope-extract PROJECT [PLUGIN|all] [--format text|markdown|json]
                      [--target PATH] [--config FILE] [--verbose]
    nextscope-extract --list

Exit status is 0 when every executed plugin succeeded, 1 otherwise.
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

from nextscope.config import Config, ConfigurationError
from nextscope.context import ExecutionContext
from nextscope.errors import NotFoundError
from nextscope.logging_setup import create_logger
from nextscope.manager import PluginManager
from nextscope.models import PluginResult
from nextscope.plugins.base import OutputFormat
from nextscope.plugins.registry import create_plugin, get_available_plugins, register_all_plugins

logger = logging.getLogger(__name__)

ALL_PLUGINS = "all"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nextscope-extract",
        description="Run NextScope extractors over a React/Next.js project",
    )
    parser.add_argument("project", type=Path, nargs="?", help="Project root directory")
    parser.add_argument(
        "plugin",
        nargs="?",
        default=ALL_PLUGINS,
        help="Extractor to run, or 'all' (default)",
    )
    parser.add_argument(
        "--format",
        choices=list(OutputFormat.ALL),
        default=OutputFormat.TEXT,
        help="Output format. Default: text",
    )
    parser.add_argument("--target", type=Path, default=None, help="File or directory to analyse")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Configuration file. Default: <project>/.nextscope.yml",
    )
    parser.add_argument("--list", action="store_true", help="List available extractors and exit")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser


def render(manager: PluginManager, results: Dict[str, PluginResult], fmt: str) -> str:
    """Render results for stdout: one JSON document, or one section per plugin."""
    if fmt == OutputFormat.JSON:
        return json.dumps({name: result.to_dict() for name, result in results.items()}, indent=2)

    sections: List[str] = []
    for name, result in results.items():
        if not result.success:
            sections.append(f"{name}: FAILED\n" + "\n".join(f"  {e}" for e in result.errors))
            continue
        plugin = manager.get_plugin(name)
        if result.data is None or plugin is None:
            sections.append(f"{name}: no output\n" + "\n".join(f"  {w}" for w in result.warnings))
            continue
        sections.append(plugin.format_data(result.data, fmt))
    return "\n\n".join(sections)


async def run(manager: PluginManager, plugin: str) -> Dict[str, PluginResult]:
    """Run one plugin, or all of them, against the context target."""
    if plugin == ALL_PLUGINS:
        return await manager.execute_all()
    return {plugin: await manager.execute_plugin(plugin)}


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.list:
        for info in get_available_plugins():
            print(f"{info['name']} {info['version']}: {info['description']}")
        return 0

    if args.project is None:
        parser.error("the following arguments are required: project")

    project = args.project.resolve()
    if not project.is_dir():
        parser.error(f"project directory not found: {args.project}")

    try:
        config = (
            Config(args.config, must_exist=True)
            if args.config is not None
            else Config.for_project(project)
        )
    except ConfigurationError as e:
        parser.error(str(e))

    level = logging.DEBUG if args.verbose else config.log_level
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    context = ExecutionContext.create(
        project,
        target_path=args.target,
        logger=create_logger(level=level),
        cache_ttl_seconds=config.cache_ttl_seconds,
    )
    manager = PluginManager(context=context)

    if args.plugin == ALL_PLUGINS:
        register_all_plugins(manager, config)
    else:
        try:
            manager.register(create_plugin(args.plugin, settings=config))
        except NotFoundError as e:
            parser.error(str(e))

    results = asyncio.run(run(manager, args.plugin))
    print(render(manager, results, args.format))
    return 0 if all(result.success for result in results.values()) else 1


if __name__ == "__main__":
    sys.exit(main())
