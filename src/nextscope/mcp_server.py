# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""MCP Server Protocol Layer for NextScope.

Exposes the built-in extractors as MCP tools. The protocol layer holds no
extraction logic: every tool delegates to the PluginManager and the
validator registry, and only shapes their results into JSON responses.
"""

import argparse
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from mcp.server.fastmcp import Context, FastMCP
from mcp.server.session import ServerSession

from nextscope.config import Config
from nextscope.context import ExecutionContext
from nextscope.logging_setup import setup_logging
from nextscope.manager import PluginManager
from nextscope.models import PluginResult
from nextscope.plugins.base import OutputFormat
from nextscope.plugins.registry import get_available_plugins, register_all_plugins
from nextscope.validators import ValidationInput, ValidatorRegistry

logger = logging.getLogger(__name__)

SERVER_NAME = "nextscope"


class NextScopeMCPServer:
    """MCP Protocol Layer for NextScope.

    Responsibilities:
    - Initialize the MCP server and register tools
    - Translate tool invocations into manager/registry calls
    - Format plugin results as tool responses
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        manager: Optional[PluginManager] = None,
        project_path: Optional[Path] = None,
    ):
        """Initialize MCP server.

        Args:
            config: Configuration object. If None, loads from the project root.
            manager: Plugin manager. If None, one is created with every
                built-in plugin registered.
            project_path: Default project root. If None, uses the current directory.
        """
        self.project_path = Path(project_path or Path.cwd()).resolve()

        if config is None:
            config = Config.for_project(self.project_path)
        self.config = config

        if manager is None:
            context = ExecutionContext.create(
                self.project_path,
                cache_ttl_seconds=config.cache_ttl_seconds,
                log_level=config.log_level,
            )
            manager = PluginManager(context=context)
            register_all_plugins(manager, config)
        self.manager = manager

        self.validators = ValidatorRegistry()

        self.mcp = FastMCP(name=SERVER_NAME)
        self._register_tools()

        logger.info("NextScopeMCPServer initialized")

    def _register_tools(self) -> None:
        """Register MCP tools with the server.

        Registers:
        - list_extractors: Available and registered plugins
        - run_extractor: Run one plugin on a project
        - run_all_extractors: Run every enabled plugin in dependency order
        - classify_string: Ask the validator registry about one string
        """

        @self.mcp.tool()
        async def list_extractors(ctx: Context[ServerSession, None]) -> Dict[str, Any]:
            """List the extractors this server can run.

            Returns:
                Dictionary with:
                - plugins: Metadata of every built-in extractor
                - execution_order: Order run_all_extractors uses
            """
            await ctx.info("Listing extractors")
            return self.list_extractors()

        @self.mcp.tool()
        async def run_extractor(
            name: str,
            ctx: Context[ServerSession, None],
            project_path: Optional[str] = None,
            target_path: Optional[str] = None,
            output_format: str = OutputFormat.JSON,
        ) -> Dict[str, Any]:
            """Run one extractor on a React/Next.js project.

            Args:
                name: Extractor name, e.g. "component-extractor"
                project_path: Project root. Defaults to the server's project
                target_path: File or directory inside the project to analyse
                output_format: "json" (structured data), "text" or "markdown"
                ctx: MCP context for logging and progress

            Returns:
                Dictionary with success, data (or rendered output), errors,
                warnings and metadata
            """
            await ctx.info(f"Running {name} on {project_path or self.project_path}")
            try:
                response = await self.run_extractor(name, project_path, target_path, output_format)
            except Exception as e:
                await ctx.error(f"Unexpected error running {name}: {e}")
                raise

            if not response["success"]:
                await ctx.warning(f"{name} failed: {'; '.join(response.get('errors', []))}")
            return response

        @self.mcp.tool()
        async def run_all_extractors(
            ctx: Context[ServerSession, None],
            project_path: Optional[str] = None,
        ) -> Dict[str, Any]:
            """Run every enabled extractor in dependency order.

            Args:
                project_path: Project root. Defaults to the server's project
                ctx: MCP context for logging and progress

            Returns:
                Results keyed by extractor name, in execution order
            """
            await ctx.info(f"Running all extractors on {project_path or self.project_path}")
            return await self.run_all_extractors(project_path)

        @self.mcp.tool()
        async def classify_string(
            text: str,
            kind: str,
            ctx: Context[ServerSession, None],
            attribute_name: Optional[str] = None,
            variable_name: Optional[str] = None,
            property_name: Optional[str] = None,
            function_name: Optional[str] = None,
        ) -> Dict[str, Any]:
            """Decide whether a string should be translated.

            Args:
                text: The string literal value
                kind: One of jsx-text, jsx-attribute, variable-declaration,
                    object-property, form-validation, component-prop, alert-message
                attribute_name: JSX attribute or component prop holding the string
                variable_name: Variable the string is assigned to
                property_name: Object key the string is stored under
                function_name: Function the string is passed to
                ctx: MCP context for logging and progress

            Returns:
                Dictionary with is_valid, validator, kind and reason
            """
            await ctx.debug(f"Classifying {kind} string")
            return self.classify_string(
                text,
                kind,
                {
                    "attribute_name": attribute_name,
                    "variable_name": variable_name,
                    "property_name": property_name,
                    "function_name": function_name,
                },
            )

        logger.info(
            "MCP tools registered: list_extractors, run_extractor, "
            "run_all_extractors, classify_string"
        )

    def list_extractors(self) -> Dict[str, Any]:
        return {
            "plugins": get_available_plugins(),
            "registered": [plugin.name for plugin in self.manager.get_all_plugins()],
            "execution_order": self.manager.execution_order,
        }

    async def run_extractor(
        self,
        name: str,
        project_path: Optional[str] = None,
        target_path: Optional[str] = None,
        output_format: str = OutputFormat.JSON,
    ) -> Dict[str, Any]:
        if output_format not in OutputFormat.ALL:
            return self._error_response(
                f"Unknown output format '{output_format}', expected one of {list(OutputFormat.ALL)}"
            )

        self._bind(project_path, target_path)
        self.manager.start_run()
        result = await self.manager.execute_plugin(name)
        return self._format_result(name, result, output_format)

    async def run_all_extractors(self, project_path: Optional[str] = None) -> Dict[str, Any]:
        self._bind(project_path, None)
        self.manager.start_run()
        results = await self.manager.execute_all()
        return {
            name: self._format_result(name, result, OutputFormat.JSON)
            for name, result in results.items()
        }

    def classify_string(self, text: str, kind: str, names: Dict[str, Any]) -> Dict[str, Any]:
        context = {key: value for key, value in names.items() if value is not None}
        return self.validators.validate(ValidationInput(text, kind, context)).to_dict()

    def _bind(self, project_path: Optional[str], target_path: Optional[str]) -> None:
        """Point the manager at the requested project (and optional target)."""
        project = Path(project_path).resolve() if project_path else self.project_path
        context = self.manager.context
        if context.project_path != project or context.target_path != (
            Path(target_path).resolve() if target_path else None
        ):
            self.manager.update_context(project, target_path)

    def _format_result(self, name: str, result: PluginResult, output_format: str) -> Dict[str, Any]:
        response = result.to_dict()
        if result.success and result.data is not None and output_format != OutputFormat.JSON:
            plugin = self.manager.get_plugin(name)
            if plugin is not None:
                response["data"] = plugin.format_data(result.data, output_format)
        return response

    @staticmethod
    def _error_response(message: str) -> Dict[str, Any]:
        return PluginResult.failure(message).to_dict()

    def run(self, transport: str = "stdio") -> None:
        """Run the MCP server.

        Args:
            transport: Transport type to use. Options:
                - "stdio": Standard input/output (default)
                - "streamable-http": HTTP transport
                - "sse": Server-sent events transport
        """
        logger.info(f"Starting MCP server with {transport} transport")
        self.mcp.run(transport=transport)  # type: ignore[arg-type]

    def shutdown(self) -> None:
        """Unregister every plugin and drop cached parse results."""
        logger.info("Shutting down MCP server")
        for plugin in self.manager.get_all_plugins():
            self.manager.unregister(plugin.name)
        self.manager.context.cache.clear()


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed arguments namespace.
    """
    parser = argparse.ArgumentParser(
        description="NextScope MCP Server: React/Next.js project extractors",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--project",
        type=Path,
        default=None,
        help="Default project root for tool calls. Default: current directory",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Configuration file. Default: <project>/.nextscope.yml",
    )
    parser.add_argument(
        "--log-dir",
        type=Path,
        default=None,
        help="Directory for structured log files. Default: .nextscope_logs",
    )
    parser.add_argument(
        "--transport",
        type=str,
        choices=["stdio", "streamable-http", "sse"],
        default="stdio",
        help="Transport type for MCP server. Default: stdio",
    )
    return parser.parse_args()


def main() -> None:
    """Main entry point for the MCP server."""
    args = parse_args()

    project = (args.project or Path.cwd()).resolve()
    if args.config is not None:
        config = Config(args.config, must_exist=True)
    else:
        config = Config.for_project(project)

    # stdout carries the MCP stdio protocol; logs go to the file and stderr only
    setup_logging(log_dir=args.log_dir, log_level=config.log_level)

    server = NextScopeMCPServer(config=config, project_path=project)
    logger.info(f"Starting MCP server for project {server.project_path}")
    server.run(transport=args.transport)


if __name__ == "__main__":
    main()
