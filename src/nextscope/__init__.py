# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""NextScope: plugin-based static extraction for React/Next.js projects."""

from .cache import KeyedCache
from .config import Config, ConfigurationError
from .context import ExecutionContext
from .errors import (
    CircularDependencyError,
    DisabledError,
    ExtractionError,
    NextScopeError,
    NotFoundError,
    ProcessingError,
    ValidationError,
)
from .filesystem import FileSystem
from .manager import PluginManager, compute_execution_order
from .models import PluginConfig, PluginMetadata, PluginResult
from .parsing import SourceParser
from .plugins.base import BasePlugin, Formatter, OutputFormat
from .plugins.component_extractor import ComponentExtractor
from .plugins.extractor import BaseExtractor, ExtractorConfig
from .plugins.hook_extractor import HookExtractor
from .plugins.i18n_extractor import I18nExtractor
from .plugins.registry import create_plugin, get_available_plugins, register_all_plugins
from .validators import ValidationInput, ValidationOutcome, ValidatorRegistry

__version__ = "2.0.0"

__all__ = [
    "BaseExtractor",
    "BasePlugin",
    "CircularDependencyError",
    "ComponentExtractor",
    "Config",
    "ConfigurationError",
    "DisabledError",
    "ExecutionContext",
    "ExtractionError",
    "ExtractorConfig",
    "FileSystem",
    "Formatter",
    "HookExtractor",
    "I18nExtractor",
    "KeyedCache",
    "NextScopeError",
    "NotFoundError",
    "OutputFormat",
    "PluginConfig",
    "PluginManager",
    "PluginMetadata",
    "PluginResult",
    "ProcessingError",
    "SourceParser",
    "ValidationError",
    "ValidationInput",
    "ValidationOutcome",
    "ValidatorRegistry",
    "compute_execution_order",
    "create_plugin",
    "get_available_plugins",
    "register_all_plugins",
]

# Conditional import for MCP server (requires Python 3.10+ and mcp package)
try:
    from .mcp_server import NextScopeMCPServer

    __all__.append("NextScopeMCPServer")
except ImportError:
    # MCP package not available
    pass
