# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Exception taxonomy for the extraction engine.

Registration-time errors (ValidationError, CircularDependencyError) are raised
to the caller. Everything else is converted into a failed PluginResult at the
manager or pipeline boundary and never escapes as an uncaught fault.
"""

from typing import Optional


class NextScopeError(Exception):
    """Base class for all engine errors."""

    pass


class ValidationError(NextScopeError):
    """Raised when a plugin fails its self-check at registration."""

    def __init__(self, plugin_name: str, reason: str = "failed validation") -> None:
        self.plugin_name = plugin_name
        self.reason = reason
        super().__init__(f"Plugin {plugin_name} {reason}")


class CircularDependencyError(NextScopeError):
    """Raised when registering a plugin would create a dependency cycle."""

    def __init__(self, plugin_name: str) -> None:
        self.plugin_name = plugin_name
        super().__init__(f"Circular dependency detected involving plugin: {plugin_name}")


class NotFoundError(NextScopeError):
    """Unknown plugin or validator name."""

    def __init__(self, name: str, what: str = "Plugin") -> None:
        self.name = name
        super().__init__(f"{what} {name} not found")


class DisabledError(NextScopeError):
    """Plugin exists but is disabled."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Plugin {name} is disabled")


class ProcessingError(NextScopeError):
    """A single file failed to process. The file is dropped from results."""

    def __init__(self, file_path: str, cause: Optional[BaseException] = None) -> None:
        self.file_path = file_path
        self.cause = cause
        message = f"Failed to process {file_path}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)


class ExtractionError(NextScopeError):
    """A pipeline stage (discover, filter, process, aggregate) failed."""

    def __init__(self, stage: str, message: str) -> None:
        self.stage = stage
        super().__init__(f"{stage} stage failed: {message}")
