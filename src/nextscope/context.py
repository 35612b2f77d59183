# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Execution context shared by the manager and every plugin.

The context is an explicitly constructed value. It is handed to each plugin
in init() and replaced, never mutated, when the project path changes
(see ExecutionContext.rebind).
"""

import dataclasses
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from nextscope.cache import KeyedCache
from nextscope.filesystem import FileSystem
from nextscope.logging_setup import create_logger
from nextscope.parsing.parser import SourceParser

PathLike = Union[str, Path]


@dataclass(frozen=True)
class ExecutionContext:
    """Project root, target override and the shared collaborators.

    Attributes:
        project_path: Root of the analysed project.
        target_path: Optional override of the path plugins analyse.
        cache: Shared keyed cache (parse results and plugin memoization).
        logger: Logger instance created once; plugins use logger.getChild(name).
        fs: File system primitive.
        parser: Source parser.
    """

    project_path: Path
    target_path: Optional[Path]
    cache: KeyedCache
    logger: logging.Logger
    fs: FileSystem
    parser: SourceParser

    @classmethod
    def create(
        cls,
        project_path: PathLike,
        target_path: Optional[PathLike] = None,
        cache: Optional[KeyedCache] = None,
        logger: Optional[logging.Logger] = None,
        fs: Optional[FileSystem] = None,
        parser: Optional[SourceParser] = None,
        cache_ttl_seconds: float = KeyedCache.DEFAULT_TTL_SECONDS,
        log_level: Union[int, str] = logging.INFO,
    ) -> "ExecutionContext":
        """Build a context, creating any collaborator not supplied."""
        fs = fs or FileSystem()
        if cache is None:
            # KeyedCache defines __len__, so an empty cache is falsy
            cache = KeyedCache(default_ttl_seconds=cache_ttl_seconds)
        return cls(
            project_path=Path(project_path).resolve(),
            target_path=Path(target_path).resolve() if target_path is not None else None,
            cache=cache,
            logger=logger or create_logger(level=log_level),
            fs=fs,
            parser=parser or SourceParser(fs),
        )

    @property
    def effective_target(self) -> Path:
        """target_path when set, project_path otherwise."""
        return self.target_path if self.target_path is not None else self.project_path

    def rebind(
        self, project_path: PathLike, target_path: Optional[PathLike] = None
    ) -> "ExecutionContext":
        """Return a context for a new project path sharing cache, logger, fs and parser."""
        return dataclasses.replace(
            self,
            project_path=Path(project_path).resolve(),
            target_path=Path(target_path).resolve() if target_path is not None else None,
        )
