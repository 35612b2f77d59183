# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""File-based extraction pipeline shared by all extractors.

BaseExtractor implements the four pipeline stages:
1. Discover: expand file patterns under the target (or take the single file)
2. Filter: should_process(), size limit, node_modules exclusion
3. Process: fixed-size batches, concurrent (asyncio.gather) or sequential
4. Aggregate: subclass reduction, wrapped in a PluginResult with run metadata

Error Recovery:
- A file whose processing raises or returns None is dropped and logged
- An exception in any stage becomes a failed PluginResult with elapsed time

Subclasses implement process_file() and aggregate_results().
"""

import asyncio
import time
from abc import abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Awaitable, Dict, Generic, List, Optional, TypeVar

from nextscope.errors import ExtractionError, NextScopeError, ProcessingError
from nextscope.models import FileCandidate, ParsedArtifact, PluginConfig, PluginResult
from nextscope.plugins.base import BasePlugin, Formatter

T = TypeVar("T")
S = TypeVar("S")

SOURCE_EXTENSIONS = frozenset({".js", ".jsx", ".ts", ".tsx"})

DISALLOWED_DIRECTORIES = ("node_modules",)


@dataclass
class ExtractorConfig:
    """File-selection and batching settings of an extractor."""

    file_patterns: List[str] = field(default_factory=lambda: ["**/*.{js,jsx,ts,tsx}"])
    exclude_patterns: List[str] = field(
        default_factory=lambda: ["**/node_modules/**", "**/.git/**", "**/dist/**", "**/build/**"]
    )
    max_file_size: int = 1024 * 1024  # bytes
    batch_size: int = 10
    parallel: bool = True
    include_node_modules: bool = False


class BaseExtractor(BasePlugin, Generic[T, S]):
    """Plugin that runs the discover/filter/process/aggregate pipeline.

    Type parameters:
        T: Per-file result produced by process_file().
        S: Summary produced by aggregate_results().
    """

    extensions = SOURCE_EXTENSIONS

    def __init__(
        self,
        config: Optional[PluginConfig] = None,
        extractor_config: Optional[ExtractorConfig] = None,
        formatter: Optional[Formatter] = None,
    ) -> None:
        super().__init__(config, formatter)
        if extractor_config is None:
            extractor_config = self.default_extractor_config()
        self.extractor_config = extractor_config

    @classmethod
    def default_extractor_config(cls) -> ExtractorConfig:
        """Settings used when none are passed to the constructor."""
        return ExtractorConfig()

    def validate(self) -> bool:
        settings = self.extractor_config
        if settings.batch_size <= 0 or settings.max_file_size <= 0:
            return False
        if not settings.file_patterns:
            return False
        return super().validate()

    def should_process(self, target_path: Path) -> bool:
        """Directories are always eligible; files only with a source extension."""
        path = Path(target_path)
        if path.is_dir():
            return True
        return path.suffix.lower() in self.extensions

    async def extract(self, target_path: Path) -> PluginResult:
        """Run the full pipeline over target_path."""
        start_time = time.perf_counter()
        target = str(target_path)

        try:
            self.logger.info(f"Starting extraction for: {target}")

            candidates = await self._run_stage("discover", self.discover_files(target))
            self.logger.info(f"Found {len(candidates)} files to process")

            files = await self._run_stage("filter", self.filter_files(candidates, target))
            self.logger.info(f"Processing {len(files)} files after filtering")

            batch_timings: List[float] = []
            results = await self._run_stage("process", self.process_files(files, batch_timings))

            summary = await self._run_stage("aggregate", self.aggregate_results(results, target))

            return self.create_success_result(
                summary,
                {
                    "files_processed": len(files),
                    "files_dropped": len(files) - len(results),
                    "skipped_files": len(candidates) - len(files),
                    "processing_time_ms": _elapsed_ms(start_time),
                    "batch_timings_ms": batch_timings,
                },
            )

        except Exception as e:
            self.logger.error(f"Extraction failed: {e}")
            return self.create_error_result(e, {"processing_time_ms": _elapsed_ms(start_time)})

    async def _run_stage(self, stage: str, awaitable: Awaitable[Any]) -> Any:
        try:
            return await awaitable
        except NextScopeError:
            raise
        except Exception as e:
            raise ExtractionError(stage, str(e)) from e

    async def discover_files(self, target_path: str) -> List[FileCandidate]:
        """Stage 1: files under target_path matching the file patterns.

        Duplicates across patterns are removed, keeping first-seen order.
        """
        fs = self.require_context().fs

        if fs.is_directory(target_path):
            seen: Dict[str, None] = {}
            for pattern in self.extractor_config.file_patterns:
                for found in fs.expand_glob(
                    pattern, target_path, self.extractor_config.exclude_patterns
                ):
                    seen.setdefault(found, None)
            paths = list(seen)
        elif fs.exists(target_path):
            paths = [str(Path(target_path).resolve())]
        else:
            paths = []

        return [
            FileCandidate(path=p, size=fs.file_size(p), extension=Path(p).suffix.lower())
            for p in paths
        ]

    async def filter_files(
        self, candidates: List[FileCandidate], target_path: Optional[str] = None
    ) -> List[str]:
        """Stage 2: drop ineligible, oversized and node_modules files.

        node_modules is looked for below target_path only (the context's
        project root when omitted), so a project that itself lives under a
        node_modules directory keeps its files.
        """
        filtered: List[str] = []
        if target_path is None and self.context is not None:
            target_path = str(self.context.project_path)
        root = Path(target_path).resolve() if target_path is not None else None
        max_size = self.extractor_config.max_file_size

        for candidate in candidates:
            if not self.should_process(Path(candidate.path)):
                continue

            if candidate.size > max_size:
                self.logger.warning(f"File too large: {candidate.path} ({candidate.size} bytes)")
                continue

            if not self.extractor_config.include_node_modules and _in_disallowed_directory(
                candidate.path, root
            ):
                continue

            filtered.append(candidate.path)

        return filtered

    async def process_files(
        self, files: List[str], batch_timings: Optional[List[float]] = None
    ) -> List[T]:
        """Stage 3: process files in fixed-size batches, keeping input order.

        In parallel mode every file of a batch runs concurrently and the next
        batch starts once all of them have settled.
        """
        results: List[T] = []
        batch_size = self.extractor_config.batch_size

        for index in range(0, len(files), batch_size):
            batch = files[index : index + batch_size]
            batch_start = time.perf_counter()

            if self.extractor_config.parallel:
                outcomes = await asyncio.gather(
                    *(self.process_file(file_path) for file_path in batch),
                    return_exceptions=True,
                )
            else:
                outcomes = []
                for file_path in batch:
                    try:
                        outcomes.append(await self.process_file(file_path))
                    except Exception as e:
                        outcomes.append(e)

            for file_path, outcome in zip(batch, outcomes):
                if isinstance(outcome, BaseException):
                    if not isinstance(outcome, Exception):
                        raise outcome
                    self.logger.warning(str(ProcessingError(file_path, outcome)))
                elif outcome is None:
                    self.logger.debug(f"No result for {file_path}")
                else:
                    results.append(outcome)

            batch_time = _elapsed_ms(batch_start)
            if batch_timings is not None:
                batch_timings.append(batch_time)
            self.logger.debug(f"Batch {index // batch_size + 1} completed in {batch_time}ms")

        return results

    @abstractmethod
    async def process_file(self, file_path: str) -> Optional[T]:
        """Extract facts from one file. None means nothing to report."""
        pass

    @abstractmethod
    async def aggregate_results(self, results: List[T], target_path: str) -> S:
        """Stage 4: reduce per-file results into the plugin summary."""
        pass

    async def parse_file_with_cache(self, file_path: str) -> Optional[ParsedArtifact]:
        context = self.require_context()
        return await context.parser.parse_with_cache(file_path, context.cache)

    def get_relative_path(self, file_path: str) -> str:
        context = self.require_context()
        return context.fs.relative_path(str(context.project_path), file_path)

    def create_success_result(
        self, data: S, metadata: Optional[Dict[str, Any]] = None
    ) -> PluginResult:
        return PluginResult(
            success=True,
            data=data,
            metadata={
                "plugin_name": self.name,
                "plugin_version": self.version,
                **(metadata or {}),
            },
        )

    def create_error_result(
        self, error: Any, metadata: Optional[Dict[str, Any]] = None
    ) -> PluginResult:
        return PluginResult(
            success=False,
            errors=[str(error)],
            metadata={
                "plugin_name": self.name,
                "plugin_version": self.version,
                **(metadata or {}),
            },
        )


def _in_disallowed_directory(file_path: str, root: Optional[Path] = None) -> bool:
    path = Path(file_path).resolve()
    parts = path.parts
    if root is not None:
        try:
            parts = path.relative_to(root).parts
        except ValueError:
            pass
    return any(part in DISALLOWED_DIRECTORIES for part in parts[:-1])


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 3)
