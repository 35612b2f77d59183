# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""File system primitives used by the extraction pipeline.

Provides existence/size/directory checks, asynchronous file reading with
UTF-8/latin-1 fallback, and glob expansion with:
- `**` recursive segments (zero or more directories)
- `{a,b}` brace alternatives
- ignore patterns in the same syntax
- dot-files skipped unless the pattern segment itself starts with "."

Results are absolute paths in a deterministic (sorted walk) order.
"""

import asyncio
import fnmatch
import logging
import os
import re
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

logger = logging.getLogger(__name__)

_BRACE_RE = re.compile(r"\{([^{}]*)\}")


def expand_braces(pattern: str) -> List[str]:
    """Expand `{a,b}` alternatives: "*.{ts,tsx}" -> ["*.ts", "*.tsx"]."""
    match = _BRACE_RE.search(pattern)
    if match is None:
        return [pattern]

    expanded: List[str] = []
    head, tail = pattern[: match.start()], pattern[match.end() :]
    for option in match.group(1).split(","):
        expanded.extend(expand_braces(f"{head}{option}{tail}"))
    return expanded


def _segment_matches(name: str, pattern: str) -> bool:
    if name.startswith(".") and not pattern.startswith("."):
        return False
    return fnmatch.fnmatchcase(name, pattern)


def _match_parts(path_parts: List[str], pattern_parts: List[str], pi: int, pp: int) -> bool:
    """Recursively match path parts against pattern parts.

    Args:
        path_parts: List of path components.
        pattern_parts: List of pattern components.
        pi: Current index in path_parts.
        pp: Current index in pattern_parts.

    Returns:
        True if remaining path matches remaining pattern.
    """
    while pi < len(path_parts) and pp < len(pattern_parts):
        if pattern_parts[pp] == "**":
            # ** can match zero or more non-hidden path segments
            for skip in range(len(path_parts) - pi + 1):
                if skip and path_parts[pi + skip - 1].startswith("."):
                    return False
                if _match_parts(path_parts, pattern_parts, pi + skip, pp + 1):
                    return True
            return False
        elif _segment_matches(path_parts[pi], pattern_parts[pp]):
            pi += 1
            pp += 1
        else:
            return False

    # Handle trailing **
    while pp < len(pattern_parts) and pattern_parts[pp] == "**":
        pp += 1

    return pi == len(path_parts) and pp == len(pattern_parts)


def glob_match(relative_path: str, pattern: str) -> bool:
    """Match a relative, forward-slash path against a glob pattern."""
    path_parts = [p for p in relative_path.replace("\\", "/").split("/") if p]
    for expanded in expand_braces(pattern.replace("\\", "/")):
        pattern_parts = [p for p in expanded.split("/") if p and p != "."]
        if _match_parts(path_parts, pattern_parts, 0, 0):
            return True
    return False


class FileSystem:
    """File system primitive consumed by plugins and the parser.

    All paths returned are absolute strings.
    """

    def exists(self, path: str) -> bool:
        return os.path.exists(path)

    def is_directory(self, path: str) -> bool:
        return os.path.isdir(path)

    def list_dir(self, path: str) -> List[str]:
        """List entry names in a directory, sorted. Empty list on error."""
        try:
            return sorted(os.listdir(path))
        except OSError as e:
            logger.warning(f"Failed to read directory {path}: {e}")
            return []

    def file_size(self, path: str) -> int:
        """Size in bytes, or 0 if the file cannot be stat'ed."""
        try:
            return os.path.getsize(path)
        except OSError:
            return 0

    def relative_path(self, root: str, path: str) -> str:
        try:
            return Path(path).resolve().relative_to(Path(root).resolve()).as_posix()
        except ValueError:
            return path

    async def read_file(self, path: str) -> Optional[str]:
        """Read file content without blocking the event loop.

        Returns:
            File content, or None if the file cannot be read.
        """
        return await asyncio.to_thread(self.read_file_sync, path)

    def read_file_sync(self, path: str) -> Optional[str]:
        """Read with UTF-8 first and latin-1 as fallback.

        Returns:
            File content, or None if the file cannot be read.
        """
        try:
            try:
                with open(path, encoding="utf-8") as f:
                    return f.read()
            except UnicodeDecodeError:
                logger.warning(f"File {path} is not UTF-8, using latin-1 fallback encoding")
                with open(path, encoding="latin-1") as f:
                    return f.read()
        except FileNotFoundError:
            logger.warning(f"File not found: {path}")
            return None
        except PermissionError:
            logger.warning(f"Permission denied reading file: {path}")
            return None
        except OSError as e:
            logger.warning(f"Failed to read file {path}: {e}")
            return None

    def expand_glob(
        self,
        pattern: str,
        root: str,
        ignore: Optional[Sequence[str]] = None,
    ) -> List[str]:
        """Expand pattern against root.

        Args:
            pattern: Glob pattern relative to root (e.g. "**/*.{ts,tsx}").
            root: Directory to search.
            ignore: Glob patterns (relative to root) whose matches are excluded.
                Patterns ending in "/**" also prune whole directories.

        Returns:
            Absolute paths of matching files, in sorted walk order.
        """
        ignore = list(ignore or [])
        root_path = Path(root).resolve()
        if not root_path.is_dir():
            return []

        pruning = [p[: -len("/**")] for p in ignore if p.endswith("/**")]
        matches: List[str] = []

        for dirpath, dirnames, filenames in os.walk(root_path):
            rel_dir = Path(dirpath).relative_to(root_path).as_posix()
            rel_dir = "" if rel_dir == "." else rel_dir

            dirnames[:] = sorted(
                d for d in dirnames if not self._is_pruned(_join(rel_dir, d), pruning)
            )

            for filename in sorted(filenames):
                rel_file = _join(rel_dir, filename)
                if not glob_match(rel_file, pattern):
                    continue
                if any(glob_match(rel_file, ignored) for ignored in ignore):
                    continue
                matches.append(str(root_path / rel_file))

        return matches

    @staticmethod
    def _is_pruned(rel_dir: str, pruning: Iterable[str]) -> bool:
        return any(glob_match(rel_dir, prefix) for prefix in pruning)


def _join(rel_dir: str, name: str) -> str:
    return f"{rel_dir}/{name}" if rel_dir else name
