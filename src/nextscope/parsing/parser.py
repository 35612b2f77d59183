# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Source parser for JavaScript/TypeScript files.

This module turns file content into tree-sitter syntax trees with:
- File reading through the FileSystem primitive (UTF-8/latin-1 fallback)
- Dialect selection: TypeScript always, JSX for .tsx/.jsx/.js
- Error recovery: read or syntax failures log a warning and yield None
- Parse-result memoization through the shared KeyedCache

Empty or whitespace-only files are not an error: they yield None silently.
"""

import logging
from pathlib import Path
from typing import Dict, Optional

import tree_sitter
import tree_sitter_typescript

from nextscope.cache import KeyedCache
from nextscope.filesystem import FileSystem
from nextscope.models import Dialect, ParsedArtifact

logger = logging.getLogger(__name__)

JSX_EXTENSIONS = frozenset({".tsx", ".jsx", ".js"})

CACHE_KEY_PREFIX = "ast:"


def select_dialect(file_path: str) -> Dialect:
    """Pick the grammar for a file from its extension."""
    if Path(file_path).suffix.lower() in JSX_EXTENSIONS:
        return Dialect.TSX
    return Dialect.TYPESCRIPT


def cache_key(file_path: str) -> str:
    return f"{CACHE_KEY_PREFIX}{file_path}"


class SourceParser:
    """Parses files into ParsedArtifact objects.

    One tree_sitter.Parser is kept per dialect. `parse_count` counts the
    number of times the underlying parser actually ran, which makes cache
    behaviour observable.

    Usage:
        parser = SourceParser(FileSystem())
        artifact = await parser.parse("/project/src/App.tsx")
        artifact = await parser.parse_with_cache("/project/src/App.tsx", cache)
    """

    def __init__(self, fs: Optional[FileSystem] = None) -> None:
        self.fs = fs or FileSystem()
        self.parse_count = 0
        self._parsers: Dict[Dialect, tree_sitter.Parser] = {}

    def _get_parser(self, dialect: Dialect) -> tree_sitter.Parser:
        parser = self._parsers.get(dialect)
        if parser is None:
            if dialect is Dialect.TSX:
                language = tree_sitter.Language(tree_sitter_typescript.language_tsx())
            else:
                language = tree_sitter.Language(tree_sitter_typescript.language_typescript())
            parser = tree_sitter.Parser(language)
            self._parsers[dialect] = parser
        return parser

    def parse_source(self, content: str, file_path: str) -> Optional[ParsedArtifact]:
        """Parse already-loaded source text.

        Args:
            content: Source text.
            file_path: Originating path, used for dialect selection and reporting.

        Returns:
            ParsedArtifact, or None if content is blank or has syntax errors.
        """
        if not content.strip():
            return None

        dialect = select_dialect(file_path)
        try:
            self.parse_count += 1
            tree = self._get_parser(dialect).parse(content.encode("utf-8"))
        except (ValueError, RuntimeError) as e:
            logger.warning(f"Failed to parse {file_path}: {e}")
            return None

        if tree.root_node.has_error:
            line = _first_error_line(tree.root_node)
            logger.warning(f"⚠️ Skipping {file_path}: Syntax error near line {line}")
            return None

        return ParsedArtifact(tree=tree, content=content, file_path=file_path, dialect=dialect)

    async def parse(self, file_path: str) -> Optional[ParsedArtifact]:
        """Read and parse a file.

        Returns:
            ParsedArtifact, or None if the file is unreadable, blank or invalid.
        """
        content = await self.fs.read_file(file_path)
        if content is None:
            return None
        return self.parse_source(content, file_path)

    async def parse_with_cache(
        self, file_path: str, cache: KeyedCache
    ) -> Optional[ParsedArtifact]:
        """Parse a file, reusing an artifact stored under "ast:<path>".

        Only successful parses are stored, so a file that failed to parse is
        retried on the next call.
        """
        key = cache_key(file_path)
        cached = cache.get(key)
        if cached is not None:
            logger.debug(f"Cache hit for {file_path}")
            return cached

        artifact = await self.parse(file_path)
        if artifact is not None:
            cache.set(key, artifact)
        return artifact

    def forget_parses(self, cache: KeyedCache) -> int:
        """Drop every parse result stored in cache, so edited files are re-read."""
        removed = cache.delete_prefix(CACHE_KEY_PREFIX)
        if removed:
            logger.debug(f"Dropped {removed} cached parse results")
        return removed


def _first_error_line(root: tree_sitter.Node) -> int:
    """1-based line of the first ERROR or missing node, 0 if none is found."""
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            return node.start_point[0] + 1
        if node.has_error:
            stack.extend(reversed(node.children))
    return 0
