# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Locale file discovery and key-consistency analysis.

Recognized layouts, under any of the LOCALE_DIRECTORIES:
- locales/en.json (language from the file name)
- locales/en/common.json (language from the directory; all files merged)

Nested JSON objects are flattened into dotted keys ("auth.login.title").
"""

import json
import logging
import re
from pathlib import PurePosixPath
from typing import Any, Dict, List, Optional, Set

from nextscope.filesystem import FileSystem
from nextscope.plugins.i18n_extractor.config import LOCALE_DIRECTORIES, I18nSettings
from nextscope.plugins.i18n_extractor.models import LocaleInfo, TranslationFileAnalysis

logger = logging.getLogger(__name__)

LANGUAGE_CODE_RE = re.compile(r"^[a-z]{2}(-[A-Z]{2})?$")


def flatten_keys(data: Any, prefix: str = "") -> List[str]:
    """Dotted leaf keys of a nested JSON object."""
    if not isinstance(data, dict):
        return [prefix] if prefix else []
    keys: List[str] = []
    for name, value in data.items():
        path = f"{prefix}.{name}" if prefix else str(name)
        if isinstance(value, dict) and value:
            keys.extend(flatten_keys(value, path))
        else:
            keys.append(path)
    return keys


def language_of(relative_path: str) -> Optional[str]:
    """Language code of a locale file, or None if the path is not one."""
    parts = PurePosixPath(relative_path).parts
    for index, part in enumerate(parts[:-1]):
        if part not in LOCALE_DIRECTORIES:
            continue
        following = parts[index + 1]
        if index + 1 < len(parts) - 1 and LANGUAGE_CODE_RE.match(following):
            return following
        stem = PurePosixPath(parts[-1]).stem
        if LANGUAGE_CODE_RE.match(stem):
            return stem
    return None


async def analyze_translation_files(
    fs: FileSystem, project_root: str, settings: I18nSettings
) -> TranslationFileAnalysis:
    """Find locale files under project_root and compare their keys across languages."""
    found: Dict[str, None] = {}
    for pattern in settings.locale_file_patterns:
        for path in fs.expand_glob(pattern, project_root, settings.locale_exclude_patterns):
            found.setdefault(path, None)

    keys_by_language: Dict[str, Set[str]] = {}
    files_by_language: Dict[str, List[str]] = {}

    for path in found:
        relative = fs.relative_path(project_root, path)
        language = language_of(relative)
        if language is None:
            logger.debug(f"Not a locale file: {relative}")
            continue

        content = await fs.read_file(path)
        if content is None:
            continue
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            logger.warning(f"⚠️ Invalid JSON in locale file {relative}: {e}")
            continue

        keys_by_language.setdefault(language, set()).update(flatten_keys(data))
        files_by_language.setdefault(language, []).append(relative)

    if not keys_by_language:
        return TranslationFileAnalysis()

    all_keys: Set[str] = set().union(*keys_by_language.values())
    consistent = set.intersection(*keys_by_language.values())

    locales = [
        LocaleInfo(
            language=language,
            files=sorted(files_by_language[language]),
            key_count=len(keys_by_language[language]),
            missing_keys=sorted(all_keys - keys_by_language[language]),
        )
        for language in sorted(keys_by_language)
    ]

    logger.info(
        f"Analyzed locale files for {len(locales)} languages: "
        f"{len(consistent)} consistent keys, {len(all_keys - consistent)} inconsistent"
    )
    return TranslationFileAnalysis(
        locales=locales,
        consistent_keys=sorted(consistent),
        inconsistent_keys=sorted(all_keys - consistent),
    )
