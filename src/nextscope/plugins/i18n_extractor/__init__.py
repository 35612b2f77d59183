# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""I18n extractor: untranslated strings, translation usage and locale files.

Components:
- I18nAnalyzer: per-file syntax-tree analysis
- analyze_translation_files: locale key consistency across languages
- build_summary: project-level reduction
- I18nFormatter: text/markdown rendering
"""

from nextscope.plugins.i18n_extractor.ast_analyzer import I18nAnalyzer
from nextscope.plugins.i18n_extractor.config import I18nSettings
from nextscope.plugins.i18n_extractor.formatter import I18nFormatter
from nextscope.plugins.i18n_extractor.models import (
    I18nFileResult,
    I18nIssue,
    I18nSummary,
    IssueType,
    StringCandidate,
    TranslationUsage,
)
from nextscope.plugins.i18n_extractor.plugin import I18nExtractor
from nextscope.plugins.i18n_extractor.result_processor import build_summary
from nextscope.plugins.i18n_extractor.translation_files import analyze_translation_files

__all__ = [
    "I18nAnalyzer",
    "I18nExtractor",
    "I18nFileResult",
    "I18nFormatter",
    "I18nIssue",
    "I18nSettings",
    "I18nSummary",
    "IssueType",
    "StringCandidate",
    "TranslationUsage",
    "analyze_translation_files",
    "build_summary",
]
