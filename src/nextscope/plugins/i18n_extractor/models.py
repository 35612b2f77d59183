# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Data models for the i18n extractor.

Per-file results (I18nFileResult) hold string candidates, translation
function usage and issues. The summary (I18nSummary) adds coverage,
locale-file consistency and recommended actions.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


class IssueType:
    """Kinds of per-file i18n issues.

    Design: Using class constants (not Enum) for JSON-compatible strings.
    """

    HARDCODED_STRING = "hardcoded-string"
    UNTRANSLATED_JSX = "untranslated-jsx"
    DYNAMIC_KEY = "dynamic-key"


class ActionPriority:
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass
class StringCandidate:
    """A string literal or JSX text found in source, with its classification."""

    text: str
    kind: str  # ValidationKind value the string was classified under
    line: int
    column: int
    context: str  # Short description of where it was found ("<button>", "const title")
    is_likely_translatable: bool
    validator: str
    reason: Optional[str] = None
    suggested_key: str = ""


@dataclass
class TranslationUsage:
    """A call to a translation function: t("key", "Default")."""

    function_name: str
    key: str
    line: int
    column: int
    default_value: Optional[str] = None
    is_dynamic: bool = False  # Key built at runtime (template substitution, concatenation, variable)


@dataclass
class I18nIssue:
    issue_type: str  # IssueType value
    description: str
    line: int
    suggestion: str


@dataclass
class I18nFileResult:
    file_path: str  # Relative to the project root
    strings: List[StringCandidate] = field(default_factory=list)
    usages: List[TranslationUsage] = field(default_factory=list)
    issues: List[I18nIssue] = field(default_factory=list)

    @property
    def translatable_strings(self) -> List[StringCandidate]:
        return [s for s in self.strings if s.is_likely_translatable]


@dataclass
class LocaleInfo:
    """Keys available for one language across its locale files."""

    language: str
    files: List[str]  # Relative paths
    key_count: int
    missing_keys: List[str] = field(default_factory=list)


@dataclass
class TranslationFileAnalysis:
    locales: List[LocaleInfo] = field(default_factory=list)
    consistent_keys: List[str] = field(default_factory=list)  # Present in every language
    inconsistent_keys: List[str] = field(default_factory=list)  # Missing from at least one

    @property
    def languages(self) -> List[str]:
        return [locale.language for locale in self.locales]


@dataclass
class RecommendedAction:
    priority: str  # ActionPriority value
    action: str
    description: str
    affected_files: int


@dataclass
class I18nSummary:
    total_files: int
    total_candidates: int
    total_untranslated_strings: int
    total_translation_usage: int
    total_potential_issues: int
    files_coverage: Dict[str, Any]
    strings_by_kind: Dict[str, int]
    most_common_strings: List[Dict[str, Any]]
    translation_keys: Dict[str, Any]
    missing_translations: Dict[str, List[str]]  # Key used in code -> languages lacking it
    recommended_actions: List[RecommendedAction]
    translation_file_analysis: TranslationFileAnalysis
