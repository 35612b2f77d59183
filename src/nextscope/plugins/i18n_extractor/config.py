# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Settings for the i18n extractor."""

import re
from dataclasses import dataclass, field
from typing import List, Pattern

DEFAULT_TRANSLATION_FUNCTIONS = ["t", "translate", "$t", "i18n.t", "i18next.t"]

# Directory names whose children are locale files or per-language directories
LOCALE_DIRECTORIES = ("locales", "i18n", "lang", "translations")

# Strings matching any of these are technical, never translation candidates
TECHNICAL_STRING_PATTERNS: List[Pattern[str]] = [
    re.compile(r"(https?|ftp)://|^mailto:"),  # URLs
    re.compile(r"^(rgba?|hsla?)\(", re.IGNORECASE),  # CSS colors
    re.compile(r"^#[0-9a-fA-F]{3,8}$"),
    re.compile(r"^-?\d+(\.\d+)?(px|em|rem|%|vh|vw)$"),  # CSS sizes
    re.compile(r"\.(js|jsx|ts|tsx|css|scss|json|html|svg|png|jpe?g)$"),  # File names
    re.compile(r"^(data|aria)-"),
    re.compile(r"^(console\.|localStorage|sessionStorage)"),
    re.compile(r"^(NODE_ENV|REACT_APP_|NEXT_PUBLIC_)"),
    re.compile(r"^[A-Z0-9_]+$"),  # Constants
    re.compile(r"^\d+$"),
    re.compile(r"^(?=.*\d)[a-f0-9]{6,}$", re.IGNORECASE),  # Hashes
]


@dataclass
class I18nSettings:
    """What the i18n extractor looks for."""

    translation_functions: List[str] = field(
        default_factory=lambda: list(DEFAULT_TRANSLATION_FUNCTIONS)
    )
    min_string_length: int = 3
    analyze_jsx_text: bool = True
    analyze_string_literals: bool = True
    locale_file_patterns: List[str] = field(
        default_factory=lambda: [f"**/{d}/**/*.json" for d in LOCALE_DIRECTORIES]
    )
    locale_exclude_patterns: List[str] = field(
        default_factory=lambda: ["**/node_modules/**", "**/dist/**", "**/build/**"]
    )

    def is_candidate_text(self, text: str) -> bool:
        """Pre-filter applied before validator classification."""
        if len(text) < self.min_string_length or not text.strip():
            return False
        return not any(pattern.search(text) for pattern in TECHNICAL_STRING_PATTERNS)
