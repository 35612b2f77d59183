# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Reduction of per-file i18n results into the project summary.

All lists in the summary are sorted deterministically, so the summary does
not depend on batch size or on the order files finished processing.
"""

import logging
from collections import Counter
from typing import Any, Dict, List, Set

from nextscope.plugins.i18n_extractor.models import (
    ActionPriority,
    I18nFileResult,
    I18nSummary,
    RecommendedAction,
    TranslationFileAnalysis,
)

logger = logging.getLogger(__name__)

MOST_COMMON_LIMIT = 20


def files_coverage(results: List[I18nFileResult]) -> Dict[str, Any]:
    """Count files by translation state.

    - with_translations: uses translation functions, no hardcoded strings
    - without_translations: hardcoded strings, no translation calls
    - partially_translated: both
    Files with neither are not counted in any bucket.
    """
    with_translations = without_translations = partial = 0
    for result in results:
        translated = bool(result.usages)
        hardcoded = bool(result.translatable_strings)
        if translated and not hardcoded:
            with_translations += 1
        elif hardcoded and not translated:
            without_translations += 1
        elif translated and hardcoded:
            partial += 1

    total = len(results)
    percent = round((with_translations + partial) / total * 100, 1) if total else 0.0
    return {
        "with_translations": with_translations,
        "without_translations": without_translations,
        "partially_translated": partial,
        "coverage_percent": percent,
    }


def most_common_strings(
    results: List[I18nFileResult], limit: int = MOST_COMMON_LIMIT
) -> List[Dict[str, Any]]:
    counts: Counter = Counter()
    files: Dict[str, Set[str]] = {}
    for result in results:
        for candidate in result.translatable_strings:
            counts[candidate.text] += 1
            files.setdefault(candidate.text, set()).add(result.file_path)

    ordered = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
    return [
        {"text": text, "count": count, "files": sorted(files[text])}
        for text, count in ordered[:limit]
    ]


def translation_keys(
    results: List[I18nFileResult], analysis: TranslationFileAnalysis
) -> Dict[str, Any]:
    """Static keys used in code, and locale keys no code uses.

    Dynamic keys are counted in usage but cannot be matched against locale files.
    """
    counts: Counter = Counter()
    files: Dict[str, Set[str]] = {}
    for result in results:
        for usage in result.usages:
            if usage.is_dynamic:
                continue
            counts[usage.key] += 1
            files.setdefault(usage.key, set()).add(result.file_path)

    used = [
        {"key": key, "count": count, "files": sorted(files[key])}
        for key, count in sorted(counts.items(), key=lambda item: (-item[1], item[0]))
    ]
    locale_keys = set(analysis.consistent_keys) | set(analysis.inconsistent_keys)
    return {
        "total_keys": len(counts),
        "used_keys": used,
        "unused_keys": sorted(locale_keys - set(counts)),
    }


def missing_translations(
    results: List[I18nFileResult], analysis: TranslationFileAnalysis
) -> Dict[str, List[str]]:
    """Static keys used in code mapped to the languages that lack them."""
    if not analysis.locales:
        return {}

    used = {u.key for r in results for u in r.usages if not u.is_dynamic}
    missing: Dict[str, List[str]] = {}
    for key in sorted(used):
        languages = [locale.language for locale in analysis.locales if key in locale.missing_keys]
        if not languages and key not in analysis.consistent_keys:
            languages = list(analysis.languages)  # Used but absent from every locale file
        if languages:
            missing[key] = languages
    return missing


def recommended_actions(
    results: List[I18nFileResult], analysis: TranslationFileAnalysis
) -> List[RecommendedAction]:
    actions: List[RecommendedAction] = []

    with_strings = [r for r in results if r.translatable_strings]
    if with_strings:
        total = sum(len(r.translatable_strings) for r in with_strings)
        actions.append(
            RecommendedAction(
                priority=ActionPriority.HIGH,
                action="Add missing translations",
                description=f"{len(with_strings)} files contain {total} untranslated strings",
                affected_files=len(with_strings),
            )
        )

    without_i18n = [r for r in with_strings if not r.usages]
    if without_i18n:
        actions.append(
            RecommendedAction(
                priority=ActionPriority.MEDIUM,
                action="Implement i18n in untranslated files",
                description=f"{len(without_i18n)} files have no translation implementation",
                affected_files=len(without_i18n),
            )
        )

    if analysis.inconsistent_keys:
        actions.append(
            RecommendedAction(
                priority=ActionPriority.MEDIUM,
                action="Fix translation key consistency",
                description=(
                    f"{len(analysis.inconsistent_keys)} keys are missing in some language files"
                ),
                affected_files=sum(len(locale.files) for locale in analysis.locales),
            )
        )

    dynamic = [r for r in results if any(u.is_dynamic for u in r.usages)]
    if dynamic:
        count = sum(1 for r in dynamic for u in r.usages if u.is_dynamic)
        actions.append(
            RecommendedAction(
                priority=ActionPriority.LOW,
                action="Review dynamic translation keys",
                description=f"{count} dynamic keys found which are harder to track",
                affected_files=len(dynamic),
            )
        )

    return actions


def build_summary(
    results: List[I18nFileResult], analysis: TranslationFileAnalysis
) -> I18nSummary:
    results = sorted(results, key=lambda r: r.file_path)
    translatable = [s for r in results for s in r.translatable_strings]

    summary = I18nSummary(
        total_files=len(results),
        total_candidates=sum(len(r.strings) for r in results),
        total_untranslated_strings=len(translatable),
        total_translation_usage=sum(len(r.usages) for r in results),
        total_potential_issues=sum(len(r.issues) for r in results),
        files_coverage=files_coverage(results),
        strings_by_kind=dict(sorted(Counter(s.kind for s in translatable).items())),
        most_common_strings=most_common_strings(results),
        translation_keys=translation_keys(results, analysis),
        missing_translations=missing_translations(results, analysis),
        recommended_actions=recommended_actions(results, analysis),
        translation_file_analysis=analysis,
    )
    logger.info(
        f"Analysis complete: {summary.total_untranslated_strings} untranslated strings, "
        f"{summary.total_translation_usage} translation calls"
    )
    return summary
