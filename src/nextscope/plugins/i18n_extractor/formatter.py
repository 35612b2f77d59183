# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Text and Markdown rendering of an I18nSummary."""

import json
from pathlib import PurePosixPath
from typing import List

from nextscope.models import to_jsonable
from nextscope.plugins.base import OutputFormat
from nextscope.plugins.i18n_extractor.models import I18nSummary

SHOWN_STRINGS = 10
SHOWN_KEYS = 5


def _short(path: str) -> str:
    return PurePosixPath(path).name


def _file_list(files: List[str], limit: int) -> str:
    if len(files) <= limit:
        return ", ".join(_short(f) for f in files)
    return ", ".join(_short(f) for f in files[:2]) + f" and {len(files) - 2} more"


class I18nFormatter:
    """Formatter for I18nSummary (satisfies plugins.base.Formatter)."""

    def format(self, data: I18nSummary, fmt: str) -> str:
        if fmt == OutputFormat.MARKDOWN:
            return self.format_markdown(data)
        if fmt == OutputFormat.JSON:
            return json.dumps(to_jsonable(data), indent=2)
        return self.format_text(data)

    def format_text(self, data: I18nSummary) -> str:
        coverage = data.files_coverage
        lines = [
            "I18n Analysis Results",
            "=" * 21,
            "",
            "Summary:",
            f"  Total Files Analyzed: {data.total_files}",
            f"  Total Untranslated Strings: {data.total_untranslated_strings}",
            f"  Total Translation Usage: {data.total_translation_usage}",
            f"  Total Potential Issues: {data.total_potential_issues}",
            "",
            "Translation Coverage:",
            f"  Files with translations: {coverage['with_translations']}",
            f"  Files without translations: {coverage['without_translations']}",
            f"  Partially translated files: {coverage['partially_translated']}",
            f"  Translation coverage: {coverage['coverage_percent']}%",
            "",
        ]

        if data.strings_by_kind:
            lines.append("Untranslated Strings by Kind:")
            lines.extend(f"  {kind}: {count}" for kind, count in data.strings_by_kind.items())
            lines.append("")

        if data.most_common_strings:
            lines.append("Most Common Untranslated Strings:")
            for index, item in enumerate(data.most_common_strings[:SHOWN_STRINGS], 1):
                lines.append(f'  {index}. "{item["text"]}" ({item["count"]} occurrences)')
                lines.append(f"     Files: {_file_list(item['files'], 3)}")
            lines.append("")

        keys = data.translation_keys
        if keys["total_keys"]:
            lines.append("Translation Keys:")
            lines.append(f"  Total unique keys used: {keys['total_keys']}")
            lines.append("  Most used keys:")
            lines.extend(
                f'    "{entry["key"]}": {entry["count"]} uses'
                for entry in keys["used_keys"][:SHOWN_KEYS]
            )
            if keys["unused_keys"]:
                lines.append(f"  Unused keys: {len(keys['unused_keys'])}")
            lines.append("")

        if data.missing_translations:
            lines.append("Missing Translations by Language:")
            lines.extend(
                f'  "{key}": missing in {", ".join(languages)}'
                for key, languages in data.missing_translations.items()
            )
            lines.append("")

        analysis = data.translation_file_analysis
        if analysis.locales:
            lines.append("Translation Files:")
            for locale in analysis.locales:
                lines.append(
                    f"  {locale.language} ({len(locale.files)} files): {locale.key_count} keys"
                )
                if locale.missing_keys:
                    lines.append(f"    Missing {len(locale.missing_keys)} keys")
            if analysis.inconsistent_keys:
                lines.append(
                    f"Key Consistency Issues: {len(analysis.inconsistent_keys)} inconsistent keys"
                )
            lines.append("")

        if data.recommended_actions:
            lines.append("Recommended Actions:")
            for index, action in enumerate(data.recommended_actions, 1):
                lines.append(f"  {index}. [{action.priority.upper()}] {action.action}")
                lines.append(f"     {action.description}")
                lines.append(f"     Affected files: {action.affected_files}")
            lines.append("")

        return "\n".join(lines)

    def format_markdown(self, data: I18nSummary) -> str:
        coverage = data.files_coverage
        lines = [
            "# I18n Analysis Results",
            "",
            "## Summary",
            "",
            "| Metric | Count |",
            "|--------|-------|",
            f"| Total Files Analyzed | {data.total_files} |",
            f"| Total Untranslated Strings | {data.total_untranslated_strings} |",
            f"| Total Translation Usage | {data.total_translation_usage} |",
            f"| Total Potential Issues | {data.total_potential_issues} |",
            "",
            "## Translation Coverage",
            "",
            "| Status | Count |",
            "|--------|-------|",
            f"| Files with translations | {coverage['with_translations']} |",
            f"| Files without translations | {coverage['without_translations']} |",
            f"| Partially translated files | {coverage['partially_translated']} |",
            f"| **Translation coverage** | **{coverage['coverage_percent']}%** |",
            "",
        ]

        if data.most_common_strings:
            lines.extend(
                [
                    "## Most Common Untranslated Strings",
                    "",
                    "| Rank | String | Count | Files |",
                    "|------|--------|-------|-------|",
                ]
            )
            for index, item in enumerate(data.most_common_strings[:SHOWN_STRINGS], 1):
                text = item["text"] if len(item["text"]) <= 50 else item["text"][:47] + "..."
                lines.append(
                    f"| {index} | {text} | {item['count']} | {_file_list(item['files'], 2)} |"
                )
            lines.append("")

        if data.recommended_actions:
            lines.extend(["## Recommended Actions", ""])
            for action in data.recommended_actions:
                lines.append(
                    f"- **[{action.priority.upper()}] {action.action}**: {action.description} "
                    f"({action.affected_files} files)"
                )
            lines.append("")

        return "\n".join(lines)
