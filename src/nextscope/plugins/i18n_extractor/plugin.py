# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""I18n extractor plugin.

Per file: string candidates classified by the validator registry,
translation-function usage and issues. Across the project: coverage,
locale-file key consistency and recommended actions.
"""

from typing import List, Optional

from nextscope.models import PluginConfig, PluginMetadata
from nextscope.plugins.base import Formatter
from nextscope.plugins.extractor import BaseExtractor, ExtractorConfig
from nextscope.plugins.i18n_extractor.ast_analyzer import I18nAnalyzer
from nextscope.plugins.i18n_extractor.config import I18nSettings
from nextscope.plugins.i18n_extractor.formatter import I18nFormatter
from nextscope.plugins.i18n_extractor.models import I18nFileResult, I18nSummary
from nextscope.plugins.i18n_extractor.result_processor import build_summary
from nextscope.plugins.i18n_extractor.translation_files import analyze_translation_files
from nextscope.validators import ValidatorRegistry


class I18nExtractor(BaseExtractor[I18nFileResult, I18nSummary]):
    """Finds untranslated user-facing strings and translation usage.

    Plugin options (PluginConfig.options) override the settings:
        translation_functions: List of callee names ("t", "i18n.t")
        min_string_length: Shortest string considered
    """

    def __init__(
        self,
        config: Optional[PluginConfig] = None,
        extractor_config: Optional[ExtractorConfig] = None,
        formatter: Optional[Formatter] = None,
        settings: Optional[I18nSettings] = None,
        registry: Optional[ValidatorRegistry] = None,
    ) -> None:
        super().__init__(config, extractor_config, formatter or I18nFormatter())
        self.settings = settings if settings is not None else I18nSettings()
        self.registry = registry if registry is not None else ValidatorRegistry()
        self._apply_options()

    @classmethod
    def default_extractor_config(cls) -> ExtractorConfig:
        config = ExtractorConfig(batch_size=6)
        config.exclude_patterns += [
            "**/*.d.ts",
            "**/*.test.*",
            "**/*.spec.*",
            "**/*.stories.*",
            "**/locales/**",
            "**/i18n/**",
        ]
        return config

    @property
    def metadata(self) -> PluginMetadata:
        return PluginMetadata(
            name="i18n-extractor",
            version="2.0.0",
            description="Untranslated string and translation usage extractor",
            tags=["i18n", "translation"],
        )

    def _apply_options(self) -> None:
        options = self.config.options
        functions = options.get("translation_functions")
        if functions:
            self.settings.translation_functions = list(functions)
        min_length = options.get("min_string_length")
        if min_length is not None:
            self.settings.min_string_length = min_length

    def validate(self) -> bool:
        if not self.settings.translation_functions:
            return False
        if isinstance(self.settings.min_string_length, bool):
            return False
        if not isinstance(self.settings.min_string_length, int) or self.settings.min_string_length < 1:
            return False
        return super().validate()

    async def process_file(self, file_path: str) -> Optional[I18nFileResult]:
        artifact = await self.parse_file_with_cache(file_path)
        if artifact is None:
            return None

        analyzer = I18nAnalyzer(self.settings, self.registry)
        strings, usages, issues = analyzer.analyze(artifact)
        return I18nFileResult(
            file_path=self.get_relative_path(file_path),
            strings=strings,
            usages=usages,
            issues=issues,
        )

    async def aggregate_results(self, results: List[I18nFileResult], target_path: str) -> I18nSummary:
        context = self.require_context()
        analysis = await analyze_translation_files(
            context.fs, str(context.project_path), self.settings
        )
        return build_summary(results, analysis)
