# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Tests for the bundled extractors and the plugin catalogue."""

import json
from pathlib import Path
from typing import Dict

import pytest
import yaml

from nextscope.config import Config
from nextscope.context import ExecutionContext
from nextscope.errors import NotFoundError
from nextscope.filesystem import FileSystem
from nextscope.manager import PluginManager
from nextscope.models import PluginConfig
from nextscope.parsing import SourceParser
from nextscope.plugins.base import OutputFormat
from nextscope.plugins.component_extractor import ComponentExtractor
from nextscope.plugins.hook_extractor import HookExtractor
from nextscope.plugins.i18n_extractor import (
    I18nAnalyzer,
    I18nExtractor,
    I18nSettings,
    IssueType,
)
from nextscope.plugins.i18n_extractor.translation_files import (
    analyze_translation_files,
    flatten_keys,
    language_of,
)
from nextscope.plugins.registry import create_plugin, get_available_plugins, register_all_plugins
from nextscope.validators import ValidatorRegistry

COMPONENT_FILES = {
    "src/App.tsx": """\
import React, { useState } from "react";
import { Header } from "./Header";

export default function App() {
  const [open, setOpen] = useState(false);
  return (
    <div>
      <Header title="Home" />
      <button onClick={() => setOpen(!open)}>Toggle</button>
    </div>
  );
}
""",
    "src/Header.tsx": """\
import React from "react";

export const Header = ({ title }: { title: string }) => <h1>{title}</h1>;

export class Legacy extends React.Component {
  render() {
    return <p>{this.props.children}</p>;
  }
}

function helper() {
  return 1;
}
""",
    "src/utils.ts": "export const add = (a: number, b: number) => a + b;\n",
    "src/App.test.tsx": "export const Fake = () => <div />;\n",
}

HOOK_FILES = {
    "src/useToggle.ts": """\
import { useState, useCallback } from "react";

export function useToggle(initial = false) {
  const [value, setValue] = useState(initial);
  const toggle = useCallback(() => setValue((v) => !v), []);
  return [value, toggle];
}
""",
    "src/Panel.tsx": """\
import React from "react";
import { useToggle } from "./useToggle";

export function Panel() {
  const [open, toggle] = useToggle();
  React.useEffect(() => {}, [open]);
  return <div onClick={toggle}>{open ? "Open" : "Closed"}</div>;
}
""",
}

I18N_FILES = {
    "src/Login.tsx": """\
import React from "react";
import { useTranslation } from "react-i18next";

export function Login() {
  const { t } = useTranslation();
  const errorMessage = "Invalid password";
  return (
    <form>
      <h1>{t("auth.title")}</h1>
      <label>Email address</label>
      <input placeholder="Enter your email" className="form-input" />
      <button>{t(`auth.${mode}`)}</button>
    </form>
  );
}
""",
    "src/Plain.tsx": """\
export function Banner() {
  return <p>Welcome to our store</p>;
}
""",
    "src/Translated.tsx": """\
import { t } from "i18next";

export const Footer = () => <footer>{t("footer.copyright")}</footer>;
""",
    "src/constants.ts": 'export const API_URL = "https://example.com/api";\n',
    "locales/en.json": json.dumps(
        {"auth": {"title": "Sign in"}, "footer": {"copyright": "(c)"}, "unused": "x"}
    ),
    "locales/fr/common.json": json.dumps({"auth": {"title": "Connexion"}}),
}


def _write_project(root: Path, files: Dict[str, str]) -> Path:
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
    return root


def _bind(plugin, project: Path):
    plugin.init(ExecutionContext.create(project))
    return plugin


def _analyze(source: str, settings: I18nSettings = None):
    artifact = SourceParser().parse_source(source, "/project/src/Sample.tsx")
    assert artifact is not None
    analyzer = I18nAnalyzer(settings or I18nSettings(), ValidatorRegistry())
    return analyzer.analyze(artifact)


class TestComponentExtractor:
    @pytest.mark.asyncio
    async def test_extracts_components(self, tmp_path: Path):
        project = _write_project(tmp_path, COMPONENT_FILES)
        result = await _bind(ComponentExtractor(), project).extract(project)

        assert result.success
        summary = result.data
        assert summary.total_files == 2
        assert summary.total_components == 3
        assert summary.functional_components == 2
        assert summary.class_components == 1
        assert summary.exported_components == 3
        assert summary.most_used_hooks == [{"name": "useState", "count": 1}]
        assert [entry["file"] for entry in summary.components_by_file] == [
            "src/Header.tsx",
            "src/App.tsx",
        ]

    @pytest.mark.asyncio
    async def test_component_details(self, tmp_path: Path):
        project = _write_project(tmp_path, COMPONENT_FILES)
        result = await _bind(ComponentExtractor(), project).extract(project)

        by_name = {c.name: c for c in result.data.components}
        assert set(by_name) == {"App", "Header", "Legacy"}

        app = by_name["App"]
        assert app.is_default
        assert app.has_state
        assert not app.has_props
        assert app.hooks == ["useState"]
        assert app.child_elements == ["div", "Header", "button"]

        assert by_name["Header"].has_props
        assert by_name["Header"].kind == "functional"
        assert by_name["Legacy"].kind == "class"
        assert by_name["Legacy"].file == "src/Header.tsx"

    @pytest.mark.asyncio
    async def test_test_files_excluded(self, tmp_path: Path):
        project = _write_project(tmp_path, COMPONENT_FILES)
        result = await _bind(ComponentExtractor(), project).extract(project)

        assert "Fake" not in {c.name for c in result.data.components}
        assert result.metadata["files_processed"] == 3

    def test_format_without_formatter_is_json(self):
        rendered = ComponentExtractor().format_data({"total": 1}, OutputFormat.TEXT)

        assert json.loads(rendered) == {"total": 1}


class TestHookExtractor:
    @pytest.mark.asyncio
    async def test_hook_calls_and_definitions(self, tmp_path: Path):
        project = _write_project(tmp_path, HOOK_FILES)
        result = await _bind(HookExtractor(), project).extract(project)

        assert result.success
        summary = result.data
        assert summary.total_files == 2
        assert summary.total_hook_calls == 4
        assert summary.builtin_hook_calls == 3
        assert summary.custom_hook_calls == 1
        assert [entry["name"] for entry in summary.hook_usage] == [
            "useCallback",
            "useEffect",
            "useState",
            "useToggle",
        ]
        assert [entry["file"] for entry in summary.hooks_by_file] == [
            "src/Panel.tsx",
            "src/useToggle.ts",
        ]

    @pytest.mark.asyncio
    async def test_custom_hook_definition(self, tmp_path: Path):
        project = _write_project(tmp_path, HOOK_FILES)
        result = await _bind(HookExtractor(), project).extract(project)

        (definition,) = result.data.custom_hooks
        assert definition.name == "useToggle"
        assert definition.file == "src/useToggle.ts"
        assert definition.is_exported
        assert definition.params == ["initial"]
        assert definition.hooks_used == ["useState", "useCallback"]

    @pytest.mark.asyncio
    async def test_callers_recorded(self, tmp_path: Path):
        project = _write_project(tmp_path, HOOK_FILES)
        extractor = _bind(HookExtractor(), project)

        file_result = await extractor.process_file(str(project / "src" / "Panel.tsx"))

        assert [(c.name, c.kind, c.caller) for c in file_result.calls] == [
            ("useToggle", "custom", "Panel"),
            ("useEffect", "builtin", "Panel"),
        ]


class TestI18nAnalyzer:
    def test_translation_usage_and_defaults(self):
        source = (
            't("greeting", "Hello there");\n'
            't("farewell", { defaultValue: "See you soon" });\n'
            "i18n.t(key);\n"
            't("items." + kind);\n'
        )
        strings, usages, issues = _analyze(source)

        assert strings == []
        assert [(u.function_name, u.key, u.default_value, u.is_dynamic) for u in usages] == [
            ("t", "greeting", "Hello there", False),
            ("t", "farewell", "See you soon", False),
            ("i18n.t", "key", None, True),
            ("t", '"items." + kind', None, True),
        ]
        assert [i.issue_type for i in issues] == [IssueType.DYNAMIC_KEY, IssueType.DYNAMIC_KEY]

    def test_string_positions_are_classified(self):
        source = (
            'alert("Please save your work");\n'
            'console.log("Render finished");\n'
            'const labels = { title: "Hello world", variant: "primary" };\n'
            'const welcomeMessage = "Welcome back";\n'
        )
        strings, _, _ = _analyze(source)

        classified = {s.text: (s.kind, s.is_likely_translatable) for s in strings}
        assert classified == {
            "Please save your work": ("alert-message", True),
            "Render finished": ("alert-message", False),
            "Hello world": ("object-property", True),
            "primary": ("object-property", False),
            "Welcome back": ("variable-declaration", True),
        }

    def test_form_validation_fallback(self):
        strings, _, _ = _analyze('const rules = { required: "This field is required" };\n')

        (candidate,) = strings
        assert candidate.kind == "form-validation"
        assert candidate.is_likely_translatable
        assert candidate.context == "{ required }"

    def test_non_user_facing_positions_ignored(self):
        source = (
            'import styles from "./styles.module.css";\n'
            'type Mode = "light mode";\n'
            'if (state === "ready state") {}\n'
            'const size = sizes["extra large"];\n'
        )
        strings, _, _ = _analyze(source)

        assert strings == []

    def test_jsx_text_and_attributes(self):
        source = (
            "export const Card = () => (\n"
            '  <Dialog confirmText="Are you sure?">\n'
            '    <img alt="Company logo" className="logo-image" />\n'
            "    <span>Read more</span>\n"
            '    {"Inline text"}\n'
            "  </Dialog>\n"
            ");\n"
        )
        strings, _, issues = _analyze(source)

        by_text = {s.text: s for s in strings}
        assert by_text["Are you sure?"].kind == "component-prop"
        assert by_text["Are you sure?"].context == "<Dialog confirmText>"
        assert by_text["Company logo"].kind == "jsx-attribute"
        assert not by_text["logo-image"].is_likely_translatable
        assert by_text["Read more"].context == "<span>"
        assert by_text["Inline text"].kind == "jsx-text"
        assert by_text["Read more"].suggested_key == "read_more"
        assert IssueType.UNTRANSLATED_JSX in {i.issue_type for i in issues}
        assert [i.line for i in issues] == sorted(i.line for i in issues)

    def test_min_length_and_technical_strings(self):
        source = (
            'const a = "ok";\n'
            'const b = "https://example.com";\n'
            'const c = "#ff00aa";\n'
            'const d = "MAX_RETRIES";\n'
        )
        strings, _, _ = _analyze(source)

        assert strings == []

    def test_custom_translation_functions(self):
        settings = I18nSettings(translation_functions=["__"])
        strings, usages, _ = _analyze('__("menu.open");\nt("menu.close");\n', settings)

        assert [u.key for u in usages] == ["menu.open"]
        # t is now an ordinary call, so its argument is a (non-translatable) candidate
        assert [(s.text, s.is_likely_translatable) for s in strings] == [("menu.close", False)]


class TestTranslationFiles:
    def test_flatten_keys(self):
        data = {"auth": {"login": {"title": "x"}, "empty": {}}, "top": "y"}

        assert flatten_keys(data) == ["auth.login.title", "auth.empty", "top"]

    def test_language_of(self):
        assert language_of("locales/en.json") == "en"
        assert language_of("public/locales/pt-BR/common.json") == "pt-BR"
        assert language_of("src/i18n/fr.json") == "fr"
        assert language_of("locales/messages.json") is None
        assert language_of("src/en.json") is None

    @pytest.mark.asyncio
    async def test_invalid_json_is_skipped(self, tmp_path: Path, caplog):
        _write_project(
            tmp_path,
            {"locales/en.json": '{"a": "A"}', "locales/de.json": "{not json"},
        )

        analysis = await analyze_translation_files(FileSystem(), str(tmp_path), I18nSettings())

        assert analysis.languages == ["en"]
        assert "Invalid JSON" in caplog.text

    @pytest.mark.asyncio
    async def test_no_locale_files(self, tmp_path: Path):
        analysis = await analyze_translation_files(FileSystem(), str(tmp_path), I18nSettings())

        assert analysis.locales == []
        assert analysis.consistent_keys == []


class TestI18nExtractor:
    @pytest.mark.asyncio
    async def test_project_summary(self, tmp_path: Path):
        project = _write_project(tmp_path, I18N_FILES)
        result = await _bind(I18nExtractor(), project).extract(project)

        assert result.success
        summary = result.data
        assert summary.total_files == 4
        assert summary.total_untranslated_strings == 4
        assert summary.total_translation_usage == 3
        assert summary.total_potential_issues == 5
        assert summary.strings_by_kind == {
            "jsx-attribute": 1,
            "jsx-text": 2,
            "variable-declaration": 1,
        }
        assert summary.files_coverage == {
            "with_translations": 1,
            "without_translations": 1,
            "partially_translated": 1,
            "coverage_percent": 50.0,
        }

    @pytest.mark.asyncio
    async def test_keys_and_locale_consistency(self, tmp_path: Path):
        project = _write_project(tmp_path, I18N_FILES)
        result = await _bind(I18nExtractor(), project).extract(project)
        summary = result.data

        assert summary.translation_keys["total_keys"] == 2
        assert [entry["key"] for entry in summary.translation_keys["used_keys"]] == [
            "auth.title",
            "footer.copyright",
        ]
        assert summary.translation_keys["unused_keys"] == ["unused"]
        assert summary.missing_translations == {"footer.copyright": ["fr"]}

        analysis = summary.translation_file_analysis
        assert analysis.languages == ["en", "fr"]
        assert analysis.consistent_keys == ["auth.title"]
        assert analysis.inconsistent_keys == ["footer.copyright", "unused"]

    @pytest.mark.asyncio
    async def test_recommended_actions(self, tmp_path: Path):
        project = _write_project(tmp_path, I18N_FILES)
        result = await _bind(I18nExtractor(), project).extract(project)

        actions = [(a.priority, a.action) for a in result.data.recommended_actions]
        assert actions == [
            ("high", "Add missing translations"),
            ("medium", "Implement i18n in untranslated files"),
            ("medium", "Fix translation key consistency"),
            ("low", "Review dynamic translation keys"),
        ]

    @pytest.mark.asyncio
    async def test_formatter_renders_text_and_markdown(self, tmp_path: Path):
        project = _write_project(tmp_path, I18N_FILES)
        extractor = _bind(I18nExtractor(), project)
        result = await extractor.extract(project)

        text = extractor.format_data(result.data, OutputFormat.TEXT)
        markdown = extractor.format_data(result.data, OutputFormat.MARKDOWN)
        rendered = json.loads(extractor.format_data(result.data, OutputFormat.JSON))

        assert text.startswith("I18n Analysis Results")
        assert "Translation coverage: 50.0%" in text
        assert '"footer.copyright": missing in fr' in text
        assert "[HIGH] Add missing translations" in text
        assert markdown.startswith("# I18n Analysis Results")
        assert "| **Translation coverage** | **50.0%** |" in markdown
        assert rendered["total_files"] == 4

    def test_options_override_settings(self):
        extractor = I18nExtractor(
            PluginConfig(options={"translation_functions": ["__"], "min_string_length": 5})
        )

        assert extractor.settings.translation_functions == ["__"]
        assert extractor.settings.min_string_length == 5
        assert extractor.validate()

    def test_invalid_settings_fail_validation(self):
        assert not I18nExtractor(settings=I18nSettings(translation_functions=[])).validate()
        assert not I18nExtractor(settings=I18nSettings(min_string_length=0)).validate()


class TestPluginCatalogue:
    def test_available_plugins(self):
        names = [entry["name"] for entry in get_available_plugins()]

        assert names == [
            "component-extractor",
            "hook-extractor",
            "page-extractor",
            "i18n-extractor",
        ]

    def test_unknown_plugin(self):
        with pytest.raises(NotFoundError):
            create_plugin("css-extractor")

    def test_create_plugin_applies_settings(self, tmp_path: Path):
        config_path = tmp_path / "config.yml"
        with open(config_path, "w") as f:
            yaml.dump(
                {
                    "batch_size": 3,
                    "parallel": False,
                    "max_file_size_kb": 2,
                    "exclude_patterns": ["**/generated/**"],
                    "translation_functions": ["__"],
                    "plugins": {"hook-extractor": {"enabled": False, "priority": 7}},
                },
                f,
            )
        settings = Config(config_path=config_path)

        hook = create_plugin("hook-extractor", settings=settings)
        i18n = create_plugin("i18n-extractor", settings=settings)

        assert not hook.enabled
        assert hook.priority == 7
        assert hook.extractor_config.batch_size == 3
        assert hook.extractor_config.parallel is False
        assert hook.extractor_config.max_file_size == 2048
        assert "**/generated/**" in hook.extractor_config.exclude_patterns
        assert "**/node_modules/**" in hook.extractor_config.exclude_patterns
        assert i18n.settings.translation_functions == ["__"]

    @pytest.mark.asyncio
    async def test_register_all_and_execute(self, tmp_path: Path):
        project = _write_project(tmp_path, I18N_FILES)
        manager = PluginManager(project_path=project)

        order = register_all_plugins(manager)
        results = await manager.execute_all()

        assert order == [
            "component-extractor",
            "hook-extractor",
            "page-extractor",
            "i18n-extractor",
        ]
        assert list(results) == order
        assert all(result.success for result in results.values())
        assert results["i18n-extractor"].data.total_untranslated_strings == 4
