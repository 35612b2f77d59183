# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Integration tests for the MCP server and the plugin manager behind it.

NOTE: Marked as slow tests - integration tests create full project structures.
Run with: pytest -m slow

Tool functions need a live MCP request context, so tools are exercised
through the server methods they delegate to.
"""

import json
from pathlib import Path

import pytest
import yaml

pytest.importorskip("mcp")

from nextscope.config import CONFIG_FILE_NAME, Config  # noqa: E402
from nextscope.mcp_server import SERVER_NAME, NextScopeMCPServer  # noqa: E402

# Mark entire module as slow - integration tests create full project structures
pytestmark = pytest.mark.slow


@pytest.fixture
def server(react_project: Path):
    server = NextScopeMCPServer(project_path=react_project)
    yield server
    server.shutdown()


def test_mcp_server_name(server: NextScopeMCPServer) -> None:
    assert server.mcp.name == SERVER_NAME == "nextscope"


@pytest.mark.asyncio
async def test_mcp_tools_registered(server: NextScopeMCPServer) -> None:
    tools = await server.mcp.list_tools()

    assert {tool.name for tool in tools} == {
        "list_extractors",
        "run_extractor",
        "run_all_extractors",
        "classify_string",
    }


def test_list_extractors(server: NextScopeMCPServer) -> None:
    listing = server.list_extractors()

    assert [p["name"] for p in listing["plugins"]] == [
        "component-extractor",
        "hook-extractor",
        "page-extractor",
        "i18n-extractor",
    ]
    assert listing["registered"] == listing["execution_order"]


def test_server_uses_project_config(react_project: Path) -> None:
    with open(react_project / CONFIG_FILE_NAME, "w") as f:
        yaml.dump({"plugins": {"hook-extractor": {"enabled": False}}}, f)

    server = NextScopeMCPServer(project_path=react_project)
    try:
        assert not server.manager.get_plugin("hook-extractor").enabled
    finally:
        server.shutdown()


class TestRunExtractor:
    @pytest.mark.asyncio
    async def test_component_extractor_json(self, server: NextScopeMCPServer) -> None:
        response = await server.run_extractor("component-extractor")

        assert response["success"]
        data = response["data"]
        assert data["total_components"] == 2
        assert {c["name"] for c in data["components"]} == {"Home", "Button"}
        assert response["metadata"]["plugin_name"] == "component-extractor"
        assert "processing_time_ms" in response["metadata"]
        # The response must be JSON-serializable as-is
        json.dumps(response)

    @pytest.mark.asyncio
    async def test_hook_extractor(self, server: NextScopeMCPServer) -> None:
        response = await server.run_extractor("hook-extractor")

        data = response["data"]
        assert data["total_hook_calls"] == 3
        assert data["builtin_hook_calls"] == 1
        assert [h["name"] for h in data["custom_hooks"]] == ["useCounter"]

    @pytest.mark.asyncio
    async def test_page_extractor(self, server: NextScopeMCPServer) -> None:
        response = await server.run_extractor("page-extractor")

        data = response["data"]
        assert data["total_pages"] == 1
        assert data["pages"][0]["route"] == "/"
        assert data["pages"][0]["file"] == "app/page.tsx"
        assert [c["name"] for c in data["pages"][0]["components"]] == ["Home"]
        assert data["rendering_methods"] == {"ssr": 0, "ssg": 0, "spa": 1}

    @pytest.mark.asyncio
    async def test_i18n_extractor(self, server: NextScopeMCPServer) -> None:
        response = await server.run_extractor("i18n-extractor")

        data = response["data"]
        assert data["total_files"] == 3
        assert data["total_untranslated_strings"] == 3
        assert data["files_coverage"]["coverage_percent"] == 33.3
        assert data["missing_translations"] == {"home.increment": ["de"]}
        assert data["translation_file_analysis"]["consistent_keys"] == ["home.title"]

    @pytest.mark.asyncio
    async def test_text_format_uses_plugin_formatter(self, server: NextScopeMCPServer) -> None:
        response = await server.run_extractor("i18n-extractor", output_format="text")

        assert isinstance(response["data"], str)
        assert response["data"].startswith("I18n Analysis Results")

    @pytest.mark.asyncio
    async def test_target_path_narrows_analysis(
        self, server: NextScopeMCPServer, react_project: Path
    ) -> None:
        response = await server.run_extractor(
            "component-extractor", target_path=str(react_project / "components")
        )

        assert [c["name"] for c in response["data"]["components"]] == ["Button"]
        assert response["data"]["components"][0]["file"] == "components/Button.tsx"

    @pytest.mark.asyncio
    async def test_other_project_path(self, server: NextScopeMCPServer, tmp_path: Path) -> None:
        other = tmp_path / "other"
        other.mkdir()
        (other / "Only.tsx").write_text("export const Only = () => <div />;\n")

        response = await server.run_extractor("component-extractor", project_path=str(other))

        assert [c["name"] for c in response["data"]["components"]] == ["Only"]
        assert server.manager.context.project_path == other.resolve()

    @pytest.mark.asyncio
    async def test_edited_file_is_reparsed_between_calls(
        self, server: NextScopeMCPServer, react_project: Path
    ) -> None:
        first = await server.run_extractor("component-extractor")
        with open(react_project / "components" / "Button.tsx", "a") as f:
            f.write("\nexport const Badge = () => <span>New</span>;\n")

        second = await server.run_extractor("component-extractor")

        assert first["data"]["total_components"] == 2
        assert second["data"]["total_components"] == 3

    @pytest.mark.asyncio
    async def test_unknown_extractor(self, server: NextScopeMCPServer) -> None:
        response = await server.run_extractor("css-extractor")

        assert response == {"success": False, "errors": ["Plugin css-extractor not found"]}

    @pytest.mark.asyncio
    async def test_unknown_output_format(self, server: NextScopeMCPServer) -> None:
        response = await server.run_extractor("i18n-extractor", output_format="yaml")

        assert not response["success"]
        assert response["errors"][0].startswith("Unknown output format 'yaml'")


@pytest.mark.asyncio
async def test_run_all_extractors(server: NextScopeMCPServer) -> None:
    responses = await server.run_all_extractors()

    assert list(responses) == [
        "component-extractor",
        "hook-extractor",
        "page-extractor",
        "i18n-extractor",
    ]
    assert all(response["success"] for response in responses.values())


def test_classify_string(server: NextScopeMCPServer) -> None:
    valid = server.classify_string("Submit", "jsx-text", {"attribute_name": None})
    invalid = server.classify_string(
        "btn-primary", "jsx-attribute", {"attribute_name": "className"}
    )

    assert valid == {"is_valid": True, "validator": "jsx-text-content", "kind": "jsx-text"}
    assert not invalid["is_valid"]
    assert invalid["validator"] == "jsx-attributes"


def test_shutdown_releases_plugins(react_project: Path) -> None:
    server = NextScopeMCPServer(
        config=Config(config_path=react_project / "none.yml"), project_path=react_project
    )
    server.manager.context.cache.set("key", "value")

    server.shutdown()

    assert server.manager.get_all_plugins() == []
    assert len(server.manager.context.cache) == 0
