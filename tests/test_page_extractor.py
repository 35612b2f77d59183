# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Tests for the Next.js page extractor."""

import json
from pathlib import Path
from typing import Dict

import pytest

from nextscope.context import ExecutionContext
from nextscope.models import PluginConfig
from nextscope.plugins.base import OutputFormat
from nextscope.plugins.page_extractor import PageExtractor, PageType, Router, locate_route
from nextscope.plugins.page_extractor.plugin import dynamic_segments, page_type_of, route_path

PAGE_FILES = {
    "pages/index.tsx": "export default function Home() {\n  return <main>Home</main>;\n}\n",
    "pages/account.tsx": """\
export default function Account() {
  return <div />;
}

export async function getServerSideProps() {
  return { props: {} };
}
""",
    "pages/blog/[slug].tsx": """\
export default function Post() {
  return <article />;
}

export async function getStaticProps() {
  return { props: {} };
}

export async function getStaticPaths() {
  return { paths: [], fallback: false };
}
""",
    "pages/api/users.ts": """\
export default function handler(req, res) {
  res.status(200).json([]);
}
""",
    "pages/_app.tsx": "export default function App({ Component }) {\n  return <Component />;\n}\n",
    "app/layout.tsx": """\
export default function RootLayout({ children }) {
  return <html><body>{children}</body></html>;
}
""",
    "app/(shop)/cart/page.tsx": "export default function CartPage() {\n  return <section />;\n}\n",
    "app/docs/[...slug]/page.tsx": """\
export default function Docs({ params }) {
  return <article>{params.slug}</article>;
}
""",
    "app/api/health/route.ts": """\
export async function GET() {
  return Response.json({ ok: true });
}
""",
    "app/components/Nav.tsx": "export const Nav = () => <nav />;\n",
    "components/Button.tsx": "export const Button = () => <button />;\n",
}


def _write_project(root: Path, files: Dict[str, str]) -> Path:
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
    return root


def _bind(plugin: PageExtractor, project: Path) -> PageExtractor:
    plugin.init(ExecutionContext.create(project))
    return plugin


class TestRouteMapping:
    @pytest.mark.parametrize(
        "relative, route",
        [
            ("pages/index.tsx", "/"),
            ("pages/blog/index.tsx", "/blog"),
            ("pages/blog/[slug].tsx", "/blog/[slug]"),
            ("src/pages/about.jsx", "/about"),
            ("app/page.tsx", "/"),
            ("app/(shop)/cart/page.tsx", "/cart"),
            ("app/api/health/route.ts", "/api/health"),
        ],
    )
    def test_route_path(self, relative: str, route: str):
        assert route_path(locate_route(relative)) == route

    def test_files_outside_routers_have_no_location(self):
        assert locate_route("components/Button.tsx") is None
        assert locate_route("app.tsx") is None

    def test_page_types(self):
        assert page_type_of(locate_route("pages/api/users.ts")) == PageType.API
        assert page_type_of(locate_route("app/api/health/route.ts")) == PageType.API
        assert page_type_of(locate_route("app/blog/layout.tsx")) == PageType.LAYOUT
        assert page_type_of(locate_route("app/not-found.tsx")) == PageType.NOT_FOUND
        assert page_type_of(locate_route("pages/route.tsx")) == PageType.PAGE

    def test_dynamic_segments_listed_once(self):
        location = locate_route("app/shop/[category]/[...slug]/page.tsx")

        assert location.router == Router.APP
        assert dynamic_segments(location) == ["[category]", "[...slug]"]


class TestPageExtractor:
    @pytest.mark.asyncio
    async def test_summary(self, tmp_path: Path):
        project = _write_project(tmp_path, PAGE_FILES)
        result = await _bind(PageExtractor(), project).extract(project)

        assert result.success
        summary = result.data
        assert summary.total_files == 8
        assert summary.total_pages == 5
        assert summary.total_api_routes == 2
        assert summary.total_dynamic_routes == 2
        assert summary.pages_by_type == {"api": 2, "layout": 1, "page": 5}
        assert summary.rendering_methods == {"ssr": 1, "ssg": 1, "spa": 6}
        assert summary.most_complex_routes[0] == {
            "route": "/blog/[slug]",
            "dynamic_segments": 1,
            "components": 1,
        }

    @pytest.mark.asyncio
    async def test_routes_and_skipped_files(self, tmp_path: Path):
        project = _write_project(tmp_path, PAGE_FILES)
        result = await _bind(PageExtractor(), project).extract(project)

        routes = {page.file: page.route for page in result.data.pages}
        assert routes == {
            "pages/account.tsx": "/account",
            "pages/index.tsx": "/",
            "pages/api/users.ts": "/api/users",
            "pages/blog/[slug].tsx": "/blog/[slug]",
            "app/layout.tsx": "/",
            "app/(shop)/cart/page.tsx": "/cart",
            "app/api/health/route.ts": "/api/health",
            "app/docs/[...slug]/page.tsx": "/docs/[...slug]",
        }
        # _app is excluded by pattern, colocated app/ modules by should_process
        assert result.metadata["skipped_files"] == 1

    @pytest.mark.asyncio
    async def test_page_details(self, tmp_path: Path):
        project = _write_project(tmp_path, PAGE_FILES)
        result = await _bind(PageExtractor(), project).extract(project)

        by_file = {page.file: page for page in result.data.pages}
        account = by_file["pages/account.tsx"]
        assert account.has_ssr
        assert not account.has_ssg
        assert [(e.name, e.is_page_function) for e in account.exports] == [
            ("Account", True),
            ("getServerSideProps", True),
        ]
        assert [c.name for c in account.components] == ["Account"]

        handler = by_file["app/api/health/route.ts"]
        assert handler.page_type == PageType.API
        assert handler.components == []

        post = by_file["pages/blog/[slug].tsx"]
        assert post.is_dynamic
        assert post.dynamic_segments == ["[slug]"]
        assert post.router == Router.PAGES

    @pytest.mark.asyncio
    async def test_routes_by_directory(self, tmp_path: Path):
        project = _write_project(tmp_path, PAGE_FILES)
        result = await _bind(PageExtractor(), project).extract(project)

        directories = result.data.routes_by_directory
        assert directories[0] == {"directory": "pages", "pages": 2, "routes": ["/account", "/"]}
        assert [d["directory"] for d in directories[1:]] == [
            "app",
            "app/(shop)/cart",
            "app/api/health",
            "app/docs/[...slug]",
            "pages/api",
            "pages/blog",
        ]

    @pytest.mark.asyncio
    async def test_options_narrow_the_report(self, tmp_path: Path):
        project = _write_project(tmp_path, PAGE_FILES)
        extractor = PageExtractor(
            PluginConfig(
                options={
                    "include_api_routes": False,
                    "include_app_dir": False,
                    "analyze_components": False,
                }
            )
        )

        result = await _bind(extractor, project).extract(project)

        assert [page.file for page in result.data.pages] == [
            "pages/account.tsx",
            "pages/index.tsx",
            "pages/blog/[slug].tsx",
        ]
        assert all(page.components == [] for page in result.data.pages)

    def test_should_process_uses_project_relative_path(self, tmp_path: Path):
        project = _write_project(tmp_path / "app" / "shop", PAGE_FILES)
        extractor = _bind(PageExtractor(), project)

        assert extractor.should_process(project)
        assert extractor.should_process(project / "pages" / "index.tsx")
        assert not extractor.should_process(project / "components" / "Button.tsx")
        assert not extractor.should_process(project / "app" / "components" / "Nav.tsx")

    @pytest.mark.asyncio
    async def test_project_without_routes(self, tmp_path: Path):
        project = _write_project(tmp_path, {"src/App.tsx": "export const App = () => <div />;\n"})
        result = await _bind(PageExtractor(), project).extract(project)

        assert result.success
        assert result.data.total_files == 0
        assert result.data.rendering_methods == {"ssr": 0, "ssg": 0, "spa": 0}


class TestPageFormatter:
    @pytest.mark.asyncio
    async def test_text_and_markdown(self, tmp_path: Path):
        project = _write_project(tmp_path, PAGE_FILES)
        extractor = _bind(PageExtractor(), project)
        summary = (await extractor.extract(project)).data

        text = extractor.format_data(summary, OutputFormat.TEXT)
        markdown = extractor.format_data(summary, OutputFormat.MARKDOWN)
        as_json = json.loads(extractor.format_data(summary, OutputFormat.JSON))

        assert text.startswith("Page Analysis Results")
        assert "  /blog/[slug] (PAGE) [DYNAMIC] [SSG]" in text
        assert "  pages: 2 pages" in text
        assert markdown.startswith("# Page Analysis Results")
        assert "| `/account` | PAGE | - | ✓ | - | Account | `pages/account.tsx` |" in markdown
        assert as_json["total_files"] == 8
