# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Page extractor: Next.js routes from the pages/ and app/ directories.

Route mapping:
- pages/blog/[slug].tsx -> /blog/[slug], pages/index.tsx -> /
- app/(shop)/cart/page.tsx -> /cart (route groups are not part of the URL)
- pages/api/** and app/**/route.ts are API routes

In app/ only the special route files (page, layout, loading, error,
not-found, route) are reported; other modules there are colocated code.
"""

from collections import Counter
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Any, Dict, List, Optional

from nextscope.models import ExportType, PluginConfig, PluginMetadata
from nextscope.parsing.helpers import find_exports
from nextscope.plugins.base import Formatter
from nextscope.plugins.extractor import BaseExtractor, ExtractorConfig
from nextscope.plugins.page_extractor.formatter import PageFormatter
from nextscope.plugins.page_extractor.models import (
    PageComponent,
    PageExport,
    PageInfo,
    PageSettings,
    PageSummary,
    PageType,
    Router,
)
from nextscope.plugins.react import ComponentKind, is_component, top_level_definitions

TOP_N = 10

APP_ROUTE_FILES = {
    "page": PageType.PAGE,
    "layout": PageType.LAYOUT,
    "loading": PageType.LOADING,
    "error": PageType.ERROR,
    "not-found": PageType.NOT_FOUND,
    "route": PageType.API,
}

SSR_EXPORTS = frozenset({"getServerSideProps", "getInitialProps"})
SSG_EXPORTS = frozenset({"getStaticProps", "getStaticPaths", "generateStaticParams"})
PAGE_FUNCTIONS = SSR_EXPORTS | SSG_EXPORTS


@dataclass
class RouteLocation:
    """Where a file sits inside a router directory."""

    router: str  # Router value
    segments: List[str]  # Directories between the router directory and the file
    stem: str  # File name without extension


def locate_route(relative_path: str) -> Optional[RouteLocation]:
    """Find the first pages/ or app/ directory in relative_path.

    Returns:
        RouteLocation, or None when the file is outside both routers.
    """
    parts = PurePosixPath(relative_path).parts
    for index, part in enumerate(parts[:-1]):
        if part in Router.ALL:
            return RouteLocation(
                router=part,
                segments=list(parts[index + 1 : -1]),
                stem=PurePosixPath(parts[-1]).stem,
            )
    return None


def is_route_file(location: RouteLocation) -> bool:
    if location.router == Router.APP:
        return location.stem in APP_ROUTE_FILES
    return True


def route_path(location: RouteLocation) -> str:
    if location.router == Router.PAGES:
        segments = list(location.segments)
        if location.stem != "index":
            segments.append(location.stem)
    else:
        segments = [s for s in location.segments if not (s.startswith("(") and s.endswith(")"))]
    return "/" + "/".join(segments)


def page_type_of(location: RouteLocation) -> str:
    if location.segments[:1] == ["api"]:
        return PageType.API
    page_type = APP_ROUTE_FILES.get(location.stem, PageType.PAGE)
    if location.router == Router.PAGES and page_type == PageType.API:
        # route.ts is only a handler in app/
        return PageType.PAGE
    return page_type


def dynamic_segments(location: RouteLocation) -> List[str]:
    """[id], [...slug] and [[...slug]] segments, in path order."""
    return [
        part
        for part in location.segments + [location.stem]
        if part.startswith("[") and part.endswith("]")
    ]


class PageExtractor(BaseExtractor[PageInfo, PageSummary]):
    """Analyzes Next.js pages, API routes and App Router structure.

    Plugin options (PluginConfig.options) override the settings:
        include_api_routes: Report API routes (default True)
        include_app_dir: Report App Router files (default True)
        analyze_components: Collect components per route file (default True)
    """

    def __init__(
        self,
        config: Optional[PluginConfig] = None,
        extractor_config: Optional[ExtractorConfig] = None,
        formatter: Optional[Formatter] = None,
    ) -> None:
        super().__init__(config, extractor_config, formatter or PageFormatter())
        self.settings = PageSettings.from_options(self.config.options)

    @classmethod
    def default_extractor_config(cls) -> ExtractorConfig:
        config = ExtractorConfig(
            file_patterns=["**/pages/**/*.{js,jsx,ts,tsx}", "**/app/**/*.{js,jsx,ts,tsx}"],
            batch_size=5,
        )
        # Leading underscore marks Next.js internals such as _app and _document
        config.exclude_patterns += ["**/*.d.ts", "**/_*.{js,jsx,ts,tsx}"]
        return config

    @property
    def metadata(self) -> PluginMetadata:
        return PluginMetadata(
            name="page-extractor",
            version="2.0.0",
            description="Analyzes Next.js pages, API routes, and App Router structure",
            tags=["nextjs", "pages", "routes"],
        )

    def should_process(self, target_path: Path) -> bool:
        """Directories always; files only when they are reportable route files."""
        path = Path(target_path)
        if path.is_dir():
            return True
        if path.suffix.lower() not in self.extensions:
            return False

        if self.context is not None:
            location = locate_route(self.get_relative_path(str(path)))
        else:
            location = locate_route(path.as_posix())
        if location is None or not is_route_file(location):
            return False
        if location.router == Router.APP and not self.settings.include_app_dir:
            return False
        if page_type_of(location) == PageType.API and not self.settings.include_api_routes:
            return False
        return True

    async def process_file(self, file_path: str) -> Optional[PageInfo]:
        relative = self.get_relative_path(file_path)
        location = locate_route(relative)
        if location is None:
            return None

        artifact = await self.parse_file_with_cache(file_path)
        if artifact is None:
            self.logger.debug(f"Skipping file (empty or parsing failed): {file_path}")
            return None

        exports = [
            PageExport(
                name=e.name,
                export_type=e.export_type,
                is_page_function=e.export_type == ExportType.DEFAULT or e.name in PAGE_FUNCTIONS,
            )
            for e in find_exports(artifact)
        ]
        export_names = {e.name for e in exports}

        components: List[PageComponent] = []
        if self.settings.analyze_components:
            components = [
                PageComponent(
                    name=d.name,
                    kind=ComponentKind.CLASS if d.is_class else ComponentKind.FUNCTIONAL,
                )
                for d in top_level_definitions(artifact)
                if is_component(d)
            ]

        segments = dynamic_segments(location)
        return PageInfo(
            route=route_path(location),
            page_type=page_type_of(location),
            router=location.router,
            file=relative,
            is_dynamic=bool(segments),
            dynamic_segments=segments,
            has_ssr=bool(export_names & SSR_EXPORTS),
            has_ssg=bool(export_names & SSG_EXPORTS),
            components=components,
            exports=exports,
        )

    async def aggregate_results(self, results: List[PageInfo], target_path: str) -> PageSummary:
        by_type: Counter = Counter(page.page_type for page in results)

        directories: Dict[str, Dict[str, Any]] = {}
        for page in results:
            directory = PurePosixPath(page.file).parent.as_posix()
            entry = directories.setdefault(
                directory, {"directory": directory, "pages": 0, "routes": []}
            )
            entry["pages"] += 1
            entry["routes"].append(page.route)

        complexity = [
            {
                "route": page.route,
                "dynamic_segments": len(page.dynamic_segments),
                "components": len(page.components),
            }
            for page in results
        ]
        complexity.sort(key=lambda item: -(item["dynamic_segments"] + item["components"]))

        self.logger.info(f"Page extraction complete: {len(results)} route files")

        return PageSummary(
            total_files=len(results),
            total_pages=by_type[PageType.PAGE],
            total_api_routes=by_type[PageType.API],
            total_dynamic_routes=sum(1 for page in results if page.is_dynamic),
            pages_by_type=dict(sorted(by_type.items())),
            routes_by_directory=sorted(
                directories.values(), key=lambda item: (-item["pages"], item["directory"])
            ),
            rendering_methods={
                "ssr": sum(1 for page in results if page.has_ssr),
                "ssg": sum(1 for page in results if page.has_ssg),
                "spa": sum(1 for page in results if not page.has_ssr and not page.has_ssg),
            },
            most_complex_routes=complexity[:TOP_N],
            pages=list(results),
        )
