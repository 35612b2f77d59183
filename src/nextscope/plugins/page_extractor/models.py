# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Data models for the page extractor."""

from dataclasses import dataclass, field
from typing import Any, Dict, List


class Router:
    """Next.js routing systems.

    Design: Using class constants (not Enum) for JSON-compatible strings.
    """

    PAGES = "pages"  # pages/ directory (Pages Router)
    APP = "app"  # app/ directory (App Router)

    ALL = (PAGES, APP)


class PageType:
    """Role of a route file.

    Design: Using class constants (not Enum) for JSON-compatible strings.
    """

    PAGE = "page"
    API = "api"
    LAYOUT = "layout"
    LOADING = "loading"
    ERROR = "error"
    NOT_FOUND = "not-found"


@dataclass
class PageSettings:
    """Which route files the page extractor reports.

    Attributes:
        include_api_routes: Report pages/api/** and app route handlers.
        include_app_dir: Report App Router files.
        analyze_components: Collect the React components each route file defines.
    """

    include_api_routes: bool = True
    include_app_dir: bool = True
    analyze_components: bool = True

    @classmethod
    def from_options(cls, options: Dict[str, Any]) -> "PageSettings":
        settings = cls()
        for name in ("include_api_routes", "include_app_dir", "analyze_components"):
            if name in options:
                setattr(settings, name, bool(options[name]))
        return settings


@dataclass
class PageExport:
    name: str
    export_type: str  # ExportType value
    is_page_function: bool


@dataclass
class PageComponent:
    name: str
    kind: str  # ComponentKind value


@dataclass
class PageInfo:
    """One route file."""

    route: str
    page_type: str  # PageType value
    router: str  # Router value
    file: str  # Relative to the project root
    is_dynamic: bool
    dynamic_segments: List[str] = field(default_factory=list)
    has_ssr: bool = False
    has_ssg: bool = False
    components: List[PageComponent] = field(default_factory=list)
    exports: List[PageExport] = field(default_factory=list)


@dataclass
class PageSummary:
    total_files: int
    total_pages: int
    total_api_routes: int
    total_dynamic_routes: int
    pages_by_type: Dict[str, int]
    routes_by_directory: List[Dict[str, Any]]
    rendering_methods: Dict[str, int]  # ssr, ssg, spa
    most_complex_routes: List[Dict[str, Any]]
    pages: List[PageInfo]
