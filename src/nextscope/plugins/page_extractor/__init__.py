# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Page extractor: Next.js pages, API routes and App Router files."""

from nextscope.plugins.page_extractor.formatter import PageFormatter
from nextscope.plugins.page_extractor.models import (
    PageInfo,
    PageSettings,
    PageSummary,
    PageType,
    Router,
)
from nextscope.plugins.page_extractor.plugin import PageExtractor, locate_route, route_path

__all__ = [
    "PageExtractor",
    "PageFormatter",
    "PageInfo",
    "PageSettings",
    "PageSummary",
    "PageType",
    "Router",
    "locate_route",
    "route_path",
]
