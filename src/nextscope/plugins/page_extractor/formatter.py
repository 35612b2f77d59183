# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Text and Markdown rendering of a PageSummary."""

import json
from typing import List

from nextscope.models import to_jsonable
from nextscope.plugins.base import OutputFormat
from nextscope.plugins.page_extractor.models import PageInfo, PageSummary


def _labels(page: PageInfo) -> str:
    labels = ""
    if page.is_dynamic:
        labels += " [DYNAMIC]"
    if page.has_ssr:
        labels += " [SSR]"
    if page.has_ssg:
        labels += " [SSG]"
    return labels


def _mark(flag: bool) -> str:
    return "✓" if flag else "-"


class PageFormatter:
    """Formatter for PageSummary (satisfies plugins.base.Formatter)."""

    def format(self, data: PageSummary, fmt: str) -> str:
        if fmt == OutputFormat.MARKDOWN:
            return self.format_markdown(data)
        if fmt == OutputFormat.JSON:
            return json.dumps(to_jsonable(data), indent=2)
        return self.format_text(data)

    def format_text(self, data: PageSummary) -> str:
        rendering = data.rendering_methods
        lines = [
            "Page Analysis Results",
            "=" * 21,
            "",
            "Summary:",
            f"  Total Files Analyzed: {data.total_files}",
            f"  Total Pages: {data.total_pages}",
            f"  Total API Routes: {data.total_api_routes}",
            f"  Total Dynamic Routes: {data.total_dynamic_routes}",
            "",
        ]

        if data.pages_by_type:
            lines.append("Pages by Type:")
            lines.extend(f"  {kind}: {count}" for kind, count in data.pages_by_type.items())
            lines.append("")

        lines.extend(
            [
                "Rendering Methods:",
                f"  Server-Side Rendering (SSR): {rendering['ssr']}",
                f"  Static Site Generation (SSG): {rendering['ssg']}",
                f"  Client-side only: {rendering['spa']}",
                "",
            ]
        )

        if data.routes_by_directory:
            lines.append("Routes by Directory:")
            for item in data.routes_by_directory:
                plural = "" if item["pages"] == 1 else "s"
                lines.append(f"  {item['directory']}: {item['pages']} page{plural}")
                lines.extend(f"    - {route}" for route in item["routes"])
            lines.append("")

        if data.pages:
            lines.append("All Pages:")
            for page in data.pages:
                lines.append(f"  {page.route} ({page.page_type.upper()}){_labels(page)}")
                lines.append(f"    File: {page.file}")
                if page.dynamic_segments:
                    lines.append(f"    Dynamic Segments: {', '.join(page.dynamic_segments)}")
                if page.components:
                    lines.append(f"    Components: {', '.join(c.name for c in page.components)}")
                if page.exports:
                    lines.append(f"    Exports: {', '.join(e.name for e in page.exports)}")
            lines.append("")

        return "\n".join(lines)

    def format_markdown(self, data: PageSummary) -> str:
        rendering = data.rendering_methods
        lines: List[str] = [
            "# Page Analysis Results",
            "",
            "## Summary",
            "",
            "| Metric | Count |",
            "|--------|-------|",
            f"| Total Files Analyzed | {data.total_files} |",
            f"| Total Pages | {data.total_pages} |",
            f"| Total API Routes | {data.total_api_routes} |",
            f"| Total Dynamic Routes | {data.total_dynamic_routes} |",
            "",
            "## Rendering Methods",
            "",
            "| Method | Count |",
            "|--------|-------|",
            f"| Server-Side Rendering (SSR) | {rendering['ssr']} |",
            f"| Static Site Generation (SSG) | {rendering['ssg']} |",
            f"| Client-side only | {rendering['spa']} |",
            "",
        ]

        if data.pages:
            lines.extend(
                [
                    "## All Pages",
                    "",
                    "| Route | Type | Dynamic | SSR | SSG | Components | File |",
                    "|-------|------|---------|-----|-----|------------|------|",
                ]
            )
            for page in data.pages:
                components = ", ".join(c.name for c in page.components) or "-"
                lines.append(
                    f"| `{page.route}` | {page.page_type.upper()} | {_mark(page.is_dynamic)} | "
                    f"{_mark(page.has_ssr)} | {_mark(page.has_ssg)} | {components} | "
                    f"`{page.file}` |"
                )
            lines.append("")

        return "\n".join(lines)
