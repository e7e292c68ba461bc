"""Report adapters for rendering results."""

from wiki_nearby.adapters.report.markdown_generator import MarkdownReportGenerator, format_distance

__all__ = ["MarkdownReportGenerator", "format_distance"]
