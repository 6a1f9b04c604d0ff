"""Conversion Markdown (CommonMark) via markdown-it-py."""

from collections.abc import Mapping

from markdown_it import MarkdownIt

from docportal.infra.converters.base import DEFAULT_ATTRIBUTES, Converter


class MarkdownConverter(Converter):
    """Rend un document Markdown en fragment HTML enveloppé par le rôle configuré."""

    name = "markdown"

    def __init__(self) -> None:
        self._md = MarkdownIt("commonmark", {"html": True})

    def convert(self, source: str, attributes: Mapping[str, str] | None = None) -> str:
        attrs = dict(DEFAULT_ATTRIBUTES)
        attrs.update(attributes or {})
        body = self._md.render(source).strip()
        role = attrs.get("role")
        if role:
            return f'<div class="{role}">\n{body}\n</div>\n'
        return body + "\n"
