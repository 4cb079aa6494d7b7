"""Render Portable Text documents to HTML.

Each block style, list type, decorator and annotation has exactly one
rule. Anything without a rule renders its text as plain inline content,
so unknown input from the CMS degrades instead of breaking the page.
"""

import json
import logging
import math
from typing import Any, Callable

from markupsafe import Markup, escape
from pydantic import ValidationError

from schemas.portable_text import Block, MarkDef, Span

logger = logging.getLogger(__name__)

WORDS_PER_MINUTE = 200
MIN_READING_MINUTES = 2
DEFAULT_READING_TIME = "3 min read"

SAFE_LINK_SCHEMES = ("http://", "https://", "mailto:", "/", "#")

BLOCK_STYLES: dict[str, tuple[str, str]] = {
    "h2": ("h2", "mt-10 text-2xl font-extrabold tracking-tight"),
    "h3": ("h3", "mt-8 text-xl font-bold"),
    "normal": ("p", "leading-7 text-slate-700"),
    "blockquote": ("blockquote", "border-l-4 border-[#25c19b] pl-4 italic text-slate-700"),
}

LIST_TYPES: dict[str, tuple[str, str]] = {
    "bullet": ("ul", "list-disc list-inside space-y-2"),
    "number": ("ol", "list-decimal list-inside space-y-2"),
}

DECORATORS: dict[str, tuple[str, str]] = {
    "strong": ("strong", "font-semibold"),
    "em": ("em", "italic"),
    "code": ("code", "rounded bg-slate-100 px-1.5 py-0.5 text-sm"),
}

_ELEMENT = Markup('<{0} class="{1}">{2}</{0}>')


def _render_link(mark_def: MarkDef, children: Markup) -> Markup:
    href = (mark_def.href or "").strip()
    if not href.startswith(SAFE_LINK_SCHEMES):
        return children
    return Markup(
        '<a href="{0}" class="text-sky-700 hover:underline" target="_blank" rel="noreferrer">{1}</a>'
    ).format(href, children)


ANNOTATIONS: dict[str, Callable[[MarkDef, Markup], Markup]] = {
    "link": _render_link,
}


class PortableTextRenderer:
    """Render a list of Portable Text blocks to an HTML fragment.

    The rule tables are class attributes so a page can swap in its own
    classes without touching the traversal.
    """

    block_styles = BLOCK_STYLES
    list_types = LIST_TYPES
    decorators = DECORATORS
    annotations = ANNOTATIONS

    def render(self, value: Any) -> Markup:
        """Render a document; anything that is not a list renders as nothing."""
        blocks = self._decode(value)
        parts: list[Markup] = []
        i = 0
        while i < len(blocks):
            block = blocks[i]
            if block.list_item is not None:
                rendered, i = self._render_list(blocks, i, block.level)
                parts.append(rendered)
                continue
            parts.append(self._render_block(block))
            i += 1
        return Markup("").join(parts)

    def _decode(self, value: Any) -> list[Block]:
        if not isinstance(value, list):
            return []
        blocks = []
        for raw in value:
            if not isinstance(raw, dict):
                continue
            try:
                blocks.append(Block.model_validate(raw))
            except ValidationError as e:
                logger.warning(f"Skipping malformed block: {e}")
        return blocks

    def _render_block(self, block: Block) -> Markup:
        children = self._render_children(block)
        if block.type != "block":
            return children
        rule = self.block_styles.get(block.style)
        if rule is None:
            return children
        tag, css = rule
        return _ELEMENT.format(tag, css, children)

    def _render_list(self, blocks: list[Block], start: int, level: int) -> tuple[Markup, int]:
        """Render a run of list blocks at ``level``, nesting deeper levels.

        Returns the rendered list and the index of the first block after it.
        """
        list_type = blocks[start].list_item
        items: list[list[Markup]] = []
        i = start

        while i < len(blocks):
            block = blocks[i]
            if block.list_item is None or block.level < level:
                break
            if block.level == level and block.list_item != list_type:
                break
            if block.level > level:
                nested, i = self._render_list(blocks, i, block.level)
                if items:
                    items[-1].append(nested)
                else:
                    items.append([nested])
                continue
            items.append([self._render_children(block)])
            i += 1

        rule = self.list_types.get(list_type or "")
        if rule is None:
            return Markup("").join(Markup("").join(item) for item in items), i

        tag, css = rule
        lis = Markup("").join(
            Markup("<li>{0}</li>").format(Markup("").join(item)) for item in items
        )
        return _ELEMENT.format(tag, css, lis), i

    def _render_children(self, block: Block) -> Markup:
        return Markup("").join(self._render_span(span, block) for span in block.children)

    def _render_span(self, span: Span, block: Block) -> Markup:
        lines = span.text.split("\n")
        rendered = Markup("<br/>").join(escape(line) for line in lines)

        for mark in span.marks:
            if mark in self.decorators:
                tag, css = self.decorators[mark]
                rendered = _ELEMENT.format(tag, css, rendered)
                continue
            mark_def = block.mark_def(mark)
            if mark_def is None:
                continue
            annotate = self.annotations.get(mark_def.type)
            if annotate is not None:
                rendered = annotate(mark_def, rendered)

        return rendered


def render_portable_text(value: Any) -> Markup:
    """Render a document with the default rules."""
    return PortableTextRenderer().render(value)


def reading_time(body: Any) -> str:
    """Estimate reading time from the size of a document.

    This is a heuristic: the body is serialized to compact JSON and the
    whitespace-separated chunks are counted as words, so markup keys
    inflate short posts. The result is rounded and never below two
    minutes.

    Examples:
        >>> reading_time(None)
        '3 min read'
        >>> reading_time([])
        '2 min read'
    """
    if body is None:
        return DEFAULT_READING_TIME
    serialized = json.dumps(body, separators=(",", ":"), ensure_ascii=False, default=str)
    words = len(serialized.split())
    minutes = max(MIN_READING_MINUTES, math.floor(words / WORDS_PER_MINUTE + 0.5))
    return f"{minutes} min read"
