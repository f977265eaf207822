# backend/blog_cms/notion/markdown.py

"""
Notion ブロック → Markdown 変換。

- render_rich_text: リッチテキスト配列をインライン Markdown にする
- render_block: ブロック 1 件を Markdown 断片にする（例外は投げない）
- assemble_markdown: ブロック列を連結し、空行を正規化した文書にする

装飾の適用順は code → bold → italic → strikethrough → link で固定。
bold と italic が隣接すると `***` のように曖昧な記法になることがあるが、
既存記事との互換性のため順序は変えない。
"""

import logging
import re
from typing import Iterable, Sequence

from .schemas import (
    Block,
    BookmarkBlock,
    BulletedListItemBlock,
    CalloutBlock,
    CodeBlock,
    DividerBlock,
    HeadingBlock,
    ImageBlock,
    LinkPreviewBlock,
    NumberedListItemBlock,
    ParagraphBlock,
    QuoteBlock,
    RichTextSpan,
    StructuralBlock,
    ToDoBlock,
    ToggleBlock,
)

logger = logging.getLogger(__name__)

DEFAULT_CALLOUT_ICON = "💡"
DEFAULT_IMAGE_ALT = "image"

_EXCESS_NEWLINES = re.compile(r"\n{3,}")


def render_span(span: RichTextSpan) -> str:
    text = span.plain_text
    annotations = span.annotations

    if annotations.code:
        text = f"`{text}`"
    if annotations.bold:
        text = f"**{text}**"
    if annotations.italic:
        text = f"*{text}*"
    if annotations.strikethrough:
        text = f"~~{text}~~"
    if span.href:
        text = f"[{text}]({span.href})"

    return text


def render_rich_text(spans: Sequence[RichTextSpan]) -> str:
    """
    リッチテキスト配列を受け取った順のまま連結する。

    同じ装飾の隣接 span もマージしない。空配列なら空文字。
    """
    if not spans:
        return ""
    return "".join(render_span(span) for span in spans)


def render_block(block: Block) -> str:
    """
    ブロック 1 件を Markdown 断片に変換する。

    未対応の種別は空文字を返し、ログだけ残す。
    """
    if isinstance(block, ParagraphBlock):
        return f"{render_rich_text(block.rich_text)}\n"

    if isinstance(block, HeadingBlock):
        return f"{'#' * block.level} {render_rich_text(block.rich_text)}\n"

    if isinstance(block, BulletedListItemBlock):
        return f"- {render_rich_text(block.rich_text)}\n"

    if isinstance(block, NumberedListItemBlock):
        # 連番は振らない。Markdown 側の自動採番に任せる。
        return f"1. {render_rich_text(block.rich_text)}\n"

    if isinstance(block, ToDoBlock):
        checkbox = "[x]" if block.checked else "[ ]"
        return f"- {checkbox} {render_rich_text(block.rich_text)}\n"

    if isinstance(block, ToggleBlock):
        summary = render_rich_text(block.rich_text)
        return f"<details><summary>{summary}</summary></details>\n"

    if isinstance(block, CodeBlock):
        code = render_rich_text(block.rich_text)
        return f"```{block.language}\n{code}\n```\n"

    if isinstance(block, QuoteBlock):
        return f"> {render_rich_text(block.rich_text)}\n"

    if isinstance(block, CalloutBlock):
        icon = block.icon_emoji or DEFAULT_CALLOUT_ICON
        return f"> {icon} {render_rich_text(block.rich_text)}\n"

    if isinstance(block, DividerBlock):
        return "---\n"

    if isinstance(block, ImageBlock):
        alt = DEFAULT_IMAGE_ALT if block.caption is None else render_rich_text(block.caption)
        return f"![{alt}]({block.url})\n"

    if isinstance(block, BookmarkBlock):
        label = block.url if block.caption is None else render_rich_text(block.caption)
        return f"[{label}]({block.url})\n"

    if isinstance(block, LinkPreviewBlock):
        return f"[{block.url}]({block.url})\n"

    if isinstance(block, StructuralBlock):
        return ""

    logger.info("Unhandled block type: %s", block.type)
    return ""


def normalize_whitespace(markdown: str) -> str:
    """3 行以上連続する改行を 2 つに詰め、前後の空白を除去する。"""
    return _EXCESS_NEWLINES.sub("\n\n", markdown).strip()


def assemble_markdown(blocks: Iterable[Block]) -> str:
    """
    ブロック列を順番どおりに Markdown 化して 1 つの文書にまとめる。

    同じ出力を 1 段落として再度通しても結果は変わらない（冪等）。
    """
    markdown = "".join(render_block(block) for block in blocks)
    return normalize_whitespace(markdown)
