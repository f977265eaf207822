# backend/blog_cms/notion/__init__.py

"""
Notion 連携用モジュール群。

主な責務:
- Notion ページ URL からページ ID を取り出す
- Notion API からページのタイトルとブロックを取得する
- ブロックを Markdown に変換し、記事本文として返す
"""

from .markdown import assemble_markdown, render_block, render_rich_text  # noqa: F401
from .service import NotionImportService  # noqa: F401
from .url import extract_page_id, format_with_hyphens, resolve_page_id  # noqa: F401
