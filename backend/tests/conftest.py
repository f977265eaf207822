# backend/tests/conftest.py
"""
Pytest configuration for Blog CMS backend tests.

- Ensures that the project root (backend/) is added to sys.path
  so that `import blog_cms.*` works correctly in tests.
- Ensures required environment variables for tests are set
  with safe dummy values (e.g., NOTION_TOKEN, SUPABASE_URL).
- Provides small builders for raw Notion API objects.
"""

import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest


def _ensure_project_root_in_sys_path() -> None:
    # This file is located at: backend/tests/conftest.py
    # parents[1] -> backend/
    project_root = Path(__file__).resolve().parents[1]
    project_root_str = str(project_root)

    if project_root_str not in sys.path:
        # Insert at the beginning so it has priority over site-packages, etc.
        sys.path.insert(0, project_root_str)


def _ensure_test_env_vars() -> None:
    """
    Set dummy environment variables required for tests.

    These values are only for local testing and do NOT contain real secrets.
    In real environments, proper values should be provided via .env or system env.
    """
    os.environ.setdefault("NOTION_TOKEN", "dummy-notion-token-for-tests")
    os.environ.setdefault("SUPABASE_URL", "https://dummy.supabase.co")
    os.environ.setdefault("SUPABASE_ANON_KEY", "dummy-anon-key-for-tests")


_ensure_project_root_in_sys_path()
_ensure_test_env_vars()


@pytest.fixture(autouse=True)
def _clear_notion_config_cache():
    # get_notion_config は lru_cache されているので、monkeypatch した env を毎回反映させる
    from blog_cms.notion.config import get_notion_config

    get_notion_config.cache_clear()
    yield
    get_notion_config.cache_clear()


def make_span(
    text: str,
    *,
    bold: bool = False,
    italic: bool = False,
    strikethrough: bool = False,
    code: bool = False,
    href: Optional[str] = None,
) -> Dict[str, Any]:
    """Notion API 形式の rich_text 要素を作る。"""
    return {
        "type": "text",
        "text": {"content": text, "link": {"url": href} if href else None},
        "annotations": {
            "bold": bold,
            "italic": italic,
            "strikethrough": strikethrough,
            "underline": False,
            "code": code,
            "color": "default",
        },
        "plain_text": text,
        "href": href,
    }


def make_block(block_type: str, text: Optional[str] = None, **payload: Any) -> Dict[str, Any]:
    """Notion API 形式のブロックを作る。text を渡すと rich_text に 1 span 入れる。"""
    body: Dict[str, Any] = dict(payload)
    if text is not None:
        body.setdefault("rich_text", [make_span(text)])
    return {
        "object": "block",
        "id": f"{block_type}-id",
        "type": block_type,
        "has_children": False,
        block_type: body,
    }


def make_blocks_response(
    results: List[Dict[str, Any]],
    next_cursor: Optional[str] = None,
) -> Dict[str, Any]:
    return {
        "object": "list",
        "results": results,
        "has_more": next_cursor is not None,
        "next_cursor": next_cursor,
    }
