# backend/blog_cms/notion/url.py

"""
Notion ページ URL からページ ID（32 桁の 16 進数）を取り出すモジュール。

対応する URL 形式:
  - https://www.notion.so/workspace/Page-Title-<32hex>
  - https://notion.so/Page-Title-<32hex>
  - https://www.notion.so/<32hex>
  - 文字列中のどこかにあるハイフン区切りの UUID
"""

import re
from typing import Optional

from blog_cms.errors import InputError

# 上から順に試し、最初にマッチしたものを採用する（後ろほど緩い）。
_PAGE_ID_PATTERNS = (
    re.compile(r"notion\.(?:so|site)/(?:[^/]+/)?(?:[^-]+-)?([a-f0-9]{32})(?:[?#]|$)", re.IGNORECASE),
    re.compile(r"notion\.(?:so|site)/(?:[^/]+/)?([a-f0-9]{32})(?:[?#]|$)", re.IGNORECASE),
    re.compile(r"notion\.(?:so|site)/(?:[^/]+/)?[^/]+-([a-f0-9]{32})(?:[?#]|$)", re.IGNORECASE),
    re.compile(
        r"([a-f0-9]{8}-?[a-f0-9]{4}-?[a-f0-9]{4}-?[a-f0-9]{4}-?[a-f0-9]{12})",
        re.IGNORECASE,
    ),
)

_HEX32 = re.compile(r"[a-f0-9]{32}", re.IGNORECASE)

INVALID_URL_MESSAGE = "Invalid Notion URL. Please provide a valid Notion page link."


def extract_page_id(url: str) -> Optional[str]:
    """
    URL からページ ID を取り出す。見つからなければ None。

    戻り値はハイフン無し・小文字の 32 文字。
    """
    if not url:
        return None

    for pattern in _PAGE_ID_PATTERNS:
        match = pattern.search(url)
        if not match:
            continue
        page_id = match.group(1).replace("-", "")
        if _HEX32.fullmatch(page_id):
            return page_id.lower()

    return None


def resolve_page_id(url: str) -> str:
    """
    extract_page_id のエラー版。抽出できなければ InputError（HTTP 400 相当）。
    """
    page_id = extract_page_id(url)
    if page_id is None:
        raise InputError(INVALID_URL_MESSAGE)
    return page_id


def format_with_hyphens(page_id: str) -> str:
    """
    API パス用に 8-4-4-4-12 のハイフン区切りへ整形する。
    既にハイフンを含む場合はそのまま返す。
    """
    if "-" in page_id:
        return page_id
    return (
        f"{page_id[:8]}-{page_id[8:12]}-{page_id[12:16]}-"
        f"{page_id[16:20]}-{page_id[20:]}"
    )
