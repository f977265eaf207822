# backend/blog_cms/notion/fetcher.py

"""
ページのタイトルとトップレベルのブロック一覧を取得する。

ブロックのページネーションは iter_block_pages に切り出してあり、
HTTP を使わずに（list_block_children を持つ任意のオブジェクトで）テストできる。
"""

import logging
from typing import Any, Dict, Iterator, List, Optional, Protocol

from blog_cms.errors import UpstreamError

from .client import DEFAULT_PAGE_SIZE
from .schemas import Block, parse_block

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Imported from Notion"


class NotionPageSource(Protocol):
    """fetcher が必要とする API 呼び出し。NotionClient が満たす。"""

    def retrieve_page(self, page_id: str) -> Dict[str, Any]:
        ...

    def list_block_children(
        self,
        block_id: str,
        *,
        start_cursor: Optional[str] = None,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> Dict[str, Any]:
        ...


def extract_title(page: Dict[str, Any]) -> str:
    """
    ページの properties から最初の空でない title プロパティを探し、
    plain_text を連結して返す。見つからなければ DEFAULT_TITLE。
    """
    properties = page.get("properties") or {}
    if not isinstance(properties, dict):
        return DEFAULT_TITLE

    for prop in properties.values():
        if not isinstance(prop, dict) or prop.get("type") != "title":
            continue
        spans = prop.get("title")
        if isinstance(spans, list) and spans:
            return "".join(
                span.get("plain_text") or "" for span in spans if isinstance(span, dict)
            )

    return DEFAULT_TITLE


def fetch_title(source: NotionPageSource, page_id: str) -> str:
    """ページメタデータを取得してタイトルを返す。"""
    page = source.retrieve_page(page_id)
    title = extract_title(page)
    logger.info("Page title: %s", title)
    return title


def iter_block_pages(
    source: NotionPageSource,
    block_id: str,
    *,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> Iterator[List[Dict[str, Any]]]:
    """
    ブロック子要素を 1 ページずつ（生の dict のリストとして）返すジェネレータ。

    next_cursor を辿り、has_more が False になった時点で終了する。
    一度使い切ったら再利用はできない。
    """
    cursor: Optional[str] = None

    while True:
        data = source.list_block_children(
            block_id,
            start_cursor=cursor,
            page_size=page_size,
        )

        results = data.get("results", [])
        if not isinstance(results, list):
            raise UpstreamError(
                "Unexpected Notion API response format: 'results' is not a list."
            )
        yield results

        next_cursor = data.get("next_cursor")
        if not data.get("has_more") or not next_cursor:
            return
        cursor = next_cursor


def fetch_all_blocks(
    source: NotionPageSource,
    page_id: str,
    *,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> List[Block]:
    """
    ページ直下のブロックを全件取得し、API の返した順序のまま Block に変換する。

    子ブロックの再帰取得は行わない。
    """
    blocks: List[Block] = []
    for results in iter_block_pages(source, page_id, page_size=page_size):
        blocks.extend(parse_block(raw) for raw in results)

    logger.info("Fetched %d blocks", len(blocks))
    return blocks
