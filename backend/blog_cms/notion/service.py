# backend/blog_cms/notion/service.py

"""
Notion ページ → 記事本文（Markdown）インポートのサービス層。

処理の流れ:
  1. AccessGuard で admin / editor ロールを確認（ここを通るまで Notion には一切アクセスしない）
  2. URL の有無を確認し、Notion クライアントを生成（トークン未設定はここで検出）
  3. URL からページ ID を抽出
  4. ページメタデータからタイトル取得
  5. ブロックを全ページ分取得し、Markdown に組み立てる

どこかで失敗した場合は途中結果を返さず、例外をそのまま呼び出し元に伝える。
"""

import logging
from typing import Callable, Optional

from blog_cms.auth.service import AccessGuard
from blog_cms.errors import InputError

from .client import NotionClient
from .config import NotionConfig
from .fetcher import NotionPageSource, fetch_all_blocks, fetch_title
from .markdown import assemble_markdown
from .schemas import NotionImportResponse
from .url import format_with_hyphens, resolve_page_id

logger = logging.getLogger(__name__)

MISSING_URL_MESSAGE = "Notion URL is required"

# NotionConfig を受け取って NotionPageSource を返すファクトリ。テストで差し替える。
SourceFactory = Callable[[Optional[NotionConfig]], NotionPageSource]


class NotionImportService:
    """
    Notion URL と呼び出し元の資格情報を受け取り、タイトルと Markdown 本文を返す。

    リクエスト間で共有する可変状態は持たない。
    """

    def __init__(
        self,
        *,
        access_guard: Optional[AccessGuard] = None,
        notion_config: Optional[NotionConfig] = None,
        source_factory: Optional[SourceFactory] = None,
    ) -> None:
        self._access_guard = access_guard or AccessGuard()
        self._notion_config = notion_config
        self._source_factory: SourceFactory = source_factory or NotionClient

    def import_from_notion(
        self,
        url: Optional[str],
        credential: Optional[str],
    ) -> NotionImportResponse:
        """
        :raises AuthorizationError: 権限が無い場合（Notion へのリクエスト前）
        :raises InputError: URL が無い・ページ ID を抽出できない場合
        :raises UpstreamError: Notion API 側のエラー（認証・未共有・その他ステータス）
        :raises UpstreamConnectionError: ネットワーク層の失敗
        """
        self._access_guard.authorize(credential)

        logger.info("Received URL: %s", url)
        if not url or not url.strip():
            raise InputError(MISSING_URL_MESSAGE)

        source = self._source_factory(self._notion_config)

        try:
            raw_page_id = resolve_page_id(url.strip())
        except InputError:
            logger.error("Could not extract page ID from URL: %s", url)
            raise
        page_id = format_with_hyphens(raw_page_id)
        logger.info("Extracted page ID: %s", page_id)

        title = fetch_title(source, page_id)
        blocks = fetch_all_blocks(source, page_id)
        content = assemble_markdown(blocks)

        logger.info("Conversion complete, content length: %d", len(content))
        return NotionImportResponse(title=title, content=content)
