# backend/blog_cms/notion/client.py

"""
Notion API との通信を担当するクライアントモジュール。
"""

import logging
from typing import Any, Dict, Optional

import httpx

from blog_cms.errors import (
    IntegrationNotConfiguredError,
    UpstreamAuthError,
    UpstreamConnectionError,
    UpstreamError,
    UpstreamNotFoundError,
)

from .config import NotionConfig, get_notion_config

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 100

NOT_CONFIGURED_MESSAGE = "Notion integration not configured. Please add NOTION_TOKEN secret."
AUTH_FAILED_MESSAGE = (
    "Notion authentication failed. Please check your NOTION_TOKEN "
    "and ensure the page is shared with your integration."
)
PAGE_NOT_FOUND_MESSAGE = (
    "Page not found. Make sure the page exists and is shared with your Notion integration."
)


class NotionClient:
    """
    Notion API の薄いラッパークライアント。

    - ページメタデータの取得（タイトル抽出用）
    - ブロック子要素の 1 ページ分の取得（ページネーションは fetcher 側）

    トークン未設定は生成時に検出し、リクエストは一切送らない。
    """

    def __init__(
        self,
        config: Optional[NotionConfig] = None,
        *,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.config = config or get_notion_config()
        if not self.config.api_token:
            logger.error("NOTION_TOKEN not configured")
            raise IntegrationNotConfiguredError(NOT_CONFIGURED_MESSAGE)
        self._transport = transport

    def _build_headers(self) -> Dict[str, str]:
        """
        Notion API 呼び出しに必要なヘッダーを構築。
        """
        return {
            "Authorization": f"Bearer {self.config.api_token}",
            "Notion-Version": self.config.api_version,
            "Content-Type": "application/json",
        }

    def _raise_for_status(self, response: httpx.Response) -> None:
        """
        HTTP レスポンスコードに応じて適切な例外を投げる。
        """
        status_code = response.status_code
        if status_code // 100 == 2:
            return

        logger.error("Notion API request failed: %s %s", status_code, response.text)

        if status_code == 401:
            raise UpstreamAuthError(AUTH_FAILED_MESSAGE, status_code=status_code)
        if status_code == 404:
            raise UpstreamNotFoundError(PAGE_NOT_FOUND_MESSAGE, status_code=status_code)
        raise UpstreamError(f"Notion API error: {status_code}", status_code=status_code)

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        url = f"{self.config.base_url}{path}"

        try:
            with httpx.Client(
                timeout=self.config.timeout_seconds,
                transport=self._transport,
            ) as client:
                response = client.get(url, headers=self._build_headers(), params=params)
        except httpx.RequestError as exc:  # 接続エラー・タイムアウトなど
            raise UpstreamConnectionError(f"Failed to call Notion API: {exc}") from exc

        self._raise_for_status(response)

        try:
            data = response.json()
        except ValueError as exc:
            raise UpstreamError(
                "Unexpected Notion API response format: body is not JSON.",
                status_code=response.status_code,
            ) from exc

        if not isinstance(data, dict):
            raise UpstreamError(
                "Unexpected Notion API response format: body is not an object.",
                status_code=response.status_code,
            )
        return data

    def retrieve_page(self, page_id: str) -> Dict[str, Any]:
        """
        GET /pages/{page_id} でページメタデータ（properties を含む）を取得する。
        """
        return self._get(f"/pages/{page_id}")

    def list_block_children(
        self,
        block_id: str,
        *,
        start_cursor: Optional[str] = None,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> Dict[str, Any]:
        """
        GET /blocks/{block_id}/children を 1 回だけ呼ぶ。

        返り値は results / has_more / next_cursor を含む生のレスポンス。
        """
        params: Dict[str, Any] = {"page_size": page_size}
        if start_cursor:
            params["start_cursor"] = start_cursor
        return self._get(f"/blocks/{block_id}/children", params=params)
