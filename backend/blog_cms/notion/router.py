# backend/blog_cms/notion/router.py

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException, status

from blog_cms.errors import ContentImportError

from .schemas import NotionImportRequest, NotionImportResponse
from .service import NotionImportService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notion", tags=["notion"])


# テスト時に FastAPI dependency_overrides で差し替え可能にする
def get_notion_import_service() -> NotionImportService:
    return NotionImportService()


@router.post(
    "/import",
    response_model=NotionImportResponse,
    summary="Notion ページを Markdown としてインポート",
    description=(
        "admin / editor ロールを持つユーザーが指定した Notion ページを取得し、"
        "タイトルと Markdown 本文を返す。"
    ),
)
def import_from_notion(
    body: NotionImportRequest,
    authorization: Optional[str] = Header(None),
    service: NotionImportService = Depends(get_notion_import_service),
) -> NotionImportResponse:
    """
    Notion インポートのエンドポイント。

    - 入力エラー → 400 / 権限エラー → 403
    - Notion 側のエラー → 401 / 404 / Notion のステータス
    - 想定外の例外 → 500（詳細はログ側で確認）
    """
    try:
        return service.import_from_notion(body.url, authorization)
    except ContentImportError as exc:
        raise HTTPException(status_code=exc.http_status, detail=str(exc)) from exc
    except Exception as exc:  # noqa: BLE001
        logger.exception("Notion import error")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Unknown error occurred",
        ) from exc
