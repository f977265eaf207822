# backend/blog_cms/main.py

"""
バックエンドアプリケーションのエントリーポイント。

主な責務:
- /notion/import エンドポイントを公開する（CMS エディタからの Notion インポート）
- /health エンドポイントを公開する
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from blog_cms.notion.router import router as notion_router
from blog_cms.utils.config import get_env_list
from blog_cms.utils.logging_config import setup_logging

# CMS エディタ（ブラウザ）から直接呼ばれるため、Supabase クライアントが付けるヘッダーを許可する
CORS_ALLOW_HEADERS = ["authorization", "x-client-info", "apikey", "content-type"]


def create_app() -> FastAPI:
    """
    FastAPI アプリケーションファクトリ。

    - Notion インポートエンドポイント (/notion/import)
    - ヘルスチェックエンドポイント (/health)
    """
    setup_logging()

    app = FastAPI(title="Blog CMS Backend")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_env_list("CORS_ORIGINS", default=["*"]),
        allow_methods=["*"],
        allow_headers=CORS_ALLOW_HEADERS,
    )

    # ルーター登録
    app.include_router(notion_router)

    @app.get("/health", tags=["health"])
    def health_check() -> dict:
        """
        簡易ヘルスチェックエンドポイント。
        モニタリングや動作確認用。
        """
        return {"status": "ok"}

    return app


# uvicorn 実行時のエントリーポイント
app = create_app()
