# backend/blog_cms/errors.py

"""
Notion インポート処理で使う例外の階層。

- すべて ContentImportError を基底とし、HTTP ステータスを http_status で持つ
- ルーター層は ContentImportError をそのまま HTTPException に変換する
- メッセージはユーザーにそのまま表示される前提なので、機密情報は含めないこと
"""

from typing import Optional


class ContentImportError(RuntimeError):
    """インポート処理全般の基底例外。"""

    http_status: int = 500


class InputError(ContentImportError):
    """URL が無い・ページ ID を抽出できないなど、入力値の誤り。"""

    http_status = 400


class AuthorizationError(ContentImportError):
    """呼び出し元ユーザーに admin / editor ロールが無い、または認証が無効。"""

    http_status = 403


class UpstreamError(ContentImportError):
    """
    Notion API が 2xx 以外を返した場合の例外。

    status_code には Notion 側のステータスコードを保持する（診断用）。
    """

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code

    @property
    def http_status(self) -> int:  # type: ignore[override]
        if self.status_code is not None and 400 <= self.status_code < 600:
            return self.status_code
        return 502


class UpstreamAuthError(UpstreamError):
    """Notion 連携用トークン自体が無効・権限不足の場合の例外。"""

    @property
    def http_status(self) -> int:  # type: ignore[override]
        return 401


class IntegrationNotConfiguredError(UpstreamAuthError):
    """NOTION_TOKEN が設定されていない場合の例外。リクエスト前に検出する。"""

    @property
    def http_status(self) -> int:  # type: ignore[override]
        return 500


class UpstreamNotFoundError(UpstreamError):
    """ページ ID は正しいが Notion 側に存在しない（共有されていない）場合。"""

    @property
    def http_status(self) -> int:  # type: ignore[override]
        return 404


class UpstreamConnectionError(ContentImportError):
    """タイムアウト・DNS・接続リセットなど、ネットワーク層の失敗。"""


class TransformError(ContentImportError):
    """
    ブロック / リッチテキスト変換時のエラー。

    変換処理は例外を投げず空文字にフォールバックするため、現状は送出されない。
    """
