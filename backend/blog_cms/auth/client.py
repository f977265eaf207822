# backend/blog_cms/auth/client.py

"""
Supabase Auth / PostgREST への HTTP クライアント。

- アクセストークン → ユーザー ID（GET /auth/v1/user）
- ユーザー ID → 特権ロール（GET /rest/v1/user_roles）
"""

from typing import Any, Dict, Optional

import httpx

from .config import SupabaseSettings, get_supabase_settings
from .schemas import PRIVILEGED_ROLES


class AuthClientError(Exception):
    """認証クライアント全般の基底例外。"""


class InvalidCredentialError(AuthClientError):
    """トークンが無効・期限切れ、または Auth に到達できなかった場合の例外。"""


class RoleLookupError(AuthClientError):
    """ロールテーブルの参照自体に失敗した場合の例外。"""


def bearer_token(credential: str) -> str:
    """
    Authorization ヘッダー値からトークン部分だけを取り出す。

    前後の空白を除き、先頭の Bearer スキーム（大文字小文字は問わない）を外す。
    "Bearer" だけの値は空文字になる。
    """
    value = credential.strip()
    scheme, _, rest = value.partition(" ")
    if scheme.lower() == "bearer":
        return rest.strip()
    return value


def as_bearer(credential: str) -> str:
    """トークンを "Bearer <token>" 形式にそろえる。"""
    return f"Bearer {bearer_token(credential)}"


class SupabaseAuthClient:
    """
    Supabase の REST エンドポイントを httpx で直接呼ぶクライアント。

    ロール参照も呼び出しユーザーのトークンで行う。
    """

    def __init__(
        self,
        settings: Optional[SupabaseSettings] = None,
        *,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._settings = settings or get_supabase_settings()
        self._transport = transport

    def _build_headers(self, credential: str) -> Dict[str, str]:
        return {
            "apikey": self._settings.anon_key,
            "Authorization": as_bearer(credential),
        }

    def _get(self, path: str, credential: str, params: Optional[Dict[str, str]] = None) -> httpx.Response:
        with httpx.Client(
            timeout=self._settings.timeout_seconds,
            transport=self._transport,
        ) as client:
            return client.get(
                f"{self._settings.url}{path}",
                headers=self._build_headers(credential),
                params=params,
            )

    def get_user_id(self, credential: str) -> str:
        """
        アクセストークンからユーザー ID を解決する。

        :raises InvalidCredentialError: 2xx 以外・通信失敗・ID 欠落時。
        """
        try:
            response = self._get("/auth/v1/user", credential)
        except httpx.RequestError as exc:
            raise InvalidCredentialError(f"Failed to call Supabase Auth: {exc}") from exc

        if response.status_code // 100 != 2:
            raise InvalidCredentialError(
                f"Supabase Auth rejected the token: status_code={response.status_code}"
            )

        try:
            user: Dict[str, Any] = response.json()
        except ValueError as exc:
            raise InvalidCredentialError("Supabase Auth returned a non-JSON body.") from exc

        user_id = user.get("id") if isinstance(user, dict) else None
        if not isinstance(user_id, str) or not user_id:
            raise InvalidCredentialError("Supabase Auth response has no user id.")
        return user_id

    def get_role(self, credential: str, user_id: str) -> Optional[str]:
        """
        ユーザーの特権ロール（admin / editor）を返す。無ければ None。

        :raises RoleLookupError: 2xx 以外・通信失敗・不正なレスポンス時。
        """
        roles = ",".join(role.value for role in PRIVILEGED_ROLES)
        params = {
            "select": "role",
            "user_id": f"eq.{user_id}",
            "role": f"in.({roles})",
        }

        try:
            response = self._get(f"/rest/v1/{self._settings.roles_table}", credential, params)
        except httpx.RequestError as exc:
            raise RoleLookupError(f"Failed to call Supabase REST: {exc}") from exc

        if response.status_code // 100 != 2:
            raise RoleLookupError(
                f"Role lookup failed: status_code={response.status_code}"
            )

        try:
            rows = response.json()
        except ValueError as exc:
            raise RoleLookupError("Role lookup returned a non-JSON body.") from exc

        if not isinstance(rows, list):
            raise RoleLookupError("Role lookup returned an unexpected body.")
        if not rows:
            return None

        first = rows[0]
        role = first.get("role") if isinstance(first, dict) else None
        if not isinstance(role, str):
            raise RoleLookupError("Role lookup row has no role.")
        return role
