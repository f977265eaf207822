# backend/blog_cms/auth/service.py

"""
AccessGuard: Notion インポートなど CMS 書き込み系操作の前段チェック。

責務:
- 資格情報（Authorization ヘッダー）からユーザーを解決する
- そのユーザーが admin / editor ロールを持つことを確認する
- どこかで失敗した場合は AuthorizationError を投げ、後続の外部呼び出しを行わせない
"""

import logging
from typing import Optional, Protocol

from blog_cms.errors import AuthorizationError

from .client import (
    InvalidCredentialError,
    RoleLookupError,
    SupabaseAuthClient,
    bearer_token,
)
from .schemas import AuthorizedUser, PRIVILEGED_ROLES, UserRole

logger = logging.getLogger(__name__)

MISSING_CREDENTIAL_MESSAGE = "Authorization header required"
INVALID_CREDENTIAL_MESSAGE = "Invalid or expired authentication"
ROLE_LOOKUP_FAILED_MESSAGE = "Failed to verify user role"
ACCESS_DENIED_MESSAGE = "Access denied. Admin or editor role required."


class AuthBackend(Protocol):
    """
    ユーザー解決とロール参照のインターフェース。

    SupabaseAuthClient が本番実装。テストではダミーを渡す。
    """

    def get_user_id(self, credential: str) -> str:
        ...

    def get_role(self, credential: str, user_id: str) -> Optional[str]:
        ...


class AccessGuard:
    """
    呼び出し元が特権ロールを持つかを判定する。

    backend を省略した場合は最初の authorize() 時に SupabaseAuthClient を生成する。
    """

    def __init__(self, backend: Optional[AuthBackend] = None) -> None:
        self._backend = backend

    def _get_backend(self) -> AuthBackend:
        if self._backend is None:
            self._backend = SupabaseAuthClient()
        return self._backend

    def authorize(self, credential: Optional[str]) -> AuthorizedUser:
        """
        :return: 認可されたユーザー
        :raises AuthorizationError: 資格情報なし・無効、ロールなし、ロール参照失敗のいずれか
        """
        if not credential or not bearer_token(credential):
            logger.warning("Authorization failed: %s", MISSING_CREDENTIAL_MESSAGE)
            raise AuthorizationError(MISSING_CREDENTIAL_MESSAGE)

        backend = self._get_backend()

        try:
            user_id = backend.get_user_id(credential)
        except InvalidCredentialError as exc:
            logger.warning("Auth error: %s", exc)
            raise AuthorizationError(INVALID_CREDENTIAL_MESSAGE) from exc

        try:
            raw_role = backend.get_role(credential, user_id)
        except RoleLookupError as exc:
            logger.error("Role check error: %s", exc)
            raise AuthorizationError(ROLE_LOOKUP_FAILED_MESSAGE) from exc

        role = _to_privileged_role(raw_role)
        if role is None:
            logger.warning("User %s has no privileged role", user_id)
            raise AuthorizationError(ACCESS_DENIED_MESSAGE)

        logger.info("User %s authorized with role: %s", user_id, role.value)
        return AuthorizedUser(user_id=user_id, role=role)


def _to_privileged_role(raw_role: Optional[str]) -> Optional[UserRole]:
    if raw_role is None:
        return None
    try:
        role = UserRole(raw_role)
    except ValueError:
        return None
    return role if role in PRIVILEGED_ROLES else None
