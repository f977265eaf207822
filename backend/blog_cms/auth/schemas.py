# backend/blog_cms/auth/schemas.py

from enum import Enum

from pydantic import BaseModel, Field


class UserRole(str, Enum):
    """CMS の書き込み・インポートを許可するロール。"""

    ADMIN = "admin"
    EDITOR = "editor"


PRIVILEGED_ROLES = (UserRole.ADMIN, UserRole.EDITOR)


class AuthorizedUser(BaseModel):
    """AccessGuard を通過したユーザー。"""

    user_id: str = Field(..., description="Supabase Auth のユーザー ID")
    role: UserRole = Field(..., description="admin / editor のいずれか")
