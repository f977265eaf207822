# backend/blog_cms/auth/config.py

"""
認証・ロール判定用の Supabase 設定値。
"""

from dataclasses import dataclass

from blog_cms.utils.config import get_env, get_env_float


@dataclass
class SupabaseSettings:
    """
    Supabase Auth / PostgREST の接続設定。

    anon_key はクライアント公開用のキー。ロール判定は呼び出しユーザーの
    アクセストークンで行うので、RLS がそのまま効く。
    """

    url: str
    anon_key: str
    timeout_seconds: float = 10.0
    roles_table: str = "user_roles"


def get_supabase_settings() -> SupabaseSettings:
    """
    Supabase 設定値を環境変数から読み出す。

    必須:
      - SUPABASE_URL
      - SUPABASE_ANON_KEY

    任意:
      - SUPABASE_TIMEOUT_SECONDS（デフォルト 10秒）
      - SUPABASE_ROLES_TABLE（デフォルト user_roles）
    """
    url = get_env("SUPABASE_URL")
    anon_key = get_env("SUPABASE_ANON_KEY")

    return SupabaseSettings(
        url=url.rstrip("/"),
        anon_key=anon_key,
        timeout_seconds=get_env_float("SUPABASE_TIMEOUT_SECONDS", default=10.0),
        roles_table=get_env("SUPABASE_ROLES_TABLE", default="user_roles", required=False),
    )
