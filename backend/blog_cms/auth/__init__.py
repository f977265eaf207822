"""
CMS 書き込み系操作の認可モジュール。

- config: Supabase（Auth / PostgREST）の接続設定
- schemas: ロールと認可済みユーザーのモデル
- client: アクセストークンからユーザー ID とロールを引く HTTP クライアント
- service: admin / editor ロールを持つかを判定する AccessGuard
"""

from .config import SupabaseSettings, get_supabase_settings  # noqa: F401
from .schemas import AuthorizedUser, UserRole  # noqa: F401
from .service import AccessGuard  # noqa: F401
