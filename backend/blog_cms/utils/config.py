# backend/blog_cms/utils/config.py

"""
環境変数読み取り用のユーティリティ。
Notion 連携・認証（Supabase）・アプリ全体の設定で共通利用する。
"""

import os
from typing import List, Optional


class EnvVarMissingError(RuntimeError):
    """必須環境変数が設定されていない場合に投げる例外。"""

    def __init__(self, name: str) -> None:
        super().__init__(f"Required environment variable '{name}' is not set.")
        self.name = name


def get_env(
    name: str,
    default: Optional[str] = None,
    *,
    required: bool = True,
) -> str:
    """
    環境変数を取得するヘルパー。

    :param name: 環境変数名
    :param default: デフォルト値（required=False の場合のみ使用）
    :param required: True の場合、未設定なら例外を投げる
    :return: 文字列値
    """
    value = os.getenv(name)

    if value is None or value == "":
        if required:
            raise EnvVarMissingError(name)
        return default

    return value


def get_env_float(name: str, default: float) -> float:
    """
    小数値の環境変数を取得する（タイムアウト秒数など）。
    """
    raw = get_env(name, required=False)
    if raw is None:
        return default

    try:
        return float(raw)
    except ValueError as exc:  # noqa: TRY003
        raise RuntimeError(
            f"Invalid float value for env var {name}: {raw!r}"
        ) from exc


def get_env_list(name: str, default: List[str]) -> List[str]:
    """
    カンマ区切りの環境変数をリストとして取得する（例: CORS_ORIGINS）。
    """
    raw = get_env(name, required=False)
    if raw is None:
        return list(default)

    return [item.strip() for item in raw.split(",") if item.strip()]
