# backend/blog_cms/notion/config.py

"""
Notion 連携に必要な設定値をまとめるモジュール。
"""

from dataclasses import dataclass
from functools import lru_cache

from blog_cms.utils.config import get_env, get_env_float

DEFAULT_API_BASE_URL = "https://api.notion.com/v1"
DEFAULT_API_VERSION = "2022-06-28"


@dataclass(frozen=True)
class NotionConfig:
    """Notion API 用の設定値コンテナ。"""

    api_token: str
    api_version: str = DEFAULT_API_VERSION
    base_url: str = DEFAULT_API_BASE_URL
    timeout_seconds: float = 10.0


@lru_cache()
def get_notion_config() -> NotionConfig:
    """
    環境変数から Notion 設定を読み込む。

    任意:
      - NOTION_TOKEN           (未設定の場合は NotionClient 生成時にエラー)
      - NOTION_API_BASE_URL    (デフォルト: https://api.notion.com/v1)
      - NOTION_API_VERSION     (デフォルト: 2022-06-28)
      - NOTION_TIMEOUT_SECONDS (デフォルト: 10)
    """
    api_token = get_env("NOTION_TOKEN", default="", required=False)

    base_url = get_env(
        "NOTION_API_BASE_URL",
        default=DEFAULT_API_BASE_URL,
        required=False,
    )
    api_version = get_env(
        "NOTION_API_VERSION",
        default=DEFAULT_API_VERSION,
        required=False,
    )
    timeout_seconds = get_env_float("NOTION_TIMEOUT_SECONDS", default=10.0)

    return NotionConfig(
        api_token=api_token,
        api_version=api_version,
        base_url=base_url.rstrip("/"),
        timeout_seconds=timeout_seconds,
    )
