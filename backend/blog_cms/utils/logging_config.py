# backend/blog_cms/utils/logging_config.py

"""
アプリ全体のロギング設定。

各モジュールは logging.getLogger(__name__) を使うだけにして、
ハンドラやフォーマットの設定はここに集約する。
"""

import logging
from typing import Optional

from .config import get_env

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def setup_logging(level: Optional[str] = None) -> None:
    """
    ルートロガーを設定する。

    :param level: ログレベル。省略時は LOG_LEVEL 環境変数（デフォルト INFO）。
    """
    raw_level = (level or get_env("LOG_LEVEL", default="INFO", required=False)).upper()
    if raw_level not in _VALID_LEVELS:
        raise RuntimeError(f"Invalid LOG_LEVEL: {raw_level!r}")

    logging.basicConfig(level=raw_level, format=LOG_FORMAT, datefmt=DATE_FORMAT)

    # httpx はリクエストごとに INFO を出すので抑制する
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
