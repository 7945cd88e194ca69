# backend/project_feed/notion/config.py

"""
Notion 連携に必要な設定値をまとめるモジュール。
"""

from dataclasses import dataclass
from functools import lru_cache

from project_feed.utils.config import get_env, get_env_int

DEFAULT_API_BASE_URL = "https://api.notion.com/v1"
DEFAULT_API_VERSION = "2022-06-28"
DEFAULT_TIMEOUT_SECONDS = 10
# Notion の query API が受け付ける page_size の上限
MAX_PAGE_SIZE = 100


@dataclass(frozen=True)
class NotionConfig:
    """Notion API 用の設定値コンテナ。"""

    token: str
    database_id: str
    api_base_url: str = DEFAULT_API_BASE_URL
    api_version: str = DEFAULT_API_VERSION
    timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS
    page_size: int = MAX_PAGE_SIZE
    log_level: str = "DEBUG"


@lru_cache()
def get_notion_config() -> NotionConfig:
    """
    環境変数から Notion 設定を読み込む。

    必須:
      - NOTION_TOKEN
      - NOTION_DATABASE_ID

    任意:
      - NOTION_API_BASE_URL    (デフォルト: https://api.notion.com/v1)
      - NOTION_API_VERSION     (デフォルト: 2022-06-28)
      - NOTION_TIMEOUT_SECONDS (デフォルト: 10)
      - NOTION_PAGE_SIZE       (デフォルト: 100, 1〜100 に丸める)
      - NOTION_LOG_LEVEL       (デフォルト: DEBUG)
    """
    token = get_env("NOTION_TOKEN")
    database_id = get_env("NOTION_DATABASE_ID")

    api_base_url = get_env(
        "NOTION_API_BASE_URL",
        default=DEFAULT_API_BASE_URL,
        required=False,
    )
    api_version = get_env(
        "NOTION_API_VERSION",
        default=DEFAULT_API_VERSION,
        required=False,
    )
    timeout_seconds = get_env_int(
        "NOTION_TIMEOUT_SECONDS", default=DEFAULT_TIMEOUT_SECONDS
    )
    page_size = get_env_int("NOTION_PAGE_SIZE", default=MAX_PAGE_SIZE)
    log_level = get_env("NOTION_LOG_LEVEL", default="DEBUG", required=False)

    return NotionConfig(
        token=token,
        database_id=database_id,
        api_base_url=api_base_url.rstrip("/"),
        api_version=api_version,
        timeout_seconds=timeout_seconds,
        page_size=min(max(page_size, 1), MAX_PAGE_SIZE),
        log_level=log_level.upper(),
    )
