# backend/project_feed/notion/client.py

"""
Notion API との通信を担当するクライアントモジュール。
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from .config import NotionConfig, get_notion_config

logger = logging.getLogger(__name__)


class NotionClientError(RuntimeError):
    """Notion クライアント全般の例外。通信エラーもこれで表す。"""


class NotionAuthError(NotionClientError):
    """認証・権限関連のエラー。"""


class NotionAPIError(NotionClientError):
    """その他 Notion API 呼び出し時のエラー。"""

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        code: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.code = code


def _error_code(response: httpx.Response) -> Optional[str]:
    """Notion のエラーレスポンス本文から code を取り出す。取れなければ None。"""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and isinstance(body.get("code"), str):
        return body["code"]
    return None


class NotionClient:
    """
    Notion API の薄いラッパークライアント。

    - データベースの query（1 ページ分）

    ページング自体は呼び出し側（projects.service）で行う。
    """

    def __init__(self, config: Optional[NotionConfig] = None) -> None:
        self.config = config or get_notion_config()

        # 公式 SDK の logLevel 相当。クライアント専用ロガーの詳細度を設定で切り替える。
        level = logging.getLevelName(self.config.log_level)
        if isinstance(level, int):
            logger.setLevel(level)

    def _build_headers(self) -> Dict[str, str]:
        """
        Notion API 呼び出しに必要なヘッダーを構築。
        """
        return {
            "Authorization": f"Bearer {self.config.token}",
            "Notion-Version": self.config.api_version,
            "Content-Type": "application/json",
        }

    def _raise_for_status(self, response: httpx.Response) -> None:
        """
        HTTP レスポンスコードに応じて適切な例外を投げる。
        """
        if response.status_code == 401:
            raise NotionAuthError("Unauthorized. Check NOTION_TOKEN.")
        if response.status_code == 403:
            raise NotionAuthError("Forbidden. Check Notion integration permissions.")
        if response.status_code >= 400:
            raise NotionAPIError(
                f"Notion API error: {response.status_code} {response.text}",
                status_code=response.status_code,
                code=_error_code(response),
            )

    def query_database(
        self,
        *,
        filter: Optional[Dict[str, Any]] = None,
        sorts: Optional[List[Dict[str, Any]]] = None,
        start_cursor: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        データベースを 1 ページ分 query し、レスポンス本文をそのまま返す。

        返り値には少なくとも results / has_more / next_cursor が含まれる。
        results の各要素は Notion API の生のページオブジェクト。
        """
        url = f"{self.config.api_base_url}/databases/{self.config.database_id}/query"

        payload: Dict[str, Any] = {"page_size": self.config.page_size}
        if filter is not None:
            payload["filter"] = filter
        if sorts is not None:
            payload["sorts"] = sorts
        if start_cursor is not None:
            payload["start_cursor"] = start_cursor

        logger.debug("POST %s start_cursor=%s", url, start_cursor)

        try:
            response = httpx.post(
                url,
                headers=self._build_headers(),
                json=payload,
                timeout=self.config.timeout_seconds,
            )
        except httpx.RequestError as exc:
            raise NotionClientError(f"Failed to call Notion API: {exc}") from exc

        self._raise_for_status(response)

        try:
            data = response.json()
        except ValueError as exc:
            raise NotionAPIError(
                "Unexpected Notion API response format: body is not JSON.",
                status_code=response.status_code,
            ) from exc

        if not isinstance(data, dict) or not isinstance(data.get("results"), list):
            raise NotionAPIError(
                "Unexpected Notion API response format: 'results' is not a list.",
                status_code=response.status_code,
            )

        logger.debug(
            "Notion query returned %d results (has_more=%s)",
            len(data["results"]),
            data.get("has_more"),
        )
        return data
