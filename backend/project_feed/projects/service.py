# backend/project_feed/projects/service.py

"""
Notion クライアントとプロジェクト一覧スキーマをつなぐサービス層。

- Published == true のページを Year 降順で全件取得（ページングあり）
- Notion ページ → ProjectEntry への変換
"""

import logging
from typing import Any, Dict, List, Optional, Union

from project_feed.notion.client import NotionClient, NotionClientError
from project_feed.notion.config import NotionConfig
from project_feed.notion.schemas import (
    FilesProperty,
    MultiSelectProperty,
    NotionPage,
    NumberProperty,
    TitleProperty,
    is_full_page,
)

from .schemas import FetchOutcome, ProjectEntry, ProjectFetchResult

logger = logging.getLogger(__name__)


PUBLISHED_FILTER: Dict[str, Any] = {
    "and": [
        {
            "property": "Published",
            "checkbox": {"equals": True},
        }
    ]
}

YEAR_DESCENDING_SORTS: List[Dict[str, Any]] = [
    {"property": "Year", "direction": "descending"},
]


def get_title(page: NotionPage) -> str:
    """Title プロパティの先頭セグメントのテキスト。なければ空文字。"""
    prop = page.get_property("Title")
    if isinstance(prop, TitleProperty) and prop.title:
        return prop.title[0].plain_text
    return ""


def get_thumbnail_url(page: NotionPage) -> str:
    """
    Thumbnail プロパティの先頭ファイルの URL。

    external なら外部 URL、file なら Notion 上のファイル URL。
    ファイルがなければ空文字。
    """
    prop = page.get_property("Thumbnail")
    if isinstance(prop, FilesProperty) and prop.files:
        return prop.files[0].url
    return ""


def get_tags(page: NotionPage) -> List[str]:
    prop = page.get_property("Tags")
    if isinstance(prop, MultiSelectProperty):
        return [option.name for option in prop.multi_select]
    return []


def get_project_year(page: NotionPage) -> Optional[Union[int, float]]:
    """Year プロパティ。number 型でない、未設定、0 の場合は None。"""
    prop = page.get_property("Year")
    if isinstance(prop, NumberProperty) and prop.number:
        return prop.number
    return None


def get_public_link(page: NotionPage) -> str:
    return page.public_url or ""


def to_project_entry(page: NotionPage) -> ProjectEntry:
    """NotionPage 1 件を ProjectEntry に変換する。"""
    return ProjectEntry(
        id=page.id,
        title=get_title(page),
        thumbnail=get_thumbnail_url(page),
        projectYear=get_project_year(page),
        tags=get_tags(page),
        publicLink=get_public_link(page),
    )


class ProjectFeedService:
    """
    NotionClient を利用して、公開済みプロジェクトの一覧を返すサービス。

    リクエストごとに生成する前提で、状態は持たない。
    """

    def __init__(self, client: Optional[NotionClient] = None) -> None:
        self.client = client or NotionClient()

    def _query_full_pages(self) -> List[Dict[str, Any]]:
        """
        has_more が False になるまで next_cursor をたどり、完全なページだけを集める。
        """
        pages: List[Dict[str, Any]] = []
        cursor: Optional[str] = None

        while True:
            response = self.client.query_database(
                filter=PUBLISHED_FILTER,
                sorts=YEAR_DESCENDING_SORTS,
                start_cursor=cursor,
            )

            for result in response["results"]:
                if is_full_page(result):
                    pages.append(result)
                else:
                    logger.debug("Skipping partial Notion object: %r", result)

            cursor = response.get("next_cursor")
            if not response.get("has_more"):
                break
            if not cursor:
                logger.warning("Notion reported has_more without next_cursor; stopping.")
                break

        return pages

    def fetch_all_posts(self) -> ProjectFetchResult:
        """
        公開済みプロジェクトを全件取得し、ProjectFetchResult として返す。

        - Notion 側のエラー（NotionClientError）: API_ERROR
        - それ以外の例外: UNEXPECTED_ERROR
        どちらも例外は外に出さず、ログに残す。
        """
        try:
            raw_pages = self._query_full_pages()
            entries = [to_project_entry(NotionPage.from_api(raw)) for raw in raw_pages]
        except NotionClientError as exc:
            logger.error("Notion API error while fetching projects: %s", exc)
            return ProjectFetchResult(outcome=FetchOutcome.API_ERROR, error=str(exc))
        except Exception as exc:  # noqa: BLE001
            logger.exception("Unexpected error while fetching projects.")
            return ProjectFetchResult(
                outcome=FetchOutcome.UNEXPECTED_ERROR, error=str(exc)
            )

        return ProjectFetchResult(outcome=FetchOutcome.OK, entries=entries)


def fetch_all_posts(
    config: NotionConfig,
    client: Optional[NotionClient] = None,
) -> ProjectFetchResult:
    """
    設定を明示的に受け取って公開済みプロジェクトを取得する。

    client を渡さない場合はこの呼び出し専用の NotionClient を生成する。
    """
    service = ProjectFeedService(client=client or NotionClient(config))
    return service.fetch_all_posts()
