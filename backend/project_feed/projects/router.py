# backend/project_feed/projects/router.py

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from project_feed.notion.client import NotionClient
from project_feed.notion.config import get_notion_config
from project_feed.utils.config import EnvVarMissingError

from .schemas import FetchOutcome, ProjectEntry
from .service import ProjectFeedService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["projects"])


def get_project_feed_service() -> ProjectFeedService:
    """
    リクエストごとに ProjectFeedService を生成する。

    Notion の設定が欠けている場合は 500 として扱う。
    """
    try:
        config = get_notion_config()
    except EnvVarMissingError as exc:
        logger.error("Notion configuration is missing: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Notion integration is not configured.",
        ) from exc

    return ProjectFeedService(client=NotionClient(config))


@router.get(
    "/projects",
    response_model=List[ProjectEntry],
    response_model_exclude_none=True,
    summary="公開済みプロジェクト一覧を取得",
    description="Notion データベースから Published=true のページを Year 降順で取得し、フラットな形で返す。",
)
def list_projects(
    service: ProjectFeedService = Depends(get_project_feed_service),
) -> List[ProjectEntry]:
    """
    公開済みプロジェクト一覧を返すエンドポイント。

    - 正常系: 200 とプロジェクト配列（0 件なら []）
    - Notion API エラー: 502 Bad Gateway
    - 想定外のエラー: 500 Internal Server Error
    """
    result = service.fetch_all_posts()

    if result.outcome == FetchOutcome.API_ERROR:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to fetch projects from Notion.",
        )
    if result.outcome == FetchOutcome.UNEXPECTED_ERROR:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Unexpected error while fetching projects.",
        )

    return result.entries
