# backend/project_feed/projects/schemas.py
"""
/projects 用の Pydantic スキーマ定義。

- ProjectEntry: フロントエンドに返すフラットなレコード（JSON のキー名そのまま）
- ProjectFetchResult: アダプタの取得結果。成功 / 失敗種別をルーター側で HTTP ステータスに変換する
"""

from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, Field


class ProjectEntry(BaseModel):
    """
    ポートフォリオの 1 プロジェクト。

    Notion の 1 ページと 1:1 で対応する。projectYear が None の場合は
    レスポンスから省かれる（ルーターで exclude_none）。
    """

    id: str = Field(..., description="Notion ページ ID")
    title: str = Field("", description="Title プロパティの先頭テキスト")
    thumbnail: str = Field("", description="Thumbnail の先頭ファイルの URL")
    projectYear: Optional[Union[int, float]] = Field(
        None, description="Year プロパティ。未設定または 0 の場合は None"
    )
    tags: List[str] = Field(default_factory=list, description="Tags の選択肢名（順序維持）")
    publicLink: str = Field("", description="ページの公開 URL")


class FetchOutcome(str, Enum):
    """取得結果の種別。"""

    OK = "ok"
    API_ERROR = "api_error"
    UNEXPECTED_ERROR = "unexpected_error"


class ProjectFetchResult(BaseModel):
    """
    fetch_all_posts の戻り値。

    失敗時も例外ではなくこの型で返し、どう見せるかはルーターに任せる。
    """

    outcome: FetchOutcome
    entries: List[ProjectEntry] = Field(default_factory=list)
    error: Optional[str] = Field(None, description="失敗時のエラーメッセージ")

    @property
    def ok(self) -> bool:
        return self.outcome == FetchOutcome.OK
