# backend/project_feed/notion/schemas.py

"""
Notion のページオブジェクトを内部で扱うためのスキーマ定義。

Notion のプロパティは "type" 文字列で種別が決まるタグ付きユニオンなので、
種別ごとに 1 モデルを用意し、知らない種別や壊れた値は UnknownProperty に落とす。
抽出側（projects.service）は isinstance で分岐し、合わなければデフォルト値を返す。
"""

import logging
from typing import Any, Dict, List, Literal, Optional, Type, Union

from pydantic import BaseModel, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)


class RichTextSegment(BaseModel):
    """rich_text / title 配列の 1 要素。plain_text だけ使う。"""

    plain_text: str = ""


class SelectOption(BaseModel):
    """multi_select の選択肢 1 件。"""

    id: Optional[str] = None
    name: str
    color: Optional[str] = None


class FileUrl(BaseModel):
    url: str


class HostedFileUrl(BaseModel):
    url: str
    expiry_time: Optional[str] = None


class ExternalFile(BaseModel):
    """外部 URL を参照するファイル。"""

    type: Literal["external"] = "external"
    name: Optional[str] = None
    external: FileUrl

    @property
    def url(self) -> str:
        return self.external.url


class HostedFile(BaseModel):
    """Notion 上にアップロードされたファイル（署名付き URL）。"""

    type: Literal["file"] = "file"
    name: Optional[str] = None
    file: HostedFileUrl

    @property
    def url(self) -> str:
        return self.file.url


class UnknownFile(BaseModel):
    """未対応の種別、または形式が崩れたファイル。URL は持たない。"""

    type: str = ""

    @property
    def url(self) -> str:
        return ""


PropertyFile = Union[ExternalFile, HostedFile, UnknownFile]

_FILE_MODELS: Dict[str, Type[BaseModel]] = {
    "external": ExternalFile,
    "file": HostedFile,
}


def parse_file(raw: Any) -> PropertyFile:
    """files 配列の 1 要素を種別ごとのモデルに変換する。"""
    if not isinstance(raw, dict):
        return UnknownFile()

    kind = raw.get("type")
    model = _FILE_MODELS.get(kind)
    if model is None:
        return UnknownFile(type=kind if isinstance(kind, str) else "")

    try:
        return model.model_validate(raw)
    except ValidationError:
        logger.debug("Malformed %s file object; ignoring URL.", kind)
        return UnknownFile(type=kind)


class TitleProperty(BaseModel):
    type: Literal["title"] = "title"
    title: List[RichTextSegment] = Field(default_factory=list)


class FilesProperty(BaseModel):
    type: Literal["files"] = "files"
    files: List[PropertyFile] = Field(default_factory=list)

    @field_validator("files", mode="before")
    @classmethod
    def _parse_files(cls, value: Any) -> List[PropertyFile]:
        if not isinstance(value, list):
            return []
        return [parse_file(item) for item in value]


class MultiSelectProperty(BaseModel):
    type: Literal["multi_select"] = "multi_select"
    multi_select: List[SelectOption] = Field(default_factory=list)


class NumberProperty(BaseModel):
    type: Literal["number"] = "number"
    # int を先に置き、2023 のような整数は int のまま保持する
    number: Optional[Union[int, float]] = None


class CheckboxProperty(BaseModel):
    type: Literal["checkbox"] = "checkbox"
    checkbox: bool = False


class UnknownProperty(BaseModel):
    """未対応の種別、欠落したプロパティ、形式が崩れたプロパティ。"""

    type: str = ""


PropertyValue = Union[
    TitleProperty,
    FilesProperty,
    MultiSelectProperty,
    NumberProperty,
    CheckboxProperty,
    UnknownProperty,
]

_PROPERTY_MODELS: Dict[str, Type[BaseModel]] = {
    "title": TitleProperty,
    "files": FilesProperty,
    "multi_select": MultiSelectProperty,
    "number": NumberProperty,
    "checkbox": CheckboxProperty,
}


def parse_property(raw: Any) -> PropertyValue:
    """
    Notion のプロパティ値 1 件を種別ごとのモデルに変換する。

    例外は投げない。解釈できないものはすべて UnknownProperty になる。
    """
    if not isinstance(raw, dict):
        return UnknownProperty()

    kind = raw.get("type")
    model = _PROPERTY_MODELS.get(kind)
    if model is None:
        return UnknownProperty(type=kind if isinstance(kind, str) else "")

    try:
        return model.model_validate(raw)
    except ValidationError:
        logger.debug("Malformed %s property; treating as unknown.", kind)
        return UnknownProperty(type=kind)


def is_full_page(raw: Any) -> bool:
    """
    query 結果の 1 件が完全なページオブジェクトかどうか。

    部分オブジェクト（id だけのもの等）や database オブジェクトは False。
    """
    return isinstance(raw, dict) and raw.get("object") == "page" and "url" in raw


class NotionPage(BaseModel):
    """
    Notion の完全なページオブジェクトのうち、このサービスが読む部分。
    """

    id: str = Field(..., description="Notion ページ ID")
    public_url: Optional[str] = Field(None, description="Web 公開時の URL")
    properties: Dict[str, PropertyValue] = Field(default_factory=dict)

    @classmethod
    def from_api(cls, raw: Dict[str, Any]) -> "NotionPage":
        """Notion API の生のページオブジェクトから生成する。"""
        raw_properties = raw.get("properties") or {}
        public_url = raw.get("public_url")

        return cls(
            id=raw["id"],
            public_url=public_url if isinstance(public_url, str) else None,
            properties={
                name: parse_property(value) for name, value in raw_properties.items()
            },
        )

    def get_property(self, name: str) -> PropertyValue:
        """プロパティを名前で取得する。存在しなければ UnknownProperty。"""
        return self.properties.get(name, UnknownProperty())
