# backend/project_feed/utils/config.py

"""
環境変数読み取り用のユーティリティ。
Notion 設定と CORS 設定の両方から共通利用する。
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


def get_env_int(name: str, default: int) -> int:
    """
    整数の環境変数を取得する。

    - 未設定 or パース不能の場合は default を返す。
    """
    raw = get_env(name, default=None, required=False)
    if raw is None:
        return default

    try:
        return int(raw)
    except ValueError:
        return default


def get_env_list(name: str, default: List[str]) -> List[str]:
    """
    カンマ区切りの環境変数をリストとして取得する。

    空要素は捨てる。結果が空なら default を返す。
    """
    raw = get_env(name, default=None, required=False)
    if raw is None:
        return list(default)

    values = [part.strip() for part in raw.split(",") if part.strip()]
    return values or list(default)
