# backend/project_feed/notion/__init__.py

"""
Notion 連携用モジュール群。

主な責務:
- Notion API からデータベースを 1 ページずつ読み取る
- ページオブジェクトのプロパティを種別ごとのモデルに変換する
"""
