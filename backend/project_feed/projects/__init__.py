# backend/project_feed/projects/__init__.py

"""
ポートフォリオ用プロジェクト一覧モジュール群。

- service: Notion ページ → ProjectEntry の変換と全件取得
- router: GET /projects
"""
