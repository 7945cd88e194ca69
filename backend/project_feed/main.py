# backend/project_feed/main.py

"""
バックエンドアプリケーションのエントリーポイント。

主な責務:
- /projects エンドポイントを公開する
- ポートフォリオのフロントエンドからの CORS を許可する
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from project_feed.projects.router import router as projects_router
from project_feed.utils.config import get_env_list

DEFAULT_CORS_ORIGINS = [
    "https://portfolio-vite-ept.pages.dev",
    "http://localhost:4173",
    "http://localhost:5173",
]


def create_app() -> FastAPI:
    """
    FastAPI アプリケーションファクトリ。

    - プロジェクト一覧エンドポイント (/projects)
    - 疎通確認用のルート (/)
    - ヘルスチェックエンドポイント (/health)
    """
    app = FastAPI(title="Portfolio Project Feed")

    # 許可オリジンは CORS_ALLOW_ORIGINS（カンマ区切り）で上書きできる
    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_env_list("CORS_ALLOW_ORIGINS", DEFAULT_CORS_ORIGINS),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT"],
        allow_headers=["Content-Type", "Authorization"],
    )

    # ルーター登録
    app.include_router(projects_router)

    @app.get("/", response_class=PlainTextResponse, tags=["health"])
    def root() -> str:
        return "Hello Hono!"

    @app.get("/health", tags=["health"])
    def health_check() -> dict:
        """
        簡易ヘルスチェックエンドポイント。
        モニタリングや動作確認用。
        """
        return {"status": "ok"}

    return app


# uvicorn 実行時のエントリーポイント
app = create_app()
