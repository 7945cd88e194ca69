# backend/project_feed/__init__.py
"""
Portfolio project feed backend package.

This package contains:
- main: FastAPI application entrypoint
- notion: Notion database query client and page schemas
- projects: /projects feed (Notion page -> flat project entry)
"""
