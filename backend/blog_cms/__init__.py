# backend/blog_cms/__init__.py
"""
Blog CMS backend application package.

This package contains:
- main: FastAPI application entrypoint
- notion: Notion page import (URL → page id → blocks → Markdown)
- auth: admin / editor role check in front of CMS write operations
"""
