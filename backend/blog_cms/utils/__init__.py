# backend/blog_cms/utils/__init__.py
