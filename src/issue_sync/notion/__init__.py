"""Notion REST access for the issue tracking database."""
from .client import NotionApi
from .pages import PageLocator, PageWriter

__all__ = ["NotionApi", "PageLocator", "PageWriter"]
