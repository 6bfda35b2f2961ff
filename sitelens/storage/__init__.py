"""Persistence for analysed websites."""

from sitelens.storage.base import WebsiteStore
from sitelens.storage.sqlite_store import SQLiteWebsiteStore

__all__ = ["WebsiteStore", "SQLiteWebsiteStore"]
