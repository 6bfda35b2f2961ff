"""Pydantic models for sitelens."""

from sitelens.models.result import ErrorCategory, ScrapeRequest, ScrapeResult
from sitelens.models.enhancement import EnhancementOutcome, EnhancementStatus
from sitelens.models.website import WebsiteRecord, WebsiteRecordCreate, WebsiteRecordUpdate

__all__ = [
    "ErrorCategory",
    "ScrapeRequest",
    "ScrapeResult",
    "EnhancementOutcome",
    "EnhancementStatus",
    "WebsiteRecord",
    "WebsiteRecordCreate",
    "WebsiteRecordUpdate",
]
