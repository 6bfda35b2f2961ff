"""Scrape request and result models."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, field_validator

from sitelens.core.urls import is_valid_url

MAX_URL_LENGTH = 500


class ErrorCategory(str, Enum):
    """Failure category reported for a scrape."""
    INVALID_URL = "INVALID_URL"
    DOMAIN_NOT_FOUND = "DOMAIN_NOT_FOUND"
    CONNECTION_REFUSED = "CONNECTION_REFUSED"
    TIMEOUT = "TIMEOUT"
    SSL_ERROR = "SSL_ERROR"
    REDIRECT_ERROR = "REDIRECT_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"

    @property
    def message(self) -> str:
        """User-facing message for this category."""
        return ERROR_MESSAGES[self]


ERROR_MESSAGES = {
    ErrorCategory.INVALID_URL: "Invalid URL format",
    ErrorCategory.DOMAIN_NOT_FOUND: "Website domain could not be found",
    ErrorCategory.CONNECTION_REFUSED: "Website refused connection",
    ErrorCategory.TIMEOUT: "Website took too long to respond",
    ErrorCategory.SSL_ERROR: "SSL certificate error",
    ErrorCategory.REDIRECT_ERROR: "Too many redirects",
    ErrorCategory.UNKNOWN_ERROR: "Failed to load website",
}


class ScrapeRequest(BaseModel):
    """A request to analyze one website."""

    url: str = Field(max_length=MAX_URL_LENGTH)
    enhance: bool = True

    @field_validator("url")
    @classmethod
    def _check_url(cls, value: str) -> str:
        value = value.strip()
        if not is_valid_url(value):
            raise ValueError("url must be an absolute http or https URL")
        return value


class ScrapeResult(BaseModel):
    """Outcome of analyzing a single website."""

    model_config = {"frozen": True}

    url: str
    success: bool
    brand_name: str | None = None
    description: str | None = None
    raw_description: str | None = None
    enhanced: bool = False
    used_fallback: bool = False
    error: str | None = None
    error_category: ErrorCategory | None = None
    raw_error: str | None = None
    scraped_at: datetime
    duration_ms: float = 0.0

    @classmethod
    def failure(
        cls,
        url: str,
        category: ErrorCategory,
        raw_error: str | None = None,
        duration_ms: float = 0.0,
    ) -> "ScrapeResult":
        """Build a failed result with all content fields empty."""
        return cls(
            url=url,
            success=False,
            error=category.message,
            error_category=category,
            raw_error=raw_error,
            scraped_at=datetime.now(),
            duration_ms=duration_ms,
        )
