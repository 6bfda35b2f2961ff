"""Persisted website analysis records."""

from datetime import datetime

from pydantic import BaseModel, Field

MAX_BRAND_LENGTH = 255
MAX_DESCRIPTION_LENGTH = 1000


class WebsiteRecordCreate(BaseModel):
    """Flat record produced from a successful scrape, ready for insertion."""

    url: str
    brand_name: str | None = Field(default=None, max_length=MAX_BRAND_LENGTH)
    description: str | None = Field(default=None, max_length=MAX_DESCRIPTION_LENGTH)
    raw_description: str | None = None
    enhanced: bool = False


class WebsiteRecord(WebsiteRecordCreate):
    """Stored website analysis."""

    id: int
    created_at: datetime
    updated_at: datetime


class WebsiteRecordUpdate(BaseModel):
    """Editable fields of a stored record."""

    brand_name: str | None = Field(default=None, max_length=MAX_BRAND_LENGTH)
    description: str | None = Field(default=None, max_length=MAX_DESCRIPTION_LENGTH)

    def changes(self) -> dict:
        """
        Fields the caller provided with a non-blank value.

        Null or whitespace-only values are treated as missing, so an
        update can never clear a column.
        """
        return {
            name: value.strip()
            for name, value in self.model_dump(exclude_unset=True).items()
            if value is not None and value.strip()
        }
