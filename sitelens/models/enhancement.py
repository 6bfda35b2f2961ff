"""Description enhancement models."""

from pydantic import BaseModel


class EnhancementOutcome(BaseModel):
    """Text produced by the enhancer and whether the local fallback made it."""

    model_config = {"frozen": True}

    text: str
    used_fallback: bool


class EnhancementStatus(BaseModel):
    """Snapshot of the enhancer's availability."""

    model_config = {"frozen": True}

    enabled: bool
    model: str
    fallback_mode: bool
