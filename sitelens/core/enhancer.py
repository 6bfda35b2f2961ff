"""Gemini-backed description enhancement with a deterministic local fallback."""

import re
from typing import Any

import google.generativeai as genai

from sitelens.config import AnalyzerConfig
from sitelens.logging import get_logger
from sitelens.models.enhancement import EnhancementOutcome, EnhancementStatus

NO_DESCRIPTION = "No description available"
MIN_ENHANCE_LENGTH = 10
MAX_LENGTH = 1000
ELLIPSIS = "..."

_TAG_RE = re.compile(r"<[^>]*>")
_WHITESPACE_RE = re.compile(r"\s+")
_EDGE_QUOTES_RE = re.compile(r"^[\"']|[\"']$")
_LABEL_RE = re.compile(r"^Enhanced Description:\s*", re.IGNORECASE)
_SENTENCE_GAP_RE = re.compile(r"([.!?])\s*([a-z])")
_TERMINAL_RE = re.compile(r"[.!?]$")

PROMPT_TEMPLATE = """You are an expert content editor specializing in making website descriptions clear, engaging, and professional. Focus on clarity, proper grammar, and readability while maintaining the original meaning.
Please enhance the following website description to improve its readability and professionalism:

Original Description: "{description}"
{context}
Instructions:
1. Improve grammar, punctuation, and sentence structure
2. Make the description more engaging and professional
3. Keep the core meaning and key information intact
4. Ensure it's concise (maximum 200 words)
5. Remove any technical jargon or HTML artifacts
6. Make it suitable for a business directory or search results
7. Do not add information that wasn't in the original description
8. Return only the enhanced description without quotes or additional text

Enhanced Description:"""


def _truncate(text: str) -> str:
    if len(text) > MAX_LENGTH:
        return text[: MAX_LENGTH - len(ELLIPSIS)] + ELLIPSIS
    return text


def _collapse(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", _TAG_RE.sub("", text)).strip()


def build_prompt(
    raw_text: str,
    brand_name: str | None = None,
    url: str | None = None,
) -> str:
    """Render the enhancement prompt for a description."""
    context = ""
    if brand_name:
        context += f"Brand/Company: {brand_name}\n"
    if url:
        context += f"Website: {url}\n"
    return PROMPT_TEMPLATE.format(description=raw_text, context=context)


def sanitize_response(text: str) -> str:
    """
    Clean up a model response.

    Strips wrapping quotes, a leading "Enhanced Description:" label and any
    markup, collapses whitespace and caps the length.
    """
    text = _EDGE_QUOTES_RE.sub("", text.strip())
    text = _LABEL_RE.sub("", text)
    return _truncate(_collapse(text))


def local_cleanup(text: str | None) -> str:
    """
    Deterministic tidy-up used whenever the model is not consulted.

    Args:
        text: Raw description

    Returns:
        Cleaned, capitalized, punctuated text of at most 1000 characters
    """
    if not text or not text.strip():
        return NO_DESCRIPTION

    cleaned = _collapse(text)
    if not cleaned:
        return NO_DESCRIPTION

    cleaned = _SENTENCE_GAP_RE.sub(r"\1 \2", cleaned)
    cleaned = cleaned[0].upper() + cleaned[1:]
    if not _TERMINAL_RE.search(cleaned):
        cleaned += "."
    return _truncate(cleaned)


class DescriptionEnhancer:
    """
    Rewrites scraped descriptions with Gemini.

    Enabled only when an API key is configured at construction; otherwise every
    call goes through local_cleanup.

    Example:
        enhancer = DescriptionEnhancer(AnalyzerConfig(gemini_api_key="..."))
        outcome = await enhancer.enhance("we sell shoes", "Acme")
    """

    def __init__(self, config: AnalyzerConfig | None = None, model: Any | None = None):
        """
        Args:
            config: AnalyzerConfig instance, uses defaults if None
            model: Pre-built generative model used in place of Gemini when a key is set
        """
        self.config = config or AnalyzerConfig()
        self.model_name = self.config.gemini_model
        self.enabled = bool(self.config.gemini_api_key)
        self._log = get_logger("enhancer")

        if self.enabled and model is not None:
            self._model = model
        elif self.enabled:
            genai.configure(api_key=self.config.gemini_api_key)
            self._model = genai.GenerativeModel(self.model_name)
        else:
            self._model = None
            self._log.warning("enhancement_disabled", reason="no Gemini API key configured")

    def status(self) -> EnhancementStatus:
        """Current availability snapshot."""
        return EnhancementStatus(
            enabled=self.enabled,
            model=self.model_name,
            fallback_mode=not self.enabled,
        )

    async def enhance(
        self,
        raw_text: str | None,
        brand_name: str | None = None,
        url: str | None = None,
    ) -> EnhancementOutcome:
        """
        Improve a description, never raising.

        Args:
            raw_text: Extracted description
            brand_name: Optional brand for prompt context
            url: Optional source URL for prompt context

        Returns:
            EnhancementOutcome; used_fallback is True when the model was skipped or failed
        """
        if not self.enabled:
            return self._fallback(raw_text, reason="disabled")
        if not raw_text or len(raw_text.strip()) < MIN_ENHANCE_LENGTH:
            return self._fallback(raw_text, reason="too_short")

        self._log.info("enhancement_start", brand_name=brand_name, url=url)
        prompt = build_prompt(raw_text, brand_name, url)

        try:
            response = await self._model.generate_content_async(
                prompt,
                request_options={"timeout": self.config.enhancement_timeout_s},
            )
            text = (response.text or "").strip()
        except Exception as e:
            self._log_failure(e)
            return self._fallback(raw_text, reason="error")

        enhanced = sanitize_response(text) if text else ""
        if not enhanced:
            self._log.warning("enhancement_empty_response")
            return self._fallback(raw_text, reason="empty")

        self._log.info(
            "enhancement_complete",
            raw_length=len(raw_text),
            enhanced_length=len(enhanced),
        )
        return EnhancementOutcome(text=enhanced, used_fallback=False)

    def _fallback(self, raw_text: str | None, reason: str) -> EnhancementOutcome:
        self._log.info("enhancement_fallback", reason=reason)
        return EnhancementOutcome(text=local_cleanup(raw_text), used_fallback=True)

    def _log_failure(self, error: Exception) -> None:
        message = str(error)
        lowered = message.lower()
        if "api key" in lowered:
            self._log.error("enhancement_invalid_api_key", error=message)
        elif "quota" in lowered or "limit" in lowered or "429" in lowered:
            self._log.warning("enhancement_quota_exceeded", error=message)
        else:
            self._log.error("enhancement_failed", error=message)
