"""Unit tests for Analyzer orchestrator - mocked fetcher, no internet."""

import pytest
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

from sitelens.config import AnalyzerConfig
from sitelens.core.enhancer import DescriptionEnhancer
from sitelens.core.fetcher import FetchResult
from sitelens.core.orchestrator import Analyzer, to_record
from sitelens.exceptions import NavigationError
from sitelens.models.result import ErrorCategory


FIXTURES_DIR = Path(__file__).parent / "fixtures"


def load_fixture_html(name: str) -> str:
    """Load HTML fixture."""
    return (FIXTURES_DIR / f"{name}.html").read_text(encoding="utf-8")


def offline_config(**overrides) -> AnalyzerConfig:
    """Config with AI disabled and no retry delay."""
    values = {"gemini_api_key": None, "navigation_retry_delay_ms": 0}
    values.update(overrides)
    return AnalyzerConfig(**values)


def failing_model() -> MagicMock:
    model = MagicMock()
    model.generate_content_async = AsyncMock(side_effect=ConnectionError("transport down"))
    return model


class TestAnalyzerInit:
    """Test Analyzer initialization."""

    def test_default_config(self):
        """Analyzer builds a default config."""
        analyzer = Analyzer()
        assert analyzer.config is not None
        assert analyzer.config.headless is True

    def test_custom_config(self):
        analyzer = Analyzer(offline_config(headless=False))
        assert analyzer.config.headless is False

    def test_status_reports_fallback_without_key(self):
        """Status shows fallback mode without a key."""
        status = Analyzer(offline_config()).status()
        assert status.enabled is False
        assert status.fallback_mode is True


class TestAnalyzerContextManager:
    """Test async context manager."""

    @pytest.mark.asyncio
    async def test_context_manager_enters(self):
        async with Analyzer(offline_config()) as analyzer:
            assert analyzer is not None


class TestAnalyzeInvalidUrl:
    """Input errors fail fast without touching the browser."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("url", [
        "not a url",
        "example.com",
        "ftp://example.com/file",
        "javascript:alert(1)",
        "http://",
        "https://exa mple.com",
        "http://example.com:99999",
        "",
    ])
    async def test_invalid_url(self, url):
        """Invalid URLs fail without fetching."""
        with patch("sitelens.core.orchestrator.fetch_page", new_callable=AsyncMock) as mock_fetch:
            result = await Analyzer(offline_config()).analyze(url)

        assert result.success is False
        assert result.error_category == ErrorCategory.INVALID_URL
        assert result.error == "Invalid URL format"
        assert result.brand_name is None
        assert result.description is None
        assert result.raw_description is None
        mock_fetch.assert_not_called()


class TestAnalyzeSuccess:
    """Successful scrapes."""

    @pytest.mark.asyncio
    async def test_extracts_without_enhancement(self):
        """Raw extraction is returned when enhancement is off."""
        html = load_fixture_html("acme")

        with patch("sitelens.core.orchestrator.fetch_page", new_callable=AsyncMock) as mock_fetch:
            mock_fetch.return_value = FetchResult(html=html, response_status=200)
            result = await Analyzer(offline_config()).analyze("https://acme.example", enhance=False)

        assert result.success is True
        assert result.brand_name == "Acme"
        assert result.raw_description == "Acme makes rockets, anvils and other fine goods for coyotes."
        assert result.description == result.raw_description
        assert result.enhanced is False
        assert result.error is None
        assert result.error_category is None
        mock_fetch.assert_called_once()

    @pytest.mark.asyncio
    async def test_meta_description_exact(self):
        html = '<html><head><meta name="description" content="A great shop"></head></html>'

        with patch("sitelens.core.orchestrator.fetch_page", new_callable=AsyncMock) as mock_fetch:
            mock_fetch.return_value = FetchResult(html=html)
            result = await Analyzer(offline_config()).analyze("https://shop.example")

        assert result.raw_description == "A great shop"

    @pytest.mark.asyncio
    async def test_fallback_enhancement_marks_enhanced_when_text_changes(self):
        """Local cleanup that changes text counts as enhanced."""
        html = '<html><head><meta name="description" content="we sell shoes"></head></html>'

        with patch("sitelens.core.orchestrator.fetch_page", new_callable=AsyncMock) as mock_fetch:
            mock_fetch.return_value = FetchResult(html=html)
            result = await Analyzer(offline_config()).analyze("https://shoes.example")

        assert result.description == "We sell shoes."
        assert result.raw_description == "we sell shoes"
        assert result.used_fallback is True
        assert result.enhanced is True

    @pytest.mark.asyncio
    async def test_enhancement_failure_keeps_success(self):
        """Enhancer failure never fails the scrape."""
        html = load_fixture_html("acme")
        config = offline_config(gemini_api_key="test-key")
        enhancer = DescriptionEnhancer(config, model=failing_model())

        with patch("sitelens.core.orchestrator.fetch_page", new_callable=AsyncMock) as mock_fetch:
            mock_fetch.return_value = FetchResult(html=html)
            result = await Analyzer(config, enhancer=enhancer).analyze("https://acme.example")

        assert result.success is True
        assert result.used_fallback is True
        assert result.description

    @pytest.mark.asyncio
    async def test_passes_timeout_override(self):
        """Per-call timeout reaches the fetcher."""
        with patch("sitelens.core.orchestrator.fetch_page", new_callable=AsyncMock) as mock_fetch:
            mock_fetch.return_value = FetchResult(html="<html></html>")
            await Analyzer(offline_config()).analyze("https://acme.example", timeout_ms=1234)

        assert mock_fetch.call_args.kwargs["timeout_ms"] == 1234

    @pytest.mark.asyncio
    async def test_strips_surrounding_whitespace(self):
        with patch("sitelens.core.orchestrator.fetch_page", new_callable=AsyncMock) as mock_fetch:
            mock_fetch.return_value = FetchResult(html="<html></html>")
            result = await Analyzer(offline_config()).analyze("  https://acme.example  ")

        assert result.url == "https://acme.example"
        assert result.brand_name == "Unknown Brand"


class TestAnalyzeFailure:
    """Navigation and extraction failures."""

    @pytest.mark.asyncio
    async def test_navigation_error(self):
        """Navigation errors become failed results with their category."""
        raw = "Page.goto: net::ERR_NAME_NOT_RESOLVED at https://known-down-domain.invalid/"

        with patch("sitelens.core.orchestrator.fetch_page", new_callable=AsyncMock) as mock_fetch:
            mock_fetch.side_effect = NavigationError(ErrorCategory.DOMAIN_NOT_FOUND, raw)
            result = await Analyzer(offline_config()).analyze("https://known-down-domain.invalid")

        assert result.success is False
        assert result.error_category == ErrorCategory.DOMAIN_NOT_FOUND
        assert result.error == "Website domain could not be found"
        assert result.raw_error == raw
        assert result.enhanced is False

    @pytest.mark.asyncio
    async def test_extraction_error_is_structured(self):
        """Unexpected errors become UNKNOWN_ERROR results."""
        with patch("sitelens.core.orchestrator.fetch_page", new_callable=AsyncMock) as mock_fetch, \
                patch("sitelens.core.orchestrator.extract_content", side_effect=RuntimeError("boom")):
            mock_fetch.return_value = FetchResult(html="<html></html>")
            result = await Analyzer(offline_config()).analyze("https://acme.example")

        assert result.success is False
        assert result.error_category == ErrorCategory.UNKNOWN_ERROR
        assert result.raw_error == "boom"


class TestToRecord:
    """Flattening results for persistence."""

    @pytest.mark.asyncio
    async def test_successful_result(self):
        with patch("sitelens.core.orchestrator.fetch_page", new_callable=AsyncMock) as mock_fetch:
            mock_fetch.return_value = FetchResult(html=load_fixture_html("acme"))
            result = await Analyzer(offline_config()).analyze("https://acme.example", enhance=False)

        record = to_record(result)
        assert record.url == "https://acme.example"
        assert record.brand_name == "Acme"
        assert record.raw_description == result.raw_description
        assert record.enhanced is False

    @pytest.mark.asyncio
    async def test_failed_result_rejected(self):
        """Failed results cannot be stored."""
        result = await Analyzer(offline_config()).analyze("not a url")
        with pytest.raises(ValueError):
            to_record(result)
