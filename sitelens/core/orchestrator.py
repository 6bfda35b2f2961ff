"""Pipeline orchestrator - coordinates fetching, extraction and enhancement."""

from datetime import datetime

from sitelens.config import AnalyzerConfig
from sitelens.logging import get_logger, configure_logging
from sitelens.core.enhancer import DescriptionEnhancer
from sitelens.core.extractor import extract_content
from sitelens.core.fetcher import fetch_page
from sitelens.core.urls import is_valid_url
from sitelens.exceptions import NavigationError
from sitelens.models.enhancement import EnhancementStatus
from sitelens.models.result import ErrorCategory, ScrapeResult
from sitelens.models.website import WebsiteRecordCreate


class Analyzer:
    """
    High-level interface: scrape a website and optionally enhance its description.

    Example:
        async with Analyzer() as analyzer:
            result = await analyzer.analyze("https://example.com")
            print(result.brand_name, result.description)
    """

    def __init__(
        self,
        config: AnalyzerConfig | None = None,
        enhancer: DescriptionEnhancer | None = None,
    ):
        """
        Initialize analyzer with optional configuration.

        Args:
            config: AnalyzerConfig instance, uses defaults if None
            enhancer: Enhancer to use, built from config if None
        """
        self.config = config or AnalyzerConfig()
        self.enhancer = enhancer or DescriptionEnhancer(self.config)
        self._log = get_logger("analyzer")

    async def __aenter__(self) -> "Analyzer":
        """Async context manager entry - configure logging."""
        configure_logging(self.config)
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Nothing is held between analyses."""

    def status(self) -> EnhancementStatus:
        """Enhancement availability, independent of any scrape."""
        return self.enhancer.status()

    async def analyze(
        self,
        url: str,
        enhance: bool = True,
        timeout_ms: int | None = None,
    ) -> ScrapeResult:
        """
        Scrape a single website.

        Input and navigation failures come back as a failed ScrapeResult;
        this method does not raise for them.

        Args:
            url: Absolute http(s) URL
            enhance: Run the extracted description through the enhancer
            timeout_ms: Navigation timeout, uses config default if None

        Returns:
            ScrapeResult
        """
        url = url.strip() if isinstance(url, str) else url
        start = datetime.now()
        self._log.info("analyze_start", url=url, enhance=enhance)

        if not is_valid_url(url):
            self._log.warning("invalid_url", url=url)
            return ScrapeResult.failure(str(url), ErrorCategory.INVALID_URL, "Invalid URL format")

        try:
            fetch_result = await fetch_page(
                url,
                headless=self.config.headless,
                timeout_ms=timeout_ms or self.config.browser_timeout_ms,
                retry_delay_ms=self.config.navigation_retry_delay_ms,
                user_agent=self.config.user_agent,
                viewport=(self.config.viewport_width, self.config.viewport_height),
            )
            content = extract_content(fetch_result.html)
        except NavigationError as e:
            self._log.error("navigation_failed", url=url, category=e.category.value, error=e.raw_message)
            return ScrapeResult.failure(url, e.category, e.raw_message, _elapsed_ms(start))
        except Exception as e:
            self._log.exception("analyze_failed", url=url)
            return ScrapeResult.failure(url, ErrorCategory.UNKNOWN_ERROR, str(e), _elapsed_ms(start))

        description = content.description
        used_fallback = False
        if enhance:
            outcome = await self.enhancer.enhance(content.description, content.brand_name, url)
            description = outcome.text
            used_fallback = outcome.used_fallback

        duration_ms = _elapsed_ms(start)
        self._log.info(
            "analyze_complete",
            url=url,
            brand_name=content.brand_name,
            description_length=len(description),
            duration_ms=duration_ms,
        )

        return ScrapeResult(
            url=url,
            success=True,
            brand_name=content.brand_name,
            description=description,
            raw_description=content.description,
            enhanced=enhance and description != content.description,
            used_fallback=used_fallback,
            scraped_at=datetime.now(),
            duration_ms=duration_ms,
        )


def to_record(result: ScrapeResult) -> WebsiteRecordCreate:
    """
    Flatten a successful ScrapeResult into a record for persistence.

    Raises:
        ValueError: If the scrape failed
    """
    if not result.success:
        raise ValueError(f"Cannot store failed scrape of {result.url}")
    return WebsiteRecordCreate(
        url=result.url,
        brand_name=result.brand_name,
        description=result.description,
        raw_description=result.raw_description,
        enhanced=result.enhanced,
    )


def _elapsed_ms(start: datetime) -> float:
    return (datetime.now() - start).total_seconds() * 1000
