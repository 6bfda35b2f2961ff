"""Playwright-based page fetcher for arbitrary websites."""

import asyncio
from dataclasses import dataclass

from playwright.async_api import (
    async_playwright,
    Browser,
    BrowserContext,
    Page,
    Response,
    Error as PlaywrightError,
    TimeoutError as PlaywrightTimeoutError,
)

from sitelens.core.errors import classify_navigation_error
from sitelens.exceptions import NavigationError
from sitelens.logging import get_logger
from sitelens.models.result import ErrorCategory

log = get_logger("fetcher")


@dataclass
class FetchResult:
    """Rendered page returned by a fetch."""

    html: str
    response_status: int | None = None
    attempts: int = 1


DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

# Chromium flags that keep a short-lived headless process lean
BROWSER_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-accelerated-2d-canvas",
    "--no-first-run",
    "--no-zygote",
    "--disable-gpu",
]


async def fetch_page(
    url: str,
    headless: bool = True,
    timeout_ms: int = 20000,
    retry_delay_ms: int = 1000,
    user_agent: str | None = None,
    viewport: tuple[int, int] = (1280, 720),
) -> FetchResult:
    """
    Fetch the rendered HTML of a page in a fresh browser process.

    A failed navigation is retried once after retry_delay_ms. The browser is
    always torn down before returning or raising.

    Args:
        url: Absolute http(s) URL
        headless: Run browser in headless mode
        timeout_ms: Navigation timeout in milliseconds
        retry_delay_ms: Pause before the single retry
        user_agent: Custom user agent string
        viewport: Viewport (width, height)

    Returns:
        FetchResult with rendered HTML

    Raises:
        NavigationError: If both navigation attempts fail
    """
    async with async_playwright() as p:
        browser: Browser = await p.chromium.launch(
            headless=headless,
            timeout=timeout_ms,
            args=BROWSER_ARGS,
        )

        try:
            width, height = viewport
            context: BrowserContext = await browser.new_context(
                viewport={"width": width, "height": height},
                user_agent=user_agent or DEFAULT_USER_AGENT,
            )
            page: Page = await context.new_page()
            page.set_default_timeout(timeout_ms)

            response, attempts = await _goto_with_retry(page, url, timeout_ms, retry_delay_ms)

            status = response.status if response is not None else None
            if status is not None and status >= 400:
                log.warning("http_error_status", url=url, status=status)

            html = await page.content()
            return FetchResult(html=html, response_status=status, attempts=attempts)

        except PlaywrightTimeoutError as e:
            raise NavigationError(ErrorCategory.TIMEOUT, str(e)) from e
        except PlaywrightError as e:
            raise NavigationError(classify_navigation_error(str(e)), str(e)) from e
        finally:
            await close_browser(browser)


async def _goto_with_retry(
    page: Page,
    url: str,
    timeout_ms: int,
    retry_delay_ms: int,
) -> tuple[Response | None, int]:
    """Navigate to url, retrying exactly once on failure."""
    try:
        response = await page.goto(url, wait_until="domcontentloaded", timeout=timeout_ms)
        return response, 1
    except PlaywrightError as e:
        log.warning("navigation_retry", url=url, error=str(e), delay_ms=retry_delay_ms)

    await asyncio.sleep(retry_delay_ms / 1000)
    response = await page.goto(url, wait_until="domcontentloaded", timeout=timeout_ms)
    return response, 2


async def close_browser(browser: Browser) -> None:
    """Close every open page, then the browser process. Never raises."""
    for context in list(browser.contexts):
        for page in list(context.pages):
            try:
                await page.close()
            except PlaywrightError as e:
                log.error("page_close_failed", error=str(e))

    try:
        await browser.close()
    except PlaywrightError as e:
        log.error("browser_close_failed", error=str(e))
