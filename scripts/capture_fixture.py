"""Capture live pages as HTML fixtures and report what the extractor finds."""

import asyncio
import sys
from datetime import datetime
from pathlib import Path
from urllib.parse import urlsplit

from sitelens.core.extractor import extract_content
from sitelens.core.fetcher import fetch_page
from sitelens.exceptions import NavigationError

DEFAULT_URLS = [
    "https://example.com",
    "https://www.python.org",
]

FIXTURES_DIR = Path(__file__).parent.parent / "tests" / "fixtures"


async def capture(url: str, save_fixture: bool = True) -> dict:
    """Fetch one URL, optionally save its HTML, and print the extraction."""
    print(f"\n{'='*60}")
    print(f"Fetching {url}...")
    print(f"{'='*60}")

    start = datetime.now()
    try:
        result = await fetch_page(url)
    except NavigationError as e:
        print(f"❌ {e.category.value}: {e.raw_message}")
        return {"url": url, "success": False}

    duration_ms = (datetime.now() - start).total_seconds() * 1000
    print(f"✓ Fetched in {duration_ms:.0f}ms ({len(result.html)} bytes, HTTP {result.response_status})")

    if save_fixture:
        FIXTURES_DIR.mkdir(parents=True, exist_ok=True)
        name = (urlsplit(url).hostname or "page").removeprefix("www.")
        fixture_path = FIXTURES_DIR / f"{name}.html"
        fixture_path.write_text(result.html, encoding="utf-8")
        print(f"✓ Saved fixture: {fixture_path}")

    content = extract_content(result.html)
    print(f"  Brand: {content.brand_name}")
    print(f"  Description: {content.description[:120]}")

    return {"url": url, "success": True, "duration_ms": duration_ms}


async def main():
    urls = sys.argv[1:] or DEFAULT_URLS
    results = [await capture(url) for url in urls]

    success_count = sum(1 for r in results if r["success"])
    print(f"\nCaptured {success_count}/{len(results)} pages")


if __name__ == "__main__":
    asyncio.run(main())
