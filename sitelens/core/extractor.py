"""BeautifulSoup-based brand and description extraction."""

from dataclasses import dataclass
from typing import Callable, Iterable

from bs4 import BeautifulSoup

Extractor = Callable[[BeautifulSoup], str | None]

FALLBACK_BRAND = "Unknown Brand"
FALLBACK_DESCRIPTION = "No description available"

MAX_BRAND_LENGTH = 255
MAX_DESCRIPTION_LENGTH = 1000

TITLE_SEPARATORS = (" - ", " | ")

# Selectors - centralized for easy updates
SELECTORS = {
    "og_site_name": 'meta[property="og:site_name" i]',
    "application_name": 'meta[name="application-name" i]',
    "meta_description": 'meta[name="description" i]',
    "og_description": 'meta[property="og:description" i]',
    "twitter_description": 'meta[name="twitter:description" i]',
    "title": "title",
    "heading": "h1",
    "logo": "header .logo",
    "paragraph": "p",
}


@dataclass
class ExtractedContent:
    """Fields pulled from a page."""

    brand_name: str
    description: str


def _meta_content(selector: str) -> Extractor:
    def extract(soup: BeautifulSoup) -> str | None:
        tag = soup.select_one(selector)
        if tag is None:
            return None
        content = tag.get("content")
        return content if isinstance(content, str) else None

    return extract


def _element_text(selector: str) -> Extractor:
    def extract(soup: BeautifulSoup) -> str | None:
        tag = soup.select_one(selector)
        if tag is None:
            return None
        return tag.get_text()

    return extract


def _joined_text(selector: str) -> Extractor:
    def extract(soup: BeautifulSoup) -> str | None:
        tags = soup.select(selector)
        if not tags:
            return None
        return "".join(tag.get_text() for tag in tags)

    return extract


def title_brand(soup: BeautifulSoup) -> str | None:
    """First segment of <title>, split on ' - ' then ' | '."""
    tag = soup.find(SELECTORS["title"])
    if tag is None:
        return None
    title = tag.get_text()
    for separator in TITLE_SEPARATORS:
        title = title.split(separator)[0]
    return title


site_name_meta = _meta_content(SELECTORS["og_site_name"])
application_name_meta = _meta_content(SELECTORS["application_name"])
first_heading = _element_text(SELECTORS["heading"])
logo_text = _joined_text(SELECTORS["logo"])

description_meta = _meta_content(SELECTORS["meta_description"])
og_description_meta = _meta_content(SELECTORS["og_description"])
twitter_description_meta = _meta_content(SELECTORS["twitter_description"])
first_paragraph = _element_text(SELECTORS["paragraph"])

BRAND_EXTRACTORS: tuple[Extractor, ...] = (
    site_name_meta,
    application_name_meta,
    title_brand,
    first_heading,
    logo_text,
)

DESCRIPTION_EXTRACTORS: tuple[Extractor, ...] = (
    description_meta,
    og_description_meta,
    twitter_description_meta,
    first_paragraph,
)


def first_present(
    soup: BeautifulSoup,
    extractors: Iterable[Extractor],
    fallback: str,
    max_length: int,
) -> str:
    """
    Run extractors in order and keep the first non-empty trimmed value.

    Args:
        soup: Parsed page
        extractors: Ordered extractor functions
        fallback: Value used when no extractor yields text
        max_length: Truncation limit for the result

    Returns:
        Trimmed value no longer than max_length
    """
    for extractor in extractors:
        value = extractor(soup)
        if value and value.strip():
            return value.strip()[:max_length]
    return fallback[:max_length]


def extract_brand_name(soup: BeautifulSoup) -> str:
    """Extract the brand name, falling back to 'Unknown Brand'."""
    return first_present(soup, BRAND_EXTRACTORS, FALLBACK_BRAND, MAX_BRAND_LENGTH)


def extract_description(soup: BeautifulSoup) -> str:
    """Extract the raw description, falling back to 'No description available'."""
    return first_present(
        soup, DESCRIPTION_EXTRACTORS, FALLBACK_DESCRIPTION, MAX_DESCRIPTION_LENGTH
    )


def extract_content(html: str) -> ExtractedContent:
    """
    Parse rendered HTML and pull brand name and description.

    Args:
        html: Rendered page HTML

    Returns:
        ExtractedContent with both fields populated
    """
    soup = BeautifulSoup(html, "html.parser")
    return ExtractedContent(
        brand_name=extract_brand_name(soup),
        description=extract_description(soup),
    )
