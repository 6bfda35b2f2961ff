"""Export utilities for scrape results."""

from pathlib import Path
from urllib.parse import urlsplit

from sitelens.models.result import ScrapeResult


def result_filename(result: ScrapeResult) -> str:
    """File name for a result, derived from the URL host."""
    host = urlsplit(result.url).hostname or "result"
    return f"{host.removeprefix('www.')}.json"


def save_json(
    result: ScrapeResult,
    filepath: str | Path,
    indent: int = 2,
) -> Path:
    """
    Save ScrapeResult to JSON file.

    Args:
        result: ScrapeResult to save
        filepath: Output file path
        indent: JSON indentation level

    Returns:
        Path to saved file
    """
    path = Path(filepath)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(result.model_dump_json(indent=indent), encoding="utf-8")
    return path
