"""URL validation helpers."""

from urllib.parse import urlsplit

ALLOWED_SCHEMES = ("http", "https")


def is_valid_url(url: str | None) -> bool:
    """
    Check that a string is an absolute http(s) URL with a host.

    Args:
        url: Candidate URL

    Returns:
        True if the URL can be navigated to
    """
    if not url or not isinstance(url, str):
        return False
    if any(ch.isspace() for ch in url):
        return False

    try:
        parts = urlsplit(url)
        # Accessing .port validates it
        parts.port
    except ValueError:
        return False

    return parts.scheme.lower() in ALLOWED_SCHEMES and bool(parts.hostname)
