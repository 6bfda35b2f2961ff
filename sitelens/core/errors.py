"""Mapping of browser navigation failures to error categories."""

from sitelens.models.result import ErrorCategory

# Checked in order; first category with a matching marker wins.
# Markers cover Chromium (net::ERR_*), Firefox (NS_ERROR_*), WebKit and OS errno text.
ERROR_MARKERS: list[tuple[ErrorCategory, tuple[str, ...]]] = [
    (ErrorCategory.DOMAIN_NOT_FOUND, (
        "ERR_NAME_NOT_RESOLVED",
        "ENOTFOUND",
        "NS_ERROR_UNKNOWN_HOST",
        "Could not resolve host",
        "Name or service not known",
    )),
    (ErrorCategory.CONNECTION_REFUSED, (
        "ERR_CONNECTION_REFUSED",
        "ECONNREFUSED",
        "NS_ERROR_CONNECTION_REFUSED",
        "Connection refused",
        "Could not connect",
    )),
    (ErrorCategory.TIMEOUT, (
        "Navigation timeout",
        "ETIMEDOUT",
        "ERR_TIMED_OUT",
        "NS_ERROR_NET_TIMEOUT",
        "Timeout ",
    )),
    (ErrorCategory.SSL_ERROR, (
        "ERR_SSL_",
        "ERR_CERT_",
        "SSL_ERROR",
        "SEC_ERROR_",
        "certificate",
    )),
    (ErrorCategory.REDIRECT_ERROR, (
        "ERR_TOO_MANY_REDIRECTS",
        "NS_ERROR_REDIRECT_LOOP",
        "Too many redirects",
    )),
]


def classify_navigation_error(message: str | None) -> ErrorCategory:
    """
    Map the text of a navigation failure to an ErrorCategory.

    Args:
        message: Error message raised by the browser automation layer

    Returns:
        Matching category, UNKNOWN_ERROR if nothing matches
    """
    if not message:
        return ErrorCategory.UNKNOWN_ERROR

    lowered = message.lower()
    for category, markers in ERROR_MARKERS:
        if any(marker.lower() in lowered for marker in markers):
            return category
    return ErrorCategory.UNKNOWN_ERROR
