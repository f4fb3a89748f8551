"""Fallback cleaner for any site without a dedicated strategy."""

import logging

from retail_urls.cleaners.base import RetailerKind, Strategy, is_url_text, strip_tracking_params

logger = logging.getLogger(__name__)


def recognize_any(url: str) -> bool:
    """The fallback owns every URL."""
    return True


def canonicalize_generic(url: str) -> str:
    """Drop the common tracking parameters; keep the rest, including the fragment."""
    if not is_url_text(url):
        return url

    try:
        return strip_tracking_params(url)
    except Exception as e:
        logger.debug(f"Generic cleaning skipped for {url!r}: {e}")
        return url


GENERIC_STRATEGY = Strategy(
    kind=RetailerKind.GENERIC,
    recognize=recognize_any,
    canonicalize=canonicalize_generic,
)
