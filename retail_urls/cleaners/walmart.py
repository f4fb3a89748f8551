"""Walmart URL cleaner."""

import logging
import re
from typing import Optional
from urllib.parse import SplitResult, parse_qs, unquote, urlsplit

from retail_urls.cleaners.base import (
    RetailerKind,
    Strategy,
    host_recognizer,
    is_url_text,
    strip_tracking_params,
)
from retail_urls.core.url_utils import origin_of, parse_absolute

logger = logging.getLogger(__name__)

PRODUCT_PATTERN = re.compile(r"/ip/([^/]+/\d+)")
REDIRECT_PARAM = "rd"

recognize_walmart = host_recognizer("walmart.com")


def canonicalize_walmart(url: str) -> str:
    """
    Reduce a Walmart URL to /ip/<slug>/<id> when it points at a product.

    Tracking redirects (rd=) are followed one level to find the product.
    Other URLs only lose their tracking parameters.
    """
    if not is_url_text(url):
        return url

    try:
        cleaned = strip_tracking_params(url)
        parts = urlsplit(cleaned)
        return _product_from_redirect(parts) or _product_url(parts) or cleaned
    except Exception as e:
        logger.debug(f"Walmart cleaning skipped for {url!r}: {e}")
        return url


def _product_from_redirect(parts: SplitResult) -> Optional[str]:
    values = parse_qs(parts.query).get(REDIRECT_PARAM)
    if not values:
        return None

    try:
        target = parse_absolute(unquote(values[0]))
    except ValueError as e:
        logger.debug(f"Unusable Walmart redirect target {values[0]!r}: {e}")
        return None
    return _product_url(target)


def _product_url(parts: SplitResult) -> Optional[str]:
    match = PRODUCT_PATTERN.search(parts.path)
    if not match:
        return None
    return f"{origin_of(parts)}/ip/{match.group(1)}"


WALMART_STRATEGY = Strategy(
    kind=RetailerKind.WALMART,
    recognize=recognize_walmart,
    canonicalize=canonicalize_walmart,
)
