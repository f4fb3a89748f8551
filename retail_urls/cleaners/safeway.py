"""Safeway / Albertsons URL cleaner (both storefronts share one platform)."""

import logging
import re

from retail_urls.cleaners.base import (
    RetailerKind,
    Strategy,
    host_recognizer,
    is_url_text,
    strip_tracking_params,
)
from retail_urls.core.url_utils import origin_of, parse_absolute

logger = logging.getLogger(__name__)

PRODUCT_DETAILS_PREFIX = "/shop/product-details"
PRODUCT_ID_PATTERN = re.compile(r"product-details\.(\d+)\.html")

recognize_safeway_albertsons = host_recognizer("safeway.com", "albertsons.com")


def canonicalize_safeway_albertsons(url: str) -> str:
    """Reduce product pages to /shop/product-details.<id>.html, else strip tracking."""
    if not is_url_text(url):
        return url

    try:
        parts = parse_absolute(url)
        if PRODUCT_DETAILS_PREFIX in parts.path:
            match = PRODUCT_ID_PATTERN.search(parts.path)
            if match:
                return f"{origin_of(parts)}{PRODUCT_DETAILS_PREFIX}.{match.group(1)}.html"
        return strip_tracking_params(url)
    except Exception as e:
        logger.debug(f"Safeway/Albertsons cleaning skipped for {url!r}: {e}")
        return url


SAFEWAY_ALBERTSONS_STRATEGY = Strategy(
    kind=RetailerKind.SAFEWAY_ALBERTSONS,
    recognize=recognize_safeway_albertsons,
    canonicalize=canonicalize_safeway_albertsons,
)
