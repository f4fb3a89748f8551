"""Amazon URL cleaner."""

import logging
import re
from typing import Optional
from urllib.parse import SplitResult, unquote

from retail_urls.cleaners.base import (
    TRACKING_PARAMS,
    RetailerKind,
    Strategy,
    host_recognizer,
    is_url_text,
)
from retail_urls.core.url_utils import compose_url, origin_of, parse_absolute, strip_query_params

logger = logging.getLogger(__name__)

AMAZON_TRACKING_PARAMS = TRACKING_PARAMS + (
    "dib",
    "dib_tag",
    "keywords",
    "qid",
    "sbo",
    "sr",
    "psc",
    "sp_csd",
    "ie",
    "spc",
    "pd_rd_i",
    "pd_rd_w",
    "pd_rd_wg",
    "pf_rd_p",
    "pf_rd_r",
    "pd_rd_r",
    "_encoding",
    "pf_rd_s",
    "pf_rd_t",
)

# Sponsored-product click wrappers carry the real target in url=
REDIRECT_SEGMENTS = ("/sspa/click", "/sp/click")
REDIRECT_TARGET_PATTERN = re.compile(r"(?:^|&)url=([^&]+)")

DP_PATTERN = re.compile(r"/dp/([A-Z0-9]{10})", re.IGNORECASE)
GP_PRODUCT_PATTERN = re.compile(r"/gp/product/([A-Z0-9]{10})", re.IGNORECASE)
REF_SEGMENT_PATTERN = re.compile(r"/ref=.*$")
SEARCH_PATH = "/s"

recognize_amazon = host_recognizer("amazon.")


def canonicalize_amazon(url: str) -> str:
    """
    Reduce an Amazon URL to its canonical form.

    - Click wrappers are unwrapped and the target is cleaned again
    - Product pages keep only the title slug and the ASIN
    - Search pages lose their query entirely
    - Anything else loses tracking parameters and trailing ref= segments
    """
    if not is_url_text(url):
        return url

    try:
        parts = parse_absolute(url)
        target = _unwrap_click_redirect(parts)
        if target:
            # No cycle guard: each level is decoded out of the previous one
            return canonicalize_amazon(target)
        return _canonical_form(parts)
    except Exception as e:
        logger.debug(f"Amazon cleaning skipped for {url!r}: {e}")
        return url


def _unwrap_click_redirect(parts: SplitResult) -> Optional[str]:
    if not any(segment in parts.path for segment in REDIRECT_SEGMENTS):
        return None

    match = REDIRECT_TARGET_PATTERN.search(parts.query)
    if not match:
        return None

    target = unquote(match.group(1))
    if target.startswith("/"):
        target = origin_of(parts) + target
    return target


def _canonical_form(parts: SplitResult) -> str:
    origin = origin_of(parts)
    path = parts.path

    if "amazon." in parts.hostname:
        dp_match = DP_PATTERN.search(path)
        if dp_match and "/dp/" in path:
            title = path.split("/dp/", 1)[0]
            return f"{origin}{title}/dp/{dp_match.group(1)}"

        gp_match = GP_PRODUCT_PATTERN.search(path)
        if gp_match:
            return f"{origin}/gp/product/{gp_match.group(1)}"

        if path == SEARCH_PATH:
            return f"{origin}{SEARCH_PATH}"

    path = REF_SEGMENT_PATTERN.sub("", path)
    query = strip_query_params(parts.query, AMAZON_TRACKING_PARAMS)
    return compose_url(origin, path, query)


AMAZON_STRATEGY = Strategy(
    kind=RetailerKind.AMAZON,
    recognize=recognize_amazon,
    canonicalize=canonicalize_amazon,
)
