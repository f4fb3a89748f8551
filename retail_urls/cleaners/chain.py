"""Ordered strategy dispatch for URL cleaning."""

import logging
from typing import Tuple

from retail_urls.cleaners.amazon import AMAZON_STRATEGY
from retail_urls.cleaners.base import Strategy, is_url_text, replace_urls
from retail_urls.cleaners.generic import GENERIC_STRATEGY
from retail_urls.cleaners.safeway import SAFEWAY_ALBERTSONS_STRATEGY
from retail_urls.cleaners.walmart import WALMART_STRATEGY
from retail_urls.core.url_utils import PLACEHOLDER_VALUES

logger = logging.getLogger(__name__)

# Retailer strategies first; the generic fallback must stay last
STRATEGY_CHAIN: Tuple[Strategy, ...] = (
    AMAZON_STRATEGY,
    WALMART_STRATEGY,
    SAFEWAY_ALBERTSONS_STRATEGY,
    GENERIC_STRATEGY,
)


def select_strategy(url: str) -> Strategy:
    """Return the first strategy in the chain that recognizes url."""
    for strategy in STRATEGY_CHAIN:
        if strategy.recognize(url):
            return strategy
    return GENERIC_STRATEGY


def clean_url(url):
    """Canonicalize a single URL; unparsable or placeholder input comes back unchanged."""
    if not is_url_text(url) or url in PLACEHOLDER_VALUES:
        return url

    try:
        return select_strategy(url).canonicalize(url)
    except Exception as e:
        logger.warning(f"Error cleaning URL {url!r}: {e}")
        return url


def clean_urls_in_html(html: str) -> str:
    """Canonicalize every absolute URL found in an HTML string."""
    if not html:
        return html

    try:
        return replace_urls(html, clean_url)
    except Exception as e:
        logger.warning(f"Error cleaning URLs in HTML: {e}")
        return html


def clean_urls_in_html_for(strategy: Strategy, html: str) -> str:
    """Canonicalize only the URLs in html that dispatch to strategy."""
    if not html:
        return html

    def _clean_owned(url: str) -> str:
        if select_strategy(url) is not strategy:
            return url
        return clean_url(url)

    try:
        return replace_urls(html, _clean_owned)
    except Exception as e:
        logger.warning(f"Error cleaning {strategy.kind.value} URLs in HTML: {e}")
        return html


def clean_urls_in_html_by_strategy(html: str) -> str:
    """Run each strategy's own HTML pass in chain order."""
    for strategy in STRATEGY_CHAIN:
        html = clean_urls_in_html_for(strategy, html)
    return html
