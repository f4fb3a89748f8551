"""URL cleaning strategies for retail sites."""

from retail_urls.cleaners.base import TRACKING_PARAMS, RetailerKind, Strategy
from retail_urls.cleaners.amazon import AMAZON_STRATEGY, AMAZON_TRACKING_PARAMS
from retail_urls.cleaners.walmart import WALMART_STRATEGY
from retail_urls.cleaners.safeway import SAFEWAY_ALBERTSONS_STRATEGY
from retail_urls.cleaners.generic import GENERIC_STRATEGY
from retail_urls.cleaners.chain import (
    STRATEGY_CHAIN,
    clean_url,
    clean_urls_in_html,
    clean_urls_in_html_by_strategy,
    clean_urls_in_html_for,
    select_strategy,
)

__all__ = [
    "TRACKING_PARAMS",
    "AMAZON_TRACKING_PARAMS",
    "RetailerKind",
    "Strategy",
    "AMAZON_STRATEGY",
    "WALMART_STRATEGY",
    "SAFEWAY_ALBERTSONS_STRATEGY",
    "GENERIC_STRATEGY",
    "STRATEGY_CHAIN",
    "select_strategy",
    "clean_url",
    "clean_urls_in_html",
    "clean_urls_in_html_for",
    "clean_urls_in_html_by_strategy",
]
