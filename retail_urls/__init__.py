"""Canonical, tracking-free URLs for retail HTML fragments."""

from retail_urls.core.url_utils import make_absolute, normalize_image_url
from retail_urls.core.srcset import DescriptorEntry, parse_srcset, serialize_srcset
from retail_urls.core.absolutizer import absolutize_urls, clone_with_absolute_urls
from retail_urls.cleaners import (
    STRATEGY_CHAIN,
    RetailerKind,
    Strategy,
    clean_url,
    clean_urls_in_html,
    clean_urls_in_html_by_strategy,
    clean_urls_in_html_for,
    select_strategy,
)
from retail_urls.processing import (
    clean_links,
    clone_with_clean_links,
    clone_with_processed_urls,
    process_urls,
)

__all__ = [
    "make_absolute",
    "normalize_image_url",
    "DescriptorEntry",
    "parse_srcset",
    "serialize_srcset",
    "absolutize_urls",
    "clone_with_absolute_urls",
    "STRATEGY_CHAIN",
    "RetailerKind",
    "Strategy",
    "select_strategy",
    "clean_url",
    "clean_urls_in_html",
    "clean_urls_in_html_for",
    "clean_urls_in_html_by_strategy",
    "clean_links",
    "clone_with_clean_links",
    "process_urls",
    "clone_with_processed_urls",
]
