"""Combined absolutize-and-clean passes over element trees."""

import copy
import logging
from typing import Optional

from bs4 import Tag

from retail_urls.cleaners import clean_url
from retail_urls.core.absolutizer import absolutize_urls

logger = logging.getLogger(__name__)


def clean_links(element: Tag) -> Tag:
    """Canonicalize every anchor href in element, in place."""
    if element is None:
        return element

    try:
        anchors = [element] if element.name == "a" else []
        anchors.extend(element.find_all("a", href=True))
        for link in anchors:
            href = link.get("href")
            if href and href.strip():
                cleaned = clean_url(href)
                if cleaned:
                    link["href"] = cleaned
    except Exception as e:
        logger.warning(f"Error cleaning URLs in element: {e}")

    return element


def clone_with_clean_links(element: Tag) -> Tag:
    """Copy element and canonicalize the copy's anchor hrefs."""
    return clean_links(copy.copy(element))


def process_urls(element: Tag, base: Optional[str] = None) -> Tag:
    """Make all URLs in element absolute, then canonicalize its links. Mutates element."""
    if element is None:
        return element
    return clean_links(absolutize_urls(element, base))


def clone_with_processed_urls(element: Tag, base: Optional[str] = None) -> Tag:
    """Non-destructive variant of process_urls."""
    return process_urls(copy.copy(element), base)
