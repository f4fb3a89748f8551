"""Rewrite every URL-bearing attribute of an element tree into absolute form."""

import copy
import logging
import re
from typing import Callable, Iterator, Optional, Tuple

from bs4 import Tag

from retail_urls.config import settings
from retail_urls.core.srcset import absolutize_srcset
from retail_urls.core.url_utils import RELATIVE_PREFIXES, join_url, make_absolute

logger = logging.getLogger(__name__)

SRCSET_ATTRIBUTES = ("srcset", "data-srcset")
IMAGE_SOURCE_ATTRIBUTES = ("src", "data-src")
STYLE_URL_PATTERN = re.compile(r"""url\(['"]?([^'")]+)['"]?\)""")
IMAGE_HINTS = (".jpg", ".png", ".gif", ".webp", ".svg", "image", "media")


def absolutize_urls(element: Tag, base: Optional[str] = None) -> Tag:
    """
    Make every URL inside element absolute, mutating it in place.

    Covers anchor targets, image sources, srcset lists, inline-style url()
    references and path- or image-like data-* attributes, on element itself
    and all its descendants. A failure on one node leaves that node as it was.
    """
    if element is None:
        return element

    base = base if base is not None else settings.default_base_url

    try:
        for node in _walk(element):
            _process_node(node, base)
    except Exception as e:
        logger.warning(f"Error absolutizing URLs: {e}")

    return element


def clone_with_absolute_urls(element: Tag, base: Optional[str] = None) -> Tag:
    """Return a deep copy of element with absolute URLs; element is left untouched."""
    clone = copy.copy(element)
    return absolutize_urls(clone, base)


def _walk(element: Tag) -> Iterator[Tag]:
    yield element
    yield from element.find_all(True)


def _process_node(node: Tag, base: str) -> None:
    for step in NODE_STEPS:
        try:
            step(node, base)
        except Exception as e:
            logger.debug(f"Skipping <{getattr(node, 'name', node)}> during {step.__name__}: {e}")


def _process_link(node: Tag, base: str) -> None:
    if node.name != "a":
        return
    href = node.get("href")
    if href and href.strip():
        node["href"] = make_absolute(href, base)


def _process_image_sources(node: Tag, base: str) -> None:
    if node.name != "img":
        return
    for attr in IMAGE_SOURCE_ATTRIBUTES:
        if node.has_attr(attr):
            node[attr] = make_absolute(node[attr], base)


def _process_srcset(node: Tag, base: str) -> None:
    for attr in SRCSET_ATTRIBUTES:
        if node.has_attr(attr):
            node[attr] = absolutize_srcset(node[attr], base)


def _process_style(node: Tag, base: str) -> None:
    style = node.get("style")
    if not style or "url(" not in style:
        return
    node["style"] = STYLE_URL_PATTERN.sub(
        lambda match: f"url('{make_absolute(match.group(1), base)}')",
        style,
    )


def _process_data_attributes(node: Tag, base: str) -> None:
    for name, value in list(node.attrs.items()):
        if not name.startswith("data-") or name == "data-srcset":
            continue
        # <img data-src> is handled with the other image sources
        if name == "data-src" and node.name == "img":
            continue
        if not isinstance(value, str):
            continue

        if value.startswith(RELATIVE_PREFIXES):
            node[name] = make_absolute(value, base)
        elif looks_like_image_path(value):
            node[name] = join_url(value, base)


def looks_like_image_path(value: str) -> bool:
    """Heuristic for data-* values that hold an image or media path."""
    return "/" in value and any(hint in value for hint in IMAGE_HINTS)


NODE_STEPS: Tuple[Callable[[Tag, str], None], ...] = (
    _process_link,
    _process_image_sources,
    _process_srcset,
    _process_style,
    _process_data_attributes,
)
