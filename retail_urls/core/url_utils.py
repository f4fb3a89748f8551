"""URL resolution and composition utilities."""

import logging
from typing import Iterable, Optional
from urllib.parse import SplitResult, parse_qsl, urlencode, urljoin, urlsplit

from retail_urls.config import settings

logger = logging.getLogger(__name__)

WEB_SCHEMES = ("http", "https")
DEFAULT_PORTS = {"http": 80, "https": 443}
RELATIVE_PREFIXES = ("/", "./", "../")

PLACEHOLDER_VALUES = ("N/A", "Error")
MEDIA_HOSTS_WITHOUT_QUERY = ("albertsons-media.com", "safeway.com")


def make_absolute(url, base: Optional[str] = None):
    """
    Resolve a possibly relative URL against a base origin.

    - Protocol-relative (//host/path) gets an https: prefix
    - Root- and dot-relative paths are joined onto the base
    - Anything else (absolute, bare words, empty, non-string) is returned as is

    Never raises: on any resolution failure the input comes back unchanged.
    """
    if not url or not isinstance(url, str):
        return url

    if url.startswith("//"):
        return f"https:{url}"

    if url.startswith(RELATIVE_PREFIXES):
        return join_url(url, base)

    return url


def join_url(url: str, base: Optional[str] = None) -> str:
    """Join url onto base, returning url unchanged if the base is unusable."""
    base = base if base is not None else settings.default_base_url
    try:
        parse_absolute(base)
        return urljoin(base, url)
    except Exception as e:
        logger.debug(f"Could not resolve {url!r} against base {base!r}: {e}")
        return url


def parse_absolute(url: str) -> SplitResult:
    """
    Split an absolute http(s) URL.

    Raises ValueError when the input has no web scheme or no host.
    """
    if not isinstance(url, str):
        raise ValueError(f"Not a URL string: {url!r}")

    parts = urlsplit(url.strip())
    if parts.scheme.lower() not in WEB_SCHEMES:
        raise ValueError(f"Unsupported or missing scheme: {url!r}")
    if not parts.hostname:
        raise ValueError(f"Missing host: {url!r}")
    # Accessing the port validates it
    parts.port
    return parts


def origin_of(parts: SplitResult) -> str:
    """Scheme and host (plus any non-default port), without credentials."""
    scheme = parts.scheme.lower()
    host = parts.hostname
    if ":" in host:
        host = f"[{host}]"

    port = parts.port
    if port is not None and port != DEFAULT_PORTS.get(scheme):
        host = f"{host}:{port}"

    return f"{scheme}://{host}"


def compose_url(origin: str, path: str, query: str = "", fragment: str = "") -> str:
    """Assemble origin + path + ?query + #fragment, defaulting the path to '/'."""
    url = origin + (path or "/")
    if query:
        url += f"?{query}"
    if fragment:
        url += f"#{fragment}"
    return url


def strip_query_params(query: str, names: Iterable[str]) -> str:
    """
    Remove every parameter named in names from a raw query string.

    Order of the remaining parameters is preserved. The query text is
    returned untouched when nothing was removed.
    """
    if not query:
        return query

    blocked = set(names)
    pairs = parse_qsl(query, keep_blank_values=True)
    kept = [(key, value) for key, value in pairs if key not in blocked]
    if len(kept) == len(pairs):
        return query
    return urlencode(kept)


def normalize_image_url(image_url):
    """Normalize an extracted image URL (protocol prefix, media-host query removal)."""
    if not image_url or not isinstance(image_url, str) or image_url in PLACEHOLDER_VALUES:
        return image_url

    if image_url.startswith("//"):
        image_url = f"https:{image_url}"

    # Safeway/Albertsons image URLs carry sizing params that vary per page
    if any(host in image_url for host in MEDIA_HOSTS_WITHOUT_QUERY):
        image_url = image_url.split("?", 1)[0]

    return image_url
