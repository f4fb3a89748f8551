"""Shared pieces of the URL cleaning strategies."""

import enum
import re
from dataclasses import dataclass
from typing import Callable, Iterable

from retail_urls.core.url_utils import compose_url, origin_of, parse_absolute, strip_query_params

# Query parameters that never change which resource a URL points at
TRACKING_PARAMS = (
    "utm_source",
    "utm_medium",
    "utm_campaign",
    "utm_term",
    "utm_content",
    "fbclid",
    "gclid",
    "ocid",
    "ncid",
    "ref",
    "referrer",
    "mc_cid",
    "mc_eid",
    "tag",
    "yclid",
    "twclid",
    "igshid",
    "linkId",
    "cid",
    "mkt_tok",
)

# Closing punctuation right after a URL belongs to the surrounding text
ABSOLUTE_URL_PATTERN = re.compile(r"""https?://[^\s"'<>]*[^\s"'<>),.]""")


class RetailerKind(str, enum.Enum):
    """Retailers with a dedicated cleaning strategy."""

    AMAZON = "amazon"
    WALMART = "walmart"
    SAFEWAY_ALBERTSONS = "safeway_albertsons"
    GENERIC = "generic"


@dataclass(frozen=True)
class Strategy:
    """A URL recognizer paired with the canonicalizer for the URLs it owns."""

    kind: RetailerKind
    recognize: Callable[[str], bool]
    canonicalize: Callable[[str], str]


def is_url_text(url) -> bool:
    """Whether url is a non-blank string worth cleaning."""
    return isinstance(url, str) and bool(url.strip())


def hostname_of(url: str) -> str:
    """Lowercased hostname of url, or an empty string if it cannot be parsed."""
    try:
        return parse_absolute(url).hostname or ""
    except ValueError:
        return ""


def host_recognizer(*markers: str) -> Callable[[str], bool]:
    """Build a recognizer matching URLs whose hostname contains any marker."""

    def recognize(url: str) -> bool:
        if not is_url_text(url):
            return False
        host = hostname_of(url)
        return any(marker in host for marker in markers)

    return recognize


def strip_tracking_params(url: str, names: Iterable[str] = TRACKING_PARAMS) -> str:
    """
    Remove tracking parameters, keeping everything else in order.

    Returns origin + path + remaining query + fragment.
    Raises ValueError if url is not an absolute http(s) URL.
    """
    parts = parse_absolute(url)
    query = strip_query_params(parts.query, names)
    return compose_url(origin_of(parts), parts.path, query, parts.fragment)


def replace_urls(html: str, clean: Callable[[str], str]) -> str:
    """
    Replace every absolute URL in html with clean(url).

    URLs taken from attribute values may carry &amp; entities; they are
    cleaned unescaped and escaped again afterwards.
    """

    def _replace(match: re.Match) -> str:
        raw = match.group(0)
        escaped = "&amp;" in raw
        url = raw.replace("&amp;", "&") if escaped else raw
        cleaned = clean(url)
        if escaped:
            cleaned = cleaned.replace("&", "&amp;")
        return cleaned

    return ABSOLUTE_URL_PATTERN.sub(_replace, html)
