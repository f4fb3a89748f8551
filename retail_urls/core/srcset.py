"""Parsing and serialization of srcset-style descriptor lists."""

import re
from dataclasses import dataclass
from typing import List, Optional

from retail_urls.core.url_utils import make_absolute

# Signs that a comma sits inside a URL rather than between list items
COMMA_IN_URL_PATTERN = re.compile(r"(,\w+)[^,\s]*\s+\d+[xw]|\.jpg,")
# Density descriptors anywhere after whitespace; width descriptors only at the end
DESCRIPTOR_PATTERN = re.compile(r"\s+[\d.]+x|\s+\d+w$")


@dataclass
class DescriptorEntry:
    """One candidate of a srcset value."""

    url: str
    descriptor: Optional[str] = None

    def to_text(self) -> str:
        return f"{self.url} {self.descriptor}" if self.descriptor else self.url


def parse_srcset(raw: str, base: Optional[str] = None) -> List[DescriptorEntry]:
    """
    Parse a srcset value into entries with absolutized URLs.

    Values without commas inside their URLs are split on every comma. Otherwise
    segments are accumulated until one ends in a descriptor, since a literal
    comma in a URL and a list separator look the same at the comma.
    """
    if not raw:
        return []

    if not COMMA_IN_URL_PATTERN.search(raw):
        return _parse_simple(raw, base)
    return _parse_with_url_commas(raw, base)


def _parse_simple(raw: str, base: Optional[str]) -> List[DescriptorEntry]:
    entries = []
    for segment in raw.split(","):
        tokens = segment.split()
        if not tokens:
            continue
        entries.append(_entry(tokens[0], tokens[1:], base))
    return entries


def _parse_with_url_commas(raw: str, base: Optional[str]) -> List[DescriptorEntry]:
    entries = []
    pending = ""

    for segment in raw.split(","):
        segment = segment.strip()

        if DESCRIPTOR_PATTERN.search(segment):
            url, *descriptor = segment.split()
            if pending:
                url = f"{pending},{url}"
                pending = ""
            entries.append(_entry(url, descriptor, base))
        else:
            # No descriptor yet: part of a URL that continues past this comma
            pending = f"{pending},{segment}" if pending else segment

    if pending:
        entries.append(_entry(pending, [], base))

    return entries


def _entry(url: str, descriptor_tokens: List[str], base: Optional[str]) -> DescriptorEntry:
    descriptor = " ".join(descriptor_tokens) or None
    return DescriptorEntry(url=make_absolute(url, base), descriptor=descriptor)


def serialize_srcset(entries: List[DescriptorEntry]) -> str:
    """Join entries back into a srcset value, keeping order and descriptor text."""
    return ", ".join(entry.to_text() for entry in entries)


def absolutize_srcset(raw: str, base: Optional[str] = None) -> str:
    """Rewrite every URL of a srcset value into absolute form."""
    if not raw:
        return ""
    return serialize_srcset(parse_srcset(raw, base))
