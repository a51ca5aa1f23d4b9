#!/usr/bin/env python3
"""Link list parser - turns links.md into named collections of URLs.

Input format:
    # Collection Name
    https://example.com/some/page
    https://another.example.org

Lines before the first heading are dropped. Anything that is neither a
heading nor an http(s) URL is ignored.
"""

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

HEADING_MARKER = "# "
URL_PREFIXES = ("http://", "https://")


@dataclass
class Collection:
    """One heading section of the links file."""
    name: str
    slug: str
    links: List[str] = field(default_factory=list)
    metadata: list = field(default_factory=list)  # LinkMetadata, filled after fetching


def slugify(text: str) -> str:
    """Create URL-safe slug"""
    text = text.lower().strip()
    text = re.sub(r'[^\w\s-]', '', text)
    text = re.sub(r'\s+', '-', text)
    text = re.sub(r'-+', '-', text)
    return text.strip('-')


def parse_links(text: str) -> List[Collection]:
    """Parse raw links text into collections, in file order."""
    collections = []
    current = None

    for line in text.splitlines():
        trimmed = line.strip()

        if trimmed.startswith(HEADING_MARKER):
            if current:
                collections.append(current)
            name = trimmed[len(HEADING_MARKER):].strip()
            current = Collection(name=name, slug=slugify(name))
        elif trimmed.startswith(URL_PREFIXES):
            # No open collection yet -> dropped
            if current:
                current.links.append(trimmed)

    if current:
        collections.append(current)

    return collections


def parse_links_file(path) -> List[Collection]:
    """Read and parse a links file. Missing file raises FileNotFoundError."""
    content = Path(path).read_text(encoding='utf-8')
    return parse_links(content)
