#!/usr/bin/env python3
"""Link metadata fetcher - title, description and preview image for one URL.

One GET per link, no retries. Every field is picked from an ordered list of
candidates (Open Graph -> Twitter card -> plain HTML), first non-empty wins.
Any failure degrades to a fallback record built from the hostname, so a bad
link never stops a build.

Variants:
    preview      - inline <img> scan, generic description filter, 200-char
                   truncation, placeholder image when nothing is found
    description  - meta tags only, description kept as-is, empty image
"""

import re
from dataclasses import asdict, dataclass
from typing import Callable, Optional
from urllib.parse import quote, urlparse

import requests
from bs4 import BeautifulSoup

VARIANT_PREVIEW = "preview"
VARIANT_DESCRIPTION = "description"
VARIANTS = (VARIANT_PREVIEW, VARIANT_DESCRIPTION)

USER_AGENT = 'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36'
DEFAULT_TIMEOUT = 10  # seconds

MIN_DESCRIPTION_LENGTH = 10
MAX_DESCRIPTION_LENGTH = 200
ELLIPSIS = '...'

MIN_IMAGE_SIZE = 100  # px, for images that declare both width and height
SKIP_IMAGE_PATTERNS = ('icon', 'logo', 'avatar')

PLACEHOLDER_TEMPLATE = 'https://via.placeholder.com/400x200/f5f5f5/666666?text={text}'

# Boilerplate that video hosts put in every page's description
GENERIC_DESCRIPTIONS = {
    'youtube.com': [
        'enjoy the videos and music you love',
        'share it all with friends',
        'youtube',
        'upload original content',
        'share videos with friends, family, and the world',
    ],
}


@dataclass
class LinkMetadata:
    """Scraped preview data for one link."""
    url: str
    title: str
    description: str = ''
    image: str = ''
    success: bool = True

    def to_dict(self) -> dict:
        return asdict(self)


def first_non_empty(*candidates) -> str:
    """Return the first candidate that is non-empty after stripping.

    Candidates are evaluated in order; callables are only called when every
    earlier candidate came up empty.
    """
    for candidate in candidates:
        value = candidate() if callable(candidate) else candidate
        if value and value.strip():
            return value.strip()
    return ''


def hostname_of(url: str) -> str:
    """Hostname of url, '' when it can't be parsed."""
    try:
        return urlparse(url).hostname or ''
    except ValueError:
        return ''


def short_hostname(url: str) -> str:
    """Hostname without a leading www., falling back to the raw url."""
    host = hostname_of(url)
    if host.startswith('www.'):
        host = host[len('www.'):]
    return host or url


def origin_of(url: str) -> str:
    parsed = urlparse(url)
    return f"{parsed.scheme}://{parsed.netloc}"


def placeholder_image(url: str) -> str:
    """Generated placeholder image labelled with the page's hostname."""
    return PLACEHOLDER_TEMPLATE.format(text=quote(short_hostname(url), safe="-_.!~*'()"))


def meta_content(soup: BeautifulSoup, attr: str, value: str) -> str:
    """content= of the first <meta attr="value">, '' if absent."""
    tag = soup.find('meta', attrs={attr: value})
    if tag is None:
        return ''
    return tag.get('content') or ''


def document_title(soup: BeautifulSoup) -> str:
    tag = soup.find('title')
    return tag.get_text() if tag else ''


def normalize_image_url(src: str, page_url: str) -> str:
    """Make an image reference absolute and force https."""
    if not src:
        return ''
    if not src.startswith('http'):
        if src.startswith('//'):
            src = 'https:' + src
        elif src.startswith('/'):
            src = origin_of(page_url) + src
        else:
            src = origin_of(page_url) + '/' + src
    if src.startswith('http://'):
        src = 'https://' + src[len('http://'):]
    return src


def _parse_dimension(value) -> int:
    """Lenient integer parse of a width/height attribute ("120px" -> 120)."""
    match = re.match(r'\s*(\d+)', str(value or ''))
    return int(match.group(1)) if match else 0


def find_first_image(soup: BeautifulSoup, page_url: str) -> str:
    """First <img> on the page that looks like content rather than chrome."""
    for img in soup.find_all('img'):
        src = img.get('src') or img.get('data-src')
        if not src:
            continue

        # Skip tiny images, only when the page declares both dimensions
        width = _parse_dimension(img.get('width'))
        height = _parse_dimension(img.get('height'))
        if width > 0 and height > 0 and (width < MIN_IMAGE_SIZE or height < MIN_IMAGE_SIZE):
            continue

        if any(pattern in src for pattern in SKIP_IMAGE_PATTERNS):
            continue

        return normalize_image_url(src, page_url)

    return ''


def is_generic_description(description: str, url: str) -> bool:
    """True if the description is missing, too short or known boilerplate."""
    if not description:
        return True

    lower = description.lower()
    for domain, phrases in GENERIC_DESCRIPTIONS.items():
        if domain in url and any(phrase in lower for phrase in phrases):
            return True

    return len(description) < MIN_DESCRIPTION_LENGTH


def truncate_description(description: str, limit: int = MAX_DESCRIPTION_LENGTH) -> str:
    if len(description) > limit:
        return description[:limit] + ELLIPSIS
    return description


class MetadataFetcher:
    """Fetches one page per call and extracts preview metadata."""

    def __init__(self, variant: str = VARIANT_PREVIEW, timeout: float = DEFAULT_TIMEOUT,
                 user_agent: str = USER_AGENT, session: Optional[requests.Session] = None,
                 log: Optional[Callable] = None, error: Optional[Callable] = None):
        if variant not in VARIANTS:
            raise ValueError(f"Unknown variant: {variant}. Available: {list(VARIANTS)}")
        self.variant = variant
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({'User-Agent': user_agent})
        self.log = log or print
        self.error = error or self.log

    @property
    def uses_placeholder(self) -> bool:
        return self.variant == VARIANT_PREVIEW

    def fetch_html(self, url: str) -> bytes:
        """GET url, raising on network errors and non-2xx responses.

        Returns raw bytes so BeautifulSoup can honour the page's own charset.
        """
        response = self.session.get(url, timeout=self.timeout)
        response.raise_for_status()
        if not 200 <= response.status_code < 300:
            raise requests.HTTPError(f"HTTP {response.status_code}", response=response)
        return response.content

    def extract(self, html, url: str) -> LinkMetadata:
        """Build a metadata record from page HTML."""
        soup = BeautifulSoup(html, 'html.parser')

        title = first_non_empty(
            lambda: meta_content(soup, 'property', 'og:title'),
            lambda: meta_content(soup, 'name', 'twitter:title'),
            lambda: document_title(soup),
            lambda: hostname_of(url),
            url,
        )

        description = first_non_empty(
            lambda: meta_content(soup, 'property', 'og:description'),
            lambda: meta_content(soup, 'name', 'twitter:description'),
            lambda: meta_content(soup, 'name', 'description'),
        )

        image = first_non_empty(
            lambda: meta_content(soup, 'property', 'og:image'),
            lambda: meta_content(soup, 'name', 'twitter:image'),
        )

        if not image and self.variant == VARIANT_PREVIEW:
            self.log("  No OG image found, searching page for images...")
            image = find_first_image(soup, url)
            if image:
                self.log(f"  Found image: {image[:60]}...")

        image = normalize_image_url(image, url)

        if not image and self.uses_placeholder:
            image = placeholder_image(url)
            self.log("  Using placeholder image")

        if self.variant == VARIANT_PREVIEW:
            if is_generic_description(description, url):
                description = ''
            description = truncate_description(description)

        return LinkMetadata(url=url, title=title, description=description,
                            image=image, success=True)

    def fallback(self, url: str) -> LinkMetadata:
        """Degraded record for a link that could not be scraped."""
        return LinkMetadata(
            url=url,
            title=short_hostname(url),
            description='',
            image=placeholder_image(url) if self.uses_placeholder else '',
            success=False,
        )

    def fetch(self, url: str) -> LinkMetadata:
        """Scrape metadata from url. Never raises."""
        self.log(f"Scraping: {url}")
        try:
            html = self.fetch_html(url)
            return self.extract(html, url)
        except Exception as e:
            self.error(f"Error scraping {url}: {e}")
            return self.fallback(url)


def fetch_metadata(url: str, variant: str = VARIANT_PREVIEW, **kwargs) -> LinkMetadata:
    """One-off fetch with a fresh session."""
    return MetadataFetcher(variant=variant, **kwargs).fetch(url)
