#!/usr/bin/env python3
"""Page renderer - HTML for the home page and one page per collection.

Pure functions, no I/O. Templates are rendered through Jinja2 with
autoescaping on, so scraped titles/descriptions/URLs can't inject markup.
"""

import re
from typing import List, Optional

from jinja2 import DictLoader, Environment, StrictUndefined, select_autoescape

from link_metadata import VARIANT_DESCRIPTION, VARIANT_PREVIEW

DEFAULT_SITE_TITLE = "Resource Collections"
STYLESHEET_NAME = "style.css"
VIDEO_HOSTS = ('youtube.com', 'youtu.be')

# Characters that could end a CSS url('...') token early
CSS_URL_UNSAFE = re.compile(r"['\"()\\\s]")

BASE_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{% block title %}{% endblock %}</title>
  <link rel="stylesheet" href="{{ stylesheet }}">
</head>
<body>
  <div class="container">
{% block body %}{% endblock %}
  </div>
</body>
</html>
"""

HOME_TEMPLATE = """{% extends "base.html" %}
{% block title %}{{ site_title }}{% endblock %}
{% block body %}
    <header>
      <h1>{{ site_title }}</h1>
    </header>

    <div class="collections-list">
{% for col in collections %}
      <a href="{{ col.slug }}.html" class="collection-link">
        <h2>{{ col.name }}</h2>
        <span class="link-count">{{ col.links | length | resource_count }}</span>
      </a>
{% endfor %}
    </div>
{% endblock %}
"""

COLLECTION_TEMPLATE = """{% extends "base.html" %}
{% block title %}{{ collection.name }}{% endblock %}
{% block body %}
    <header>
      <a href="index.html" class="back-link">&larr; Back to Collections</a>
      <h1>{{ collection.name }}</h1>
    </header>

    <div class="cards-grid">
{% for card in cards %}
      <a href="{{ card.url }}" target="_blank" rel="noopener noreferrer" class="card">
{% if card.image %}
        <div class="card-image" style="background-image: url('{{ card.image }}')"></div>
{% else %}
        <div class="card-image no-image"></div>
{% endif %}
        <div class="card-content">
          <h3 class="card-title">{{ card.title }}</h3>
{% if card.description %}
          <p class="card-description">{{ card.description }}</p>
{% endif %}
{% if card.display_url %}
          <p class="card-url">{{ card.display_url }}</p>
{% endif %}
        </div>
      </a>
{% endfor %}
    </div>
{% endblock %}
"""


def resource_count(count: int) -> str:
    return f"{count} resource" if count == 1 else f"{count} resources"


_ENV = Environment(
    loader=DictLoader({
        "base.html": BASE_TEMPLATE,
        "home.html": HOME_TEMPLATE,
        "collection.html": COLLECTION_TEMPLATE,
    }),
    autoescape=select_autoescape(default=True, default_for_string=True),
    trim_blocks=True,
    lstrip_blocks=True,
    undefined=StrictUndefined,
)
_ENV.filters["resource_count"] = resource_count


def is_video_url(url: str) -> bool:
    return any(host in url for host in VIDEO_HOSTS)


def css_url(url: str) -> str:
    """Percent-encode characters that would break out of an inline url('...')."""
    return CSS_URL_UNSAFE.sub(lambda m: '%{:02X}'.format(ord(m.group())), url)


def display_url(url: str) -> str:
    """URL text for a card: no protocol, no leading www., no trailing slash."""
    text = re.sub(r'^https?://(www\.)?', '', url)
    return re.sub(r'/$', '', text)


def _card(meta, variant: str) -> dict:
    """Template context for one card."""
    card = {
        "url": meta.url,
        "title": meta.title,
        "image": css_url(meta.image),
        "description": "",
        "display_url": "",
    }
    if variant == VARIANT_DESCRIPTION:
        card["description"] = meta.description
    elif not is_video_url(meta.url):
        card["display_url"] = display_url(meta.url)
    return card


def render_home_page(collections: List, site_title: str = DEFAULT_SITE_TITLE) -> str:
    """Index page listing every collection with its link count."""
    return _ENV.get_template("home.html").render(
        site_title=site_title,
        collections=collections,
        stylesheet=STYLESHEET_NAME,
    )


def render_collection_page(collection, metadata: Optional[List] = None,
                           variant: str = VARIANT_PREVIEW) -> str:
    """One card per link, in link order."""
    if metadata is None:
        metadata = collection.metadata
    cards = [_card(meta, variant) for meta in metadata]
    return _ENV.get_template("collection.html").render(
        collection=collection,
        cards=cards,
        stylesheet=STYLESHEET_NAME,
    )
