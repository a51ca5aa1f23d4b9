#!/usr/bin/env python3
"""Tests for link_parser.py - links.md parsing and slugs."""

import sys
import tempfile
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))
import link_parser
from link_parser import parse_links, slugify


def test_two_collections_scenario():
    """Headings open collections; URLs attach to the open one."""
    text = "# Tools\nhttps://example.com\n\n# Media\nhttps://a.com\nhttps://b.com"
    collections = parse_links(text)

    assert [c.name for c in collections] == ["Tools", "Media"]
    assert [c.slug for c in collections] == ["tools", "media"]
    assert collections[0].links == ["https://example.com"]
    assert collections[1].links == ["https://a.com", "https://b.com"]


def test_links_before_first_heading_dropped():
    text = "https://orphan.com\nsome notes\n# Only\nhttps://kept.com"
    collections = parse_links(text)
    assert len(collections) == 1
    assert collections[0].links == ["https://kept.com"]


def test_collection_count_matches_heading_count():
    text = "# A\n# B\nhttps://b.com\n# C\n"
    collections = parse_links(text)
    assert len(collections) == 3
    assert collections[0].links == []
    assert collections[2].links == []


def test_other_lines_ignored():
    """Only http(s) lines count as links."""
    text = "# Mixed\nftp://files.example.com\nwww.example.com\n- https://bullet.com\nhttp://plain.com"
    collections = parse_links(text)
    assert collections[0].links == ["http://plain.com"]


def test_whitespace_trimmed_and_duplicates_kept():
    text = "   #  Spaced Name  \n   https://dup.com  \nhttps://dup.com\r\n"
    collections = parse_links(text)
    assert collections[0].name == "Spaced Name"
    assert collections[0].links == ["https://dup.com", "https://dup.com"]


def test_hash_without_space_is_not_heading():
    collections = parse_links("#NoSpace\nhttps://x.com")
    assert collections == []


def test_malformed_url_kept_at_parse_time():
    collections = parse_links("# Bad\nhttps://")
    assert collections[0].links == ["https://"]


def test_metadata_starts_empty():
    collections = parse_links("# A\nhttps://a.com")
    assert collections[0].metadata == []


@pytest.mark.parametrize("text,expected", [
    ("Tools", "tools"),
    ("Design & Typography", "design-typography"),
    ("  Leading and trailing  ", "leading-and-trailing"),
    ("Multiple   spaces\there", "multiple-spaces-here"),
    ("Already--hyphenated---slug", "already-hyphenated-slug"),
    ("-Edge hyphens-", "edge-hyphens"),
    ("snake_case stays", "snake_case-stays"),
    ("!!!", ""),
])
def test_slugify(text, expected):
    assert slugify(text) == expected


@pytest.mark.parametrize("text", [
    "Tools", "Design & Typography", " - weird -- input - ", "Café Reading List", "a_b  c",
])
def test_slugify_idempotent(text):
    once = slugify(text)
    assert slugify(once) == once
    assert not once.startswith("-") and not once.endswith("-")
    assert once == once.lower()


def test_parse_links_file():
    with tempfile.NamedTemporaryFile(suffix=".md", delete=False, mode="w", encoding="utf-8") as f:
        f.write("# From File\nhttps://file.example.com\n")
        tmp_path = Path(f.name)
    try:
        collections = link_parser.parse_links_file(tmp_path)
        assert collections[0].slug == "from-file"
        assert collections[0].links == ["https://file.example.com"]
    finally:
        tmp_path.unlink(missing_ok=True)


def test_parse_links_file_missing():
    with pytest.raises(FileNotFoundError):
        link_parser.parse_links_file(Path("/nonexistent/links.md"))
