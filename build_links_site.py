#!/usr/bin/env python3
"""Build a static site of link collections from links.md.

Parses the links file, scrapes title/description/image for every link (one
at a time, with a short pause between requests), then writes index.html, one
<slug>.html per collection and the stylesheet into the output directory.

Usage:
    python3 build_links_site.py                          # links.md -> dist/
    python3 build_links_site.py --links my-links.md --output public
    python3 build_links_site.py --config site.yaml
    python3 build_links_site.py --variant description    # show descriptions on cards
"""

import argparse
import shutil
import sys
import time
from dataclasses import dataclass
from typing import Callable, Optional

from build_logger import BuildLogger
from link_metadata import VARIANTS, MetadataFetcher
from link_parser import parse_links_file
from page_renderer import STYLESHEET_NAME, render_collection_page, render_home_page
from site_config import SiteConfig, apply_overrides, load_config


@dataclass
class BuildReport:
    collections: int = 0
    links: int = 0
    failed: int = 0
    files_written: int = 0


def fetch_collections(collections, fetcher: MetadataFetcher, delay: float,
                      logger: BuildLogger, sleep: Optional[Callable] = None) -> int:
    """Attach metadata to every collection, in link order. Returns failure count."""
    sleep = sleep or time.sleep
    failed = 0
    for collection in collections:
        logger.info(f"Processing collection: {collection.name}")
        metadata = []

        for url in collection.links:
            meta = fetcher.fetch(url)
            metadata.append(meta)
            if not meta.success:
                failed += 1
            # Small delay to be respectful to servers
            sleep(delay)

        if len(metadata) != len(collection.links):
            raise RuntimeError(f"Metadata count mismatch for {collection.name}")
        collection.metadata = metadata

    return failed


def check_slugs(collections, logger: BuildLogger) -> int:
    """Warn about headings whose page file would be '.html' or overwrite another."""
    problems = 0
    seen = {}
    for collection in collections:
        if not collection.slug:
            logger.warn(f"Collection '{collection.name}' has an empty slug, page will be written as .html")
            problems += 1
        if collection.slug in seen:
            logger.warn(f"Collection '{collection.name}' overwrites '{seen[collection.slug]}' "
                        f"({collection.slug}.html)")
            problems += 1
        else:
            seen[collection.slug] = collection.name
    return problems


def build(config: SiteConfig, logger: Optional[BuildLogger] = None,
          fetcher: Optional[MetadataFetcher] = None,
          sleep: Optional[Callable] = None) -> BuildReport:
    """Run the whole pipeline. Input/output errors propagate."""
    if logger is None:
        logger = BuildLogger(config.log_file)
    if fetcher is None:
        fetcher = MetadataFetcher(
            variant=config.variant,
            timeout=config.timeout,
            user_agent=config.user_agent,
            log=logger.info,
            error=logger.error,
        )

    logger.info("Starting build...")
    collections = parse_links_file(config.links_file)
    logger.info(f"Found {len(collections)} collections")

    report = BuildReport(collections=len(collections))
    report.links = sum(len(c.links) for c in collections)
    report.failed = fetch_collections(collections, fetcher, config.delay, logger, sleep)

    output_dir = config.output_dir
    output_dir.mkdir(parents=True, exist_ok=True)

    (output_dir / "index.html").write_text(
        render_home_page(collections, site_title=config.site_title), encoding="utf-8")
    report.files_written += 1
    logger.info("Generated: index.html")

    check_slugs(collections, logger)
    for collection in collections:
        page = render_collection_page(collection, collection.metadata, variant=config.variant)
        (output_dir / f"{collection.slug}.html").write_text(page, encoding="utf-8")
        report.files_written += 1
        logger.info(f"Generated: {collection.slug}.html")

    shutil.copyfile(config.stylesheet, output_dir / STYLESHEET_NAME)
    report.files_written += 1
    logger.info(f"Copied: {STYLESHEET_NAME}")

    return report


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Build static link collection pages from links.md")
    parser.add_argument("--config", help="YAML config file")
    parser.add_argument("--links", help="Links file (default: links.md)")
    parser.add_argument("--output", help="Output directory (default: dist)")
    parser.add_argument("--stylesheet", help="Stylesheet copied into the output directory")
    parser.add_argument("--title", help="Home page title")
    parser.add_argument("--variant", choices=VARIANTS,
                        help="preview: images + URLs on cards; description: descriptions on cards")
    parser.add_argument("--delay", type=float, help="Delay between requests (seconds)")
    parser.add_argument("--timeout", type=float, help="Per-request timeout (seconds)")
    parser.add_argument("--log-file", help="Append log lines to this file")
    parser.add_argument("--quiet", action="store_true", help="Only print warnings and errors")
    args = parser.parse_args(argv)

    logger = BuildLogger(args.log_file, quiet=args.quiet)

    try:
        config = apply_overrides(
            load_config(args.config),
            links_file=args.links,
            output_dir=args.output,
            stylesheet=args.stylesheet,
            site_title=args.title,
            variant=args.variant,
            delay=args.delay,
            timeout=args.timeout,
            log_file=args.log_file,
        )
        if config.log_file and not args.log_file:
            logger = BuildLogger(config.log_file, quiet=args.quiet)

        report = build(config, logger=logger)
    except Exception as e:
        logger.error(f"Build failed: {e}")
        return 1

    logger.info(f"{report.links} links in {report.collections} collections, {report.failed} failed")
    logger.summary()
    logger.success(f"Build complete! Open {config.output_dir / 'index.html'} to view.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
