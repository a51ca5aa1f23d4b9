#!/usr/bin/env python3
"""Build configuration for the link collection site.

Defaults work out of the box (links.md -> dist/). An optional YAML file can
override them:

    links_file: links.md
    output_dir: dist
    stylesheet: static/style.css
    site_title: Resource Collections
    variant: preview        # or: description
    delay: 0.5              # seconds between fetches
    timeout: 10             # per-request timeout, seconds
    log_file: build.log

Relative paths in the file are resolved against the file's directory.
CLI flags win over both.
"""

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Optional

import yaml

from link_metadata import DEFAULT_TIMEOUT, USER_AGENT, VARIANT_PREVIEW, VARIANTS
from page_renderer import DEFAULT_SITE_TITLE

PATH_FIELDS = ("links_file", "output_dir", "stylesheet", "log_file")


class ConfigError(ValueError):
    """Invalid build configuration."""


@dataclass
class SiteConfig:
    links_file: Path = Path("links.md")
    output_dir: Path = Path("dist")
    stylesheet: Path = Path(__file__).parent / "static" / "style.css"
    site_title: str = DEFAULT_SITE_TITLE
    variant: str = VARIANT_PREVIEW
    delay: float = 0.5
    timeout: float = DEFAULT_TIMEOUT
    user_agent: str = USER_AGENT
    log_file: Optional[Path] = None

    def validate(self) -> "SiteConfig":
        if self.variant not in VARIANTS:
            raise ConfigError(f"Unknown variant: {self.variant}. Available: {list(VARIANTS)}")
        if self.delay < 0:
            raise ConfigError(f"delay must be >= 0, got {self.delay}")
        if self.timeout <= 0:
            raise ConfigError(f"timeout must be > 0, got {self.timeout}")
        if not self.site_title:
            raise ConfigError("site_title must not be empty")
        return self


def _coerce(name: str, value, base_dir: Optional[Path] = None):
    """Convert a raw config value to the field's type."""
    if value is None:
        return None
    if name in PATH_FIELDS:
        path = Path(value).expanduser()
        if base_dir is not None and not path.is_absolute():
            path = base_dir / path
        return path
    if name in ("delay", "timeout"):
        try:
            return float(value)
        except (TypeError, ValueError):
            raise ConfigError(f"{name} must be a number, got {value!r}")
    return str(value)


def load_config(path=None) -> SiteConfig:
    """Load SiteConfig from an optional YAML file."""
    config = SiteConfig()
    if path is None:
        return config.validate()

    path = Path(path)
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}")

    if not isinstance(raw, dict):
        raise ConfigError(f"{path} must contain a mapping, got {type(raw).__name__}")

    known = {f.name for f in fields(SiteConfig)}
    unknown = set(raw) - known
    if unknown:
        raise ConfigError(f"Unknown config keys in {path}: {sorted(unknown)}")

    base_dir = path.parent
    values = {key: _coerce(key, value, base_dir) for key, value in raw.items() if value is not None}
    return replace(config, **values).validate()


def apply_overrides(config: SiteConfig, **overrides) -> SiteConfig:
    """Apply CLI values; None means "not given"."""
    values = {key: _coerce(key, value) for key, value in overrides.items() if value is not None}
    return replace(config, **values).validate()
