"""Configuration management for the feed site builder."""

import json
import os
from dataclasses import dataclass, field, fields, replace
from pathlib import Path

from .errors import ConfigError

DEFAULT_FEED_URL = "https://www.ethanbloch.com/feed"
DEFAULT_POSTS_OUTPUT_DIR = "posts"
DEFAULT_INDEX_OUTPUT_PATH = "index.html"

PARSER_STRATEGIES = ("regex", "feedparser")


@dataclass(frozen=True)
class SiteMetadata:
    """Static site identity used by both page templates."""

    author: str = "Ethan Bloch"
    site_name: str = "Ethan Bloch"
    site_url: str = "https://ethanbloch.com"
    tagline: str = "Notes on money, technology, and building a meaningful life."
    twitter_handle: str = "@ethanbloch"
    locale: str = "en_US"
    bio_html: str = (
        'Fintech pioneer. Built <a href="/posts/digit.html">Digit</a> — '
        "helped millions save over $9B. \n"
        '            Now building <a href="https://hirofinance.com">Hiro</a>, '
        "an AI financial advisor."
    )
    links: tuple[tuple[str, str], ...] = (
        ("X", "https://twitter.com/ethanbloch"),
        ("LinkedIn", "https://linkedin.com/in/ethanbloch"),
        ("Hiro", "https://hirofinance.com"),
    )
    subscribe_endpoint: str = "https://www.ethanbloch.com/api/v1/free"
    copyright_year: int = 2026


@dataclass
class BuildConfig:
    """Everything the build orchestrator needs for one run."""

    feed_url: str = DEFAULT_FEED_URL
    posts_output_dir: Path = Path(DEFAULT_POSTS_OUTPUT_DIR)
    index_output_path: Path = Path(DEFAULT_INDEX_OUTPUT_PATH)
    site: SiteMetadata = field(default_factory=SiteMetadata)
    parser: str = "regex"
    trust_feed_content: bool = True


class Config:
    """Main configuration manager."""

    # Default site metadata file path
    SITE_CONFIG_FILE = "site.json"

    def __init__(self):
        """Initialize configuration from environment variables."""
        self.feed_url = os.getenv("FEED_URL", DEFAULT_FEED_URL)
        self.posts_output_dir = os.getenv("POSTS_OUTPUT_DIR", DEFAULT_POSTS_OUTPUT_DIR)
        self.index_output_path = os.getenv(
            "INDEX_OUTPUT_PATH", DEFAULT_INDEX_OUTPUT_PATH
        )
        self.parser = os.getenv("FEED_PARSER", "regex").strip().lower()
        self.trust_feed_content = _get_bool("TRUST_FEED_CONTENT", True)
        self.site_config_file = os.getenv("SITE_CONFIG_FILE", self.SITE_CONFIG_FILE)
        self.log_level = os.getenv("LOG_LEVEL", "INFO")

    def get_site_metadata(self) -> SiteMetadata:
        """Get site metadata, overlaying the site config file when present."""
        site_file = Path(self.site_config_file)
        if not site_file.exists():
            return SiteMetadata()

        try:
            with open(site_file, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in site config file: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError("Site config file must contain a JSON object")

        known = {f.name for f in fields(SiteMetadata)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown site config keys: {', '.join(unknown)}")

        if "links" in data:
            data["links"] = tuple(
                (str(label), str(url)) for label, url in data["links"]
            )

        return replace(SiteMetadata(), **data)

    def get_build_config(self) -> BuildConfig:
        """Get the build configuration."""
        if self.parser not in PARSER_STRATEGIES:
            raise ConfigError(
                f"Unknown FEED_PARSER '{self.parser}', "
                f"expected one of: {', '.join(PARSER_STRATEGIES)}"
            )

        return BuildConfig(
            feed_url=self.feed_url,
            posts_output_dir=Path(self.posts_output_dir),
            index_output_path=Path(self.index_output_path),
            site=self.get_site_metadata(),
            parser=self.parser,
            trust_feed_content=self.trust_feed_content,
        )


def _get_bool(var_name: str, default: bool) -> bool:
    """Read a boolean environment variable, falling back to ``default``."""
    raw_value = os.getenv(var_name)
    if raw_value is None or not raw_value.strip():
        return default
    return raw_value.strip().lower() in ("1", "true", "yes", "on")
