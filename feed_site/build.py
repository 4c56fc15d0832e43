"""Build entry point for the feed site builder."""

import argparse
import logging
import sys
from dataclasses import replace
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from .config import BuildConfig, Config
from .fetch import FeedFetcher
from .logging_config import create_execution_logger, setup_structured_logging
from .parser import FeedParser
from .render import SiteRenderer


class SiteBuilder:
    """Runs fetch, parse, render and write once, in that order."""

    def __init__(
        self,
        config: BuildConfig,
        execution_id: str | None = None,
        fetcher: FeedFetcher | None = None,
    ):
        """Initialize the builder.

        Args:
            config: Build configuration
            execution_id: Execution ID for logging context
            fetcher: Optional fetcher, a default one is created otherwise
        """
        self.config = config
        self.execution_id = (
            execution_id or f"build_{datetime.now(UTC).strftime('%Y%m%d_%H%M%S_%f')}"
        )
        self.logger = create_execution_logger("builder", self.execution_id)
        self.fetcher = fetcher or FeedFetcher(execution_id=self.execution_id)
        self.parser = FeedParser(config.parser, execution_id=self.execution_id)
        self.renderer = SiteRenderer(
            config.site,
            feed_url=config.feed_url,
            trust_feed_content=config.trust_feed_content,
        )

    def build(self) -> dict[str, Any]:
        """Build every post page and the index page.

        Returns:
            Build metrics

        Raises:
            FetchError: If the feed request returns a non-success status
            TransportError: If the feed cannot be downloaded
            OSError: If a page cannot be written
        """
        self.logger.log_execution_start(feed_url=self.config.feed_url)
        metrics: dict[str, Any] = {"posts_found": 0, "pages_written": 0}

        text = self.fetcher.fetch(self.config.feed_url)
        posts = self.parser.parse(text)
        metrics["posts_found"] = len(posts)

        posts_dir = self.config.posts_output_dir
        posts_dir.mkdir(parents=True, exist_ok=True)

        for post in posts:
            html = self.renderer.render_post(post)
            path = posts_dir / f"{post.slug}.html"
            path.write_text(html, encoding="utf-8")
            metrics["pages_written"] += 1
            self.logger.log_page_written(str(path), slug=post.slug)

        index_path = self.config.index_output_path
        index_path.parent.mkdir(parents=True, exist_ok=True)
        index_path.write_text(self.renderer.render_index(posts), encoding="utf-8")
        metrics["index_path"] = str(index_path)
        self.logger.log_page_written(str(index_path))

        self.logger.log_metrics(metrics)
        self.logger.log_execution_end(success=True)
        self.logger.info("Build complete!")
        return metrics


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line options that override the environment."""
    parser = argparse.ArgumentParser(
        description="Build static post and index pages from an RSS feed"
    )
    parser.add_argument("--log-level", help="Logging level (default: LOG_LEVEL or INFO)")
    parser.add_argument("--feed-url", help="Feed URL to build from")
    parser.add_argument("--posts-dir", type=Path, help="Directory for post pages")
    parser.add_argument("--index-path", type=Path, help="Path of the index page")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Run one build and return the process exit status."""
    args = parse_args(argv)
    execution_id = f"build_{datetime.now(UTC).strftime('%Y%m%d_%H%M%S_%f')}"
    main_logger = create_execution_logger("main", execution_id)

    try:
        env_config = Config()
        setup_structured_logging(args.log_level or env_config.log_level)

        config = env_config.get_build_config()
        overrides = {}
        if args.feed_url:
            overrides["feed_url"] = args.feed_url
        if args.posts_dir:
            overrides["posts_output_dir"] = args.posts_dir
        if args.index_path:
            overrides["index_output_path"] = args.index_path
        if overrides:
            config = replace(config, **overrides)

        SiteBuilder(config, execution_id=execution_id).build()
    except Exception as e:
        # Logging setup itself may have failed
        if not logging.getLogger().handlers:
            setup_structured_logging()
        main_logger.error(f"Build failed: {e}", error=repr(e))
        return 1

    return 0


if __name__ == "__main__":  # pragma: no cover - script entrypoint
    sys.exit(main())
