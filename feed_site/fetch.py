"""Feed retrieval for the feed site builder."""

import requests

from .errors import FetchError, TransportError
from .logging_config import create_execution_logger


class FeedFetcher:
    """Downloads the raw feed document with a single request."""

    def __init__(
        self,
        timeout: float | None = None,
        execution_id: str | None = None,
        session: requests.Session | None = None,
    ):
        """Initialize FeedFetcher.

        Args:
            timeout: Optional request timeout in seconds, passed to the
                transport unchanged. ``None`` keeps the transport default.
            execution_id: Execution ID for logging context
            session: Optional pre-built session
        """
        self.timeout = timeout
        self.logger = create_execution_logger("fetcher", execution_id)
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": "feed-site/1.0 (static site builder)"})

    def fetch(self, feed_url: str) -> str:
        """Fetch the feed and return its body as text.

        Args:
            feed_url: URL of the RSS feed

        Returns:
            Raw response body

        Raises:
            FetchError: If the response status is not a success status
            TransportError: If the request fails at the network level
        """
        self.logger.info("Fetching RSS feed...", feed_url=feed_url)

        try:
            response = self.session.get(feed_url, timeout=self.timeout)
        except requests.RequestException as e:
            self.logger.error(
                f"Failed to download feed {feed_url}: {e}",
                feed_url=feed_url,
                error=str(e),
            )
            raise TransportError(f"Failed to fetch RSS: {e}") from e

        if not 200 <= response.status_code < 300:
            self.logger.error(
                f"Feed request returned status {response.status_code}",
                feed_url=feed_url,
                status_code=response.status_code,
            )
            raise FetchError(response.status_code, feed_url)

        # Feeds are served as UTF-8 unless the server says otherwise
        content_type = response.headers.get("Content-Type", "")
        if "charset" not in content_type.lower():
            response.encoding = "utf-8"

        text = response.text
        self.logger.info(
            "Feed downloaded successfully",
            feed_url=feed_url,
            status_code=response.status_code,
        )
        return text
