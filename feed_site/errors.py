"""Exception types for the feed site builder."""


class FeedSiteError(Exception):
    """Base class for fatal build errors."""


class FetchError(FeedSiteError):
    """Feed request completed with a non-success HTTP status."""

    def __init__(self, status_code: int, url: str = ""):
        self.status_code = status_code
        self.url = url
        super().__init__(f"Failed to fetch RSS: {status_code}")


class TransportError(FeedSiteError):
    """Feed request failed before a response was received."""


# Alias
NetworkError = TransportError


class ConfigError(FeedSiteError):
    """Invalid environment or site metadata file."""
