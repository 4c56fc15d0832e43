"""Feed parsing for the feed site builder.

The default strategy pulls a handful of named fields out of each ``<item>``
block with regular expressions. It is tolerant by construction: a field that
is missing or malformed resolves to its default and never stops the rest of
the block or document from being read. The ``feedparser`` strategy applies the
same field rules to entries from a real feed parser, for sources that are not
under our control.
"""

import re
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from html import escape, unescape

import feedparser

from .logging_config import create_execution_logger
from .models import PostRecord

ITEM_PATTERN = re.compile(r"<item>(.*?)</item>", re.DOTALL)
SLUG_PATTERN = re.compile(r"/p/([^/?#]+)")

UNTITLED = "Untitled"

# The text is already decoded, so feedparser must not guess another encoding
FEEDPARSER_HEADERS = {"content-type": "application/rss+xml; charset=utf-8"}


class Form(Enum):
    """How a field value is wrapped inside its element."""

    CDATA = "cdata"
    PLAIN = "plain"


@dataclass(frozen=True)
class FieldRule:
    """Ordered extraction attempts for one element of an item block."""

    tag: str
    forms: tuple[Form, ...]
    multiline: bool = False
    # Keep a matched but empty value instead of trying the next form
    accept_empty: bool = False


TITLE = FieldRule("title", (Form.CDATA, Form.PLAIN))
LINK = FieldRule("link", (Form.PLAIN,))
PUB_DATE = FieldRule("pubDate", (Form.PLAIN,))
DESCRIPTION = FieldRule("description", (Form.CDATA, Form.PLAIN))
CONTENT = FieldRule("content:encoded", (Form.CDATA,), multiline=True, accept_empty=True)


@lru_cache(maxsize=None)
def _field_pattern(tag: str, form: Form, multiline: bool) -> re.Pattern:
    name = re.escape(tag)
    if form is Form.CDATA:
        source = rf"<{name}><!\[CDATA\[(.*?)\]\]></{name}>"
    else:
        source = rf"<{name}>(.*?)</{name}>"
    return re.compile(source, re.DOTALL if multiline else 0)


def extract_field(block: str, rule: FieldRule, decode: bool = True) -> str | None:
    """Run the rule's attempts in order and return the first hit.

    Plain captures are XML character data and have their entities decoded
    unless ``decode`` is false; CDATA captures are returned as-is. ``None``
    means no attempt matched.
    """
    for form in rule.forms:
        match = _field_pattern(rule.tag, form, rule.multiline).search(block)
        if match is None:
            continue
        value = match.group(1)
        if not value and not rule.accept_empty:
            continue
        return unescape(value) if decode and form is Form.PLAIN else value
    return None


def extract_slug(link: str) -> str | None:
    """Return the path segment after ``/p/`` in a post link."""
    match = SLUG_PATTERN.search(link)
    return match.group(1) if match else None


def build_record(
    title: str | None,
    link: str | None,
    published_at: str | None,
    description: str | None,
    content: str | None,
    fallback_content: str | None = None,
) -> PostRecord | None:
    """Resolve field defaults and build a record, or None without a slug.

    Without ``content`` the body falls back to ``fallback_content``, which is
    the description as markup rather than as decoded text.
    """
    link = link or ""
    slug = extract_slug(link)
    if not slug:
        return None

    if content is None:
        content = fallback_content or ""
    return PostRecord(
        title=title or UNTITLED,
        slug=slug,
        link=link,
        published_at=published_at or "",
        description=description or "",
        content=content,
    )


def parse_items(text: str) -> list[PostRecord]:
    """Extract post records from every ``<item>`` block, in document order."""
    posts = []
    for match in ITEM_PATTERN.finditer(text or ""):
        block = match.group(1)
        record = build_record(
            title=extract_field(block, TITLE),
            link=extract_field(block, LINK),
            published_at=extract_field(block, PUB_DATE),
            description=extract_field(block, DESCRIPTION),
            content=extract_field(block, CONTENT),
            fallback_content=extract_field(block, DESCRIPTION, decode=False),
        )
        if record is not None:
            posts.append(record)
    return posts


def parse_entries(text: str) -> list[PostRecord]:
    """Extract post records from entries found by feedparser."""
    feed = feedparser.parse(
        (text or "").encode("utf-8"),
        sanitize_html=False,
        response_headers=FEEDPARSER_HEADERS,
    )
    posts = []
    for entry in feed.entries:
        content = None
        if entry.get("content"):
            content = entry.content[0].get("value", "")
        summary = entry.get("summary")
        # feedparser copies content:encoded into summary when there is no description
        if content is not None and summary == content:
            summary = None
        record = build_record(
            title=entry.get("title"),
            link=entry.get("link"),
            published_at=entry.get("published"),
            description=summary,
            content=content,
            fallback_content=escape(summary, quote=False) if summary else None,
        )
        if record is not None:
            posts.append(record)
    return posts


STRATEGIES = {
    "regex": parse_items,
    "feedparser": parse_entries,
}


class FeedParser:
    """Turns raw feed text into an ordered list of post records."""

    def __init__(self, strategy: str = "regex", execution_id: str | None = None):
        """Initialize FeedParser.

        Args:
            strategy: ``regex`` or ``feedparser``
            execution_id: Execution ID for logging context

        Raises:
            ValueError: If the strategy is unknown
        """
        if strategy not in STRATEGIES:
            raise ValueError(f"Unknown parser strategy: {strategy}")
        self.strategy = strategy
        self.logger = create_execution_logger("parser", execution_id)

    def parse(self, text: str) -> list[PostRecord]:
        """Parse feed text into post records."""
        self.logger.info("Parsing posts...")
        posts = STRATEGIES[self.strategy](text)
        self.logger.info(f"Found {len(posts)} posts")
        return posts


def parse_feed(text: str, strategy: str = "regex") -> list[PostRecord]:
    """Parse feed text with the given strategy."""
    if strategy not in STRATEGIES:
        raise ValueError(f"Unknown parser strategy: {strategy}")
    return STRATEGIES[strategy](text)
