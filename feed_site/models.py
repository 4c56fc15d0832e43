"""Data models for the feed site builder."""

from dataclasses import dataclass


@dataclass
class PostRecord:
    """A single blog post extracted from the feed."""

    title: str
    slug: str  # Segment after /p/ in the link, never empty
    link: str
    published_at: str  # Raw feed date string
    description: str
    content: str  # HTML body, falls back to description
