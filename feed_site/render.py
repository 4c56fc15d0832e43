"""HTML page rendering for the feed site builder."""

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup

from .config import SiteMetadata
from .dates import format_date, to_iso_timestamp
from .html_utils import meta_description, sanitize_html
from .models import PostRecord

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"


def create_environment() -> Environment:
    """Create the Jinja environment used for both page types."""
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=select_autoescape(enabled_extensions=("html",)),
    )
    env.filters["format_date"] = format_date
    return env


class SiteRenderer:
    """Renders post and index pages as complete HTML documents.

    Every feed value is autoescaped except post content, which crosses the
    trust boundary here: with ``trust_feed_content`` it is embedded verbatim,
    otherwise it is sanitized first.
    """

    def __init__(
        self,
        site: SiteMetadata,
        feed_url: str = "",
        trust_feed_content: bool = True,
    ):
        self.site = site
        self.feed_url = feed_url
        self.trust_feed_content = trust_feed_content
        self.env = create_environment()

    def trusted_content(self, post: PostRecord) -> Markup:
        """Post body marked safe for embedding."""
        if self.trust_feed_content:
            return Markup(post.content)
        return Markup(sanitize_html(post.content))

    def render_post(self, post: PostRecord) -> str:
        """Render the standalone page for one post."""
        template = self.env.get_template("post.html")
        return template.render(
            site=self.site,
            post=post,
            description=meta_description(post.description),
            canonical_url=f"{self.site.site_url}/posts/{post.slug}",
            published_time=to_iso_timestamp(post.published_at),
            content=self.trusted_content(post),
        )

    def render_index(self, posts: list[PostRecord]) -> str:
        """Render the home page listing every post in the given order."""
        template = self.env.get_template("index.html")
        return template.render(
            site=self.site,
            feed_url=self.feed_url,
            bio=Markup(self.site.bio_html),
            posts=posts,
        )
