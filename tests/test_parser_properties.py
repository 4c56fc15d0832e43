"""Property-based tests for the feed parser."""

from hypothesis import given
from hypothesis import strategies as st

from feed_site.parser import parse_feed

# Field text that cannot close or open markup by accident
field_text = st.text(
    alphabet=st.characters(
        whitelist_categories=("Lu", "Ll", "Nd"), whitelist_characters=" -_.,!"
    ),
    min_size=1,
    max_size=40,
).filter(lambda x: x.strip())

slugs = st.text(
    alphabet=st.characters(whitelist_categories=("Ll", "Nd"), whitelist_characters="-"),
    min_size=1,
    max_size=30,
)


def make_item(title: str, link: str, cdata_title: str | None = None) -> str:
    parts = ["<item>"]
    if cdata_title is not None:
        parts.append(f"<title><![CDATA[{cdata_title}]]></title>")
    parts.append(f"<title>{title}</title>")
    parts.append(f"<link>{link}</link>")
    parts.append("<pubDate>Mon, 05 Jan 2026 00:00:00 GMT</pubDate>")
    parts.append("</item>")
    return "\n".join(parts)


class TestFeedParserProperties:
    """Property-based tests for feed parsing."""

    @given(st.text().filter(lambda x: "<item>" not in x))
    def test_no_items_yields_empty_list(self, text):
        """Property: text without item blocks parses to an empty list."""
        assert parse_feed(text) == []

    @given(
        st.lists(
            st.tuples(field_text, slugs, st.booleans()),
            max_size=15,
        )
    )
    def test_slugless_items_are_excluded(self, items):
        """Property: output length drops by exactly the slug-less item count."""
        blocks = []
        expected = []
        for title, slug, has_slug in items:
            if has_slug:
                link = f"https://example.com/p/{slug}"
                expected.append(slug)
            else:
                link = f"https://example.com/about/{slug}"
            blocks.append(make_item(title, link))

        posts = parse_feed("<rss><channel>" + "".join(blocks) + "</channel></rss>")

        assert len(posts) == len(items) - sum(1 for *_, has_slug in items if not has_slug)
        assert [post.slug for post in posts] == expected

    @given(field_text, slugs)
    def test_plain_title_extracted(self, title, slug):
        """Property: a plain title is used when no CDATA title exists."""
        posts = parse_feed(make_item(title, f"https://example.com/p/{slug}"))

        assert posts[0].title == title

    @given(field_text, field_text, slugs)
    def test_cdata_title_precedence(self, cdata_title, plain_title, slug):
        """Property: the CDATA title wins when both forms are present."""
        posts = parse_feed(
            make_item(plain_title, f"https://example.com/p/{slug}", cdata_title=cdata_title)
        )

        assert posts[0].title == cdata_title

    @given(st.lists(slugs, min_size=1, max_size=10))
    def test_every_record_has_slug(self, item_slugs):
        """Property: every emitted record carries a non-empty slug."""
        feed = "".join(
            make_item("Title", f"https://example.com/p/{slug}") for slug in item_slugs
        )

        posts = parse_feed(feed)

        assert len(posts) == len(item_slugs)
        assert all(post.slug for post in posts)
