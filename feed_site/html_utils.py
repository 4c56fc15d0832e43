"""HTML helpers for page metadata and feed content."""

from bs4 import BeautifulSoup

META_DESCRIPTION_LENGTH = 160

# Elements dropped from untrusted feed content
UNSAFE_TAGS = ["script", "style", "iframe", "object", "embed", "form"]
URL_ATTRIBUTES = ("href", "src", "action", "formaction")


def strip_html(content: str) -> str:
    """Remove HTML tags from content and normalize whitespace.

    Args:
        content: Raw content that may contain HTML

    Returns:
        Clean text content without HTML tags
    """
    if not content:
        return ""

    soup = BeautifulSoup(content, "html.parser")

    for element in soup(["script", "style"]):
        element.decompose()

    text = soup.get_text(separator=" ")

    # Stray brackets survive get_text on broken markup
    text = text.replace("<", "").replace(">", "")

    return " ".join(text.split())


def meta_description(description: str) -> str:
    """Plain-text description for meta tags, at most 160 characters."""
    return strip_html(description)[:META_DESCRIPTION_LENGTH]


def sanitize_html(content: str) -> str:
    """Drop active content from feed HTML while keeping its formatting."""
    if not content:
        return ""

    soup = BeautifulSoup(content, "html.parser")

    for element in soup(UNSAFE_TAGS):
        element.decompose()

    for tag in soup.find_all(True):
        for attr in list(tag.attrs):
            if attr.lower().startswith("on"):
                del tag[attr]
            elif attr.lower() in URL_ATTRIBUTES:
                value = str(tag[attr]).strip().lower()
                if value.startswith("javascript:"):
                    del tag[attr]

    return str(soup)
