"""Documentation links for audit titles."""

import re
from typing import Optional

# Lighthouse descriptions end with e.g. "[Learn more](https://web.dev/render-blocking-resources/)."
_MARKDOWN_LINK = re.compile(r"\[[^\]]*\]\((\S+?)\)")

# OSC 8 hyperlink: ESC ] 8 ;; url ST text ESC ] 8 ;; ST
_OSC8_START = "\x1b]8;;"
_OSC8_END = "\x07"
_OSC8_SEQUENCE = re.compile(r"\x1b\]8;;[^\x07]*\x07")


def get_link(description: Optional[str]) -> str:
    """Return the target of the first markdown link in a description, or ""."""
    if not description:
        return ""
    match = _MARKDOWN_LINK.search(description)
    return match.group(1) if match else ""


def terminal_link(text: str, url: str, supported: bool = True) -> str:
    """Wrap text in a terminal hyperlink, or fall back to "text (url)"."""
    if not supported:
        return f"{text} ({url})"
    return f"{_OSC8_START}{url}{_OSC8_END}{text}{_OSC8_START}{_OSC8_END}"


def strip_terminal_links(text: str) -> str:
    """Remove OSC 8 escape sequences, leaving the visible text."""
    return _OSC8_SEQUENCE.sub("", text)


def enrich_title(
    title: str,
    description: Optional[str],
    links_enabled: bool,
    hyperlinks: bool = True,
) -> str:
    """Attach the description's documentation link to an audit title.

    Args:
        title: Audit title
        description: Audit description, possibly containing a markdown link
        links_enabled: When False the title is returned unchanged
        hyperlinks: Emit OSC 8 sequences (True) or the plain "title (url)" form

    Returns:
        Link-wrapped title, or the plain title when no link can be derived
    """
    if not links_enabled or not description:
        return title

    link = get_link(description)
    if not link:
        return title
    return terminal_link(title, link, supported=hyperlinks)
