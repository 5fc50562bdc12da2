"""Tests for documentation link helpers."""

from psi_report.links import enrich_title, get_link, strip_terminal_links, terminal_link

DESCRIPTION = (
    "Resources are blocking the first paint of your page. "
    "[Learn more](https://web.dev/render-blocking-resources/)."
)


class TestGetLink:
    """Test cases for get_link."""

    def test_extracts_first_markdown_link(self):
        assert get_link(DESCRIPTION) == "https://web.dev/render-blocking-resources/"

    def test_first_of_several(self):
        text = "See [one](https://a.example/) and [two](https://b.example/)."
        assert get_link(text) == "https://a.example/"

    def test_no_link(self):
        assert get_link("Plain description without links.") == ""

    def test_empty_and_none(self):
        assert get_link("") == ""
        assert get_link(None) == ""


class TestTerminalLink:
    """Test cases for terminal_link."""

    def test_osc8_sequence(self):
        linked = terminal_link("Docs", "https://example.com/")
        assert linked == "\x1b]8;;https://example.com/\x07Docs\x1b]8;;\x07"

    def test_fallback(self):
        assert terminal_link("Docs", "https://example.com/", supported=False) == "Docs (https://example.com/)"

    def test_strip_leaves_visible_text(self):
        assert strip_terminal_links(terminal_link("Docs", "https://example.com/")) == "Docs"


class TestEnrichTitle:
    """Test cases for enrich_title."""

    def test_disabled_returns_title_unchanged(self):
        assert enrich_title("Eliminate render-blocking resources", DESCRIPTION, False) == (
            "Eliminate render-blocking resources"
        )

    def test_enabled_without_link_returns_title(self):
        assert enrich_title("Enable text compression", "No link here.", True) == "Enable text compression"

    def test_enabled_without_description_returns_title(self):
        assert enrich_title("Enable text compression", "", True) == "Enable text compression"
        assert enrich_title("Enable text compression", None, True) == "Enable text compression"

    def test_enabled_with_link_wraps_title(self):
        enriched = enrich_title("Eliminate render-blocking resources", DESCRIPTION, True)
        assert "https://web.dev/render-blocking-resources/" in enriched
        assert strip_terminal_links(enriched) == "Eliminate render-blocking resources"

    def test_plain_style(self):
        enriched = enrich_title("Eliminate render-blocking resources", DESCRIPTION, True, hyperlinks=False)
        assert enriched == "Eliminate render-blocking resources (https://web.dev/render-blocking-resources/)"
