"""Web shortcut prefix table."""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import quote


@dataclass(frozen=True, slots=True)
class WebShortcutSpec:
    short_prefix: str
    long_prefix: str
    label: str
    url_template: str

    def matches(self, query_lower: str) -> bool:
        return query_lower.startswith(self.short_prefix) or query_lower.startswith(
            self.long_prefix
        )

    def build_url(self, term: str) -> str:
        return self.url_template + encode_term(term)


def encode_term(term: str) -> str:
    """Percent-encode everything except RFC 3986 unreserved characters."""
    return quote(term, safe="")


# Evaluated in order; the first matching prefix wins.
DEFAULT_WEB_SHORTCUTS: tuple[WebShortcutSpec, ...] = (
    WebShortcutSpec("g:", "google:", "Google", "https://www.google.com/search?q="),
    WebShortcutSpec("yt:", "youtube:", "YouTube", "https://www.youtube.com/results?search_query="),
    WebShortcutSpec("gh:", "github:", "GitHub", "https://github.com/search?q="),
    WebShortcutSpec("wiki:", "wikipedia:", "Wikipedia", "https://en.wikipedia.org/wiki/Special:Search?search="),
    WebShortcutSpec("tr:", "translate:", "Translate", "https://translate.google.com/?sl=auto&text="),
    WebShortcutSpec("r:", "reddit:", "Reddit", "https://www.reddit.com/search/?q="),
    WebShortcutSpec("so:", "stack:", "Stack Overflow", "https://stackoverflow.com/search?q="),
    WebShortcutSpec("az:", "amazon:", "Amazon", "https://www.amazon.com/s?k="),
    WebShortcutSpec("m:", "maps:", "Maps", "https://www.google.com/maps/search/"),
    WebShortcutSpec("mail:", "email:", "Email", "mailto:"),
)

# Conversions are answered by the web search engine.
CONVERSION_URL_TEMPLATE = DEFAULT_WEB_SHORTCUTS[0].url_template
