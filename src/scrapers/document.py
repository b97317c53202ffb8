# src/scrapers/document.py

"""Thin selector-query wrappers over a parsed BeautifulSoup page."""

from bs4 import BeautifulSoup, Tag


class ElementHandle:
    """One matched element, scoped for further text/attribute queries."""

    def __init__(self, element: Tag) -> None:
        self.element = element

    def _select(self, selector: str) -> list[Tag]:
        if not selector:
            return [self.element]
        return list(self.element.select(selector))

    def text(self, selector: str = "") -> str:
        """Concatenated, trimmed text of every match ('' if none)."""
        return "".join(
            el.get_text() for el in self._select(selector)
        ).strip()

    def attribute(self, selector: str, name: str) -> str:
        """Attribute ``name`` of the first match ('' if absent)."""
        for el in self._select(selector):
            value = el.get(name)
            if value is None:
                continue
            if isinstance(value, list):
                return " ".join(value)
            return str(value)
        return ""


class Document:
    """A fetched page that can be queried with CSS selectors."""

    def __init__(self, soup: BeautifulSoup, url: str = "") -> None:
        self.soup = soup
        self.url = url

    @classmethod
    def from_html(cls, html: str, url: str = "") -> "Document":
        return cls(BeautifulSoup(html, "lxml"), url)

    def match_all(self, selector: str) -> list[ElementHandle]:
        """Every element matching ``selector``, in document order."""
        return [ElementHandle(el) for el in self.soup.select(selector)]
