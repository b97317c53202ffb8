# src/extraction/field_extractor.py

"""Declarative field rules and the extractor that applies them."""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from src.config.settings import Settings
from src.models.errors import MissingIdentifier
from src.scrapers.document import Document, ElementHandle

logger = logging.getLogger("storefront_feed.extraction")


@dataclass(frozen=True)
class FieldRule:
    """Where one field lives inside a matched element.

    ``attribute`` selects an attribute instead of text. ``query_param``
    marks the value as a URL whose ``<param>=`` value is the field.
    """

    name: str
    selector: str
    attribute: str | None = None
    many: bool = False
    query_param: str | None = None

    @classmethod
    def from_dict(cls, name: str, data: dict[str, Any]) -> "FieldRule":
        return cls(
            name=name,
            selector=str(data["selector"]),
            attribute=data.get("attribute"),
            many=bool(data.get("many", False)),
            query_param=data.get("query_param"),
        )


@dataclass(frozen=True)
class ListingRules:
    row: str
    fields: dict[str, FieldRule]


@dataclass(frozen=True)
class DetailRules:
    container: str
    fields: dict[str, FieldRule]
    gallery: FieldRule


@dataclass(frozen=True)
class PageRules:
    """The fixed rule sets for both supported page shapes."""

    listing: ListingRules
    detail: DetailRules

    @classmethod
    def load(cls, path: Path | None = None) -> "PageRules":
        """Load rules from ``selectors.json``."""
        with open(path or Settings.SELECTORS_PATH, encoding="utf-8") as f:
            raw: dict[str, Any] = json.load(f)

        listing = raw["listing"]
        detail = raw["detail"]
        return cls(
            listing=ListingRules(
                row=str(listing["row"]),
                fields={
                    name: FieldRule.from_dict(name, entry)
                    for name, entry in listing["fields"].items()
                },
            ),
            detail=DetailRules(
                container=str(detail["container"]),
                fields={
                    name: FieldRule.from_dict(name, entry)
                    for name, entry in detail["fields"].items()
                },
                gallery=FieldRule.from_dict("images", detail["gallery"]),
            ),
        )


def parse_query_value(url: str, param: str) -> str:
    """Return the value after ``<param>=`` in ``url``.

    Raises:
        MissingIdentifier: the delimiter is absent or the value is empty.
    """
    if not param:
        _, sep, value = url.partition("=")
        if not sep or not value:
            raise MissingIdentifier(f"no '=' value in {url!r}")
        return value.split("&", 1)[0]

    delimiter = f"{param}="
    marker_at = -1
    # Only match whole parameter names ("shop=" must not hit "myshop=")
    for prefix in ("?", "&", ";"):
        marker_at = url.find(prefix + delimiter)
        if marker_at != -1:
            marker_at += 1
            break
    if marker_at == -1 and url.startswith(delimiter):
        marker_at = 0
    if marker_at == -1:
        raise MissingIdentifier(f"no {delimiter!r} in {url!r}")

    value = url[marker_at + len(delimiter):]
    for stop in ("&", "#", ";"):
        value = value.split(stop, 1)[0]
    if not value:
        raise MissingIdentifier(f"empty {param!r} value in {url!r}")
    return value


class FieldExtractor:
    """Applies :class:`FieldRule` objects to element handles."""

    @staticmethod
    def extract(handle: ElementHandle, rule: FieldRule) -> str | None:
        """Return the raw field value, or ``None`` when absent."""
        if rule.attribute:
            value = handle.attribute(rule.selector, rule.attribute)
        else:
            value = handle.text(rule.selector)
        return value or None

    @classmethod
    def extract_identifier(
        cls, handle: ElementHandle, rule: FieldRule
    ) -> str:
        """Extract a URL and parse its id out of ``rule.query_param``."""
        href = cls.extract(handle, rule)
        if href is None:
            raise MissingIdentifier(
                f"{rule.name}: nothing matched {rule.selector!r}"
            )
        return parse_query_value(href, rule.query_param or "")

    @classmethod
    def extract_fields(
        cls, handle: ElementHandle, rules: dict[str, FieldRule]
    ) -> dict[str, str | None]:
        """Run every rule against ``handle``.

        Identifier rules (those with ``query_param``) raise on failure;
        everything else maps to ``None`` when absent.
        """
        raw: dict[str, str | None] = {}
        for name, rule in rules.items():
            if rule.query_param:
                raw[name] = cls.extract_identifier(handle, rule)
            else:
                raw[name] = cls.extract(handle, rule)
        return raw

    @staticmethod
    def extract_many(document: Document, rule: FieldRule) -> list[str]:
        """Collect the rule's value from every match, in document order."""
        values: list[str] = []
        for handle in document.match_all(rule.selector):
            if rule.attribute:
                value = handle.attribute("", rule.attribute)
            else:
                value = handle.text()
            if value:
                values.append(value)
        logger.debug(
            "Rule '%s' collected %d values", rule.name, len(values)
        )
        return values
