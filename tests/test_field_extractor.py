# tests/test_field_extractor.py

"""Tests for declarative field rules and their extraction."""

import unittest
from pathlib import Path

from src.extraction.field_extractor import (
    FieldExtractor,
    FieldRule,
    PageRules,
    parse_query_value,
)
from src.models.errors import MissingIdentifier
from src.scrapers.document import Document

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def _load_document(fixture_name: str) -> Document:
    """Parse an HTML fixture into a Document."""
    with open(FIXTURES_DIR / fixture_name, encoding="utf-8") as f:
        return Document.from_html(f.read())


class TestParseQueryValue(unittest.TestCase):
    """Pulling an id out of an href."""

    def test_seller_link(self) -> None:
        """'.../storefront.php?shop=42' resolves to '42'."""
        self.assertEqual(
            parse_query_value(
                "https://www.shopier.com/storefront.php?shop=42", "shop"
            ),
            "42",
        )

    def test_stops_at_next_parameter(self) -> None:
        """The value ends at '&'."""
        self.assertEqual(
            parse_query_value("products.php?id=1001&sid=xyz=", "id"),
            "1001",
        )

    def test_parameter_not_first(self) -> None:
        """The parameter may follow other parameters."""
        self.assertEqual(
            parse_query_value("s.php?lang=tr&shop=abc#top", "shop"),
            "abc",
        )

    def test_does_not_match_suffix_of_other_name(self) -> None:
        """'myshop=' is not 'shop='."""
        with self.assertRaises(MissingIdentifier):
            parse_query_value("s.php?myshop=7", "shop")

    def test_missing_delimiter_raises(self) -> None:
        """No delimiter means no id, never a default of 0."""
        with self.assertRaises(MissingIdentifier):
            parse_query_value("https://www.shopier.com/storefront.php", "shop")

    def test_empty_value_raises(self) -> None:
        """'shop=' with nothing after it is missing."""
        with self.assertRaises(MissingIdentifier):
            parse_query_value("storefront.php?shop=&x=1", "shop")

    def test_bare_delimiter_rule(self) -> None:
        """Without a parameter name the first '=' splits the href."""
        self.assertEqual(parse_query_value("p.php?id=55&a=b", ""), "55")
        with self.assertRaises(MissingIdentifier):
            parse_query_value("p.php", "")


class TestPageRules(unittest.TestCase):
    """Rules shipped in selectors.json."""

    def setUp(self) -> None:
        self.rules = PageRules.load()

    def test_listing_rules(self) -> None:
        """Listing rows expose id, image, title and price."""
        self.assertEqual(self.rules.listing.row, "div.product")
        self.assertEqual(
            set(self.rules.listing.fields),
            {"id", "image", "title", "price"},
        )
        self.assertEqual(self.rules.listing.fields["id"].query_param, "id")
        self.assertEqual(
            self.rules.listing.fields["image"].attribute, "src"
        )

    def test_detail_rules(self) -> None:
        """Detail pages expose the container fields and a gallery."""
        self.assertEqual(
            self.rules.detail.container, "div.product-page-container"
        )
        self.assertEqual(
            set(self.rules.detail.fields),
            {"title", "description", "shipping", "seller_id", "price"},
        )
        self.assertTrue(self.rules.detail.gallery.many)
        self.assertEqual(
            self.rules.detail.fields["seller_id"].query_param, "shop"
        )


class TestFieldExtractor(unittest.TestCase):
    """Applying rules to parsed fixture pages."""

    def setUp(self) -> None:
        self.rules = PageRules.load()

    def test_listing_row_fields(self) -> None:
        """The first listing row yields its raw field strings."""
        doc = _load_document("storefront_listing.html")
        rows = doc.match_all(self.rules.listing.row)
        self.assertEqual(len(rows), 3)

        raw = FieldExtractor.extract_fields(
            rows[0], self.rules.listing.fields
        )
        self.assertEqual(raw["id"], "1001")
        self.assertEqual(raw["title"], "El Yapımı Seramik Kupa")
        self.assertEqual(raw["price"], "149,90 TL")
        self.assertEqual(
            raw["image"],
            "https://cdn.shopier.app/pictures_mid/kupa-1001.jpg",
        )

    def test_absent_optional_field_is_none(self) -> None:
        """A simply missing field maps to None, not an exception."""
        doc = Document.from_html(
            '<div class="product"><span>no fields here</span></div>'
        )
        row = doc.match_all("div.product")[0]
        rule = FieldRule(name="title", selector=".product__title")
        self.assertIsNone(FieldExtractor.extract(row, rule))
        img = FieldRule(name="image", selector="img", attribute="src")
        self.assertIsNone(FieldExtractor.extract(row, img))

    def test_missing_identifier_link_raises(self) -> None:
        """An identifier rule with no matching link raises."""
        doc = Document.from_html('<div class="product"></div>')
        row = doc.match_all("div.product")[0]
        with self.assertRaises(MissingIdentifier):
            FieldExtractor.extract_fields(row, self.rules.listing.fields)

    def test_detail_container_fields(self) -> None:
        """The detail container yields text and the seller id."""
        doc = _load_document("product_detail.html")
        container = doc.match_all(self.rules.detail.container)[0]
        raw = FieldExtractor.extract_fields(
            container, self.rules.detail.fields
        )
        self.assertEqual(raw["title"], "El Yapımı Seramik Kupa")
        self.assertEqual(
            raw["description"], "350 ml, bulaşık makinesinde yıkanabilir."
        )
        self.assertEqual(
            raw["shipping"], "2-3 iş günü içinde kargoya verilir."
        )
        self.assertEqual(raw["seller_id"], "42")
        self.assertEqual(raw["price"], "1.249,999 TL")

    def test_gallery_in_document_order(self) -> None:
        """extract_many collects every thumbnail in order."""
        doc = _load_document("product_detail.html")
        images = FieldExtractor.extract_many(doc, self.rules.detail.gallery)
        self.assertEqual(
            images,
            [
                "https://cdn.shopier.app/pictures_large/kupa-1.jpg",
                "https://cdn.shopier.app/pictures_large/kupa-2.jpg",
                "https://cdn.shopier.app/pictures_large/kupa-3.jpg",
            ],
        )

    def test_gallery_empty_page(self) -> None:
        """No thumbnails yields an empty list."""
        doc = _load_document("empty_page.html")
        self.assertEqual(
            FieldExtractor.extract_many(doc, self.rules.detail.gallery), []
        )


if __name__ == "__main__":
    unittest.main()
