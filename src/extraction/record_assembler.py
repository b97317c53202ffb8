# src/extraction/record_assembler.py

"""Build typed records from raw extracted field values."""

from src.extraction.price_normalizer import normalize
from src.models.errors import MissingIdentifier
from src.models.price import Money
from src.models.product import (
    CatalogEntry,
    ProductDetail,
    SellerRef,
    SiteUrls,
)

RawFields = dict[str, str | None]


class RecordAssembler:
    """Assemble catalog entries and product details.

    Mandatory fields (ids, price, seller) raise on the first failure;
    optional text defaults to ``""`` and images to ``[]``.
    """

    def __init__(self, urls: SiteUrls, marker: str = "TL") -> None:
        self.urls = urls
        self.marker = marker

    @staticmethod
    def _parse_id(raw: str | None, field_name: str) -> int:
        """Parse a non-negative integer id."""
        text = (raw or "").strip()
        if not (text.isascii() and text.isdigit()):
            raise MissingIdentifier(
                f"{field_name}: {raw!r} is not a numeric id"
            )
        return int(text)

    def _price(self, raw: str | None) -> Money:
        return normalize(raw, self.marker)

    def assemble_catalog_entry(self, raw: RawFields) -> CatalogEntry:
        """Build a :class:`CatalogEntry` from one listing row."""
        return CatalogEntry(
            id=self._parse_id(raw.get("id"), "id"),
            title=raw.get("title") or "",
            image=raw.get("image") or "",
            price=self._price(raw.get("price")),
            urls=self.urls,
        )

    def assemble_product_detail(
        self,
        product_id: int,
        raw: RawFields,
        images: list[str] | None = None,
    ) -> ProductDetail:
        """Build a :class:`ProductDetail` from the product container.

        ``product_id`` comes from the request, not the page.
        """
        seller_id = raw.get("seller_id")
        if not seller_id:
            raise MissingIdentifier("seller_id: no seller link")

        return ProductDetail(
            id=product_id,
            title=raw.get("title") or "",
            description=raw.get("description") or "",
            shipping=raw.get("shipping") or "",
            price=self._price(raw.get("price")),
            seller=SellerRef(id=seller_id, urls=self.urls),
            images=list(images or []),
        )
