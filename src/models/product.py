# src/models/product.py

"""Catalog and product-detail records served by the HTTP layer.

Derived links (``query`` and ``link``) are never stored: they are
properties computed from the record's id and the injected
:class:`SiteUrls`, so they cannot drift from the id they describe.
"""

from dataclasses import dataclass, field
from typing import Any

from src.models.price import Money


@dataclass(frozen=True)
class SiteUrls:
    """Base addresses used to build derived links."""

    service_base: str
    site_base: str
    storefront: str

    def product_query(self, product_id: int | str) -> str:
        """Link back into this service's detail endpoint."""
        return f"{self.service_base.rstrip('/')}/product/{product_id}"

    def product_link(self, product_id: int | str) -> str:
        """Public product page on the storefront site."""
        return f"{self.site_base.rstrip('/')}/{product_id}"

    def seller_query(self, seller_id: str) -> str:
        """Link back into this service's catalog endpoint."""
        return f"{self.service_base.rstrip('/')}/products/{seller_id}"

    def seller_link(self, seller_id: str) -> str:
        """Public storefront page of a seller."""
        return f"{self.storefront}?shop={seller_id}"


@dataclass
class SellerRef:
    """The seller a product belongs to."""

    id: str
    urls: SiteUrls = field(repr=False, compare=False)

    @property
    def query(self) -> str:
        return self.urls.seller_query(self.id) if self.id else ""

    @property
    def link(self) -> str:
        return self.urls.seller_link(self.id) if self.id else ""

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "query": self.query, "link": self.link}

    @classmethod
    def from_dict(cls, data: dict[str, Any], urls: SiteUrls) -> "SellerRef":
        return cls(id=str(data.get("id", "")), urls=urls)


@dataclass
class CatalogEntry:
    """One product row on a storefront listing page."""

    id: int
    title: str
    image: str
    price: Money
    urls: SiteUrls = field(repr=False, compare=False)

    @property
    def query(self) -> str:
        return self.urls.product_query(self.id)

    @property
    def link(self) -> str:
        return self.urls.product_link(self.id)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "query": self.query,
            "image": self.image,
            "link": self.link,
            "price": self.price.to_dict(),
        }

    @classmethod
    def from_dict(
        cls, data: dict[str, Any], urls: SiteUrls
    ) -> "CatalogEntry":
        """Rebuild an entry; ``query``/``link`` are recomputed, not read."""
        return cls(
            id=int(data["id"]),
            title=str(data.get("title", "")),
            image=str(data.get("image", "")),
            price=Money.from_dict(data.get("price", {})),
            urls=urls,
        )


@dataclass
class ProductDetail:
    """Everything extracted from a single product page."""

    id: int
    title: str
    description: str
    shipping: str
    price: Money
    seller: SellerRef
    images: list[str] = field(default_factory=lambda: list[str]())

    @classmethod
    def empty(cls, urls: SiteUrls) -> "ProductDetail":
        """All-zero-value record for a page with no product markup."""
        return cls(
            id=0,
            title="",
            description="",
            shipping="",
            price=Money.zero(),
            seller=SellerRef(id="", urls=urls),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "shipping": self.shipping,
            "images": list(self.images),
            "price": self.price.to_dict(),
            "seller": self.seller.to_dict(),
        }

    @classmethod
    def from_dict(
        cls, data: dict[str, Any], urls: SiteUrls
    ) -> "ProductDetail":
        return cls(
            id=int(data.get("id", 0)),
            title=str(data.get("title", "")),
            description=str(data.get("description", "")),
            shipping=str(data.get("shipping", "")),
            price=Money.from_dict(data.get("price", {})),
            seller=SellerRef.from_dict(data.get("seller", {}), urls),
            images=[str(i) for i in data.get("images") or []],
        )


@dataclass
class CatalogResponse:
    """Ordered listing of a storefront's products.

    ``skipped`` counts rows dropped under the skip-row policy and is
    ``None`` when rows are never skipped.
    """

    entries: list[CatalogEntry] = field(
        default_factory=lambda: list[CatalogEntry]()
    )
    skipped: int | None = None

    @property
    def length(self) -> int:
        return len(self.entries)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "content": [e.to_dict() for e in self.entries],
            "length": self.length,
        }
        if self.skipped is not None:
            data["skipped"] = self.skipped
        return data
