# src/services/detail_orchestrator.py

"""Builds a single product's detail record from its product page."""

from src.config.settings import Settings
from src.extraction.field_extractor import FieldExtractor, PageRules
from src.extraction.record_assembler import RawFields, RecordAssembler
from src.models.errors import ExtractionError, InvalidRequest, ProductNotFound
from src.models.product import ProductDetail
from src.scrapers.document import Document
from src.scrapers.storefront_scraper import StorefrontScraper
from src.services.orchestration import BaseOrchestrator, OrchestratorState


def parse_product_id(raw: str | int) -> int:
    """Validate the caller-supplied product id."""
    text = str(raw).strip()
    # str.isdigit also accepts superscripts and non-Latin digits
    if not (text.isascii() and text.isdigit()):
        raise InvalidRequest(f"product id {raw!r} is not numeric")
    return int(text)


class DetailOrchestrator(BaseOrchestrator):
    """Fetch a product page and merge its two extraction passes.

    The first pass reads the product container, the second the image
    gallery. A page matching neither yields an all-zero-value record,
    or :class:`ProductNotFound` when ``not_found_as_404`` is set.
    """

    def __init__(
        self,
        scraper: StorefrontScraper,
        rules: PageRules | None = None,
        assembler: RecordAssembler | None = None,
        not_found_as_404: bool | None = None,
    ) -> None:
        super().__init__(scraper, rules, assembler, "detail")
        self.not_found_as_404 = (
            Settings.DETAIL_NOT_FOUND_AS_404
            if not_found_as_404 is None
            else not_found_as_404
        )

    def _container_pass(self, document: Document) -> RawFields | None:
        """Raw fields of the last matched product container, if any."""
        raw: RawFields | None = None
        for container in document.match_all(self.rules.detail.container):
            raw = FieldExtractor.extract_fields(
                container, self.rules.detail.fields
            )
        return raw

    def _gallery_pass(self, document: Document) -> list[str]:
        gallery = self.rules.detail.gallery
        images = FieldExtractor.extract_many(document, gallery)
        return images if gallery.many else images[:1]

    def run(self, product_id: str | int) -> ProductDetail:
        """Return the detail record of ``product_id``.

        Raises:
            InvalidRequest: ``product_id`` is not numeric.
            FetchError: the product page could not be fetched.
            MalformedPrice, MissingIdentifier: a mandatory field failed.
            ProductNotFound: the page is empty and the 404 policy is on.
        """
        try:
            pid = parse_product_id(product_id)

            self._transition(OrchestratorState.FETCHING)
            document = self.scraper.fetch_product(pid)

            self._transition(OrchestratorState.EXTRACTING)
            raw = self._container_pass(document)
            images = self._gallery_pass(document)

            self._transition(OrchestratorState.ASSEMBLING)
            if raw is None:
                if not images and self.not_found_as_404:
                    raise ProductNotFound(f"product {pid} not found")
                detail = ProductDetail.empty(self.assembler.urls)
                detail.images = images
            else:
                detail = self.assembler.assemble_product_detail(
                    pid, raw, images
                )
        except ExtractionError as exc:
            self._fail(exc)
            raise

        self._transition(OrchestratorState.DONE)
        self.logger.info(
            "Product %s: %d images, seller '%s'",
            detail.id,
            len(detail.images),
            detail.seller.id,
        )
        return detail
