# src/services/catalog_orchestrator.py

"""Builds a storefront's catalog from its listing page."""

from dataclasses import dataclass
from enum import Enum

from src.config.settings import Settings
from src.extraction.field_extractor import FieldExtractor, PageRules
from src.extraction.record_assembler import RecordAssembler
from src.models.errors import ExtractionError, InvalidRequest
from src.models.product import CatalogEntry, CatalogResponse
from src.scrapers.document import ElementHandle
from src.scrapers.storefront_scraper import StorefrontScraper
from src.services.orchestration import BaseOrchestrator, OrchestratorState


class RowErrorPolicy(Enum):
    """What to do when one listing row fails to extract."""

    FAIL_FAST = "fail_fast"
    SKIP = "skip"

    @classmethod
    def from_setting(cls, value: str) -> "RowErrorPolicy":
        try:
            return cls(value.strip().lower())
        except ValueError:
            valid = ", ".join(p.value for p in cls)
            raise ValueError(
                f"Unknown row error policy {value!r} (expected {valid})"
            ) from None


@dataclass
class RowResult:
    """Outcome of extracting one listing row."""

    index: int
    entry: CatalogEntry | None = None
    error: ExtractionError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class CatalogOrchestrator(BaseOrchestrator):
    """Fetch a listing page and turn every product row into an entry."""

    def __init__(
        self,
        scraper: StorefrontScraper,
        rules: PageRules | None = None,
        assembler: RecordAssembler | None = None,
        policy: RowErrorPolicy | None = None,
    ) -> None:
        super().__init__(scraper, rules, assembler, "catalog")
        self.policy = policy or RowErrorPolicy.from_setting(
            Settings.ROW_ERROR_POLICY
        )

    def _extract_row(self, index: int, row: ElementHandle) -> RowResult:
        try:
            raw = FieldExtractor.extract_fields(
                row, self.rules.listing.fields
            )
            entry = self.assembler.assemble_catalog_entry(raw)
        except ExtractionError as exc:
            return RowResult(index=index, error=exc)
        return RowResult(index=index, entry=entry)

    def _collect(self, results: list[RowResult]) -> CatalogResponse:
        entries: list[CatalogEntry] = []
        skipped = 0
        for result in results:
            if not result.ok:
                self.logger.warning(
                    "Skipping row %d: %s (%s)",
                    result.index,
                    result.error.kind,
                    result.error.message,
                )
                skipped += 1
                continue
            if result.entry is not None:
                entries.append(result.entry)
        return CatalogResponse(
            entries=entries,
            skipped=(
                skipped if self.policy is RowErrorPolicy.SKIP else None
            ),
        )

    def run(self, shop: str) -> CatalogResponse:
        """Return the catalog of ``shop``.

        Raises:
            InvalidRequest: ``shop`` is blank.
            FetchError: the listing page could not be fetched.
            MalformedPrice, MissingIdentifier: a row failed under the
                fail-fast policy.
        """
        try:
            if not shop or not shop.strip():
                raise InvalidRequest("shop identifier is empty")
            shop = shop.strip()

            self._transition(OrchestratorState.FETCHING)
            document = self.scraper.fetch_listing(shop)

            self._transition(OrchestratorState.EXTRACTING)
            results: list[RowResult] = []
            for index, row in enumerate(
                document.match_all(self.rules.listing.row)
            ):
                result = self._extract_row(index, row)
                if (
                    not result.ok
                    and self.policy is RowErrorPolicy.FAIL_FAST
                ):
                    raise result.error
                results.append(result)

            self._transition(OrchestratorState.ASSEMBLING)
            response = self._collect(results)
        except ExtractionError as exc:
            self._fail(exc)
            raise

        self._transition(OrchestratorState.DONE)
        self.logger.info(
            "Shop '%s': %d entries (%s skipped)",
            shop,
            response.length,
            response.skipped or 0,
        )
        return response
