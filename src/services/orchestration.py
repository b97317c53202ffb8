# src/services/orchestration.py

"""Shared state tracking for the catalog and detail orchestrators."""

import logging
from enum import Enum, auto

from src.config.settings import Settings
from src.extraction.field_extractor import PageRules
from src.extraction.record_assembler import RecordAssembler
from src.models.errors import ExtractionError
from src.scrapers.storefront_scraper import StorefrontScraper


class OrchestratorState(Enum):
    """Lifecycle of a single orchestrated request."""

    START = auto()
    FETCHING = auto()
    EXTRACTING = auto()
    ASSEMBLING = auto()
    DONE = auto()
    FAILED = auto()


class BaseOrchestrator:
    """Drives one fetch → extract → assemble run and records its states.

    An orchestrator serves exactly one request; build a new one per
    request.
    """

    def __init__(
        self,
        scraper: StorefrontScraper,
        rules: PageRules | None = None,
        assembler: RecordAssembler | None = None,
        logger_name: str = "orchestrator",
    ) -> None:
        self.scraper = scraper
        self.rules = rules or PageRules.load()
        self.assembler = assembler or RecordAssembler(
            Settings.site_urls(), Settings.CURRENCY_MARKER
        )
        self.logger = logging.getLogger(f"storefront_feed.{logger_name}")
        self.state = OrchestratorState.START
        self.history: list[OrchestratorState] = [self.state]
        self.error: ExtractionError | None = None

    def _transition(self, state: OrchestratorState) -> None:
        self.logger.debug("%s -> %s", self.state.name, state.name)
        self.state = state
        self.history.append(state)

    def _fail(self, exc: ExtractionError) -> None:
        self.error = exc
        self._transition(OrchestratorState.FAILED)
        self.logger.warning(
            "Run failed in %s: %s (%s)",
            self.history[-2].name,
            exc.kind,
            exc.message,
        )
