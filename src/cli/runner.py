# src/cli/runner.py

"""Headless one-shot extraction runner built on the orchestrators."""

import json
import logging
import sys

from rich.console import Console
from rich.table import Table

from src.models.errors import ExtractionError
from src.models.product import CatalogResponse, ProductDetail
from src.scrapers.storefront_scraper import StorefrontScraper
from src.services.catalog_orchestrator import CatalogOrchestrator
from src.services.detail_orchestrator import DetailOrchestrator

logger = logging.getLogger("storefront_feed.cli")

# Stderr console for status messages so stdout stays clean for JSON
_err = Console(stderr=True)


def _format_price(amount: float, currency: str) -> str:
    return f"{amount:,.2f} {currency}" if currency else "N/A"


def _print_catalog_table(response: CatalogResponse, shop: str) -> None:
    """Render a Rich table of catalog entries to stdout."""
    table = Table(
        title=f"Storefront {shop}",
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("#", style="dim", width=4)
    table.add_column("ID", justify="right")
    table.add_column("Title", max_width=60)
    table.add_column("Price", justify="right", style="green")
    table.add_column("Link", overflow="fold", style="dim")

    for idx, entry in enumerate(response.entries, 1):
        table.add_row(
            str(idx),
            str(entry.id),
            entry.title[:60],
            _format_price(float(entry.price.amount), entry.price.currency),
            entry.link,
        )

    Console().print(table)


def _print_detail_table(detail: ProductDetail) -> None:
    """Render a two-column Rich table of one product."""
    table = Table(
        title=f"Product {detail.id}",
        show_header=False,
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("Field", style="bold")
    table.add_column("Value", overflow="fold")

    table.add_row("Title", detail.title or "—")
    table.add_row(
        "Price",
        _format_price(float(detail.price.amount), detail.price.currency),
    )
    table.add_row("Seller", detail.seller.id or "—")
    table.add_row("Seller link", detail.seller.link or "—")
    table.add_row("Shipping", detail.shipping or "—")
    table.add_row("Description", detail.description or "—")
    table.add_row("Images", "\n".join(detail.images) or "—")

    Console().print(table)


def _write_json(payload: dict[str, object]) -> None:
    json.dump(payload, sys.stdout, ensure_ascii=False, indent=2)
    sys.stdout.write("\n")


def run_catalog(shop: str, output_format: str = "json") -> int:
    """Extract one storefront's catalog; return an exit code."""
    _err.print(f"[bold]Fetching storefront:[/bold] {shop}")
    try:
        response = CatalogOrchestrator(StorefrontScraper()).run(shop)
    except ExtractionError as exc:
        logger.error("Catalog run failed: %s", exc.message)
        _err.print(f"[red]{exc.kind}: {exc.message}[/red]")
        return 1

    _err.print(f"[green]✓ {response.length} products[/green]")
    if output_format == "table":
        _print_catalog_table(response, shop)
    else:
        _write_json(response.to_dict())
    return 0


def run_product(product_id: str, output_format: str = "json") -> int:
    """Extract one product's detail record; return an exit code."""
    _err.print(f"[bold]Fetching product:[/bold] {product_id}")
    try:
        detail = DetailOrchestrator(StorefrontScraper()).run(product_id)
    except ExtractionError as exc:
        logger.error("Detail run failed: %s", exc.message)
        _err.print(f"[red]{exc.kind}: {exc.message}[/red]")
        return 1

    if output_format == "table":
        _print_detail_table(detail)
    else:
        _write_json(detail.to_dict())
    return 0


def run_health_check() -> int:
    """Probe the storefront and print a one-row status table."""
    from src.services.health_checker import probe_storefront

    _err.print("[bold]Running storefront health check...[/bold]")
    result = probe_storefront()

    table = Table(
        title="Storefront Health Check",
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("Target", style="bold")
    table.add_column("Status", justify="center")
    table.add_column("Latency", justify="right")
    table.add_column("Notes", style="dim")

    if result.status == "ok":
        status = "[green]✅ OK[/green]"
    elif result.status == "slow":
        status = "[yellow]⚠️  SLOW[/yellow]"
    else:
        status = "[red]❌ DOWN[/red]"

    latency = (
        f"{result.latency_ms:.0f}ms"
        if result.latency_ms > 0
        else "—"
    )
    table.add_row(result.target, status, latency, result.message)

    Console().print(table)
    return 1 if result.status == "down" else 0
