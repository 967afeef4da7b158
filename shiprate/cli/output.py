"""CLI output formatters for Rich tables and JSON.

Human-readable Rich output is the default; ``--json`` gives
machine-parseable output. Commands call these instead of printing
directly.
"""

import json

from rich.table import Table

from shiprate.config import AppConfig
from shiprate.domain.models import RateQuoteResult
from shiprate.errors import CarrierError
from shiprate.services.ups_service_codes import SERVICE_CODE_NAMES, SERVICE_LEVEL_TO_CODE
from shiprate.utils.redaction import mask_secret


def format_transit(days: int | None) -> str:
    """Format transit days, or "-" when unknown."""
    if days is None:
        return "-"
    return f"{days} day" if days == 1 else f"{days} days"


def format_quotes(result: RateQuoteResult, as_json: bool = False) -> str | Table:
    """Format a quote result as a Rich table or JSON.

    Args:
        result: Quotes to display.
        as_json: If True, return a JSON string instead of a table.

    Returns:
        JSON string, a "no quotes" message, or a Rich Table.
    """
    if as_json:
        return json.dumps(result.model_dump(mode="json"), indent=2)

    if not result.quotes:
        return f"No quotes returned (request {result.request_id})."

    table = Table(title=f"Rates ({result.request_id})", show_lines=False)
    table.add_column("Carrier", style="cyan", no_wrap=True)
    table.add_column("Code", no_wrap=True)
    table.add_column("Service", style="white")
    table.add_column("Amount", justify="right", style="green")
    table.add_column("Transit", justify="right")

    for quote in result.quotes:
        table.add_row(
            quote.carrier.upper(),
            quote.service_code,
            quote.service_name,
            f"{quote.amount:,.2f} {quote.currency}",
            format_transit(quote.estimated_transit_days),
        )
    return table


def format_carrier_error(error: CarrierError, as_json: bool = False) -> str:
    """Format a CarrierError for terminal or JSON output."""
    if as_json:
        return json.dumps({"error": error.to_dict()}, indent=2)
    retry = "retryable" if error.retryable else "not retryable"
    lines = [f"[red]{error.kind.value}[/red]: {error.message} ({retry})"]
    if error.status_code is not None:
        lines.append(f"  HTTP status: {error.status_code}")
    if error.carrier_code:
        lines.append(f"  Carrier code: {error.carrier_code}")
    return "\n".join(lines)


def format_config(config: AppConfig) -> str:
    """Render resolved configuration with secrets masked."""
    lines = [
        "[bold]UPS:[/bold]",
        f"  client_id: {mask_secret(config.ups.client_id) or '(not set)'}",
        f"  client_secret: {mask_secret(config.ups.client_secret) or '(not set)'}",
        f"  base_url: {config.ups.base_url or '(not set)'}",
        f"  configured: {config.ups.is_configured}",
        "",
        "[bold]HTTP:[/bold]",
        f"  timeout_ms: {config.http_timeout_ms:g}",
        f"  transaction_src: {config.transaction_src}",
    ]
    return "\n".join(lines)


def format_service_levels() -> Table:
    """Table of named service levels and their UPS codes."""
    table = Table(title="UPS service levels")
    table.add_column("Level", style="cyan")
    table.add_column("Code")
    table.add_column("Service")
    for level, code in SERVICE_LEVEL_TO_CODE.items():
        table.add_row(level, code.value, SERVICE_CODE_NAMES.get(code.value, ""))
    return table
