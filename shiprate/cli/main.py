"""shiprate CLI: rate quotes from the terminal.

Usage:
    shiprate quote request.json              Quote all services
    shiprate quote request.json -s ground    Quote one service level
    shiprate services                        List known service levels
    shiprate config show                     Show resolved config
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Optional

import typer
from rich.console import Console

from shiprate.cli.output import (
    format_carrier_error,
    format_config,
    format_quotes,
    format_service_levels,
)
from shiprate.config import AppConfig, ConfigError, load_config
from shiprate.domain.models import RateQuoteResult
from shiprate.errors import CarrierError
from shiprate.services.http_transport import HttpxTransport
from shiprate.services.shipping_service import create_shipping_service
from shiprate.services.ups_constants import UPS_CARRIER_ID

_log = logging.getLogger(__name__)

app = typer.Typer(
    name="shiprate",
    help="Carrier-agnostic shipping rate quotes",
    no_args_is_help=True,
)
config_app = typer.Typer(help="Configuration management")
app.add_typer(config_app, name="config")

console = Console()

# --- Global state ---
_config_path: str | None = None


@app.callback()
def main(
    config: Optional[str] = typer.Option(
        None, "--config", help="Path to shiprate.yaml config file"
    ),
    log_level: str = typer.Option(
        "warning", "--log-level", help="Logging level (debug, info, warning, error)"
    ),
):
    """shiprate: carrier-agnostic shipping rate quotes."""
    global _config_path
    _config_path = config
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _load_request(path: Path) -> dict[str, Any]:
    """Read a rate request JSON object from disk."""
    try:
        data = json.loads(path.read_text())
    except (OSError, json.JSONDecodeError) as e:
        console.print(f"[red]Could not read rate request {path}:[/red] {e}")
        raise typer.Exit(2)
    if not isinstance(data, dict):
        console.print(f"[red]Rate request {path} must contain a JSON object[/red]")
        raise typer.Exit(2)
    return data


def _emit(output: Any, as_json: bool) -> None:
    """Print JSON verbatim, everything else through Rich."""
    if as_json:
        typer.echo(output)
    else:
        console.print(output)


async def _fetch_rates(
    cfg: AppConfig, request: dict[str, Any], carrier: str,
) -> RateQuoteResult:
    async with HttpxTransport(cfg.http_timeout_ms) as transport:
        service = create_shipping_service(cfg, transport)
        return await service.get_rates(request, carrier)


@app.command()
def quote(
    request_file: Path = typer.Argument(..., help="JSON file with the rate request"),
    carrier: str = typer.Option(UPS_CARRIER_ID, "--carrier", "-c", help="Carrier id"),
    service: Optional[str] = typer.Option(
        None, "--service", "-s", help="Service level (e.g. ground); omit to shop all"
    ),
    as_json: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """Quote rates for a shipment."""
    try:
        cfg = load_config(config_path=_config_path, require_ups=carrier == UPS_CARRIER_ID)
    except ConfigError as e:
        console.print(f"[red]Config error:[/red] {e}")
        raise typer.Exit(2)

    request = _load_request(request_file)
    if service:
        request.pop("service_level", None)
        request["serviceLevel"] = service

    try:
        result = asyncio.run(_fetch_rates(cfg, request, carrier))
    except CarrierError as e:
        _log.debug("Rate request failed: %s", e)
        _emit(format_carrier_error(e, as_json=as_json), as_json)
        raise typer.Exit(1)

    _emit(format_quotes(result, as_json=as_json), as_json)


@app.command()
def services():
    """List named service levels and their UPS codes."""
    console.print(format_service_levels())


@config_app.command("show")
def config_show():
    """Display resolved configuration (secrets masked)."""
    try:
        cfg = load_config(config_path=_config_path, require_ups=False)
    except ConfigError as e:
        console.print(f"[red]Config error:[/red] {e}")
        raise typer.Exit(2)
    console.print(format_config(cfg))


if __name__ == "__main__":
    app()
