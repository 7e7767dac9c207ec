"""
StealthGen - Command Line Interface
=====================================
CLI per generare e ispezionare stealth payment address.

Version: 1.0.0

Commands:
- generate: Nuovo address one-time da stealth key
- validate: Verifica una stealth key
- inspect: Decodifica un address (e i punti, se stealth)
- version: Versione software
"""

import json
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from stealth_gen import __version__
from stealth_gen.config import get_settings
from stealth_gen.constants import Network
from stealth_gen.errors import InvalidAddressError
from stealth_gen.logging_setup import setup_logging
from stealth_gen.services.stealth_service import StealthAddressService


# ============================================================================
# CLI APP
# ============================================================================

app = typer.Typer(
    name="stealthgen",
    help="StealthGen - Stealth Address Generator CLI",
    add_completion=False
)

console = Console()
err_console = Console(stderr=True)


def _parse_network(value: Optional[str]) -> Optional[Network]:
    if value is None:
        return None
    try:
        return Network.from_name(value)
    except ValueError as e:
        raise typer.BadParameter(str(e))


# ============================================================================
# COMMANDS
# ============================================================================

@app.command("generate")
def generate(
    stealth_key: str = typer.Argument(..., help="Receiver's stealth public key"),
    network: Optional[str] = typer.Option(
        None,
        "--network",
        "-n",
        help="Network (mainnet/testnet), default da settings"
    ),
    count: int = typer.Option(1, "--count", "-c", min=1, help="Numero di address"),
    as_json: bool = typer.Option(False, "--json", help="Output JSON")
):
    """Generate new one-time payment address(es)"""
    service = StealthAddressService(get_settings())
    result = service.generate(stealth_key, network=_parse_network(network), count=count)

    if as_json:
        typer.echo(json.dumps(result.to_dict(), indent=2))
        if not result.success:
            raise typer.Exit(1)
        return

    if not result.success:
        err_console.print(f"[red]Error: {result.reason}[/red]")
        raise typer.Exit(1)

    if count == 1:
        console.print(Panel.fit(
            f"[green]✅ Payment address generated[/green]\n\n"
            f"Address: [cyan]{result.address}[/cyan]\n"
            f"Payment request: [dim]{result.payment_uris[0]}[/dim]",
            title=f"Stealth Address ({result.network.name.lower()})",
            border_style="green"
        ))
        return

    table = Table(title=f"Stealth Addresses ({len(result.addresses)})")
    table.add_column("#", justify="right", style="yellow")
    table.add_column("Address", style="cyan")

    for index, address in enumerate(result.addresses, start=1):
        table.add_row(str(index), address)

    console.print(table)


@app.command("validate")
def validate(
    stealth_key: str = typer.Argument(..., help="Stealth public key da verificare")
):
    """Validate a stealth public key"""
    service = StealthAddressService(get_settings())
    check = service.validate_key(stealth_key)

    if not check.valid:
        err_console.print(f"[red]❌ Invalid stealth key: {check.error['message']}[/red]")
        raise typer.Exit(1)

    console.print("[green]✅ Valid stealth key[/green]")
    console.print(f"Receiver point: [cyan]{check.point_hex}[/cyan]")


@app.command("inspect")
def inspect(
    address: str = typer.Argument(..., help="Address da decodificare"),
    as_json: bool = typer.Option(False, "--json", help="Output JSON")
):
    """Decode an address and show its stealth points"""
    service = StealthAddressService(get_settings())

    try:
        inspection = service.inspect_address(address)
    except InvalidAddressError as e:
        err_console.print(f"[red]Invalid address: {e.message}[/red]")
        raise typer.Exit(1)

    if as_json:
        typer.echo(json.dumps(inspection.to_dict(), indent=2))
        return

    table = Table(title="Address")
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Network", inspection.network.name.lower())
    table.add_row("Type", inspection.address_type.name)
    table.add_row("Stealth", "yes" if inspection.is_stealth else "no")

    if inspection.points:
        for name, value in inspection.points.to_hex().items():
            table.add_row(name.upper(), value)

    console.print(table)


@app.command("version")
def version():
    """Show version"""
    console.print(f"StealthGen {__version__}")


# ============================================================================
# MAIN ENTRY POINT
# ============================================================================

@app.callback()
def main(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Verbose output (log DEBUG)"
    ),
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Override log level"
    )
):
    """
    StealthGen - Stealth Address Generator

    Crea payment address non collegabili per una stealth key,
    senza interazione con il receiver.
    """
    settings = get_settings()

    level = "DEBUG" if verbose else (log_level or settings.log_level)

    setup_logging(
        log_level=level,
        log_to_file=settings.log_to_file,
        log_dir=settings.log_dir,
        log_format=settings.log_format,
    )


if __name__ == "__main__":
    app()


__all__ = [
    "app",
]
