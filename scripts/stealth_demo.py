#!/usr/bin/env python3
"""
StealthGen - Stealth Address Demo
===================================
Demo script per stealth addresses.

Usage:
    python scripts/stealth_demo.py [--network testnet]
"""

import argparse
import secrets
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from stealth_gen.constants import SECP256K1_N, Network
from stealth_gen.domain import (
    encode_stealth_key,
    generator_multiply,
    is_addressed_to,
)
from stealth_gen.services import StealthAddressService
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

console = Console()


def main():
    """Run stealth address demo"""

    parser = argparse.ArgumentParser(description="Stealth address demo")
    parser.add_argument("--network", default="mainnet", help="mainnet or testnet")
    args = parser.parse_args()

    network = Network.from_name(args.network)

    console.print(Panel.fit(
        "[cyan]StealthGen - Stealth Address Demo[/cyan]\n\n"
        "Demonstrating non-interactive unlinkable payments",
        border_style="cyan"
    ))

    # ========================================================================
    # STEP 1: Receiver publishes stealth key
    # ========================================================================

    console.print("\n[yellow]Step 1: Receiver creates a stealth key[/yellow]")

    secret = secrets.randbelow(SECP256K1_N - 1) + 1
    stealth_key = encode_stealth_key(generator_multiply(secret))

    console.print("[green]✅ Stealth key created[/green]")
    console.print(f"[cyan]Stealth Key: {stealth_key}[/cyan]")
    console.print("\n[dim]Receiver shares the stealth key publicly[/dim]")
    console.print("[dim]The secret scalar never leaves the receiver[/dim]")

    # ========================================================================
    # STEP 2: Senders generate payment addresses
    # ========================================================================

    console.print("\n[yellow]Step 2: Two senders generate payment addresses[/yellow]")

    service = StealthAddressService()
    result = service.generate(stealth_key, network=network, count=2)

    if not result.success:
        console.print(f"[red]Error: {result.reason}[/red]")
        sys.exit(1)

    table = Table(title="Payment Addresses")
    table.add_column("Sender", style="yellow")
    table.add_column("Address", style="cyan")

    for index, address in enumerate(result.addresses, start=1):
        table.add_row(f"#{index}", address[:24] + "..." + address[-8:])

    console.print(table)
    console.print("[dim]No interaction with the receiver, addresses are unlinkable[/dim]")

    # ========================================================================
    # STEP 3: Receiver scans
    # ========================================================================

    console.print("\n[yellow]Step 3: Receiver recognizes its outputs[/yellow]")

    for index, address in enumerate(result.addresses, start=1):
        inspection = service.inspect_address(address)
        mine = is_addressed_to(inspection.points, secret)
        console.print(f"Sender #{index}: {'[green]✅ mine[/green]' if mine else '[red]not mine[/red]'}")

    stranger = secrets.randbelow(SECP256K1_N - 1) + 1
    inspection = service.inspect_address(result.addresses[0])
    console.print(
        f"Another key: "
        f"{'[red]matched[/red]' if is_addressed_to(inspection.points, stranger) else '[green]no match[/green]'}"
    )

    # ========================================================================
    # STEP 4: Payment request
    # ========================================================================

    console.print("\n[yellow]Step 4: Payment request URI[/yellow]")
    console.print(f"[cyan]{result.payment_uris[0]}[/cyan]")

    console.print(Panel.fit(
        "[green]Demo completed[/green]",
        border_style="green"
    ))


if __name__ == "__main__":
    main()
