"""Helpers shared by the CLI commands."""

import sys
from decimal import Decimal
from pathlib import Path
from typing import NoReturn

from rich.console import Console

from fintrack.config import load_settings
from fintrack.domain.money import format_money
from fintrack.session import Session
from fintrack.store.gateway import open_gateway

console = Console()


def fail(message: str) -> NoReturn:
    """Print an error and exit with status 1."""
    console.print(f"[red]{message}[/red]", style="bold")
    sys.exit(1)


def open_session(config_path: Path | None = None) -> Session:
    """Build a Session from the configured storage backend.

    Raises:
        FinTrackError: If the config is invalid or storage can't be opened.
    """
    settings = load_settings(config_path)
    gateway = open_gateway(settings.backend, settings.storage_path)
    return Session(gateway, settings)


def money_display(amount: Decimal, signed: bool = False) -> str:
    """Format an amount with rich colour markup."""
    if signed and amount < 0:
        return f"[red]-{format_money(amount.copy_abs())}[/red]"
    if signed:
        return f"[green]+{format_money(amount)}[/green]"
    return format_money(amount)
