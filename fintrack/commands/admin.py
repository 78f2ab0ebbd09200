"""Admin commands for init and listing transactions."""

import sys

from rich.table import Table

from fintrack.commands.common import console, fail, money_display, open_session
from fintrack.config import create_default_config, get_config_path, load_settings
from fintrack.domain.models import TransactionKind
from fintrack.errors import FinTrackError
from fintrack.store.schema import DB_FILENAME, init_database


def init_command(force: bool = False) -> None:
    """Create the config file and storage location."""
    config_path = get_config_path()

    if config_path.exists() and not force:
        console.print("[red]Initialization failed:[/red]", style="bold")
        console.print(f"  Config already exists: {config_path}")
        console.print("\n[yellow]Use 'fintrack init --force' to overwrite[/yellow]")
        sys.exit(1)

    try:
        console.print(f"[cyan]Creating config file at {config_path}...[/cyan]")
        create_default_config(config_path)
        console.print("[green]✓[/green] Config file created (permissions: 600)")

        settings = load_settings(config_path)
        settings.storage_path.mkdir(parents=True, exist_ok=True)
        if settings.backend == "sqlite":
            init_database(settings.storage_path / DB_FILENAME)
            console.print("[green]✓[/green] Database initialized")
    except OSError as e:
        fail(f"Filesystem error: {e}")
    except FinTrackError as e:
        fail(str(e))

    console.print("\n[green]Initialization complete![/green]", style="bold")
    console.print(f"[dim]Config: {config_path}[/dim]")
    console.print(f"[dim]Data: {settings.storage_path}[/dim]")


def list_command(user: str, limit: int = 50, all: bool = False) -> None:
    """List a user's transactions, most recent entry last."""
    try:
        session = open_session()
        transactions = session.transactions(user)
    except FinTrackError as e:
        fail(str(e))

    if not transactions:
        console.print("[yellow]No transactions found[/yellow]")
        return

    shown = transactions if all else transactions[-limit:]

    title = f"Transactions (showing all {len(shown)})" if all else f"Transactions (showing {len(shown)})"
    table = Table(title=title)
    table.add_column("Date", style="cyan")
    table.add_column("Description", style="white")
    table.add_column("Amount", justify="right")
    table.add_column("Category", style="magenta")
    table.add_column("ID", style="dim")

    for txn in shown:
        amount = txn.amount.copy_negate() if txn.kind is TransactionKind.EXPENSE else txn.amount
        table.add_row(
            txn.occurred_on.isoformat(),
            txn.description or "[dim]-[/dim]",
            money_display(amount, signed=True),
            txn.category,
            txn.id[:8],
        )

    console.print(table)
