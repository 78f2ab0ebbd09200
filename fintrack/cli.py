"""CLI entry point for fintrack."""

import logging

import typer
from rich.logging import RichHandler

from fintrack import __version__
from fintrack.commands.admin import init_command, list_command
from fintrack.commands.budget import entry_command, limit_command, reset_command, status_command
from fintrack.commands.report import report_command
from fintrack.domain.models import TransactionKind

app = typer.Typer(
    name="fintrack",
    help="fintrack - Track your monthly income, expenses and budget limit",
    add_completion=False,
)


def configure_logging(verbose: bool) -> None:
    """Send log records through rich, at DEBUG when verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"fintrack {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
    version: bool = typer.Option(
        False, "--version", callback=version_callback, is_eager=True, help="Show the version and exit"
    ),
) -> None:
    """fintrack - Track your monthly income, expenses and budget limit."""
    configure_logging(verbose)


@app.command(name="init")
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing config"),
) -> None:
    """Initialize fintrack configuration and storage."""
    init_command(force)


@app.command()
def income(
    user: str,
    amount: str,
    category: str = typer.Option("Income", "--category", "-c", help="Income category"),
    month: str = typer.Option(None, "--month", "-m", help="Month (1-12, name or YYYY-MM)"),
    on: str = typer.Option(None, "--on", help="Exact date (YYYY-MM-DD)"),
    description: str = typer.Option("", "--description", "-d", help="Free-text description"),
) -> None:
    """Record income for a user."""
    entry_command(TransactionKind.INCOME, user, amount, category, month, on, description)


@app.command()
def expense(
    user: str,
    amount: str,
    category: str = typer.Option(..., "--category", "-c", help="Expense category"),
    month: str = typer.Option(None, "--month", "-m", help="Month (1-12, name or YYYY-MM)"),
    on: str = typer.Option(None, "--on", help="Exact date (YYYY-MM-DD)"),
    description: str = typer.Option("", "--description", "-d", help="Free-text description"),
) -> None:
    """Record an expense for a user, enforcing the monthly limit."""
    entry_command(TransactionKind.EXPENSE, user, amount, category, month, on, description)


@app.command()
def status(user: str) -> None:
    """Show a user's budget month by month."""
    status_command(user)


@app.command(name="limit")
def limit(user: str, amount: str) -> None:
    """Change the monthly limit (0 disables it)."""
    limit_command(user, amount)


@app.command()
def reset(user: str, amount: str) -> None:
    """Clear all monthly expenses and set a new monthly limit."""
    reset_command(user, amount)


@app.command(name="list")
def list_transactions(
    user: str,
    limit: int = typer.Option(50, help="Maximum transactions to show"),
    all: bool = typer.Option(False, "--all", "-a", help="Show all transactions"),
) -> None:
    """List a user's transactions."""
    list_command(user, limit, all)


@app.command(name="report")
def report(
    user: str,
    sort_by: str = typer.Option("value", help="Sort by 'value' or 'alpha'"),
    threshold: float = typer.Option(80.0, help="Warn when this % of the yearly limit is spent"),
) -> None:
    """Show income and spending breakdown for a user."""
    report_command(user, sort_by, threshold)


if __name__ == "__main__":
    app()
