"""Budget commands for recording income/expenses and managing the goal limit."""

import sys
from datetime import date

from rich.table import Table

from fintrack.commands.common import console, fail, money_display, open_session
from fintrack.dates import date_in_month, month_label, parse_date, parse_month
from fintrack.domain.models import ZERO, TransactionKind
from fintrack.domain.money import subtract_money
from fintrack.domain.report import month_status
from fintrack.domain.transactions import TransactionBuilder
from fintrack.errors import BudgetExceeded, FinTrackError


def resolve_date(month: str | None, on: str | None, today: date | None = None) -> date:
    """Work out when an entry happened from --month / --on options.

    Args:
        month: Month as a number, name or YYYY-MM.
        on: Exact date as YYYY-MM-DD (wins over month).
        today: Reference date, defaults to today.

    Raises:
        InvalidMonth: If month can't be parsed.
        ValueError: If on isn't a valid date.
    """
    if on:
        return parse_date(on)
    if month:
        return date_in_month(parse_month(month), today)
    return today or date.today()


def entry_command(
    kind: TransactionKind,
    user: str,
    amount: str,
    category: str,
    month: str | None = None,
    on: str | None = None,
    description: str = "",
) -> None:
    """Record one income or expense entry and save."""
    try:
        occurred_on = resolve_date(month, on)
    except FinTrackError as e:
        fail(str(e))
    except ValueError as e:
        fail(f"Invalid date: {e}")

    try:
        transaction = (
            TransactionBuilder()
            .kind(kind)
            .category(category)
            .amount(amount)
            .description(description)
            .occurred_on(occurred_on)
            .build()
        )

        session = open_session()
        budget = session.open(user)
        over = session.add_transaction(user, transaction)
        session.save(user)

    except BudgetExceeded as e:
        headroom = subtract_money(e.ceiling, subtract_money(e.attempted, transaction.amount))
        console.print(f"[red]✗ {e}[/red]", style="bold")
        console.print(f"[dim]Remaining this month: {money_display(headroom)}[/dim]")
        sys.exit(1)
    except FinTrackError as e:
        fail(str(e))

    label = month_label(transaction.month)
    if kind is TransactionKind.INCOME:
        console.print(f"[green]✓ Added income {money_display(transaction.amount)} ({category}) to {label}[/green]")
    else:
        console.print(f"[green]✓ Added expense {money_display(transaction.amount)} ({category}) to {label}[/green]")

    if over:
        limit = money_display(budget.goal_limit or ZERO)
        console.print(f"[yellow]⚠ {label} is now over your limit of {limit}[/yellow]")

    console.print(f"[dim]Balance: {money_display(budget.balance(), signed=True)}[/dim]")


def limit_command(user: str, limit: str) -> None:
    """Change the monthly goal limit without touching totals."""
    try:
        session = open_session()
        session.open(user)
        session.set_goal_limit(user, limit)
        session.save(user)
    except FinTrackError as e:
        fail(str(e))

    budget = session.budget(user)
    if budget.enforced:
        console.print(f"[green]✓ Monthly limit set to {money_display(budget.goal_limit or ZERO)}[/green]")
    else:
        console.print("[green]✓ Monthly limit disabled[/green]")

    if budget.exceeded:
        months = ", ".join(month_label(m) for m in budget.exceeded_months())
        console.print(f"[yellow]⚠ Already over the new limit in: {months}[/yellow]")


def reset_command(user: str, limit: str) -> None:
    """Zero all monthly expenses and install a new limit."""
    try:
        session = open_session()
        session.open(user)
        session.reset(user, limit)
        session.save(user)
    except FinTrackError as e:
        fail(str(e))

    budget = session.budget(user)
    console.print(f"[green]✓ Expenses cleared, monthly limit now {money_display(budget.goal_limit or ZERO)}[/green]")
    console.print(f"[dim]Balance: {money_display(budget.balance(), signed=True)}[/dim]")


def status_command(user: str) -> None:
    """Show income, expenses and headroom for each month."""
    try:
        session = open_session()
        budget = session.open(user)
    except FinTrackError as e:
        fail(str(e))

    console.print(f"[bold cyan]{budget.name}[/bold cyan]\n")

    if budget.enforced:
        console.print(f"[bold]Monthly limit:[/bold] {money_display(budget.goal_limit or ZERO)} ({budget.mode.value})")
    else:
        console.print("[bold]Monthly limit:[/bold] [dim]none[/dim]")

    table = Table(show_header=True, header_style="bold")
    table.add_column("Month", style="cyan")
    table.add_column("Income", justify="right")
    table.add_column("Expenses", justify="right")
    table.add_column("Balance", justify="right")
    table.add_column("Remaining", justify="right")

    for row in month_status(budget):
        remaining = "[dim]-[/dim]" if row.remaining is None else money_display(row.remaining, signed=True)
        month_name = f"[red]{month_label(row.month)}[/red]" if row.over_limit else month_label(row.month)
        table.add_row(
            month_name,
            money_display(row.income),
            money_display(row.expenses),
            money_display(row.balance, signed=True),
            remaining,
        )

    console.print(table)
    console.print(f"\n[bold]Balance:[/bold] {money_display(budget.balance(), signed=True)}")

    if budget.exceeded:
        console.print("[yellow]⚠ Over the limit in one or more months[/yellow]")
