"""Report command for viewing spending by category."""

from rich.table import Table

from fintrack.commands.common import console, fail, money_display, open_session
from fintrack.domain.models import ZERO
from fintrack.domain.report import budget_alert, create_category_reports, summarize
from fintrack.errors import FinTrackError


def calculate_histogram_bar_length(percentage: float, bar_width: int) -> int:
    """Calculate histogram bar length for a share of total spending.

    Args:
        percentage: Share of the total (0-100).
        bar_width: Maximum bar width in characters.

    Returns:
        Bar length in characters.
    """
    if percentage <= 0:
        return 0
    return int(min(percentage, 100.0) / 100 * bar_width)


def report_command(user: str, sort_by: str = "value", threshold: float = 80.0) -> None:
    """Show income, spending by category and large single expenses."""
    try:
        session = open_session()
        budget = session.open(user)
        transactions = session.transactions(user)
        totals = session.store.totals_by_category(user)
        large = session.exceeding(user)
        alert = budget_alert(budget, threshold)
    except FinTrackError as e:
        fail(str(e))

    if not transactions:
        console.print("[yellow]No transactions recorded yet[/yellow]")
        return

    summary = summarize(transactions)

    console.print(f"[bold cyan]{budget.name} - Report[/bold cyan]\n")
    console.print(f"[bold]Income:[/bold]   {money_display(summary.total_income)}")
    console.print(f"[bold]Expenses:[/bold] {money_display(summary.total_expenses)}")
    console.print(f"[bold]Net:[/bold]      {money_display(summary.net_balance, signed=True)}\n")

    if totals:
        table = Table(title="Spending by category", show_header=True, header_style="bold")
        table.add_column("Category", style="magenta")
        table.add_column("Spent", justify="right")
        table.add_column("Share", justify="right")
        table.add_column("", style="cyan")

        for row in create_category_reports(totals, sort_by):
            bar = "█" * calculate_histogram_bar_length(row.percentage, 30)
            table.add_row(row.category, money_display(row.amount), f"{row.percentage:.0f}%", bar)

        console.print(table)

    if large:
        limit = money_display(budget.goal_limit or ZERO)
        console.print(f"\n[bold]Single expenses above the monthly limit ({limit}):[/bold]")
        for transaction in large:
            console.print(
                f"  {transaction.occurred_on.isoformat()}  {transaction.category:<15} "
                f"[red]{money_display(transaction.amount)}[/red]  [dim]{transaction.description}[/dim]"
            )

    if alert:
        console.print(f"\n[yellow]⚠ {alert}[/yellow]")
