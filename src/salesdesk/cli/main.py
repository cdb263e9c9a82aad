import asyncio
import logging
from typing import Optional

import typer
from tortoise import Tortoise
from tortoise.exceptions import BaseORMException

from salesdesk.common.pagination import parse_page_params
from salesdesk.core.exceptions import DataAccessError
from salesdesk.features.expenses import service as expense_service
from salesdesk.features.expenses.models import ExpenseHistory
from salesdesk.features.reports import service as report_service
from salesdesk.features.reports.aggregation import parse_month, parse_year
from salesdesk.features.transactions.models import Transaction
from salesdesk.main import TORTOISE_ORM_CONFIG

logger = logging.getLogger(__name__)

app = typer.Typer(name="salesdesk-cli", help="CLI for inspecting SalesDesk expense and sales data.")


# Shared async context manager for database connection
class DBConnection:
    async def __aenter__(self):
        await Tortoise.init(config=TORTOISE_ORM_CONFIG)
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await Tortoise.close_connections()


def _fail(message: str):
    typer.secho(message, fg=typer.colors.RED)
    raise typer.Exit(code=1)


# Expense history commands
expenses_app = typer.Typer(name="expenses", help="Inspect and prune the expense history ledger.")
app.add_typer(expenses_app)


@expenses_app.command("list")
def list_expenses_command(
    page: Optional[str] = typer.Option(None, help="Page number (defaults to 1)."),
    limit: Optional[str] = typer.Option(None, help="Records per page (defaults to 10)."),
):
    """Lists expense history records, most recent first."""
    asyncio.run(_list_expenses(page, limit))


async def _list_expenses(page: Optional[str], limit: Optional[str]):
    params = parse_page_params(page, limit)
    async with DBConnection():
        try:
            history = await expense_service.list_expense_history(params)
        except DataAccessError as e:
            _fail(f"Error: {e.message}")
        typer.echo(f"Page {history.page} ({history.limit} per page), {history.total} record(s) in total")
        for row in history.rows:
            name = row.expense_name or "<unknown expense>"
            typer.echo(f"{row.expenses_history_id:>8}  {row.expense_date or '':<10}  {name:<30}  {row.amount:>12.2f}")


@expenses_app.command("delete")
def delete_expense_command(
    expenses_history_id: int = typer.Argument(..., help="Identifier of the history record to delete."),
):
    """Deletes an expense history record."""
    asyncio.run(_delete_expense(expenses_history_id))


async def _delete_expense(expenses_history_id: int):
    async with DBConnection():
        try:
            deleted = await expense_service.delete_expense_history(expenses_history_id)
        except DataAccessError as e:
            _fail(f"Error: {e.message}")
        if deleted:
            typer.secho(f"Expense history {expenses_history_id} deleted.", fg=typer.colors.GREEN)
        else:
            typer.secho(f"Expense history {expenses_history_id} did not exist.", fg=typer.colors.YELLOW)


# Report commands
reports_app = typer.Typer(name="reports", help="Print sales reports as JSON.")
app.add_typer(reports_app)


@reports_app.command("monthly")
def monthly_report_command(
    month: Optional[str] = typer.Option(None, help="Month number or English month name."),
    year: Optional[str] = typer.Option(None, help="Four-digit year."),
):
    """Prints the day-by-day sales report."""
    asyncio.run(_monthly_report(month, year))


async def _monthly_report(month: Optional[str], year: Optional[str]):
    async with DBConnection():
        try:
            report = await report_service.generate_monthly_sales_report(parse_month(month), parse_year(year))
        except DataAccessError as e:
            _fail(f"Error: {e.message}")
        typer.echo(report.model_dump_json(by_alias=True, indent=2))


@reports_app.command("yearly")
def yearly_report_command():
    """Prints the month-by-month sales report for the current year."""
    asyncio.run(_yearly_report())


async def _yearly_report():
    async with DBConnection():
        try:
            report = await report_service.generate_yearly_sales_report()
        except DataAccessError as e:
            _fail(f"Error: {e.message}")
        typer.echo(report.model_dump_json(by_alias=True, indent=2))


@app.command("test-db-connection")
def check_db_connection_command():
    """Tests the database connection and counts ledger and sales rows."""
    asyncio.run(_check_db_connection())


async def _check_db_connection():
    async with DBConnection():
        typer.echo("Successfully connected to the database.")
        try:
            history_count = await ExpenseHistory.all().count()
            transaction_count = await Transaction.all().count()
        except BaseORMException as e:
            typer.echo(f"Error querying tables: {e}", err=True)
            raise typer.Exit(code=1)
        typer.echo(f"Found {history_count} expense history record(s) and {transaction_count} transaction(s).")


if __name__ == "__main__":
    app()
