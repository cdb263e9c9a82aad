import logging

from tortoise.exceptions import BaseORMException

from ...common.pagination import PageParams
from ...core.exceptions import DataAccessError
from .models import Expense, ExpenseHistory
from .schemas import ExpenseHistoryPage, ExpenseHistoryRow

logger = logging.getLogger(__name__)

HISTORY_FIELDS = ("expenses_history_id", "expense_id", "amount", "expense_date", "note")


async def list_expense_history(params: PageParams) -> ExpenseHistoryPage:
    """
    Lists expense history records, most recent first.

    Each row carries the name of its expense catalog entry. Rows whose
    catalog entry is missing are still returned, with a null name.

    Args:
        params: The coerced page number and page size.

    Returns:
        One page of history rows plus the total number of records.
    """
    try:
        history_rows = (
            await ExpenseHistory.all()
            .order_by("-expenses_history_id")
            .offset(params.offset)
            .limit(params.limit)
            .values(*HISTORY_FIELDS)
        )
        expense_ids = {row["expense_id"] for row in history_rows if row["expense_id"] is not None}
        names = {}
        if expense_ids:
            catalog = await Expense.filter(id__in=expense_ids).values("id", "expense_name")
            names = {entry["id"]: entry["expense_name"] for entry in catalog}
        total = await ExpenseHistory.all().count()
    except BaseORMException as e:
        raise DataAccessError("Failed to retrieve expense history") from e

    rows = [
        ExpenseHistoryRow(**row, expense_name=names.get(row["expense_id"]))
        for row in history_rows
    ]
    return ExpenseHistoryPage(rows=rows, total=total, page=params.page, limit=params.limit)


async def delete_expense_history(expenses_history_id: int) -> int:
    """
    Deletes an expense history record.

    Deleting an identifier that does not exist is not an error.

    Returns:
        The number of rows removed (0 or 1).
    """
    try:
        deleted = await ExpenseHistory.filter(expenses_history_id=expenses_history_id).delete()
    except BaseORMException as e:
        raise DataAccessError(f"Failed to delete expense history {expenses_history_id}") from e

    if not deleted:
        logger.info(f"Expense history {expenses_history_id} did not exist; nothing deleted")
    else:
        logger.info(f"Deleted expense history {expenses_history_id}")
    return deleted
