"""API routes for the expense history ledger."""
import logging
from typing import Optional

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse

from ...common.pagination import parse_page_params
from ...core.exceptions import DataAccessError
from .schemas import ExpenseHistoryDeleted, ExpenseHistoryPage
from . import service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Expenses"])


@router.get(
    "/getAllExpensesData",
    response_model=ExpenseHistoryPage,
    summary="List expense history records, most recent first",
)
async def get_all_expenses_data(
    page: Optional[str] = Query(None, description="Page number, defaults to 1"),
    limit: Optional[str] = Query(None, description="Records per page, defaults to 10"),
):
    params = parse_page_params(page, limit)
    try:
        return await service.list_expense_history(params)
    except DataAccessError as e:
        logger.error(f"Error listing expense history: {e}", exc_info=True)
        return JSONResponse({"failed": "false", "msg": "Failed to Retrieve Expenses History"})


@router.delete(
    "/deleteExpenseData/{id}",
    response_model=ExpenseHistoryDeleted,
    summary="Delete an expense history record",
)
async def delete_expense_data(id: str):
    if not (id.isascii() and id.isdecimal()):
        # No row can carry a non-numeric identifier
        logger.warning(f"Ignoring delete of non-numeric expense history id {id!r}")
        return ExpenseHistoryDeleted()
    expenses_history_id = int(id)

    try:
        await service.delete_expense_history(expenses_history_id)
    except DataAccessError as e:
        logger.error(f"Error deleting expense history {id}: {e}", exc_info=True)
        return JSONResponse({"failed": "false", "msg": "Failed to Delete Expenses History"})
    return ExpenseHistoryDeleted()
