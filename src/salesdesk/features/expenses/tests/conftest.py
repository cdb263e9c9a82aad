import datetime
from typing import Optional

import pytest_asyncio
from salesdesk.features.expenses.models import Expense, ExpenseHistory


@pytest_asyncio.fixture
async def fuel_expense() -> Expense:
    """A catalog entry that history rows can point at."""
    return await Expense.create(expense_name="Fuel")


@pytest_asyncio.fixture
async def history_factory():
    """A factory to create expense history records."""

    async def _factory(
        expense_id: Optional[int],
        amount: float = 100.0,
        expense_date: datetime.date = datetime.date(2024, 5, 1),
        note: Optional[str] = None,
    ) -> ExpenseHistory:
        return await ExpenseHistory.create(
            expense_id=expense_id, amount=amount, expense_date=expense_date, note=note
        )

    return _factory


@pytest_asyncio.fixture
async def sample_history(history_factory, fuel_expense: Expense) -> list[ExpenseHistory]:
    """Twelve history records against the Fuel expense, oldest first."""
    return [
        await history_factory(fuel_expense.id, amount=10.0 * (n + 1), note=f"refill {n + 1}")
        for n in range(12)
    ]
