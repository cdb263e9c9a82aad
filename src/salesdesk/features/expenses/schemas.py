from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
import datetime


class ExpenseHistoryRow(BaseModel):
    expenses_history_id: int = Field(..., description="Identifier of the history record")
    expense_id: Optional[int] = Field(None, alias="id", description="Referenced expense catalog entry")
    amount: float = Field(0.0, description="Amount spent")
    expense_date: Optional[datetime.date] = None
    note: Optional[str] = None
    expense_name: Optional[str] = Field(None, description="Catalog name, null when the entry no longer exists")

    model_config = ConfigDict(populate_by_name=True)


class ExpenseHistoryPage(BaseModel):
    rows: List[ExpenseHistoryRow] = Field(..., alias="results")
    total: int = Field(..., alias="Totalhistories")
    page: int = Field(..., alias="currentPage")
    limit: int = Field(..., alias="perPage")

    model_config = ConfigDict(populate_by_name=True)


class ExpenseHistoryDeleted(BaseModel):
    success: str = "true"
    msg: str = "Expenses History Deleted Successfully"
