"""Sales Reports API Schemas

This module defines the Pydantic models returned by the sales reporting
endpoints:

1. Monthly sales report (per-day rows plus overall figures)
2. Yearly sales report (one row per calendar month)
3. Customer delivery summary (paginated, one row per customer)

Field names are snake_case in Python and camelCase on the wire, which is
the format the existing dashboard consumes."""
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import List, Optional
import datetime


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# Figures shared by the monthly and yearly reports
class OverallFigures(CamelModel):
    count_overall_delivery: int = 0
    count_overall_pick_up: int = 0
    overall_total_unpaid: float = 0.0
    overall_total_due: float = 0.0
    overall_expenses: float = 0.0


# 1. Monthly Sales Report
class DailySales(CamelModel):
    day: int
    month: str = Field(..., description="Full English month name, e.g. 'March'")
    year: int
    total_quantity: int
    total_due: float


class MonthlySalesReport(OverallFigures):
    success: bool = True
    results: List[DailySales]


# 2. Yearly Sales Report
class MonthSales(CamelModel):
    month: str = Field(..., description="Three-letter month abbreviation, JAN..DEC")
    total_quantity: int = 0
    total_due: float = 0.0
    total_unpaid: float = 0.0
    count_delivery: int = 0
    count_pick_up: int = 0
    expenses: float = 0.0


class YearlySalesReport(OverallFigures):
    success: bool = True
    year: int
    results: List[MonthSales]


# 3. Customer Delivery Summary
class LineItem(CamelModel):
    item_id: int
    quantity: int
    free: int
    total: float
    title: Optional[str] = None
    image: Optional[str] = None


class CustomerDeliverySummary(CamelModel):
    customer_id: int
    first_name: str
    last_name: str
    city: Optional[str] = None
    address: Optional[str] = None
    contact_number: Optional[str] = None

    # Most recent Delivered / Pick Up transaction
    transaction_id: int
    transaction_date: Optional[datetime.date] = None
    order_status: Optional[str] = None
    selected_service: Optional[str] = None
    payment_status: Optional[str] = None
    transaction_due: float = 0.0
    transaction_unpaid: float = 0.0

    # Running figures across all of the customer's Delivered / Pick Up transactions
    delivered_count: int = 0
    pick_up_count: int = 0
    total_unpaid: float = 0.0
    total_due: float = 0.0
    expense: float = 0.0
    net_sales: float = 0.0

    items: List[LineItem] = Field(default_factory=list)


class CustomerDeliveryPage(BaseModel):
    rows: List[CustomerDeliverySummary] = Field(..., alias="Results")
    total: int = Field(..., alias="TotalDeliveries")
    page: int = Field(..., alias="currentPage")
    limit: int = Field(..., alias="perPage")

    model_config = ConfigDict(populate_by_name=True)
