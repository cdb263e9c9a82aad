"""
Reports Service Module

This module generates the sales reports for SalesDesk: the monthly report
(per-day sales with overall figures), the yearly report (one row per month
of the current year) and the paginated customer delivery summary.

Each function lets the database group and sum the rows it needs, then folds
those grouped rows with the pure functions in ``aggregation``. The customer
summary is paginated in the database and only reads the transactions of
customers on the requested page. Database failures surface as DataAccessError.
"""

import datetime
import logging
from typing import Optional

from tortoise.exceptions import BaseORMException
from tortoise.expressions import Q
from tortoise.functions import Count, Max, Sum

from ...common.pagination import PageParams
from ...core.config import CUSTOMER_EXPENSE_RATE
from ...core.exceptions import DataAccessError
from ..inventory.models import Stock
from ..transactions.models import (
    ORDER_STATUS_DELIVERED,
    ORDER_STATUS_PICK_UP,
    Transaction,
    TransactionItem,
)
from . import aggregation
from .schemas import CustomerDeliveryPage, MonthlySalesReport, YearlySalesReport

logger = logging.getLogger(__name__)

TRANSACTION_FIELDS = (
    "transaction_id",
    "transaction_date",
    "payment_status",
    "unpaid",
    "total_due",
    "total_quantity",
    "selected_service",
)
# Transactions sharing these columns are folded alike, so the database groups on them
TRANSACTION_GROUP_FIELDS = ("transaction_date", "selected_service", "payment_status", "unpaid")
COMPLETED_ORDER_STATUSES = [ORDER_STATUS_DELIVERED, ORDER_STATUS_PICK_UP]


async def _fetch_transactions(month: Optional[int], year: Optional[int]) -> list[dict]:
    """Transaction totals grouped per day, service, payment status and unpaid amount."""
    query = Transaction.all()
    bounds = aggregation.period_bounds(month, year)
    if bounds:
        query = query.filter(transaction_date__gte=bounds[0], transaction_date__lte=bounds[1])
    groups = await (
        query.annotate(
            transaction_count=Count("transaction_id"),
            quantity_sum=Sum("total_quantity"),
            due_sum=Sum("total_due"),
        )
        .group_by(*TRANSACTION_GROUP_FIELDS)
        .values(*TRANSACTION_GROUP_FIELDS, "transaction_count", "quantity_sum", "due_sum")
    )
    rows = [
        {
            **{key: group[key] for key in TRANSACTION_GROUP_FIELDS},
            "transaction_count": group["transaction_count"],
            "total_quantity": group["quantity_sum"],
            "total_due": group["due_sum"],
        }
        for group in groups
    ]
    # A month without a year spans every year; narrow the grouped rows instead
    return aggregation.select_period(rows, "transaction_date", month, year)


async def _fetch_buy_stock(month: Optional[int], year: Optional[int]) -> list[dict]:
    """Stock purchase worth summed per purchase date."""
    query = Stock.filter(stock_status=aggregation.STOCK_STATUS_BUY)
    bounds = aggregation.period_bounds(month, year)
    if bounds:
        query = query.filter(purchase_date__gte=bounds[0], purchase_date__lte=bounds[1])
    groups = await (
        query.annotate(worth=Sum("total_worth_stock_in"))
        .group_by("purchase_date", "stock_status")
        .values("purchase_date", "stock_status", "worth")
    )
    rows = [
        {
            "purchase_date": group["purchase_date"],
            "stock_status": group["stock_status"],
            "total_worth_stock_in": group["worth"],
        }
        for group in groups
    ]
    return aggregation.select_period(rows, "purchase_date", month, year)


async def generate_monthly_sales_report(
    month: Optional[int] = None, year: Optional[int] = None
) -> MonthlySalesReport:
    """
    Generates the day-by-day sales report.

    Month and year are independent filters: a year on its own covers every
    month of that year, a month on its own covers that month in every year,
    and neither covers all recorded history.

    Args:
        month: Optional month number (1-12).
        year: Optional four-digit year.

    Returns:
        MonthlySalesReport: per-day quantity and due totals (unpaid credit sales
        excluded, empty days dropped) plus overall delivery/pick-up counts,
        unpaid and paid-due totals, and stock purchase expenses for the
        same window.
    """
    try:
        transactions = await _fetch_transactions(month, year)
        stock_entries = await _fetch_buy_stock(month, year)
    except BaseORMException as e:
        raise DataAccessError("Failed to retrieve monthly sales data") from e

    logger.debug(
        f"Monthly report month={month} year={year}: "
        f"{len(transactions)} transaction groups, {len(stock_entries)} purchase days"
    )
    return MonthlySalesReport(
        results=aggregation.fold_daily_sales(transactions),
        overall_expenses=aggregation.total_buy_expenses(stock_entries),
        **aggregation.overall_figures(transactions),
    )


async def generate_yearly_sales_report(
    today: Optional[datetime.date] = None,
) -> YearlySalesReport:
    """
    Generates the month-by-month report for the current calendar year.

    The year comes from the server clock; ``today`` only pins that clock.
    The result always holds twelve rows, JAN to DEC, with zeroed figures
    for months without activity.
    """
    year = (today or datetime.date.today()).year
    try:
        transactions = await _fetch_transactions(None, year)
        stock_entries = await _fetch_buy_stock(None, year)
    except BaseORMException as e:
        raise DataAccessError(f"Failed to retrieve sales data for {year}") from e

    return YearlySalesReport(
        year=year,
        results=aggregation.fold_monthly_sales(transactions, stock_entries),
        overall_expenses=aggregation.total_buy_expenses(stock_entries),
        **aggregation.overall_figures(transactions),
    )


async def generate_monthly_sales_data(params: PageParams, search: str = "") -> CustomerDeliveryPage:
    """
    Lists customers with their latest delivered or picked-up transaction.

    Args:
        params: The coerced page number and page size.
        search: Case-insensitive substring matched against first name,
            last name and city. An empty string matches every customer.

    Returns:
        CustomerDeliveryPage: one page of per-customer summaries, each with
        running delivery/pick-up counts, unpaid and due totals, the derived
        expense and net sales, and the latest transaction's line items.
    """
    query = Transaction.filter(order_status__in=COMPLETED_ORDER_STATUSES, customer_id__isnull=False)
    term = (search or "").strip()
    if term:
        query = query.filter(
            Q(customer__first_name__icontains=term)
            | Q(customer__last_name__icontains=term)
            | Q(customer__city__icontains=term)
        )

    try:
        counted = await query.annotate(
            customers=Count("customer_id", distinct=True)
        ).first().values("customers")
        total = counted["customers"] if counted else 0

        # Customers on this page, most recently active first
        page_customers = await (
            query.annotate(latest_date=Max("transaction_date"))
            .group_by("customer_id")
            .order_by("-latest_date", "customer_id")
            .offset(params.offset)
            .limit(params.limit)
            .values("customer_id", "latest_date")
        )
        customer_ids = [row["customer_id"] for row in page_customers]

        transactions = []
        if customer_ids:
            transactions = await Transaction.filter(
                order_status__in=COMPLETED_ORDER_STATUSES, customer_id__in=customer_ids
            ).values(
                *TRANSACTION_FIELDS,
                "order_status",
                "customer_id",
                first_name="customer__first_name",
                last_name="customer__last_name",
                city="customer__city",
                address="customer__address",
                contact_number="customer__contact_number",
            )
        page_rows = aggregation.fold_customer_deliveries(transactions, CUSTOMER_EXPENSE_RATE)

        transaction_ids = [row.transaction_id for row in page_rows]
        line_items = {}
        if transaction_ids:
            item_rows = (
                await TransactionItem.filter(transaction_id__in=transaction_ids)
                .order_by("transaction_item_id")
                .values(
                    "transaction_id",
                    "item_id",
                    "quantity",
                    "free",
                    "total",
                    title="item__title",
                    image="item__image",
                )
            )
            line_items = aggregation.flatten_line_items(item_rows)
    except BaseORMException as e:
        raise DataAccessError("Failed to retrieve customer delivery data") from e

    for row in page_rows:
        row.items = line_items.get(row.transaction_id, [])

    return CustomerDeliveryPage(
        rows=page_rows, total=total, page=params.page, limit=params.limit
    )
