"""
Pure folding functions behind the sales reports.

The service layer fetches raw rows with ``.values()`` and hands them to the
functions here, which reduce them to the report shapes. Nothing in this
module touches the database, so every business rule can be exercised with
plain dictionaries.

Transaction rows are expected to carry the keys ``transaction_date``,
``payment_status``, ``unpaid``, ``total_due``, ``total_quantity`` and
``selected_service``; the customer summary additionally needs
``transaction_id``, ``order_status`` and the customer columns.

The period reports receive rows already grouped by the database. Such a row
stands for ``transaction_count`` transactions sharing the same date, service,
payment status and per-transaction ``unpaid`` amount, with ``total_quantity``
and ``total_due`` summed over them. Rows without ``transaction_count`` stand
for a single transaction.
"""

import datetime
import math
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, Mapping, Optional

from ..transactions.models import (
    ORDER_STATUS_DELIVERED,
    ORDER_STATUS_PICK_UP,
    PAYMENT_CREDIT,
    PAYMENT_PAID,
    SERVICE_DELIVERY,
    SERVICE_PICK_UP,
)
from .schemas import CustomerDeliverySummary, DailySales, LineItem, MonthSales

STOCK_STATUS_BUY = "Buy"

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
MONTH_ABBREVIATIONS = tuple(name[:3].upper() for name in MONTH_NAMES)


def to_number(value: Any) -> float:
    """Parse a numeric column, returning 0.0 for nulls and anything unparsable."""
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float, Decimal)):
        number = float(value)
    else:
        try:
            number = float(Decimal(str(value).strip()))
        except (InvalidOperation, ValueError):
            return 0.0
    return number if math.isfinite(number) else 0.0


def to_date(value: Any) -> Optional[datetime.date]:
    """Normalise a date column; drivers may hand back dates, datetimes or ISO strings."""
    if value is None:
        return None
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    try:
        return datetime.date.fromisoformat(str(value)[:10])
    except ValueError:
        return None


def _money(value: float) -> float:
    return round(value, 2)


def _transaction_count(row: Mapping[str, Any]) -> int:
    return int(to_number(row.get("transaction_count", 1)))


# --- Period parameters ---

def parse_month(value: Optional[str]) -> Optional[int]:
    """
    Interpret a month query parameter.

    Accepts ``1``..``12`` (with or without a leading zero), full English
    month names and three-letter abbreviations, case-insensitively.
    Returns None for anything else.
    """
    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    if text.isdecimal():
        number = int(text)
        return number if 1 <= number <= 12 else None
    lowered = text.lower()
    for index, name in enumerate(MONTH_NAMES, start=1):
        if lowered in (name.lower(), name[:3].lower()):
            return index
    return None


def parse_year(value: Optional[str]) -> Optional[int]:
    if value is None:
        return None
    text = str(value).strip()
    if not text.isdecimal():
        return None
    number = int(text)
    return number if 1 <= number <= 9999 else None


def period_bounds(
    month: Optional[int], year: Optional[int]
) -> Optional[tuple[datetime.date, datetime.date]]:
    """
    Inclusive date range ``[first, last]`` a query can be narrowed to.

    Only defined when a year is known; a month on its own spans every
    year and cannot be expressed as a single range. The range never
    reaches past the year it describes, so year 9999 is still valid.
    """
    if year is None:
        return None
    if month is None:
        return datetime.date(year, 1, 1), datetime.date(year, 12, 31)
    first = datetime.date(year, month, 1)
    if month == 12:
        return first, datetime.date(year, 12, 31)
    return first, datetime.date(year, month + 1, 1) - datetime.timedelta(days=1)


def select_period(
    rows: Iterable[Mapping[str, Any]],
    date_key: str,
    month: Optional[int] = None,
    year: Optional[int] = None,
) -> list[Mapping[str, Any]]:
    """Keep rows whose ``date_key`` falls in the given month and/or year."""
    if month is None and year is None:
        return list(rows)
    selected = []
    for row in rows:
        row_date = to_date(row.get(date_key))
        if row_date is None:
            continue
        if month is not None and row_date.month != month:
            continue
        if year is not None and row_date.year != year:
            continue
        selected.append(row)
    return selected


# --- Business rules ---

def is_excluded_from_due_totals(transaction: Mapping[str, Any]) -> bool:
    """Unpaid credit sales do not count towards due and quantity totals."""
    return (
        transaction.get("payment_status") == PAYMENT_CREDIT
        and to_number(transaction.get("unpaid")) > 0
    )


def overall_figures(transactions: Iterable[Mapping[str, Any]]) -> dict[str, float]:
    """
    Service mix and money totals across every transaction given.

    ``overall_total_unpaid`` is unconditional; ``overall_total_due`` only
    counts transactions that are fully paid.
    """
    figures = {
        "count_overall_delivery": 0,
        "count_overall_pick_up": 0,
        "overall_total_unpaid": 0.0,
        "overall_total_due": 0.0,
    }
    for txn in transactions:
        count = _transaction_count(txn)
        service = txn.get("selected_service")
        if service == SERVICE_DELIVERY:
            figures["count_overall_delivery"] += count
        elif service == SERVICE_PICK_UP:
            figures["count_overall_pick_up"] += count
        figures["overall_total_unpaid"] += to_number(txn.get("unpaid")) * count
        if txn.get("payment_status") == PAYMENT_PAID:
            figures["overall_total_due"] += to_number(txn.get("total_due"))

    figures["overall_total_unpaid"] = _money(figures["overall_total_unpaid"])
    figures["overall_total_due"] = _money(figures["overall_total_due"])
    return figures


def total_buy_expenses(stock_entries: Iterable[Mapping[str, Any]]) -> float:
    """Sum of ``total_worth_stock_in`` over stock purchases."""
    return _money(sum(
        to_number(entry.get("total_worth_stock_in"))
        for entry in stock_entries
        if entry.get("stock_status") == STOCK_STATUS_BUY
    ))


# --- Report folds ---

def fold_daily_sales(transactions: Iterable[Mapping[str, Any]]) -> list[DailySales]:
    """
    Group transactions by calendar day.

    Days where both quantity and due come out as zero carry nothing to
    report and are left out. Rows come back in chronological order.
    """
    days: dict[datetime.date, dict[str, float]] = {}
    for txn in transactions:
        txn_date = to_date(txn.get("transaction_date"))
        if txn_date is None:
            continue
        bucket = days.setdefault(txn_date, {"quantity": 0.0, "due": 0.0})
        if is_excluded_from_due_totals(txn):
            continue
        bucket["quantity"] += to_number(txn.get("total_quantity"))
        bucket["due"] += to_number(txn.get("total_due"))

    return [
        DailySales(
            day=day.day,
            month=MONTH_NAMES[day.month - 1],
            year=day.year,
            total_quantity=int(totals["quantity"]),
            total_due=_money(totals["due"]),
        )
        for day, totals in sorted(days.items())
        if totals["quantity"] != 0 or totals["due"] != 0
    ]


def fold_monthly_sales(
    transactions: Iterable[Mapping[str, Any]],
    stock_entries: Iterable[Mapping[str, Any]] = (),
) -> list[MonthSales]:
    """
    One row per calendar month, JAN..DEC, whatever the data covers.

    Months are matched by their number, so an empty month simply keeps its
    zeroed row. Callers restrict the input to a single year.
    """
    months = [MonthSales(month=abbr) for abbr in MONTH_ABBREVIATIONS]

    for txn in transactions:
        txn_date = to_date(txn.get("transaction_date"))
        if txn_date is None:
            continue
        row = months[txn_date.month - 1]
        count = _transaction_count(txn)
        if not is_excluded_from_due_totals(txn):
            row.total_quantity += int(to_number(txn.get("total_quantity")))
            row.total_due += to_number(txn.get("total_due"))
        row.total_unpaid += to_number(txn.get("unpaid")) * count
        service = txn.get("selected_service")
        if service == SERVICE_DELIVERY:
            row.count_delivery += count
        elif service == SERVICE_PICK_UP:
            row.count_pick_up += count

    for entry in stock_entries:
        purchase_date = to_date(entry.get("purchase_date"))
        if purchase_date is None or entry.get("stock_status") != STOCK_STATUS_BUY:
            continue
        months[purchase_date.month - 1].expenses += to_number(entry.get("total_worth_stock_in"))

    for row in months:
        row.total_due = _money(row.total_due)
        row.total_unpaid = _money(row.total_unpaid)
        row.expenses = _money(row.expenses)
    return months


def _recency_key(txn: Mapping[str, Any]) -> tuple[datetime.date, int]:
    return (
        to_date(txn.get("transaction_date")) or datetime.date.min,
        int(to_number(txn.get("transaction_id"))),
    )


def fold_customer_deliveries(
    transactions: Iterable[Mapping[str, Any]], expense_rate: float
) -> list[CustomerDeliverySummary]:
    """
    Roll completed transactions up per customer.

    Only Delivered and Pick Up transactions count. Each customer's row
    describes their most recent such transaction (latest date, then highest
    id) together with running counts and money totals over all of them.
    ``expense`` is ``expense_rate`` of the customer's total due and
    ``net_sales`` is what remains. Rows are ordered by most recent activity.
    """
    latest: dict[int, Mapping[str, Any]] = {}
    running: dict[int, dict[str, float]] = {}

    for txn in transactions:
        status = txn.get("order_status")
        customer_id = txn.get("customer_id")
        if customer_id is None or status not in (ORDER_STATUS_DELIVERED, ORDER_STATUS_PICK_UP):
            continue

        totals = running.setdefault(
            customer_id, {"delivered": 0, "pick_up": 0, "unpaid": 0.0, "due": 0.0}
        )
        if status == ORDER_STATUS_DELIVERED:
            totals["delivered"] += 1
        else:
            totals["pick_up"] += 1
        totals["unpaid"] += to_number(txn.get("unpaid"))
        totals["due"] += to_number(txn.get("total_due"))

        current = latest.get(customer_id)
        if current is None or _recency_key(txn) > _recency_key(current):
            latest[customer_id] = txn

    summaries = []
    for customer_id, txn in latest.items():
        totals = running[customer_id]
        total_due = _money(totals["due"])
        expense = _money(total_due * expense_rate)
        summaries.append(
            CustomerDeliverySummary(
                customer_id=customer_id,
                first_name=txn.get("first_name") or "",
                last_name=txn.get("last_name") or "",
                city=txn.get("city"),
                address=txn.get("address"),
                contact_number=txn.get("contact_number"),
                transaction_id=int(to_number(txn.get("transaction_id"))),
                transaction_date=to_date(txn.get("transaction_date")),
                order_status=txn.get("order_status"),
                selected_service=txn.get("selected_service"),
                payment_status=txn.get("payment_status"),
                transaction_due=_money(to_number(txn.get("total_due"))),
                transaction_unpaid=_money(to_number(txn.get("unpaid"))),
                delivered_count=int(totals["delivered"]),
                pick_up_count=int(totals["pick_up"]),
                total_unpaid=_money(totals["unpaid"]),
                total_due=total_due,
                expense=expense,
                net_sales=_money(total_due - expense),
            )
        )

    summaries.sort(key=lambda s: s.customer_id)
    summaries.sort(key=lambda s: s.transaction_date or datetime.date.min, reverse=True)
    return summaries


def flatten_line_items(rows: Iterable[Mapping[str, Any]]) -> dict[int, list[LineItem]]:
    """Group transaction line items by transaction id, in the order given."""
    grouped: dict[int, list[LineItem]] = {}
    for row in rows:
        grouped.setdefault(row["transaction_id"], []).append(
            LineItem(
                item_id=row["item_id"],
                quantity=int(to_number(row.get("quantity"))),
                free=int(to_number(row.get("free"))),
                total=_money(to_number(row.get("total"))),
                title=row.get("title"),
                image=row.get("image"),
            )
        )
    return grouped
