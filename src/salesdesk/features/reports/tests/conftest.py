import datetime
from typing import Optional

import pytest_asyncio
from salesdesk.features.inventory.models import Item, Stock
from salesdesk.features.transactions.models import Customer, Transaction, TransactionItem


@pytest_asyncio.fixture
async def customer_factory():
    """A factory to create customers."""

    async def _factory(first_name: str, last_name: str, city: Optional[str] = "Springfield") -> Customer:
        return await Customer.create(
            first_name=first_name,
            last_name=last_name,
            city=city,
            address=f"1 {last_name} Street",
            contact_number="555-0100",
        )

    return _factory


@pytest_asyncio.fixture
async def transaction_factory():
    """A factory to create transactions; defaults describe a paid, delivered sale."""

    async def _factory(
        transaction_date: datetime.date,
        customer: Optional[Customer] = None,
        payment_status: str = "Paid",
        unpaid: float = 0.0,
        total_due: float = 100.0,
        total_quantity: int = 1,
        selected_service: str = "Delivery",
        order_status: Optional[str] = "Delivered",
    ) -> Transaction:
        return await Transaction.create(
            transaction_date=transaction_date,
            customer=customer,
            payment_status=payment_status,
            unpaid=unpaid,
            total_due=total_due,
            total_quantity=total_quantity,
            selected_service=selected_service,
            order_status=order_status,
            user_id=1,
        )

    return _factory


@pytest_asyncio.fixture
async def stock_factory():
    """A factory to create stock movements."""

    async def _factory(purchase_date: datetime.date, worth: float, stock_status: str = "Buy") -> Stock:
        return await Stock.create(
            purchase_date=purchase_date, stock_status=stock_status, total_worth_stock_in=worth
        )

    return _factory


@pytest_asyncio.fixture
async def water_item() -> Item:
    return await Item.create(title="Water Gallon", image="water.png", price=25.0)


@pytest_asyncio.fixture
async def line_item_factory():
    """A factory to attach line items to a transaction."""

    async def _factory(transaction: Transaction, item: Item, quantity: int, free: int = 0) -> TransactionItem:
        return await TransactionItem.create(
            transaction=transaction,
            item=item,
            quantity=quantity,
            free=free,
            total=quantity * item.price,
        )

    return _factory
