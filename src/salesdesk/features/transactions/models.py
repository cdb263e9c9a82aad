"""Data models for customers, their transactions and transaction line items.

The tables are owned by the order-entry system; column names follow its
schema, mapped onto Python attribute names with ``source_field``."""

from tortoise import fields, models

PAYMENT_PAID = "Paid"
PAYMENT_CREDIT = "Credit"

SERVICE_DELIVERY = "Delivery"
SERVICE_PICK_UP = "Pick Up"

ORDER_STATUS_DELIVERED = "Delivered"
ORDER_STATUS_PICK_UP = "Pick Up"


class Customer(models.Model):
    customer_id = fields.IntField(primary_key=True)
    first_name = fields.CharField(max_length=100, source_field="firstName")
    last_name = fields.CharField(max_length=100, source_field="lastName")
    city = fields.CharField(max_length=100, null=True)
    address = fields.TextField(null=True)
    contact_number = fields.CharField(max_length=50, null=True, source_field="contactNumber")

    transactions: fields.ReverseRelation["Transaction"]

    def __str__(self):
        return f"{self.first_name} {self.last_name}"

    class Meta:
        table = "customer"


class Transaction(models.Model):
    transaction_id = fields.IntField(primary_key=True)
    transaction_date = fields.DateField()
    payment_status = fields.CharField(max_length=20, source_field="paymentStatus")
    unpaid = fields.FloatField(default=0.0)
    total_due = fields.FloatField(default=0.0, source_field="totalDue")
    total_quantity = fields.IntField(default=0, source_field="totalQuantity")
    selected_service = fields.CharField(max_length=20, source_field="selectedService")
    order_status = fields.CharField(max_length=50, null=True)
    # Staff member who recorded the sale; the users table lives elsewhere.
    user_id = fields.IntField(null=True)

    customer: fields.ForeignKeyRelation[Customer] = fields.ForeignKeyField(
        "models.Customer",
        related_name="transactions",
        on_delete=fields.SET_NULL,
        null=True,
    )

    items: fields.ReverseRelation["TransactionItem"]

    def __str__(self):
        return (
            f"Transaction {self.transaction_id} on {self.transaction_date} "
            f"[{self.payment_status}/{self.selected_service}] due {self.total_due}"
        )

    class Meta:
        table = "transaction"


class TransactionItem(models.Model):
    transaction_item_id = fields.IntField(primary_key=True)

    transaction: fields.ForeignKeyRelation[Transaction] = fields.ForeignKeyField(
        "models.Transaction",
        related_name="items",
        on_delete=fields.CASCADE,
    )
    item: fields.ForeignKeyRelation["Item"] = fields.ForeignKeyField(
        "models.Item",
        related_name="transaction_items",
        on_delete=fields.RESTRICT,
    )

    quantity = fields.IntField(default=0)
    free = fields.IntField(default=0)
    total = fields.FloatField(default=0.0)

    def __str__(self):
        return f"{self.quantity} (+{self.free} free) of item {self.item_id} in transaction {self.transaction_id}"

    class Meta:
        table = "transaction_items"
