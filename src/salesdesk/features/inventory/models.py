"""Data models for the item catalog and stock movements."""

from tortoise import fields, models


class Item(models.Model):
    item_id = fields.IntField(primary_key=True)
    title = fields.CharField(max_length=255, source_field="item_title")
    image = fields.CharField(max_length=500, null=True, source_field="item_image")
    price = fields.FloatField(default=0.0, source_field="item_price")

    transaction_items: fields.ReverseRelation["TransactionItem"]

    def __str__(self):
        return f"{self.title} (${self.price:.2f})"

    class Meta:
        table = "items"


class Stock(models.Model):
    stock_id = fields.IntField(primary_key=True)
    purchase_date = fields.DateField(null=True)
    stock_status = fields.CharField(max_length=20, description="Buy or Sell")
    total_worth_stock_in = fields.FloatField(default=0.0, source_field="total_worth_stockIn")

    def __str__(self):
        return f"Stock {self.stock_id} [{self.stock_status}] worth {self.total_worth_stock_in}"

    class Meta:
        table = "stock"
