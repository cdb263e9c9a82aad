"""Data models for the expense catalog and its history ledger."""

from tortoise import fields, models


class Expense(models.Model):
    id = fields.IntField(primary_key=True)
    expense_name = fields.CharField(max_length=255)

    def __str__(self):
        return self.expense_name

    class Meta:
        table = "expenses"


class ExpenseHistory(models.Model):
    expenses_history_id = fields.IntField(primary_key=True)
    # Plain column rather than a foreign key: history rows may outlive
    # their catalog entry, and the listing left-joins on it.
    expense_id = fields.IntField(source_field="id", null=True, db_index=True)
    amount = fields.FloatField(default=0.0)
    expense_date = fields.DateField(null=True)
    note = fields.TextField(null=True)

    def __str__(self):
        return f"Expense history {self.expenses_history_id} (expense {self.expense_id}): {self.amount}"

    class Meta:
        table = "expenses_history"
