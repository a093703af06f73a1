"""Money accounts and the immutable ledger of income and expense entries."""

from enum import Enum

from tortoise import fields
from ...common.models import TimestampMixin, generate_ksuid


class AccountType(str, Enum):
    CASH = "CASH"
    UPI = "UPI"
    CARD = "CARD"
    BANK = "BANK"


class TransactionType(str, Enum):
    INCOME = "INCOME"
    EXPENSE = "EXPENSE"


class Account(TimestampMixin):
    id = fields.IntField(primary_key=True)
    public_id = fields.CharField(
        max_length=27, unique=True, default=generate_ksuid, db_index=True
    )
    store: fields.ForeignKeyRelation["Store"] = fields.ForeignKeyField(
        "models.Store", related_name="accounts", on_delete=fields.CASCADE
    )
    name = fields.CharField(max_length=100)
    type = fields.CharEnumField(AccountType, max_length=20, default=AccountType.CASH)
    balance = fields.FloatField(default=0.0)

    transactions: fields.ReverseRelation["Transaction"]

    def __str__(self):
        return f"{self.name} [{self.type.value}]"

    class Meta:
        table = "accounts"


class Transaction(TimestampMixin):
    id = fields.IntField(primary_key=True)
    public_id = fields.CharField(
        max_length=27, unique=True, default=generate_ksuid, db_index=True
    )
    store: fields.ForeignKeyRelation["Store"] = fields.ForeignKeyField(
        "models.Store", related_name="transactions", on_delete=fields.CASCADE
    )
    account: fields.ForeignKeyRelation[Account] = fields.ForeignKeyField(
        "models.Account", related_name="transactions", on_delete=fields.RESTRICT
    )
    # Set when the entry was produced by completing an order.
    order: fields.ForeignKeyNullableRelation["Order"] = fields.ForeignKeyField(
        "models.Order", related_name="transactions", on_delete=fields.SET_NULL, null=True
    )

    amount = fields.FloatField(description="Non-negative magnitude; direction comes from type")
    type = fields.CharEnumField(TransactionType, max_length=20)
    note = fields.TextField(null=True)

    def __str__(self):
        return f"{self.type.value} {self.amount:.2f} on {self.created_at}"

    class Meta:
        table = "transactions"
        ordering = ["created_at"]
