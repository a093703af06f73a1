"""Inventory for a store: menu products with a tracked stock level and raw
materials that only carry a status set by the kitchen."""

from enum import Enum

from tortoise import fields
from ...common.models import TimestampMixin, generate_ksuid


class StockStatus(str, Enum):
    AVAILABLE = "AVAILABLE"
    LOW = "LOW"
    OUT = "OUT"


class Product(TimestampMixin):
    id = fields.IntField(primary_key=True)
    public_id = fields.CharField(
        max_length=27, unique=True, default=generate_ksuid, db_index=True
    )
    store: fields.ForeignKeyRelation["Store"] = fields.ForeignKeyField(
        "models.Store", related_name="products", on_delete=fields.CASCADE
    )
    name = fields.CharField(max_length=255)
    price = fields.FloatField(default=0.0)
    stock = fields.IntField(default=0)
    min_stock = fields.IntField(default=0, description="Stock at or below this is LOW")
    is_active = fields.BooleanField(default=True)

    order_items: fields.ReverseRelation["OrderItem"]

    def __str__(self):
        return f"{self.name} (Stock: {self.stock}, Price: {self.price:.2f})"

    class Meta:
        table = "products"


class RawMaterial(TimestampMixin):
    id = fields.IntField(primary_key=True)
    public_id = fields.CharField(
        max_length=27, unique=True, default=generate_ksuid, db_index=True
    )
    store: fields.ForeignKeyRelation["Store"] = fields.ForeignKeyField(
        "models.Store", related_name="raw_materials", on_delete=fields.CASCADE
    )
    name = fields.CharField(max_length=255)
    # No numeric level is kept for raw materials, only this status.
    status = fields.CharEnumField(StockStatus, max_length=20, default=StockStatus.AVAILABLE)

    def __str__(self):
        return f"{self.name} [{self.status.value}]"

    class Meta:
        table = "raw_materials"
