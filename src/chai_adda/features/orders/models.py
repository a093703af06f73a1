from enum import Enum

from tortoise import fields
from ...common.models import TimestampMixin, generate_ksuid


class OrderStatus(str, Enum):
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class Order(TimestampMixin):
    id = fields.IntField(primary_key=True)
    public_id = fields.CharField(
        max_length=27, unique=True, default=generate_ksuid, db_index=True
    )
    store: fields.ForeignKeyRelation["Store"] = fields.ForeignKeyField(
        "models.Store", related_name="orders", on_delete=fields.CASCADE
    )
    order_number = fields.IntField(null=True, description="Per-store running counter")
    total = fields.FloatField(default=0.0, description="Sum of quantity * price over items")
    status = fields.CharEnumField(OrderStatus, max_length=20, default=OrderStatus.PENDING)

    items: fields.ReverseRelation["OrderItem"]
    transactions: fields.ReverseRelation["Transaction"]

    def __str__(self):
        return f"Order #{self.order_number or self.id} ({self.public_id}) - Status: {self.status.value}"

    class Meta:
        table = "orders"
        ordering = ["created_at"]


class OrderItem(TimestampMixin):
    id = fields.IntField(primary_key=True)
    public_id = fields.CharField(
        max_length=27, unique=True, default=generate_ksuid, db_index=True
    )

    order: fields.ForeignKeyRelation[Order] = fields.ForeignKeyField(
        "models.Order",
        related_name="items",
        on_delete=fields.CASCADE,  # Items never outlive their order
    )
    product: fields.ForeignKeyRelation["Product"] = fields.ForeignKeyField(
        "models.Product",
        related_name="order_items",
        on_delete=fields.RESTRICT,
    )

    quantity = fields.IntField()
    # Unit price at the time of sale, independent of the product's current price.
    price = fields.FloatField()

    def __str__(self):
        return f"{self.quantity} x product {self.product_id} for order {self.order_id}"

    class Meta:
        table = "order_items"
        ordering = ["id"]
