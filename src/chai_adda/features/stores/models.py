"""The store is the tenancy boundary: every other record belongs to one."""

from tortoise import fields
from ...common.models import TimestampMixin, generate_ksuid


class Store(TimestampMixin):
    id = fields.IntField(primary_key=True)
    public_id = fields.CharField(
        max_length=27, unique=True, default=generate_ksuid, db_index=True
    )
    name = fields.CharField(max_length=255)
    store_code = fields.CharField(
        max_length=20, unique=True, description="Pattern: KOS-<4 digits> e.g. KOS-5096"
    )
    is_initialized = fields.BooleanField(default=False)

    accounts: fields.ReverseRelation["Account"]
    transactions: fields.ReverseRelation["Transaction"]
    products: fields.ReverseRelation["Product"]
    raw_materials: fields.ReverseRelation["RawMaterial"]
    orders: fields.ReverseRelation["Order"]

    def __str__(self):
        return f"{self.name} ({self.store_code})"

    class Meta:
        table = "stores"
