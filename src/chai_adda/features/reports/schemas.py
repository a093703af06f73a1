"""Revenue, Order and Stock Report Schemas

This module defines the Pydantic models used by the reporting feature. There
are two groups:

1. Records: read-only snapshots of persisted rows handed from the
   repository to the report builders (snake_case, never serialized).
2. Summaries: the response bodies of the ``/reports`` endpoints. They are
   serialized with camelCase aliases (``totalRevenue``, ``topItems``...),
   which is the shape the point-of-sale frontend consumes.

Identifiers in both groups are public ids (KSUIDs), never database keys."""
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Dict, List, Optional
from enum import Enum
import datetime

from ..ledger.models import TransactionType
from ..inventory.models import StockStatus
from ..orders.models import OrderStatus


# Records read from the persistence layer

class TransactionRecord(BaseModel):
    id: str
    store_id: str
    account_id: str
    amount: float
    type: TransactionType
    created_at: datetime.datetime
    order_id: Optional[str] = None
    note: Optional[str] = None


class OrderItemRecord(BaseModel):
    product_id: str
    quantity: int
    price: float


class OrderRecord(BaseModel):
    id: str
    store_id: str
    total: float
    status: OrderStatus
    created_at: datetime.datetime
    items: List[OrderItemRecord] = Field(default_factory=list)


class ProductRecord(BaseModel):
    id: str
    store_id: str
    name: str
    price: float
    stock: int
    min_stock: int
    is_active: bool


class RawMaterialRecord(BaseModel):
    id: str
    store_id: str
    name: str
    status: StockStatus


# Response bodies

class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, protected_namespaces=()
    )


# 1. Revenue
class AccountRevenue(CamelModel):
    account_id: str
    amount: float


class DailyRevenue(CamelModel):
    date: str = Field(..., description="UTC calendar day, YYYY-MM-DD")
    revenue: float


class RevenueSummary(CamelModel):
    total_revenue: float = Field(..., description="Gross income; expenses are never netted in")
    total_income: float
    total_expense: float
    net: float
    by_account: List[AccountRevenue]
    daily_revenue: List[DailyRevenue]


# 2. Orders
class DailyOrderCount(CamelModel):
    date: str = Field(..., description="UTC calendar day, YYYY-MM-DD")
    count: int


class OrderSummary(CamelModel):
    total_orders: int
    completed_orders: int
    cancelled_orders: int
    average_order_value: float
    top_items: Dict[str, int] = Field(..., description="productId -> quantity sold")
    recent_trends: List[DailyOrderCount]


# 3. Stock
class StockItemType(str, Enum):
    RAW_MATERIAL = "RAW_MATERIAL"
    PRODUCT = "PRODUCT"


class StockItem(CamelModel):
    id: str
    name: str
    stock: Optional[int] = Field(None, description="Null for raw materials, which are not counted")
    status: StockStatus
    type: StockItemType


class StockSummary(CamelModel):
    low_stock_items: int
    out_of_stock_items: int
    total_items: int
    items: List[StockItem]
