"""
Read-only access to the records the reports are built from.

``ReportRepository`` is the only place in the reporting feature that talks to
Tortoise-ORM. Every method is scoped to exactly one store (looked up by its
public id) and returns plain record schemas, so the builders in
``service.py`` can be exercised against any object with the same async
methods. ORM errors are not caught here and reach the caller unchanged.
"""

import datetime
import logging
from typing import List, Optional

from tortoise.queryset import QuerySet

from ..stores.models import Store
from ..ledger.models import Transaction, TransactionType
from ..inventory.models import Product, RawMaterial
from ..orders.models import Order
from .schemas import (
    TransactionRecord, OrderRecord, OrderItemRecord, ProductRecord, RawMaterialRecord
)

logger = logging.getLogger(__name__)


def _within_window(
    query: QuerySet,
    start: Optional[datetime.datetime],
    end: Optional[datetime.datetime],
) -> QuerySet:
    # Both bounds are inclusive.
    if start is not None:
        query = query.filter(created_at__gte=start)
    if end is not None:
        query = query.filter(created_at__lte=end)
    return query


class ReportRepository:
    """Tortoise-backed implementation of the report read interface."""

    async def _store_pk(self, store_id: str) -> Optional[int]:
        store = await Store.get_or_none(public_id=store_id)
        if store is None:
            logger.debug(f"No store with public_id {store_id}; reporting on no records.")
            return None
        return store.id

    async def list_transactions(
        self,
        store_id: str,
        type: Optional[TransactionType] = None,
        start: Optional[datetime.datetime] = None,
        end: Optional[datetime.datetime] = None,
    ) -> List[TransactionRecord]:
        store_pk = await self._store_pk(store_id)
        if store_pk is None:
            return []

        query = Transaction.filter(store_id=store_pk)
        if type is not None:
            query = query.filter(type=type)
        rows = await _within_window(query, start, end).order_by("created_at", "id").values(
            "public_id", "amount", "type", "note", "created_at",
            "account__public_id", "order__public_id",
        )
        return [
            TransactionRecord(
                id=row["public_id"],
                store_id=store_id,
                account_id=row["account__public_id"],
                amount=row["amount"],
                type=row["type"],
                created_at=row["created_at"],
                order_id=row["order__public_id"],
                note=row["note"],
            )
            for row in rows
        ]

    async def aggregate_transaction_sum(
        self,
        store_id: str,
        type: TransactionType,
        start: Optional[datetime.datetime] = None,
        end: Optional[datetime.datetime] = None,
    ) -> float:
        """
        Sums ``amount`` over one transaction type in the window.

        Always returns a float; a store or window without matching entries
        sums to ``0.0``.
        """
        store_pk = await self._store_pk(store_id)
        if store_pk is None:
            return 0.0

        query = Transaction.filter(store_id=store_pk, type=type)
        amounts = await _within_window(query, start, end).values_list("amount", flat=True)
        return float(sum(amounts, 0.0))

    async def list_orders(
        self,
        store_id: str,
        start: Optional[datetime.datetime] = None,
        end: Optional[datetime.datetime] = None,
        include_items: bool = True,
    ) -> List[OrderRecord]:
        store_pk = await self._store_pk(store_id)
        if store_pk is None:
            return []

        query = _within_window(Order.filter(store_id=store_pk), start, end).order_by("created_at", "id")
        if include_items:
            query = query.prefetch_related("items__product")
        orders = await query

        records = []
        for order in orders:
            items = []
            if include_items:
                items = [
                    OrderItemRecord(
                        product_id=item.product.public_id,
                        quantity=item.quantity,
                        price=item.price,
                    )
                    for item in order.items
                ]
            records.append(
                OrderRecord(
                    id=order.public_id,
                    store_id=store_id,
                    total=order.total,
                    status=order.status,
                    created_at=order.created_at,
                    items=items,
                )
            )
        return records

    async def list_products(
        self, store_id: str, is_active: Optional[bool] = None
    ) -> List[ProductRecord]:
        store_pk = await self._store_pk(store_id)
        if store_pk is None:
            return []

        query = Product.filter(store_id=store_pk)
        if is_active is not None:
            query = query.filter(is_active=is_active)
        products = await query.order_by("name", "id")
        return [
            ProductRecord(
                id=product.public_id,
                store_id=store_id,
                name=product.name,
                price=product.price,
                stock=product.stock,
                min_stock=product.min_stock,
                is_active=product.is_active,
            )
            for product in products
        ]

    async def list_raw_materials(self, store_id: str) -> List[RawMaterialRecord]:
        store_pk = await self._store_pk(store_id)
        if store_pk is None:
            return []

        materials = await RawMaterial.filter(store_id=store_pk).order_by("name", "id")
        return [
            RawMaterialRecord(
                id=material.public_id,
                store_id=store_id,
                name=material.name,
                status=material.status,
            )
            for material in materials
        ]


def get_report_repository() -> ReportRepository:
    """FastAPI dependency; tests override it with an in-memory repository."""
    return ReportRepository()
