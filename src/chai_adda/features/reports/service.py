"""
Reports Service Module

The three report builders of the back office. Each builder is constructed
with a repository (see ``repository.ReportRepository``) and exposes a single
async ``build`` method. Builders are stateless and never write, so one
instance can serve concurrent requests for any number of stores.

Inputs are validated before the first query is issued; a builder either
returns a fully populated summary or raises.
"""

import datetime
import logging
from typing import Optional, Tuple

from ..ledger.models import TransactionType
from ..inventory.models import StockStatus
from ..orders.models import OrderStatus
from .aggregation import ensure_utc, group_by_utc_date, sum_amounts, sum_by_key
from .exceptions import ReportValidationError
from .repository import ReportRepository
from .schemas import (
    AccountRevenue, DailyRevenue, RevenueSummary,
    DailyOrderCount, OrderSummary,
    StockItem, StockItemType, StockSummary,
)

logger = logging.getLogger(__name__)


def validate_store_id(store_id: Optional[str]) -> str:
    if store_id is None or not str(store_id).strip():
        raise ReportValidationError("storeId is required.")
    return str(store_id).strip()


def validate_window(
    store_id: Optional[str],
    start: Optional[datetime.datetime],
    end: Optional[datetime.datetime],
) -> Tuple[str, datetime.datetime, datetime.datetime]:
    """
    Checks the inputs shared by the windowed reports.

    Returns the stripped store id and both bounds normalized to UTC.
    Raises ReportValidationError for a missing store id, a missing bound, or
    a window whose start lies after its end. ``start == end`` is a valid
    (possibly empty) window.
    """
    store_id = validate_store_id(store_id)
    if start is None or end is None:
        raise ReportValidationError("Both 'from' and 'to' are required.")
    start, end = ensure_utc(start), ensure_utc(end)
    if start > end:
        raise ReportValidationError(
            f"'from' ({start.isoformat()}) must not be after 'to' ({end.isoformat()})."
        )
    return store_id, start, end


def derive_product_status(stock: int, min_stock: int) -> StockStatus:
    """OUT at or below zero, LOW at or below ``min_stock``, else AVAILABLE."""
    if stock <= 0:
        return StockStatus.OUT
    if stock <= min_stock:
        return StockStatus.LOW
    return StockStatus.AVAILABLE


class RevenueReport:
    """Income and expense totals for a window, with per-account and per-day income."""

    def __init__(self, repository: ReportRepository):
        self.repository = repository

    async def build(
        self,
        store_id: str,
        start: datetime.datetime,
        end: datetime.datetime,
    ) -> RevenueSummary:
        """
        Generates the revenue report for one store.

        Args:
            store_id: Public id of the store.
            start: Inclusive lower bound on transaction ``created_at``.
            end: Inclusive upper bound on transaction ``created_at``.

        Returns:
            RevenueSummary where:
                - total_revenue equals total_income (gross, never net)
                - net is total_income - total_expense
                - by_account splits income (expenses excluded) per account,
                  ordered by account id
                - daily_revenue is the sparse, ascending per-UTC-day income
        """
        store_id, start, end = validate_window(store_id, start, end)
        logger.debug(f"Building revenue report for store {store_id} [{start} .. {end}]")

        total_expense = await self.repository.aggregate_transaction_sum(
            store_id, TransactionType.EXPENSE, start, end
        )
        income = await self.repository.list_transactions(
            store_id, type=TransactionType.INCOME, start=start, end=end
        )
        # total_income, by_account and daily_revenue share one read.
        total_income = sum_amounts(income)

        by_account = [
            AccountRevenue(account_id=account_id, amount=float(amount))
            for account_id, amount in sorted(sum_by_key(income, "account_id", "amount").items())
        ]
        daily_revenue = [
            DailyRevenue(date=day, revenue=float(revenue))
            for day, revenue in group_by_utc_date(income, "created_at", "amount")
        ]

        return RevenueSummary(
            total_revenue=total_income,
            total_income=total_income,
            total_expense=total_expense,
            net=total_income - total_expense,
            by_account=by_account,
            daily_revenue=daily_revenue,
        )


class OrderReport:
    """Order counts, average completed order value, items sold and a daily trend."""

    def __init__(self, repository: ReportRepository):
        self.repository = repository

    async def build(
        self,
        store_id: str,
        start: datetime.datetime,
        end: datetime.datetime,
    ) -> OrderSummary:
        store_id, start, end = validate_window(store_id, start, end)
        logger.debug(f"Building order report for store {store_id} [{start} .. {end}]")

        orders = await self.repository.list_orders(store_id, start, end, include_items=True)

        completed = [order for order in orders if order.status == OrderStatus.COMPLETED]
        cancelled = [order for order in orders if order.status == OrderStatus.CANCELLED]
        average_order_value = sum_amounts(completed, "total") / len(completed) if completed else 0.0

        # Line items of cancelled orders are counted as sold.
        # TODO: confirm with the store owner whether cancelled orders should drop out of topItems.
        line_items = [item for order in orders for item in order.items]
        top_items = sum_by_key(line_items, "product_id", "quantity")

        recent_trends = [
            DailyOrderCount(date=day, count=count)
            for day, count in group_by_utc_date(orders, "created_at")
        ]

        return OrderSummary(
            total_orders=len(orders),
            completed_orders=len(completed),
            cancelled_orders=len(cancelled),
            average_order_value=average_order_value,
            top_items=top_items,
            recent_trends=recent_trends,
        )


class StockReport:
    """Current inventory health across raw materials and active products."""

    def __init__(self, repository: ReportRepository):
        self.repository = repository

    async def build(self, store_id: str) -> StockSummary:
        """
        Generates a point-in-time stock snapshot for one store.

        Raw materials keep their stored status and report ``stock=None``.
        Products are only included while active; their status is derived
        from ``stock`` and ``min_stock`` via ``derive_product_status``.
        Raw materials are listed first, then products.
        """
        store_id = validate_store_id(store_id)
        logger.debug(f"Building stock report for store {store_id}")

        raw_materials = await self.repository.list_raw_materials(store_id)
        products = await self.repository.list_products(store_id, is_active=True)

        items = [
            StockItem(
                id=material.id,
                name=material.name,
                stock=None,
                status=material.status,
                type=StockItemType.RAW_MATERIAL,
            )
            for material in raw_materials
        ]
        items.extend(
            StockItem(
                id=product.id,
                name=product.name,
                stock=product.stock,
                status=derive_product_status(product.stock, product.min_stock),
                type=StockItemType.PRODUCT,
            )
            for product in products
        )

        return StockSummary(
            low_stock_items=sum(1 for item in items if item.status == StockStatus.LOW),
            out_of_stock_items=sum(1 for item in items if item.status == StockStatus.OUT),
            total_items=len(items),
            items=items,
        )
