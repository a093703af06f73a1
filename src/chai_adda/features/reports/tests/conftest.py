import datetime

import pytest_asyncio

from chai_adda.features.stores.models import Store
from chai_adda.features.ledger.models import Account, AccountType, Transaction, TransactionType
from chai_adda.features.inventory.models import Product, RawMaterial, StockStatus
from chai_adda.features.orders.models import Order, OrderItem, OrderStatus

UTC = datetime.timezone.utc


@pytest_asyncio.fixture
async def store() -> Store:
    """The Chai Adda outlet most tests report on."""
    return await Store.create(name="Chai Adda", store_code="KOS-5096", is_initialized=True)


@pytest_asyncio.fixture
async def other_store() -> Store:
    """A second outlet whose records must never leak into the first one's reports."""
    return await Store.create(name="Chai Adda Annex", store_code="KOS-7001", is_initialized=True)


@pytest_asyncio.fixture
async def cash_account(store: Store) -> Account:
    return await Account.create(store=store, name="Cash Register", type=AccountType.CASH)


@pytest_asyncio.fixture
async def upi_account(store: Store) -> Account:
    return await Account.create(store=store, name="Main UPI", type=AccountType.UPI)


@pytest_asyncio.fixture
async def product_factory(store: Store):
    """A factory to create products."""

    async def _factory(
        name: str,
        stock: int = 100,
        min_stock: int = 20,
        price: float = 20.0,
        is_active: bool = True,
        store: Store = store,
    ) -> Product:
        return await Product.create(
            store=store, name=name, stock=stock, min_stock=min_stock, price=price, is_active=is_active
        )

    return _factory


@pytest_asyncio.fixture
async def raw_material_factory(store: Store):
    """A factory to create raw materials."""

    async def _factory(name: str, status: StockStatus = StockStatus.AVAILABLE, store: Store = store) -> RawMaterial:
        return await RawMaterial.create(store=store, name=name, status=status)

    return _factory


@pytest_asyncio.fixture
async def order_factory(store: Store):
    """
    A factory to create an order with its line items.

    ``lines`` is a list of ``(product, quantity)``; each line is priced at the
    product's current price and the order total is their sum.
    """

    async def _factory(
        created_at: datetime.datetime,
        lines: list,
        status: OrderStatus = OrderStatus.COMPLETED,
        store: Store = store,
    ) -> Order:
        total = sum(product.price * quantity for product, quantity in lines)
        order = await Order.create(store=store, total=total, status=status, created_at=created_at)
        for product, quantity in lines:
            await OrderItem.create(order=order, product=product, quantity=quantity, price=product.price)
        return order

    return _factory


@pytest_asyncio.fixture
async def transaction_factory():
    """A factory to create ledger entries; the store is taken from the account."""

    async def _factory(
        account: Account,
        amount: float,
        created_at: datetime.datetime,
        type: TransactionType = TransactionType.INCOME,
        order: Order = None,
        note: str = None,
    ) -> Transaction:
        return await Transaction.create(
            store_id=account.store_id,
            account=account,
            amount=amount,
            type=type,
            created_at=created_at,
            order=order,
            note=note,
        )

    return _factory
