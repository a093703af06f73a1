import copy
import json

import pytest_asyncio
from tortoise import Tortoise
from typer.testing import CliRunner

from chai_adda.cli import main as cli_main
from chai_adda.core.config import TORTOISE_ORM_CONFIG
from chai_adda.features.stores.models import Store
from chai_adda.features.inventory.models import Product, RawMaterial, StockStatus

runner = CliRunner()


@pytest_asyncio.fixture
async def cli_store_id(tmp_path, monkeypatch) -> str:
    """
    Seeds a SQLite file and points the CLI at it.

    Returns the public id of the seeded store, which holds one raw material
    that is out and one well-stocked product.
    """
    config = copy.deepcopy(TORTOISE_ORM_CONFIG)
    config["connections"]["default"] = f"sqlite://{tmp_path / 'chai_adda_cli.sqlite3'}"

    await Tortoise.init(config=config)
    await Tortoise.generate_schemas()
    store = await Store.create(name="Chai Adda", store_code="KOS-5096", is_initialized=True)
    await RawMaterial.create(store=store, name="Cheese Slices", status=StockStatus.OUT)
    await Product.create(store=store, name="Cutting Chai", stock=150, min_stock=30, price=15.0)
    await Tortoise.close_connections()

    monkeypatch.setattr(cli_main, "TORTOISE_ORM_CONFIG", config)
    return store.public_id


def test_inverted_window_exits_with_error(cli_store_id):
    result = runner.invoke(
        cli_main.app,
        ["reports", "revenue", "--store-id", cli_store_id, "--from", "2025-03-31", "--to", "2025-03-01"],
    )

    assert result.exit_code == 1
    assert "Error:" in result.output
    assert "must not be after" in result.output


def test_stock_report_prints_camel_case_json(cli_store_id):
    result = runner.invoke(cli_main.app, ["reports", "stock", "--store-id", cli_store_id])

    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert set(data) == {"lowStockItems", "outOfStockItems", "totalItems", "items"}
    assert data["totalItems"] == 2
    assert data["outOfStockItems"] == 1
    assert [item["type"] for item in data["items"]] == ["RAW_MATERIAL", "PRODUCT"]


def test_revenue_report_for_empty_window_prints_zeros(cli_store_id):
    result = runner.invoke(
        cli_main.app,
        ["reports", "revenue", "--store-id", cli_store_id, "--from", "2025-03-01", "--to", "2025-03-31T23:59:59"],
    )

    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert data["totalRevenue"] == 0.0
    assert data["byAccount"] == []


def test_db_connection_lists_stores(cli_store_id):
    result = runner.invoke(cli_main.app, ["test-db-connection"])

    assert result.exit_code == 0, result.output
    assert "Found 1 store(s)" in result.output
    assert cli_store_id in result.output
