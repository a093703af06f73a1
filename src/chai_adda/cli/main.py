import asyncio
import datetime
import logging
from typing import Awaitable, Callable

import typer
from pydantic import BaseModel
from tortoise import Tortoise

from chai_adda.core.config import TORTOISE_ORM_CONFIG
from chai_adda.core.logging_config import configure_logging
from chai_adda.features.reports.exceptions import ReportValidationError
from chai_adda.features.reports.repository import ReportRepository
from chai_adda.features.reports.service import OrderReport, RevenueReport, StockReport
from chai_adda.features.stores.models import Store

configure_logging()
logger = logging.getLogger(__name__)

DATETIME_FORMATS = ["%Y-%m-%d", "%Y-%m-%dT%H:%M:%S", "%Y-%m-%d %H:%M:%S"]

app = typer.Typer(name="chai-adda", help="CLI for the Chai Adda back office.")


class DBConnection:
    async def __aenter__(self):
        await Tortoise.init(config=TORTOISE_ORM_CONFIG)
        logger.debug(f"Connected to {TORTOISE_ORM_CONFIG['connections']['default']}")
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await Tortoise.close_connections()


# Report commands
reports_app = typer.Typer(name="reports", help="Print revenue, order and stock reports as JSON.")
app.add_typer(reports_app)


async def _print_report(build: Callable[[], Awaitable[BaseModel]]):
    """Runs one builder against the configured database and echoes its JSON."""
    async with DBConnection():
        try:
            summary = await build()
        except ReportValidationError as e:
            typer.secho(f"Error: {e}", fg=typer.colors.RED)
            raise typer.Exit(code=1)
    typer.echo(summary.model_dump_json(by_alias=True, indent=2))


@reports_app.command("revenue")
def revenue_report_command(
    store_id: str = typer.Option(..., "--store-id", help="Public id of the store."),
    start: datetime.datetime = typer.Option(..., "--from", formats=DATETIME_FORMATS, help="Inclusive start, read as UTC."),
    end: datetime.datetime = typer.Option(..., "--to", formats=DATETIME_FORMATS, help="Inclusive end, read as UTC."),
):
    """Income, expense and net for a window, split per account and per day."""
    asyncio.run(_print_report(lambda: RevenueReport(ReportRepository()).build(store_id, start, end)))


@reports_app.command("orders")
def order_report_command(
    store_id: str = typer.Option(..., "--store-id", help="Public id of the store."),
    start: datetime.datetime = typer.Option(..., "--from", formats=DATETIME_FORMATS, help="Inclusive start, read as UTC."),
    end: datetime.datetime = typer.Option(..., "--to", formats=DATETIME_FORMATS, help="Inclusive end, read as UTC."),
):
    """Order counts, average order value, items sold and the daily trend."""
    asyncio.run(_print_report(lambda: OrderReport(ReportRepository()).build(store_id, start, end)))


@reports_app.command("stock")
def stock_report_command(
    store_id: str = typer.Option(..., "--store-id", help="Public id of the store."),
):
    """Current stock status of raw materials and active products."""
    asyncio.run(_print_report(lambda: StockReport(ReportRepository()).build(store_id)))


@app.command("test-db-connection")
def test_db_connection_command_sync():
    """Tests the database connection and lists the stores it holds."""
    asyncio.run(test_db_connection_command())


async def test_db_connection_command():
    async with DBConnection():
        typer.echo("Successfully connected to the database.")
        store_count = await Store.all().count()
        typer.echo(f"Found {store_count} store(s) in the database.")
        for store in await Store.all().order_by("store_code"):
            typer.echo(f"  {store.public_id}  {store}")


if __name__ == "__main__":
    app()
