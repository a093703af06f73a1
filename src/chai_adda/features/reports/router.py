import asyncio
import datetime
import logging
from typing import Annotated, Awaitable, TypeVar

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ...core.config import REPORT_TIMEOUT_SECONDS
from .repository import ReportRepository, get_report_repository
from .schemas import OrderSummary, RevenueSummary, StockSummary
from .service import OrderReport, RevenueReport, StockReport

logger = logging.getLogger(__name__)

T = TypeVar("T")

router = APIRouter(
    prefix="/reports",
    tags=["Reports"],
    responses={400: {"description": "Invalid store id or window"}},
)

Repository = Annotated[ReportRepository, Depends(get_report_repository)]
StoreId = Annotated[str, Query(alias="storeId", description="Public id of the store")]
WindowStart = Annotated[datetime.datetime, Query(alias="from", description="Inclusive ISO-8601 start")]
WindowEnd = Annotated[datetime.datetime, Query(alias="to", description="Inclusive ISO-8601 end")]


async def _with_deadline(report_name: str, build: Awaitable[T]) -> T:
    try:
        return await asyncio.wait_for(build, timeout=REPORT_TIMEOUT_SECONDS)
    except asyncio.TimeoutError:
        logger.warning(f"{report_name} report exceeded {REPORT_TIMEOUT_SECONDS}s and was abandoned.")
        raise HTTPException(
            status_code=status.HTTP_504_GATEWAY_TIMEOUT,
            detail=f"The {report_name} report took too long to build.",
        )


@router.get("/revenue", response_model=RevenueSummary)
async def get_revenue_report(
    repository: Repository, store_id: StoreId, start: WindowStart, end: WindowEnd
):
    return await _with_deadline("revenue", RevenueReport(repository).build(store_id, start, end))


@router.get("/orders", response_model=OrderSummary)
async def get_order_report(
    repository: Repository, store_id: StoreId, start: WindowStart, end: WindowEnd
):
    return await _with_deadline("order", OrderReport(repository).build(store_id, start, end))


@router.get("/stock", response_model=StockSummary)
async def get_stock_report(repository: Repository, store_id: StoreId):
    return await _with_deadline("stock", StockReport(repository).build(store_id))
