"""Dashboard endpoint module.

Provides monthly statistics, category pie chart, price-range bar chart and
the combined dashboard payload.
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from sales_api.database.database import get_db, get_session_factory
from sales_api.schemas.dashboard import (
    StatisticsResponse,
    CategoryCount,
    PriceRangeCount,
    CombinedDataResponse,
)
from sales_api.services.dashboard_service import (
    compute_statistics,
    compute_category_distribution,
    compute_price_ranges,
    compute_combined_data,
)
from sales_api.settings import settings

router = APIRouter(tags=["dashboard"])

MONTH_DESCRIPTION = "Two-digit month code, e.g. 03"


@router.get("/statistics", response_model=StatisticsResponse)
async def get_statistics(
    month: str = Query(
        default=settings.DEFAULT_MONTH,
        alias="dropDownInput",
        description=MONTH_DESCRIPTION,
    ),
    db: AsyncSession = Depends(get_db),
) -> StatisticsResponse:
    """
    Get sales totals for the selected month.

    - **totalSaleAmount**: Sum of price over sold items
    - **totalSoldItems**: Number of sold items
    - **totalNotSoldItems**: Number of unsold items
    """
    return await compute_statistics(db, month)


@router.get("/pie-chart-category", response_model=list[CategoryCount])
async def get_pie_chart(
    month: str = Query(
        default=settings.DEFAULT_MONTH,
        alias="dropDownInput",
        description=MONTH_DESCRIPTION,
    ),
    db: AsyncSession = Depends(get_db),
) -> list[CategoryCount]:
    """Get the number of items per category for the selected month."""
    return await compute_category_distribution(db, month)


@router.get("/bar-chart-price-range", response_model=list[PriceRangeCount])
async def get_bar_chart(
    month: str = Query(
        default=settings.DEFAULT_MONTH,
        alias="dropDownInput",
        description=MONTH_DESCRIPTION,
    ),
    db: AsyncSession = Depends(get_db),
) -> list[PriceRangeCount]:
    """
    Get the number of items per price band for the selected month.

    Bands: 0 - 100, 101 - 200, ..., 801 - 900, 901-above. Empty bands are
    omitted.
    """
    return await compute_price_ranges(db, month)


@router.get("/combined-data", response_model=CombinedDataResponse)
async def get_combined_data(
    month: str = Query(
        default=settings.DEFAULT_MONTH,
        alias="dropDownInput",
        description=MONTH_DESCRIPTION,
    ),
    session_factory: async_sessionmaker = Depends(get_session_factory),
) -> CombinedDataResponse:
    """Get statistics, bar chart and pie chart for the selected month in one call."""
    return await compute_combined_data(session_factory, month)
