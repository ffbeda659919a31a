"""Dashboard service module.

Monthly reports over the transactions table:
- Statistics: total sale amount, sold and unsold item counts
- Pie chart: item count per category
- Bar chart: item count per 100-unit price band
- Combined: all three for the same month in one response

Every report is a single aggregate query; the database does the work.
"""
import asyncio
import logging

from sqlalchemy import and_, case, func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from sales_api.models.transaction import Transaction
from sales_api.services.transaction_service import month_filter
from sales_api.schemas.dashboard import (
    StatisticsResponse,
    CategoryCount,
    PriceRangeCount,
    CombinedDataResponse,
)

logger = logging.getLogger(__name__)

# =============================================================================
# PRICE BANDS
# =============================================================================
# (label, exclusive lower bound, inclusive upper bound). The first band also
# includes 0; anything above the last band, negative or NULL is open-ended.

PRICE_BANDS = [("0 - 100", None, 100)] + [
    (f"{low + 1} - {low + 100}", low, low + 100) for low in range(100, 900, 100)
]
OPEN_ENDED_BAND = "901-above"


def _price_band_expression():
    """CASE expression mapping a row's price to its band label."""
    whens = []
    for label, low, high in PRICE_BANDS:
        if low is None:
            condition = and_(Transaction.price >= 0, Transaction.price <= high)
        else:
            condition = and_(Transaction.price > low, Transaction.price <= high)
        whens.append((condition, label))
    return case(*whens, else_=OPEN_ENDED_BAND)


# =============================================================================
# STATISTICS
# =============================================================================

async def compute_statistics(db: AsyncSession, month: str) -> StatisticsResponse:
    """
    Compute sales totals for one month.

    - totalSaleAmount: sum of price over sold rows (0 when there are none)
    - totalSoldItems: rows with sold = 1
    - totalNotSoldItems: rows with sold = 0
    """
    query = select(
        func.coalesce(
            func.sum(case((Transaction.sold == 1, Transaction.price), else_=0)), 0
        ).label("total_sale_amount"),
        func.count(case((Transaction.sold == 1, 1))).label("total_sold_items"),
        func.count(case((Transaction.sold == 0, 1))).label("total_not_sold_items"),
    ).where(month_filter(month))

    result = await db.execute(query)
    row = result.one()

    return StatisticsResponse(
        totalSaleAmount=float(row.total_sale_amount),
        totalSoldItems=row.total_sold_items,
        totalNotSoldItems=row.total_not_sold_items,
    )


# =============================================================================
# PIE CHART
# =============================================================================

async def compute_category_distribution(db: AsyncSession, month: str) -> list[CategoryCount]:
    """Count items per distinct category sold in the given month."""
    query = (
        select(Transaction.category, func.count().label("item_count"))
        .where(month_filter(month))
        .group_by(Transaction.category)
        .order_by(Transaction.category)
    )
    result = await db.execute(query)

    return [
        CategoryCount(category=row.category, itemCount=row.item_count)
        for row in result.all()
    ]


# =============================================================================
# BAR CHART
# =============================================================================

async def compute_price_ranges(db: AsyncSession, month: str) -> list[PriceRangeCount]:
    """
    Count items per price band in the given month.

    Only non-empty bands are returned, ordered by the lowest price actually
    observed in each band.
    """
    banded = (
        select(
            _price_band_expression().label("price_range"),
            Transaction.price,
        )
        .where(month_filter(month))
        .subquery()
    )
    query = (
        select(banded.c.price_range, func.count().label("item_count"))
        .group_by(banded.c.price_range)
        .order_by(func.min(banded.c.price))
    )
    result = await db.execute(query)

    return [
        PriceRangeCount(priceRange=row.price_range, itemCount=row.item_count)
        for row in result.all()
    ]


# =============================================================================
# COMBINED
# =============================================================================

async def _gather_all(*coros):
    """
    Await all coroutines concurrently, all-or-nothing.

    On the first failure the remaining tasks are cancelled and awaited, so
    their sessions are closed and their own errors are retrieved, before the
    failure propagates.
    """
    tasks = [asyncio.ensure_future(coro) for coro in coros]
    try:
        return await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


async def compute_combined_data(
    session_factory: async_sessionmaker,
    month: str,
) -> CombinedDataResponse:
    """
    Build statistics, bar chart and pie chart for one month concurrently.

    Each report runs on its own session since a session cannot execute
    statements concurrently. Any failure cancels the other reports and fails the whole
    response.
    """

    async def run(report):
        async with session_factory() as session:
            return await report(session, month)

    statistics, bar_chart, pie_chart = await _gather_all(
        run(compute_statistics),
        run(compute_price_ranges),
        run(compute_category_distribution),
    )
    logger.debug("Combined dashboard data built for month %s", month)

    return CombinedDataResponse(
        statistics=statistics,
        barChart=bar_chart,
        pieChart=pie_chart,
    )
