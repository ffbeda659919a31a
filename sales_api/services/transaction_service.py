"""Transaction search service module.

Listing, text search, month-filtered search and paginated search over the
transactions table. All user input is bound as SQL parameters.
"""
from typing import Optional, Sequence

from sqlalchemy import String, cast, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from sales_api.models.transaction import Transaction


def _text_filter(search_input: str):
    """Substring match against title, description or the price's text form."""
    return or_(
        Transaction.title.contains(search_input),
        Transaction.description.contains(search_input),
        cast(Transaction.price, String).contains(search_input),
    )


def month_filter(month: str):
    """Exact match of the two-digit sale month, e.g. ``"03"``."""
    return func.strftime("%m", Transaction.date_of_sale) == month


async def list_transactions(db: AsyncSession) -> Sequence[Transaction]:
    """Return every stored transaction in storage order."""
    result = await db.execute(select(Transaction).order_by(Transaction.id))
    return result.scalars().all()


async def search_transactions(
    db: AsyncSession,
    search_input: str = "",
    month: Optional[str] = None,
) -> Sequence[Transaction]:
    """
    Search transactions by text, optionally restricted to one month.

    An empty ``search_input`` matches every row (the empty substring is
    contained in all text).

    Args:
        db: Database session
        search_input: Substring to look for
        month: Two-digit month code; no month constraint when None

    Returns:
        Matching transactions in storage order
    """
    filters = [_text_filter(search_input)]
    if month is not None:
        filters.append(month_filter(month))

    query = select(Transaction).where(*filters).order_by(Transaction.id)
    result = await db.execute(query)
    return result.scalars().all()


async def paginate_transactions(
    db: AsyncSession,
    search_input: Optional[str] = None,
    page: int = 1,
    per_page: int = 10,
) -> Sequence[Transaction]:
    """
    Return one page of transactions, optionally filtered by text.

    Rows ``(page-1)*per_page`` through ``page*per_page - 1`` in storage order.
    Page and page size are passed to LIMIT/OFFSET unchecked; the engine
    decides what negative values mean.
    """
    query = select(Transaction)
    if search_input:
        query = query.where(_text_filter(search_input))

    offset = (page - 1) * per_page
    query = query.order_by(Transaction.id).limit(per_page).offset(offset)
    result = await db.execute(query)
    return result.scalars().all()
