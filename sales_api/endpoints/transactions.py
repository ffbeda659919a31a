"""Transaction listing and search endpoints module."""
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from sales_api.database.database import get_db
from sales_api.schemas.transaction import TransactionResponse
from sales_api.services.transaction_service import (
    list_transactions,
    search_transactions,
    paginate_transactions,
)
from sales_api.settings import settings

router = APIRouter(tags=["transactions"])


@router.get("/all", response_model=list[TransactionResponse])
async def get_all_transactions(
    db: AsyncSession = Depends(get_db),
) -> list[TransactionResponse]:
    """Return every transaction in storage order."""
    rows = await list_transactions(db)
    return [TransactionResponse.model_validate(row) for row in rows]


@router.get("/search/month", response_model=list[TransactionResponse])
async def search_transactions_by_month(
    search_input: str = Query(
        default="",
        alias="searchInput",
        description="Substring matched against title, description or price",
    ),
    month: str = Query(
        default=settings.DEFAULT_MONTH,
        alias="dropDownInput",
        description="Two-digit month code, e.g. 03",
    ),
    db: AsyncSession = Depends(get_db),
) -> list[TransactionResponse]:
    """
    Search transactions sold in a given month.

    The month is compared as a string, so it must be zero-padded (``03``, not ``3``).
    Without ``searchInput`` every row of the month is returned; the earlier
    Node service bound a NULL pattern here and always answered ``[]``.
    """
    rows = await search_transactions(db, search_input=search_input, month=month)
    return [TransactionResponse.model_validate(row) for row in rows]


@router.get("/search", response_model=list[TransactionResponse])
async def search_all_transactions(
    search_input: str = Query(
        default="",
        alias="searchInput",
        description="Substring matched against title, description or price",
    ),
    db: AsyncSession = Depends(get_db),
) -> list[TransactionResponse]:
    """Search transactions across all months. An empty input returns everything."""
    rows = await search_transactions(db, search_input=search_input)
    return [TransactionResponse.model_validate(row) for row in rows]


@router.get("/search/pagination", response_model=list[TransactionResponse])
async def search_transactions_paginated(
    search_input: Optional[str] = Query(
        default=None,
        alias="searchInput",
        description="Optional substring filter",
    ),
    page: int = Query(default=1, description="Page number (1-based)"),
    per_page: int = Query(default=10, alias="perPage", description="Items per page"),
    db: AsyncSession = Depends(get_db),
) -> list[TransactionResponse]:
    """
    Return one page of transactions.

    No total count is included; an empty list means the page is past the end.
    """
    rows = await paginate_transactions(
        db,
        search_input=search_input,
        page=page,
        per_page=per_page,
    )
    return [TransactionResponse.model_validate(row) for row in rows]
