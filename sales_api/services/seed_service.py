"""Seed service module.

Fetches the product transaction dataset once and bulk-inserts it into the
store. Records are stored as received; nothing is validated or retried.
"""
import logging
from typing import Any, Optional

import httpx
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from sales_api.models.transaction import Transaction

logger = logging.getLogger(__name__)

# Source field order as stored in the transactions table
PRODUCT_FIELDS = ("title", "price", "description", "category", "image", "sold", "dateOfSale")


async def fetch_products(
    url: str,
    timeout: float = 30.0,
    client: Optional[httpx.AsyncClient] = None,
) -> list[Any]:
    """
    Download the dataset.

    Args:
        url: Location of a JSON array of product records
        timeout: Request timeout in seconds
        client: Optional preconfigured client (a new one is created otherwise)

    Returns:
        The decoded JSON array

    Raises:
        httpx.HTTPError: On network failure or non-2xx status
        ValueError: If the body is not JSON or not an array
    """
    if client is None:
        async with httpx.AsyncClient(timeout=timeout) as own_client:
            return await fetch_products(url, timeout, own_client)

    response = await client.get(url)
    response.raise_for_status()
    products = response.json()

    if not isinstance(products, list):
        raise ValueError(f"Expected a JSON array from {url}, got {type(products).__name__}")
    return products


def product_to_transaction(product: Any) -> Transaction:
    """Map one source record onto a row without validating it."""
    if not isinstance(product, dict):
        product = {}
    values = {field: product.get(field) for field in PRODUCT_FIELDS}

    sold = values["sold"]
    if isinstance(sold, bool):
        sold = int(sold)

    return Transaction(
        title=values["title"],
        price=values["price"],
        description=values["description"],
        category=values["category"],
        image=values["image"],
        sold=sold,
        date_of_sale=values["dateOfSale"],
    )


async def insert_products(db: AsyncSession, products: list[Any]) -> int:
    """Insert all records in one transaction. Returns the number inserted."""
    db.add_all([product_to_transaction(p) for p in products])
    await db.commit()
    return len(products)


async def count_transactions(db: AsyncSession) -> int:
    """Return the number of stored rows."""
    result = await db.execute(select(func.count()).select_from(Transaction))
    return result.scalar() or 0


async def seed_transactions(
    session_factory: async_sessionmaker,
    url: str,
    timeout: float = 30.0,
    skip_if_populated: bool = True,
    client: Optional[httpx.AsyncClient] = None,
) -> int:
    """
    Populate the store from ``url``.

    Failures are logged and swallowed so that the service can still start
    with an empty or partially filled store.

    Returns:
        Number of rows inserted (0 when skipped or failed)
    """
    async with session_factory() as session:
        try:
            if skip_if_populated:
                existing = await count_transactions(session)
                if existing:
                    logger.info("Store already holds %d transaction(s), skipping seed", existing)
                    return 0

            products = await fetch_products(url, timeout, client)
            logger.info("Fetched %d product record(s) from %s", len(products), url)

            inserted = await insert_products(session, products)
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Error fetching or processing seed data: %s", e)
            return 0
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error("Error inserting seed data: %s", e)
            return 0

    logger.info("Inserted %d transaction(s) into the store", inserted)
    return inserted
