#!/usr/bin/env python
"""
Transaction Seed Script

Loads the product transaction dataset into the store without starting the API.

Usage:
    python seed_transactions.py
    python seed_transactions.py --source data/product_transaction.json
    python seed_transactions.py --source https://example.com/products.json --force
    python seed_transactions.py --database-url sqlite+aiosqlite:///./other.db
"""
import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any, List

import httpx
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker

from sales_api.database.database import Base
from sales_api.models.transaction import Transaction  # noqa: F401
from sales_api.services.seed_service import count_transactions, fetch_products, insert_products
from sales_api.settings import settings


def read_products_file(file_path: Path) -> List[Any]:
    """
    Read product records from a local JSON file.

    Args:
        file_path: Path to a JSON file holding an array of records

    Returns:
        List of product records

    Raises:
        ValueError: If the file is not a JSON array
    """
    with open(file_path, "r", encoding="utf-8") as f:
        products = json.load(f)

    if not isinstance(products, list):
        raise ValueError(f"{file_path} does not contain a JSON array")
    return products


async def load_products(source: str, timeout: float) -> List[Any]:
    """Load records from a URL or, if ``source`` is an existing path, from disk."""
    path = Path(source)
    if path.is_file():
        return read_products_file(path)
    return await fetch_products(source, timeout)


async def seed(database_url: str, products: List[Any], force: bool) -> int:
    """Create the table if needed and insert ``products``.

    Returns the number of inserted rows, or -1 if the store was already
    populated and ``force`` is not set.
    """
    engine = create_async_engine(database_url)
    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

        async with session_factory() as session:
            if not force and await count_transactions(session):
                return -1
            return await insert_products(session, products)
    finally:
        await engine.dispose()


def main():
    """Main entry point for the script."""
    parser = argparse.ArgumentParser(
        description="Seed the transactions store from a URL or JSON file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s
  %(prog)s --source data/product_transaction.json
  %(prog)s --force --timeout 60
        """
    )

    parser.add_argument(
        "--source",
        type=str,
        default=settings.SEED_URL,
        help="URL or local JSON file with product records (default: SEED_URL)"
    )

    parser.add_argument(
        "--database-url",
        type=str,
        default=settings.DATABASE_URL,
        help="SQLAlchemy database URL (default: DATABASE_URL)"
    )

    parser.add_argument(
        "--timeout",
        type=float,
        default=settings.SEED_TIMEOUT_SECONDS,
        help="Download timeout in seconds (default: SEED_TIMEOUT_SECONDS)"
    )

    parser.add_argument(
        "--force",
        action="store_true",
        help="Insert even if the store already holds transactions"
    )

    args = parser.parse_args()

    print(f"Loading products from {args.source}")

    try:
        products = asyncio.run(load_products(args.source, args.timeout))
    except (httpx.HTTPError, OSError, ValueError) as e:
        print(f"Error loading products: {e}", file=sys.stderr)
        sys.exit(1)

    print(f"Loaded {len(products)} record(s)")

    try:
        inserted = asyncio.run(seed(args.database_url, products, args.force))
    except SQLAlchemyError as e:
        print(f"Error writing to store: {e}", file=sys.stderr)
        sys.exit(1)

    if inserted < 0:
        print("Store already populated, nothing inserted (use --force to append)")
        return

    print(f"Seed complete! Inserted {inserted} transaction(s)")


if __name__ == "__main__":
    main()
