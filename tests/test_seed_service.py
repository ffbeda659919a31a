"""Tests for seed service and seed script."""
import json

import httpx
import pytest

from sales_api.services.seed_service import (
    product_to_transaction,
    count_transactions,
    fetch_products,
    seed_transactions,
)
from sales_api.services.transaction_service import list_transactions
from seed_transactions import read_products_file, seed

SEED_URL = "https://example.com/product_transaction.json"

PRODUCTS = [
    {
        "id": 1,
        "title": "Fjallraven Backpack",
        "price": 329.85,
        "description": "Your perfect pack for everyday use",
        "category": "men's clothing",
        "image": "https://example.com/1.jpg",
        "sold": False,
        "dateOfSale": "2021-11-27T20:29:54+05:30",
    },
    {
        "id": 2,
        "title": "Mens Casual Premium Slim Fit T-Shirts",
        "price": 44.6,
        "description": "Slim-fitting style",
        "category": "men's clothing",
        "image": "https://example.com/2.jpg",
        "sold": True,
        "dateOfSale": "2021-10-27T20:29:54+05:30",
    },
]


def mock_client(status_code=200, payload=None, content=None):
    """Build an httpx client that answers every request locally."""
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        if content is not None:
            return httpx.Response(status_code, content=content)
        return httpx.Response(status_code, json=payload)

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    client.requests = requests
    return client


class TestProductToTransaction:
    """Tests for record mapping."""

    def test_maps_fields(self):
        """Source fields land in the matching columns; sold becomes 1/0."""
        row = product_to_transaction(PRODUCTS[1])
        assert row.title == "Mens Casual Premium Slim Fit T-Shirts"
        assert row.price == 44.6
        assert row.category == "men's clothing"
        assert row.sold == 1
        assert row.date_of_sale == "2021-10-27T20:29:54+05:30"

    def test_source_id_is_ignored(self):
        """The store assigns identifiers."""
        assert product_to_transaction(PRODUCTS[0]).id is None

    def test_missing_fields_are_null(self):
        """Incomplete records are kept with NULLs."""
        row = product_to_transaction({"title": "Only a title"})
        assert row.title == "Only a title"
        assert row.price is None
        assert row.sold is None

    def test_non_object_record(self):
        """A non-object element becomes an all-NULL row."""
        row = product_to_transaction("garbage")
        assert row.title is None
        assert row.date_of_sale is None


@pytest.mark.asyncio
class TestFetchProducts:
    """Tests for downloading the dataset."""

    async def test_returns_array(self):
        """A JSON array is returned unchanged."""
        async with mock_client(payload=PRODUCTS) as client:
            assert await fetch_products(SEED_URL, client=client) == PRODUCTS
            assert str(client.requests[0].url) == SEED_URL

    async def test_http_error(self):
        """Non-2xx responses raise."""
        async with mock_client(status_code=503, payload={}) as client:
            with pytest.raises(httpx.HTTPStatusError):
                await fetch_products(SEED_URL, client=client)

    async def test_not_an_array(self):
        """An object body is rejected."""
        async with mock_client(payload={"products": PRODUCTS}) as client:
            with pytest.raises(ValueError):
                await fetch_products(SEED_URL, client=client)


@pytest.mark.asyncio
class TestSeedTransactions:
    """Integration tests for seed_transactions."""

    async def test_inserts_all_records(self, session_factory, db_session):
        """Every record is stored once."""
        async with mock_client(payload=PRODUCTS) as client:
            inserted = await seed_transactions(session_factory, SEED_URL, client=client)

        assert inserted == 2
        rows = await list_transactions(db_session)
        assert [r.title for r in rows] == [p["title"] for p in PRODUCTS]
        assert [r.sold for r in rows] == [0, 1]

    async def test_skips_populated_store(self, session_factory, db_session):
        """A second run does not duplicate the dataset."""
        async with mock_client(payload=PRODUCTS) as client:
            await seed_transactions(session_factory, SEED_URL, client=client)
            inserted = await seed_transactions(session_factory, SEED_URL, client=client)
            assert len(client.requests) == 1

        assert inserted == 0
        assert await count_transactions(db_session) == 2

    async def test_append_when_skip_disabled(self, session_factory, db_session):
        """Without the populated check the records are appended again."""
        async with mock_client(payload=PRODUCTS) as client:
            await seed_transactions(session_factory, SEED_URL, client=client)
            await seed_transactions(
                session_factory, SEED_URL, skip_if_populated=False, client=client
            )

        assert await count_transactions(db_session) == 4

    async def test_fetch_failure_is_not_fatal(self, session_factory, db_session):
        """HTTP failures leave the store empty and return 0."""
        async with mock_client(status_code=500, payload=[]) as client:
            inserted = await seed_transactions(session_factory, SEED_URL, client=client)

        assert inserted == 0
        assert await count_transactions(db_session) == 0

    async def test_invalid_json_is_not_fatal(self, session_factory, db_session):
        """Unparseable bodies are logged and ignored."""
        async with mock_client(content=b"<html>not json</html>") as client:
            inserted = await seed_transactions(session_factory, SEED_URL, client=client)

        assert inserted == 0
        assert await count_transactions(db_session) == 0

    async def test_malformed_records_are_stored(self, session_factory, db_session):
        """Records are not validated before insertion."""
        payload = [{"title": "partial"}, "garbage", PRODUCTS[0]]
        async with mock_client(payload=payload) as client:
            inserted = await seed_transactions(session_factory, SEED_URL, client=client)

        assert inserted == 3
        rows = await list_transactions(db_session)
        assert [r.title for r in rows] == ["partial", None, "Fjallraven Backpack"]

    async def test_non_numeric_values_keep_the_batch(self, session_factory, db_session):
        """Text in numeric fields is stored verbatim alongside valid records."""
        payload = [
            PRODUCTS[0],
            {**PRODUCTS[1], "title": "odd", "price": "N/A", "sold": "yes"},
            {"title": "plain", "price": 10.0, "sold": True, "dateOfSale": "2022-03-02"},
        ]
        async with mock_client(payload=payload) as client:
            inserted = await seed_transactions(session_factory, SEED_URL, client=client)

        assert inserted == 3
        rows = await list_transactions(db_session)
        assert [r.title for r in rows] == ["Fjallraven Backpack", "odd", "plain"]
        assert [r.price for r in rows] == [329.85, "N/A", 10.0]
        assert [r.sold for r in rows] == [0, "yes", 1]


class TestReadProductsFile:
    """Tests for the seed script's file reader."""

    def test_reads_array(self, tmp_path):
        path = tmp_path / "products.json"
        path.write_text(json.dumps(PRODUCTS), encoding="utf-8")
        assert read_products_file(path) == PRODUCTS

    def test_rejects_object(self, tmp_path):
        path = tmp_path / "products.json"
        path.write_text(json.dumps({"products": PRODUCTS}), encoding="utf-8")
        with pytest.raises(ValueError):
            read_products_file(path)


@pytest.mark.asyncio
class TestSeedScript:
    """Tests for the seed script's store writer."""

    async def test_seed_and_refuse_second_run(self, tmp_path):
        """A populated store is left alone unless forced."""
        database_url = f"sqlite+aiosqlite:///{tmp_path / 'script.db'}"

        assert await seed(database_url, PRODUCTS, force=False) == 2
        assert await seed(database_url, PRODUCTS, force=False) == -1
        assert await seed(database_url, PRODUCTS, force=True) == 2
