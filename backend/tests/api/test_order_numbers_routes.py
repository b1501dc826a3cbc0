"""
Tests for the order number API endpoints.
"""

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from order_numbering.api.v1.order_numbers.dependencies import get_order_number_service
from order_numbering.config import Settings
from order_numbering.db import get_session
from order_numbering.main import app
from order_numbering.models.orders import PurchaseOrder, Sale
from order_numbering.services.numbering.order_number_service import OrderNumberService


@pytest.fixture
async def client(db_session: AsyncSession, test_settings: Settings) -> AsyncGenerator[AsyncClient]:
    """HTTP client against the app with the in-memory database session."""

    async def override_session() -> AsyncGenerator[AsyncSession]:
        yield db_session

    async def override_service() -> OrderNumberService:
        return OrderNumberService.for_session(db_session, test_settings)

    app.dependency_overrides[get_session] = override_session
    app.dependency_overrides[get_order_number_service] = override_service
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


class TestHealth:
    """Tests for GET /api/v1/health"""

    async def test_health(self, client: AsyncClient):
        response = await client.get("/api/v1/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "service": "order-numbering"}


class TestNextOrderNumber:
    """Tests for POST /api/v1/order-numbers/{order_type}/next"""

    async def test_consecutive_numbers_for_business_date(self, client: AsyncClient):
        first = await client.post("/api/v1/order-numbers/purchase/next", params={"date": "2024-03-15"})
        second = await client.post("/api/v1/order-numbers/purchase/next", params={"date": "2024-03-15"})

        assert first.status_code == 200
        assert first.json() == {"order_type": "purchase", "order_number": "20240315001"}
        assert second.json()["order_number"] == "20240315002"

    async def test_order_type_is_case_insensitive(self, client: AsyncClient):
        response = await client.post("/api/v1/order-numbers/SALE/next", params={"date": "2024-03-15"})

        assert response.status_code == 200
        assert response.json() == {"order_type": "sale", "order_number": "20240315001"}

    async def test_continues_from_existing_records(self, client: AsyncClient, db_session: AsyncSession):
        db_session.add(Sale(sale_number="20240315041"))
        await db_session.commit()

        response = await client.post("/api/v1/order-numbers/sale/next", params={"date": "2024-03-15"})

        assert response.json()["order_number"] == "20240315042"

    async def test_without_date_uses_today(self, client: AsyncClient):
        response = await client.post("/api/v1/order-numbers/shipping/next")

        assert response.status_code == 200
        order_number = response.json()["order_number"]
        assert len(order_number) == 11
        assert order_number.endswith("001")

    async def test_unknown_order_type(self, client: AsyncClient):
        response = await client.post("/api/v1/order-numbers/refund/next")

        assert response.status_code == 404

    async def test_get_is_not_allowed(self, client: AsyncClient):
        """Issuing a number changes state, so it is not exposed as GET."""
        response = await client.get("/api/v1/order-numbers/purchase/next")

        assert response.status_code == 405

    async def test_invalid_date(self, client: AsyncClient):
        response = await client.post("/api/v1/order-numbers/purchase/next", params={"date": "15/03/2024"})

        assert response.status_code == 422


class TestUniqueOrderNumber:
    """Tests for GET /api/v1/order-numbers/{order_type}/unique"""

    async def test_free_base_is_returned(self, client: AsyncClient):
        response = await client.get("/api/v1/order-numbers/purchase/unique", params={"base": "PO-7"})

        assert response.status_code == 200
        assert response.json()["order_number"] == "PO-7"

    async def test_taken_base_is_suffixed(self, client: AsyncClient, db_session: AsyncSession):
        db_session.add_all([PurchaseOrder(poid="PO-7"), PurchaseOrder(poid="PO-7-1")])
        await db_session.commit()

        response = await client.get("/api/v1/order-numbers/purchase/unique", params={"base": "PO-7"})

        assert response.json()["order_number"] == "PO-7-2"

    async def test_base_is_required(self, client: AsyncClient):
        response = await client.get("/api/v1/order-numbers/purchase/unique")

        assert response.status_code == 422


class TestCheckOrderNumber:
    """Tests for GET /api/v1/order-numbers/{order_type}/check"""

    async def test_unused_candidate(self, client: AsyncClient):
        response = await client.get("/api/v1/order-numbers/purchase/check", params={"candidate": "20240315001"})

        assert response.json() == {"order_type": "purchase", "candidate": "20240315001", "unique": True}

    async def test_used_candidate(self, client: AsyncClient, db_session: AsyncSession):
        db_session.add(PurchaseOrder(poid="20240315001"))
        await db_session.commit()

        response = await client.get("/api/v1/order-numbers/purchase/check", params={"candidate": "20240315001"})

        assert response.json()["unique"] is False

    async def test_unknown_order_type(self, client: AsyncClient):
        response = await client.get("/api/v1/order-numbers/refund/check", params={"candidate": "x"})

        assert response.status_code == 404
