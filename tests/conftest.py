"""Pytest fixtures for testing"""

import pytest
from typing import Any, Callable, Dict, List, Optional
import httpx
from fastapi.testclient import TestClient
from visiofex_reports.api.main import create_app
from visiofex_reports.api.dependencies import get_report_service
from visiofex_reports.infrastructure.cache.gateway import CacheGateway
from visiofex_reports.infrastructure.cache.store import InMemoryCacheStore
from visiofex_reports.infrastructure.clients.visiofex import VisioFexClient
from visiofex_reports.services.reports import ReportService


class FakeClock:
    """Manually advanced monotonic clock"""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakePaymentAPI:
    """
    Scripted stand-in for the remote payment API behind httpx.MockTransport.

    pages maps page number -> list of transaction dicts, or an int status code
    to answer with. Pages not listed come back empty.
    """

    def __init__(self):
        self.pages: Dict[int, Any] = {}
        self.daily: Any = {"data": {}}
        self.daily_status: int = 200
        self.requests: List[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if path.endswith("/transactions/list"):
            page = int(request.url.params["page"])
            entry = self.pages.get(page, [])
            if isinstance(entry, int):
                return httpx.Response(entry, text="upstream failure")
            return httpx.Response(200, json={"data": {"transactions": entry}})
        if path.endswith("/accounting/vendor/report/daily"):
            if self.daily_status != 200:
                return httpx.Response(self.daily_status, text="report unavailable")
            return httpx.Response(200, json=self.daily)
        return httpx.Response(404, text="not found")

    def page_requests(self) -> List[httpx.Request]:
        return [r for r in self.requests if r.url.path.endswith("/transactions/list")]


def make_transactions(count: int, created_at: Optional[str] = "2024-01-01T10:00:00Z", start_id: int = 0) -> List[dict]:
    """Build raw transaction payloads as the list endpoint returns them"""
    return [
        {
            "id": f"tx_{start_id + i}",
            "createdAt": created_at,
            "amount": "10.00",
            "platformFee": "0.50",
            "netProfit": "9.50",
        }
        for i in range(count)
    ]


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store(clock: FakeClock) -> InMemoryCacheStore:
    return InMemoryCacheStore(clock=clock)


@pytest.fixture
def cache(store: InMemoryCacheStore) -> CacheGateway:
    return CacheGateway(store, namespace="vxf_", default_ttl=3600)


@pytest.fixture
def fake_api() -> FakePaymentAPI:
    return FakePaymentAPI()


@pytest.fixture
def api_client(fake_api: FakePaymentAPI) -> VisioFexClient:
    """VisioFex client wired to the scripted fake API"""
    client = VisioFexClient(
        api_key="sk_test_123",
        base_url="https://api.example.test/v1/",
        transport=httpx.MockTransport(fake_api.handler),
    )
    yield client
    client.close()


@pytest.fixture
def report_service(api_client: VisioFexClient, cache: CacheGateway) -> ReportService:
    return ReportService(api_client, cache, fallback_page_size=250, fallback_max_pages=20)


@pytest.fixture
def client(report_service: ReportService) -> TestClient:
    """Create FastAPI test client backed by the fake payment API"""
    app = create_app()
    app.dependency_overrides[get_report_service] = lambda: report_service
    return TestClient(app)


@pytest.fixture
def sample_transactions() -> List[dict]:
    """Three transactions across two days"""
    return [
        {"id": "1", "createdAt": "2024-01-01T10:00:00Z", "amount": 100, "platformFee": 5, "netProfit": 90},
        {"id": "2", "createdAt": "2024-01-01T12:00:00Z", "amount": 50, "platformFee": 2, "netProfit": 45},
        {"id": "3", "createdAt": "2024-01-02T09:00:00Z", "amount": 20},
    ]


@pytest.fixture
def transaction_factory() -> Callable[..., List[dict]]:
    return make_transactions
