"""VisioFex payment API HTTP client for transactions and daily accounting reports"""

import json
import logging
from datetime import date
from typing import Any, Dict, List, Optional, Union

import httpx

from visiofex_reports.domain.exceptions import (
    HTTPError,
    InvalidResponseError,
    MissingCredentialError,
    TransportError,
)
from visiofex_reports.domain.models import (
    AggregateFailure,
    AggregateOutcome,
    AggregateSuccess,
    AggregateTotals,
    Transaction,
)
from visiofex_reports.infrastructure.observability.metrics import record_api_request

logger = logging.getLogger(__name__)

DEFAULT_API_BASE = "https://api.konacash.com/v1/"

JSONValue = Union[Dict[str, Any], List[Any], str, int, float, bool, None, bytes]


class VisioFexClient:
    """Client for the VisioFex (Konacash) payment API"""

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_API_BASE,
        timeout: float = 30.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url
        self.timeout = timeout
        self._http = httpx.Client(timeout=timeout, transport=transport)

    def __enter__(self) -> "VisioFexClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._http.close()

    def build_url(self, path: str) -> str:
        return self.base_url.rstrip("/") + "/" + path.lstrip("/")

    def request(
        self,
        method: str,
        path: str,
        body: Any = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> JSONValue:
        """
        Send an authenticated request and return the decoded JSON body.

        A 2xx body that is not valid JSON is returned as raw bytes.

        Raises:
            MissingCredentialError: No API key configured (nothing is sent)
            TransportError: DNS failure, timeout, refused connection
            HTTPError: Status outside [200, 300)
        """
        if not self.api_key:
            raise MissingCredentialError()

        url = self.build_url(path)
        headers = {
            "X-API-KEY": self.api_key,
            "Accept": "application/json",
            "Content-Type": "application/json",
        }
        content = json.dumps(body) if body is not None else None

        logger.debug("Payment API request", extra={"method": method.upper(), "url": url, "params": params})
        try:
            response = self._http.request(
                method.upper(),
                url,
                params=params,
                headers=headers,
                content=content,
            )
        except httpx.TransportError as e:
            record_api_request(path, "transport_error")
            raise TransportError(f"Payment API unreachable: {e}") from e

        if not 200 <= response.status_code < 300:
            record_api_request(path, "http_error")
            raise HTTPError(response.status_code, response.text, str(response.request.url))

        record_api_request(path, "ok")
        try:
            return response.json()
        except ValueError:
            return response.content

    def fetch_transactions(self, page: int = 1, limit: int = 100) -> JSONValue:
        """GET transactions/list - one page of the transaction list"""
        return self.request("GET", "transactions/list", params={"page": int(page), "limit": int(limit)})

    def fetch_daily_report(self, start: Union[date, str], end: Union[date, str]) -> JSONValue:
        """GET accounting/vendor/report/daily - totals for [start, end]"""
        start_key = start.isoformat() if isinstance(start, date) else start
        end_key = end.isoformat() if isinstance(end, date) else end
        return self.request(
            "GET",
            "accounting/vendor/report/daily",
            params={"startDate": start_key, "endDate": end_key},
        )


def parse_transaction_page(payload: JSONValue) -> List[Transaction]:
    """Extract data.transactions from a list-endpoint page; a missing path is an empty page"""
    if not isinstance(payload, dict):
        return []
    data = payload.get("data")
    if not isinstance(data, dict):
        return []
    items = data.get("transactions") or []
    if not isinstance(items, list):
        return []
    return [Transaction.from_payload(item) for item in items if isinstance(item, dict)]


def parse_daily_report(payload: JSONValue) -> AggregateOutcome:
    """Interpret a 2xx daily report body as aggregate totals, no data, or an unusable shape"""
    if not isinstance(payload, dict):
        return AggregateFailure(InvalidResponseError(f"Unexpected daily report payload: {payload!r:.200}"))
    data = payload.get("data")
    if not data:
        return AggregateSuccess(totals=None)
    if not isinstance(data, dict):
        return AggregateFailure(InvalidResponseError(f"Unexpected daily report data: {data!r:.200}"))
    return AggregateSuccess(totals=AggregateTotals.from_payload(data))
