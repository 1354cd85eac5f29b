"""Dependency injection for FastAPI endpoints"""

from functools import lru_cache
from typing import Generator

from fastapi import Header, HTTPException, Request

from visiofex_reports.config import settings
from visiofex_reports.infrastructure.cache.gateway import CacheGateway
from visiofex_reports.infrastructure.cache.store import CacheStore, InMemoryCacheStore
from visiofex_reports.infrastructure.clients.visiofex import VisioFexClient
from visiofex_reports.services.reports import ReportService


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


@lru_cache(maxsize=1)
def get_cache_store() -> CacheStore:
    """Cache store shared by every request of this process"""
    return InMemoryCacheStore()


def get_cache_gateway() -> CacheGateway:
    return CacheGateway(
        get_cache_store(),
        namespace=settings.cache_key_prefix,
        default_ttl=settings.cache_ttl_seconds,
    )


def get_report_service() -> Generator[ReportService, None, None]:
    """Provide a report service bound to a fresh API client"""
    with VisioFexClient(
        api_key=settings.api_key,
        base_url=settings.api_base,
        timeout=settings.http_timeout_seconds,
    ) as client:
        yield ReportService(
            client,
            get_cache_gateway(),
            fallback_page_size=settings.fallback_page_size,
            fallback_max_pages=settings.fallback_max_pages,
            recent_label=settings.recent_label,
        )


def require_admin(x_admin_token: str | None = Header(default=None)) -> None:
    """Guard for operator actions such as clearing the cache"""
    if not settings.admin_token or x_admin_token != settings.admin_token:
        raise HTTPException(status_code=403, detail="Permission denied")
