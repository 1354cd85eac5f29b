"""Bounded pagination over the transaction list endpoint"""

import logging
from typing import List

from visiofex_reports.domain.exceptions import DomainException
from visiofex_reports.domain.models import PaginationResult, Transaction
from visiofex_reports.infrastructure.cache.gateway import CacheGateway, all_transactions_key, page_key
from visiofex_reports.infrastructure.clients.visiofex import VisioFexClient, parse_transaction_page
from visiofex_reports.infrastructure.observability.metrics import pages_fetched_counter

logger = logging.getLogger(__name__)


class TransactionPaginator:
    """Merges consecutive transaction pages, stopping at max_pages at the latest"""

    def __init__(self, client: VisioFexClient, cache: CacheGateway):
        self.client = client
        self.cache = cache

    def fetch_page(self, page: int, limit: int, force: bool = False) -> List[Transaction]:
        """Fetch one page through the cache. Errors propagate."""
        payload = self.cache.get_or_compute(
            page_key(page, limit),
            lambda: self.client.fetch_transactions(page, limit),
            force=force,
        )
        return parse_transaction_page(payload)

    def fetch_all(self, page_size: int = 250, max_pages: int = 20, force: bool = False) -> PaginationResult:
        """
        Fetch every page until the data runs out or max_pages is reached.

        Stop conditions:
        - Empty page: end of data
        - Page shorter than page_size: last page
        - max_pages reached on a full page: may_have_more=True
        - Fetch error after the first page: partial result, failing page dropped

        A failure on the very first page propagates, so callers never mistake
        an unreachable API for an empty transaction history. A purely best-effort
        loop would return an empty result here instead.
        """
        if page_size < 1 or max_pages < 1:
            raise ValueError("page_size and max_pages must be positive")

        return self.cache.get_or_compute(
            all_transactions_key(page_size, max_pages),
            lambda: self._paginate(page_size, max_pages, force),
            force=force,
        )

    def _paginate(self, page_size: int, max_pages: int, force: bool) -> PaginationResult:
        result = PaginationResult()
        logger.info("Starting pagination fetch", extra={"limit_per_page": page_size, "max_pages": max_pages})

        page = 1
        while True:
            try:
                transactions = self.fetch_page(page, page_size, force=force)
            except DomainException as e:
                if page == 1:
                    raise
                # Keep what we have; the failing page is not included
                logger.warning(
                    f"Error fetching page {page}: {e}",
                    extra={"page": page, "total_fetched": result.total_fetched},
                )
                result.stopped_on_error = True
                result.error = str(e)
                break

            count = len(transactions)
            if count == 0:
                break

            result.transactions.extend(transactions)
            result.total_fetched += count
            result.pages_fetched += 1
            pages_fetched_counter.inc()
            logger.info(
                f"Fetched page {page}: {count} transactions (total: {result.total_fetched})",
                extra={"page": page, "count": count},
            )

            if count < page_size:
                break
            if page >= max_pages:
                result.may_have_more = True
                break
            page += 1

        logger.info(
            f"Pagination complete: {result.total_fetched} transactions across {result.pages_fetched} pages",
            extra={"may_have_more": result.may_have_more, "stopped_on_error": result.stopped_on_error},
        )
        return result
