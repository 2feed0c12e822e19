"""Transaction lookups.

Transactions are the server's background jobs. Nothing here waits for a
job to finish: callers get the latest matching record and poll ``get()``
themselves if they need completion.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from ..client import API_FORMAT, ListOptions, OnAppClient, encode_params, require_id
from ..errors import OnAppError, TransactionLookupError
from ..models import Transaction
from ..observability.metrics import TRANSACTION_LOOKUPS_TOTAL
from .envelope import unwrap, unwrap_list

logger = logging.getLogger(__name__)

TRANSACTIONS_BASE_PATH = "transactions"


class TransactionsService:
    """Read-only access to /transactions."""

    RESOURCE_KEY = "transaction"

    def __init__(self, client: OnAppClient) -> None:
        self._client = client

    async def list(self, options: ListOptions | None = None) -> list[Transaction]:
        payload = await self._client.request(
            "GET",
            TRANSACTIONS_BASE_PATH + API_FORMAT,
            params=encode_params(options),
        )
        return unwrap_list(payload, self.RESOURCE_KEY, Transaction)

    async def get(self, transaction_id: int) -> Transaction:
        require_id(transaction_id)
        payload = await self._client.request(
            "GET", f"{TRANSACTIONS_BASE_PATH}/{transaction_id}{API_FORMAT}"
        )
        return unwrap(payload, self.RESOURCE_KEY, Transaction)

    async def list_by_filter(
        self,
        filters: Mapping[str, Any],
        options: ListOptions | None = None,
    ) -> list[Transaction]:
        """List transactions matching every field in ``filters``.

        The filter is sent as query parameters and re-checked on the
        returned records, since older control panels ignore unknown params.
        Server order (newest first) is preserved.
        """
        params = {**encode_params(filters), **encode_params(options)}
        payload = await self._client.request(
            "GET",
            TRANSACTIONS_BASE_PATH + API_FORMAT,
            params=params,
        )
        records = unwrap_list(payload, self.RESOURCE_KEY, Transaction)
        wanted = dict(filters)
        return [trx for trx in records if trx.matches(wanted)]

    async def get_by_filter(
        self,
        filters: Mapping[str, Any],
        options: ListOptions | None = None,
    ) -> Transaction | None:
        """Return the newest transaction matching ``filters``, or None."""
        matches = await self.list_by_filter(filters, options)
        return matches[0] if matches else None

    async def last_transaction(
        self,
        filters: Mapping[str, Any],
        *,
        resource_id: int,
        action: str,
    ) -> Transaction | None:
        """Best-effort lookup of the job behind an already-accepted request.

        The API returns no job id, so this is the most recent matching job
        at the time of the call. It may belong to a concurrent request on
        the same resource.

        Raises:
            TransactionLookupError: the query failed. The original request
                was already accepted and must not be blindly retried.
        """
        options = ListOptions(per_page=self._client.transaction_page_size)
        try:
            trx = await self.get_by_filter(filters, options)
        except OnAppError as e:
            TRANSACTION_LOOKUPS_TOTAL.labels(outcome="failed").inc()
            logger.warning(
                "Transaction lookup failed after %s on %d: %s",
                action,
                resource_id,
                e,
                extra={"resource_id": resource_id, "action": action},
            )
            raise TransactionLookupError(resource_id, action, str(e)) from e

        TRANSACTION_LOOKUPS_TOTAL.labels(outcome="found" if trx else "missing").inc()
        if trx is None:
            logger.info(
                "No transaction found after %s on %d",
                action,
                resource_id,
                extra={"resource_id": resource_id, "action": action, "filters": dict(filters)},
            )
        return trx
