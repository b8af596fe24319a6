"""Airtable REST client used as the production record store."""

import logging
from datetime import date
from typing import Any, Optional, Sequence
from urllib.parse import quote as url_quote

import httpx

from app.services.filters import Filter, Sort
from app.services.record_store import (
    AVERAGE_FIELD,
    COUNT_FIELD,
    LAST_RATED_FIELD,
    RecordStoreError,
    StoreRecord,
    next_aggregate,
)

logger = logging.getLogger(__name__)

# Airtable caps pageSize at 100
PAGE_SIZE = 100


class AirtableClient:
    """Client for a single Airtable base."""

    def __init__(
        self,
        api_key: str,
        base_id: str,
        base_url: str = "https://api.airtable.com/v0",
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 30.0,
    ):
        self.api_key = api_key
        self.base_id = base_id
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def _get_headers(self) -> dict:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    def _table_url(self, table: str, record_id: Optional[str] = None) -> str:
        url = f"{self.base_url}/{self.base_id}/{url_quote(table, safe='')}"
        if record_id:
            url = f"{url}/{record_id}"
        return url

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            headers=self._get_headers(),
            timeout=self.timeout,
            transport=self._transport,
        )

    async def select(
        self,
        table: str,
        filter: Optional[Filter] = None,
        max_records: Optional[int] = None,
        sort: Sequence[Sort] = (),
    ) -> list[StoreRecord]:
        """List records, following pagination until exhausted or capped."""
        params: dict[str, Any] = {"pageSize": PAGE_SIZE}
        if filter is not None:
            params["filterByFormula"] = filter.to_formula()
        if max_records:
            params["maxRecords"] = max_records
        for index, order in enumerate(sort):
            params[f"sort[{index}][field]"] = order.field
            params[f"sort[{index}][direction]"] = "desc" if order.descending else "asc"

        records: list[StoreRecord] = []
        try:
            async with self._client() as client:
                while True:
                    response = await client.get(self._table_url(table), params=params)
                    response.raise_for_status()
                    data = response.json()

                    records.extend(self._to_record(raw) for raw in data.get("records", []))

                    offset = data.get("offset")
                    if not offset or (max_records and len(records) >= max_records):
                        break
                    params["offset"] = offset
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Airtable select on %s failed: %s", table, exc)
            raise RecordStoreError(f"Failed to read from {table}") from exc

        if max_records:
            records = records[:max_records]
        return records

    async def create(self, table: str, fields: dict[str, Any]) -> StoreRecord:
        """Create one record. Empty values are left out of the payload."""
        payload = {
            "fields": {name: value for name, value in fields.items() if value is not None},
            "typecast": True,
        }
        return await self._write("POST", table, None, payload)

    async def update(self, table: str, record_id: str, fields: dict[str, Any]) -> StoreRecord:
        """Patch the given fields on one record."""
        return await self._write("PATCH", table, record_id, {"fields": fields, "typecast": True})

    async def record_rating(
        self, table: str, record: StoreRecord, score: float, rated_on: date
    ) -> StoreRecord:
        """Read-modify-write of the running aggregate.

        Airtable has no atomic increment, and the average and count here come
        from the snapshot the caller already read. Two raters updating the
        same official at once can overwrite each other's increment, and the
        average drifts from the exact mean because it is rebuilt from the
        rounded stored value (see ``next_aggregate``).
        """
        average, count = next_aggregate(
            float(record.get(AVERAGE_FIELD, 0) or 0),
            int(record.get(COUNT_FIELD, 0) or 0),
            score,
        )
        return await self.update(
            table,
            record.id,
            {
                AVERAGE_FIELD: average,
                COUNT_FIELD: count,
                LAST_RATED_FIELD: rated_on.isoformat(),
            },
        )

    async def aclose(self) -> None:
        """Nothing to release; each call opens its own connection."""

    async def _write(
        self, method: str, table: str, record_id: Optional[str], payload: dict
    ) -> StoreRecord:
        try:
            async with self._client() as client:
                response = await client.request(
                    method, self._table_url(table, record_id), json=payload
                )
                response.raise_for_status()
                data = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Airtable %s on %s failed: %s", method, table, exc)
            raise RecordStoreError(f"Failed to write to {table}") from exc

        return self._to_record(data)

    @staticmethod
    def _to_record(raw: dict) -> StoreRecord:
        return StoreRecord(
            id=raw.get("id", ""),
            fields=raw.get("fields") or {},
            created_time=raw.get("createdTime"),
        )
