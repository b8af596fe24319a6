"""Record store boundary shared by the Airtable and local backends."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Optional, Protocol, Sequence

from app.services.filters import Filter, Sort

AVERAGE_FIELD = "Average_Rating"
COUNT_FIELD = "Total_Ratings"
LAST_RATED_FIELD = "Last_Rating_Date"


class RecordStoreError(Exception):
    """The backing store could not be reached or rejected the request."""


@dataclass(frozen=True)
class StoreRecord:
    """A single row as the store returns it: an id plus a field mapping."""

    id: str
    fields: dict[str, Any] = field(default_factory=dict)
    created_time: Optional[str] = None

    def get(self, name: str, default: Any = None) -> Any:
        value = self.fields.get(name)
        return default if value is None else value


class RecordStore(Protocol):
    """Operations the gateways need from a backing store."""

    async def select(
        self,
        table: str,
        filter: Optional[Filter] = None,
        max_records: Optional[int] = None,
        sort: Sequence[Sort] = (),
    ) -> list[StoreRecord]:
        ...

    async def create(self, table: str, fields: dict[str, Any]) -> StoreRecord:
        ...

    async def update(self, table: str, record_id: str, fields: dict[str, Any]) -> StoreRecord:
        ...

    async def record_rating(
        self, table: str, record: StoreRecord, score: float, rated_on: date
    ) -> StoreRecord:
        """Fold one score into the record's running average and count."""
        ...

    async def aclose(self) -> None:
        ...


def round_half_up(value: float, places: int = 1) -> float:
    """Round to ``places`` decimals with halves going up, so 2.25 becomes 2.3."""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def next_aggregate(average: float, count: int, score: float) -> tuple[float, int]:
    """Return the (average, count) pair after adding one score.

    Only the rounded average is stored, so each update starts from a value
    up to 0.05 off the exact mean and the error can build up over many
    ratings: 1, 0, 0, 0 ends at 0.2 instead of 0.3.
    """
    new_count = count + 1
    new_average = (average * count + score) / new_count
    return round_half_up(new_average, 1), new_count
