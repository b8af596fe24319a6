"""Record store backends."""

from app.services.airtable import AirtableClient
from app.services.local_store import LocalRecordStore
from app.services.record_store import RecordStore, RecordStoreError

__all__ = [
    "AirtableClient",
    "LocalRecordStore",
    "RecordStore",
    "RecordStoreError",
]
