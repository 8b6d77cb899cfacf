import logging
from datetime import timezone
from typing import List
from uuid import uuid4

from ..repositories.store import RecordStore
from ..schemas import HealthRecord, HealthRecordCreate
from .tokens import utcnow

logger = logging.getLogger(__name__)

DEFAULT_RECORD_TTL = 30 * 24 * 3600


class HealthRecordService:
    """Create, list and delete a user's health records.

    Writes are a put, an index append and a stats invalidation. A failure part
    way through is not rolled back; an orphaned record simply never shows up
    in listings.
    """

    def __init__(self, store: RecordStore, ttl_seconds: int = DEFAULT_RECORD_TTL):
        self.store = store
        self.ttl_seconds = ttl_seconds

    def create(self, user_id: str, payload: HealthRecordCreate) -> HealthRecord:
        now = utcnow()
        recorded_at = payload.recorded_at or now
        if recorded_at.tzinfo is None:
            recorded_at = recorded_at.replace(tzinfo=timezone.utc)

        record = HealthRecord(
            id=str(uuid4()),
            user_id=user_id,
            type=payload.type,
            value=payload.value,
            unit=payload.unit,
            notes=payload.notes,
            recorded_at=recorded_at,
            created_at=now,
        )
        self.store.put_record(record, self.ttl_seconds)
        self.store.append_to_index(user_id, record.id, self.ttl_seconds)
        self.store.invalidate_stats(user_id, record.type)
        logger.info("Health record created: %s for user %s", record.id, user_id)
        return record

    def list_records(self, user_id: str, limit: int = 20, offset: int = 0) -> List[HealthRecord]:
        records = []
        for record_id in self.store.range_index(user_id, offset=offset, count=limit):
            record = self.store.get_record(user_id, record_id)
            if record is not None:
                records.append(record)
        return records

    def delete(self, user_id: str, record_id: str) -> None:
        """Idempotent: an unknown id is a no-op for the user's other records."""
        record = self.store.get_record(user_id, record_id)
        self.store.delete_record(user_id, record_id)
        self.store.remove_from_index(user_id, record_id)
        if record is not None:
            self.store.invalidate_stats(user_id, record.type)
        logger.info("Health record deleted: %s for user %s", record_id, user_id)
