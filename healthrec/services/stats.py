"""
Cache-first min/max/average/count over one user's records of one type.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.errors import StoreError
from ..repositories.store import RecordStore
from ..schemas import HealthRecordType, HealthStats

logger = logging.getLogger(__name__)

DEFAULT_STATS_TTL = 3600


@dataclass
class StatsResult:
    stats: HealthStats
    cache_hit: bool


class StatsAggregator:
    def __init__(self, store: RecordStore, ttl_seconds: int = DEFAULT_STATS_TTL):
        self.store = store
        self.ttl_seconds = ttl_seconds

    def get_stats(self, user_id: str, record_type: HealthRecordType) -> StatsResult:
        record_type = HealthRecordType(record_type)
        try:
            cached = self.store.get_cached_stats(user_id, record_type)
        except StoreError:
            logger.warning("Stats cache read failed for user %s; recomputing", user_id, exc_info=True)
            cached = None
        if cached is not None:
            return StatsResult(stats=cached, cache_hit=True)

        stats = self.compute(user_id, record_type)
        if stats.count > 0:
            try:
                self.store.put_cached_stats(stats, self.ttl_seconds)
            except StoreError:
                logger.warning("Stats cache write failed for user %s", user_id, exc_info=True)
        return StatsResult(stats=stats, cache_hit=False)

    def compute(self, user_id: str, record_type: HealthRecordType) -> HealthStats:
        """Scan every indexed record; the listing page cap does not apply here."""
        count = 0
        total = 0.0
        low: Optional[float] = None
        high: Optional[float] = None
        last: Optional[datetime] = None

        for record_id in self.store.full_index(user_id):
            record = self.store.get_record(user_id, record_id)
            if record is None or record.type != record_type:
                continue
            count += 1
            total += record.value
            if low is None or record.value < low:
                low = record.value
            if high is None or record.value > high:
                high = record.value
            if last is None or record.recorded_at > last:
                last = record.recorded_at

        if count == 0:
            return HealthStats(user_id=user_id, type=record_type)
        return HealthStats(
            user_id=user_id,
            type=record_type,
            count=count,
            average=total / count,
            min=low,
            max=high,
            last_record=last,
        )
