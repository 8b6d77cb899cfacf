"""
Record store backed by Redis.

Keys:
    user:<email>                     user JSON
    health:<userID>:<recordID>       health record JSON
    health:<userID>:list             record ids, newest first
    health:<userID>:stats:<type>     cached HealthStats JSON

Single-key writes are atomic; multi-key sequences are not.
"""

import logging
from typing import List, Optional

import redis
from pydantic import ValidationError as SchemaError

from ..core.errors import StoreError
from ..schemas import HealthRecord, HealthRecordType, HealthStats, UserRecord

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 100


def user_key(email: str) -> str:
    return f"user:{email.lower()}"


def record_key(user_id: str, record_id: str) -> str:
    return f"health:{user_id}:{record_id}"


def index_key(user_id: str) -> str:
    return f"health:{user_id}:list"


def stats_key(user_id: str, record_type: str) -> str:
    return f"health:{user_id}:stats:{HealthRecordType(record_type).value}"


class RecordStore:
    def __init__(self, client: redis.Redis):
        self._client = client

    def ping(self) -> bool:
        try:
            return bool(self._client.ping())
        except redis.RedisError:
            return False

    # Users --------------------------------------------------------------------
    def put_user(self, user: UserRecord, ttl: int) -> None:
        try:
            self._client.set(user_key(user.email), user.model_dump_json(), ex=ttl)
        except redis.RedisError as exc:
            raise StoreError("Failed to store user") from exc

    def create_user(self, user: UserRecord, ttl: int) -> bool:
        """Write the user only if the email is free. Returns False when it is taken."""
        try:
            created = self._client.set(user_key(user.email), user.model_dump_json(), ex=ttl, nx=True)
        except redis.RedisError as exc:
            raise StoreError("Failed to store user") from exc
        return bool(created)

    def user_exists(self, email: str) -> bool:
        try:
            return bool(self._client.exists(user_key(email)))
        except redis.RedisError as exc:
            raise StoreError("Failed to look up user") from exc

    def get_user(self, email: str) -> Optional[UserRecord]:
        try:
            raw = self._client.get(user_key(email))
        except redis.RedisError as exc:
            raise StoreError("Failed to look up user") from exc
        if raw is None:
            return None
        try:
            return UserRecord.model_validate_json(raw)
        except SchemaError as exc:
            raise StoreError("Stored user is unreadable") from exc

    # Health records -----------------------------------------------------------
    def put_record(self, record: HealthRecord, ttl: int) -> None:
        try:
            self._client.set(record_key(record.user_id, record.id), record.model_dump_json(), ex=ttl)
        except redis.RedisError as exc:
            raise StoreError("Failed to store record") from exc

    def get_record(self, user_id: str, record_id: str) -> Optional[HealthRecord]:
        try:
            raw = self._client.get(record_key(user_id, record_id))
        except redis.RedisError as exc:
            raise StoreError("Failed to load record") from exc
        if raw is None:
            return None
        try:
            return HealthRecord.model_validate_json(raw)
        except SchemaError:
            logger.warning("Skipping unreadable record %s for user %s", record_id, user_id)
            return None

    def delete_record(self, user_id: str, record_id: str) -> bool:
        try:
            return bool(self._client.delete(record_key(user_id, record_id)))
        except redis.RedisError as exc:
            raise StoreError("Failed to delete record") from exc

    # Index --------------------------------------------------------------------
    def append_to_index(self, user_id: str, record_id: str, ttl: int) -> None:
        key = index_key(user_id)
        try:
            self._client.lpush(key, record_id)
            self._client.expire(key, ttl)
        except redis.RedisError as exc:
            raise StoreError("Failed to index record") from exc

    def remove_from_index(self, user_id: str, record_id: str) -> None:
        try:
            self._client.lrem(index_key(user_id), 1, record_id)
        except redis.RedisError as exc:
            raise StoreError("Failed to unindex record") from exc

    def range_index(self, user_id: str, offset: int = 0, count: int = 20) -> List[str]:
        """Newest-first slice of the user's record ids, at most MAX_PAGE_SIZE long."""
        count = max(1, min(count, MAX_PAGE_SIZE))
        offset = max(0, offset)
        try:
            return list(self._client.lrange(index_key(user_id), offset, offset + count - 1))
        except redis.RedisError as exc:
            raise StoreError("Failed to read record index") from exc

    def full_index(self, user_id: str) -> List[str]:
        try:
            return list(self._client.lrange(index_key(user_id), 0, -1))
        except redis.RedisError as exc:
            raise StoreError("Failed to read record index") from exc

    # Stats cache --------------------------------------------------------------
    def get_cached_stats(self, user_id: str, record_type: str) -> Optional[HealthStats]:
        try:
            raw = self._client.get(stats_key(user_id, record_type))
        except redis.RedisError as exc:
            raise StoreError("Failed to read stats cache") from exc
        if raw is None:
            return None
        try:
            return HealthStats.model_validate_json(raw)
        except SchemaError:
            logger.warning("Discarding unreadable stats cache entry for user %s", user_id)
            return None

    def put_cached_stats(self, stats: HealthStats, ttl: int) -> None:
        try:
            self._client.set(stats_key(stats.user_id, stats.type), stats.model_dump_json(), ex=ttl)
        except redis.RedisError as exc:
            raise StoreError("Failed to write stats cache") from exc

    def invalidate_stats(self, user_id: str, record_type: str) -> None:
        try:
            self._client.delete(stats_key(user_id, record_type))
        except redis.RedisError as exc:
            raise StoreError("Failed to invalidate stats cache") from exc
