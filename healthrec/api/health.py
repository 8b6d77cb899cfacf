import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from ..core.errors import ValidationError
from ..schemas import HealthRecord, HealthRecordCreate, HealthRecordType, HealthStats, MessageResponse
from ..services.records import HealthRecordService
from ..services.stats import StatsAggregator
from .deps import Identity, get_record_service, get_stats_aggregator, require_identity

router = APIRouter(prefix="/health", tags=["health"])
log = logging.getLogger(__name__)


@router.post("", response_model=HealthRecord, status_code=status.HTTP_201_CREATED)
def create_health_record(
    payload: HealthRecordCreate,
    identity: Identity = Depends(require_identity),
    records: HealthRecordService = Depends(get_record_service),
):
    return records.create(identity.user_id, payload)


@router.get("", response_model=List[HealthRecord])
def list_health_records(
    response: Response,
    limit: int = Query(default=20, ge=1, description="Page size, capped at 100"),
    offset: int = Query(default=0, ge=0),
    identity: Identity = Depends(require_identity),
    records: HealthRecordService = Depends(get_record_service),
):
    items = records.list_records(identity.user_id, limit=limit, offset=offset)
    response.headers["X-Total-Count"] = str(len(items))
    return items


@router.get("/stats", response_model=HealthStats)
def get_health_stats(
    response: Response,
    record_type: Optional[str] = Query(default=None, alias="type"),
    identity: Identity = Depends(require_identity),
    stats: StatsAggregator = Depends(get_stats_aggregator),
):
    if not record_type:
        raise ValidationError("Missing 'type' parameter")
    try:
        kind = HealthRecordType(record_type)
    except ValueError:
        raise ValidationError(f"Unknown record type '{record_type}'")
    result = stats.get_stats(identity.user_id, kind)
    response.headers["X-Cache"] = "HIT" if result.cache_hit else "MISS"
    return result.stats


@router.delete("", response_model=MessageResponse)
def delete_health_record(
    record_id: Optional[str] = Query(default=None, alias="id"),
    identity: Identity = Depends(require_identity),
    records: HealthRecordService = Depends(get_record_service),
):
    if not record_id:
        raise ValidationError("Missing 'id' parameter")
    records.delete(identity.user_id, record_id)
    return MessageResponse(message="Record deleted successfully")
