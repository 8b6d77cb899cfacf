from dataclasses import dataclass
from typing import Optional

from fastapi import Header, HTTPException, Request

from ..core.errors import AuthenticationError
from ..services.auth import AuthService
from ..services.records import HealthRecordService
from ..services.stats import StatsAggregator
from ..services.tokens import TokenService

BEARER_PREFIX = "Bearer "


@dataclass(frozen=True)
class Identity:
    """Authenticated caller, produced only by token verification."""

    user_id: str


def _component(request: Request, name: str):
    component = getattr(request.app.state, name, None)
    if component is None:
        raise HTTPException(status_code=503, detail="Service not initialized")
    return component


def get_token_service(request: Request) -> TokenService:
    return _component(request, "tokens")


def get_auth_service(request: Request) -> AuthService:
    return _component(request, "auth")


def get_record_service(request: Request) -> HealthRecordService:
    return _component(request, "records")


def get_stats_aggregator(request: Request) -> StatsAggregator:
    return _component(request, "stats")


def require_identity(
    request: Request,
    authorization: Optional[str] = Header(default=None),
) -> Identity:
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        raise AuthenticationError()
    token = authorization[len(BEARER_PREFIX):].strip()
    if not token:
        raise AuthenticationError()
    user_id = get_token_service(request).verify(token)
    if user_id is None:
        raise AuthenticationError()
    return Identity(user_id=user_id)
