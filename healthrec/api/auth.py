import logging

from fastapi import APIRouter, Depends, status

from ..schemas import AuthResponse, LoginRequest, MessageResponse, RegisterRequest, SessionInfo, UserProfile
from ..services.auth import AuthResult, AuthService
from .deps import Identity, get_auth_service, require_identity

router = APIRouter(prefix="/auth", tags=["auth"])
log = logging.getLogger(__name__)


def _to_response(result: AuthResult) -> AuthResponse:
    return AuthResponse(
        token=result.token,
        expires_in=result.expires_in,
        user=UserProfile.model_validate(result.user, from_attributes=True),
    )


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest, auth: AuthService = Depends(get_auth_service)):
    result = auth.register(email=payload.email, password=payload.password, full_name=payload.full_name)
    return _to_response(result)


@router.post("/login", response_model=AuthResponse)
def login(payload: LoginRequest, auth: AuthService = Depends(get_auth_service)):
    result = auth.login(email=payload.email, password=payload.password)
    return _to_response(result)


@router.post("/logout", response_model=MessageResponse)
def logout(identity: Identity = Depends(require_identity)):
    # tokens are stateless; the client discards its copy
    log.info("User logged out: %s", identity.user_id)
    return MessageResponse(message="Logged out successfully")


@router.get("/me", response_model=SessionInfo)
def me(identity: Identity = Depends(require_identity)):
    return SessionInfo(user_id=identity.user_id)
