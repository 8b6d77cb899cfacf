import logging
import os
import sys
from contextlib import asynccontextmanager
from typing import Optional

import redis
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api import auth, health
from .api.limits import BodySizeLimitMiddleware
from .core.config import Settings
from .core.errors import StoreError, register_error_handlers
from .repositories import kv
from .repositories.store import RecordStore
from .services.auth import AuthService
from .services.passwords import PasswordHasher
from .services.records import HealthRecordService
from .services.stats import StatsAggregator
from .services.tokens import TokenService

logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s")
log = logging.getLogger(__name__)

if hasattr(sys.stdout, "reconfigure"):
    sys.stdout.reconfigure(encoding="utf-8")
if hasattr(sys.stderr, "reconfigure"):
    sys.stderr.reconfigure(encoding="utf-8")

API_PREFIX = "/api/v1"


def _log_security_status(settings: Settings) -> None:
    if settings.uses_insecure_secret:
        log.warning("JWT_SECRET is not set; using the insecure placeholder secret")
    log.info(
        "Security: https_required=%s max_body=%d bytes token_ttl=%ds bcrypt_rounds=%d origins=%s",
        settings.require_https,
        settings.max_request_body_size,
        settings.token_ttl_seconds,
        settings.bcrypt_rounds,
        ",".join(settings.allowed_origins),
    )


def create_app(settings: Optional[Settings] = None, client: Optional[redis.Redis] = None) -> FastAPI:
    """Build the app. ``client`` overrides the Redis connection built from settings."""
    settings = settings or Settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        try:
            kv_client = client if client is not None else kv.create_client(settings)
            store = RecordStore(kv_client)
            if not store.ping():
                raise StoreError("Key-value store unreachable")
            log.info("Key-value store reachable")
            tokens = TokenService(settings.jwt_secret, ttl_seconds=settings.token_ttl_seconds)
            app.state.tokens = tokens
            app.state.auth = AuthService(
                store,
                PasswordHasher(rounds=settings.bcrypt_rounds),
                tokens,
                user_ttl_seconds=settings.user_ttl_seconds,
            )
            app.state.records = HealthRecordService(store, ttl_seconds=settings.record_ttl_seconds)
            app.state.stats = StatsAggregator(store, ttl_seconds=settings.stats_ttl_seconds)
            _log_security_status(settings)
        except Exception:  # pragma: no cover
            log.exception("Startup error")
            raise
        yield
        if client is None:
            kv_client.close()

    app = FastAPI(title=settings.app_name, version=settings.app_version, lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )
    app.add_middleware(BodySizeLimitMiddleware, max_body_size=settings.max_request_body_size)

    register_error_handlers(app)

    @app.get("/health")
    def liveness() -> dict:
        return {"status": "ok"}

    app.include_router(auth.router, prefix=API_PREFIX)
    app.include_router(health.router, prefix=API_PREFIX)
    return app


def run() -> None:
    uvicorn.run(
        create_app,
        factory=True,
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
    )


if __name__ == "__main__":
    run()
