# encryptor/main.py
"""
HTTP surface for the field encryptor.

Run with the `server` extra installed:

    uvicorn --factory encryptor.main:create_app --host 0.0.0.0 --port 8000

Settings come from the environment (ENCRYPTOR_KEY, ENCRYPTOR_BACKEND,
API_KEY, CORS_ORIGINS, LOG_LEVEL) when no Settings object is passed.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Depends, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .auth import require_api_key
from .errors import EncryptorError, KeyNotReady
from .facade import Encryptor
from .logging_config import setup_logging
from .models import EncryptIn, EncryptOut, DecryptIn, DecryptOut, HealthOut
from .settings import Settings

logger = logging.getLogger(__name__)

# Kind -> HTTP status. Bodies stay generic whatever the kind.
STATUS_BY_KIND = {
    "input_error": 400,
    "format_error": 400,
    "crypto_error": 400,
    "key_not_ready": 503,
    "config_error": 503,
}
RETRY_AFTER_S = "1"


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings.from_env()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(settings.log_level)
        logger.info("Starting encryptor: %s", settings.describe())
        # ConfigError here is startup-fatal
        await app.state.encryptor.start()
        yield

    app = FastAPI(title="field-encryptor", lifespan=lifespan)
    app.state.settings = settings
    app.state.encryptor = Encryptor(settings)

    # ---------- CORS ----------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),  # explicit origins (no "*")
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "X-API-Key"],
    )

    # ---------- Errors ----------
    @app.exception_handler(EncryptorError)
    async def encryptor_error_handler(request: Request, exc: EncryptorError):
        logger.warning("Encryptor operation failed: kind=%s path=%s", exc.kind, request.url.path)
        headers = {"Retry-After": RETRY_AFTER_S} if isinstance(exc, KeyNotReady) else None
        return JSONResponse(
            status_code=STATUS_BY_KIND.get(exc.kind, 500),
            content={"detail": "Operation failed", "kind": exc.kind},
            headers=headers,
        )

    # ---------- Health ----------
    @app.get("/health", response_model=HealthOut)
    def health():
        enc: Encryptor = app.state.encryptor
        return {"status": "ok", "encryptor": enc.state.value, "backend": enc.backend}

    @app.get("/healthz", response_model=HealthOut)
    def healthz():
        # Alias commonly used by probes
        return health()

    # ---------- Encrypt / decrypt ----------
    @app.post("/encrypt", response_model=EncryptOut, dependencies=[Depends(require_api_key)])
    async def encrypt(payload: EncryptIn):
        envelope = await app.state.encryptor.encrypt(payload.plaintext)
        return {"envelope": envelope}

    @app.post("/decrypt", response_model=DecryptOut, dependencies=[Depends(require_api_key)])
    async def decrypt(payload: DecryptIn):
        plaintext = await app.state.encryptor.decrypt(payload.envelope)
        return {"plaintext": plaintext}

    return app


__all__ = ["create_app", "STATUS_BY_KIND"]
