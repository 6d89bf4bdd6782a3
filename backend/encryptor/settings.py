# encryptor/settings.py
import os
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from .constants import BACKENDS
from .errors import ConfigError
from .masking import mask_sensitive_values

logger = logging.getLogger(__name__)

DEFAULT_CORS_ORIGINS = "http://localhost:3000"


@dataclass(frozen=True)
class Settings:
    """Process configuration, read once and passed by reference.

    The master key stays a raw string here; it is only validated and decoded
    by ``keys.load_master_key`` when an Encryptor starts, so a bad value
    surfaces as a failed initialization rather than an import-time crash.
    """
    encryptor_key: Optional[str] = field(default=None, repr=False)
    backend: str = "sync"
    api_key: str = field(default="", repr=False)
    cors_origins: tuple[str, ...] = (DEFAULT_CORS_ORIGINS,)
    log_level: str = "INFO"

    def __post_init__(self):
        if self.backend not in BACKENDS:
            raise ConfigError(
                f"Invalid ENCRYPTOR_BACKEND '{self.backend}'. Expected 'sync' or 'async'."
            )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        origins = env.get("CORS_ORIGINS", DEFAULT_CORS_ORIGINS)
        return cls(
            encryptor_key=env.get("ENCRYPTOR_KEY"),
            backend=env.get("ENCRYPTOR_BACKEND", "sync").strip().lower(),
            api_key=env.get("API_KEY", ""),
            cors_origins=tuple(o.strip() for o in origins.split(",") if o.strip()),
            log_level=env.get("LOG_LEVEL", "INFO").strip().upper(),
        )

    def describe(self) -> Dict[str, Any]:
        """Diagnostics view safe to log."""
        return mask_sensitive_values({
            "encryptor_key": self.encryptor_key,
            "backend": self.backend,
            "api_key": self.api_key,
            "cors_origins": list(self.cors_origins),
            "log_level": self.log_level,
        })
