# encryptor/facade.py
import asyncio
import enum
import logging
from typing import Optional

from . import envelope as codec
from .constants import ALGORITHM
from .engines import CipherEngine, build_engine
from .errors import ConfigError, KeyNotReady
from .keys import load_master_key
from .settings import Settings

logger = logging.getLogger(__name__)


class ReadinessState(str, enum.Enum):
    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


class Encryptor:
    """The only surface the rest of the application talks to.

    ``encrypt``/``decrypt`` are coroutines whatever the backend, so call
    sites do not care which engine is configured. The instance must be
    started once; a failed start is terminal and never retried.
    """

    def __init__(self, settings: Settings):
        self._settings = settings
        self._engine: Optional[CipherEngine] = None
        self._state = ReadinessState.UNINITIALIZED
        self._start_lock = asyncio.Lock()
        self._settled = asyncio.Event()

    @classmethod
    async def create(cls, settings: Settings) -> "Encryptor":
        enc = cls(settings)
        await enc.start()
        return enc

    @property
    def state(self) -> ReadinessState:
        return self._state

    @property
    def backend(self) -> str:
        return self._settings.backend

    async def start(self) -> None:
        if self._state is ReadinessState.FAILED:
            raise ConfigError("encryptor failed to initialize")
        if self._state is ReadinessState.READY:
            return
        async with self._start_lock:
            # another starter may have finished while we waited
            if self._state is ReadinessState.FAILED:
                raise ConfigError("encryptor failed to initialize")
            if self._state is ReadinessState.READY:
                return
            self._state = ReadinessState.LOADING
            try:
                key = load_master_key(self._settings.encryptor_key)
                engine = build_engine(self._settings.backend, key)
                await engine.start()
                if not engine.ready:
                    raise ConfigError("Failed to import master key")
            except ConfigError as e:
                self._fail()
                logger.error("Encryptor initialization failed: %s", e)
                raise
            except (Exception, asyncio.CancelledError) as e:
                # waiters must be released whatever interrupted the import
                self._fail()
                logger.error("Encryptor initialization aborted: %s", type(e).__name__)
                raise
            self._engine = engine
            self._state = ReadinessState.READY
            self._settled.set()
            logger.info("Encryptor ready (alg=%s, backend=%s)", ALGORITHM, engine.name)

    def _fail(self) -> None:
        self._state = ReadinessState.FAILED
        self._settled.set()

    async def wait_ready(self) -> None:
        """Block until start() settles. Raises ConfigError if it failed."""
        await self._settled.wait()
        if self._state is ReadinessState.FAILED:
            raise ConfigError("encryptor failed to initialize")

    def _require_engine(self) -> CipherEngine:
        if self._state is ReadinessState.FAILED:
            raise ConfigError("encryptor failed to initialize")
        if self._state is not ReadinessState.READY or self._engine is None:
            raise KeyNotReady()
        return self._engine

    async def encrypt(self, plaintext: str) -> str:
        """Seal plaintext; returns ``ivHex:tagHex:cipherHex``."""
        engine = self._require_engine()
        env = await engine.encrypt(plaintext)
        return codec.encode_envelope(env)

    async def decrypt(self, wire: str) -> str:
        engine = self._require_engine()
        env = codec.decode(wire)
        return await engine.decrypt(env)
