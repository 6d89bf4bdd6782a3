# encryptor/engines.py
"""
AES-256-GCM engines.

Both variants take the key at construction and produce byte-identical
envelopes, so ciphertexts are interchangeable whichever backend sealed them.
"""
import asyncio
import logging
import secrets
from typing import Optional, Protocol

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from .constants import IV_LENGTH_BYTES, TAG_LENGTH_BYTES
from .envelope import Envelope
from .errors import ConfigError, CryptoError, InputError, KeyNotReady
from .keys import MasterKey

logger = logging.getLogger(__name__)


class CipherEngine(Protocol):
    name: str

    @property
    def ready(self) -> bool: ...
    async def start(self) -> None: ...
    async def encrypt(self, plaintext: str) -> Envelope: ...
    async def decrypt(self, envelope: Envelope) -> str: ...


def _plaintext_bytes(plaintext) -> bytes:
    if not isinstance(plaintext, str) or not plaintext:
        raise InputError()
    try:
        return plaintext.encode("utf-8")
    except UnicodeEncodeError:
        # lone surrogates
        raise InputError("invalid input: text is not a well-formed string") from None


def _new_iv() -> bytes:
    return secrets.token_bytes(IV_LENGTH_BYTES)


def _split_sealed(iv: bytes, sealed: bytes) -> Envelope:
    # AESGCM appends the tag to the ciphertext
    return Envelope(iv=iv, tag=sealed[-TAG_LENGTH_BYTES:], ciphertext=sealed[:-TAG_LENGTH_BYTES])


def _open_with(aead: AESGCM, envelope: Envelope) -> str:
    try:
        pt = aead.decrypt(envelope.iv, envelope.ciphertext + envelope.tag, None)
        return pt.decode("utf-8")
    except (InvalidTag, UnicodeDecodeError, ValueError):
        raise CryptoError() from None


class SyncCipherEngine:
    """Blocking engine. Each call builds its own AESGCM context from the
    read-only key bytes, so it is safe to share across threads."""

    name = "sync"

    def __init__(self, key: MasterKey):
        self._key = key

    @property
    def ready(self) -> bool:
        return True

    def seal(self, plaintext: str) -> Envelope:
        data = _plaintext_bytes(plaintext)
        iv = _new_iv()
        sealed = AESGCM(self._key.material).encrypt(iv, data, None)
        return _split_sealed(iv, sealed)

    def open(self, envelope: Envelope) -> str:
        return _open_with(AESGCM(self._key.material), envelope)

    # The async face never suspends; it only gives callers one contract.
    async def start(self) -> None:
        return None

    async def encrypt(self, plaintext: str) -> Envelope:
        return self.seal(plaintext)

    async def decrypt(self, envelope: Envelope) -> str:
        return self.open(envelope)


class AsyncCipherEngine:
    """Suspending engine backed by one imported key handle.

    ``start()`` imports the key exactly once; concurrent starters share the
    same import. Calls made before it completes raise KeyNotReady; ``ready``
    flips only once the handle is set.
    """

    name = "async"

    def __init__(self, key: MasterKey):
        self._key = key
        self._handle: Optional[AESGCM] = None
        self._import_task: Optional[asyncio.Task] = None

    @property
    def ready(self) -> bool:
        return self._handle is not None

    async def start(self) -> None:
        if self._handle is not None:
            return
        if self._import_task is None:
            self._import_task = asyncio.ensure_future(self._import_key())
        await asyncio.shield(self._import_task)

    async def _import_key(self) -> None:
        try:
            handle = await asyncio.to_thread(AESGCM, self._key.material)
        except ValueError:
            self._import_task = None
            raise ConfigError("Failed to import master key") from None
        self._handle = handle
        logger.debug("Master key imported into AEAD handle")

    def _require_handle(self) -> AESGCM:
        if self._handle is None:
            raise KeyNotReady()
        return self._handle

    async def encrypt(self, plaintext: str) -> Envelope:
        handle = self._require_handle()
        data = _plaintext_bytes(plaintext)
        iv = _new_iv()
        sealed = await asyncio.to_thread(handle.encrypt, iv, data, None)
        return _split_sealed(iv, sealed)

    async def decrypt(self, envelope: Envelope) -> str:
        handle = self._require_handle()
        return await asyncio.to_thread(_open_with, handle, envelope)


def build_engine(backend: str, key: MasterKey) -> CipherEngine:
    if backend == "sync":
        return SyncCipherEngine(key)
    if backend == "async":
        return AsyncCipherEngine(key)
    raise ConfigError(f"Invalid backend '{backend}'. Expected 'sync' or 'async'.")
