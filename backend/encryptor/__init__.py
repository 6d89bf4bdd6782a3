"""
AES-256-GCM field encryptor.

Seals sensitive values into ``ivHex:tagHex:cipherHex`` envelopes before they
are persisted or transmitted, with a synchronous or an async backend behind
one coroutine-based facade.
"""
from .errors import EncryptorError, ConfigError, KeyNotReady, InputError, FormatError, CryptoError
from .facade import Encryptor, ReadinessState
from .settings import Settings

__version__ = "0.1.0"

__all__ = [
    "Encryptor", "ReadinessState", "Settings",
    "EncryptorError", "ConfigError", "KeyNotReady", "InputError", "FormatError", "CryptoError",
]
