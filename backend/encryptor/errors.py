# encryptor/errors.py
"""
Error taxonomy for the encryptor.

Messages are deliberately generic: callers learn the kind of failure,
never which structural or cryptographic check tripped.
"""


class EncryptorError(Exception):
    """Base class for every failure raised by this package."""
    kind = "encryptor_error"
    default_message = "operation failed"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)


class ConfigError(EncryptorError):
    """Master key missing or malformed, or an unknown backend was requested."""
    kind = "config_error"
    default_message = "invalid encryptor configuration"


class KeyNotReady(EncryptorError):
    """Called before the key import finished. Safe to retry after a backoff."""
    kind = "key_not_ready"
    default_message = "master key not ready"


class InputError(EncryptorError):
    """Plaintext is empty or not a well-formed string."""
    kind = "input_error"
    default_message = "invalid input: text must be a non-empty string"


class FormatError(EncryptorError):
    """Envelope string is malformed."""
    kind = "format_error"
    default_message = "invalid encrypted data format"


class CryptoError(EncryptorError):
    """Authentication failed: data is corrupt or was tampered with."""
    kind = "crypto_error"
    default_message = "tampered or invalid data"


__all__ = [
    "EncryptorError", "ConfigError", "KeyNotReady",
    "InputError", "FormatError", "CryptoError",
]
