# encryptor/keys.py
import re
from dataclasses import dataclass, field

from .constants import KEY_LENGTH_BYTES
from .errors import ConfigError

_HEX_RE = re.compile(r"(?:[0-9a-fA-F]{2})*")


@dataclass(frozen=True)
class MasterKey:
    """The process' single AES-256 key. Bytes are kept out of repr."""
    material: bytes = field(repr=False)

    def __post_init__(self):
        if len(self.material) != KEY_LENGTH_BYTES:
            raise ConfigError(f"Invalid master key length. Must be {KEY_LENGTH_BYTES} bytes")


def load_master_key(raw_hex) -> MasterKey:
    """Decode a 64-char hex string (e.g. ``openssl rand -hex 32``) into a MasterKey.

    ``bytes.fromhex`` tolerates inner whitespace, so the alphabet is checked
    first. Error messages never echo the value.
    """
    if not isinstance(raw_hex, str):
        raise ConfigError("ENCRYPTOR_KEY is not set (32-byte hex key required)")
    raw_hex = raw_hex.strip()
    if not raw_hex:
        raise ConfigError("ENCRYPTOR_KEY is empty (32-byte hex key required)")
    if not _HEX_RE.fullmatch(raw_hex):
        raise ConfigError("ENCRYPTOR_KEY must be hex encoded")
    return MasterKey(bytes.fromhex(raw_hex))
