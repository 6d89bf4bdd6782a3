# encryptor/envelope.py
"""
Wire codec for sealed values.

Format: ``ivHex:tagHex:cipherHex``, lowercase hex, fields in this exact
order. IV is 24 hex chars, tag 32, ciphertext any even length >= 2.
There is no version byte, so any change here breaks stored envelopes.
"""
import re
from dataclasses import dataclass, field

from .constants import (
    IV_LENGTH_BYTES, TAG_LENGTH_BYTES,
    IV_HEX_LENGTH, TAG_HEX_LENGTH, SEPARATOR,
)
from .errors import FormatError

_HEX_RE = re.compile(r"[0-9a-fA-F]+")


@dataclass(frozen=True)
class Envelope:
    iv: bytes
    tag: bytes
    ciphertext: bytes = field(repr=False)


def encode(iv: bytes, tag: bytes, ciphertext: bytes) -> str:
    if len(iv) != IV_LENGTH_BYTES or len(tag) != TAG_LENGTH_BYTES or not ciphertext:
        raise FormatError()
    return SEPARATOR.join((iv.hex(), tag.hex(), ciphertext.hex()))


def encode_envelope(env: Envelope) -> str:
    return encode(env.iv, env.tag, env.ciphertext)


def decode(wire: str) -> Envelope:
    """Split and validate an envelope string.

    Every rejection raises the same FormatError; nothing is truncated or
    padded. Buffers are allocated per call.
    """
    if not isinstance(wire, str):
        raise FormatError()
    parts = wire.split(SEPARATOR)
    if len(parts) != 3:
        raise FormatError()
    iv_hex, tag_hex, ct_hex = parts
    if len(iv_hex) != IV_HEX_LENGTH or len(tag_hex) != TAG_HEX_LENGTH:
        raise FormatError()
    if not ct_hex or len(ct_hex) % 2:
        raise FormatError()
    if not all(_HEX_RE.fullmatch(p) for p in parts):
        raise FormatError()
    return Envelope(
        iv=bytes.fromhex(iv_hex),
        tag=bytes.fromhex(tag_hex),
        ciphertext=bytes.fromhex(ct_hex),
    )
