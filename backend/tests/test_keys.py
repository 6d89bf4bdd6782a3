# python
import pytest

from encryptor.errors import ConfigError
from encryptor.keys import MasterKey, load_master_key


def test_load_valid_key(key_hex):
    key = load_master_key(key_hex)
    assert key.material == bytes(range(32))


def test_load_accepts_uppercase_and_surrounding_whitespace(key_hex):
    key = load_master_key(f"  {key_hex.upper()}\n")
    assert key.material == bytes(range(32))


@pytest.mark.parametrize("n_bytes", [0, 16, 31, 33, 64])
def test_wrong_length_rejected(n_bytes):
    with pytest.raises(ConfigError):
        load_master_key("ab" * n_bytes)


@pytest.mark.parametrize("raw", [
    None,
    42,
    b"00" * 32,
    "zz" * 32,
    "0" * 63,
    "00 " * 32,       # fromhex would accept inner spaces
    "0x" + "00" * 31,
])
def test_malformed_key_rejected(raw):
    with pytest.raises(ConfigError):
        load_master_key(raw)


def test_error_message_never_echoes_key():
    secret = "c0ffee" * 5  # 15 bytes
    with pytest.raises(ConfigError) as ei:
        load_master_key(secret)
    assert secret not in str(ei.value)


def test_master_key_repr_hides_material(key_hex):
    key = load_master_key(key_hex)
    assert key_hex not in repr(key)
    assert "material" not in repr(key)


def test_master_key_is_immutable(key_hex):
    key = load_master_key(key_hex)
    with pytest.raises(AttributeError):
        key.material = b"\x00" * 32


def test_master_key_direct_construction_checks_length():
    with pytest.raises(ConfigError):
        MasterKey(b"\x00" * 16)
