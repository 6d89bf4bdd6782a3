# encryptor/constants.py
ALGORITHM = "AES-256-GCM"
KEY_LENGTH_BYTES = 32  # AES-256
IV_LENGTH_BYTES = 12   # 96-bit IV for GCM
TAG_LENGTH_BYTES = 16  # 128-bit auth tag

SEPARATOR = ":"
IV_HEX_LENGTH = IV_LENGTH_BYTES * 2
TAG_HEX_LENGTH = TAG_LENGTH_BYTES * 2

BACKENDS = ("sync", "async")
