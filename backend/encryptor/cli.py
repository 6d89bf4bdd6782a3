#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Operator CLI for the field encryptor.
# - Seals or opens a single value with AES-256-GCM.
# - Reads defaults from ENV: ENCRYPTOR_KEY (hex), ENCRYPTOR_BACKEND (sync|async).
# - You can also pass values via CLI flags to override ENV.
#
# Exit codes:
#   0  - success, result on STDOUT
#   1  - failure, error kind on STDERR
#
# Log lines always go to STDERR so STDOUT carries nothing but the result.
#
# Usage examples:
#   export ENCRYPTOR_KEY="$(openssl rand -hex 32)"
#   encryptor encrypt --text "4111 1111 1111 1111"
#   echo "$ENVELOPE" | encryptor decrypt

import os
import sys
import asyncio
import argparse
from typing import Optional

from .errors import EncryptorError
from .facade import Encryptor
from .logging_config import setup_logging
from .settings import Settings


def read_key_file(path: Optional[str]) -> Optional[str]:
    """Read hex key material from a file (e.g. a mounted secret)."""
    if not path:
        return None
    with open(path, "r", encoding="utf-8") as f:
        return f.read().strip()


async def _run(settings: Settings, command: str, value: str) -> str:
    enc = await Encryptor.create(settings)
    if command == "encrypt":
        return await enc.encrypt(value)
    return await enc.decrypt(value)


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Encrypt or decrypt a value (AES-256-GCM envelope).")
    parser.add_argument("command", choices=("encrypt", "decrypt"))
    parser.add_argument("--text", "-t", help="Plaintext or envelope; if omitted, read from STDIN", default=None)
    parser.add_argument("--backend", help="sync or async. Default from $ENCRYPTOR_BACKEND or sync.",
                        default=os.getenv("ENCRYPTOR_BACKEND", "sync"))
    parser.add_argument("--key-file", help="Path to hex key file. Overrides $ENCRYPTOR_KEY.", default=None)
    parser.add_argument("--log-level", default=os.getenv("LOG_LEVEL", "WARNING"))
    args = parser.parse_args(argv)

    setup_logging(args.log_level, stream=sys.stderr)

    if args.text is not None:
        value = args.text
    else:
        value = sys.stdin.read()
        if value.endswith("\n"):
            value = value[:-1]
    if args.command == "decrypt":
        # envelopes never contain whitespace
        value = value.strip()

    try:
        key = read_key_file(args.key_file) if args.key_file else os.getenv("ENCRYPTOR_KEY")
    except OSError as e:
        print(f"ERR: cannot read key file: {e.strerror}", file=sys.stderr)
        return 1

    try:
        settings = Settings(encryptor_key=key, backend=args.backend.strip().lower())
        result = asyncio.run(_run(settings, args.command, value))
    except EncryptorError as e:
        print(f"ERR: {e.kind}: {e}", file=sys.stderr)
        return 1

    print(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
