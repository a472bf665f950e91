"""Shared validators for btx request schemas."""

import re

from pydantic import SecretStr

from btx.models.constants import (
    BASE58_ADDRESS_PATTERN,
    BECH32_ADDRESS_PATTERN,
    HEX64_PATTERN,
    MAX_ADDRESS_LENGTH,
    MAX_PASSPHRASE_LENGTH,
    MIN_ADDRESS_LENGTH,
    WALLET_NAME_PATTERN,
)

_WALLET_NAME_RE = re.compile(WALLET_NAME_PATTERN)
_HEX64_RE = re.compile(HEX64_PATTERN)
_BASE58_RE = re.compile(BASE58_ADDRESS_PATTERN)
_BECH32_RE = re.compile(BECH32_ADDRESS_PATTERN)


def validate_wallet_name(v: str) -> str:
    """Validate a wallet name: 1-64 of ``[a-zA-Z0-9._-]``, not ``.``/``..``,
    not starting with ``-`` and not ending with ``-`` or ``.``."""
    if not _WALLET_NAME_RE.match(v):
        raise ValueError(f"Invalid wallet name: {v!r}")
    return v


def validate_hex64(v: str) -> str:
    """Validate a 64-character hex string (txid, block hash)."""
    if not _HEX64_RE.match(v):
        raise ValueError(f"Expected 64 hex characters, got: {v!r}")
    return v


def validate_address(v: str) -> str:
    """Validate the shape of a base58 or bech32 address (no checksum verification)."""
    if not MIN_ADDRESS_LENGTH <= len(v) <= MAX_ADDRESS_LENGTH:
        raise ValueError(
            f"Address must be {MIN_ADDRESS_LENGTH}-{MAX_ADDRESS_LENGTH} characters, got {len(v)}"
        )
    if not (_BASE58_RE.match(v) or _BECH32_RE.match(v)):
        raise ValueError(f"Invalid address format: {v!r}")
    return v


def validate_passphrase(v: SecretStr) -> SecretStr:
    """Validate a wallet passphrase length (1-1024 characters)."""
    length = len(v.get_secret_value())
    if not 1 <= length <= MAX_PASSPHRASE_LENGTH:
        raise ValueError(
            f"Passphrase must be 1-{MAX_PASSPHRASE_LENGTH} characters, got {length}"
        )
    return v
