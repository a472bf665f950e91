"""Type aliases for btx.

Validated string types shared by request schemas. Each alias runs the matching
validator from btx.models.validators.
"""

from typing import Annotated, TypeAlias

from pydantic import AfterValidator, SecretStr

from btx.models.validators import (
    validate_address,
    validate_hex64,
    validate_passphrase,
    validate_wallet_name,
)

WalletName: TypeAlias = Annotated[str, AfterValidator(validate_wallet_name)]
"""Wallet name as accepted by Bitcoin Core (1-64 safe characters)"""

TxID: TypeAlias = Annotated[str, AfterValidator(validate_hex64)]
"""Transaction id (64 hex characters)"""

BlockHash: TypeAlias = Annotated[str, AfterValidator(validate_hex64)]
"""Block hash (64 hex characters)"""

Address: TypeAlias = Annotated[str, AfterValidator(validate_address)]
"""Base58 or bech32 address"""

Passphrase: TypeAlias = Annotated[SecretStr, AfterValidator(validate_passphrase)]
"""Wallet passphrase (1-1024 characters); masked in repr and logs"""

Hex64: TypeAlias = Annotated[str, AfterValidator(validate_hex64)]
"""Any 64-hex-character digest (merkle root, chain work, wtxid)"""
