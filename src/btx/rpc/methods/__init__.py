"""Typed request and result schemas for Bitcoin Core RPC methods.

Each request schema validates its fields on construction (raising
``pydantic.ValidationError``) and encodes to a positional JSON-RPC request.
Methods without a schema can be sent with :class:`~btx.rpc.encodable.RawRequest`.

Result schemas decode ``Response.result`` (see btx.rpc.results); the snake_case
helpers such as :func:`create_wallet` call and decode in one step.
"""

from btx.rpc.methods.blockchain import (
    GetBlock,
    GetBlockchainInfo,
    GetBlockchainInfoResult,
    GetBlockCount,
    GetBlockResult,
    GetMempoolEntry,
    GetMempoolEntryResult,
    MempoolEntryFees,
    get_block,
    get_blockchain_info,
    get_mempool_entry,
)
from btx.rpc.methods.mining import GenerateToAddress
from btx.rpc.methods.raw_transactions import GetRawTransaction, SendRawTransaction
from btx.rpc.methods.wallets import (
    CreateWallet,
    CreateWalletResult,
    GetBalance,
    GetNewAddress,
    GetTransaction,
    GetTransactionDetail,
    GetTransactionResult,
    ListWallets,
    LoadWallet,
    LoadWalletResult,
    SendToAddress,
    SendToAddressResult,
    UnloadWallet,
    UnloadWalletResult,
    WalletLock,
    WalletPassphrase,
    create_wallet,
    get_transaction,
    load_wallet,
    send_to_address,
    unload_wallet,
)

__all__ = [
    "CreateWallet",
    "CreateWalletResult",
    "GenerateToAddress",
    "GetBalance",
    "GetBlock",
    "GetBlockCount",
    "GetBlockResult",
    "GetBlockchainInfo",
    "GetBlockchainInfoResult",
    "GetMempoolEntry",
    "GetMempoolEntryResult",
    "GetNewAddress",
    "GetRawTransaction",
    "GetTransaction",
    "GetTransactionDetail",
    "GetTransactionResult",
    "ListWallets",
    "LoadWallet",
    "LoadWalletResult",
    "MempoolEntryFees",
    "SendRawTransaction",
    "SendToAddress",
    "SendToAddressResult",
    "UnloadWallet",
    "UnloadWalletResult",
    "WalletLock",
    "WalletPassphrase",
    "create_wallet",
    "get_block",
    "get_blockchain_info",
    "get_mempool_entry",
    "get_transaction",
    "load_wallet",
    "send_to_address",
    "unload_wallet",
]
