"""Blockchain RPC request and result schemas."""

from typing import Any, ClassVar, Literal

from pydantic import Field

from btx.models.constants import HEX8_PATTERN
from btx.models.types import BlockHash, Hex64, TxID
from btx.rpc.client import RPCClient
from btx.rpc.encodable import RequestSchema
from btx.rpc.results import ResultSchema, call_decoded_or_raise


class GetBlockCount(RequestSchema):
    """Return the height of the most-work fully-validated chain (``getblockcount``)."""

    method: ClassVar[str] = "getblockcount"


class GetBlockchainInfo(RequestSchema):
    """Return state info about blockchain processing (``getblockchaininfo``)."""

    method: ClassVar[str] = "getblockchaininfo"


class GetBlock(RequestSchema):
    """Return block data by block hash (``getblock``).

    Attributes:
        blockhash: The block hash
        verbosity: 0 for hex-encoded data, 1 for a JSON object, 2 for a JSON
            object with transaction data (daemon default: 1)
    """

    method: ClassVar[str] = "getblock"
    params_order: ClassVar[tuple[str, ...]] = ("blockhash", "verbosity")

    blockhash: BlockHash
    verbosity: Literal[0, 1, 2] | None = None


class GetMempoolEntry(RequestSchema):
    """Return mempool data for a given transaction (``getmempoolentry``)."""

    method: ClassVar[str] = "getmempoolentry"
    params_order: ClassVar[tuple[str, ...]] = ("txid",)

    txid: TxID


# Results


class GetBlockchainInfoResult(ResultSchema):
    """Result of ``getblockchaininfo``.

    Every field is optional: the reply shape changed across node versions.
    ``warnings`` is a string on older nodes and a list on newer ones.
    """

    chain: str | None = None
    blocks: int | None = Field(default=None, ge=0)
    headers: int | None = Field(default=None, ge=0)
    bestblockhash: BlockHash | None = None
    difficulty: float | None = Field(default=None, ge=0)
    mediantime: int | None = Field(default=None, ge=0)
    verificationprogress: float | None = Field(default=None, ge=0, le=1)
    initialblockdownload: bool | None = None
    chainwork: Hex64 | None = None
    size_on_disk: int | None = Field(default=None, ge=0)
    pruned: bool | None = None
    pruneheight: int | None = Field(default=None, ge=0)
    automatic_pruning: bool | None = None
    prune_target_size: int | None = Field(default=None, ge=0)
    softforks: dict[str, Any] | None = None
    warnings: str | list[str] | None = None


class GetBlockResult(ResultSchema):
    """Result of ``getblock`` with verbosity 1 (transactions as txids)."""

    hash: BlockHash | None = None
    confirmations: int | None = None
    size: int | None = Field(default=None, gt=0)
    strippedsize: int | None = Field(default=None, gt=0)
    weight: int | None = Field(default=None, gt=0)
    height: int | None = Field(default=None, ge=0)
    version: int | None = None
    version_hex: str | None = Field(default=None, alias="versionHex", pattern=HEX8_PATTERN)
    merkleroot: Hex64 | None = None
    tx: list[TxID] = Field(default_factory=list)
    time: int | None = Field(default=None, ge=0)
    mediantime: int | None = Field(default=None, ge=0)
    nonce: int | None = Field(default=None, ge=0)
    bits: str | None = Field(default=None, pattern=HEX8_PATTERN)
    difficulty: float | None = Field(default=None, ge=0)
    chainwork: Hex64 | None = None
    n_tx: int | None = Field(default=None, alias="nTx", ge=0)
    previousblockhash: BlockHash | None = None
    nextblockhash: BlockHash | None = None


class MempoolEntryFees(ResultSchema):
    """Fee breakdown of a mempool entry, in BTC."""

    base: float = Field(..., ge=0)
    modified: float = Field(..., ge=0)
    ancestor: float = Field(..., ge=0)
    descendant: float = Field(..., ge=0)


class GetMempoolEntryResult(ResultSchema):
    """Result of ``getmempoolentry``."""

    vsize: int = Field(..., gt=0)
    weight: int = Field(..., gt=0)
    time: int = Field(..., gt=0)
    height: int = Field(..., ge=0)
    descendantcount: int = Field(..., gt=0)
    descendantsize: int = Field(..., gt=0)
    ancestorcount: int = Field(..., gt=0)
    ancestorsize: int = Field(..., gt=0)
    wtxid: Hex64
    fees: MempoolEntryFees | None = None
    depends: list[TxID] = Field(default_factory=list)
    spentby: list[TxID] = Field(default_factory=list)
    bip125_replaceable: bool | None = Field(default=None, alias="bip125-replaceable")
    unbroadcast: bool | None = None


def get_blockchain_info(client: RPCClient, **options: Any) -> GetBlockchainInfoResult:
    """Call ``getblockchaininfo`` and decode the reply."""
    return call_decoded_or_raise(client, GetBlockchainInfo(), GetBlockchainInfoResult, **options)


def get_block(client: RPCClient, blockhash: str, **options: Any) -> GetBlockResult:
    """Fetch a block as a JSON object (verbosity 1) and decode it."""
    request = GetBlock(blockhash=blockhash, verbosity=1)
    return call_decoded_or_raise(client, request, GetBlockResult, **options)


def get_mempool_entry(client: RPCClient, txid: str, **options: Any) -> GetMempoolEntryResult:
    """Call ``getmempoolentry`` for ``txid`` and decode the reply."""
    request = GetMempoolEntry(txid=txid)
    return call_decoded_or_raise(client, request, GetMempoolEntryResult, **options)
