"""Raw transaction RPC request schemas."""

from typing import ClassVar

from pydantic import Field

from btx.models.types import BlockHash, TxID
from btx.rpc.encodable import RequestSchema


class GetRawTransaction(RequestSchema):
    """Return raw transaction data (``getrawtransaction``).

    Without ``blockhash`` this only finds mempool transactions, or any
    transaction when the node runs with ``-txindex``.

    Attributes:
        txid: The transaction id
        verbose: Return a JSON object instead of hex data
        blockhash: The block in which to look for the transaction
    """

    method: ClassVar[str] = "getrawtransaction"
    params_order: ClassVar[tuple[str, ...]] = ("txid", "verbose", "blockhash")

    txid: TxID
    verbose: bool | None = None
    blockhash: BlockHash | None = None


class SendRawTransaction(RequestSchema):
    """Submit a serialized, hex-encoded transaction (``sendrawtransaction``).

    Attributes:
        hexstring: The raw transaction
        maxfeerate: Reject transactions with a higher fee rate, in BTC/kvB;
            0 accepts any fee rate (daemon default: 0.10)
    """

    method: ClassVar[str] = "sendrawtransaction"
    params_order: ClassVar[tuple[str, ...]] = ("hexstring", "maxfeerate")

    hexstring: str = Field(..., min_length=2, pattern=r"^([a-fA-F0-9]{2})+$")
    maxfeerate: float | None = Field(default=None, ge=0)
