"""Wallet RPC request and result schemas.

Most wallet methods can be scoped to one loaded wallet. Set ``wallet_name`` on
those requests and they are posted to ``/wallet/<wallet_name>``; with several
wallets loaded, Bitcoin Core rejects unscoped calls with
``wallet_not_specified``.

``createwallet``, ``loadwallet`` and ``unloadwallet`` take the wallet name as
a regular parameter instead and always go to ``/``.

The ``create_wallet``, ``load_wallet``, ``unload_wallet``, ``send_to_address``
and ``get_transaction`` helpers call and decode in one step.

Example:
    >>> GetBalance(wallet_name="hot", minconf=6).encode().params
    ['*', 6]
    >>> GetBalance(wallet_name="hot").encode().path
    '/wallet/hot'
"""

from typing import Any, ClassVar, Literal

from pydantic import Field, model_validator

from btx.models.constants import (
    MAX_LABEL_LENGTH,
    MAX_WALLET_UNLOCK_SECONDS,
)
from btx.models.types import Address, BlockHash, Passphrase, TxID, WalletName
from btx.rpc.client import RPCClient
from btx.rpc.encodable import RequestSchema, WalletRequestSchema
from btx.rpc.results import ResultSchema, call_decoded_or_raise

AddressType = Literal["legacy", "p2sh-segwit", "bech32", "bech32m"]
EstimateMode = Literal["unset", "economical", "conservative"]
TransactionCategory = Literal["send", "receive", "generate", "immature", "orphan"]


class CreateWallet(RequestSchema):
    """Create and load a new wallet (``createwallet``).

    Attributes:
        wallet_name: Name of the new wallet
        disable_private_keys: Create a watch-only wallet
        blank: Create a wallet without keys or HD seed
        passphrase: Encrypt the wallet with this passphrase
        avoid_reuse: Keep track of coin reuse
        descriptors: Create a native descriptor wallet
        load_on_startup: Add or remove the wallet from the startup list
    """

    method: ClassVar[str] = "createwallet"
    params_order: ClassVar[tuple[str, ...]] = (
        "wallet_name",
        "disable_private_keys",
        "blank",
        "passphrase",
        "avoid_reuse",
        "descriptors",
        "load_on_startup",
    )

    wallet_name: WalletName
    disable_private_keys: bool | None = None
    blank: bool | None = None
    passphrase: Passphrase | None = None
    avoid_reuse: bool | None = None
    descriptors: bool | None = None
    load_on_startup: bool | None = None


class LoadWallet(RequestSchema):
    """Load a wallet from a wallet file or directory (``loadwallet``)."""

    method: ClassVar[str] = "loadwallet"
    params_order: ClassVar[tuple[str, ...]] = ("filename", "load_on_startup")

    filename: str = Field(..., min_length=1, max_length=255)
    load_on_startup: bool | None = None


class UnloadWallet(RequestSchema):
    """Unload a wallet (``unloadwallet``)."""

    method: ClassVar[str] = "unloadwallet"
    params_order: ClassVar[tuple[str, ...]] = ("wallet_name", "load_on_startup")

    wallet_name: WalletName
    load_on_startup: bool | None = None


class ListWallets(RequestSchema):
    """List the currently loaded wallets (``listwallets``)."""

    method: ClassVar[str] = "listwallets"


class GetNewAddress(WalletRequestSchema):
    """Return a new address for receiving payments (``getnewaddress``)."""

    method: ClassVar[str] = "getnewaddress"
    params_order: ClassVar[tuple[str, ...]] = ("label", "address_type")

    label: str | None = Field(default=None, max_length=MAX_LABEL_LENGTH)
    address_type: AddressType | None = None


class GetBalance(WalletRequestSchema):
    """Return the total available balance (``getbalance``).

    Attributes:
        dummy: Kept for backward compatibility; must be "*" when sent
        minconf: Only include transactions confirmed at least this many times
        include_watchonly: Also include balance in watch-only addresses
        avoid_reuse: Do not include balance in dirty outputs
    """

    method: ClassVar[str] = "getbalance"
    params_order: ClassVar[tuple[str, ...]] = (
        "dummy",
        "minconf",
        "include_watchonly",
        "avoid_reuse",
    )

    dummy: Literal["*"] = "*"
    minconf: int | None = Field(default=None, ge=0)
    include_watchonly: bool | None = None
    avoid_reuse: bool | None = None

    def positional_params(self) -> list[Any]:
        # The placeholder must be on the wire whenever a later param is
        params = super().positional_params()
        if params and params[0] is None:
            params[0] = self.dummy
        return params


class SendToAddress(WalletRequestSchema):
    """Send an amount to a given address (``sendtoaddress``).

    Attributes:
        address: Destination address
        amount: Amount in BTC
        comment: Wallet-local comment for the transaction
        comment_to: Wallet-local name of the recipient
        subtract_fee_from_amount: Deduct the fee from the amount sent
        replaceable: Signal BIP 125 replace-by-fee
        conf_target: Confirmation target in blocks
        estimate_mode: Fee estimate mode
        avoid_reuse: Avoid spending from dirty addresses
        fee_rate: Fee rate in sat/vB
        verbose: Return extra information about the transaction
    """

    method: ClassVar[str] = "sendtoaddress"
    params_order: ClassVar[tuple[str, ...]] = (
        "address",
        "amount",
        "comment",
        "comment_to",
        "subtract_fee_from_amount",
        "replaceable",
        "conf_target",
        "estimate_mode",
        "avoid_reuse",
        "fee_rate",
        "verbose",
    )

    address: Address
    amount: float = Field(..., gt=0)
    comment: str | None = None
    comment_to: str | None = None
    subtract_fee_from_amount: bool | None = None
    replaceable: bool | None = None
    conf_target: int | None = Field(default=None, gt=0)
    estimate_mode: EstimateMode | None = None
    avoid_reuse: bool | None = None
    fee_rate: float | None = Field(default=None, ge=0)
    verbose: bool | None = None


class GetTransaction(WalletRequestSchema):
    """Get detailed information about an in-wallet transaction (``gettransaction``)."""

    method: ClassVar[str] = "gettransaction"
    params_order: ClassVar[tuple[str, ...]] = ("txid", "include_watchonly", "verbose")

    txid: TxID
    include_watchonly: bool | None = None
    verbose: bool | None = None


class WalletPassphrase(WalletRequestSchema):
    """Unlock an encrypted wallet for ``timeout`` seconds (``walletpassphrase``)."""

    method: ClassVar[str] = "walletpassphrase"
    params_order: ClassVar[tuple[str, ...]] = ("passphrase", "timeout")

    passphrase: Passphrase
    timeout: int = Field(..., gt=0, le=MAX_WALLET_UNLOCK_SECONDS)


class WalletLock(WalletRequestSchema):
    """Remove the wallet encryption key from memory (``walletlock``)."""

    method: ClassVar[str] = "walletlock"


# Results


class CreateWalletResult(ResultSchema):
    """Result of ``createwallet``."""

    name: str
    warning: str | None = None


class LoadWalletResult(ResultSchema):
    """Result of ``loadwallet``."""

    name: str
    warning: str | None = None


class UnloadWalletResult(ResultSchema):
    """Result of ``unloadwallet``; older nodes reply with null."""

    warning: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _null_reply(cls, data: Any) -> Any:
        return {} if data is None else data


class SendToAddressResult(ResultSchema):
    """Result of ``sendtoaddress``.

    The node replies with a bare txid unless ``verbose`` was set.
    """

    txid: TxID
    fee_reason: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _bare_txid(cls, data: Any) -> Any:
        return {"txid": data} if isinstance(data, str) else data


class GetTransactionDetail(ResultSchema):
    """One entry of ``gettransaction`` ``details``."""

    category: TransactionCategory
    amount: float
    involves_watchonly: bool | None = Field(default=None, alias="involvesWatchonly")
    address: str | None = None
    label: str | None = None
    vout: int | None = Field(default=None, ge=0)
    fee: float | None = None
    abandoned: bool | None = None


class GetTransactionResult(ResultSchema):
    """Result of ``gettransaction``."""

    amount: float
    confirmations: int
    txid: TxID
    time: int = Field(..., ge=0)
    timereceived: int = Field(..., ge=0)
    hex: str
    fee: float | None = None
    generated: bool | None = None
    trusted: bool | None = None
    blockhash: BlockHash | None = None
    blockheight: int | None = Field(default=None, ge=0)
    blockindex: int | None = Field(default=None, ge=0)
    blocktime: int | None = Field(default=None, ge=0)
    walletconflicts: list[str] = Field(default_factory=list)
    comment: str | None = None
    bip125_replaceable: Literal["yes", "no", "unknown"] | None = Field(
        default=None, alias="bip125-replaceable"
    )
    details: list[GetTransactionDetail] = Field(default_factory=list)
    decoded: dict[str, Any] | None = None


# Typed calls. Each raises MethodError or TransportError for error outcomes and
# pydantic.ValidationError when the reply does not decode.


def create_wallet(client: RPCClient, request: CreateWallet, **options: Any) -> CreateWalletResult:
    return call_decoded_or_raise(client, request, CreateWalletResult, **options)


def load_wallet(client: RPCClient, request: LoadWallet, **options: Any) -> LoadWalletResult:
    return call_decoded_or_raise(client, request, LoadWalletResult, **options)


def unload_wallet(
    client: RPCClient, request: UnloadWallet, **options: Any
) -> UnloadWalletResult:
    return call_decoded_or_raise(client, request, UnloadWalletResult, **options)


def send_to_address(
    client: RPCClient, request: SendToAddress, **options: Any
) -> SendToAddressResult:
    return call_decoded_or_raise(client, request, SendToAddressResult, **options)


def get_transaction(
    client: RPCClient, request: GetTransaction, **options: Any
) -> GetTransactionResult:
    return call_decoded_or_raise(client, request, GetTransactionResult, **options)
