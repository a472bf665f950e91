"""Encoding capability: how a typed request becomes a wire Request.

The dispatcher only knows the ``Encodable`` protocol: a ``method`` name and an
``encode()`` returning a :class:`~btx.rpc.request.Request`. Request schemas
built on :class:`RequestSchema` get ``encode`` for free by declaring their
positional parameters in order.

Two wire rules live here:

- Bitcoin Core params are positional. Optional parameters the caller did not
  supply are dropped from the tail of the list; a missing parameter that is
  followed by a supplied one is sent as ``null``.
- Requests naming a wallet go to ``/wallet/<name>``, everything else to ``/``.

Example:
    >>> trim_params(["*", None, True, None, None])
    ['*', None, True]
    >>> wallet_path("hot")
    '/wallet/hot'
    >>> wallet_path(None)
    '/'
"""

from collections.abc import Sequence
from typing import Any, ClassVar, Protocol, runtime_checkable
from urllib.parse import quote

from pydantic import Field, SecretStr

from btx.models.base import BTxBaseModel
from btx.models.constants import ROOT_PATH, WALLET_PATH_PREFIX
from btx.models.types import WalletName
from btx.rpc.request import Request


@runtime_checkable
class Encodable(Protocol):
    """Anything the dispatcher can send."""

    @property
    def method(self) -> str: ...

    def encode(self) -> Request: ...


def trim_params(values: Sequence[Any]) -> list[Any]:
    """Drop absent (``None``) values from the tail of a positional param list.

    ``None`` values before the last present value are kept and go on the wire
    as ``null`` placeholders.
    """
    end = len(values)
    while end and values[end - 1] is None:
        end -= 1
    return list(values[:end])


def wallet_path(wallet_name: str | None) -> str:
    """Return the endpoint path for a request, scoped to ``wallet_name`` if given."""
    if not wallet_name:
        return ROOT_PATH
    return f"{WALLET_PATH_PREFIX}{quote(wallet_name, safe='')}"


class RequestSchema(BTxBaseModel):
    """Base class for typed request schemas.

    Subclasses set ``method`` and list their positional parameters in
    ``params_order``. A parameter counts as supplied when the caller set it
    explicitly and it is not ``None``; unsupplied trailing parameters are left
    off the wire, so the daemon applies its own defaults.

    Example:
        >>> class GetBlockHash(RequestSchema):
        ...     method: ClassVar[str] = "getblockhash"
        ...     params_order: ClassVar[tuple[str, ...]] = ("height",)
        ...     height: int
        >>> GetBlockHash(height=0).encode().params
        [0]
    """

    method: ClassVar[str]
    params_order: ClassVar[tuple[str, ...]] = ()

    @property
    def path(self) -> str:
        return ROOT_PATH

    def positional_params(self) -> list[Any]:
        values = [
            getattr(self, name) if name in self.model_fields_set else None
            for name in self.params_order
        ]
        return trim_params([self._param_value(value) for value in values])

    @staticmethod
    def _param_value(value: Any) -> Any:
        if isinstance(value, SecretStr):
            return value.get_secret_value()
        if isinstance(value, BTxBaseModel):
            return value.model_dump(exclude_none=True, by_alias=True)
        if isinstance(value, list):
            return [RequestSchema._param_value(item) for item in value]
        return value

    def encode(self) -> Request:
        return Request(method=self.method, params=self.positional_params(), path=self.path)


class WalletRequestSchema(RequestSchema):
    """Request schema for methods that can be scoped to a loaded wallet.

    When ``wallet_name`` is set the request is posted to ``/wallet/<name>``;
    the wallet name itself is never part of ``params``.
    """

    wallet_name: WalletName | None = None

    @property
    def path(self) -> str:
        return wallet_path(self.wallet_name)


class RawRequest(BTxBaseModel):
    """Escape hatch for RPC methods that have no schema.

    ``params`` are sent exactly as given (no trimming).

    Example:
        >>> RawRequest(method="getblockhash", params=[0]).encode().params
        [0]
    """

    method: str = Field(min_length=1)
    params: list[Any] = Field(default_factory=list)
    wallet_name: WalletName | None = None

    def encode(self) -> Request:
        return Request(
            method=self.method,
            params=list(self.params),
            path=wallet_path(self.wallet_name),
        )
