"""Typed decoding of ``Response.result``.

The dispatcher hands back the raw JSON ``result``. Result schemas turn it into
a validated, immutable value; a reply of the wrong shape raises
``pydantic.ValidationError`` with one entry per offending field.

Result schemas ignore fields they do not declare, so replies from newer nodes
that add fields still decode.

Example:
    >>> from btx.rpc.methods import CreateWallet, CreateWalletResult
    >>> CreateWalletResult.decode({"name": "hot", "warning": ""}).name
    'hot'
    >>> outcome = call_decoded(client, CreateWallet(wallet_name="hot"), CreateWalletResult)
"""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import ConfigDict

from btx.errors import MethodError, TransportError
from btx.models.base import BTxBaseModel
from btx.rpc.classifier import Outcome
from btx.rpc.client import RPCClient
from btx.rpc.encodable import Encodable
from btx.rpc.request import Response

R = TypeVar("R", bound="ResultSchema")


class ResultSchema(BTxBaseModel):
    """Base class for decoded RPC results."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    @classmethod
    def decode(cls: type[R], result: Any) -> R:
        """Validate a raw ``Response.result``.

        Raises:
            pydantic.ValidationError: If the result does not have the expected shape
        """
        return cls.model_validate(result)


def decode_outcome(outcome: Outcome, result_type: type[R]) -> R | MethodError | TransportError:
    """Decode a Response into ``result_type``; error outcomes pass through unchanged."""
    if isinstance(outcome, Response):
        return result_type.decode(outcome.result)
    return outcome


def call_decoded(
    client: RPCClient, request: Encodable, result_type: type[R], **options: Any
) -> R | MethodError | TransportError:
    """Dispatch ``request`` and decode a successful result.

    Raises:
        pydantic.ValidationError: If an option is invalid or the result does
            not match ``result_type``
    """
    return decode_outcome(client.call(request, **options), result_type)


def call_decoded_or_raise(
    client: RPCClient, request: Encodable, result_type: type[R], **options: Any
) -> R:
    """Like :func:`call_decoded`, but raise MethodError/TransportError outcomes."""
    return result_type.decode(client.call_or_raise(request, **options).result)
