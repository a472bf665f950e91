"""Mining RPC request schemas."""

from typing import ClassVar

from pydantic import Field

from btx.models.types import Address
from btx.rpc.encodable import RequestSchema


class GenerateToAddress(RequestSchema):
    """Mine blocks to an address immediately (``generatetoaddress``, regtest only).

    Attributes:
        nblocks: How many blocks are generated
        address: Address to send the newly generated bitcoin to
        maxtries: How many iterations to try (daemon default: 1000000)
    """

    method: ClassVar[str] = "generatetoaddress"
    params_order: ClassVar[tuple[str, ...]] = ("nblocks", "address", "maxtries")

    nblocks: int = Field(..., gt=0)
    address: Address
    maxtries: int | None = Field(default=None, gt=0)
