"""Shared base model, ids, constants and enums for btx."""

from btx.models.base import BTxBaseModel
from btx.models.enums import HTTP_STATUS_REASONS, MethodErrorReason, TransportErrorReason
from btx.models.ids import generate_id, generate_request_id

__all__ = [
    "BTxBaseModel",
    "HTTP_STATUS_REASONS",
    "MethodErrorReason",
    "TransportErrorReason",
    "generate_id",
    "generate_request_id",
]
