"""ULID-based request ids.

Request ids only need to be unique per call; ULIDs give that plus a
creation-time prefix that makes daemon logs easier to correlate.
"""

from ulid import ULID

REQUEST_ID_PREFIX = "btx-"


def generate_id() -> str:
    """Generate a new 26-character ULID string."""
    return str(ULID())


def generate_request_id() -> str:
    """Generate a JSON-RPC request id of the form ``btx-<ULID>``.

    Example:
        >>> generate_request_id().startswith("btx-")
        True
    """
    return f"{REQUEST_ID_PREFIX}{generate_id()}"

