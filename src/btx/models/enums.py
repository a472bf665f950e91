"""Enumerations for the btx error taxonomy.

Reason tags are plain strings on the wire side (str, Enum) so they compare
equal to their values and serialize without extra work.
"""

from enum import Enum


class MethodErrorReason(str, Enum):
    """Semantic tag for a Bitcoin Core RPC error code.

    Mirrors the ``RPCErrorCode`` enumeration of Bitcoin Core
    (src/rpc/protocol.h). Use :meth:`from_code` to map a code.

    Example:
        >>> MethodErrorReason.from_code(-18)
        <MethodErrorReason.WALLET_NOT_FOUND: 'wallet_not_found'>
        >>> MethodErrorReason.from_code(12345)
        <MethodErrorReason.UNKNOWN_ERROR: 'unknown_error'>
    """

    # Standard JSON-RPC 2.0 errors
    INVALID_REQUEST = "invalid_request"
    METHOD_NOT_FOUND = "method_not_found"
    INVALID_PARAMS = "invalid_params"
    INTERNAL_ERROR = "internal_error"
    PARSE_ERROR = "parse_error"

    # General application defined errors
    MISC_ERROR = "misc_error"
    TYPE_ERROR = "type_error"
    INVALID_ADDRESS_OR_KEY = "invalid_address_or_key"
    OUT_OF_MEMORY = "out_of_memory"
    INVALID_PARAMETER = "invalid_parameter"
    DATABASE_ERROR = "database_error"
    DESERIALIZATION_ERROR = "deserialization_error"
    VERIFY_ERROR = "verify_error"
    VERIFY_REJECTED = "verify_rejected"
    VERIFY_ALREADY_IN_UTXO_SET = "verify_already_in_utxo_set"
    IN_WARMUP = "in_warmup"
    METHOD_DEPRECATED = "method_deprecated"

    # P2P client errors
    CLIENT_NOT_CONNECTED = "client_not_connected"
    CLIENT_IN_INITIAL_DOWNLOAD = "client_in_initial_download"
    CLIENT_NODE_ALREADY_ADDED = "client_node_already_added"
    CLIENT_NODE_NOT_ADDED = "client_node_not_added"
    CLIENT_NODE_NOT_CONNECTED = "client_node_not_connected"
    CLIENT_INVALID_IP_OR_SUBNET = "client_invalid_ip_or_subnet"
    CLIENT_P2P_DISABLED = "client_p2p_disabled"
    CLIENT_NODE_CAPACITY_REACHED = "client_node_capacity_reached"

    # Chain errors
    CLIENT_MEMPOOL_DISABLED = "client_mempool_disabled"

    # Wallet errors
    WALLET_ERROR = "wallet_error"
    WALLET_INSUFFICIENT_FUNDS = "wallet_insufficient_funds"
    WALLET_INVALID_LABEL_NAME = "wallet_invalid_label_name"
    WALLET_KEYPOOL_RAN_OUT = "wallet_keypool_ran_out"
    WALLET_UNLOCK_NEEDED = "wallet_unlock_needed"
    WALLET_PASSPHRASE_INCORRECT = "wallet_passphrase_incorrect"
    WALLET_WRONG_ENC_STATE = "wallet_wrong_enc_state"
    WALLET_ENCRYPTION_FAILED = "wallet_encryption_failed"
    WALLET_ALREADY_UNLOCKED = "wallet_already_unlocked"
    WALLET_NOT_FOUND = "wallet_not_found"
    WALLET_NOT_SPECIFIED = "wallet_not_specified"
    WALLET_ALREADY_LOADED = "wallet_already_loaded"
    WALLET_ALREADY_EXISTS = "wallet_already_exists"

    # Backwards compatible aliases
    FORBIDDEN_BY_SAFE_MODE = "forbidden_by_safe_mode"

    UNKNOWN_ERROR = "unknown_error"

    @classmethod
    def from_code(cls, code: int) -> "MethodErrorReason":
        """Map a daemon error code to its reason; unmapped codes give UNKNOWN_ERROR."""
        return _REASONS_BY_CODE.get(code, cls.UNKNOWN_ERROR)


_REASONS_BY_CODE: dict[int, MethodErrorReason] = {
    -32600: MethodErrorReason.INVALID_REQUEST,
    -32601: MethodErrorReason.METHOD_NOT_FOUND,
    -32602: MethodErrorReason.INVALID_PARAMS,
    -32603: MethodErrorReason.INTERNAL_ERROR,
    -32700: MethodErrorReason.PARSE_ERROR,
    -1: MethodErrorReason.MISC_ERROR,
    -3: MethodErrorReason.TYPE_ERROR,
    -5: MethodErrorReason.INVALID_ADDRESS_OR_KEY,
    -7: MethodErrorReason.OUT_OF_MEMORY,
    -8: MethodErrorReason.INVALID_PARAMETER,
    -20: MethodErrorReason.DATABASE_ERROR,
    -22: MethodErrorReason.DESERIALIZATION_ERROR,
    -25: MethodErrorReason.VERIFY_ERROR,
    -26: MethodErrorReason.VERIFY_REJECTED,
    -27: MethodErrorReason.VERIFY_ALREADY_IN_UTXO_SET,
    -28: MethodErrorReason.IN_WARMUP,
    -32: MethodErrorReason.METHOD_DEPRECATED,
    -9: MethodErrorReason.CLIENT_NOT_CONNECTED,
    -10: MethodErrorReason.CLIENT_IN_INITIAL_DOWNLOAD,
    -23: MethodErrorReason.CLIENT_NODE_ALREADY_ADDED,
    -24: MethodErrorReason.CLIENT_NODE_NOT_ADDED,
    -29: MethodErrorReason.CLIENT_NODE_NOT_CONNECTED,
    -30: MethodErrorReason.CLIENT_INVALID_IP_OR_SUBNET,
    -31: MethodErrorReason.CLIENT_P2P_DISABLED,
    -34: MethodErrorReason.CLIENT_NODE_CAPACITY_REACHED,
    -33: MethodErrorReason.CLIENT_MEMPOOL_DISABLED,
    -4: MethodErrorReason.WALLET_ERROR,
    -6: MethodErrorReason.WALLET_INSUFFICIENT_FUNDS,
    -11: MethodErrorReason.WALLET_INVALID_LABEL_NAME,
    -12: MethodErrorReason.WALLET_KEYPOOL_RAN_OUT,
    -13: MethodErrorReason.WALLET_UNLOCK_NEEDED,
    -14: MethodErrorReason.WALLET_PASSPHRASE_INCORRECT,
    -15: MethodErrorReason.WALLET_WRONG_ENC_STATE,
    -16: MethodErrorReason.WALLET_ENCRYPTION_FAILED,
    -17: MethodErrorReason.WALLET_ALREADY_UNLOCKED,
    -18: MethodErrorReason.WALLET_NOT_FOUND,
    -19: MethodErrorReason.WALLET_NOT_SPECIFIED,
    -35: MethodErrorReason.WALLET_ALREADY_LOADED,
    -36: MethodErrorReason.WALLET_ALREADY_EXISTS,
    -2: MethodErrorReason.FORBIDDEN_BY_SAFE_MODE,
}


class TransportErrorReason(str, Enum):
    """Why a call failed before a semantic daemon reply was obtained.

    Combines tags derived from the HTTP status with tags for failures where no
    HTTP response was received at all.

    Example:
        >>> TransportErrorReason.TIMEOUT.is_transport_failure()
        True
        >>> TransportErrorReason.HTTP_BAD_GATEWAY.is_transport_failure()
        False
    """

    # HTTP status derived
    HTTP_BAD_REQUEST = "http_bad_request"
    HTTP_UNAUTHORIZED = "http_unauthorized"
    HTTP_FORBIDDEN = "http_forbidden"
    HTTP_NOT_FOUND = "http_not_found"
    HTTP_METHOD_NOT_ALLOWED = "http_method_not_allowed"
    HTTP_INTERNAL_SERVER_ERROR = "http_internal_server_error"
    HTTP_BAD_GATEWAY = "http_bad_gateway"
    HTTP_SERVICE_UNAVAILABLE = "http_service_unavailable"
    HTTP_GATEWAY_TIMEOUT = "http_gateway_timeout"
    UNKNOWN_ERROR = "unknown_error"

    # No HTTP response
    TIMEOUT = "timeout"
    CONNECTION_REFUSED = "connection_refused"
    NAME_RESOLUTION_FAILURE = "name_resolution_failure"
    CONNECTION_ERROR = "connection_error"
    PROTOCOL_ERROR = "protocol_error"
    TRANSPORT_ERROR = "transport_error"

    @classmethod
    def transport_failures(cls) -> frozenset["TransportErrorReason"]:
        """Return the reasons that mean no HTTP response was received."""
        return frozenset(
            {
                cls.TIMEOUT,
                cls.CONNECTION_REFUSED,
                cls.NAME_RESOLUTION_FAILURE,
                cls.CONNECTION_ERROR,
                cls.PROTOCOL_ERROR,
                cls.TRANSPORT_ERROR,
            }
        )

    def is_transport_failure(self) -> bool:
        return self in self.transport_failures()


HTTP_STATUS_REASONS: dict[int, TransportErrorReason] = {
    400: TransportErrorReason.HTTP_BAD_REQUEST,
    401: TransportErrorReason.HTTP_UNAUTHORIZED,
    403: TransportErrorReason.HTTP_FORBIDDEN,
    404: TransportErrorReason.HTTP_NOT_FOUND,
    405: TransportErrorReason.HTTP_METHOD_NOT_ALLOWED,
    500: TransportErrorReason.HTTP_INTERNAL_SERVER_ERROR,
    502: TransportErrorReason.HTTP_BAD_GATEWAY,
    503: TransportErrorReason.HTTP_SERVICE_UNAVAILABLE,
    504: TransportErrorReason.HTTP_GATEWAY_TIMEOUT,
}
"""Statuses with a dedicated reason tag; anything else maps to UNKNOWN_ERROR."""
