"""Constants for the btx JSON-RPC client."""

# Bitcoin Core speaks the legacy 1.0 dialect on the wire
JSONRPC_VERSION = "1.0"

DEFAULT_BASE_URL = "http://localhost:8332"
DEFAULT_USERNAME = "bitcoinuser"
DEFAULT_PASSWORD = "bitcoinpass"
DEFAULT_USER_AGENT = "btx-1.0"

DEFAULT_TIMEOUT = 30.0
"""Per-attempt request timeout in seconds."""

# Retry and backoff constants
DEFAULT_MAX_RETRIES = 3
"""Retries after the first attempt (a call makes at most max_retries + 1 attempts)."""

DEFAULT_DELAY = 0.05
"""Delay in seconds before the first retry.

With exponential backoff the n-th retry waits delay * 2**n, capped at max_delay.
"""

DEFAULT_MAX_DELAY = 5.0
"""Upper bound in seconds for a single backoff delay."""

# Wallet-scoped calls are routed to /wallet/<name>
ROOT_PATH = "/"
WALLET_PATH_PREFIX = "/wallet/"

# Field formats used by request schemas
WALLET_NAME_PATTERN = r"^(?![-])(?!(\.{1,2})$)(?!.*[-.]$)[a-zA-Z0-9._-]{1,64}$"
HEX64_PATTERN = r"^[a-fA-F0-9]{64}$"
HEX8_PATTERN = r"^[a-fA-F0-9]{8}$"
BASE58_ADDRESS_PATTERN = r"^[123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz]+$"
BECH32_ADDRESS_PATTERN = r"^[a-z0-9]+$"
MIN_ADDRESS_LENGTH = 26
MAX_ADDRESS_LENGTH = 90
MAX_PASSPHRASE_LENGTH = 1024
MAX_LABEL_LENGTH = 255
MAX_WALLET_UNLOCK_SECONDS = 100_000_000
