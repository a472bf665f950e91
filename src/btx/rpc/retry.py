"""Retry policy for JSON-RPC calls.

Decisions are made on classified outcomes (see btx.rpc.classifier), never on
raw HTTP responses:

- transport failures (no response received) are always retryable;
- a classified TransportError is retryable when its reason is in
  ``retryable_reasons`` (by default the four 5xx tags);
- MethodError and Response are final.

Example:
    >>> policy = RetryPolicy(RetryConfig(delay=1.0, jitter=False))
    >>> [policy.calculate_backoff(n) for n in range(4)]
    [1.0, 2.0, 4.0, 5.0]
"""

import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from btx.errors import TransportError
from btx.models.constants import DEFAULT_DELAY, DEFAULT_MAX_DELAY, DEFAULT_MAX_RETRIES
from btx.models.enums import TransportErrorReason

DEFAULT_RETRYABLE_REASONS: frozenset[TransportErrorReason] = frozenset(
    {
        TransportErrorReason.HTTP_INTERNAL_SERVER_ERROR,
        TransportErrorReason.HTTP_BAD_GATEWAY,
        TransportErrorReason.HTTP_SERVICE_UNAVAILABLE,
        TransportErrorReason.HTTP_GATEWAY_TIMEOUT,
    }
)


class BackoffStrategy(str, Enum):
    """How the delay grows between attempts."""

    FIXED = "fixed"
    EXPONENTIAL = "exponential"


@dataclass(frozen=True)
class RetryConfig:
    """Configuration for retry logic.

    Attributes:
        max_retries: Retries after the first attempt (default: 3)
        delay: Delay in seconds before the first retry (default: 0.05)
        max_delay: Cap in seconds for a single delay (default: 5.0)
        backoff: Fixed or exponential growth (default: exponential)
        jitter: Whether to add up to 10% random jitter to each delay
        retryable_reasons: Classified TransportError reasons worth retrying
    """

    max_retries: int = DEFAULT_MAX_RETRIES
    delay: float = DEFAULT_DELAY
    max_delay: float = DEFAULT_MAX_DELAY
    backoff: BackoffStrategy = BackoffStrategy.EXPONENTIAL
    jitter: bool = True
    retryable_reasons: frozenset[TransportErrorReason] = field(
        default=DEFAULT_RETRYABLE_REASONS
    )

    def __post_init__(self) -> None:
        if self.max_retries < 0:
            raise ValueError(f"max_retries must be >= 0, got {self.max_retries}")
        if self.delay < 0 or self.max_delay < 0:
            raise ValueError("delay and max_delay must be >= 0")
        object.__setattr__(self, "backoff", BackoffStrategy(self.backoff))
        object.__setattr__(
            self,
            "retryable_reasons",
            frozenset(TransportErrorReason(r) for r in self.retryable_reasons),
        )


class RetryPolicy:
    """Stateless retry decisions and backoff delays for a RetryConfig."""

    def __init__(self, config: RetryConfig | None = None) -> None:
        self.config = config or RetryConfig()

    def is_retryable(self, outcome: Any) -> bool:
        """Decide retryability of a classified outcome."""
        if not isinstance(outcome, TransportError):
            return False
        if outcome.is_transport_failure:
            return True
        return outcome.reason in self.config.retryable_reasons

    def calculate_backoff(self, retry: int) -> float:
        """Delay before retry number ``retry`` (zero-based).

        Exponential: delay * 2**retry. Fixed: delay. Both capped at max_delay,
        then optionally increased by up to 10% jitter.
        """
        config = self.config
        if config.backoff is BackoffStrategy.EXPONENTIAL:
            delay = config.delay * (2**retry)
        else:
            delay = config.delay
        delay = min(delay, config.max_delay)

        if config.jitter and delay > 0:
            delay += random.uniform(0, delay * 0.1)  # nosec B311

        return float(delay)


@dataclass
class RetryContext:
    """Call-scoped retry bookkeeping; created per call and then discarded."""

    policy: RetryPolicy
    enabled: bool = True
    retries: int = 0

    @property
    def remaining(self) -> int:
        if not self.enabled:
            return 0
        return max(self.policy.config.max_retries - self.retries, 0)

    def should_retry(self, outcome: Any) -> bool:
        return self.remaining > 0 and self.policy.is_retryable(outcome)

    def next_delay(self) -> float:
        """Consume one retry and return how long to wait before it."""
        delay = self.policy.calculate_backoff(self.retries)
        self.retries += 1
        return delay
