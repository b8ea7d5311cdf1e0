"""Circuit breaker for calls to remote AI providers.

CLOSED -> OPEN after a run of consecutive failures; OPEN rejects calls
until the recovery timeout passes, then lets one probe through
(HALF_OPEN). A successful probe closes the circuit again.

Usage:
    breaker = GenericCircuitBreaker(failure_threshold=5, recovery_timeout=60.0)
    try:
        score = await breaker.call(provider.embed, text)
    except CircuitOpenError:
        ...  # ranker defaults the item
"""

import enum
import logging
import time
from collections.abc import Callable, Coroutine
from typing import Any, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CircuitState(enum.Enum):
    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half_open"


class CircuitOpenError(Exception):
    """Raised when calling through an open circuit breaker."""


class GenericCircuitBreaker:
    """Wraps async callables with circuit breaker protection.

    Args:
        failure_threshold: Consecutive failures before opening circuit.
        recovery_timeout: Seconds before attempting a recovery probe.
        name: Name used in log messages.
        clock: Monotonic time source.
    """

    def __init__(
        self,
        failure_threshold: int = 5,
        recovery_timeout: float = 60.0,
        name: str = "circuit_breaker",
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._failure_threshold = failure_threshold
        self._recovery_timeout = recovery_timeout
        self._name = name
        self._clock = clock
        self._state = CircuitState.CLOSED
        self._consecutive_failures = 0
        self._opened_at: float = 0.0

    @property
    def state(self) -> CircuitState:
        return self._state

    @property
    def consecutive_failures(self) -> int:
        return self._consecutive_failures

    async def call(
        self,
        fn: Callable[..., Coroutine[Any, Any, T]],
        *args: Any,
        **kwargs: Any,
    ) -> T:
        """Run ``fn`` unless the circuit is open.

        Raises:
            CircuitOpenError: If the circuit is open and the recovery
                timeout has not elapsed.
        """
        if self._state == CircuitState.OPEN:
            if self._clock() - self._opened_at < self._recovery_timeout:
                raise CircuitOpenError(f"Circuit breaker {self._name} is OPEN")
            self._state = CircuitState.HALF_OPEN
            logger.info("Circuit breaker %s: OPEN -> HALF_OPEN", self._name)

        try:
            result = await fn(*args, **kwargs)
        except Exception:
            self._record_failure()
            raise

        if self._state == CircuitState.HALF_OPEN:
            logger.info("Circuit breaker %s: HALF_OPEN -> CLOSED", self._name)
        self._state = CircuitState.CLOSED
        self._consecutive_failures = 0
        return result

    def _record_failure(self) -> None:
        self._consecutive_failures += 1

        if self._state == CircuitState.HALF_OPEN:
            self._open()
            logger.warning("Circuit breaker %s: probe failed, reopening", self._name)
        elif self._consecutive_failures >= self._failure_threshold:
            self._open()
            logger.warning(
                "Circuit breaker %s: OPEN after %d failures",
                self._name,
                self._consecutive_failures,
            )

    def _open(self) -> None:
        self._state = CircuitState.OPEN
        self._opened_at = self._clock()
