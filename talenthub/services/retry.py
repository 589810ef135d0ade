# talenthub/services/retry.py

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Tuple, Type, TypeVar

from tenacity import (
    RetryCallState,
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from talenthub.core.config import Settings, settings as default_settings
from talenthub.core.exceptions import StoreError

logger = logging.getLogger(__name__)

R = TypeVar("R")


@dataclass
class RetryPolicy:
    """
    Bounded retry with exponential backoff for store calls.

    Attempt n (1-based) that fails waits base_delay * multiplier ** (n - 1)
    seconds before the next one. After max_attempts failures the last error
    is raised to the caller.
    """
    max_attempts: int = 3
    base_delay: float = 1.0
    multiplier: float = 2.0
    retry_on: Tuple[Type[BaseException], ...] = (StoreError,)
    sleep: Callable[[float], None] = field(default=time.sleep, repr=False)

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.base_delay < 0 or self.multiplier < 1:
            raise ValueError("base_delay must be >= 0 and multiplier >= 1")

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None, **overrides: Any) -> "RetryPolicy":
        settings = settings or default_settings
        values = {
            "max_attempts": settings.RETRY_MAX_ATTEMPTS,
            "base_delay": settings.RETRY_BASE_DELAY,
            "multiplier": settings.RETRY_BACKOFF_MULTIPLIER,
        }
        values.update(overrides)
        return cls(**values)

    def delay_for(self, attempt: int) -> float:
        """Wait after the given failed attempt (1-based)."""
        return self.base_delay * self.multiplier ** (attempt - 1)

    def call(self, operation: Callable[..., R], *args: Any, **kwargs: Any) -> R:
        retrying = Retrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(multiplier=self.base_delay, exp_base=self.multiplier),
            retry=retry_if_exception_type(self.retry_on),
            before_sleep=self._log_attempt,
            sleep=self.sleep,
            reraise=True,
        )
        try:
            return retrying(operation, *args, **kwargs)
        except self.retry_on as e:
            logger.error(
                f"{_name(operation)} failed after {self.max_attempts} attempts: {e}"
            )
            raise

    def _log_attempt(self, state: RetryCallState) -> None:
        error = state.outcome.exception() if state.outcome else None
        logger.warning(
            f"{_name(state.fn)} failed (attempt {state.attempt_number}/{self.max_attempts}): {error}"
        )


def _name(fn: Any) -> str:
    return getattr(fn, "__qualname__", None) or getattr(fn, "__name__", None) or repr(fn)
