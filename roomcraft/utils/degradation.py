"""
Degrade-on-failure helper

Runs a primary coroutine and, for a declared set of recoverable errors,
substitutes a fallback value instead of raising. The caller gets both the
value and whether it came from the fallback.
"""
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Generic, Optional, Tuple, Type, TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Degradable(Generic[T]):
    """Result of attempt(): the value plus the error that forced the fallback, if any"""

    value: T
    error: Optional[BaseException] = None

    @property
    def degraded(self) -> bool:
        return self.error is not None


async def attempt(
    primary: Callable[[], Awaitable[T]],
    fallback: Callable[[BaseException], T],
    recover_on: Tuple[Type[BaseException], ...] = (Exception,),
    label: str = "operation",
) -> Degradable[T]:
    """
    Await primary(); on a recoverable error return fallback(error) instead

    Args:
        primary: Zero-argument coroutine factory
        fallback: Builds the substitute value from the caught error
        recover_on: Exception types that trigger the fallback; anything else propagates
        label: Name used in log messages

    Returns:
        Degradable wrapping either the primary or the fallback value
    """
    try:
        return Degradable(value=await primary())
    except recover_on as e:
        logger.warning(f"{label} failed, degrading to fallback: {e}")
        return Degradable(value=fallback(e), error=e)
