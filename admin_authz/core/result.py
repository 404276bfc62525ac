"""Result types for railway-oriented programming.

Store calls, pool submissions and entitlement dispatches can all fail
without that failure being exceptional for the caller. They return a
Result instead of raising, so every call site decides explicitly what a
failure means (log it, abort startup, exit the CLI).

Usage:
    result = await client.write_tuples(tuple_)
    match result:
        case Success():
            logger.debug("entitlement_written")
        case Failure(error=error):
            logger.error("entitlement_write_failed", reason=str(error))
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    """Successful outcome.

    Attributes:
        value: Payload of the operation (None for side-effect only calls).
    """

    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    """Failed outcome.

    Attributes:
        error: Error describing why the operation failed.
    """

    error: E


type Result[T, E] = Success[T] | Failure[E]
