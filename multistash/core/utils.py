import functools
import logging
from enum import IntEnum
from typing import Any, Callable

from multistash.core.key import Key


class TakeOrder(IntEnum):
    """Which value ``take_one`` removes from a key's sequence."""

    LIFO = 0
    FIFO = 1


def locked_method(method: Callable[..., Any]) -> Callable[..., Any]:
    """Decorator to run a method while holding ``self._lock``."""

    @functools.wraps(method)
    def wrapper(self: Any, *args: Any, **kwargs: Any) -> Any:
        with self._lock:
            return method(self, *args, **kwargs)

    return wrapper


def _validate_key(key: Any) -> int:
    if not isinstance(key, Key):
        raise TypeError(f"Stash key must be a Key, got {type(key)}")
    return key.index


def _validate_log_level(log_level: int) -> None:
    if not (50 >= log_level >= 0):
        raise ValueError("log_level must be a valid logging level between 0 and 50")


def _validate_lock(lock: Any) -> None:
    if lock is None:
        return
    if not all(
        hasattr(lock, method)
        for method in ("__enter__", "__exit__", "acquire", "release")
    ):
        raise TypeError("lock must be a threading.RLock or similar object")
    # A second non-blocking acquire from the owning thread only succeeds
    # on a reentrant lock.
    with lock:
        reentrant = lock.acquire(blocking=False)
        if reentrant:
            lock.release()
    if not reentrant:
        raise TypeError("lock must be reentrant, e.g. threading.RLock")


def _configure_logger(log_level: int) -> None:
    _validate_log_level(log_level)
    logging.getLogger("multistash").setLevel(log_level)


__all__ = ["TakeOrder", "locked_method"]
