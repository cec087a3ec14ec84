"""Bounded-time retry loop used to wait on eventually consistent state."""

from __future__ import annotations

import time
from typing import Callable, TypeVar, Union

from .errors import Timeout
from .logging import get_logger

LOG = get_logger("polling")

T = TypeVar("T")

DEFAULT_POLL_TIMEOUT = 10.0
DEFAULT_POLL_INTERVAL = 0.1


def poll(
    check: Callable[[], Union[T, bool]],
    *,
    timeout: float = DEFAULT_POLL_TIMEOUT,
    interval: float = DEFAULT_POLL_INTERVAL,
    clock: Callable[[], float] = time.monotonic,
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """Call ``check`` until it returns something other than ``False``.

    ``False`` means "not ready yet"; any other value (including ``None`` or an
    empty list) is returned as is. Raises Timeout once ``timeout`` seconds
    have elapsed, including when the last attempt itself overran the
    deadline. Sleeps never extend past the deadline.
    """
    if timeout < 0:
        raise ValueError(f"timeout must be >= 0, got {timeout}")
    if interval < 0:
        raise ValueError(f"interval must be >= 0, got {interval}")

    deadline = clock() + timeout
    attempt = 0
    while True:
        attempt += 1
        result = check()
        now = clock()
        if now > deadline:
            LOG.warning(f"Polling timed out after {attempt} attempt(s) ({timeout}s)")
            raise Timeout(f"condition not met within {timeout} seconds")
        if result is not False:
            LOG.debug(f"Polling succeeded on attempt {attempt}")
            return result
        LOG.debug(f"Polling attempt {attempt} not ready; retrying in {interval}s")
        sleep(min(interval, deadline - now))
        if clock() >= deadline:
            LOG.warning(f"Polling timed out after {attempt} attempt(s) ({timeout}s)")
            raise Timeout(f"condition not met within {timeout} seconds")
