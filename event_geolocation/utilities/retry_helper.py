import asyncio
from typing import Awaitable, Callable, Tuple, Type, TypeVar

import structlog

logger = structlog.get_logger(__file__)

T = TypeVar("T")


async def retry_with_backoff_async(
    fn: Callable[[], Awaitable[T]],
    *,
    max_retries: int = 3,
    initial_delay_seconds: float = 0.1,
    retry_on: Tuple[Type[BaseException], ...] = (Exception,),
) -> T:
    """
    Calls fn until it succeeds, waiting initial_delay_seconds * 2 ** attempt between attempts.
    Exceptions not listed in retry_on are raised immediately

    :param fn: coroutine factory, called once per attempt
    :param max_retries: total number of attempts
    :param initial_delay_seconds: delay after the first failure
    :param retry_on: exception types worth another attempt
    :return: result of the first successful call
    """
    assert max_retries > 0, "max_retries must be at least 1"
    for attempt in range(max_retries):
        try:
            return await fn()
        except retry_on as e:
            if attempt == max_retries - 1:
                raise
            delay = initial_delay_seconds * (2**attempt)
            logger.info(
                f"Retry attempt {attempt + 1}/{max_retries} after {delay}s",
                error=str(e),
            )
            await asyncio.sleep(delay)
    raise AssertionError("unreachable")
