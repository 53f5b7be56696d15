"""Bounded retry for unique constraint conflicts using tenacity."""

from dataclasses import dataclass

from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)


@dataclass
class ConflictRetryConfig:
    """Configuration for conflict retries with exponential backoff."""

    max_attempts: int = 3
    min_wait: float = 0.0
    max_wait: float = 0.5
    multiplier: float = 0.05


def get_conflict_retrying(
    exception_type: type[BaseException],
    config: ConflictRetryConfig | None = None,
) -> AsyncRetrying:
    """Get configured AsyncRetrying that retries only on the given conflict type.

    Usage:
        async for attempt in get_conflict_retrying(JourneyPlanNumberConflict):
            with attempt:
                plan = await table.insert(...)

    After the last attempt the conflict is re-raised unchanged.
    """
    cfg = config or ConflictRetryConfig()
    return AsyncRetrying(
        retry=retry_if_exception_type(exception_type),
        stop=stop_after_attempt(cfg.max_attempts),
        wait=wait_exponential(
            multiplier=cfg.multiplier,
            min=cfg.min_wait,
            max=cfg.max_wait,
        ),
        reraise=True,
    )
