from __future__ import annotations

import asyncio
import logging
from contextlib import AsyncExitStack
from typing import Sequence

import httpx

from cep_lookup.config import DEFAULT_TIMEOUT_SECONDS, LookupConfig, build_providers
from cep_lookup.http_utils import DEFAULT_HEADERS
from cep_lookup.models import Outcome, RaceResult, RaceState, Success, Timeout
from cep_lookup.providers.base import Provider

LOGGER = logging.getLogger(__name__)


async def _run_provider(
    provider: Provider,
    client: httpx.AsyncClient,
    postal_code: str,
    queue: asyncio.Queue[Outcome],
) -> None:
    outcome = await provider.lookup(client, postal_code)
    # The queue has a slot per provider, so this never raises QueueFull.
    queue.put_nowait(outcome)


async def race(
    postal_code: str,
    providers: Sequence[Provider],
    *,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    client: httpx.AsyncClient | None = None,
    http_timeout: float = 5.0,
) -> RaceResult:
    """Query every provider concurrently and keep the first success.

    Returns the first Success consumed from the outcome queue, an
    AggregatedFailure once every provider has failed, or Timeout when
    ``timeout`` seconds pass first. Lookups still running on return are
    cancelled and not awaited; a cancelled lookup never emits an outcome.
    """
    if not providers:
        raise ValueError("at least one provider is required")

    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    if timeout <= 0:
        LOGGER.info("deadline already expired for %s", postal_code)
        return Timeout(timeout)

    state = RaceState(expected=len(providers))
    queue: asyncio.Queue[Outcome] = asyncio.Queue(maxsize=len(providers))

    async with AsyncExitStack() as stack:
        if client is None:
            client = await stack.enter_async_context(
                httpx.AsyncClient(timeout=http_timeout, headers=DEFAULT_HEADERS)
            )

        tasks = [
            asyncio.create_task(_run_provider(provider, client, postal_code, queue), name=f"lookup-{provider.name}")
            for provider in providers
        ]
        try:
            while True:
                remaining = deadline - loop.time()
                if remaining <= 0:
                    break
                try:
                    outcome = await asyncio.wait_for(queue.get(), remaining)
                except asyncio.TimeoutError:
                    break

                result = state.record(outcome)
                if isinstance(result, Success):
                    LOGGER.info("%s answered first for %s", result.provider, postal_code)
                    return result
                if result is not None:
                    LOGGER.info("all %s providers failed for %s", state.expected, postal_code)
                    return result

            LOGGER.info(
                "timeout of %ss exceeded for %s (%s/%s outcomes received)",
                timeout,
                postal_code,
                state.received,
                state.expected,
            )
            return Timeout(timeout)
        finally:
            for task in tasks:
                if not task.done():
                    task.cancel()


def lookup(postal_code: str, config: LookupConfig | None = None) -> RaceResult:
    config = config or LookupConfig()
    providers = build_providers(config)
    return asyncio.run(
        race(
            postal_code,
            providers,
            timeout=config.timeout_seconds,
            http_timeout=config.http_timeout_seconds,
        )
    )
