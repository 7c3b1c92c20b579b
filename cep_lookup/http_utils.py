from __future__ import annotations

from typing import Any

import httpx

from cep_lookup.errors import ParseError, StatusError, TransportError


DEFAULT_HEADERS = {
    "User-Agent": "cep-lookup/0.1",
    "Accept": "application/json",
}


async def fetch_json(client: httpx.AsyncClient, url: str, **kwargs: Any) -> dict[str, Any]:
    """GET ``url`` once and return its JSON object body.

    Raises TransportError, StatusError or ParseError. Cancellation of the
    calling task aborts the request and propagates unchanged.
    """
    try:
        response = await client.get(url, **kwargs)
    except (httpx.TimeoutException, httpx.TransportError) as exc:
        raise TransportError(f"{type(exc).__name__}: {exc}") from exc

    if response.status_code != httpx.codes.OK:
        raise StatusError(response.status_code)

    try:
        data = response.json()
    except ValueError as exc:
        raise ParseError(f"invalid JSON body: {exc}") from exc

    if not isinstance(data, dict):
        raise ParseError(f"expected a JSON object, got {type(data).__name__}")
    return data
