from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod
from typing import Any

import httpx

from cep_lookup.errors import LookupFailure, ParseError
from cep_lookup.http_utils import fetch_json
from cep_lookup.models import AddressRecord, Failure, Outcome, Success

LOGGER = logging.getLogger(__name__)


class Provider(ABC):
    """One address lookup service.

    Subclasses set ``name``, ``base_url`` and ``base_url_env`` and implement
    ``url_for`` and ``parse``. ``lookup`` turns every failure into a Failure
    outcome, so the race only ever sees Success or Failure values.
    """

    name: str = ""
    base_url: str = ""
    base_url_env: str = ""

    def __init__(self, base_url: str | None = None) -> None:
        env_url = os.getenv(self.base_url_env) if self.base_url_env else None
        self.base_url = (base_url or env_url or self.base_url).rstrip("/")

    @abstractmethod
    def url_for(self, postal_code: str) -> str:
        """Return the lookup URL for ``postal_code``."""

    @abstractmethod
    def parse(self, data: dict[str, Any]) -> AddressRecord:
        """Map a provider payload to an AddressRecord, raising ParseError on a bad shape."""

    async def lookup(self, client: httpx.AsyncClient, postal_code: str) -> Outcome:
        url = self.url_for(postal_code)
        LOGGER.debug("[%s] GET %s", self.name, url)
        try:
            data = await fetch_json(client, url)
            record = self.parse(data)
        except LookupFailure as exc:
            LOGGER.warning("[%s] lookup failed: %s", self.name, exc)
            return Failure(self.name, str(exc))
        except Exception as exc:  # noqa: BLE001
            LOGGER.warning("[%s] unexpected error: %s", self.name, exc)
            return Failure(self.name, f"{type(exc).__name__}: {exc}")
        return Success(self.name, record)


def text_field(data: dict[str, Any], key: str, *, required: bool = False) -> str | None:
    """Read a string field from a provider payload, raising ParseError on a bad shape."""
    if key not in data:
        if required:
            raise ParseError(f"missing field: {key}")
        return None
    value = data[key]
    if value is None:
        return None
    if not isinstance(value, str):
        raise ParseError(f"unexpected type for {key}: {type(value).__name__}")
    return value.strip() or None
