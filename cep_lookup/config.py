from __future__ import annotations

from dataclasses import dataclass, field

from cep_lookup.providers.base import Provider
from cep_lookup.providers.brasilapi import BrasilAPIProvider
from cep_lookup.providers.viacep import ViaCEPProvider

PROVIDER_REGISTRY: dict[str, type[Provider]] = {
    "brasilapi": BrasilAPIProvider,
    "viacep": ViaCEPProvider,
}
ALL_PROVIDERS = list(PROVIDER_REGISTRY)

# Bounds the whole race, not each request.
DEFAULT_TIMEOUT_SECONDS = 1.0


@dataclass
class LookupConfig:
    providers: list[str] = field(default_factory=lambda: list(ALL_PROVIDERS))
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    # Per-request ceiling for httpx; the race deadline normally fires first.
    http_timeout_seconds: float = 5.0


def build_providers(config: LookupConfig) -> list[Provider]:
    unknown = [name for name in config.providers if name not in PROVIDER_REGISTRY]
    if unknown:
        raise ValueError(f"Unknown provider(s): {','.join(unknown)}")
    if not config.providers:
        raise ValueError("at least one provider is required")
    return [PROVIDER_REGISTRY[name]() for name in config.providers]
