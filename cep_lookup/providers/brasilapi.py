from __future__ import annotations

from typing import Any

from cep_lookup.models import AddressRecord
from cep_lookup.providers.base import Provider, text_field


class BrasilAPIProvider(Provider):
    name = "BrasilAPI"
    base_url = "https://brasilapi.com.br/api/cep/v1"
    base_url_env = "BRASILAPI_BASE_URL"

    def url_for(self, postal_code: str) -> str:
        return f"{self.base_url}/{postal_code}"

    def parse(self, data: dict[str, Any]) -> AddressRecord:
        return AddressRecord(
            postal_code=text_field(data, "cep", required=True),
            state=text_field(data, "state"),
            city=text_field(data, "city"),
            neighborhood=text_field(data, "neighborhood"),
            street=text_field(data, "street"),
        )
