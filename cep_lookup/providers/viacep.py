from __future__ import annotations

from typing import Any

from cep_lookup.errors import ParseError
from cep_lookup.models import AddressRecord
from cep_lookup.providers.base import Provider, text_field


class ViaCEPProvider(Provider):
    name = "ViaCEP"
    base_url = "https://viacep.com.br/ws"
    base_url_env = "VIACEP_BASE_URL"

    def url_for(self, postal_code: str) -> str:
        return f"{self.base_url}/{postal_code}/json/"

    def parse(self, data: dict[str, Any]) -> AddressRecord:
        # Unknown codes come back as 200 {"erro": true} (older deployments send "true").
        if data.get("erro") in (True, "true"):
            raise ParseError("postal code not found")
        return AddressRecord(
            postal_code=text_field(data, "cep", required=True),
            state=text_field(data, "uf"),
            city=text_field(data, "localidade"),
            neighborhood=text_field(data, "bairro"),
            street=text_field(data, "logradouro"),
            complement=text_field(data, "complemento"),
        )
