from __future__ import annotations

import asyncio

import httpx
from typer.testing import CliRunner

from cep_lookup import cli
from cep_lookup.models import AddressRecord, AggregatedFailure, Failure, Success, Timeout

runner = CliRunner()


def _patch_lookup(monkeypatch, result):
    calls = []

    def fake_lookup(postal_code, config):
        calls.append((postal_code, config))
        return result

    monkeypatch.setattr(cli, "lookup", fake_lookup)
    return calls


def test_missing_postal_code_prints_usage_and_exits_zero(monkeypatch):
    calls = _patch_lookup(monkeypatch, Timeout(1.0))

    result = runner.invoke(cli.app, [])

    assert result.exit_code == 0
    assert cli.USAGE_MESSAGE in result.output
    assert calls == []


def test_missing_postal_code_strict_exits_usage(monkeypatch):
    _patch_lookup(monkeypatch, Timeout(1.0))

    result = runner.invoke(cli.app, ["--strict"])

    assert result.exit_code == cli.EXIT_USAGE


def test_success_prints_provider_and_record(monkeypatch):
    calls = _patch_lookup(monkeypatch, Success("BrasilAPI", AddressRecord(postal_code="01311000", state="SP")))

    result = runner.invoke(cli.app, ["01311000"])

    assert result.exit_code == 0
    assert "Response received from BrasilAPI:" in result.output
    assert "SP" in result.output
    postal_code, config = calls[0]
    assert postal_code == "01311000"
    assert config.providers == ["brasilapi", "viacep"]
    assert config.timeout_seconds == 1.0


def test_total_failure_exits_zero_unless_strict(monkeypatch):
    failure = AggregatedFailure((Failure("BrasilAPI", "status code: 404"), Failure("ViaCEP", "status code: 400")))
    _patch_lookup(monkeypatch, failure)

    relaxed = runner.invoke(cli.app, ["00000000"])
    strict = runner.invoke(cli.app, ["00000000", "--strict"])

    assert relaxed.exit_code == 0
    assert "error fetching data from BrasilAPI: status code: 404" in relaxed.output
    assert "error fetching data from ViaCEP: status code: 400" in relaxed.output
    assert strict.exit_code == cli.EXIT_FAILED


def test_timeout_prints_notice_only(monkeypatch):
    _patch_lookup(monkeypatch, Timeout(1.0))

    relaxed = runner.invoke(cli.app, ["01311000"])
    strict = runner.invoke(cli.app, ["01311000", "--strict"])

    assert relaxed.exit_code == 0
    assert relaxed.output.strip() == "Timeout of 1 second exceeded."
    assert strict.exit_code == cli.EXIT_TIMEOUT


def test_provider_subset(monkeypatch):
    calls = _patch_lookup(monkeypatch, Timeout(1.0))

    runner.invoke(cli.app, ["01311000", "--providers", "viacep"])

    assert calls[0][1].providers == ["viacep"]


def test_unknown_provider_is_rejected(monkeypatch):
    calls = _patch_lookup(monkeypatch, Timeout(1.0))

    result = runner.invoke(cli.app, ["01311000", "--providers", "viacep,correios"])

    assert result.exit_code == cli.EXIT_USAGE
    assert "Unknown provider(s): correios" in result.output
    assert calls == []


def test_empty_postal_code_is_forwarded_not_treated_as_missing(monkeypatch):
    calls = _patch_lookup(monkeypatch, AggregatedFailure((Failure("BrasilAPI", "status code: 404"),)))

    result = runner.invoke(cli.app, [""])

    assert cli.USAGE_MESSAGE not in result.output
    assert calls[0][0] == ""


def test_runs_real_race_against_mocked_providers(monkeypatch):
    async def handler(request: httpx.Request) -> httpx.Response:
        if request.url.host == "viacep.com.br":
            await asyncio.sleep(0.01)
            return httpx.Response(200, json={"cep": "01311-000", "uf": "SP", "localidade": "São Paulo"})
        await asyncio.sleep(0.5)
        return httpx.Response(503)

    real_client = httpx.AsyncClient
    monkeypatch.setattr(
        httpx, "AsyncClient", lambda **kwargs: real_client(transport=httpx.MockTransport(handler), **kwargs)
    )
    monkeypatch.delenv("BRASILAPI_BASE_URL", raising=False)
    monkeypatch.delenv("VIACEP_BASE_URL", raising=False)

    result = runner.invoke(cli.app, ["01311000", "--strict"])

    assert result.exit_code == 0
    assert result.output.splitlines() == [
        "Response received from ViaCEP:",
        "  postal_code: 01311-000",
        "  state:       SP",
        "  city:        São Paulo",
    ]
