from __future__ import annotations

from cep_lookup.models import AggregatedFailure, RaceResult, Success, Timeout


def _timeout_notice(seconds: float) -> str:
    unit = "second" if seconds == 1 else "seconds"
    return f"Timeout of {seconds:g} {unit} exceeded."


def render(result: RaceResult) -> list[str]:
    if isinstance(result, Success):
        lines = [f"Response received from {result.provider}:"]
        width = max((len(name) for name, _ in result.record.fields()), default=0)
        for name, value in result.record.fields():
            lines.append(f"  {name + ':':<{width + 1}} {value}")
        return lines
    if isinstance(result, AggregatedFailure):
        return [failure.message for failure in result.failures]
    if isinstance(result, Timeout):
        return [_timeout_notice(result.seconds)]
    raise TypeError(f"unexpected result: {result!r}")
