from __future__ import annotations

import logging

import typer
from dotenv import load_dotenv

from cep_lookup.config import ALL_PROVIDERS, LookupConfig
from cep_lookup.models import AggregatedFailure, RaceResult, Timeout
from cep_lookup.presenter import render
from cep_lookup.race import lookup

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_USAGE = 2
EXIT_TIMEOUT = 3

USAGE_MESSAGE = "Please provide the postal code as an argument."

app = typer.Typer(add_completion=False, help="Resolve a Brazilian postal code (CEP) by racing BrasilAPI and ViaCEP.")


def _parse_csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def evaluate_exit_code(result: RaceResult, *, strict: bool) -> int:
    """Exit code policy.

    Every outcome exits 0 unless ``strict`` is set; then a total failure
    exits 1 and a timeout exits 3.
    """
    if not strict:
        return EXIT_OK
    if isinstance(result, AggregatedFailure):
        return EXIT_FAILED
    if isinstance(result, Timeout):
        return EXIT_TIMEOUT
    return EXIT_OK


@app.command()
def main(
    postal_code: str | None = typer.Argument(None, help="Postal code to look up, forwarded as-is."),
    providers: str = typer.Option(
        ",".join(ALL_PROVIDERS),
        help='Providers to race (comma separated). Default: "brasilapi,viacep"',
    ),
    strict: bool = typer.Option(False, "--strict", help="Exit non-zero on usage errors, total failure or timeout."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log provider activity to stderr."),
) -> None:
    load_dotenv()
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.ERROR,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if postal_code is None:
        typer.echo(USAGE_MESSAGE)
        raise typer.Exit(code=EXIT_USAGE if strict else EXIT_OK)

    selected = _parse_csv(providers)
    unknown = [name for name in selected if name not in ALL_PROVIDERS]
    if unknown or not selected:
        typer.echo(f"Unknown provider(s): {','.join(unknown) or '(none given)'}")
        raise typer.Exit(code=EXIT_USAGE)

    result = lookup(postal_code, LookupConfig(providers=selected))
    for line in render(result):
        typer.echo(line)
    raise typer.Exit(code=evaluate_exit_code(result, strict=strict))


if __name__ == "__main__":
    app()
