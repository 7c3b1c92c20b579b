from __future__ import annotations

from dataclasses import dataclass, field
from dataclasses import fields as dataclass_fields
from typing import Iterator


@dataclass(frozen=True, slots=True)
class AddressRecord:
    postal_code: str | None = None
    state: str | None = None
    city: str | None = None
    neighborhood: str | None = None
    street: str | None = None
    complement: str | None = None  # ViaCEP only

    def fields(self) -> Iterator[tuple[str, str]]:
        for f in dataclass_fields(self):
            value = getattr(self, f.name)
            if value:
                yield f.name, value


@dataclass(frozen=True, slots=True)
class Success:
    provider: str
    record: AddressRecord


@dataclass(frozen=True, slots=True)
class Failure:
    provider: str
    error: str

    @property
    def message(self) -> str:
        return f"error fetching data from {self.provider}: {self.error}"


@dataclass(frozen=True, slots=True)
class AggregatedFailure:
    failures: tuple[Failure, ...]

    @property
    def message(self) -> str:
        return "\n".join(f.message for f in self.failures)


@dataclass(frozen=True, slots=True)
class Timeout:
    seconds: float


Outcome = Success | Failure
RaceResult = Success | AggregatedFailure | Timeout


@dataclass(slots=True)
class RaceState:
    """Bookkeeping for one race; never shared between invocations."""

    expected: int
    received: int = 0
    failures: list[Failure] = field(default_factory=list)
    resolved: bool = False

    def record(self, outcome: Outcome) -> RaceResult | None:
        if self.resolved:
            raise RuntimeError("race already resolved")
        self.received += 1
        if isinstance(outcome, Success):
            self.resolved = True
            return outcome
        self.failures.append(outcome)
        if self.received >= self.expected:
            self.resolved = True
            return AggregatedFailure(tuple(self.failures))
        return None
