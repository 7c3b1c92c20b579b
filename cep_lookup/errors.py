from __future__ import annotations


class LookupFailure(Exception):
    """Base error for a single provider lookup."""


class TransportError(LookupFailure):
    """Raised when a provider cannot be reached."""


class StatusError(LookupFailure):
    def __init__(self, status_code: int) -> None:
        super().__init__(f"status code: {status_code}")
        self.status_code = status_code


class ParseError(LookupFailure):
    """Raised when a provider answers 200 with a body we cannot read."""
