"""Exception hierarchy for the accounts client."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple


@dataclass(frozen=True)
class Violation:
    """A single broken field rule."""

    field: str
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


class AccountsError(Exception):
    """Base exception for all accounts client errors."""


class ValidationError(AccountsError):
    """Raised when an account resource breaks one or more rules of its country."""

    def __init__(self, country: str, violations: Iterable[Violation]) -> None:
        self.country = country
        self.violations: Tuple[Violation, ...] = tuple(violations)
        details = "; ".join(str(v) for v in self.violations)
        super().__init__(f"{country or '<no country>'} account failed validation: {details}")

    @property
    def fields(self) -> Tuple[str, ...]:
        return tuple(v.field for v in self.violations)


class UnsupportedCountryError(ValidationError):
    """Raised when no rule set exists for the resource's country code."""

    def __init__(self, country: str) -> None:
        super().__init__(country, [Violation("country", f"unsupported country code: '{country}'")])


class DecodeError(AccountsError):
    """Raised when a response body cannot be turned into a payload."""


class MalformedPayloadError(DecodeError):
    """Raised when the body is not JSON or has the wrong shape."""


class IncompletePayloadError(DecodeError):
    """Raised when the body parsed but carries no resource fields."""


class TransportError(AccountsError):
    """Raised when the accounts API cannot be reached."""


class UnexpectedStatusError(TransportError):
    """Raised when the accounts API answers with a status the operation does not expect."""

    def __init__(self, method: str, path: str, status_code: int, detail: Optional[str] = None) -> None:
        self.method = method
        self.path = path
        self.status_code = status_code
        self.detail = detail or ""
        message = f"{method} {path} returned HTTP {status_code}"
        if self.detail:
            message = f"{message}: {self.detail}"
        super().__init__(message)


class ConfigError(AccountsError):
    """Raised when required settings are missing or invalid."""
