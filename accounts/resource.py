"""Account resource and the envelopes it travels in."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import datetime, timezone
from typing import Sequence, Tuple

RESOURCE_TYPE = "accounts"
NAME_LINES = 4
ALTERNATIVE_NAME_LINES = 3

# Wire value of an unset timestamp
ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)


def _fixed_lines(lines: Sequence[str], size: int, label: str) -> Tuple[str, ...]:
    if isinstance(lines, str):
        raise TypeError(f"{label} must be a sequence of strings, not a string")
    lines = tuple(lines)
    if len(lines) > size:
        raise ValueError(f"{label} holds at most {size} lines, got {len(lines)}")
    return lines + ("",) * (size - len(lines))


def _as_utc(value: datetime) -> datetime:
    # Naive datetimes are taken to be UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


@dataclass(frozen=True)
class Resource:
    """Organisation account attributes.

    Empty strings mean "not provided"; there is no separate unset marker.
    ``name`` always holds four lines and ``alternative_names`` three.
    """

    country: str = ""
    base_currency: str = ""
    bank_id: str = ""
    bank_id_code: str = ""
    account_number: str = ""
    bic: str = ""
    iban: str = ""
    customer_id: str = ""
    name: Tuple[str, ...] = ("",) * NAME_LINES
    alternative_names: Tuple[str, ...] = ("",) * ALTERNATIVE_NAME_LINES
    account_classification: str = ""
    joint_account: bool = False
    account_matching_opt_out: bool = False
    secondary_identification: str = ""
    switched: bool = False
    status: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", _fixed_lines(self.name, NAME_LINES, "name"))
        object.__setattr__(
            self,
            "alternative_names",
            _fixed_lines(self.alternative_names, ALTERNATIVE_NAME_LINES, "alternative_names"),
        )

    def is_empty(self) -> bool:
        return self == Resource()


@dataclass(frozen=True)
class Data:
    """Resource envelope: the attributes plus service-assigned metadata."""

    id: str = ""
    organisation_id: str = ""
    type: str = ""
    version: int = 0
    created_on: datetime = ZERO_TIME
    modified_on: datetime = ZERO_TIME
    attributes: Resource = field(default_factory=Resource)

    def __post_init__(self) -> None:
        object.__setattr__(self, "created_on", _as_utc(self.created_on))
        object.__setattr__(self, "modified_on", _as_utc(self.modified_on))

    def is_empty(self) -> bool:
        return self == Data()


@dataclass(frozen=True)
class Links:
    self: str = ""
    first: str = ""
    next: str = ""
    last: str = ""

    def is_empty(self) -> bool:
        return all(not getattr(self, f.name) for f in fields(self))


@dataclass(frozen=True)
class Payload:
    """Single-resource envelope used by create and fetch."""

    data: Data = field(default_factory=Data)
    links: Links = field(default_factory=Links)


@dataclass(frozen=True)
class MultiPayload:
    """Collection envelope used by list."""

    data: Tuple[Data, ...] = ()
    links: Links = field(default_factory=Links)

    def __post_init__(self) -> None:
        object.__setattr__(self, "data", tuple(self.data))

    def __len__(self) -> int:
        return len(self.data)
