"""
Country-specific validation of account resources.

Every supported country maps to a rule set: a tuple of checks, each of which
yields the violations it finds. All checks of a rule set run, so one
ValidationError lists every broken rule at once.

Italy is the exception to the one-field-per-check layout: the valid shape of
its bank id depends on whether an account number was given, so both fields
are checked together by ``italian_bank_id_and_account_number``.
"""

from __future__ import annotations

import re
from typing import Callable, Dict, Iterable, Iterator, List, Pattern, Tuple

from accounts.errors import UnsupportedCountryError, ValidationError, Violation
from accounts.resource import Resource

Check = Callable[[Resource], Iterable[Violation]]

GB_BANK_ID_CODE = "GBDSC"
AU_BANK_ID_CODE = "AUBSB"
BE_BANK_ID_CODE = "BE"
CA_BANK_ID_CODE = "CACPA"
FR_BANK_ID_CODE = "FR"
DE_BANK_ID_CODE = "DEBLZ"
GR_BANK_ID_CODE = "GRBIC"
HK_BANK_ID_CODE = "HKNCC"
IT_BANK_ID_CODE = "ITNCC"
LU_BANK_ID_CODE = "LULUX"
PL_BANK_ID_CODE = "PLKNR"
PT_BANK_ID_CODE = "PTNCC"
ES_BANK_ID_CODE = "ESNCC"
CH_BANK_ID_CODE = "CHBCC"
US_BANK_ID_CODE = "USABA"

_LABELS: Dict[str, str] = {
    "bank_id": "bank id",
    "bank_id_code": "bank id code",
    "account_number": "account number",
    "bic": "BIC",
    "iban": "IBAN",
}


def _digits(count: int) -> Pattern[str]:
    return re.compile(rf"^[0-9]{{{count}}}\Z")


DIGITS_3 = _digits(3)
DIGITS_5 = _digits(5)
DIGITS_6 = _digits(6)
DIGITS_7 = _digits(7)
DIGITS_8 = _digits(8)
DIGITS_9 = _digits(9)
DIGITS_10 = _digits(10)
DIGITS_11 = _digits(11)
DIGITS_12 = _digits(12)
DIGITS_13 = _digits(13)
DIGITS_16 = _digits(16)
AU_NUMBER = re.compile(r"^[1-9][0-9]{5,9}\Z")
CA_ROUTING_NUMBER = re.compile(r"^0[0-9]{8}\Z")
CA_ACCOUNT_NUMBER = re.compile(r"^[0-9]{7,12}\Z")
HK_ACCOUNT_NUMBER = re.compile(r"^[0-9]{9,12}\Z")
US_ACCOUNT_NUMBER = re.compile(r"^[0-9]{6,17}\Z")

_PATTERN_HINTS: Dict[Pattern[str], str] = {
    AU_NUMBER: "6 to 10 digits not starting with 0",
    CA_ROUTING_NUMBER: "9 digits starting with 0",
    CA_ACCOUNT_NUMBER: "7 to 12 digits",
    HK_ACCOUNT_NUMBER: "9 to 12 digits",
    US_ACCOUNT_NUMBER: "6 to 17 digits",
}


def _describe(pattern: Pattern[str]) -> str:
    hint = _PATTERN_HINTS.get(pattern)
    if hint:
        return hint
    count = re.search(r"\{(\d+)\}", pattern.pattern)
    return f"{count.group(1)} digits" if count else f"matching {pattern.pattern}"


def _format_violation(resource: Resource, field: str, pattern: Pattern[str]) -> Violation:
    value = getattr(resource, field)
    return Violation(
        field,
        f"{resource.country} {_LABELS[field]} must be {_describe(pattern)}, got '{value}'",
    )


# ----------------------------------------------------------------------
# Check combinators
# ----------------------------------------------------------------------

def required_pattern(field: str, pattern: Pattern[str]) -> Check:
    def check(resource: Resource) -> Iterator[Violation]:
        if not pattern.match(getattr(resource, field)):
            yield _format_violation(resource, field, pattern)
    return check


def optional_pattern(field: str, pattern: Pattern[str]) -> Check:
    def check(resource: Resource) -> Iterator[Violation]:
        value = getattr(resource, field)
        if value and not pattern.match(value):
            yield _format_violation(resource, field, pattern)
    return check


def required_equals(field: str, expected: str) -> Check:
    def check(resource: Resource) -> Iterator[Violation]:
        value = getattr(resource, field)
        if value != expected:
            if expected:
                yield Violation(field, f"{_LABELS[field]} must be '{expected}', got '{value}'")
            else:
                yield Violation(field, f"{_LABELS[field]} must be empty, got '{value}'")
    return check


def optional_equals(field: str, expected: str) -> Check:
    def check(resource: Resource) -> Iterator[Violation]:
        value = getattr(resource, field)
        if value and value != expected:
            yield Violation(field, f"{_LABELS[field]} must be empty or '{expected}', got '{value}'")
    return check


def required_present(field: str) -> Check:
    def check(resource: Resource) -> Iterator[Violation]:
        if not getattr(resource, field):
            yield Violation(field, f"{_LABELS[field]} is required, was empty")
    return check


def must_be_empty(field: str) -> Check:
    def check(resource: Resource) -> Iterator[Violation]:
        value = getattr(resource, field)
        if value:
            yield Violation(
                field,
                f"{_LABELS[field]} is not supported for {resource.country}, has to be empty. Got '{value}'",
            )
    return check


def italian_bank_id_and_account_number(resource: Resource) -> Iterator[Violation]:
    """Bank id is 10 digits without an account number, 11 digits with one.

    A supplied account number must be 12 digits.
    """
    if resource.account_number:
        if not DIGITS_12.match(resource.account_number):
            yield _format_violation(resource, "account_number", DIGITS_12)
        bank_id_pattern = DIGITS_11
    else:
        bank_id_pattern = DIGITS_10
    if not bank_id_pattern.match(resource.bank_id):
        yield _format_violation(resource, "bank_id", bank_id_pattern)


# ----------------------------------------------------------------------
# Rule table
# ----------------------------------------------------------------------

RULES: Dict[str, Tuple[Check, ...]] = {
    "GB": (
        required_present("bic"),
        required_pattern("bank_id", DIGITS_6),
        required_equals("bank_id_code", GB_BANK_ID_CODE),
        optional_pattern("account_number", DIGITS_8),
    ),
    "AU": (
        required_present("bic"),
        must_be_empty("iban"),
        optional_pattern("bank_id", AU_NUMBER),
        required_equals("bank_id_code", AU_BANK_ID_CODE),
        optional_pattern("account_number", AU_NUMBER),
    ),
    "BE": (
        required_pattern("bank_id", DIGITS_3),
        required_equals("bank_id_code", BE_BANK_ID_CODE),
        optional_pattern("account_number", DIGITS_7),
    ),
    "CA": (
        required_present("bic"),
        must_be_empty("iban"),
        optional_pattern("bank_id", CA_ROUTING_NUMBER),
        optional_equals("bank_id_code", CA_BANK_ID_CODE),
        optional_pattern("account_number", CA_ACCOUNT_NUMBER),
    ),
    "FR": (
        required_pattern("bank_id", DIGITS_10),
        required_equals("bank_id_code", FR_BANK_ID_CODE),
        optional_pattern("account_number", DIGITS_10),
    ),
    "DE": (
        required_pattern("bank_id", DIGITS_8),
        required_equals("bank_id_code", DE_BANK_ID_CODE),
        optional_pattern("account_number", DIGITS_7),
    ),
    "GR": (
        required_pattern("bank_id", DIGITS_7),
        required_equals("bank_id_code", GR_BANK_ID_CODE),
        optional_pattern("account_number", DIGITS_16),
    ),
    "HK": (
        required_present("bic"),
        must_be_empty("iban"),
        optional_pattern("bank_id", DIGITS_3),
        optional_equals("bank_id_code", HK_BANK_ID_CODE),
        optional_pattern("account_number", HK_ACCOUNT_NUMBER),
    ),
    "IT": (
        italian_bank_id_and_account_number,
        required_equals("bank_id_code", IT_BANK_ID_CODE),
    ),
    "LU": (
        required_pattern("bank_id", DIGITS_3),
        required_equals("bank_id_code", LU_BANK_ID_CODE),
        optional_pattern("account_number", DIGITS_13),
    ),
    # IBAN takes the place of the bank id
    "NL": (
        must_be_empty("bank_id"),
        required_equals("bank_id_code", ""),
        optional_pattern("account_number", DIGITS_10),
    ),
    "PL": (
        required_pattern("bank_id", DIGITS_8),
        required_equals("bank_id_code", PL_BANK_ID_CODE),
        optional_pattern("account_number", DIGITS_16),
    ),
    "PT": (
        required_pattern("bank_id", DIGITS_8),
        required_equals("bank_id_code", PT_BANK_ID_CODE),
        optional_pattern("account_number", DIGITS_11),
    ),
    "ES": (
        required_pattern("bank_id", DIGITS_8),
        required_equals("bank_id_code", ES_BANK_ID_CODE),
        optional_pattern("account_number", DIGITS_10),
    ),
    "CH": (
        required_pattern("bank_id", DIGITS_5),
        required_equals("bank_id_code", CH_BANK_ID_CODE),
        optional_pattern("account_number", DIGITS_12),
    ),
    "US": (
        required_present("bic"),
        must_be_empty("iban"),
        required_pattern("bank_id", DIGITS_9),
        required_equals("bank_id_code", US_BANK_ID_CODE),
        optional_pattern("account_number", US_ACCOUNT_NUMBER),
    ),
}

SUPPORTED_COUNTRIES = frozenset(RULES)


def collect_violations(resource: Resource) -> List[Violation]:
    """Return every violation of the resource's country rule set.

    Raises UnsupportedCountryError when the country has no rule set.
    """
    rules = RULES.get(resource.country)
    if rules is None:
        raise UnsupportedCountryError(resource.country)
    return [violation for check in rules for violation in check(resource)]


def validate_resource(resource: Resource) -> None:
    """Raise ValidationError listing every rule the resource breaks."""
    violations = collect_violations(resource)
    if violations:
        raise ValidationError(resource.country, violations)


def is_valid(resource: Resource) -> bool:
    try:
        validate_resource(resource)
    except ValidationError:
        return False
    return True
