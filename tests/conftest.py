"""Pytest configuration and fixtures."""

import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path

# File logs of the test run go to a throwaway directory
os.environ.setdefault("ACCOUNTS_LOG_DIR", tempfile.mkdtemp(prefix="accounts-logs-"))

import pytest  # noqa: E402

from accounts.resource import Data, Links, Payload, Resource  # noqa: E402

TESTDATA = Path(__file__).parent / "testdata"
TEST_TIME = datetime(2020, 5, 6, 9, 28, 13, 843000, tzinfo=timezone.utc)
BIC_EXAMPLE = "BARCGB22XXX"
IBAN_EXAMPLE = "GB33BUKB20201555555555"

# One record per country that satisfies every rule of its rule set
VALID_RESOURCES = {
    "GB": Resource(country="GB", bank_id="123456", bank_id_code="GBDSC", bic=BIC_EXAMPLE, account_number="12345678"),
    "AU": Resource(country="AU", bank_id="123456", bank_id_code="AUBSB", bic=BIC_EXAMPLE, account_number="123456"),
    "BE": Resource(country="BE", bank_id="123", bank_id_code="BE", bic=BIC_EXAMPLE, account_number="1234567"),
    "CA": Resource(country="CA", bank_id="012345678", bank_id_code="CACPA", bic=BIC_EXAMPLE, account_number="1234567"),
    "FR": Resource(
        country="FR", bank_id="1234567890", bank_id_code="FR", account_number="1234567890", iban=IBAN_EXAMPLE
    ),
    "DE": Resource(country="DE", bank_id="12345678", bank_id_code="DEBLZ", account_number="1234567", iban=IBAN_EXAMPLE),
    "GR": Resource(
        country="GR", bank_id="1234567", bank_id_code="GRBIC", account_number="1234567890123456", iban=IBAN_EXAMPLE
    ),
    "HK": Resource(country="HK", bank_id="123", bank_id_code="HKNCC", bic=BIC_EXAMPLE, account_number="123456789"),
    "IT": Resource(
        country="IT", bank_id="12345678901", bank_id_code="ITNCC", account_number="123456789012", iban=IBAN_EXAMPLE
    ),
    "LU": Resource(country="LU", bank_id="123", bank_id_code="LULUX", account_number="1234567890123", iban=IBAN_EXAMPLE),
    "NL": Resource(country="NL", bic=BIC_EXAMPLE, account_number="1234567890", iban=IBAN_EXAMPLE),
    "PL": Resource(
        country="PL", bank_id="12345678", bank_id_code="PLKNR", account_number="1234567890123456", iban=IBAN_EXAMPLE
    ),
    "PT": Resource(country="PT", bank_id="12345678", bank_id_code="PTNCC", account_number="12345678901", iban=IBAN_EXAMPLE),
    "ES": Resource(country="ES", bank_id="12345678", bank_id_code="ESNCC", account_number="1234567890", iban=IBAN_EXAMPLE),
    "CH": Resource(country="CH", bank_id="12345", bank_id_code="CHBCC", account_number="123456789012", iban=IBAN_EXAMPLE),
    "US": Resource(country="US", bank_id="123456789", bank_id_code="USABA", bic=BIC_EXAMPLE, account_number="123456"),
}


def read_testdata(name: str) -> bytes:
    return (TESTDATA / name).read_bytes()


@pytest.fixture
def payload_json() -> bytes:
    """Single account response body."""
    return read_testdata("payload.json")


@pytest.fixture
def multipayload_json() -> bytes:
    """Two-account list response body."""
    return read_testdata("multipayload.json")


@pytest.fixture
def full_payload() -> Payload:
    """Payload matching testdata/payload.json field for field."""
    return Payload(
        data=Data(
            id="a6c1a721-bb1b-41ef-bd11-800a1309ff9b",
            organisation_id="7442ea6b-164a-4818-b470-d98abfbc24ae",
            type="accounts",
            version=0,
            created_on=TEST_TIME,
            modified_on=TEST_TIME,
            attributes=Resource(
                country="GB",
                base_currency="GBP",
                bank_id="89282dd",
                bank_id_code="12221",
                account_number="12345678",
                bic="bic1234",
                iban="iban1234",
                customer_id="anuuidv4again",
                name=("line1", "line2", "line3", "line4"),
                alternative_names=("altname1", "altname2", "altname3"),
                account_classification="cop",
                secondary_identification="some custom name",
                status="confirmed",
            ),
        ),
        links=Links(
            self="https://selflink.com/resource",
            first="https://firstlink.com/resource",
            next="https://nextlink.com/resource",
            last="https://lastlink.com/resource",
        ),
    )


@pytest.fixture
def gb_resource() -> Resource:
    """Valid GB account with a full four-line name."""
    return Resource(
        country="GB",
        bank_id="123456",
        bank_id_code="GBDSC",
        bic=BIC_EXAMPLE,
        name=("Jane Doe", "1 High Street", "London", "EC1A 1BB"),
    )
