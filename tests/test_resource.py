"""Tests for the account resource and envelope types."""

from dataclasses import FrozenInstanceError, replace
from datetime import datetime, timedelta, timezone

import pytest

from accounts.errors import UnexpectedStatusError, ValidationError, Violation
from accounts.resource import ZERO_TIME, Data, Links, MultiPayload, Resource


class TestResource:
    def test_name_padded_to_four_lines(self) -> None:
        assert Resource(name=["a", "b"]).name == ("a", "b", "", "")

    def test_alternative_names_padded_to_three_lines(self) -> None:
        assert Resource(alternative_names=["x"]).alternative_names == ("x", "", "")

    def test_too_many_name_lines(self) -> None:
        with pytest.raises(ValueError):
            Resource(name=["1", "2", "3", "4", "5"])

    def test_name_must_not_be_a_string(self) -> None:
        with pytest.raises(TypeError):
            Resource(name="Jane Doe")

    def test_frozen(self) -> None:
        resource = Resource(country="GB")
        with pytest.raises(FrozenInstanceError):
            resource.country = "DE"  # type: ignore[misc]

    def test_replace_keeps_lines(self) -> None:
        resource = Resource(country="GB", name=("a", "b", "c", "d"))
        assert replace(resource, bic="X").name == ("a", "b", "c", "d")

    def test_is_empty(self) -> None:
        assert Resource().is_empty()
        assert not Resource(status="confirmed").is_empty()
        assert not Resource(switched=True).is_empty()
        assert not Resource(name=("", "", "", "x")).is_empty()


class TestEnvelope:
    def test_data_defaults(self) -> None:
        data = Data()
        assert data.created_on == ZERO_TIME
        assert data.is_empty()

    def test_data_timestamps_normalised_to_utc(self) -> None:
        data = Data(
            created_on=datetime(2021, 1, 2, 3, 4, 5),
            modified_on=datetime(2021, 1, 2, 5, 4, 5, tzinfo=timezone(timedelta(hours=2))),
        )
        expected = datetime(2021, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
        assert data.created_on == expected
        assert data.created_on.tzinfo is timezone.utc
        assert data.modified_on.tzinfo is timezone.utc
        assert data.modified_on.hour == 3

    def test_data_with_id_not_empty(self) -> None:
        assert not Data(id="x").is_empty()

    def test_links_is_empty(self) -> None:
        assert Links().is_empty()
        assert not Links(next="https://next").is_empty()

    def test_multi_payload_tuple(self) -> None:
        payload = MultiPayload(data=[Data(id="a"), Data(id="b")])
        assert isinstance(payload.data, tuple)
        assert len(payload) == 2


class TestErrors:
    def test_validation_error_message(self) -> None:
        err = ValidationError("GB", [Violation("bic", "BIC is required, was empty"), Violation("bank_id", "bad")])
        assert str(err) == "GB account failed validation: bic: BIC is required, was empty; bank_id: bad"
        assert err.fields == ("bic", "bank_id")

    def test_unexpected_status_message(self) -> None:
        err = UnexpectedStatusError("GET", "/v1/organisation/accounts/x", 404, "not found")
        assert str(err) == "GET /v1/organisation/accounts/x returned HTTP 404: not found"
