"""
Unit tests for request models and validation helpers.
"""

import pytest
from pydantic import ValidationError

from energisense.models import InjectReadingRequest, LoginRequest, RegisterRequest, Role
from energisense.utils import normalize_email, validate_email, validate_password, validate_reading_value


class TestInjectReadingRequest:
    """Tests for the ingestion body."""

    def test_canonical_fields(self):
        request = InjectReadingRequest.model_validate({"value": 42.5, "type": "kWh", "sensor_id": "s1"})
        assert request.value == 42.5
        assert request.type == "kWh"
        assert request.sensor_id == "s1"

    def test_legacy_field_names_accepted(self):
        """Older injectors send valor / sensorId."""
        request = InjectReadingRequest.model_validate({"valor": 97.31, "sensorId": "Sensor-01 (Industrial)"})
        assert request.value == 97.31
        assert request.sensor_id == "Sensor-01 (Industrial)"

    def test_type_defaults_to_kwh(self):
        assert InjectReadingRequest.model_validate({"value": 1}).type == "kWh"

    def test_integer_value_becomes_float(self):
        request = InjectReadingRequest.model_validate({"value": 7})
        assert request.value == 7.0
        assert isinstance(request.value, float)

    def test_zero_is_allowed(self):
        assert InjectReadingRequest.model_validate({"value": 0}).value == 0.0

    @pytest.mark.parametrize("bad", ["42.5", True, None, [1], {"v": 1}])
    def test_non_numbers_rejected(self, bad):
        with pytest.raises(ValidationError):
            InjectReadingRequest.model_validate({"value": bad})

    @pytest.mark.parametrize("bad", [-0.01, float("nan"), float("inf")])
    def test_negative_and_non_finite_rejected(self, bad):
        with pytest.raises(ValidationError):
            InjectReadingRequest.model_validate({"value": bad})

    def test_missing_value_rejected(self):
        with pytest.raises(ValidationError):
            InjectReadingRequest.model_validate({"type": "kWh"})


class TestAccountRequests:
    """Tests for register / login bodies."""

    def test_email_is_normalized(self):
        request = RegisterRequest(email="  Admin@Example.COM ", password="x")
        assert request.email == "admin@example.com"
        assert request.role == Role.USER

    def test_bad_email_rejected(self):
        with pytest.raises(ValidationError):
            RegisterRequest(email="not-an-email", password="x")

    def test_unknown_role_rejected(self):
        with pytest.raises(ValidationError):
            RegisterRequest(email="a@example.com", password="x", role="superuser")

    def test_empty_password_rejected(self):
        with pytest.raises(ValidationError):
            RegisterRequest(email="a@example.com", password="")

    def test_login_email_is_normalized(self):
        assert LoginRequest(email=" A@B.CO ", password="x").email == "a@b.co"


class TestHelpers:

    def test_normalize_email(self):
        assert normalize_email(" Foo@Bar.com\n") == "foo@bar.com"

    def test_validate_email(self):
        assert validate_email("a@example.com")
        assert not validate_email("a@example")
        assert not validate_email("")
        assert not validate_email("a b@example.com")

    def test_validate_password_length_limit(self):
        assert validate_password("x" * 72)
        assert not validate_password("x" * 73)
        assert not validate_password("")

    def test_validate_reading_value(self):
        assert validate_reading_value(0.0)
        assert not validate_reading_value(-1.0)
        assert not validate_reading_value(float("inf"))
