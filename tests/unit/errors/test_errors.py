"""
Unit tests for the envconf exception family.
"""

import pytest

from envconf.errors.errors import (
    EnvConfError,
    InvalidValueError,
    UnexportedFieldError,
    UnsupportedTypeError,
)


class TestEnvConfError:
    """Tests for the base exception."""

    def test_plain_message(self) -> None:
        assert str(EnvConfError("boom")) == "boom"

    def test_component_and_details(self) -> None:
        err = EnvConfError("boom", component="populator", details={"field": "port"})
        assert str(err) == "boom [component=populator] [details={'field': 'port'}]"
        assert err.message == "boom"


class TestSubclasses:
    """Tests for the concrete error kinds."""

    def test_invalid_value_is_value_error(self) -> None:
        err = InvalidValueError("bad", value="secret", expected_type="int")
        assert isinstance(err, ValueError)
        assert err.details == {"expected_type": "int"}
        assert "secret" not in str(err)

    def test_unsupported_is_type_error(self) -> None:
        err = UnsupportedTypeError(type_name="complex")
        assert isinstance(err, TypeError)
        assert str(err).startswith("unsupported type")
        assert err.details["type"] == "complex"

    def test_unexported_is_attribute_error(self) -> None:
        err = UnexportedFieldError(field="_secret")
        assert isinstance(err, AttributeError)
        assert err.field == "_secret"
        assert str(err).startswith("unexported field")

    @pytest.mark.parametrize(
        "err",
        [InvalidValueError("x"), UnsupportedTypeError(), UnexportedFieldError()],
    )
    def test_caught_as_base(self, err: EnvConfError) -> None:
        with pytest.raises(EnvConfError):
            raise err
