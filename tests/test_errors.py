"""Tests for reqbind.errors — exception hierarchy and error messages."""

import pytest

from reqbind.errors import (
    BindError,
    ConfigurationError,
    ConversionError,
    DecodeError,
    FieldError,
    FormParseError,
    ReqbindError,
    TargetError,
    TimeFormatError,
    UnsupportedTypeError,
)


class TestHierarchy:
    def test_top_level(self) -> None:
        assert issubclass(ConfigurationError, ReqbindError)
        assert issubclass(BindError, ReqbindError)

    @pytest.mark.parametrize("cls", [TargetError, FormParseError, FieldError])
    def test_bind_errors(self, cls: type) -> None:
        assert issubclass(cls, BindError)

    @pytest.mark.parametrize(
        "cls", [DecodeError, UnsupportedTypeError, TimeFormatError, ConversionError]
    )
    def test_field_errors(self, cls: type) -> None:
        assert issubclass(cls, FieldError)


class TestFieldError:
    def test_attributes(self) -> None:
        err = TimeFormatError("start", "Start", "invalid time format for field Start")
        assert err.param == "start"
        assert err.field == "Start"
        assert err.detail == "invalid time format for field Start"

    def test_message_names_param(self) -> None:
        err = DecodeError("name", "name", "invalid URL escape '%zz'")
        assert str(err) == "error setting value for param 'name': invalid URL escape '%zz'"

    def test_status(self) -> None:
        assert BindError.status == 400
        assert UnsupportedTypeError("a", "a", "x").status == 400
