"""Tests for reqbind.binding.convert — parsers, decoding, and set_field."""

import math
from dataclasses import dataclass
from datetime import UTC, datetime

import pytest

from reqbind.binding.convert import (
    parse_bool,
    parse_float,
    parse_int,
    set_field,
    unquote_value,
)
from reqbind.binding.fields import Float32, Int8, field_descriptors
from reqbind.binding.source import MappingSource
from reqbind.binding.tags import param
from reqbind.config import BindConfig, Policy
from reqbind.errors import (
    ConversionError,
    DecodeError,
    TimeFormatError,
    UnsupportedTypeError,
)

LENIENT = BindConfig()
STRICT = BindConfig(policy=Policy.STRICT)


@dataclass
class Target:
    name: str = param("name", default="")
    counter: int = param("counter", default=0)
    tiny: Int8 = param("tiny", default=0)
    ok: bool = param("ok", default=False)
    ratio: float = param("ratio", default=0.0)
    narrow: Float32 = param("narrow", default=0.0)
    start: datetime | None = param("start", default=None)
    tags: list[str] = param("tags", default_factory=list)
    _hidden: str = param("hidden", default="untouched")


def _set(record: Target, field_name: str, raw: str, config: BindConfig = LENIENT) -> None:
    descriptor = next(d for d in field_descriptors(Target) if d.name == field_name)
    set_field(record, descriptor, MappingSource({descriptor.param: raw}), config)


class TestUnquoteValue:
    def test_percent_and_plus(self) -> None:
        assert unquote_value("Joe%20Smith") == "Joe Smith"
        assert unquote_value("New+York") == "New York"

    def test_plain_text_unchanged(self) -> None:
        assert unquote_value("hello") == "hello"

    def test_utf8(self) -> None:
        assert unquote_value("caf%C3%A9") == "café"

    @pytest.mark.parametrize("raw", ["%zz", "100%", "%4", "a%g1"])
    def test_bad_escape(self, raw: str) -> None:
        with pytest.raises(ValueError, match="invalid URL escape"):
            unquote_value(raw)

    def test_invalid_utf8(self) -> None:
        with pytest.raises(ValueError):
            unquote_value("%ff")


class TestParseInt:
    @pytest.mark.parametrize(("text", "expected"), [("1", 1), ("-42", -42), ("+7", 7), ("007", 7)])
    def test_valid(self, text: str, expected: int) -> None:
        assert parse_int(text) == expected

    @pytest.mark.parametrize("text", ["notanumber", "1.5", " 1", "1_000", "", "0x10", "١"])
    def test_invalid(self, text: str) -> None:
        with pytest.raises(ValueError):
            parse_int(text)

    def test_width(self) -> None:
        assert parse_int("127", 8) == 127
        assert parse_int("-128", 8) == -128
        with pytest.raises(ValueError, match="8-bit"):
            parse_int("128", 8)


class TestParseBool:
    @pytest.mark.parametrize("text", ["1", "t", "T", "TRUE", "true", "True"])
    def test_true(self, text: str) -> None:
        assert parse_bool(text) is True

    @pytest.mark.parametrize("text", ["0", "f", "F", "FALSE", "false", "False"])
    def test_false(self, text: str) -> None:
        assert parse_bool(text) is False

    @pytest.mark.parametrize("text", ["yes", "on", "tRuE", "2"])
    def test_invalid(self, text: str) -> None:
        with pytest.raises(ValueError):
            parse_bool(text)


class TestParseFloat:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [("1.5", 1.5), ("-2", -2.0), ("1e3", 1000.0), (".5", 0.5), ("+Inf", math.inf)],
    )
    def test_valid(self, text: str, expected: float) -> None:
        assert parse_float(text) == expected

    def test_nan(self) -> None:
        assert math.isnan(parse_float("NaN"))

    @pytest.mark.parametrize("text", ["abc", "1.2.3", " 1", "1_0", ""])
    def test_invalid(self, text: str) -> None:
        with pytest.raises(ValueError):
            parse_float(text)

    def test_overflow(self) -> None:
        with pytest.raises(ValueError, match="64-bit"):
            parse_float("1e400")

    def test_float32_rounds(self) -> None:
        assert parse_float("0.1", 32) == pytest.approx(0.1, rel=1e-7)
        assert parse_float("0.1", 32) != 0.1

    def test_float32_overflow(self) -> None:
        with pytest.raises(ValueError, match="32-bit"):
            parse_float("1e39", 32)

    @pytest.mark.parametrize("text", ["3.5e38", "-3.5e38"])
    def test_float32_overflow_just_past_max(self, text: str) -> None:
        with pytest.raises(ValueError, match="32-bit"):
            parse_float(text, 32)

    def test_float32_infinity_literal(self) -> None:
        assert parse_float("inf", 32) == math.inf
        assert parse_float("-Infinity", 32) == -math.inf


class TestSetField:
    def test_string_verbatim_after_decode(self) -> None:
        record = Target()
        _set(record, "name", "Joe%20Smith")
        assert record.name == "Joe Smith"

    def test_typed_values(self) -> None:
        record = Target()
        _set(record, "counter", "12")
        _set(record, "ok", "true")
        _set(record, "ratio", "2.5")
        _set(record, "start", "2023-01-02T15:04:05Z")

        assert record.counter == 12
        assert record.ok is True
        assert record.ratio == 2.5
        assert record.start == datetime(2023, 1, 2, 15, 4, 5, tzinfo=UTC)

    @pytest.mark.parametrize("field_name", ["name", "counter", "ok", "ratio", "start", "tags"])
    def test_empty_value_is_noop(self, field_name: str) -> None:
        record = Target()
        before = getattr(record, field_name)
        _set(record, field_name, "")
        assert getattr(record, field_name) == before

    def test_private_field_skipped(self) -> None:
        record = Target()
        _set(record, "_hidden", "changed")
        assert record._hidden == "untouched"

    def test_empty_value_logged(self, caplog) -> None:
        record = Target()
        with caplog.at_level("DEBUG", logger="reqbind.binding"):
            _set(record, "counter", "")
        assert any("counter" in r.message and "unchanged" in r.message for r in caplog.records)

    def test_decode_error(self) -> None:
        with pytest.raises(DecodeError) as exc_info:
            _set(Target(), "name", "100%")
        assert exc_info.value.param == "name"
        assert isinstance(exc_info.value.__cause__, ValueError)

    def test_decode_disabled(self) -> None:
        record = Target()
        _set(record, "name", "100%", BindConfig(decode_values=False))
        assert record.name == "100%"

    def test_time_error_names_field(self) -> None:
        with pytest.raises(TimeFormatError, match="start") as exc_info:
            _set(Target(), "start", "not-a-date")
        assert exc_info.value.field == "start"

    def test_unsupported_type(self) -> None:
        with pytest.raises(UnsupportedTypeError, match="unsupported type: list"):
            _set(Target(), "tags", "a")


class TestPolicy:
    @pytest.mark.parametrize(
        ("field_name", "raw"),
        [
            ("counter", "notanumber"),
            ("tiny", "999"),
            ("ok", "maybe"),
            ("ratio", "x"),
            ("narrow", "1e39"),
        ],
    )
    def test_lenient_swallows(self, field_name: str, raw: str) -> None:
        record = Target()
        before = getattr(record, field_name)
        _set(record, field_name, raw, LENIENT)
        assert getattr(record, field_name) == before

    @pytest.mark.parametrize(
        ("field_name", "raw", "kind"),
        [("counter", "notanumber", "integer"), ("ok", "maybe", "boolean"), ("ratio", "x", "float")],
    )
    def test_strict_raises(self, field_name: str, raw: str, kind: str) -> None:
        with pytest.raises(ConversionError, match=f"invalid {kind} value") as exc_info:
            _set(Target(), field_name, raw, STRICT)
        assert exc_info.value.field == field_name

    def test_strict_float32_overflow(self) -> None:
        with pytest.raises(ConversionError, match="32-bit"):
            _set(Target(), "narrow", "1e39", STRICT)

    def test_time_raises_under_lenient(self) -> None:
        with pytest.raises(TimeFormatError):
            _set(Target(), "start", "nope", LENIENT)
