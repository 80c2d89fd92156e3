"""String-to-typed-value conversion and in-place field writes.

Parsers are deliberately narrower than Python's constructors: ``int()``
would accept ``" 7"`` and ``"1_000"``, which a query parameter should not.
"""

import logging
import math
import re
import struct
from collections.abc import Callable
from typing import Any
from urllib.parse import unquote_plus

from reqbind.binding.fields import FieldDescriptor, FieldKind
from reqbind.binding.source import ParameterSource
from reqbind.config import BindConfig, Policy
from reqbind.errors import (
    ConversionError,
    DecodeError,
    TimeFormatError,
    UnsupportedTypeError,
)
from reqbind.times import parse_time

logger = logging.getLogger("reqbind.binding")

_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2}).{0,2}", re.DOTALL)
_INTEGER = re.compile(r"[+-]?[0-9]+")
_FLOAT = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf(?:inity)?|nan)",
    re.IGNORECASE,
)

_TRUE = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE = frozenset({"0", "f", "F", "FALSE", "false", "False"})


def unquote_value(value: str) -> str:
    """Percent-decode *value*, treating ``+`` as a space.

    Raises ``ValueError`` for a malformed escape or bytes that are not UTF-8.
    """
    bad = _BAD_ESCAPE.search(value)
    if bad:
        msg = f"invalid URL escape {bad.group()!r}"
        raise ValueError(msg)
    return unquote_plus(value, errors="strict")


def parse_int(text: str, bits: int | None = None) -> int:
    """Parse a base-10 signed integer, range-checked when *bits* is set."""
    if not _INTEGER.fullmatch(text):
        msg = f"invalid integer {text!r}"
        raise ValueError(msg)
    number = int(text)
    if bits is not None:
        limit = 1 << (bits - 1)
        if not -limit <= number < limit:
            msg = f"{text} out of range for a {bits}-bit integer"
            raise ValueError(msg)
    return number


def parse_bool(text: str, bits: int | None = None) -> bool:
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    msg = f"invalid boolean {text!r}"
    raise ValueError(msg)


def parse_float(text: str, bits: int | None = None) -> float:
    """Parse a decimal, scientific, ``inf``, or ``nan`` literal.

    ``bits=32`` rounds through IEEE single precision. Finite literals that
    overflow the width raise ``ValueError``.
    """
    if not _FLOAT.fullmatch(text):
        msg = f"invalid float {text!r}"
        raise ValueError(msg)
    number = float(text)
    if math.isinf(number) and "inf" not in text.lower():
        msg = f"{text} out of range for a 64-bit float"
        raise ValueError(msg)
    if bits == 32:
        try:
            (number,) = struct.unpack("<f", struct.pack("<f", number))
        except OverflowError as exc:
            msg = f"{text} out of range for a 32-bit float"
            raise ValueError(msg) from exc
    return number


_PARSERS: dict[FieldKind, Callable[[str, int | None], Any]] = {
    FieldKind.INTEGER: parse_int,
    FieldKind.BOOLEAN: parse_bool,
    FieldKind.FLOAT: parse_float,
}


def set_field(
    record: object,
    descriptor: FieldDescriptor,
    source: ParameterSource,
    config: BindConfig,
) -> None:
    """Read the descriptor's parameter from *source* and write it into *record*.

    Private fields and empty values are no-ops. Integer, boolean, and float
    failures follow ``config.policy``; time and unsupported-type failures
    always raise.

    Raises:
        DecodeError: The raw value is not valid percent-encoding.
        TimeFormatError: No time format matched.
        UnsupportedTypeError: The field's type cannot be bound.
        ConversionError: Under ``Policy.STRICT``, a value did not convert.
    """
    param, name = descriptor.param, descriptor.name

    if not descriptor.settable:
        logger.debug("Skipping private field %s.%s", type(record).__name__, name)
        return

    raw = source.value(param)
    if raw == "":
        logger.debug("No value for %r, leaving %s unchanged", param, name)
        return

    if config.decode_values:
        try:
            raw = unquote_value(raw)
        except ValueError as exc:
            raise DecodeError(param, name, str(exc)) from exc

    kind = descriptor.kind

    if kind is FieldKind.STRING:
        setattr(record, name, raw)
        return

    if kind is FieldKind.TIME:
        try:
            value = parse_time(raw, config.time_formats)
        except ValueError as exc:
            raise TimeFormatError(param, name, f"invalid time format for field {name}") from exc
        setattr(record, name, value)
        return

    if kind is FieldKind.UNSUPPORTED:
        raise UnsupportedTypeError(param, name, f"unsupported type: {descriptor.type_name}")

    try:
        value = _PARSERS[kind](raw, descriptor.bits)
    except ValueError as exc:
        if config.policy is Policy.STRICT:
            detail = f"invalid {kind.value} value for field {name}: {exc}"
            raise ConversionError(param, name, detail) from exc
        logger.debug("Leaving %s unchanged: %s", name, exc)
        return
    setattr(record, name, value)
