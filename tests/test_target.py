"""Tests for reqbind.binding.target — bind target validation."""

from dataclasses import dataclass

import pytest

from reqbind.binding.target import NOT_A_RECORD, NOT_MUTABLE, validate_target
from reqbind.errors import TargetError


@dataclass
class Record:
    n: int = 3


@dataclass(frozen=True)
class FrozenRecord:
    n: int = 3


class Plain:
    pass


class TestValidateTarget:
    def test_instance_passes(self) -> None:
        assert validate_target(Record()) is Record

    @pytest.mark.parametrize("value", [0, "test", {"n": "1"}, [Record()], None, Plain()])
    def test_non_records_rejected(self, value: object) -> None:
        with pytest.raises(TargetError, match=NOT_A_RECORD):
            validate_target(value)

    def test_plain_class_rejected(self) -> None:
        with pytest.raises(TargetError, match=NOT_A_RECORD):
            validate_target(Plain)

    def test_dataclass_type_rejected(self) -> None:
        with pytest.raises(TargetError, match=NOT_MUTABLE) as exc_info:
            validate_target(Record)
        assert "pass an instance" in str(exc_info.value)

    def test_frozen_instance_rejected(self) -> None:
        with pytest.raises(TargetError, match=NOT_MUTABLE) as exc_info:
            validate_target(FrozenRecord())
        assert "frozen" in str(exc_info.value)

    def test_messages_distinct(self) -> None:
        assert NOT_MUTABLE != NOT_A_RECORD
