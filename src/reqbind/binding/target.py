"""Bind target validation."""

import dataclasses

from reqbind.errors import TargetError

NOT_MUTABLE = "target is not a mutable record reference"
NOT_A_RECORD = "target does not reference a dataclass record"


def validate_target(target: object) -> type:
    """Return the dataclass type of *target*, or raise ``TargetError``.

    A valid target is an instance of a non-frozen dataclass. Passing the
    dataclass type itself, or a frozen instance, fails with
    ``NOT_MUTABLE``. Anything that is not a dataclass fails with
    ``NOT_A_RECORD``.
    """
    if not dataclasses.is_dataclass(target):
        kind = target.__name__ if isinstance(target, type) else type(target).__name__
        msg = f"{NOT_A_RECORD} (got {kind})"
        raise TargetError(msg)

    if isinstance(target, type):
        msg = f"{NOT_MUTABLE} (got the class {target.__name__}, pass an instance)"
        raise TargetError(msg)

    cls = type(target)
    if cls.__dataclass_params__.frozen:  # type: ignore[attr-defined]
        msg = f"{NOT_MUTABLE} ({cls.__name__} is frozen)"
        raise TargetError(msg)
    return cls
