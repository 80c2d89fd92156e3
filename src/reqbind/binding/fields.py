"""Field descriptors and the parameter-name-to-field map.

Descriptors are resolved once per (record type, tag key) and kept in a
bounded LRU cache as immutable tuples. Each bind call builds its own field map from them.
"""

import dataclasses
import functools
import logging
import sys
import types
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Annotated, Any, Union, get_args, get_origin, get_type_hints

from reqbind.binding.tags import TAG_KEY, ParamTag, parse_tag

logger = logging.getLogger("reqbind.binding")

# Record types whose descriptors stay cached; least recently used go first
FIELD_CACHE_SIZE = 256


class FieldKind(Enum):
    """How a field's string value is converted."""

    STRING = "string"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    FLOAT = "float"
    TIME = "time"
    UNSUPPORTED = "unsupported"


@dataclass(frozen=True, slots=True)
class Width:
    """Bit width marker for ``Annotated`` integer and float fields."""

    bits: int

    def __post_init__(self) -> None:
        if self.bits not in (8, 16, 32, 64):
            msg = f"Width must be 8, 16, 32, or 64 bits, got {self.bits}"
            raise ValueError(msg)


Int8 = Annotated[int, Width(8)]
Int16 = Annotated[int, Width(16)]
Int32 = Annotated[int, Width(32)]
Int64 = Annotated[int, Width(64)]
Float32 = Annotated[float, Width(32)]
Float64 = Annotated[float, Width(64)]


@dataclass(frozen=True, slots=True)
class FieldDescriptor:
    """Everything the coercer needs to know about one field.

    Attributes:
        param: External parameter name (the tag's name).
        name: Field name on the record.
        hint: Resolved type, with ``Optional`` and ``Annotated`` removed.
        kind: Conversion kind derived from ``hint``.
        bits: Width from a ``Width`` marker, or ``None``.
        settable: False for private (``_``-prefixed) fields.
        tag: The parsed tag, options included.
    """

    param: str
    name: str
    hint: Any
    kind: FieldKind
    bits: int | None
    settable: bool
    tag: ParamTag

    @property
    def type_name(self) -> str:
        return getattr(self.hint, "__name__", None) or repr(self.hint)


def _unwrap(hint: Any) -> tuple[Any, int | None]:
    """Strip ``X | None`` and ``Annotated[X, Width(n)]`` down to ``X``."""
    bits: int | None = None
    while True:
        origin = get_origin(hint)
        if origin is Annotated:
            base, *extras = get_args(hint)
            for extra in extras:
                if isinstance(extra, Width):
                    bits = extra.bits
            hint = base
        elif origin is Union or origin is types.UnionType:
            args = [a for a in get_args(hint) if a is not type(None)]
            if len(args) != 1:
                return hint, bits
            hint = args[0]
        else:
            return hint, bits


def _classify(hint: Any, bits: int | None) -> FieldKind:
    if hint is str:
        return FieldKind.STRING
    if hint is bool:
        return FieldKind.BOOLEAN
    if hint is int:
        return FieldKind.INTEGER
    if hint is float and bits in (None, 32, 64):
        return FieldKind.FLOAT
    if hint is datetime:
        return FieldKind.TIME
    return FieldKind.UNSUPPORTED


def _resolve_hints(cls: type) -> dict[str, Any]:
    """Resolve the annotations of *cls*, one field at a time if needed.

    A field whose annotation names something unavailable at runtime (an
    import under ``TYPE_CHECKING``) is left out, so only that field falls
    back to its raw annotation.
    """
    try:
        return get_type_hints(cls, include_extras=True)
    except NameError as exc:
        logger.debug("Unresolved annotation on %s: %s", cls.__qualname__, exc)

    module = sys.modules.get(cls.__module__)
    globalns = vars(module) if module is not None else {}
    localns = dict(vars(cls))
    hints: dict[str, Any] = {}
    for f in dataclasses.fields(cls):
        holder = types.SimpleNamespace(__annotations__={f.name: f.type})
        try:
            hints.update(get_type_hints(holder, globalns, localns, include_extras=True))
        except NameError:
            logger.debug("Leaving %s.%s unresolved", cls.__qualname__, f.name)
    return hints


@functools.lru_cache(maxsize=FIELD_CACHE_SIZE)
def field_descriptors(cls: type, tag_key: str = TAG_KEY) -> tuple[FieldDescriptor, ...]:
    """Resolve the descriptors of every declared field of dataclass *cls*.

    Annotations are resolved with ``get_type_hints`` so string annotations
    work. If a forward reference cannot be resolved that field keeps its raw
    annotation and classifies as unsupported; its siblings are unaffected.
    """
    hints = _resolve_hints(cls)

    descriptors: list[FieldDescriptor] = []
    for f in dataclasses.fields(cls):
        hint, bits = _unwrap(hints.get(f.name, f.type))
        tag = parse_tag(f.metadata.get(tag_key))
        descriptors.append(
            FieldDescriptor(
                param=tag.name,
                name=f.name,
                hint=hint,
                kind=_classify(hint, bits),
                bits=bits,
                settable=not f.name.startswith("_"),
                tag=tag,
            )
        )
    return tuple(descriptors)


def build_field_map(cls: type, tag_key: str = TAG_KEY) -> dict[str, str]:
    """Map external parameter names to field names, in declaration order.

    When two fields share a parameter name the later field wins. Untagged
    fields all share the empty name, so at most one of them survives.
    """
    field_map: dict[str, str] = {}
    for descriptor in field_descriptors(cls, tag_key):
        field_map[descriptor.param] = descriptor.name
    return field_map
