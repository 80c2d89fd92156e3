"""Bind request parameters into dataclass records.

The pipeline runs in a fixed order: validate the target, build the
parameter-to-field map, then convert and write each mapped value. The
first error aborts the call; fields written before it keep their values.
"""

import dataclasses
from collections.abc import Mapping
from typing import Any, TypeVar

from reqbind.binding.convert import set_field
from reqbind.binding.fields import build_field_map, field_descriptors
from reqbind.binding.source import LoadableSource, MappingSource, ParameterSource
from reqbind.binding.tags import TAG_KEY
from reqbind.binding.target import NOT_A_RECORD, validate_target
from reqbind.config import DEFAULT_CONFIG, BindConfig
from reqbind.errors import TargetError

T = TypeVar("T")


def as_source(source: ParameterSource | Mapping[str, Any]) -> ParameterSource:
    """Return *source* as a ``ParameterSource``, wrapping plain mappings."""
    if isinstance(source, ParameterSource):
        return source
    if isinstance(source, Mapping):
        return MappingSource(source)
    msg = f"Expected a ParameterSource or Mapping, got {type(source).__name__}"
    raise TypeError(msg)


def bind(
    source: ParameterSource | Mapping[str, Any],
    target: object,
    *,
    config: BindConfig | None = None,
) -> None:
    """Write parameter values from *source* into the dataclass instance *target*.

    Usage::

        @dataclass
        class Search:
            name: str = param("name", default="")
            counter: int = param("counter", default=0)

        search = Search()
        bind({"name": "Joe", "counter": "1"}, search)

    Args:
        source: A ``ParameterSource`` (such as a loaded ``Request``) or any
            ``Mapping`` of parameter names to strings.
        target: Instance of a non-frozen dataclass, modified in place.
        config: Binding options; defaults to ``BindConfig()``.

    Raises:
        TargetError: *target* is not a mutable dataclass instance.
        FieldError: A value could not be decoded or converted; see
            ``set_field`` for the subclasses.
    """
    config = config or DEFAULT_CONFIG
    cls = validate_target(target)
    reader = as_source(source)

    descriptors = {d.name: d for d in field_descriptors(cls, config.tag)}
    for field_name in build_field_map(cls, config.tag).values():
        set_field(target, descriptors[field_name], reader, config)


async def bind_request(
    request: LoadableSource,
    target: object,
    *,
    config: BindConfig | None = None,
) -> None:
    """Load the request's parameters if needed, then ``bind`` them into *target*.

    Query values take precedence over form values.

    Raises:
        TargetError: Before the body is read, if *target* is invalid.
        FormParseError: The form body could not be loaded.
        FieldError: As for ``bind``.
    """
    config = config or DEFAULT_CONFIG
    validate_target(target)
    if not request.params_loaded:
        await request.load_params(max_size=config.max_form_size)
    bind(request, target, config=config)


async def bind_new(
    request: LoadableSource,
    cls: type[T],
    *,
    config: BindConfig | None = None,
) -> T:
    """Create ``cls()`` and bind the request into it.

    Every field of *cls* needs a default.
    """
    if not isinstance(cls, type) or not dataclasses.is_dataclass(cls):
        msg = f"{NOT_A_RECORD} (got {cls!r})"
        raise TargetError(msg)
    try:
        record = cls()
    except TypeError as exc:
        msg = f"{cls.__name__} cannot be created without arguments; give every field a default"
        raise TargetError(msg) from exc
    await bind_request(request, record, config=config)
    return record


def is_bindable(annotation: Any, tag_key: str = TAG_KEY) -> bool:
    """Return True if *annotation* is a dataclass type with tagged fields."""
    if not isinstance(annotation, type) or not dataclasses.is_dataclass(annotation):
        return False
    return any(tag_key in f.metadata for f in dataclasses.fields(annotation))
