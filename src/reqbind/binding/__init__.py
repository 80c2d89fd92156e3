"""Request binding: fill dataclass fields from query and form parameters.

Usage::

    from dataclasses import dataclass
    from datetime import datetime

    from reqbind.binding import bind_request, param

    @dataclass
    class Search:
        name: str = param("name", default="")
        is_cool: bool = param("is_cool", default=False)
        counter: int = param("counter", default=0)
        start: datetime | None = param("start", default=None)

    async def handler(request):
        search = Search()
        await bind_request(request, search)
"""

from reqbind.binding.binder import as_source, bind, bind_new, bind_request, is_bindable
from reqbind.binding.convert import parse_bool, parse_float, parse_int, set_field, unquote_value
from reqbind.binding.fields import (
    FieldDescriptor,
    FieldKind,
    Float32,
    Float64,
    Int8,
    Int16,
    Int32,
    Int64,
    Width,
    build_field_map,
    field_descriptors,
)
from reqbind.binding.source import LoadableSource, MappingSource, ParameterSource
from reqbind.binding.tags import TAG_KEY, ParamTag, param, parse_tag
from reqbind.binding.target import validate_target

__all__ = [
    "TAG_KEY",
    "FieldDescriptor",
    "FieldKind",
    "Float32",
    "Float64",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "LoadableSource",
    "MappingSource",
    "ParamTag",
    "ParameterSource",
    "Width",
    "as_source",
    "bind",
    "bind_new",
    "bind_request",
    "build_field_map",
    "field_descriptors",
    "is_bindable",
    "param",
    "parse_bool",
    "parse_float",
    "parse_int",
    "parse_tag",
    "set_field",
    "unquote_value",
    "validate_target",
]
