"""reqbind: bind HTTP query and form parameters into dataclass fields.

Tag each field with the external parameter name, then bind a request
into an instance::

    from dataclasses import dataclass
    from datetime import datetime

    from reqbind import Request, bind_request, param

    @dataclass
    class Search:
        name: str = param("name", default="")
        is_cool: bool = param("is_cool", default=False)
        counter: int = param("counter", default=0)
        start: datetime | None = param("start", default=None)

    async def app(scope, receive, send):
        search = Search()
        await bind_request(Request.from_asgi(scope, receive), search)

Supported field types: ``str``, ``int`` (and ``Int8``..``Int64``),
``bool``, ``float`` (and ``Float32``), and ``datetime``.
"""

__version__ = "0.1.0"
__all__ = [
    "BindConfig",
    "BindError",
    "ConfigurationError",
    "ConversionError",
    "DecodeError",
    "FieldError",
    "Float32",
    "Float64",
    "FormData",
    "FormParseError",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "Policy",
    "QueryParams",
    "ReqbindError",
    "Request",
    "TargetError",
    "TimeFormatError",
    "UnsupportedTypeError",
    "bind",
    "bind_new",
    "bind_request",
    "param",
]

# Public name -> defining module
_LAZY_IMPORTS: dict[str, str] = {
    "BindConfig": "reqbind.config",
    "Policy": "reqbind.config",
    "BindError": "reqbind.errors",
    "ConfigurationError": "reqbind.errors",
    "ConversionError": "reqbind.errors",
    "DecodeError": "reqbind.errors",
    "FieldError": "reqbind.errors",
    "FormParseError": "reqbind.errors",
    "ReqbindError": "reqbind.errors",
    "TargetError": "reqbind.errors",
    "TimeFormatError": "reqbind.errors",
    "UnsupportedTypeError": "reqbind.errors",
    "FormData": "reqbind.http.forms",
    "QueryParams": "reqbind.http.query",
    "Request": "reqbind.http.request",
    "Float32": "reqbind.binding.fields",
    "Float64": "reqbind.binding.fields",
    "Int8": "reqbind.binding.fields",
    "Int16": "reqbind.binding.fields",
    "Int32": "reqbind.binding.fields",
    "Int64": "reqbind.binding.fields",
    "bind": "reqbind.binding.binder",
    "bind_new": "reqbind.binding.binder",
    "bind_request": "reqbind.binding.binder",
    "param": "reqbind.binding.tags",
}


def __getattr__(name: str) -> object:
    """Lazy imports for the public API.

    Keeps ``import reqbind`` cheap while providing a flat top-level API.
    """
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    import importlib

    return getattr(importlib.import_module(module_name), name)
