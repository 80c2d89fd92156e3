"""reqbind exception hierarchy.

Shared across the binder and the HTTP layer so every module raises and
catches the same types.
"""


class ReqbindError(Exception):
    """Base for all reqbind-specific errors."""


class ConfigurationError(ReqbindError):
    """Raised when a ``BindConfig`` is invalid.

    Typically raised from ``BindConfig.__post_init__`` at construction.
    """


class BindError(ReqbindError):
    """Base for errors raised while binding a request into a record.

    ``status`` lets an ASGI app answer binding failures with 400 Bad Request.
    """

    status: int = 400


class TargetError(BindError):
    """The bind target is not a mutable dataclass instance.

    Raised before any field is touched.
    """


class FormParseError(BindError):
    """The request's form parameters could not be loaded."""


class FieldError(BindError):
    """A single parameter could not be written into its field.

    Attributes:
        param: External parameter name.
        field: Field name on the record.
    """

    def __init__(self, param: str, field: str, detail: str) -> None:
        self.param = param
        self.field = field
        self.detail = detail
        super().__init__(f"error setting value for param {param!r}: {detail}")


class DecodeError(FieldError):
    """The raw value is not valid percent-encoded text."""


class UnsupportedTypeError(FieldError):
    """The field's declared type has no string conversion."""


class TimeFormatError(FieldError):
    """No known time format matched a ``datetime`` field's value."""


class ConversionError(FieldError):
    """A numeric or boolean value failed to convert (strict policy only)."""
