"""Immutable query string parameters."""

from urllib.parse import parse_qs

from reqbind._internal.multimap import MultiDict


class QueryParams(MultiDict):
    """Parsed query string.

    Percent-escapes and ``+`` are decoded by ``urllib.parse.parse_qs``.
    Blank values are kept so ``?name=`` reads as an empty string.
    """

    __slots__ = ()

    def __init__(self, query_string: bytes = b"") -> None:
        super().__init__(parse_qs(query_string.decode("latin-1"), keep_blank_values=True))
