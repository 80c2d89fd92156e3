"""Immutable, case-insensitive HTTP headers built from ASGI byte pairs."""

from reqbind._internal.multimap import MultiDict


class Headers(MultiDict):
    """Immutable, case-insensitive HTTP headers.

    Names are lower-cased once at construction; lookups lower-case the key.
    ``get_list`` returns every value sent under a name.
    """

    __slots__ = ()

    def __init__(self, raw: tuple[tuple[bytes, bytes], ...] = ()) -> None:
        data: dict[str, list[str]] = {}
        for name, value in raw:
            data.setdefault(name.decode("latin-1").lower(), []).append(value.decode("latin-1"))
        super().__init__(data)

    def _key(self, key: str) -> str:
        return key.lower()

    @property
    def content_type(self) -> str | None:
        """The media type of ``Content-Type`` without parameters, lower-cased."""
        value = self.get("content-type")
        if value is None:
            return None
        return value.split(";", 1)[0].strip().lower()

    @property
    def content_length(self) -> int | None:
        """``Content-Length`` as int, or ``None`` if missing or malformed."""
        value = self.get("content-length")
        if value is None:
            return None
        try:
            return int(value)
        except ValueError:
            return None
