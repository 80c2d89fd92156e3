"""Form body parsing: URL-encoded and multipart.

URL-encoded bodies use stdlib ``urllib.parse``. Multipart bodies are handed
to ``python-multipart``; reqbind only collects the parts it produces.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any
from urllib.parse import parse_qs

from reqbind._internal.multimap import MultiDict

URLENCODED = "application/x-www-form-urlencoded"
MULTIPART = "multipart/form-data"
FORM_CONTENT_TYPES = frozenset({URLENCODED, MULTIPART})


@dataclass(frozen=True, slots=True)
class UploadFile:
    """An uploaded file from a multipart form submission.

    Held in memory; the binder never reads files, they are kept so handlers
    can reach them through ``FormData.files``.
    """

    filename: str
    content_type: str
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)

    def __repr__(self) -> str:
        return f"UploadFile({self.filename!r}, {self.content_type!r}, {self.size} bytes)"


class FormData(MultiDict):
    """Immutable parsed form data.

    String fields behave like ``QueryParams``; uploaded files live apart in
    ``files`` so a file part never shadows a text value of the same name.

    Usage::

        form = await request.form()
        username = form["username"]
        avatar = form.files.get("avatar")  # UploadFile or None
    """

    _files: dict[str, UploadFile]

    __slots__ = ("_files",)

    def __init__(
        self,
        data: dict[str, list[str]] | None = None,
        files: dict[str, UploadFile] | None = None,
    ) -> None:
        object.__setattr__(self, "_files", files or {})
        super().__init__(data)

    @property
    def files(self) -> Mapping[str, UploadFile]:
        """Uploaded files by field name."""
        return self._files


def media_type(content_type: str) -> str:
    """Return the lower-cased media type of a Content-Type value, sans parameters."""
    return content_type.split(";", 1)[0].strip().lower()


def parse_form_data(body: bytes, content_type: str) -> FormData:
    """Parse a form body into FormData.

    Args:
        body: Raw request body bytes.
        content_type: The full Content-Type header value (boundary included).

    Returns:
        Parsed FormData instance.

    Raises:
        ValueError: If the content type is not a form encoding, or the body
            is malformed. ``python-multipart`` parse errors are ``ValueError``
            subclasses.
    """
    kind = media_type(content_type)

    if kind == URLENCODED:
        return _parse_urlencoded(body)

    if kind == MULTIPART:
        return _parse_multipart(body, content_type)

    msg = f"Unsupported form content type: {content_type!r}"
    raise ValueError(msg)


def _parse_urlencoded(body: bytes) -> FormData:
    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError as exc:
        msg = "URL-encoded form body is not valid UTF-8"
        raise ValueError(msg) from exc
    return FormData(parse_qs(text, keep_blank_values=True))


def _parse_multipart(body: bytes, content_type: str) -> FormData:
    from python_multipart.multipart import MultipartParser, parse_options_header

    _, options = parse_options_header(content_type)
    boundary = options.get(b"boundary")
    if not boundary:
        msg = "Multipart form data missing boundary parameter"
        raise ValueError(msg)

    data: dict[str, list[str]] = {}
    files: dict[str, UploadFile] = {}

    headers: dict[str, str] = {}
    header_name = bytearray()
    header_value = bytearray()
    content = bytearray()

    def on_part_begin() -> None:
        headers.clear()
        content.clear()

    def on_header_field(chunk: bytes, start: int, end: int) -> None:
        header_name.extend(chunk[start:end])

    def on_header_value(chunk: bytes, start: int, end: int) -> None:
        header_value.extend(chunk[start:end])

    def on_header_end() -> None:
        headers[header_name.decode("latin-1").lower()] = header_value.decode("latin-1")
        header_name.clear()
        header_value.clear()

    def on_part_data(chunk: bytes, start: int, end: int) -> None:
        content.extend(chunk[start:end])

    def on_part_end() -> None:
        _, params = parse_options_header(headers.get("content-disposition", ""))
        name = params.get(b"name")
        if name is None:
            return
        field = name.decode("utf-8")
        filename = params.get(b"filename")
        if filename is not None:
            files[field] = UploadFile(
                filename=filename.decode("utf-8"),
                content_type=headers.get("content-type", "application/octet-stream"),
                content=bytes(content),
            )
        else:
            data.setdefault(field, []).append(content.decode("utf-8", errors="replace"))

    callbacks: dict[str, Any] = {
        "on_part_begin": on_part_begin,
        "on_header_field": on_header_field,
        "on_header_value": on_header_value,
        "on_header_end": on_header_end,
        "on_part_data": on_part_data,
        "on_part_end": on_part_end,
    }

    parser = MultipartParser(boundary, callbacks)
    parser.write(body)
    parser.finalize()

    return FormData(data, files)
