"""Tests for reqbind.http.forms — URL-encoded and multipart form parsing."""

import pytest

from reqbind.http.forms import FormData, UploadFile, media_type, parse_form_data

BOUNDARY = "----reqbindboundary"


def _multipart(*parts: tuple[str, str, str | None]) -> bytes:
    """Build a multipart body from (name, content, filename) triples."""
    chunks: list[str] = []
    for name, content, filename in parts:
        disposition = f'form-data; name="{name}"'
        if filename is not None:
            disposition += f'; filename="{filename}"'
        chunks.append(f"--{BOUNDARY}\r\nContent-Disposition: {disposition}\r\n")
        if filename is not None:
            chunks.append("Content-Type: text/plain\r\n")
        chunks.append(f"\r\n{content}\r\n")
    chunks.append(f"--{BOUNDARY}--\r\n")
    return "".join(chunks).encode("utf-8")


class TestFormData:
    def test_getitem_returns_first(self) -> None:
        form = FormData({"color": ["red", "blue"]})
        assert form["color"] == "red"
        assert form.get_list("color") == ["red", "blue"]

    def test_get_with_default(self) -> None:
        form = FormData()
        assert form.get("missing") is None
        assert form.get("missing", "fallback") == "fallback"

    def test_files_empty_by_default(self) -> None:
        assert len(FormData({"x": ["1"]}).files) == 0

    def test_repr(self) -> None:
        assert repr(FormData({"name": ["alice"]})) == "FormData({'name': 'alice'})"


class TestUploadFile:
    def test_size_and_repr(self) -> None:
        upload = UploadFile("notes.txt", "text/plain", b"hello")
        assert upload.size == 5
        assert repr(upload) == "UploadFile('notes.txt', 'text/plain', 5 bytes)"


class TestMediaType:
    def test_strips_parameters_and_case(self) -> None:
        assert media_type("Application/X-WWW-Form-Urlencoded; charset=utf-8") == (
            "application/x-www-form-urlencoded"
        )


class TestParseUrlencoded:
    def test_basic(self) -> None:
        form = parse_form_data(b"name=Joe&counter=1", "application/x-www-form-urlencoded")
        assert form["name"] == "Joe"
        assert form["counter"] == "1"

    def test_decodes_escapes(self) -> None:
        body = b"name=Joe%20Smith&city=New+York"
        form = parse_form_data(body, "application/x-www-form-urlencoded")
        assert form["name"] == "Joe Smith"
        assert form["city"] == "New York"

    def test_invalid_utf8(self) -> None:
        with pytest.raises(ValueError, match="UTF-8"):
            parse_form_data(b"name=\xff\xfe", "application/x-www-form-urlencoded")


class TestParseMultipart:
    def test_fields(self) -> None:
        body = _multipart(("name", "Joe", None), ("counter", "1", None))
        form = parse_form_data(body, f"multipart/form-data; boundary={BOUNDARY}")
        assert form["name"] == "Joe"
        assert form["counter"] == "1"

    def test_repeated_fields(self) -> None:
        body = _multipart(("tag", "a", None), ("tag", "b", None))
        form = parse_form_data(body, f"multipart/form-data; boundary={BOUNDARY}")
        assert form.get_list("tag") == ["a", "b"]

    def test_file_kept_apart(self) -> None:
        body = _multipart(("name", "Joe", None), ("notes", "hello", "notes.txt"))
        form = parse_form_data(body, f"multipart/form-data; boundary={BOUNDARY}")
        assert "notes" not in form
        upload = form.files["notes"]
        assert upload.filename == "notes.txt"
        assert upload.content_type == "text/plain"
        assert upload.content == b"hello"

    def test_missing_boundary(self) -> None:
        with pytest.raises(ValueError, match="boundary"):
            parse_form_data(b"", "multipart/form-data")


class TestUnsupportedContentType:
    def test_json_rejected(self) -> None:
        with pytest.raises(ValueError, match="Unsupported form content type"):
            parse_form_data(b"{}", "application/json")
