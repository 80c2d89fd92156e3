"""Immutable HTTP request.

Frozen metadata with async body access. The request is the binder's
parameter source: query values first, then form values once loaded.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from dataclasses import dataclass, field
from typing import Any

from reqbind._internal.asgi import Receive, Scope
from reqbind.errors import FormParseError
from reqbind.http.forms import FORM_CONTENT_TYPES, FormData, parse_form_data
from reqbind.http.headers import Headers
from reqbind.http.query import QueryParams

logger = logging.getLogger("reqbind.http")

# Methods whose bodies are read for form parameters
BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})

DEFAULT_MAX_FORM_SIZE = 10 * 1024 * 1024


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    Metadata (method, path, headers, query) is frozen at creation.
    The body is read asynchronously, once, and cached along with the
    parsed form.
    """

    method: str
    path: str
    headers: Headers
    query: QueryParams

    # Private: ASGI receive callable for body streaming
    _receive: Receive

    # Private: mutable cache for body and parsed form data
    # (dict contents are mutable even though the field reference is frozen)
    _cache: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    # -- Body access --

    async def body(self, max_size: int | None = None) -> bytes:
        """Read the full request body.

        The ASGI receive is consumed once; later calls return the cached
        bytes. Raises ``FormParseError`` when *max_size* is exceeded.
        """
        if "_body" in self._cache:
            return self._cache["_body"]
        chunks: list[bytes] = []
        total = 0
        async for chunk in self.stream():
            total += len(chunk)
            if max_size is not None and total > max_size:
                msg = f"error parsing request form: body exceeds {max_size} bytes"
                raise FormParseError(msg)
            chunks.append(chunk)
        result = b"".join(chunks)
        self._cache["_body"] = result
        return result

    async def stream(self) -> AsyncGenerator[bytes]:
        """Stream the request body in chunks."""
        while True:
            message = await self._receive()
            body = message.get("body", b"")
            if body:
                yield body
            if not message.get("more_body", False):
                break

    # -- Parameter source --

    @property
    def params_loaded(self) -> bool:
        """True once ``load_params()`` has run for this request."""
        return "_form" in self._cache

    async def load_params(self, max_size: int = DEFAULT_MAX_FORM_SIZE) -> FormData:
        """Read and parse the form body, once.

        Only POST, PUT, and PATCH bodies with a form content type are parsed;
        every other request gets an empty ``FormData``.

        Raises:
            FormParseError: If the body is larger than *max_size* or cannot
                be parsed.
        """
        if "_form" in self._cache:
            return self._cache["_form"]

        form = FormData()
        content_type = self.headers.get("content-type") or ""
        if self.method in BODY_METHODS and self.headers.content_type in FORM_CONTENT_TYPES:
            length = self.headers.content_length
            if length is not None and length > max_size:
                msg = f"error parsing request form: body exceeds {max_size} bytes"
                raise FormParseError(msg)
            raw = await self.body(max_size=max_size)
            try:
                form = parse_form_data(raw, content_type)
            except ValueError as exc:
                msg = f"error parsing request form: {exc}"
                raise FormParseError(msg) from exc
            logger.debug("Parsed %d form field(s) for %s %s", len(form), self.method, self.path)

        self._cache["_form"] = form
        return form

    def value(self, name: str) -> str:
        """Return the first non-empty value for *name*, or ``""``.

        Query values are checked before form values. Until ``load_params()``
        has run only the query string is visible.
        """
        found = self.query.get(name)
        if found:
            return found
        form: FormData | None = self._cache.get("_form")
        if form is not None:
            return form.get(name) or ""
        return ""

    # -- Factory --

    @classmethod
    def from_asgi(cls, scope: Scope, receive: Receive) -> Request:
        """Create a Request from an ASGI scope and receive callable."""
        return cls(
            method=scope["method"],
            path=scope["path"],
            headers=Headers(tuple(scope.get("headers", ()))),
            query=QueryParams(scope.get("query_string", b"")),
            _receive=receive,
        )
