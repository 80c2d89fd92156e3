"""Parameter sources: where the binder reads raw string values from."""

from collections.abc import Mapping
from typing import Protocol, runtime_checkable

from reqbind.http.forms import FormData


@runtime_checkable
class ParameterSource(Protocol):
    """Anything that can answer "what is the string value of *name*?".

    Missing names answer ``""``.
    """

    def value(self, name: str) -> str: ...


@runtime_checkable
class LoadableSource(ParameterSource, Protocol):
    """A parameter source whose values must be loaded before lookup.

    ``reqbind.http.request.Request`` implements this.
    """

    @property
    def params_loaded(self) -> bool: ...

    async def load_params(self, max_size: int = ...) -> FormData: ...


class MappingSource:
    """Adapts a ``Mapping`` (dict, ``QueryParams``, ``FormData``) to a source.

    List values (as produced by ``urllib.parse.parse_qs``) contribute their
    first element.
    """

    __slots__ = ("_data",)

    def __init__(self, data: Mapping[str, object]) -> None:
        self._data = data

    def value(self, name: str) -> str:
        found = self._data.get(name)
        if isinstance(found, (list, tuple)):
            found = found[0] if found else None
        if found is None:
            return ""
        return found if isinstance(found, str) else str(found)
