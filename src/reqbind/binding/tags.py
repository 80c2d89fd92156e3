"""Parameter tags: the ``"name,opt,..."`` strings stored in field metadata.

Only the name takes part in binding. Options are parsed and kept on the
descriptor so they can be inspected, but the binder does not act on them.
"""

import dataclasses
from dataclasses import dataclass
from typing import Any

from reqbind.config import TAG_KEY


@dataclass(frozen=True, slots=True)
class ParamTag:
    """A parsed parameter tag.

    Attributes:
        name: External parameter name. Empty for untagged fields.
        options: Everything after the first comma, split on commas.
    """

    name: str
    options: tuple[str, ...] = ()

    def has_option(self, option: str) -> bool:
        return option in self.options


def parse_tag(raw: str | None) -> ParamTag:
    """Split a raw tag into name and options.

    ``None`` and ``""`` yield an empty name, the key every untagged field
    maps to.
    """
    if not raw:
        return ParamTag("")
    name, *options = raw.split(",")
    return ParamTag(name, tuple(opt.strip() for opt in options if opt.strip()))


def param(
    name: str,
    *options: str,
    default: Any = dataclasses.MISSING,
    default_factory: Any = dataclasses.MISSING,
    tag: str = TAG_KEY,
    metadata: dict[str, Any] | None = None,
) -> Any:
    """A ``dataclasses.field()`` that carries a parameter tag.

    Usage::

        @dataclass
        class Search:
            query: str = param("q", default="")
            page: int = param("page", default=1)

    Args:
        name: External parameter name.
        *options: Extra tag options, stored after the name.
        default: Field default, as for ``dataclasses.field``.
        default_factory: Field default factory, as for ``dataclasses.field``.
        tag: Metadata key; must match ``BindConfig.tag``.
        metadata: Additional field metadata to merge in.
    """
    merged = dict(metadata or {})
    merged[tag] = ",".join((name, *options))
    return dataclasses.field(default=default, default_factory=default_factory, metadata=merged)
