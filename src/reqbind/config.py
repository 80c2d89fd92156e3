"""Binding configuration.

BindConfig is a frozen dataclass: immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass
from enum import Enum

from reqbind.errors import ConfigurationError
from reqbind.http.request import DEFAULT_MAX_FORM_SIZE
from reqbind.times import TIME_FORMATS, TimeFormat

# Default field metadata key for parameter tags
TAG_KEY = "param"


class Policy(Enum):
    """What to do when an integer, boolean, or float value fails to convert.

    ``LENIENT`` leaves the field untouched and carries on. ``STRICT`` raises
    ``ConversionError``. Time fields raise under both policies.
    """

    LENIENT = "lenient"
    STRICT = "strict"


@dataclass(frozen=True, slots=True)
class BindConfig:
    """Binding configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = BindConfig(policy=Policy.STRICT, tag="query")
    """

    # Field metadata key holding the "name,opt,..." tag
    tag: str = TAG_KEY

    # Conversion failures for int/bool/float fields
    policy: Policy = Policy.LENIENT

    # Percent-decode values before conversion
    decode_values: bool = True

    # Tried in order; first match wins
    time_formats: tuple[TimeFormat, ...] = TIME_FORMATS

    # Limits
    max_form_size: int = DEFAULT_MAX_FORM_SIZE

    def __post_init__(self) -> None:
        if not self.tag:
            raise ConfigurationError("BindConfig.tag must be a non-empty string")
        if not isinstance(self.policy, Policy):
            msg = f"BindConfig.policy must be a Policy, got {self.policy!r}"
            raise ConfigurationError(msg)
        if not self.time_formats:
            raise ConfigurationError("BindConfig.time_formats must not be empty")
        if self.max_form_size <= 0:
            msg = f"BindConfig.max_form_size must be positive, got {self.max_form_size}"
            raise ConfigurationError(msg)


DEFAULT_CONFIG = BindConfig()
