"""Timestamp formats accepted by ``datetime`` fields.

Each ``TimeFormat`` pairs a display layout, written with the reference time
``Mon Jan 2 15:04:05 MST 2006``, with a ``strptime`` pattern.
``parse_time`` tries formats in order and the first one that parses wins.

Zone abbreviations (``MST``, ``PDT``) carry no offset of their own, so they
become a fixed zero-offset zone that keeps the abbreviation as its name.
``UTC`` and ``GMT`` map to ``timezone.utc``. Results are always aware.
"""

import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

# "%Z" in a pattern marks a zone abbreviation slot
_ZONE_ABBR = re.compile(r"(?<![A-Za-z])([A-Z]{3,5})(?![A-Za-z])")

# strptime's %f stops at microseconds
_LONG_FRACTION = re.compile(r"(\.\d{6})\d+")

_UTC_NAMES = frozenset({"UTC", "GMT"})


@dataclass(frozen=True, slots=True)
class TimeFormat:
    """A named timestamp format.

    Attributes:
        name: Short identifier (``"RFC1123"``).
        layout: Human-readable layout using the reference time.
        pattern: ``strptime`` pattern. ``%Z`` stands for a zone abbreviation.
    """

    name: str
    layout: str
    pattern: str

    def parse(self, value: str) -> datetime:
        """Parse *value* with this format.

        Raises ``ValueError`` if *value* does not match.
        """
        pattern = self.pattern
        zone: timezone | None = None

        if "%Z" in pattern:
            matches = list(_ZONE_ABBR.finditer(value))
            if not matches:
                msg = f"{value!r} has no zone abbreviation for {self.name}"
                raise ValueError(msg)
            m = matches[-1]
            abbr = m.group(1)
            zone = timezone.utc if abbr in _UTC_NAMES else timezone(timedelta(0), abbr)
            value = f"{value[: m.start()]}+0000{value[m.end() :]}"
            pattern = pattern.replace("%Z", "%z")

        if "%f" in pattern:
            value = _LONG_FRACTION.sub(r"\1", value)

        parsed = datetime.strptime(value, pattern)
        if zone is not None:
            return parsed.replace(tzinfo=zone)
        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=timezone.utc)
        return parsed


RFC1123 = TimeFormat("RFC1123", "Mon, 02 Jan 2006 15:04:05 MST", "%a, %d %b %Y %H:%M:%S %Z")
RFC1123Z = TimeFormat("RFC1123Z", "Mon, 02 Jan 2006 15:04:05 -0700", "%a, %d %b %Y %H:%M:%S %z")
RFC3339 = TimeFormat("RFC3339", "2006-01-02T15:04:05Z07:00", "%Y-%m-%dT%H:%M:%S%z")
RFC3339_NANO = TimeFormat(
    "RFC3339Nano", "2006-01-02T15:04:05.999999999Z07:00", "%Y-%m-%dT%H:%M:%S.%f%z"
)
RFC822 = TimeFormat("RFC822", "02 Jan 06 15:04 MST", "%d %b %y %H:%M %Z")
RFC822Z = TimeFormat("RFC822Z", "02 Jan 06 15:04 -0700", "%d %b %y %H:%M %z")
RFC850 = TimeFormat("RFC850", "Monday, 02-Jan-06 15:04:05 MST", "%A, %d-%b-%y %H:%M:%S %Z")
UNIX_DATE = TimeFormat("UnixDate", "Mon Jan _2 15:04:05 MST 2006", "%a %b %d %H:%M:%S %Z %Y")
DATE_ONLY = TimeFormat("DateOnly", "2006-01-02", "%Y-%m-%d")

TIME_FORMATS: tuple[TimeFormat, ...] = (
    RFC1123,
    RFC1123Z,
    RFC3339,
    RFC3339_NANO,
    RFC822,
    RFC822Z,
    RFC850,
    UNIX_DATE,
    DATE_ONLY,
)


def parse_time(value: str, formats: tuple[TimeFormat, ...] = TIME_FORMATS) -> datetime:
    """Parse *value* against *formats* in order and return the first match.

    Raises ``ValueError`` naming every tried format when none match.
    """
    for fmt in formats:
        try:
            return fmt.parse(value)
        except ValueError:
            continue
    names = ", ".join(fmt.name for fmt in formats)
    msg = f"{value!r} matches none of: {names}"
    raise ValueError(msg)
