# ./policy/duration.py

import re
from datetime import timedelta
from typing import Any

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

NANOSECOND = 1
MICROSECOND = 1000 * NANOSECOND
MILLISECOND = 1000 * MICROSECOND
SECOND = 1000 * MILLISECOND
MINUTE = 60 * SECOND
HOUR = 60 * MINUTE

_MAX_NANOSECONDS = (1 << 63) - 1

_UNITS = {
    "ns": NANOSECOND,
    "us": MICROSECOND,
    "µs": MICROSECOND,  # micro sign
    "μs": MICROSECOND,  # greek mu
    "ms": MILLISECOND,
    "s": SECOND,
    "m": MINUTE,
    "h": HOUR,
}

_COMPONENT = re.compile(r"(?P<whole>[0-9]*)(?:\.(?P<frac>[0-9]*))?(?P<unit>[^0-9.]*)")


class MalformedInterval(ValueError):
    """
    Raised when text cannot be decoded into an Interval.

    Attributes:
        text (str): The raw offending text.
    """

    def __init__(self, text: str, reason: str):
        self.text = text
        self.reason = reason
        super().__init__(f"invalid Interval {text!r}: {reason}")


def _split_fraction(value: int, precision: int):
    scale = 10 ** precision
    digits = str(value % scale).rjust(precision, "0").rstrip("0")
    return value // scale, ("." + digits) if digits else ""


def format_duration(nanoseconds: int) -> str:
    """
    Render a nanosecond count in standard duration notation, e.g. "1h30m0s", "1.5s", "250ms".
    Zero renders as "0s".
    """
    if nanoseconds == 0:
        return "0s"
    sign = "-" if nanoseconds < 0 else ""
    u = abs(nanoseconds)

    if u < SECOND:
        if u < MICROSECOND:
            return f"{sign}{u}ns"
        if u < MILLISECOND:
            whole, frac = _split_fraction(u, 3)
            return f"{sign}{whole}{frac}µs"
        whole, frac = _split_fraction(u, 6)
        return f"{sign}{whole}{frac}ms"

    seconds, frac = _split_fraction(u, 9)
    text = f"{seconds % 60}{frac}s"
    minutes = seconds // 60
    if minutes:
        text = f"{minutes % 60}m{text}"
        hours = minutes // 60
        if hours:
            text = f"{hours}h{text}"
    return sign + text


def parse_duration(text: str) -> int:
    """
    Parse duration text into a signed nanosecond count.

    The grammar is an optional sign followed by one or more decimal numbers,
    each with an optional fraction and a mandatory unit suffix, such as
    "300ms", "-1.5h" or "2h45m". A bare "0" is also accepted.

    Raises:
        MalformedInterval: If the text does not follow the grammar or overflows.
    """
    if not isinstance(text, str):
        raise MalformedInterval(repr(text), "expected duration text")

    s = text
    negative = False
    if s[:1] in ("-", "+"):
        negative = s[0] == "-"
        s = s[1:]
    if s == "0":
        return 0
    if not s:
        raise MalformedInterval(text, "empty duration")

    total = 0
    pos = 0
    while pos < len(s):
        match = _COMPONENT.match(s, pos)
        whole, frac, unit = match.group("whole"), match.group("frac"), match.group("unit")
        if not whole and not frac:
            raise MalformedInterval(text, "expected a number")
        if not unit:
            raise MalformedInterval(text, "missing unit")
        if unit not in _UNITS:
            raise MalformedInterval(text, f"unknown unit {unit!r}")

        scale = _UNITS[unit]
        total += int(whole or 0) * scale
        if frac:
            total += int(frac) * scale // 10 ** len(frac)
        if total > _MAX_NANOSECONDS + (1 if negative else 0):
            raise MalformedInterval(text, "duration out of range")
        pos = match.end()

    return -total if negative else total


class Interval(int):
    """
    A signed time interval with nanosecond resolution.

    On the wire an Interval is a quoted duration string ("500ms", "2h0m0s"),
    never a raw number. A zero Interval means the feature it drives is disabled.
    """

    def __new__(cls, nanoseconds: int = 0):
        return super().__new__(cls, nanoseconds)

    @classmethod
    def parse(cls, text: str) -> "Interval":
        """Build an Interval from unquoted duration text."""
        return cls(parse_duration(text))

    @classmethod
    def from_json(cls, text: str) -> "Interval":
        """
        Decode a quoted duration string, e.g. '"1h30m"'.

        Raises:
            MalformedInterval: If the text is shorter than two characters, is not quoted,
                or its payload is not valid duration text.
        """
        if not isinstance(text, str) or len(text) < 2:
            raise MalformedInterval(str(text), "too short to hold a quoted duration")
        if text[0] != '"' or text[-1] != '"':
            raise MalformedInterval(text, "duration must be a quoted string")
        try:
            return cls.parse(text[1:-1])
        except MalformedInterval as e:
            raise MalformedInterval(text, e.reason) from e

    @classmethod
    def from_timedelta(cls, delta: timedelta) -> "Interval":
        return cls((delta.days * 86400 + delta.seconds) * SECOND + delta.microseconds * MICROSECOND)

    def to_json(self) -> str:
        return '"' + str(self) + '"'

    def to_timedelta(self) -> timedelta:
        """Convert to a timedelta, truncating below microsecond resolution."""
        return timedelta(microseconds=int(self) // MICROSECOND)

    def total_seconds(self) -> float:
        return int(self) / SECOND

    @property
    def disabled(self) -> bool:
        return int(self) == 0

    def __str__(self) -> str:
        return format_duration(int(self))

    def __repr__(self) -> str:
        return f"Interval({format_duration(int(self))!r})"

    @classmethod
    def _validate(cls, value: Any) -> "Interval":
        if isinstance(value, Interval):
            return value
        if isinstance(value, timedelta):
            return cls.from_timedelta(value)
        if isinstance(value, str):
            return cls.parse(value)
        raise MalformedInterval(repr(value), "expected duration text, not a raw number")

    @staticmethod
    def _serialize(value: "Interval", info: core_schema.SerializationInfo) -> Any:
        return str(value) if info.mode_is_json() else value

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: GetCoreSchemaHandler) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls._validate,
            serialization=core_schema.plain_serializer_function_ser_schema(cls._serialize, info_arg=True),
        )


def serialize_interval(interval: Interval) -> str:
    """Encode an Interval as a quoted duration string."""
    return Interval(interval).to_json()


def deserialize_interval(text: str) -> Interval:
    """Decode a quoted duration string into an Interval."""
    return Interval.from_json(text)
