"""
Value parsers for typed environment getters

Every parser takes the raw string and either returns the typed value or raises
``ValueError``. The accessor turns that ``ValueError`` into "use the default".
"""

import re
from datetime import datetime, timedelta, timezone
from fractions import Fraction
from functools import lru_cache
from typing import List, NamedTuple, Pattern, Tuple

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1

_INT_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_FLOAT_SPECIAL_RE = re.compile(r"[+-]?(?:inf|infinity|nan)", re.IGNORECASE)
_HEX_FLOAT_RE = re.compile(r"[+-]?0[xX](?:[0-9a-fA-F]+\.?[0-9a-fA-F]*|\.[0-9a-fA-F]+)[pP][+-]?[0-9]+")

_TRUE_TOKENS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_TOKENS = frozenset({"0", "f", "F", "FALSE", "false", "False"})


def parse_str(value: str) -> str:
    return value


def parse_int(value: str) -> int:
    """Parse a base-10 signed integer that fits in 64 bits."""
    if not _INT_RE.fullmatch(value):
        raise ValueError(f"invalid integer: {value!r}")
    result = int(value)
    if not INT64_MIN <= result <= INT64_MAX:
        raise ValueError(f"integer out of range: {value!r}")
    return result


def parse_float(value: str) -> float:
    """
    Parse a 64 bit float

    Accepts decimal notation with optional exponent, hexadecimal notation with
    a binary exponent (``0x1p-2``) and the special values ``inf``, ``infinity``
    and ``nan`` in any case. Surrounding whitespace and digit separators are
    rejected. A finite literal too large for a double is out of range.
    """
    if _FLOAT_SPECIAL_RE.fullmatch(value):
        return float(value)
    if _HEX_FLOAT_RE.fullmatch(value):
        try:
            return float.fromhex(value)
        except OverflowError as e:
            raise ValueError(f"float out of range: {value!r}") from e
    if not _FLOAT_RE.fullmatch(value):
        raise ValueError(f"invalid float: {value!r}")
    result = float(value)
    if result in (float("inf"), float("-inf")):
        raise ValueError(f"float out of range: {value!r}")
    return result


def parse_bool(value: str) -> bool:
    """Accepts 1, t, T, TRUE, true, True, 0, f, F, FALSE, false, False."""
    if value in _TRUE_TOKENS:
        return True
    if value in _FALSE_TOKENS:
        return False
    raise ValueError(f"invalid boolean: {value!r}")


# Durations

NANOSECOND = 1
MICROSECOND = 1000 * NANOSECOND
MILLISECOND = 1000 * MICROSECOND
SECOND = 1000 * MILLISECOND
MINUTE = 60 * SECOND
HOUR = 60 * MINUTE

_UNIT_NS = {
    "ns": NANOSECOND,
    "us": MICROSECOND,
    "µs": MICROSECOND,  # micro sign
    "μs": MICROSECOND,  # greek small letter mu
    "ms": MILLISECOND,
    "s": SECOND,
    "m": MINUTE,
    "h": HOUR,
}

_DURATION_COMPONENT = r"([0-9]+(?:\.[0-9]*)?|\.[0-9]+)(ns|us|µs|μs|ms|s|m|h)"
_DURATION_RE = re.compile(f"(?:{_DURATION_COMPONENT})+")
_DURATION_COMPONENT_RE = re.compile(_DURATION_COMPONENT)


def parse_duration_ns(value: str) -> int:
    """
    Parse a duration string into integer nanoseconds

    A duration is a possibly signed sequence of decimal numbers, each with
    optional fraction and a unit suffix, such as "300ms", "-1.5h" or "2h45m".
    Valid time units are "ns", "us" (or "µs"), "ms", "s", "m", "h".

    Args:
        value: Raw duration string

    Returns:
        int: Total nanoseconds; fractions below one nanosecond are truncated
            per component

    Raises:
        ValueError: Malformed syntax, unknown unit or a total outside the
            signed 64 bit nanosecond range
    """
    body = value
    negative = False
    if body[:1] in ("+", "-"):
        negative = body[0] == "-"
        body = body[1:]

    # A bare zero is the only unit-less duration
    if body == "0":
        return 0
    if not body or not _DURATION_RE.fullmatch(body):
        raise ValueError(f"invalid duration: {value!r}")

    total = 0
    for number, unit in _DURATION_COMPONENT_RE.findall(body):
        total += int(Fraction(number.rstrip(".")) * _UNIT_NS[unit])
        if total > -INT64_MIN:
            raise ValueError(f"invalid duration: {value!r}")

    if negative:
        return -total
    if total > INT64_MAX:
        raise ValueError(f"invalid duration: {value!r}")
    return total


def parse_duration(value: str) -> timedelta:
    """Parse a duration string into a timedelta, truncating below one microsecond."""
    nanoseconds = parse_duration_ns(value)
    microseconds = abs(nanoseconds) // MICROSECOND
    return timedelta(microseconds=-microseconds if nanoseconds < 0 else microseconds)


# Timestamps

# Go reference-time chunks keyed by their first character, longest first. Each
# maps to a strptime directive and the exact text Go accepts for it. Zone
# offsets have no directive: they are cut out of the value and applied after
# strptime, as are fractional seconds.
_GO_LAYOUT_CHUNKS = {
    "J": [("January", "%B", r"[A-Za-z]+"), ("Jan", "%b", r"[A-Za-z]{3}")],
    "M": [
        ("Monday", "%A", r"[A-Za-z]+"),
        ("Mon", "%a", r"[A-Za-z]{3}"),
        ("MST", "%Z", r"[A-Za-z]{3,5}"),
    ],
    "0": [
        ("002", "%j", r"\d{3}"),
        ("01", "%m", r"\d{2}"),
        ("02", "%d", r"\d{2}"),
        ("03", "%I", r"\d{2}"),
        ("04", "%M", r"\d{2}"),
        ("05", "%S", r"\d{2}"),
        ("06", "%y", r"\d{2}"),
    ],
    "1": [("15", "%H", r"\d{1,2}"), ("1", "%m", r"\d{1,2}")],
    "2": [("2006", "%Y", r"\d{4}"), ("2", "%d", r"\d{1,2}")],
    "_": [("_2006", "_%Y", r"_\d{4}"), ("_2", "%d", r" ?\d{1,2}")],
    "3": [("3", "%I", r"\d{1,2}")],
    "4": [("4", "%M", r"\d{1,2}")],
    "5": [("5", "%S", r"\d{1,2}")],
    "P": [("PM", "%p", r"[AP]M")],
    "p": [("pm", "%p", r"[ap]m")],
    "-": [
        ("-07:00:00", None, r"[+-]\d{2}:\d{2}:\d{2}"),
        ("-070000", None, r"[+-]\d{6}"),
        ("-07:00", None, r"[+-]\d{2}:\d{2}"),
        ("-0700", None, r"[+-]\d{4}"),
        ("-07", None, r"[+-]\d{2}"),
    ],
    "Z": [
        ("Z07:00:00", None, r"Z|[+-]\d{2}:\d{2}:\d{2}"),
        ("Z070000", None, r"Z|[+-]\d{6}"),
        ("Z07:00", None, r"Z|[+-]\d{2}:\d{2}"),
        ("Z0700", None, r"Z|[+-]\d{4}"),
        ("Z07", None, r"Z|[+-]\d{2}"),
    ],
}

_SECONDS_CHUNKS = frozenset({"05", "5"})


class GoLayout(NamedTuple):
    """A Go layout compiled into a strict matcher and a strptime format"""

    pattern: Pattern[str]
    format: str


def _fraction_chunk(layout: str, i: int) -> Tuple[int, bool]:
    """
    Match a fractional-seconds chunk (".000", ",999") starting at ``i``

    Returns:
        Tuple[int, bool]: End index (``i`` when there is no chunk) and whether
            the fraction is optional (nines) rather than required (zeros)
    """
    if i + 1 >= len(layout) or layout[i] not in ".," or layout[i + 1] not in "09":
        return i, False
    digit = layout[i + 1]
    j = i + 1
    while j < len(layout) and layout[j] == digit:
        j += 1
    # ".0001" is literal text followed by a month, not a fraction
    if j < len(layout) and layout[j].isdigit():
        return i, False
    return j, digit == "9"


@lru_cache(maxsize=64)
def compile_go_layout(layout: str) -> GoLayout:
    """
    Compile a Go reference-time layout

    Layouts are written in terms of the reference time
    ``Mon Jan 2 15:04:05 MST 2006``, e.g. ``"2006-01-02 15:04:05"``. The
    pattern enforces Go's field widths and literal text; named groups
    ``frac<n>`` and ``tz<n>`` capture fractional seconds and numeric zone
    offsets, which the format leaves out.

    Args:
        layout: Go layout string

    Returns:
        GoLayout: Pattern for ``fullmatch`` and the matching strptime format
    """
    pattern: List[str] = []
    fmt: List[str] = []
    groups = 0
    i = 0
    while i < len(layout):
        end, optional = _fraction_chunk(layout, i)
        if end > i:
            body = r"[.,]\d+" if optional else r"[.,]\d{%d}" % (end - i - 1)
            pattern.append(f"(?P<frac{groups}>{body})" + ("?" if optional else ""))
            groups += 1
            i = end
            continue

        for chunk, directive, text in _GO_LAYOUT_CHUNKS.get(layout[i], ()):
            if not layout.startswith(chunk, i):
                continue
            i += len(chunk)
            if directive is None:
                pattern.append(f"(?P<tz{groups}>{text})")
                groups += 1
            else:
                pattern.append(f"(?:{text})")
                fmt.append(directive)
            # Go accepts a fraction after the seconds even when the layout has none
            if chunk in _SECONDS_CHUNKS and _fraction_chunk(layout, i)[0] == i:
                pattern.append(fr"(?P<frac{groups}>[.,]\d+)?")
                groups += 1
            break
        else:
            pattern.append(re.escape(layout[i]))
            fmt.append("%%" if layout[i] == "%" else layout[i])
            i += 1

    return GoLayout(re.compile("".join(pattern), re.ASCII), "".join(fmt))


def _parse_offset(text: str) -> timezone:
    if text == "Z":
        return timezone.utc
    digits = text[1:].replace(":", "")
    hours = int(digits[0:2])
    minutes = int(digits[2:4] or 0)
    seconds = int(digits[4:6] or 0)
    if hours > 23 or minutes > 59 or seconds > 59:
        raise ValueError(f"zone offset out of range: {text!r}")
    offset = timedelta(hours=hours, minutes=minutes, seconds=seconds)
    return timezone(-offset if text[0] == "-" else offset)


def _parse_go_time(layout: str, value: str) -> datetime:
    compiled = compile_go_layout(layout)
    match = compiled.pattern.fullmatch(value)
    if match is None:
        raise ValueError(f"time {value!r} does not match layout {layout!r}")

    microsecond = None
    tzinfo = None
    cuts = []
    for name, text in match.groupdict().items():
        if text is None:
            continue
        cuts.append(match.span(name))
        if name.startswith("frac"):
            # Digits past microseconds are truncated
            microsecond = int(text[1:7].ljust(6, "0"))
        elif tzinfo is None:
            tzinfo = _parse_offset(text)

    remaining = value
    for start, stop in sorted(cuts, reverse=True):
        remaining = remaining[:start] + remaining[stop:]

    parsed = datetime.strptime(remaining, compiled.format)
    if microsecond is not None:
        parsed = parsed.replace(microsecond=microsecond)
    return parsed.replace(tzinfo=tzinfo or timezone.utc)


def parse_time(layout: str, value: str) -> datetime:
    """
    Parse a timestamp against a layout

    Args:
        layout: A ``strptime`` format when it contains ``%``, otherwise a Go
            reference-time layout
        value: Raw timestamp string

    Returns:
        datetime: Timezone-aware datetime; values without zone information
            are taken as UTC

    Raises:
        ValueError: The value does not match the layout
    """
    if "%" not in layout:
        return _parse_go_time(layout, value)

    parsed = datetime.strptime(value, layout)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


__all__ = [
    "parse_str",
    "parse_int",
    "parse_float",
    "parse_bool",
    "parse_duration",
    "parse_duration_ns",
    "parse_time",
    "compile_go_layout",
    "GoLayout",
]
