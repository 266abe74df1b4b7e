"""
Typed value casting for terms and params.

Every declared term or param carries an ArgType tag. cast() maps a raw
string plus a tag to a typed value, or raises BadArgumentError with a short
reason. cast_value() chains the caller's validator after a successful cast;
a validator rejects by raising ValueError or TypeError, which surfaces as
RejectedArgumentError so the two failure kinds stay distinguishable.

Types
- BOOL      → bool   (1/true/yes/on, 0/false/no/off/"")
- INT       → int    (decimal, 0x hex, 0/0o octal)
- FLOAT     → float  (scientific notation, "," thousands grouping)
- FIXED     → str    (grouping separators "," and "_" stripped)
- STRING    → str    (identity)
- EMAIL, URL, DOMAIN, IP_ADDR, MAC_ADDR → canonical str
- DATE, DATETIME, TIME → "YYYY-MM-DD", "YYYY-MM-DD HH:MM:SS", "HH:MM:SS"
- INTERVAL  → str    ("1 year, 2 days, 10 minutes")
- UUID      → str    (8-4-4-4-12 hyphenated)
- DIR, INFILE, OUTFILE → canonical absolute path (checked on disk)

Canonical outputs are stable under re-casting (casting a cast value yields
the same value).
"""
import enum
import ipaddress
import os
import os.path
import re
import urllib.parse
from collections import defaultdict
from datetime import datetime

from dateutil import parser as dateparser
from dateutil.relativedelta import relativedelta, MO, TU, WE, TH, FR, SA, SU

from .faults import BadArgumentError, RejectedArgumentError, UnsupportedTypeError
from .utils import pluralize


class ArgType(enum.StrEnum):
    """
    closed set of value types a term or param may declare.
    """
    BOOL = "BOOL"
    DATE = "DATE"
    DATETIME = "DATETIME"
    DIR = "DIR"
    DOMAIN = "DOMAIN"
    EMAIL = "EMAIL"
    FIXED = "FIXED"
    FLOAT = "FLOAT"
    INFILE = "INFILE"
    INT = "INT"
    INTERVAL = "INTERVAL"
    IP_ADDR = "IP_ADDR"
    MAC_ADDR = "MAC_ADDR"
    OUTFILE = "OUTFILE"
    STRING = "STRING"
    TIME = "TIME"
    URL = "URL"
    UUID = "UUID"

    @classmethod
    def coerce(cls, tag, /):
        """
        resolve a type tag given as an ArgType or a case-insensitive string.

        raises
        - UnsupportedTypeError: the tag is not part of the closed set.
        """
        if isinstance(tag, cls):
            return tag
        if isinstance(tag, str):
            try:
                return cls(tag.strip().upper())
            except ValueError:
                pass
        raise UnsupportedTypeError("unsupported argument type: %s" % tag, type=tag)


_TRUE = frozenset(("1", "true", "yes", "on"))
_FALSE = frozenset(("0", "false", "no", "off", ""))

_DECIMAL = re.compile(r"[+-]?(0|[1-9][0-9]*)")
_HEXADECIMAL = re.compile(r"0[xX](?P<digits>[0-9a-fA-F]+)")
_OCTAL = re.compile(r"0[oO]?(?P<digits>[0-7]+)")
_FLOAT = re.compile(r"[+-]?((\d{1,3}(,\d{3})+|\d+)(\.\d*)?|\.\d+)([eE][+-]?\d+)?")
_FIXED = re.compile(r"[+-]?\d+([,_]\d{3})*(\.\d+)?")

_ATOM = r"[A-Za-z0-9!#$%&'*+/=?^_`{|}~-]+"
_EMAIL = re.compile(rf"(?P<local>{_ATOM}(\.{_ATOM})*)@(?P<domain>[^@]+)")
_LABEL = re.compile(r"[a-z0-9]([a-z0-9-]{0,61}[a-z0-9])?", re.IGNORECASE)
_SCHEME = re.compile(r"[a-z][a-z0-9+.-]*", re.IGNORECASE)
_MAC = re.compile(
    r"[0-9a-f]{2}(?P<separator>[:-])[0-9a-f]{2}((?P=separator)[0-9a-f]{2}){4}"
    r"|[0-9a-f]{4}\.[0-9a-f]{4}\.[0-9a-f]{4}",
    re.IGNORECASE,
)
_HEX_DIGITS = re.compile(r"[0-9a-fA-F]{32}")

# Relative phrase pieces: "+1 week", "+ 12 hours", "2 days,", "3 hours and"
_PHRASE = re.compile(r"\s*(?P<sign>[+-]?)\s*(?P<amount>\d+)\s*(?P<unit>[a-z]+)\s*(,|\band\b)?")
_WEEKDAY = re.compile(r"(?P<direction>next|last)\s+(?P<day>[a-z]+)")

# unit spelling → (relativedelta field, multiplier)
_UNITS = {
    "sec": ("seconds", 1),
    "secs": ("seconds", 1),
    "second": ("seconds", 1),
    "seconds": ("seconds", 1),
    "min": ("minutes", 1),
    "mins": ("minutes", 1),
    "minute": ("minutes", 1),
    "minutes": ("minutes", 1),
    "hour": ("hours", 1),
    "hours": ("hours", 1),
    "day": ("days", 1),
    "days": ("days", 1),
    "week": ("days", 7),
    "weeks": ("days", 7),
    "fortnight": ("days", 14),
    "fortnights": ("days", 14),
    "month": ("months", 1),
    "months": ("months", 1),
    "year": ("years", 1),
    "years": ("years", 1),
}

_WEEKDAYS = {
    "monday": MO,
    "tuesday": TU,
    "wednesday": WE,
    "thursday": TH,
    "friday": FR,
    "saturday": SA,
    "sunday": SU,
}

# Decomposition steps for intervals; months and years are fixed-length.
_SPANS = (
    ("year", 365 * 24 * 60 * 60),
    ("month", 30 * 24 * 60 * 60),
    ("day", 24 * 60 * 60),
    ("hour", 60 * 60),
    ("minute", 60),
    ("second", 1),
)


def _hostname(value, /):
    """
    return the lower-cased hostname, or None when value is not one.
    """
    host = value[:-1] if value.endswith(".") else value
    if not host or len(host) > 253:
        return None
    if not all(_LABEL.fullmatch(label) for label in host.split(".")):
        return None
    return host.lower()


def _relative(value, /):
    """
    parse a relative phrase ("2 days", "+1 week 3 hours", "1 day + 12 hours",
    "5 minutes ago").

    returns a mapping of relativedelta field → signed amount, or None when
    the text is not a relative phrase.
    """
    text = value.strip().lower()
    sign = 1
    if text.endswith(" ago"):
        text, sign = text[:-4], -1

    amounts = defaultdict(int)
    position = 0
    while position < len(text):
        match = _PHRASE.match(text, position)
        if not match:
            return None
        try:
            field, multiplier = _UNITS[match["unit"]]
        except KeyError:
            return None
        amounts[field] += sign * multiplier * int(match["sign"] + match["amount"])
        position = match.end()

    return dict(amounts) or None


def _moment(value, /):
    """
    flexible date/time parsing.

    accepts keywords (now, today, midnight, noon, tomorrow, yesterday),
    "next <weekday>" / "last <weekday>", relative phrases, and any absolute
    form python-dateutil understands. missing parts default to today at
    midnight.
    """
    text = value.strip().lower()
    if not text:
        raise BadArgumentError("empty date")

    now = datetime.now().replace(microsecond=0)
    today = now.replace(hour=0, minute=0, second=0)

    match text:
        case "now":
            return now
        case "today" | "midnight":
            return today
        case "noon":
            return today.replace(hour=12)
        case "tomorrow":
            return today + relativedelta(days=1)
        case "yesterday":
            return today - relativedelta(days=1)

    if (match := _WEEKDAY.fullmatch(text)) and match["day"] in _WEEKDAYS:
        weekday = _WEEKDAYS[match["day"]]
        if match["direction"] == "next":
            return today + relativedelta(days=1, weekday=weekday(+1))
        return today + relativedelta(days=-1, weekday=weekday(-1))

    if amounts := _relative(text):
        return now + relativedelta(**amounts)

    try:
        return dateparser.parse(value, default=today)
    except (ValueError, OverflowError):
        raise BadArgumentError("not a valid date or time") from None


def cast_bool(value, /):
    lowered = value.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise BadArgumentError("not a valid boolean")


def cast_int(value, /):
    value = value.strip()
    if _DECIMAL.fullmatch(value):
        return int(value)
    if match := _HEXADECIMAL.fullmatch(value):
        return int(match["digits"], 16)
    if match := _OCTAL.fullmatch(value):
        return int(match["digits"], 8)
    raise BadArgumentError("not a valid integer")


def cast_float(value, /):
    value = value.strip()
    if not _FLOAT.fullmatch(value):
        raise BadArgumentError("not a valid floating-point number")
    return float(value.replace(",", ""))


def cast_fixed(value, /):
    if not _FIXED.fullmatch(value):
        raise BadArgumentError("not a valid fixed-point number")
    return re.sub(r"[,_]", "", value)


def cast_string(value, /):
    return value


def cast_email(value, /):
    match = _EMAIL.fullmatch(value)
    if not match or len(match["local"]) > 64:
        raise BadArgumentError("not a valid email")
    domain = _hostname(match["domain"])
    if domain is None or "." not in domain:
        raise BadArgumentError("not a valid email")
    return match["local"] + "@" + domain


def cast_url(value, /):
    if not value or re.search(r"\s", value):
        raise BadArgumentError("not a valid URL")
    try:
        parts = urllib.parse.urlsplit(value)
        parts.port  # NOQA: raises on a malformed port
    except ValueError:
        raise BadArgumentError("not a valid URL") from None
    if not _SCHEME.fullmatch(parts.scheme):
        raise BadArgumentError("not a valid URL")
    if parts.scheme in ("mailto", "news", "file"):
        return parts.geturl()

    host = parts.hostname
    if not host:
        raise BadArgumentError("not a valid URL")
    if _hostname(host) is None:
        try:
            ipaddress.ip_address(host)
        except ValueError:
            raise BadArgumentError("not a valid URL") from None

    userinfo, at, location = parts.netloc.rpartition("@")
    return parts._replace(netloc=userinfo + at + location.lower()).geturl()


def cast_domain(value, /):
    if (domain := _hostname(value)) is None:
        raise BadArgumentError("not a valid domain")
    return domain


def cast_ip_address(value, /):
    try:
        return str(ipaddress.ip_address(value))
    except ValueError:
        raise BadArgumentError("not a valid IP address") from None


def cast_mac_address(value, /):
    if not _MAC.fullmatch(value):
        raise BadArgumentError("not a valid MAC address")
    digits = re.sub(r"[:.-]", "", value).lower()
    return ":".join(digits[index:index + 2] for index in range(0, 12, 2))


def cast_date(value, /):
    return _moment(value).strftime("%Y-%m-%d")


def cast_datetime(value, /):
    return _moment(value).strftime("%Y-%m-%d %H:%M:%S")


def cast_time(value, /):
    return _moment(value).strftime("%H:%M:%S")


def cast_interval(value, /):
    """
    normalize a duration phrase.

    the phrase is reduced to seconds (years count 365 days, months 30 days)
    and decomposed again from the largest unit down; zero units are left out.

    examples
    - "2 days"               -> "2 days"
    - "600 seconds"          -> "10 minutes"
    - "1 week 1 hour"        -> "7 days, 1 hour"
    - "0 days"               -> "0 seconds"
    """
    if (amounts := _relative(value)) is None:
        raise BadArgumentError("not a valid date interval")

    seconds = sum(
        amount * dict(_SPANS)[field.removesuffix("s")]
        for field, amount in amounts.items()
    )
    if seconds < 0:
        raise BadArgumentError("not a valid date interval")

    formatted = []
    for unit, span in _SPANS:
        count, seconds = divmod(seconds, span)
        if count:
            formatted.append(pluralize(unit, count))

    return ", ".join(formatted) or "0 seconds"


def cast_uuid(value, /):
    digits = value.replace("-", "")
    if len(digits) != 32:
        raise BadArgumentError("UUID is not 32 characters")
    if not _HEX_DIGITS.fullmatch(digits):
        raise BadArgumentError("UUID contains invalid characters")
    return "-".join((digits[:8], digits[8:12], digits[12:16], digits[16:20], digits[20:]))


def check_dir(value, /):
    if not os.path.isdir(value):
        raise BadArgumentError("path is not a directory")
    if not os.access(value, os.R_OK):
        raise BadArgumentError("directory is not readable")
    return os.path.realpath(value)


def check_input_file(value, /):
    if not os.path.exists(value):
        raise BadArgumentError("path does not exist")
    if not os.access(value, os.R_OK):
        raise BadArgumentError("file is not readable")
    return os.path.realpath(value)


def check_output_file(value, /):
    directory = os.path.dirname(value) or os.curdir
    if not os.path.isdir(directory):
        raise BadArgumentError("file directory does not exist")
    if not os.access(directory, os.W_OK):
        raise BadArgumentError("file directory is not writable")
    return os.path.join(os.path.realpath(directory), os.path.basename(value))


_CASTERS = {
    ArgType.BOOL: cast_bool,
    ArgType.DATE: cast_date,
    ArgType.DATETIME: cast_datetime,
    ArgType.DIR: check_dir,
    ArgType.DOMAIN: cast_domain,
    ArgType.EMAIL: cast_email,
    ArgType.FIXED: cast_fixed,
    ArgType.FLOAT: cast_float,
    ArgType.INFILE: check_input_file,
    ArgType.INT: cast_int,
    ArgType.INTERVAL: cast_interval,
    ArgType.IP_ADDR: cast_ip_address,
    ArgType.MAC_ADDR: cast_mac_address,
    ArgType.OUTFILE: check_output_file,
    ArgType.STRING: cast_string,
    ArgType.TIME: cast_time,
    ArgType.URL: cast_url,
    ArgType.UUID: cast_uuid,
}


def cast(type, value, /):
    """
    cast a raw string to the given type.

    raises
    - UnsupportedTypeError: type is not an ArgType (or its name).
    - BadArgumentError: value does not fit the type.
    """
    if not isinstance(value, str):
        raise TypeError("cast() second argument must be a string")
    return _CASTERS[ArgType.coerce(type)](value)


def cast_value(type, value, validator=None, /):
    """
    cast a raw string, then pass the typed value through the validator.

    the validator receives the cast value and returns the value to bind
    (possibly transformed). ValueError/TypeError raised by the validator
    become RejectedArgumentError; BadArgumentError from the cast itself
    propagates unchanged. other exceptions raised by the validator are
    not rejections and propagate as they are.
    """
    value = cast(type, value)
    if validator is None:
        return value
    try:
        return validator(value)
    except (ValueError, TypeError) as exception:
        raise RejectedArgumentError(str(exception) or "rejected by validator") from exception


__all__ = (
    "ArgType",
    "cast",
    "cast_value",
)
