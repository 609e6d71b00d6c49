# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Typed conversion of stored configuration text.

The configuration tree stores only strings. Every typed read parses the
stored text again into the type the caller asks for; nothing is inferred.

Scalar targets:
    - ``str``: the text as stored
    - ``int``, ``Int16``, ``Int32``, ``Int64``: base-10, range-checked
      (``int`` behaves as ``Int64``)
    - ``float``: invariant decimal notation, ``NaN`` and ``Infinity``
    - ``bool``: yes/true/on and no/false/off, case-insensitive
    - ``datetime`` / ``date``: ISO 8601, then ``DATETIME_FORMATS``
    - ``Color``: ``#RRGGBB`` or a CSS color name
    - ``Uri``: an absolute URI

Collections:
    - ``convert_list('1, 2, 3', int)`` -> ``(1, 2, 3)``
    - ``convert_mapping('a:1, b:2', str, int)`` -> ``{'a': 1, 'b': 2}``

Example:
    >>> convert_scalar(' On ', bool)
    True
    >>> convert_scalar('#FF0000', Color)
    Color(red=255, green=0, blue=0)
"""

from __future__ import annotations

import math
import re
from datetime import date, datetime
from types import MappingProxyType
from typing import Any, Callable, Mapping, NamedTuple, NewType
from urllib.parse import SplitResult, urlsplit

from PIL import ImageColor

from .exceptions import ConversionError

ITEM_SEPARATOR = ','
PAIR_SEPARATOR = ':'

Int16 = NewType('Int16', int)
Int32 = NewType('Int32', int)
Int64 = NewType('Int64', int)

_INT_BOUNDS: dict[Any, tuple[int, int]] = {
    Int16: (-2**15, 2**15 - 1),
    Int32: (-2**31, 2**31 - 1),
    Int64: (-2**63, 2**63 - 1),
}
_INT_BOUNDS[int] = _INT_BOUNDS[Int64]

_INTEGER = re.compile(r'[+-]?[0-9]+')
_DECIMAL = re.compile(r'[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?')
_SPECIAL_FLOATS = {
    'nan': math.nan,
    'infinity': math.inf,
    '+infinity': math.inf,
    '-infinity': -math.inf,
}

_TRUE_WORDS = frozenset({'yes', 'true', 'on'})
_FALSE_WORDS = frozenset({'no', 'false', 'off'})

# Tried in order after datetime.fromisoformat().
DATETIME_FORMATS = (
    '%Y-%m-%d %H:%M:%S',
    '%Y-%m-%d %H:%M',
    '%Y/%m/%d %H:%M:%S',
    '%Y/%m/%d %H:%M',
    '%Y/%m/%d',
    '%m/%d/%Y %I:%M:%S %p',
    '%m/%d/%Y %H:%M:%S',
    '%m/%d/%Y %H:%M',
    '%m/%d/%Y',
    '%d %B %Y',
    '%d %b %Y',
    '%B %d %Y',
    '%b %d %Y',
    '%a, %d %b %Y %H:%M:%S GMT',
)

_HEX_COLOR = re.compile(r'#([0-9A-Fa-f]{2})([0-9A-Fa-f]{2})([0-9A-Fa-f]{2})')

_URI_SCHEME = re.compile(r'[A-Za-z][A-Za-z0-9+.\-]*:')
_NETLOC_SCHEMES = frozenset({'http', 'https', 'ftp', 'ws', 'wss'})


class Color(NamedTuple):
    """An RGB color read from configuration text."""

    red: int
    green: int
    blue: int

    @property
    def hex(self) -> str:
        """Return the color as '#RRGGBB'."""
        return f"#{self.red:02X}{self.green:02X}{self.blue:02X}"


class Uri(str):
    """A string that has been validated as an absolute URI.

    Compares equal to the plain string it was built from.

    Example:
        >>> uri = parse_uri('https://example.com:8443/api')
        >>> uri.scheme, uri.host, uri.port
        ('https', 'example.com', 8443)
    """

    __slots__ = ()

    @property
    def parts(self) -> SplitResult:
        return urlsplit(self)

    @property
    def scheme(self) -> str:
        return self.parts.scheme

    @property
    def host(self) -> str | None:
        return self.parts.hostname

    @property
    def port(self) -> int | None:
        return self.parts.port

    @property
    def path(self) -> str:
        return self.parts.path


# ==================== Scalar Parsers ====================


def parse_str(text: str) -> str:
    """Return the text unchanged."""
    return text


def parse_int(text: str, width: Any = Int64) -> int:
    """Parse a base-10 integer and check it fits the given width.

    Args:
        text: Text to parse. Surrounding whitespace is ignored.
        width: One of ``Int16``, ``Int32``, ``Int64`` or ``int``.

    Raises:
        ConversionError: If the text is not an integer or is out of range.
        TypeError: If width is not a supported integer type.
    """
    try:
        low, high = _INT_BOUNDS[width]
    except KeyError:
        raise TypeError(f"Unsupported integer width: {width!r}") from None

    stripped = text.strip()
    if not _INTEGER.fullmatch(stripped):
        raise ConversionError(text, width)
    value = int(stripped)
    if not low <= value <= high:
        raise ConversionError(text, width)
    return value


def parse_float(text: str) -> float:
    """Parse a decimal number using '.' as separator regardless of locale."""
    stripped = text.strip()
    special = _SPECIAL_FLOATS.get(stripped.lower())
    if special is not None:
        return special
    if not _DECIMAL.fullmatch(stripped):
        raise ConversionError(text, float)
    return float(stripped)


def parse_bool(text: str) -> bool:
    """Parse yes/true/on or no/false/off, ignoring case."""
    word = text.strip().lower()
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    raise ConversionError(text, bool)


def parse_datetime(text: str) -> datetime:
    """Parse an ISO 8601 timestamp or one of DATETIME_FORMATS."""
    stripped = text.strip()
    try:
        return datetime.fromisoformat(stripped)
    except ValueError:
        pass
    for fmt in DATETIME_FORMATS:
        try:
            return datetime.strptime(stripped, fmt)
        except ValueError:
            continue
    raise ConversionError(text, datetime)


def parse_date(text: str) -> date:
    """Parse like parse_datetime() and keep the date part."""
    try:
        return parse_datetime(text).date()
    except ConversionError:
        raise ConversionError(text, date) from None


def parse_color(text: str) -> Color:
    """Parse '#RRGGBB' or a CSS color name.

    Names are looked up case-insensitively in Pillow's color table; a
    name missing from the table is rejected. The table holds CSS names
    only: 'Transparent' (no alpha channel here) and system colors such
    as 'Control' or 'Window' are not accepted.
    """
    stripped = text.strip()
    match = _HEX_COLOR.fullmatch(stripped)
    if match:
        return Color(*(int(part, 16) for part in match.groups()))

    name = stripped.lower()
    if name not in ImageColor.colormap:
        raise ConversionError(text, Color)
    red, green, blue = ImageColor.getrgb(name)[:3]
    return Color(red, green, blue)


def parse_uri(text: str) -> Uri:
    """Parse an absolute URI (a scheme is required)."""
    stripped = text.strip()
    if not _URI_SCHEME.match(stripped):
        raise ConversionError(text, Uri)
    if any(ch.isspace() or ord(ch) < 32 for ch in stripped):
        raise ConversionError(text, Uri)
    try:
        parts = urlsplit(stripped)
        parts.port
    except ValueError as e:
        raise ConversionError(text, Uri) from e

    rest = stripped[len(parts.scheme) + 1:]
    if not rest:
        raise ConversionError(text, Uri)
    if parts.scheme.lower() in _NETLOC_SCHEMES and not parts.hostname:
        raise ConversionError(text, Uri)
    return Uri(stripped)


_SCALAR_CONVERTERS: dict[Any, Callable[[str], Any]] = {
    str: parse_str,
    int: lambda text: parse_int(text, int),
    Int16: lambda text: parse_int(text, Int16),
    Int32: lambda text: parse_int(text, Int32),
    Int64: lambda text: parse_int(text, Int64),
    float: parse_float,
    bool: parse_bool,
    datetime: parse_datetime,
    date: parse_date,
    Color: parse_color,
    Uri: parse_uri,
}


def supported_types() -> list[Any]:
    """Return the scalar target types accepted by convert_scalar()."""
    return list(_SCALAR_CONVERTERS)


def _converter_for(target: Any) -> Callable[[str], Any]:
    try:
        return _SCALAR_CONVERTERS[target]
    except (KeyError, TypeError):
        raise TypeError(f"Unsupported conversion target: {target!r}") from None


# ==================== Public Conversion API ====================


def convert_scalar(text: str, target: Any = str) -> Any:
    """Convert text to a scalar of the target type.

    Args:
        text: Stored configuration text.
        target: A key from supported_types().

    Returns:
        The parsed value.

    Raises:
        ConversionError: If the text does not parse as target.
        TypeError: If target is not a supported type.
    """
    return _converter_for(target)(text)


def split_items(text: str) -> list[str]:
    """Split on ITEM_SEPARATOR, trimming parts and dropping empty ones."""
    parts = (part.strip() for part in text.split(ITEM_SEPARATOR))
    return [part for part in parts if part]


def convert_list(text: str, item_type: Any = str) -> tuple[Any, ...]:
    """Convert a comma separated list.

    Example:
        >>> convert_list('1,,3', int)
        (1, 3)

    Raises:
        ConversionError: If any item fails to convert.
    """
    convert = _converter_for(item_type)
    return tuple(convert(part) for part in split_items(text))


def convert_mapping(
    text: str,
    key_type: Any = str,
    value_type: Any = str,
) -> Mapping[Any, Any]:
    """Convert comma separated 'key:value' pairs to a read-only mapping.

    A repeated key keeps the last value.

    Example:
        >>> dict(convert_mapping('a:1, b:2', str, int))
        {'a': 1, 'b': 2}

    Raises:
        ConversionError: If a pair does not have exactly one key and one
            value, or if a key or value fails to convert.
    """
    convert_key = _converter_for(key_type)
    convert_value = _converter_for(value_type)

    result: dict[Any, Any] = {}
    for part in split_items(text):
        tokens = [token.strip() for token in part.split(PAIR_SEPARATOR)]
        tokens = [token for token in tokens if token]
        if len(tokens) != 2:
            raise ConversionError(part, f"{_type_name(key_type)}:{_type_name(value_type)}")
        key, value = tokens
        result[convert_key(key)] = convert_value(value)
    return MappingProxyType(result)


def _type_name(target: Any) -> str:
    return getattr(target, '__name__', str(target))
