# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""FormValue - the leaf node of a form tree.

A FormValue wraps one piece of text together with its initial value, so
that edits can be undone. Besides the transforms shared with FormStore it
provides the leaf-only operations: padding, hashing, encodings, IP
conversion, formatting and the checks used by validation chains.

Example:
    >>> name = FormValue('  Alice  ')
    >>> name.value
    'Alice'
    >>> name.set('Bob').undo().value
    'Alice'
    >>> name.reverse().value
    'ecilA'
"""

from __future__ import annotations

import base64
import hashlib
import html
import ipaddress
import logging
import quopri
import re
import zlib
from collections.abc import Mapping
from email.header import decode_header
from typing import Any, Callable, Iterable

from . import text, transport
from .constants import (
    DEFAULT_CHARSET,
    DEFAULT_COUNTRY_CODE,
    PAD_LEFT,
    PAD_RIGHT,
)
from .exceptions import ShapeError
from .node import FormNode

logger = logging.getLogger(__name__)

_URL_RE = re.compile(r'^https?://(\w[\w.]+\.\w+)(:\d+)?/?', re.I)
_EMAIL_RE = re.compile(r'^[\w.+-]+@((?:[\w-]+\.)+\w{2,6})$', re.I)
_PHONE_RE = re.compile(r'^[\d() +-]+$')
_NON_DIGITS_RE = re.compile(r'\D')
_HEX_RE = re.compile(r'[^0-9a-fA-F]')


class FormValue(FormNode):
    """A leaf of a form tree holding text and its initial value.

    Attributes:
        value: Current text.
        initial_value: Text at construction time or at the last reset().
        error: Validation message, or None.
    """

    __slots__ = ('value', 'initial_value')

    CHAIN_OPERATIONS = FormNode.CHAIN_OPERATIONS | {
        'is_string', 'equals', 'is_url', 'is_email', 'is_phone', 'is_date',
        'is_int', 'is_in', 'in_range', 'has_length', 'has_length_between',
        'matches', 'contains', 'starts_with', 'ends_with',
        'set', 'pad', 'replace', 'concat',
    }

    def __init__(self, value: Any = '', trim: bool = True) -> None:
        """Initialize a FormValue.

        Args:
            value: The text. None becomes '', other scalars go through str().
            trim: If True, strips surrounding whitespace. The trimmed text
                is also the initial value.
        """
        super().__init__()
        if isinstance(value, (Mapping, list, tuple)):
            raise ShapeError("FormValue cannot hold children, use FormStore")
        self.value = text.as_text(value)
        if trim:
            self.trim()
        self.initial_value = self.value

    def __repr__(self) -> str:
        return f"FormValue({self.value!r})"

    def __str__(self) -> str:
        return self.value

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FormValue):
            return self.value == other.value
        if isinstance(other, str):
            return self.value == other
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    @property
    def is_leaf(self) -> bool:
        return True

    # ==================== Value state ====================

    def set(self, value: Any, trim: bool = False) -> FormValue:
        if isinstance(value, (Mapping, list, tuple)):
            raise ShapeError("a leaf cannot be given children")
        self.value = text.as_text(value)
        if trim:
            self.trim()
        return self

    def reset(self) -> FormValue:
        self.initial_value = self.value
        return self

    def undo(self) -> FormValue:
        self.value = self.initial_value
        return self

    def initial(self, trim: bool = False) -> FormValue:
        return FormValue(self.initial_value, trim)

    def _apply(self, func: Callable[[str], str]) -> FormValue:
        self.value = func(self.value)
        return self

    def conv_from(self, from_charset: str, to_charset: str = DEFAULT_CHARSET) -> FormValue:
        if from_charset.lower() == to_charset.lower():
            return self
        try:
            converted = self.value.encode(from_charset, errors='replace').decode(
                to_charset, errors='replace'
            )
        except LookupError:
            logger.warning(
                "Cannot convert %r from %s to %s: unknown encoding",
                self.value, from_charset, to_charset,
            )
            return self
        self.value = converted
        self.initial_value = converted
        return self

    # ==================== Measuring ====================

    def length(self) -> int:
        """Number of characters."""
        return len(self.value)

    def byte_length(self, charset: str = DEFAULT_CHARSET) -> int:
        """Number of bytes of the text encoded with ``charset``."""
        return len(self.value.encode(charset, errors='replace'))

    # ==================== In-place edits ====================

    def pad(self, length: int, fill: str = ' ', side: str = PAD_RIGHT) -> FormValue:
        """Pad to ``length`` characters. A '0' fill always pads on the left."""
        if str(fill) == '0':
            side = PAD_LEFT
        self.value = text.pad_text(self.value, length, str(fill), side)
        return self

    def replace(self, search: str | Iterable[str], replacement: str | Iterable[str]) -> FormValue:
        self.value = text.replace_text(self.value, search, replacement)
        return self

    def concat(self, *strings: Any) -> FormValue:
        """Append strings. A single list or tuple argument is unpacked."""
        if len(strings) == 1 and isinstance(strings[0], (list, tuple)):
            strings = tuple(strings[0])
        self.value += ''.join(text.as_text(s) for s in strings)
        return self

    # ==================== Derived values ====================

    def _derive(self, value: Any) -> FormValue:
        return FormValue(value, trim=False)

    def respell(self) -> FormValue:
        return self._derive(self._respell_text(self.value))

    def as_array(self) -> str:
        return self.value

    def as_string(self, to_charset: str | None = None, charset: str = DEFAULT_CHARSET) -> str:
        """The text, converted to ``to_charset`` when given."""
        if to_charset and to_charset.lower() != charset.lower():
            return self.copy().conv_to(to_charset, charset).value
        return self.value

    def as_date(self, fmt: str = 'Y-m-d') -> str | None:
        """The text formatted as a date, or None if it is not a date."""
        copy = self.copy()
        if copy.is_date(True, fmt):
            return copy.value
        return None

    def format(self, fmt: str = '%s') -> FormValue:
        """New value formatted with a printf-style ``fmt``.

        Empty text formats to empty text. Numeric conversions (``%d``,
        ``%.2f``) read the leading number of the text. A format that needs
        other arguments (``%s-%s``, ``%(name)s``) gives an empty value.
        """
        if self.value == '':
            return self._derive('')
        if not fmt:
            return self.copy()
        for argument in (self.value, text.to_number(self.value)):
            try:
                return self._derive(fmt % argument)
            except (TypeError, ValueError, KeyError):
                continue
        logger.debug("Cannot format %r with %r", self.value, fmt)
        return self._derive('')

    def substr(self, start: int, length: int | None = None) -> FormValue:
        """New value with ``length`` characters from ``start``.

        Negative ``start`` counts from the end; negative ``length`` leaves
        that many characters off the end.
        """
        size = len(self.value)
        if start < 0:
            start = max(size + start, 0)
        if length is None:
            end = size
        elif length < 0:
            end = size + length
        else:
            end = start + length
        return self._derive(self.value[start:end] if end > start else '')

    def reverse(self) -> FormValue:
        return self._derive(self.value[::-1])

    def chunk(self, length: int = 76, end: str = '\r\n') -> FormValue:
        """New value split in ``length`` sized chunks, each followed by ``end``."""
        chunks = [self.value[i:i + length] for i in range(0, len(self.value), length)]
        return self._derive(''.join(chunk + end for chunk in chunks))

    def escape(self) -> FormValue:
        """New value with HTML special characters escaped."""
        return self._derive(html.escape(self.value))

    def md5(self, salt: str = '') -> FormValue:
        return self._derive(hashlib.md5((self.value + salt).encode()).hexdigest())

    def sha1(self, salt: str = '') -> FormValue:
        return self._derive(hashlib.sha1((self.value + salt).encode()).hexdigest())

    def sha256(self) -> FormValue:
        return self._derive(hashlib.sha256(self.value.encode()).hexdigest())

    def crc32(self) -> FormValue:
        return self._derive(zlib.crc32(self.value.encode()))

    def base64(self, as_mail: bool = False, charset: str = DEFAULT_CHARSET) -> FormValue:
        """New value encoded in base64, or as a MIME encoded-word if ``as_mail``."""
        encoded = base64.b64encode(self.value.encode(charset, errors='replace')).decode('ascii')
        if as_mail:
            return self._derive(f'=?{charset.upper()}?B?{encoded}?=')
        return self._derive(encoded)

    def base64_decode(self, charset: str = DEFAULT_CHARSET) -> FormValue:
        """New value decoded from base64 (invalid input decodes to '')."""
        try:
            raw = base64.b64decode(self.value)
        except ValueError:
            return self._derive('')
        return self._derive(raw.decode(charset, errors='replace'))

    def quoted(self, as_mail: bool = False, charset: str = DEFAULT_CHARSET) -> FormValue:
        """New value in quoted-printable, or as a MIME encoded-word if ``as_mail``."""
        raw = self.value.encode(charset, errors='replace')
        encoded = quopri.encodestring(raw, header=as_mail).decode('ascii')
        if as_mail:
            return self._derive(f'=?{charset.upper()}?Q?{encoded}?=')
        return self._derive(encoded)

    def quoted_decode(self, charset: str = DEFAULT_CHARSET) -> FormValue:
        raw = quopri.decodestring(self.value.encode('ascii', errors='replace'))
        return self._derive(raw.decode(charset, errors='replace'))

    def mime_string_decode(self) -> FormValue:
        """New value with MIME encoded-words (``=?UTF-8?B?...?=``) decoded."""
        parts = []
        for chunk, charset in decode_header(self.value):
            if isinstance(chunk, bytes):
                try:
                    chunk = chunk.decode(charset or 'ascii', errors='replace')
                except LookupError:
                    chunk = chunk.decode(DEFAULT_CHARSET, errors='replace')
            parts.append(chunk)
        return self._derive(''.join(parts))

    def ip2hex(self) -> FormValue:
        """New value with the IPv4 address (dotted or integer) in hex, '' if invalid."""
        try:
            address = ipaddress.IPv4Address(int(self.value) if self.value.isdigit() else self.value)
        except ValueError:
            return self._derive('')
        return self._derive(f'{int(address):X}')

    def hex2ip(self) -> FormValue:
        """New value with the hex number as dotted IPv4 address, '' if invalid."""
        digits = _HEX_RE.sub('', self.value)
        try:
            return self._derive(str(ipaddress.IPv4Address(int(digits, 16))))
        except ValueError:
            return self._derive('')

    # ==================== Checks ====================

    def is_empty(self) -> bool:
        """True only for ''. The text '0' is a value, so on_empty() keeps it."""
        return self.value == ''

    def is_string(self) -> bool:
        return isinstance(self.value, str)

    def equals(self, value: Any) -> bool:
        """True if the text equals ``value`` (numerically for int values)."""
        if isinstance(value, int) and not isinstance(value, bool):
            return self.value.lstrip('-').isdigit() and int(self.value) == value
        return self.value == text.as_text(value)

    def is_url(self) -> bool:
        match = _URL_RE.match(self.value)
        return bool(match) and len(match.group(1)) <= 253

    def is_email(self, check_mx: bool = False) -> bool:
        """True for a well formed address; with ``check_mx`` the domain must have MX."""
        match = _EMAIL_RE.match(self.value)
        if not match:
            return False
        if check_mx:
            return transport.has_mx_record(match.group(1))
        return True

    def is_phone(self, clean: bool = False, country_code: str = DEFAULT_COUNTRY_CODE) -> bool:
        """True for a phone number of at least 7 digits.

        With ``clean`` the leaf is rewritten as bare digits, the leading
        trunk prefix '8' or the country code normalised to ``country_code``.
        """
        if not _PHONE_RE.match(self.value):
            return False
        digits = _NON_DIGITS_RE.sub('', self.value)
        if clean and country_code:
            digits = country_code + re.sub(f'^({re.escape(country_code)}|8)', '', digits)
        if len(digits) < 7:
            return False
        if clean:
            self.value = digits
        return True

    def is_date(self, clean: bool = False, fmt: str = 'Y-m-d') -> bool:
        """True if the text is a date in one of the known layouts.

        Args:
            clean: If True, rewrite the text in ``fmt``, or clear it when it
                is not a date.
            fmt: Output format, letter codes (``d.m.Y``) or a strftime format.
        """
        moment = text.parse_date(self.value)
        if moment is None:
            if clean:
                self.value = ''
            return False
        if clean and fmt:
            self.value = text.format_date(moment, fmt)
        return True

    def is_int(self) -> bool:
        """True for unsigned decimal digits; the text is normalised ('007' -> '7')."""
        if self.value.isascii() and self.value.isdigit():
            self.value = str(int(self.value))
            return True
        return False

    def is_in(self, *values: Any) -> bool:
        """True if the text is one of ``values`` (or of a single sequence argument)."""
        if not values:
            return False
        if len(values) == 1 and isinstance(values[0], (list, tuple, set, frozenset)):
            values = tuple(values[0])
        return self.value in {text.as_text(v) for v in values}

    def in_range(self, low: Any, high: Any) -> bool:
        """True if low <= value <= high, numerically when the bounds are numbers."""
        if isinstance(low, (int, float)) and isinstance(high, (int, float)):
            try:
                number = float(self.value)
            except ValueError:
                return False
            return low <= number <= high
        return str(low) <= self.value <= str(high)

    def has_length(self, length: int) -> bool:
        return self.length() == length

    def has_length_between(self, low: int, high: int) -> bool:
        return low <= self.length() <= high

    def matches(self, pattern: str | re.Pattern, return_match: bool = False) -> Any:
        """Search ``pattern`` in the text.

        Returns a bool, or the re.Match (None if no match) when
        ``return_match`` is True.
        """
        match = re.search(pattern, self.value)
        if return_match:
            return match
        return match is not None

    def contains(self, *needles: str) -> bool:
        """Case-insensitive: True if any needle occurs in the text."""
        haystack = self.value.lower()
        return any(needle.lower() in haystack for needle in _flatten(needles))

    def starts_with(self, *needles: str) -> bool:
        haystack = self.value.lower()
        return any(haystack.startswith(needle.lower()) for needle in _flatten(needles))

    def ends_with(self, *needles: str) -> bool:
        haystack = self.value.lower()
        return any(haystack.endswith(needle.lower()) for needle in _flatten(needles))

    # ==================== Validation ====================

    def get_errors(self) -> str | None:
        return self.error


def _flatten(needles: tuple) -> list[str]:
    if len(needles) == 1 and isinstance(needles[0], (list, tuple)):
        return list(needles[0])
    return list(needles)
