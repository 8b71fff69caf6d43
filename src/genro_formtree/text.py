# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""String helpers behind the FormNode transforms.

These functions work on plain ``str`` values; FormNode methods apply them
to a leaf or to every leaf of a branch.
"""

from __future__ import annotations

import os
import re
from datetime import datetime
from typing import Any, Callable, Iterable

from .constants import PAD_BOTH, PAD_LEFT, PAD_RIGHT, TRIM_CHARACTERS

_COMMENT_RE = re.compile(r'<!--.*?(?:-->|$)', re.S)
_TAG_RE = re.compile(r'<(?:/?([A-Za-z][\w:.-]*)[^>]*|[!?][^>]*)>', re.S)
_ALLOWED_TAG_RE = re.compile(r'<\s*/?\s*([A-Za-z][\w:.-]*)\s*/?\s*>')
_SLASHED_RE = re.compile(r'\\(.?)', re.S)
_ADD_SLASHES = str.maketrans({'\\': '\\\\', "'": "\\'", '"': '\\"', '\0': '\\0'})
_BLANKS_RE = re.compile(r'[ \t]+')
_LINE_BREAKS_RE = re.compile(r'[\r\n]+')

# Characters escaped by a backslash in SQL fragments (besides control chars)
_SQL_SPECIALS = frozenset('!"\'`@[]\\')
_C_ESCAPES = {
    '\a': 'a', '\b': 'b', '\t': 't', '\n': 'n',
    '\v': 'v', '\f': 'f', '\r': 'r',
}


def strip_tags(text: str, allowed_tags: str | Iterable[str] = '') -> str:
    """Remove HTML/XML tags and comments, keeping the allowed tag names.

    Args:
        text: Source text.
        allowed_tags: Either a string like ``'<b><i>'`` or an iterable of
            tag names to keep.

    Returns:
        Text without the disallowed tags.
    """
    if isinstance(allowed_tags, str):
        allowed = {name.lower() for name in _ALLOWED_TAG_RE.findall(allowed_tags)}
    else:
        allowed = {name.strip('<>/ ').lower() for name in allowed_tags}

    def _keep(match: re.Match) -> str:
        name = match.group(1)
        if name and name.lower() in allowed:
            return match.group(0)
        return ''

    return _TAG_RE.sub(_keep, _COMMENT_RE.sub('', text))


def strip_slashes(text: str) -> str:
    """Un-quote a backslash-quoted string (``\\0`` becomes NUL)."""
    return _SLASHED_RE.sub(
        lambda m: '\0' if m.group(1) == '0' else m.group(1), text
    )


def add_slashes(text: str) -> str:
    """Backslash-quote quotes, backslashes and NUL characters."""
    return text.translate(_ADD_SLASHES)


def clean_whitespace(text: str) -> str:
    """Trim, then collapse blank runs to a space and line-break runs to one EOL."""
    text = text.strip(TRIM_CHARACTERS)
    text = _BLANKS_RE.sub(' ', text)
    return _LINE_BREAKS_RE.sub(os.linesep, text)


def sql_escape(text: str) -> str:
    """Escape a value for a double-quoted SQL literal.

    Control characters become C escapes (``\\n``) or octal (``\\000``);
    quotes, backticks, brackets, ``!``, ``@`` and backslashes get a
    leading backslash.
    """
    out = []
    for char in text:
        code = ord(char)
        if code < 32:
            out.append('\\' + _C_ESCAPES.get(char, f'{code:03o}'))
        elif char in _SQL_SPECIALS:
            out.append('\\' + char)
        else:
            out.append(char)
    return ''.join(out)


def pad_text(text: str, length: int, fill: str = ' ', side: str = PAD_RIGHT) -> str:
    """Pad ``text`` with repetitions of ``fill`` up to ``length`` characters."""
    missing = length - len(text)
    if missing <= 0 or not fill:
        return text

    def _filler(size: int) -> str:
        return (fill * (size // len(fill) + 1))[:size]

    if side == PAD_LEFT:
        return _filler(missing) + text
    if side == PAD_BOTH:
        left = missing // 2
        return _filler(left) + text + _filler(missing - left)
    return text + _filler(missing)


def replace_text(text: str, search: str | Iterable[str], replacement: str | Iterable[str]) -> str:
    """Replace occurrences, accepting single strings or parallel sequences.

    A sequence of searches with a single replacement replaces each search
    with it; two sequences are paired, missing replacements count as ''.
    """
    if isinstance(search, str):
        return text.replace(search, str(replacement)) if search else text

    searches = list(search)
    if isinstance(replacement, str):
        replacements = [replacement] * len(searches)
    else:
        replacements = list(replacement)
        replacements += [''] * (len(searches) - len(replacements))

    for old, new in zip(searches, replacements):
        if old:
            text = text.replace(old, new)
    return text


def to_number(text: str) -> int | float:
    """Leading numeric part of ``text`` (0 when there is none)."""
    match = re.match(r'\s*[-+]?(\d+(\.\d*)?|\.\d+)([eE][-+]?\d+)?', text)
    if not match:
        return 0
    number = match.group(0).strip()
    if match.group(2) or match.group(3) or number.startswith('.'):
        return float(number)
    return int(number)


# ==================== Dates ====================

_DATE_PATTERNS: tuple[tuple[re.Pattern, str], ...] = (
    (re.compile(r'^\d{2}\.\d{2}\.\d{4}$'), '%d.%m.%Y'),
    (re.compile(r'^\d{2}\.\d{2}\.\d{2}$'), '%d.%m.%y'),
    (re.compile(r'^\d{2}-\d{2}-\d{4}$'), '%d-%m-%Y'),
    (re.compile(r'^\d{2}-\d{2}-\d{2}$'), '%d-%m-%y'),
    (re.compile(r'^\d{4}-\d{2}-\d{2}$'), '%Y-%m-%d'),
    (re.compile(r'^\d{2}/\d{2}/\d{4}$'), '%m/%d/%Y'),
    (re.compile(r'^\d{2}/\d{2}/\d{2}$'), '%m/%d/%y'),
)

_DATE_TOKENS: dict[str, Callable[[datetime], str]] = {
    'Y': lambda d: f'{d.year:04d}',
    'y': lambda d: f'{d.year % 100:02d}',
    'm': lambda d: f'{d.month:02d}',
    'n': lambda d: str(d.month),
    'd': lambda d: f'{d.day:02d}',
    'j': lambda d: str(d.day),
    'H': lambda d: f'{d.hour:02d}',
    'i': lambda d: f'{d.minute:02d}',
    's': lambda d: f'{d.second:02d}',
}


def parse_date(text: str) -> datetime | None:
    """Parse one of the supported day/month/year layouts.

    Returns None when the layout is unknown or the date does not exist.
    """
    for pattern, fmt in _DATE_PATTERNS:
        if pattern.match(text):
            try:
                return datetime.strptime(text, fmt)
            except ValueError:
                return None
    return None


def format_date(moment: datetime, fmt: str) -> str:
    """Format a date with letter codes (``Y-m-d``), or strftime if ``fmt`` has ``%``.

    Letters outside ``Y y m n d j H i s`` are copied as-is; a backslash
    copies the next character literally.
    """
    if '%' in fmt:
        return moment.strftime(fmt)
    out = []
    chars = iter(fmt)
    for char in chars:
        if char == '\\':
            out.append(next(chars, ''))
        elif char in _DATE_TOKENS:
            out.append(_DATE_TOKENS[char](moment))
        else:
            out.append(char)
    return ''.join(out)


def as_text(value: Any) -> str:
    """Coerce a scalar to text the way form data is read (None is '')."""
    if value is None:
        return ''
    if isinstance(value, bool):
        return '1' if value else ''
    if isinstance(value, bytes):
        return value.decode('utf-8', errors='replace')
    return str(value)
