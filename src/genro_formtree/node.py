# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""FormNode - common base of form leaves and form stores."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import Any, Iterable, TYPE_CHECKING

from . import serialize, text
from .charmap import RESPELL_TRANSLATION, RESPELL_WORDS
from .constants import DEFAULT_CHARSET, DEFAULT_SEND_TIMEOUT, TRIM_CHARACTERS
from .validation import Validator

if TYPE_CHECKING:
    from collections.abc import Callable, MutableMapping

    import requests

_UNSAFE_NAME_RE = re.compile(r'[^\w \t\n\-]', re.ASCII)
_NAME_BLANKS_RE = re.compile(r'[ \t\n]+')


class FormNode(ABC):
    """A node of a form tree: either a FormValue (leaf) or a FormStore (branch).

    Every operation defined here works on both shapes. In-place transforms
    change a leaf's text, or the text of every leaf below a branch, and
    return the node itself for chaining. Derived operations return a new node.

    Each node has:
    - error: The validation message attached to it, or None
    - is_leaf / is_branch: The node shape, fixed at construction

    Example:
        >>> node = FormNode.create({'name': '  Alice ', 'tags': {'a': ' x '}})
        >>> node.to_upper().as_array()
        {'name': 'ALICE', 'tags': {'a': 'X'}}
    """

    __slots__ = ('error', '_validator')

    # Operations a Validator may run on this node through check()
    CHAIN_OPERATIONS: frozenset[str] = frozenset({
        'is_empty', 'trim', 'strip', 'strip_slashes', 'add_slashes',
        'to_lower', 'to_upper', 'clean_whitespace', 'conv_from', 'conv_to',
        'undo', 'reset',
    })

    respell_translation: dict[int, str] = RESPELL_TRANSLATION
    respell_words: dict[str, str] = RESPELL_WORDS

    def __init__(self) -> None:
        self.error: str | None = None
        self._validator: Validator | None = None

    @staticmethod
    def create(data: Any = None, expected: dict | None = None, trim: bool = True) -> FormNode:
        """Build a FormStore from a mapping or sequence, a FormValue otherwise."""
        from .store.loading import build
        return build(data, expected, trim)

    @property
    @abstractmethod
    def is_leaf(self) -> bool:
        """True if this node holds text."""

    @property
    def is_branch(self) -> bool:
        """True if this node holds child nodes."""
        return not self.is_leaf

    # ==================== Value state ====================

    def set(self, value: Any, trim: bool = False) -> FormNode:
        """Replace the text of a leaf. Branches ignore it."""
        return self

    def reset(self) -> FormNode:
        """Make the current text the initial one. Branches ignore it."""
        return self

    def undo(self) -> FormNode:
        """Restore the initial text. Branches ignore it."""
        return self

    def copy(self) -> FormNode:
        """Deep copy of the current values, without errors or validator."""
        return FormNode.create(self.as_array(), trim=False)

    @abstractmethod
    def initial(self, trim: bool = False) -> FormNode:
        """New tree built from the initial values."""

    @abstractmethod
    def is_empty(self) -> bool:
        """True for an empty leaf text or a branch without children."""

    # ==================== In-place transforms ====================

    @abstractmethod
    def _apply(self, func: Callable[[str], str]) -> FormNode:
        """Replace the text of this leaf, or of every leaf below, with func(text)."""

    def trim(self, chars: str | None = None) -> FormNode:
        """Strip surrounding ``chars`` (default: whitespace and NUL)."""
        chars = chars or TRIM_CHARACTERS
        return self._apply(lambda value: value.strip(chars))

    def strip(self, allowed_tags: str | Iterable[str] = '') -> FormNode:
        """Strip HTML tags, keeping ``allowed_tags``."""
        return self._apply(lambda value: text.strip_tags(value, allowed_tags))

    def strip_slashes(self) -> FormNode:
        return self._apply(text.strip_slashes)

    def add_slashes(self) -> FormNode:
        return self._apply(text.add_slashes)

    def to_lower(self) -> FormNode:
        return self._apply(str.lower)

    def to_upper(self) -> FormNode:
        return self._apply(str.upper)

    def clean_whitespace(self) -> FormNode:
        """Trim and collapse blanks and line breaks."""
        return self._apply(text.clean_whitespace)

    @abstractmethod
    def conv_from(self, from_charset: str, to_charset: str = DEFAULT_CHARSET) -> FormNode:
        """Re-read the text, encoded as ``from_charset``, as ``to_charset``.

        Conversion also rewrites the initial value, so undo() after a
        conversion restores converted text.
        """

    def conv_to(self, to_charset: str, from_charset: str = DEFAULT_CHARSET) -> FormNode:
        return self.conv_from(from_charset, to_charset)

    # ==================== Derived nodes ====================

    def as_lower(self) -> FormNode:
        return self.copy().to_lower()

    def as_upper(self) -> FormNode:
        return self.copy().to_upper()

    @abstractmethod
    def respell(self) -> FormNode:
        """New node with extended and Cyrillic letters transliterated to ASCII."""

    def as_safe_name(self) -> FormNode:
        """New node holding URL and filename safe tokens.

        Text is lower-cased, transliterated, stripped of anything but ASCII
        letters, digits, ``_``, ``-`` and blanks; blank runs become ``_``.
        """
        def _safe(value: str) -> str:
            value = _UNSAFE_NAME_RE.sub('', value)
            return _NAME_BLANKS_RE.sub('_', value)

        return self.as_lower().respell()._apply(_safe)

    def _respell_text(self, value: str) -> str:
        if value in self.respell_words:
            return self.respell_words[value]
        return value.translate(self.respell_translation)

    # ==================== Serialization ====================

    @abstractmethod
    def as_array(self) -> str | dict[str, Any] | list[Any]:
        """Leaf text, or nested dict (list when list-shaped) of the branch values."""

    def as_query(self, sep: str = '&', prefix: str = '') -> str:
        """URL query string (bracket notation for nested keys)."""
        return serialize.to_query(self, sep, prefix)

    def as_json(self) -> str:
        return serialize.to_json(self)

    def as_sql_query(
        self,
        columns: Iterable[str] | None = None,
        for_insert: bool = False,
        skip_empty: bool = False,
    ) -> str:
        """SQL fragment with literal-escaped values. NOT a parameterized query.

        See serialize.to_sql for the produced forms.
        """
        return serialize.to_sql(self, columns, for_insert, skip_empty)

    # ==================== Validation ====================

    def validate(self) -> Validator:
        """Return the validation chain of this node (created once)."""
        if self._validator is None:
            self._validator = Validator(self)
        return self._validator

    def set_error(self, message: str | None) -> None:
        self.error = message

    @abstractmethod
    def get_errors(self) -> str | dict[str, Any] | None:
        """Own message for a leaf, nested dict of messages for a branch."""

    def is_ok(self) -> bool:
        """True if neither this node nor any descendant carries an error."""
        return not self.get_errors()

    # ==================== Collaborators ====================

    def send(
        self,
        url: str,
        timeout: float = DEFAULT_SEND_TIMEOUT,
        session: requests.Session | None = None,
    ) -> str | None:
        """POST as_query() to ``url``. Returns the body, or None on failure."""
        from .adapters import send
        return send(self, url, timeout=timeout, session=session)

    def export(self, target: MutableMapping[str, Any]) -> None:
        """Replace the content of ``target`` with the node values by key."""
        from .adapters import export
        export(self, target)
