# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Validator - fluent validation chains for form nodes.

A Validator runs a check on its node, remembers the result, and attaches
an error message to the node when the result matches a condition::

    form.validate().on_empty('email', 'Email is required')
    form['email'].validate().is_email().on_false('Invalid email')
    form['age'].validate().is_int().on_false('Not a number') \\
        .in_range(18, 120).on_false('Out of range')
    form.is_ok()

Once a node carries an error, later checks in its chain are skipped and
later conditions do not fire, so the first message wins.
"""

from __future__ import annotations

import logging
from collections.abc import Collection
from typing import Any, Callable, TYPE_CHECKING

from .constants import DEFAULT_EMPTY_MESSAGE
from .exceptions import UnknownCheckError

if TYPE_CHECKING:
    from .node import FormNode

logger = logging.getLogger(__name__)

# Result of a check that was not run
_SKIPPED = object()


def _chained(name: str) -> Callable[..., Validator]:
    """Build a chain method running the node operation ``name``."""
    def method(self: Validator, *args: Any, **kwargs: Any) -> Validator:
        return self.check(name, *args, **kwargs)

    method.__name__ = name
    method.__qualname__ = f'Validator.{name}'
    method.__doc__ = f"Run ``{name}`` on the node and keep the result."
    return method


def _as_text(result: Any) -> str:
    if result is True:
        return '1'
    if result is None or result is False:
        return ''
    return str(result)


class Validator:
    """Validation chain bound to one FormNode.

    Obtain it with ``node.validate()``; each node has exactly one.

    Attributes:
        node: The validated node.
        result: Result of the last check that ran (None before any check).
    """

    __slots__ = ('node', '_result')

    def __init__(self, node: FormNode) -> None:
        self.node = node
        self._result: Any = None

    def __repr__(self) -> str:
        return f"Validator({self.node!r}, result={self.result!r})"

    @property
    def result(self) -> Any:
        return None if self._result is _SKIPPED else self._result

    # ==================== Running checks ====================

    def run(self, func: Callable[..., Any], *args: Any, **kwargs: Any) -> Validator:
        """Run ``func(node, *args, **kwargs)`` and keep its result.

        Skipped when the node already carries errors.

        Example:
            >>> node.validate().run(lambda n: n.value.isalpha()).on_false('Letters only')
        """
        if not self.node.is_ok():
            self._result = _SKIPPED
            return self
        self._result = func(self.node, *args, **kwargs)
        return self

    def check(self, name: str, *args: Any, **kwargs: Any) -> Validator:
        """Run the node operation ``name`` and keep its result.

        Only operations listed in the node's CHAIN_OPERATIONS can run.

        Raises:
            UnknownCheckError: If ``name`` is not a chainable operation of
                this kind of node.
        """
        if name not in self.node.CHAIN_OPERATIONS:
            raise UnknownCheckError(
                f"'{name}' is not a chainable operation of {type(self.node).__name__}"
            )
        return self.run(lambda node: getattr(node, name)(*args, **kwargs))

    is_empty = _chained('is_empty')
    is_string = _chained('is_string')
    equals = _chained('equals')
    is_url = _chained('is_url')
    is_email = _chained('is_email')
    is_phone = _chained('is_phone')
    is_date = _chained('is_date')
    is_int = _chained('is_int')
    is_in = _chained('is_in')
    in_range = _chained('in_range')
    has_length = _chained('has_length')
    has_length_between = _chained('has_length_between')
    matches = _chained('matches')
    contains = _chained('contains')
    starts_with = _chained('starts_with')
    ends_with = _chained('ends_with')
    trim = _chained('trim')
    strip = _chained('strip')
    clean_whitespace = _chained('clean_whitespace')
    to_lower = _chained('to_lower')
    to_upper = _chained('to_upper')

    # ==================== Conditions ====================

    def _attach(self, message: str) -> None:
        if self.node.error is None:
            logger.debug("Validation error on %r: %s", self.node, message)
            self.node.set_error(message)

    def on_empty(self, key: str, message: str = DEFAULT_EMPTY_MESSAGE) -> Validator:
        """On a FormStore: make sure ``key`` exists and flag it if empty.

        Leaves ignore it.
        """
        if self.node.is_leaf:
            return self
        child = self.node.check(key, '')
        if child.is_empty():
            child.validate()._attach(message)
        return self

    def on_false(self, message: str) -> Validator:
        """Attach ``message`` if the last result is exactly False."""
        if self._result is False:
            self._attach(message)
        return self

    def on_true(self, message: str) -> Validator:
        """Attach ``message`` if the last result is exactly True."""
        if self._result is True:
            self._attach(message)
        return self

    def on(self, value: Any, message: str) -> Validator:
        """Attach ``message`` if the last result equals ``value``.

        ``value`` may be a bool (identity), a string (text comparison), or a
        collection of strings (membership).
        """
        if self._result is not _SKIPPED and self._matches(value):
            self._attach(message)
        return self

    def unless(self, value: Any, message: str) -> Validator:
        """Attach ``message`` if the last result does not equal ``value``.

        With a bool ``value`` the result must be exactly the opposite bool.
        """
        if self._result is _SKIPPED:
            return self
        if isinstance(value, bool):
            fire = self._result is (not value)
        else:
            fire = not self._matches(value)
        if fire:
            self._attach(message)
        return self

    def _matches(self, value: Any) -> bool:
        if isinstance(value, bool):
            return self._result is value
        if isinstance(value, str):
            return _as_text(self._result) == value
        if isinstance(value, Collection):
            return _as_text(self._result) in {str(v) for v in value}
        return self._result == value

    # ==================== State ====================

    def undo(self) -> Validator:
        """Restore the node's initial value."""
        self.node.undo()
        return self

    def is_ok(self) -> bool:
        """True if the node and its descendants carry no error."""
        return self.node.is_ok()
