# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""FormStore - the branch node of a form tree.

This module provides the FormStore class, an ordered container of named
FormNode children. A FormStore is built from nested form data (a dict of
strings, dicts and lists; lists are keyed by position) and offers the
same transforms, serializers and validation API as a single FormValue:
every operation recurses into the children.

Key Features:
    - **Ordered children**: Insertion order is kept, serializers follow it
    - **Stable children**: Re-adding a key updates the child in place
    - **Expected keys**: An ``expected`` dict filters and fills the input
    - **Error aggregation**: get_errors() collects child messages by key

Example:
    Basic usage::

        form = FormStore({'name': ' Alice ', 'address': {'city': 'Rome'}})
        form['name'].value            # 'Alice'
        form.check('email')           # adds an empty 'email' leaf
        form.as_query()               # 'name=Alice&address%5Bcity%5D=Rome&email='

    With expected keys::

        form = FormStore({'name': 'Bob', 'admin': '1'}, expected={'name': '', 'age': '0'})
        form.as_array()               # {'name': 'Bob', 'age': '0'}
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable, Iterator

from ..constants import DEFAULT_CHARSET
from ..node import FormNode
from .loading import build, load_values


class FormStore(FormNode):
    """An ordered collection of named FormNode children.

    FormStore provides:
    - add(key, value) / store[key] = value: Create or update children
    - get(key) / store[key]: Read children
    - check(key, default): Get or insert
    - values(data, expected): Bulk load with optional expected keys
    - get_errors(): Child errors by key, own error under 'common'

    Example:
        >>> form = FormStore({'a': '1', 'b': ''})
        >>> form.validate().on_empty('b', 'missing').is_ok()
        False
        >>> form.get_errors()
        {'b': 'missing'}
    """

    __slots__ = ('_nodes',)

    COMMON_ERROR_KEY = 'common'

    def __init__(
        self,
        data: Mapping | list | tuple | FormNode | None = None,
        expected: Mapping | None = None,
        trim: bool = True,
    ) -> None:
        """Initialize a FormStore.

        Args:
            data: Optional initial data. Can be:
                - dict: Nested values, sub-dicts become FormStore children
                - list or tuple: Items keyed by position ('0', '1', ...)
                - FormStore: Its current values are copied
            expected: Optional dict of key -> default value. Only these keys
                are loaded; missing ones get the default.
            trim: If True (default), strips whitespace from loaded leaves.

        Example:
            >>> FormStore({'a': '1', 'b': {'c': '2'}})
            >>> FormStore(['x', 'y'])  # keys '0' and '1'
            >>> FormStore({}, expected={'page': '1'})  # page filled in
        """
        super().__init__()
        self._nodes: dict[str, FormNode] = {}
        if data is not None or expected is not None:
            self.values(data if data is not None else {}, expected, trim)

    # ==================== Special Methods ====================

    def __repr__(self) -> str:
        """Return string representation showing child keys."""
        return f"FormStore({list(self._nodes.keys())})"

    def __len__(self) -> int:
        """Return the number of direct children."""
        return len(self._nodes)

    def __iter__(self) -> Iterator[str]:
        """Iterate over child keys in insertion order."""
        return iter(self._nodes)

    def __contains__(self, key: object) -> bool:
        return str(key) in self._nodes

    def __getitem__(self, key: str) -> FormNode:
        """Return the child at ``key``.

        Raises:
            KeyError: If there is no such child.
        """
        return self._nodes[str(key)]

    def __setitem__(self, key: str, value: Any) -> None:
        self.add(key, value)

    def __delitem__(self, key: str) -> None:
        self.delete(key)

    @property
    def is_leaf(self) -> bool:
        return False

    # ==================== Core API ====================

    def values(
        self,
        data: Mapping | list | tuple,
        expected: Mapping | None = None,
        trim: bool = False,
    ) -> FormStore:
        """Add children from ``data``, restricted to ``expected`` keys if given.

        Args:
            data: Mapping (or sequence) of raw values.
            expected: Optional dict of key -> default. Keys of ``data`` not
                listed are dropped; listed keys missing from ``data`` (or
                None there) get the default.
            trim: If True, strips whitespace from new leaves.

        Returns:
            This FormStore for chaining.
        """
        load_values(self, data, expected, trim)
        return self

    def add(self, key: str, value: Any, trim: bool = False) -> FormStore:
        """Add a child or update an existing one.

        Args:
            key: Child key.
            value: A FormNode replaces the slot outright. Any other value
                updates the existing child through set() (so the child keeps
                its identity and error), or builds a new child.
            trim: If True, strips whitespace from the text.

        Returns:
            This FormStore for chaining.
        """
        key = str(key)
        if isinstance(value, FormNode):
            self._nodes[key] = value
        elif key in self._nodes:
            self._nodes[key].set(value, trim)
        else:
            self._nodes[key] = build(value, trim=trim)
        return self

    def get(self, key: str, default: Any = None) -> FormNode | Any:
        """Return the child at ``key``, or ``default`` if there is none."""
        return self._nodes.get(str(key), default)

    def has(self, key: str) -> bool:
        return str(key) in self._nodes

    def check(self, key: str, default: Any = '') -> FormNode:
        """Return the child at ``key``, adding ``default`` first if missing."""
        if not self.has(key):
            self.add(key, default)
        return self._nodes[str(key)]

    def delete(self, key: str) -> FormStore:
        """Remove the child at ``key`` (no-op if missing)."""
        self._nodes.pop(str(key), None)
        return self

    def clear(self) -> None:
        """Remove all children."""
        self._nodes.clear()

    def initial(self, trim: bool = False) -> FormStore:
        result = FormStore()
        for key, node in self._nodes.items():
            result.add(key, node.initial(trim))
        return result

    def is_empty(self) -> bool:
        """True if the store has no children."""
        return not self._nodes

    # ==================== Iteration ====================

    def keys(self) -> list[str]:
        """Return child keys in insertion order."""
        return list(self._nodes.keys())

    def nodes(self) -> list[FormNode]:
        """Return child nodes in insertion order."""
        return list(self._nodes.values())

    def items(self) -> list[tuple[str, FormNode]]:
        """Return (key, node) pairs in insertion order."""
        return list(self._nodes.items())

    def walk(self, _prefix: str = '') -> Iterator[tuple[str, FormNode]]:
        """Yield (dotted_path, node) for every descendant, depth first.

        Example:
            >>> for path, node in form.walk():
            ...     print(path, node)
        """
        for key, node in self._nodes.items():
            path = f"{_prefix}.{key}" if _prefix else key
            yield path, node
            if isinstance(node, FormStore):
                yield from node.walk(path)

    # ==================== Transforms ====================

    def _apply(self, func: Callable[[str], str]) -> FormStore:
        for node in self._nodes.values():
            node._apply(func)
        return self

    def conv_from(self, from_charset: str, to_charset: str = DEFAULT_CHARSET) -> FormStore:
        for node in self._nodes.values():
            node.conv_from(from_charset, to_charset)
        return self

    def respell(self) -> FormStore:
        """New FormStore with every leaf transliterated."""
        result = FormStore()
        for key, node in self._nodes.items():
            result.add(key, node.respell())
        return result

    # ==================== Conversion ====================

    def is_sequence(self) -> bool:
        """True if the keys are '0', '1', ... in order (list-shaped data)."""
        return all(key == str(index) for index, key in enumerate(self._nodes))

    def as_array(self) -> dict[str, Any] | list[Any]:
        """Convert to plain dict (recursive), leaves become their text.

        A non-empty list-shaped store converts to a list.

        Example:
            >>> FormStore({'tags': ['a', 'b']}).as_array()
            {'tags': ['a', 'b']}
        """
        if self._nodes and self.is_sequence():
            return [node.as_array() for node in self._nodes.values()]
        return {key: node.as_array() for key, node in self._nodes.items()}

    # ==================== Validation ====================

    def get_errors(self) -> dict[str, Any]:
        """Return own and child errors.

        Returns:
            Dict with the own error under 'common' and child key -> child
            errors, only for children with errors.

        Example:
            >>> form.get_errors()
            {'common': 'Form expired', 'email': 'Invalid email'}
        """
        errors: dict[str, Any] = {}
        if self.error:
            errors[self.COMMON_ERROR_KEY] = self.error
        for key, node in self._nodes.items():
            child_errors = node.get_errors()
            if child_errors:
                errors[key] = child_errors
        return errors
