# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Loading functions for building form trees from raw data."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TYPE_CHECKING

from ..exceptions import ShapeError
from ..node import FormNode
from ..value import FormValue

if TYPE_CHECKING:
    from .core import FormStore


def is_collection(data: Any) -> bool:
    """True for raw data that becomes a FormStore (mappings, lists, tuples)."""
    return isinstance(data, (Mapping, list, tuple))


def as_mapping(data: Mapping | list | tuple | FormNode) -> Mapping:
    """View raw store data as a mapping.

    Lists and tuples are keyed by position, a FormStore gives a copy of its
    current values.

    Raises:
        ShapeError: If ``data`` is a leaf or any other scalar.
    """
    if isinstance(data, FormNode):
        if data.is_leaf:
            raise ShapeError("cannot load a FormValue into a FormStore")
        data = data.as_array()
    if isinstance(data, Mapping):
        return data
    if isinstance(data, (list, tuple)):
        return {str(index): item for index, item in enumerate(data)}
    raise ShapeError(f"cannot load {type(data).__name__} into a FormStore")


def build(data: Any, expected: Mapping | None = None, trim: bool = True) -> FormNode:
    """Build a FormStore from a mapping or sequence, a FormValue otherwise.

    Args:
        data: Raw data. A FormNode is returned as-is.
        expected: Optional dict of key -> default, used for FormStore only.
        trim: If True, strips whitespace from leaves.

    Example:
        >>> build({'a': ' 1 '}).as_array()
        {'a': '1'}
        >>> build(' x ')
        FormValue('x')
    """
    from .core import FormStore

    if isinstance(data, FormNode):
        return data
    if is_collection(data):
        return FormStore(data, expected, trim)
    return FormValue(data, trim)


def load_values(
    store: FormStore,
    data: Mapping | list | tuple,
    expected: Mapping | None = None,
    trim: bool = False,
) -> None:
    """Load raw ``data`` into ``store``.

    Without ``expected`` every entry is added. With ``expected`` only its
    keys are added, in its order, taking the value from ``data`` when it is
    there and not None, else the expected default. When both the default
    and the value are collections, the default is used as the expected
    keys of the nested store.
    """
    data = as_mapping(data)
    if expected is None:
        for key, value in data.items():
            store.add(key, value, trim)
        return

    for key, default in as_mapping(expected).items():
        value = data.get(key)
        if value is None:
            store.add(key, default, trim)
        elif is_collection(default) and is_collection(value) and not store.has(key):
            store.add(key, build(value, as_mapping(default), trim))
        else:
            store.add(key, value, trim)
