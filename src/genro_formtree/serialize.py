# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Read-only projections of form trees: query string, JSON and SQL fragments.

All of them walk the tree in insertion order; list-shaped stores (keys
'0', '1', ...) serialize as lists where the format has them.
"""

from __future__ import annotations

import json
from typing import Any, Iterable, TYPE_CHECKING
from urllib.parse import quote_plus

from .text import sql_escape

if TYPE_CHECKING:
    from .node import FormNode


def _flatten_query(name: str, node: FormNode, pairs: list[tuple[str, str]]) -> None:
    if node.is_leaf:
        pairs.append((name, node.value))
        return
    for key, child in node.items():
        _flatten_query(f'{name}[{key}]', child, pairs)


def to_query(node: FormNode, sep: str = '&', prefix: str = '') -> str:
    """Encode a node as a URL query string.

    A leaf gives its percent-encoded text. A branch gives ``key=value``
    pairs joined by ``sep``, nested keys in bracket notation
    (``a[b]=1``, encoded as ``a%5Bb%5D=1``). ``prefix`` is prepended to
    numeric top-level keys, so list-shaped forms produce valid names.

    Example:
        >>> to_query(FormStore({'q': 'a b', 'f': {'x': '1'}}))
        'q=a+b&f%5Bx%5D=1'
    """
    if node.is_leaf:
        return quote_plus(node.value)

    pairs: list[tuple[str, str]] = []
    for key, child in node.items():
        name = f'{prefix}{key}' if prefix and key.isdigit() else key
        _flatten_query(name, child, pairs)
    return sep.join(f'{quote_plus(name)}={quote_plus(value)}' for name, value in pairs)


def _json_value(node: FormNode) -> Any:
    if node.is_leaf:
        return node.value
    if node.is_sequence():
        return [_json_value(child) for child in node.nodes()]
    return {key: _json_value(child) for key, child in node.items()}


def to_json(node: FormNode) -> str:
    """Compact JSON of the node.

    List-shaped stores, and empty ones, become JSON arrays::

        FormStore({'tags': ['a', 'b'], 'extra': {}})  ->  {"tags":["a","b"],"extra":[]}
    """
    return json.dumps(_json_value(node), separators=(',', ':'))


def _quote_identifier(name: str) -> str:
    return '`' + name.replace('`', '``') + '`'


def to_sql(
    node: FormNode,
    columns: Iterable[str] | str | None = None,
    for_insert: bool = False,
    skip_empty: bool = False,
) -> str:
    """Build an SQL fragment from a node, with literal-escaped values.

    This is a convenience for hand-written statements, NOT a parameterized
    query: the caller stays responsible for injection safety.

    A leaf gives its escaped text. A branch gives::

        `a`="1", `b`="2"                    # update form
        (`a`, `b`) VALUES ("1", "2")        # for_insert=True

    Only leaf children are used; ``columns`` restricts the keys,
    ``skip_empty`` drops empty leaves. An empty selection gives ''.
    """
    if node.is_leaf:
        return sql_escape(node.as_array())

    if isinstance(columns, str):
        columns = [columns]
    wanted = {str(column) for column in columns} if columns else None

    selected: list[tuple[str, str]] = []
    for key, child in node.items():
        if wanted is not None and key not in wanted:
            continue
        if not child.is_leaf:
            continue
        if skip_empty and child.is_empty():
            continue
        selected.append((key, to_sql(child)))

    if not selected:
        return ''
    if for_insert:
        names = ', '.join(_quote_identifier(key) for key, _ in selected)
        values = ', '.join(f'"{value}"' for _, value in selected)
        return f'({names}) VALUES ({values})'
    return ', '.join(f'{_quote_identifier(key)}="{value}"' for key, value in selected)
