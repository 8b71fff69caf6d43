# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Adapters between form trees and the outside world.

- from_source: build a tree from a caller-supplied data source
- send: POST a tree as a form to a URL
- export: write a tree back into a mutable mapping (request state, ...)
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, MutableMapping
from typing import Any, TYPE_CHECKING

from . import transport
from .constants import DEFAULT_SEND_TIMEOUT
from .exceptions import ShapeError
from .store.loading import build

if TYPE_CHECKING:
    import requests

    from .node import FormNode

logger = logging.getLogger(__name__)


def from_source(
    source: Mapping | Callable[[], Mapping],
    expected: Mapping | None = None,
    trim: bool = True,
) -> FormNode:
    """Build a form tree from a mapping or from a callable returning one.

    The callable form lets frameworks plug in their request data::

        form = from_source(lambda: request.form.to_dict(), expected={'q': ''})
    """
    data = source() if callable(source) else source
    if data is None:
        data = {}
    return build(data, expected, trim)


def send(
    node: FormNode,
    url: str,
    timeout: float = DEFAULT_SEND_TIMEOUT,
    session: requests.Session | None = None,
) -> str | None:
    """POST ``node.as_query()`` to ``url``.

    Returns:
        The response body, or None if ``url`` is empty or the request failed.
    """
    if not url:
        return None
    logger.debug(f"Sending form to {url}")
    return transport.post_form(url, node.as_query(), timeout=timeout, session=session)


def export(node: FormNode, target: MutableMapping[str, Any]) -> None:
    """Replace the content of ``target`` with the node values by key.

    Raises:
        ShapeError: If ``node`` is a leaf.
    """
    if node.is_leaf:
        raise ShapeError("only a FormStore can be exported to a mapping")
    target.clear()
    target.update({key: child.as_array() for key, child in node.items()})
