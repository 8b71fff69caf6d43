# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""FormTree exceptions.

Validation failures are never raised: they are stored on the nodes and read
back through ``get_errors()``. These exceptions signal misuse of the API.
"""

from __future__ import annotations


class FormTreeError(Exception):
    """Base exception for FormTree errors."""

    pass


class ShapeError(FormTreeError, TypeError):
    """Raised when an operation does not fit the node shape (leaf or branch)."""

    pass


class UnknownCheckError(FormTreeError, ValueError):
    """Raised when a validator is asked to run an operation it does not know."""

    pass
