# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Genro-FormTree - Nested form data as one recursive value.

A form tree is made of FormValue leaves (text with an undoable initial
value) and FormStore branches (ordered named children). Transforms,
serializers and validation chains work the same on a single value and on
a whole form.
"""

__version__ = "0.1.0"

from .adapters import export, from_source, send
from .charmap import RESPELL_TABLE
from .exceptions import (
    FormTreeError,
    ShapeError,
    UnknownCheckError,
)
from .node import FormNode
from .store import FormStore, build
from .validation import Validator
from .value import FormValue

__all__ = [
    # Core classes
    "FormNode",
    "FormValue",
    "FormStore",
    "build",
    # Validation
    "Validator",
    # Adapters
    "from_source",
    "send",
    "export",
    # Tables
    "RESPELL_TABLE",
    # Exceptions
    "FormTreeError",
    "ShapeError",
    "UnknownCheckError",
]
