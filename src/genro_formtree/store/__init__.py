# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""FormStore package - Branch nodes of a form tree.

The package is organized into:
- core: The FormStore class with child access, transforms and error aggregation
- loading: Functions building FormStore/FormValue trees from raw data

Example:
    >>> from genro_formtree import FormStore
    >>> form = FormStore({'name': ' Alice '})
    >>> form['name'].value
    'Alice'
"""

from .core import FormStore
from .loading import build

__all__ = ["FormStore", "build"]
