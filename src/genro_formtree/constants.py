# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Library-wide defaults.

Every value here can be overridden per call through the matching keyword
argument.
"""

from __future__ import annotations

DEFAULT_CHARSET = 'utf-8'

# Country code used by FormValue.is_phone(clean=True)
DEFAULT_COUNTRY_CODE = '7'

# Seconds
DEFAULT_SEND_TIMEOUT = 10
DEFAULT_MX_TIMEOUT = 5.0

# Space, tab, LF, CR, NUL, vertical tab
TRIM_CHARACTERS = ' \t\n\r\0\x0b'

DEFAULT_EMPTY_MESSAGE = 'Value is missing'

PAD_LEFT = 'left'
PAD_RIGHT = 'right'
PAD_BOTH = 'both'
