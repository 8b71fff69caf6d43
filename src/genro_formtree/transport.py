# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Network collaborators: form POSTing and MX lookups.

Both are single blocking attempts. Failures are logged and reported as
None/False, never raised.
"""

from __future__ import annotations

import logging

import dns.exception
import dns.resolver
import requests

from .constants import DEFAULT_MX_TIMEOUT, DEFAULT_SEND_TIMEOUT

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPE = 'application/x-www-form-urlencoded'


def has_mx_record(domain: str, timeout: float = DEFAULT_MX_TIMEOUT) -> bool:
    """True if ``domain`` publishes at least one MX record."""
    try:
        answer = dns.resolver.resolve(domain, 'MX', lifetime=timeout)
    except dns.exception.DNSException as e:
        logger.info(f"MX lookup failed for {domain}: {e}")
        return False
    return len(answer) > 0


def post_form(
    url: str,
    body: str,
    timeout: float = DEFAULT_SEND_TIMEOUT,
    session: requests.Session | None = None,
) -> str | None:
    """POST an urlencoded ``body`` to ``url``.

    Args:
        url: Target URL.
        body: Query-string encoded form data.
        timeout: Seconds before giving up.
        session: Optional requests session (a plain request is made otherwise).

    Returns:
        The response body, whatever the status code, or None on a transport
        error (connection refused, timeout, invalid URL).
    """
    poster = session.post if session is not None else requests.post
    try:
        response = poster(
            url,
            data=body,
            headers={'Content-Type': FORM_CONTENT_TYPE},
            timeout=timeout,
        )
    except requests.exceptions.RequestException as e:
        logger.error(f"Failed to POST form to {url}: {str(e)}")
        return None
    return response.text
