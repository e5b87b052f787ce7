"""Kubernetes object name validation."""

from __future__ import annotations

import re

_DNS1123_LABEL = r"[a-z0-9]([-a-z0-9]*[a-z0-9])?"
_RE_DNS1123_SUBDOMAIN = re.compile(rf"^{_DNS1123_LABEL}(\.{_DNS1123_LABEL})*$")
_DNS1123_SUBDOMAIN_MAX_LENGTH = 253


def is_dns1123_subdomain(name: str) -> bool:
    """Return True if *name* is a valid RFC 1123 subdomain.

    Lowercase alphanumerics, ``-`` and ``.``; must start and end with an
    alphanumeric character; at most 253 characters.
    """
    if not name or len(name) > _DNS1123_SUBDOMAIN_MAX_LENGTH:
        return False
    return _RE_DNS1123_SUBDOMAIN.match(name) is not None
