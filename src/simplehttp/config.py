r"""Default configuration constants for the simple HTTP client.

This module centralizes the defaults applied to clients and requests
when the caller does not provide a value explicitly.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_CONTENT_ENCODING",
    "DEFAULT_CONTENT_TYPE",
    "DEFAULT_TIMEOUT",
    "DEFAULT_USER_AGENT",
    "FORM_URL_ENCODED_CONTENT_TYPE",
    "NO_TIMEOUT",
    "TRANSPORT_REPLACEMENT_INTERVAL",
]

from importlib.metadata import PackageNotFoundError, version

try:
    _VERSION = version("simplehttp")
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    _VERSION = "0.0.0"

# Default timeout in seconds for a whole request (send + body read)
DEFAULT_TIMEOUT = 30

# Sentinel timeout value that disables the timeout entirely
NO_TIMEOUT = -1

# Content type used for request bodies unless the request or a
# Content-Type header says otherwise
DEFAULT_CONTENT_TYPE = "application/json"

# Codec used to encode string and serialized request bodies
DEFAULT_CONTENT_ENCODING = "utf-8"

# Content type of form url encoded bodies, always wins over the request's
# content type when form parameters are present
FORM_URL_ENCODED_CONTENT_TYPE = "application/x-www-form-urlencoded"

# User-Agent header injected when neither the request nor the client
# default headers define one
DEFAULT_USER_AGENT = f"simplehttp/{_VERSION}"

# Interval in seconds after which a self-owned transport is replaced.
# Long-lived connection pools can keep using stale DNS resolutions,
# 5 minutes keeps them reasonably fresh without hurting connection reuse.
TRANSPORT_REPLACEMENT_INTERVAL = 300.0
