"""
Helpers that derive editor data from a raw URL.
"""

import re
from urllib.parse import parse_qsl, urlsplit

from ..schemas.request import KeyValue

UNNAMED_REQUEST = "Unnamed Request"


def parse_url_params(url: str) -> list[KeyValue]:
    """
    Parse the query string of ``url`` into enabled parameter rows.

    Parameters with an empty key are dropped.

    Example:
        >>> [p.key for p in parse_url_params("http://x/y?a=1&b=2")]
        ['a', 'b']
    """
    if "?" not in url:
        return []
    query = url.split("?", 1)[1].split("#", 1)[0]
    return [
        KeyValue(key=key, value=value, enabled=True)
        for key, value in parse_qsl(query, keep_blank_values=True)
        if key
    ]


def request_name_from_url(url: str) -> str:
    """Name a request after its URL path, e.g. "api/users" for http://host/api/users."""
    parts = urlsplit(url)
    if parts.scheme and parts.netloc:
        path = parts.path
    else:
        # Schemeless input: drop an optional protocol and the host
        path = re.sub(r'^(https?://)?', '', url)
        path = re.sub(r'^[^/]+(/|$)', '', path)
        path = re.split(r'[?#]', path)[0]
    return path.strip("/") or UNNAMED_REQUEST
