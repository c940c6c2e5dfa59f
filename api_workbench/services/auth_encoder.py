"""
Authentication encoding.

Turns an ``AuthConfig`` into header and query-string contributions. Headers
written here overwrite same-named headers supplied explicitly by the user.
"""

import base64
from typing import Callable
from urllib.parse import quote

from ..schemas.request import ApiKeyAuth, AuthConfig, BasicAuth, BearerAuth

# Characters left unescaped by JavaScript's encodeURIComponent
URI_COMPONENT_SAFE = "-_.!~*'()"


def encode_uri_component(value: str) -> str:
    return quote(value, safe=URI_COMPONENT_SAFE)


def append_query(url: str, key: str, value: str) -> str:
    """
    Append ``key=value`` to ``url``, both percent-encoded.

    Plain string concatenation is used so that malformed or schemeless URLs
    never cause an error.
    """
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}{encode_uri_component(key)}={encode_uri_component(value)}"


def resolve_auth(auth: AuthConfig, resolve: Callable[[str], str]) -> AuthConfig:
    """Return a copy of ``auth`` with every populated text field resolved."""
    fields = {
        name: resolve(value)
        for name, value in auth.model_dump(exclude={"type", "add_to"}).items()
        if value
    }
    return auth.model_copy(update=fields)


def apply_auth(
    auth: AuthConfig,
    headers: dict[str, str],
    url: str,
) -> tuple[dict[str, str], str]:
    """
    Apply an authentication configuration to a header map and URL.

    Args:
        auth: Resolved authentication configuration
        headers: Current header map (not modified)
        url: Current URL

    Returns:
        Tuple of (updated header map, updated URL)
    """
    headers = dict(headers)

    if isinstance(auth, BasicAuth):
        credentials = f"{auth.username or ''}:{auth.password or ''}"
        encoded = base64.b64encode(credentials.encode("utf-8")).decode("ascii")
        headers["Authorization"] = f"Basic {encoded}"

    elif isinstance(auth, BearerAuth):
        # An empty token adds no header at all
        if auth.token:
            headers["Authorization"] = f"Bearer {auth.token}"

    elif isinstance(auth, ApiKeyAuth) and auth.key:
        if auth.add_to == "query":
            url = append_query(url, auth.key, auth.value)
        else:
            headers[auth.key] = auth.value

    return headers, url
