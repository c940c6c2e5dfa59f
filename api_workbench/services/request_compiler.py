"""
Request compilation.

Combines the resolved URL, headers, authentication, cookies and body of a
``RequestDescriptor`` into a ``ResolvedRequest``. Compilation is a pure
function: it performs no I/O, keeps no state and never raises for a
well-formed descriptor, whatever its URL looks like.
"""

import logging

from ..schemas.environment import Environment
from ..schemas.request import Cookie, RequestDescriptor, ResolvedRequest
from .auth_encoder import apply_auth, encode_uri_component, resolve_auth
from .variable_substitution import substitute

logger = logging.getLogger(__name__)

# Methods that never carry a body
BODYLESS_METHODS = frozenset({"GET", "HEAD"})


class _Resolver:
    """Resolves text against one environment, remembering undefined names."""

    def __init__(self, environment: Environment | None):
        self.variables = environment.variables if environment is not None else {}
        self.warnings: list[str] = []

    def __call__(self, text: str, location: str) -> str:
        resolved, unmatched = substitute(text, self.variables)
        for name in unmatched:
            warning = f"Undefined variable in {location}: {{{{{name}}}}}"
            if warning not in self.warnings:
                self.warnings.append(warning)
        return resolved


def build_cookie_header(cookies: list[Cookie]) -> str:
    return "; ".join(
        f"{encode_uri_component(cookie.name)}={encode_uri_component(cookie.value)}"
        for cookie in cookies
    )


def compile_request_with_warnings(
    descriptor: RequestDescriptor,
    environment: Environment | None,
) -> tuple[ResolvedRequest, list[str]]:
    """
    Compile a request descriptor and report undefined variables.

    Steps, in order:
        1. Resolve the raw URL.
        2. Build headers from enabled rows; later duplicates win.
        3. Apply authentication; its headers win over explicit ones and its
           query contribution is appended to the URL.
        4. Assemble the Cookie header from the cookie list. This overrides
           an explicit Cookie header.
        5. Include body and content type unless the method is GET/HEAD or
           the body is empty.

    Returns:
        Tuple of (resolved request, list of warning messages)
    """
    resolve = _Resolver(environment)

    url = resolve(descriptor.url, "URL")

    headers: dict[str, str] = {}
    for header in descriptor.headers:
        if not header.enabled or not header.key:
            continue
        headers[resolve(header.key, "headers")] = resolve(header.value, "headers")

    auth = resolve_auth(descriptor.auth, lambda text: resolve(text, "auth"))
    headers, url = apply_auth(auth, headers, url)

    cookies = [
        cookie.model_copy(update={
            "name": resolve(cookie.name, "cookies"),
            "value": resolve(cookie.value, "cookies"),
        })
        for cookie in descriptor.cookies
    ]
    cookie_header = build_cookie_header(cookies)
    if cookie_header:
        headers["Cookie"] = cookie_header

    body = None
    content_type = None
    if descriptor.method not in BODYLESS_METHODS and descriptor.body:
        body = resolve(descriptor.body, "body")
        content_type = resolve(descriptor.content_type, "content type") or None

    if resolve.warnings:
        logger.debug("Compiled %s request with %d undefined variable(s)", descriptor.method, len(resolve.warnings))

    resolved = ResolvedRequest(
        method=descriptor.method,
        url=url,
        headers=headers,
        body=body,
        content_type=content_type,
        cookies=cookies,
    )
    return resolved, resolve.warnings


def compile_request(descriptor: RequestDescriptor, environment: Environment | None) -> ResolvedRequest:
    """Compile ``descriptor`` against ``environment`` into a resolved request."""
    resolved, _ = compile_request_with_warnings(descriptor, environment)
    return resolved
