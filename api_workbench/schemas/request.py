"""
Pydantic schemas for request descriptors.

A ``RequestDescriptor`` is the editable, templated description of an HTTP
request. Compiling it against an environment yields a ``ResolvedRequest``
that is handed to the transport.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field


# HTTP methods supported by the system
HttpMethod = Literal["GET", "POST", "PUT", "DELETE", "PATCH", "HEAD", "OPTIONS"]


class KeyValue(BaseModel):
    """A URL parameter or header row. Disabled rows are ignored."""
    key: str = ""
    value: str = ""
    enabled: bool = True


class Cookie(BaseModel):
    """A cookie sent with the request. Only name and value are transmitted."""
    name: str
    value: str = ""
    domain: str | None = None
    path: str | None = None
    expires: str | None = None
    secure: bool | None = None
    http_only: bool | None = None


# Authentication variants

class NoAuth(BaseModel):
    type: Literal["none"] = "none"


class BasicAuth(BaseModel):
    type: Literal["basic"] = "basic"
    username: str = ""
    password: str = ""


class BearerAuth(BaseModel):
    type: Literal["bearer"] = "bearer"
    token: str = ""


class ApiKeyAuth(BaseModel):
    type: Literal["apiKey"] = "apiKey"
    key: str = ""
    value: str = ""
    add_to: Literal["header", "query"] = "header"


AuthConfig = Annotated[
    Union[NoAuth, BasicAuth, BearerAuth, ApiKeyAuth],
    Field(discriminator="type"),
]


class RequestDescriptor(BaseModel):
    """
    Templated description of an HTTP request.

    Attributes:
        method: HTTP method
        url: Raw URL template; may contain {{placeholders}} and a query string
        params: URL parameter rows mirrored from the query string
        headers: Header rows, applied in order
        body: Request body text, sent only for methods other than GET/HEAD
        content_type: Content type of the body
        auth: Authentication configuration
        cookies: Cookies assembled into the Cookie header
    """
    method: HttpMethod = "GET"
    url: str = ""
    params: list[KeyValue] = []
    headers: list[KeyValue] = []
    body: str = ""
    content_type: str = ""
    auth: AuthConfig = Field(default_factory=NoAuth)
    cookies: list[Cookie] = []


class ResolvedRequest(BaseModel):
    """Concrete, placeholder-free request ready for the transport."""
    method: str
    url: str
    headers: dict[str, str] = {}
    body: str | None = None
    content_type: str | None = None
    cookies: list[Cookie] = []
