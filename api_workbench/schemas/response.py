"""
Pydantic schemas for transport responses.

A ``ResponseDescriptor`` is produced once per send and is immutable
afterwards; tests may be re-run against the same descriptor any number of
times.
"""

from pydantic import BaseModel, ConfigDict


class ResponseTiming(BaseModel):
    """Timing breakdown in milliseconds. Only ``total`` is always present."""
    start: float = 0
    end: float = 0
    duration: float = 0
    dns: float | None = None
    tcp: float | None = None
    tls: float | None = None
    request: float | None = None
    first_byte: float | None = None
    download: float | None = None
    total: float = 0

    model_config = ConfigDict(frozen=True)


class ResponseSize(BaseModel):
    """Size breakdown in bytes."""
    headers: int = 0
    body: int = 0
    total: int = 0

    model_config = ConfigDict(frozen=True)


class RedirectHop(BaseModel):
    """One intermediate response of a redirect chain."""
    url: str
    status: int
    status_text: str = ""
    headers: dict[str, str] = {}
    cookies: tuple[str, ...] = ()
    timing: ResponseTiming | None = None
    size: ResponseSize | None = None

    model_config = ConfigDict(frozen=True)


class ResponseDescriptor(BaseModel):
    """
    Captured HTTP response.

    Transport failures are represented as data: status 0, status text
    "Error", empty headers and body, and ``error`` set to the cause.
    """
    status: int
    status_text: str = ""
    headers: dict[str, str] = {}
    body: str = ""
    is_base64: bool = False
    redirect_chain: tuple[RedirectHop, ...] = ()
    cookies: tuple[str, ...] = ()
    timing: ResponseTiming | None = None
    size: ResponseSize | None = None
    error: str | None = None

    model_config = ConfigDict(frozen=True)

    @classmethod
    def failure(cls, message: str) -> "ResponseDescriptor":
        """Build the degenerate descriptor returned on transport failure."""
        return cls(status=0, status_text="Error", headers={}, body="", error=message)

    @property
    def response_time(self) -> float:
        """Total duration in milliseconds, 0 when unknown."""
        if self.timing is None:
            return 0
        return self.timing.total or 0
