"""
HTTP transport for resolved requests.

Sends a ``ResolvedRequest`` with httpx and captures the result as an
immutable ``ResponseDescriptor``. Redirects are followed one hop at a time
so every intermediate response is recorded in the redirect chain.

The transport never raises and never retries: any failure is returned as
a descriptor with status 0 and ``error`` set.
"""

import base64
import logging
import time

import httpx

from ..config import get_settings
from ..schemas.request import ResolvedRequest
from ..schemas.response import RedirectHop, ResponseDescriptor, ResponseSize, ResponseTiming

logger = logging.getLogger(__name__)

# Content types whose body is returned base64-encoded
BINARY_CONTENT_TYPES = (
    "image/",
    "audio/",
    "video/",
    "font/",
    "application/octet-stream",
    "application/pdf",
    "application/zip",
    "application/gzip",
)


class RedirectLimitError(Exception):
    """Raised when a response chain exceeds the redirect limit."""


class _TimingTrace:
    """
    httpcore trace callback recording when each connection phase happened.

    Event names look like "connection.connect_tcp.started" or
    "http11.receive_response_headers.complete"; the first segment is dropped.
    """

    def __init__(self):
        self.marks: dict[str, float] = {}

    async def __call__(self, event_name: str, info: dict) -> None:
        _, _, name = event_name.partition(".")
        self.marks.setdefault(name, time.perf_counter())

    def span(self, start: str, end: str) -> float | None:
        if start in self.marks and end in self.marks:
            return round((self.marks[end] - self.marks[start]) * 1000, 3)
        return None


def _build_timing(trace: _TimingTrace, started_at: float, start: float, end: float) -> ResponseTiming:
    total = round((end - start) * 1000, 3)
    sent = "send_request_body.complete" if "send_request_body.complete" in trace.marks else "send_request_headers.complete"
    return ResponseTiming(
        start=started_at,
        end=started_at + total,
        duration=total,
        tcp=trace.span("connect_tcp.started", "connect_tcp.complete"),
        tls=trace.span("start_tls.started", "start_tls.complete"),
        request=trace.span("send_request_headers.started", sent),
        first_byte=trace.span(sent, "receive_response_headers.complete"),
        download=trace.span("receive_response_body.started", "receive_response_body.complete"),
        total=total,
    )


def _measure(response: httpx.Response) -> ResponseSize:
    header_bytes = sum(len(key) + len(value) + 4 for key, value in response.headers.raw)
    body_bytes = len(response.content)
    return ResponseSize(headers=header_bytes, body=body_bytes, total=header_bytes + body_bytes)


def _decode_body(response: httpx.Response) -> tuple[str, bool]:
    """Return (body, is_base64). Binary payloads are base64-encoded."""
    content_type = response.headers.get("content-type", "").lower()
    if any(content_type.startswith(prefix) for prefix in BINARY_CONTENT_TYPES):
        return base64.b64encode(response.content).decode("ascii"), True
    return response.text, False


def _loggable_url(url: str) -> str:
    # Query strings may carry API keys
    return url.split("?", 1)[0]


def _prepare_headers(request: ResolvedRequest) -> dict[str, str]:
    headers = dict(request.headers)
    has_content_type = any(key.lower() == "content-type" for key in headers)
    if request.body is not None and request.content_type and not has_content_type:
        headers["Content-Type"] = request.content_type
    return headers


async def send_request(
    request: ResolvedRequest,
    timeout: float | None = None,
    max_redirects: int | None = None,
    verify_ssl: bool | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> ResponseDescriptor:
    """
    Send a resolved request and capture the response.

    Args:
        request: The compiled request
        timeout: Timeout in seconds; defaults to the configured value
        max_redirects: Redirect responses allowed, counting the one that fails
        verify_ssl: Whether to verify TLS certificates
        transport: Optional httpx transport (used by tests)

    Returns:
        ResponseDescriptor; on failure status is 0 and ``error`` is set
    """
    settings = get_settings()
    timeout = settings.request_timeout if timeout is None else timeout
    max_redirects = settings.max_redirects if max_redirects is None else max_redirects
    verify_ssl = settings.verify_ssl if verify_ssl is None else verify_ssl

    content = request.body.encode("utf-8") if request.body is not None else None
    chain: list[RedirectHop] = []

    logger.info("Sending %s %s", request.method, _loggable_url(request.url))

    try:
        async with httpx.AsyncClient(
            timeout=timeout,
            verify=verify_ssl,
            follow_redirects=False,
            transport=transport,
        ) as client:
            next_request = client.build_request(
                request.method,
                request.url,
                headers=_prepare_headers(request),
                content=content,
            )
            started_at = time.time() * 1000
            start_time = time.perf_counter()

            while True:
                trace = _TimingTrace()
                next_request.extensions["trace"] = trace
                hop_started_at = time.time() * 1000
                hop_start = time.perf_counter()

                response = await client.send(next_request)
                hop_end = time.perf_counter()

                if not response.is_redirect or response.next_request is None:
                    break

                chain.append(RedirectHop(
                    url=str(response.url),
                    status=response.status_code,
                    status_text=response.reason_phrase,
                    headers=dict(response.headers),
                    cookies=tuple(response.headers.get_list("set-cookie")),
                    timing=_build_timing(trace, hop_started_at, hop_start, hop_end),
                    size=_measure(response),
                ))
                if len(chain) >= max_redirects:
                    raise RedirectLimitError(
                        f"Maximum redirect limit ({max_redirects}) exceeded. "
                        "The server might be in a redirect loop."
                    )
                next_request = response.next_request

        end_time = time.perf_counter()

    except httpx.TimeoutException:
        return _failure(request, f"Request timed out after {timeout} seconds")
    except httpx.ConnectError as e:
        return _failure(request, f"Failed to connect to server: {e}")
    except (httpx.InvalidURL, httpx.UnsupportedProtocol) as e:
        return _failure(request, f"Invalid URL: {e}")
    except httpx.HTTPError as e:
        return _failure(request, f"HTTP error occurred: {e}")
    except RedirectLimitError as e:
        return _failure(request, str(e))
    except Exception as e:
        return _failure(request, f"An unexpected error occurred: {e}")

    cookies = [cookie for hop in chain for cookie in hop.cookies]
    cookies.extend(response.headers.get_list("set-cookie"))
    body, is_base64 = _decode_body(response)

    logger.info("%s %s -> %d (%d redirect(s))", request.method, _loggable_url(request.url), response.status_code, len(chain))

    return ResponseDescriptor(
        status=response.status_code,
        status_text=response.reason_phrase,
        headers=dict(response.headers),
        body=body,
        is_base64=is_base64,
        redirect_chain=tuple(chain),
        cookies=tuple(cookies),
        timing=_build_timing(trace, started_at, start_time, end_time),
        size=_measure(response),
    )


def _failure(request: ResolvedRequest, message: str) -> ResponseDescriptor:
    logger.warning("%s %s failed: %s", request.method, _loggable_url(request.url), message)
    return ResponseDescriptor.failure(message)
