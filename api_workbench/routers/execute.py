"""
Request compilation and execution API routes.

Compiles request descriptors against the selected environment and sends
them through the HTTP transport. Transport failures are part of the
response payload, not HTTP errors.
"""

import logging

import httpx
from fastapi import APIRouter, Depends

from ..dependencies import get_environment_store, get_transport
from ..exceptions import BadRequestError
from ..schemas.execute import CompileResponse, ExecuteRequest, ExecuteResponse
from ..services.environment_store import EnvironmentStore
from ..services.http_executor import send_request
from ..services.request_compiler import compile_request_with_warnings


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/execute", tags=["execute"])


@router.post("/compile", response_model=CompileResponse)
def compile_descriptor(
    payload: ExecuteRequest,
    store: EnvironmentStore = Depends(get_environment_store)
):
    """
    Compile a request descriptor without sending it.

    Uses the environment given by ``environment_id``, or the active
    environment when omitted.

    Returns:
        The resolved request and warnings about undefined variables

    Raises:
        ResourceNotFoundError: 404 if ``environment_id`` does not exist
    """
    environment = store.select(payload.environment_id)
    resolved, warnings = compile_request_with_warnings(payload.request, environment)
    return CompileResponse(request=resolved, warnings=warnings)


@router.post("", response_model=ExecuteResponse)
async def execute_descriptor(
    payload: ExecuteRequest,
    store: EnvironmentStore = Depends(get_environment_store),
    transport: httpx.AsyncBaseTransport | None = Depends(get_transport)
):
    """
    Compile a request descriptor and send it once.

    Returns:
        The resolved request, the captured response and any warnings. If
        the transport fails, ``response.status`` is 0 and ``response.error``
        describes the cause.

    Raises:
        BadRequestError: 400 if the descriptor has no URL
        ResourceNotFoundError: 404 if ``environment_id`` does not exist
    """
    if not payload.request.url.strip():
        raise BadRequestError("URL is required")

    environment = store.select(payload.environment_id)
    resolved, warnings = compile_request_with_warnings(payload.request, environment)
    for warning in warnings:
        logger.debug(warning)

    response = await send_request(resolved, transport=transport)
    return ExecuteResponse(request=resolved, response=response, warnings=warnings)
