"""
URL inspection API routes.
"""

from fastapi import APIRouter

from ..schemas.execute import UrlInspectRequest, UrlInspectResponse
from ..services.url_tools import parse_url_params, request_name_from_url


router = APIRouter(prefix="/api/url", tags=["url"])


@router.post("/inspect", response_model=UrlInspectResponse)
def inspect_url(payload: UrlInspectRequest):
    """Derive a request name and parameter rows from a raw URL."""
    return UrlInspectResponse(
        name=request_name_from_url(payload.url),
        params=parse_url_params(payload.url),
    )
