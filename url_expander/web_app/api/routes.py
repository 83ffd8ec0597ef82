"""API routes implementation."""

from datetime import datetime, timezone

from fastapi import APIRouter, HTTPException, Query, Request, status

from ...common.url_builder import extract_token
from ...errors import GenerationExhausted, InvalidInput, NotFound, StoreUnavailable
from ..context import request_base_url
from .schemas import (
    ErrorResponse,
    ExpandRequest,
    ExpandResponse,
    HealthResponse,
    LinkResponse,
    StatisticsResponse,
)

router = APIRouter()


@router.post(
    "/expand",
    response_model=ExpandResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid URL or length"},
        500: {"model": ErrorResponse, "description": "Could not generate a unique expanded URL"},
        503: {"model": ErrorResponse, "description": "Link store unavailable"},
    },
    summary="Expand URL",
    description="Create or refresh the expanded URL for an original URL.",
)
async def expand_url(request: Request, body: ExpandRequest):
    """Create or refresh an expanded URL."""
    service = request.app.state.service
    base_url = request_base_url(request)

    try:
        link = await service.expand_link(
            original_url=body.url,
            length=body.length,
            base_url=base_url,
        )
    except InvalidInput as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except GenerationExhausted as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
    except StoreUnavailable as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))

    return ExpandResponse(
        expanded_url=link.expanded_url,
        token=extract_token(link.expanded_url, base_url or service.base_url) or "",
        original_url=link.original_url,
        description=link.description,
        created_at=link.created_at,
        updated_at=link.updated_at,
    )


@router.get(
    "/links",
    response_model=LinkResponse,
    responses={
        404: {"model": ErrorResponse, "description": "No link for this URL"},
    },
    summary="Find link by original URL",
)
async def find_link_by_original(request: Request, url: str = Query(..., description="Original URL")):
    """Get the current link for an original URL."""
    service = request.app.state.service

    try:
        link = await service.find_by_original(url)
    except StoreUnavailable as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))

    if link is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No expanded URL for '{url}'",
        )

    return LinkResponse(**link.to_dict())


@router.get(
    "/links/{token}",
    response_model=LinkResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Token not found"},
    },
    summary="Get link information",
)
async def get_link(request: Request, token: str):
    """Get the link behind a token."""
    resolver = request.app.state.resolver

    try:
        link = await resolver.get_link(token, base_url=request_base_url(request))
    except NotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except StoreUnavailable as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))

    return LinkResponse(**link.to_dict())


@router.get(
    "/stats",
    response_model=StatisticsResponse,
    summary="Get statistics",
)
async def get_statistics(request: Request):
    """Get service statistics."""
    service = request.app.state.service

    try:
        stats = await service.get_statistics()
    except StoreUnavailable as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))

    return StatisticsResponse(**stats)


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
)
async def health_check(request: Request):
    """Health check endpoint for load balancers and monitoring."""
    service = request.app.state.service

    health = await service.health_check()

    return HealthResponse(
        status="healthy" if health["overall"] else "unhealthy",
        database="healthy" if health["database"] else "unhealthy",
        cache="healthy" if health["cache"] else "unhealthy",
        timestamp=datetime.now(timezone.utc),
    )
