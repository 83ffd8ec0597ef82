"""Web interface routes implementation."""

import os

from fastapi import APIRouter, Form, HTTPException, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from ...errors import GenerationExhausted, InvalidInput, NotFound, StoreUnavailable
from ..context import request_base_url

router = APIRouter()

template_dir = os.path.join(os.path.dirname(__file__), "..", "templates")
templates = Jinja2Templates(directory=template_dir)


def _render_home(request: Request, status_code: int = 200, **context) -> HTMLResponse:
    config = request.app.state.config
    values = {
        "expanded_url": None,
        "error_message": None,
        "url": "",
        "length": config.default_token_length,
        "min_length": config.min_token_length,
        "max_length": config.max_token_length,
    }
    values.update(context)
    return templates.TemplateResponse(request, "index.html", values, status_code=status_code)


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def homepage(request: Request):
    """Serve the expand form."""
    return _render_home(request)


@router.post("/expand-url", response_class=HTMLResponse, include_in_schema=False)
async def expand_url_web(
    request: Request,
    url: str = Form(""),
    length: str = Form(""),
):
    """Handle form submission and show the expanded URL."""
    service = request.app.state.service
    url = url.strip()
    length = length.strip()

    try:
        requested_length = int(length) if length else None
    except ValueError:
        return _render_home(
            request,
            status_code=status.HTTP_400_BAD_REQUEST,
            url=url,
            length=length,
            error_message="Invalid length: Length must be an integer",
        )

    try:
        expanded_url = await service.expand(
            original_url=url,
            length=requested_length,
            base_url=request_base_url(request),
        )
    except InvalidInput as e:
        status_code = status.HTTP_400_BAD_REQUEST
        error_message = str(e)
    except GenerationExhausted as e:
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        error_message = f"{e}. Please try again."
    except StoreUnavailable:
        status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        error_message = "Service temporarily unavailable. Please try again."
    else:
        return _render_home(
            request,
            url=url,
            length=requested_length or service.default_length,
            expanded_url=expanded_url,
        )

    return _render_home(
        request,
        status_code=status_code,
        url=url,
        length=length,
        error_message=error_message,
    )


@router.get("/health", include_in_schema=False)
async def health_check_web(request: Request):
    """Health check endpoint (simple version for load balancers)."""
    service = request.app.state.service

    health = await service.health_check()

    if health["overall"]:
        return {"status": "healthy"}
    raise HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail="Service unhealthy",
    )


@router.get("/{token}", include_in_schema=False)
async def redirect_to_url(request: Request, token: str):
    """Redirect an expanded URL to its original URL."""
    resolver = request.app.state.resolver

    try:
        original_url = await resolver.resolve(token, base_url=request_base_url(request))
    except NotFound:
        return templates.TemplateResponse(
            request,
            "error.html",
            {"error_message": "This expanded URL does not exist or has been replaced."},
            status_code=status.HTTP_404_NOT_FOUND,
        )
    except StoreUnavailable:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service temporarily unavailable",
        )

    return RedirectResponse(url=original_url, status_code=status.HTTP_302_FOUND)
