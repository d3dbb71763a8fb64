import logging

from fastapi import APIRouter, Request

from app.models.request import ExtractRequest
from app.models.response import PreviewResponse
from app.routers.extract import extract_page, limiter
from app.services.renderer import render_sections

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/preview",
    response_model=PreviewResponse,
    response_model_exclude_none=True,
    summary="Extract a landing page and render its sections to HTML",
)
@limiter.limit("20/minute")
async def preview(request: Request, body: ExtractRequest) -> PreviewResponse:
    page = extract_page(body)
    rendered = await render_sections(page.sections)

    # Failed sections fall back to their raw markdown, flagged for the client
    fallback = tuple(section.id for section in page.sections if section.id not in rendered)
    rendered_sections = {
        section.id: rendered.get(section.id, section.content) for section in page.sections
    }

    logger.info(
        "Preview request handled",
        extra={
            "chars": len(body.markdown),
            "sections": len(page.sections),
            "fallbacks": len(fallback),
        },
    )
    return PreviewResponse(
        page=page, rendered_sections=rendered_sections, fallback_sections=fallback
    )
