import logging

from fastapi import APIRouter, HTTPException, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from app.models.page import PageModel
from app.models.request import ExtractRequest
from app.services.extractor import extract

logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address)
router = APIRouter()


def extract_page(body: ExtractRequest) -> PageModel:
    """Run the extraction engine, mapping bad input to a 400 response."""
    try:
        return extract(body.markdown)
    except ValueError as exc:
        logger.warning("Could not extract page: %s", exc)
        raise HTTPException(status_code=400, detail=str(exc))


@router.post(
    "/extract",
    response_model=PageModel,
    response_model_exclude_none=True,
    summary="Convert README markdown into a landing-page model",
)
@limiter.limit("30/minute")
async def extract_readme(request: Request, body: ExtractRequest) -> PageModel:
    """Return the title, tagline, CTA, features and ordered sections found in the README."""
    page = extract_page(body)
    logger.info(
        "Extract request handled",
        extra={"chars": len(body.markdown), "sections": len(page.sections)},
    )
    return page
