import logging

from fastapi import APIRouter, HTTPException, Query, Request
from fastapi.responses import Response, StreamingResponse

from app.models.request import ExtractRequest
from app.routers.extract import extract_page, limiter
from app.services.exporter import build_html_document, build_zip_bundle, export_filename
from app.services.renderer import render_sections

logger = logging.getLogger(__name__)

router = APIRouter()

EXPORT_FORMATS = ("html", "zip")


@router.post(
    "/export",
    summary="Download the landing page as HTML or a ZIP bundle",
    description=(
        "`?format=html` returns a standalone page.\n\n"
        "`?format=zip` returns an archive with `page.json`, `index.html` and one "
        "Markdown file per section under `content/`."
    ),
)
@limiter.limit("10/minute")
async def export(
    request: Request,
    body: ExtractRequest,
    format: str = Query(default="html", description="Output format: 'html' or 'zip'."),
) -> Response:
    if format not in EXPORT_FORMATS:
        raise HTTPException(
            status_code=400,
            detail=f"Unsupported format {format!r}; expected one of {', '.join(EXPORT_FORMATS)}.",
        )

    page = extract_page(body)
    rendered = await render_sections(page.sections)
    filename = export_filename(page)
    logger.info(
        "Export request handled",
        extra={"format": format, "chars": len(body.markdown), "sections": len(page.sections)},
    )

    if format == "zip":
        filename = filename.replace(".html", ".zip")
        return StreamingResponse(
            build_zip_bundle(page, rendered),
            media_type="application/zip",
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )

    return Response(
        content=build_html_document(page, rendered),
        media_type="text/html; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
