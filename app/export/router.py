"""
Export router - API endpoints for transcript downloads.
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse, Response

from app.core.exceptions import BadRequestError
from app.export.schemas import ExportError as ExportErrorSchema, ExportRequest
from app.export.service import ExportService, content_disposition, get_export_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/export", tags=["Export"])


@router.post(
    "/pdf",
    status_code=status.HTTP_200_OK,
    summary="Export transcript",
    description="Download a transcript as a paginated PDF, or as UTF-8 text if the PDF cannot be built.",
    response_class=Response,
    responses={
        200: {
            "content": {"application/pdf": {}, "text/plain": {}},
            "description": "PDF document, or plain-text fallback",
        },
        400: {"model": ExportErrorSchema, "description": "Empty transcript or malformed request"},
        500: {"model": ExportErrorSchema, "description": "Export failed"},
    },
)
async def export_pdf(
    request: ExportRequest,
    service: ExportService = Depends(get_export_service),
) -> Response:
    """
    Export a transcript for download.

    Args:
        request: Transcript text and optional file name

    Returns:
        The document as an attachment
    """
    try:
        document = service.export(request)

        logger.info(
            f"[ExportRouter] Exported {document.download_name}, "
            f"{len(document.content)} bytes, type: {document.media_type}"
        )

        return Response(
            content=document.content,
            media_type=document.media_type,
            headers={"Content-Disposition": content_disposition(document)},
        )

    except BadRequestError as e:
        logger.warning(f"[ExportRouter] Rejected export: {e.message}")
        return JSONResponse(
            status_code=e.status_code,
            content={"error": e.message, "code": e.code},
        )

    except Exception as e:
        logger.exception(f"[ExportRouter] Export failed: {str(e)}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Export failed. Please try again.", "code": "EXPORT_FAILED"},
        )
