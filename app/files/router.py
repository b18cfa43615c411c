"""
Files router - API endpoints for saved transcripts.
All routes require authentication and filter by user.
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse, Response

from app.core.exceptions import (
    BadRequestError,
    RecordStoreError,
    TranscriptFileNotFoundError,
    VoxScribeException,
)
from app.export.schemas import ExportRequest
from app.export.service import ExportService, content_disposition, get_export_service
from app.files.schemas import FileCreate, FileError, FileList, FileRead, FilesDeleted
from app.files.service import FileService, get_file_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/files", tags=["Files"])


def _error_response(e: VoxScribeException) -> JSONResponse:
    return JSONResponse(
        status_code=e.status_code,
        content={"error": e.message, "code": e.code},
    )


@router.get(
    "",
    response_model=FileList,
    status_code=status.HTTP_200_OK,
    summary="List saved transcripts",
    description="Get all transcripts of the authenticated user, newest first.",
    responses={
        200: {"model": FileList, "description": "List of transcripts"},
        401: {"description": "Not authenticated"},
        502: {"model": FileError, "description": "Record store unavailable"},
    },
)
async def list_files(
        service: FileService = Depends(get_file_service),
) -> FileList:
    """
    List all transcripts for the authenticated user.

    Requires authentication.
    """
    try:
        return await service.list_files()
    except RecordStoreError as e:
        return _error_response(e)


@router.post(
    "",
    response_model=FileRead,
    status_code=status.HTTP_201_CREATED,
    summary="Save a transcript",
    responses={
        201: {"model": FileRead, "description": "Transcript saved"},
        401: {"description": "Not authenticated"},
        502: {"model": FileError, "description": "Record store unavailable"},
    },
)
async def create_file(
        file_data: FileCreate,
        service: FileService = Depends(get_file_service),
) -> FileRead:
    """
    Save a transcript for the authenticated user.

    Requires authentication.
    """
    try:
        return await service.create_file(file_data)
    except RecordStoreError as e:
        return _error_response(e)


@router.delete(
    "",
    response_model=FilesDeleted,
    status_code=status.HTTP_200_OK,
    summary="Delete all saved transcripts",
    responses={
        200: {"model": FilesDeleted, "description": "Transcripts deleted"},
        401: {"description": "Not authenticated"},
        502: {"model": FileError, "description": "Record store unavailable"},
    },
)
async def delete_all_files(
        service: FileService = Depends(get_file_service),
) -> FilesDeleted:
    """
    Delete every transcript of the authenticated user. This cannot be undone.

    Requires authentication.
    """
    logger.info(f"[FilesRouter] Deleting all files, user: {service.user.id}")

    try:
        return await service.delete_all_files()
    except RecordStoreError as e:
        return _error_response(e)


@router.get(
    "/{file_id}",
    response_model=FileRead,
    status_code=status.HTTP_200_OK,
    summary="Get a saved transcript",
    responses={
        200: {"model": FileRead, "description": "Transcript found"},
        401: {"description": "Not authenticated"},
        404: {"model": FileError, "description": "Transcript not found"},
        502: {"model": FileError, "description": "Record store unavailable"},
    },
)
async def get_file(
        file_id: str,
        service: FileService = Depends(get_file_service),
) -> FileRead:
    try:
        return await service.get_file(file_id)
    except (TranscriptFileNotFoundError, RecordStoreError) as e:
        return _error_response(e)


@router.delete(
    "/{file_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a saved transcript",
    responses={
        401: {"description": "Not authenticated"},
        404: {"model": FileError, "description": "Transcript not found"},
        502: {"model": FileError, "description": "Record store unavailable"},
    },
)
async def delete_file(
        file_id: str,
        service: FileService = Depends(get_file_service),
) -> Response:
    try:
        await service.delete_file(file_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    except (TranscriptFileNotFoundError, RecordStoreError) as e:
        return _error_response(e)


@router.get(
    "/{file_id}/export",
    status_code=status.HTTP_200_OK,
    summary="Export a saved transcript",
    response_class=Response,
    responses={
        200: {
            "content": {"application/pdf": {}, "text/plain": {}},
            "description": "PDF document, or plain-text fallback",
        },
        400: {"model": FileError, "description": "Transcript is empty"},
        401: {"description": "Not authenticated"},
        404: {"model": FileError, "description": "Transcript not found"},
    },
)
async def export_file(
        file_id: str,
        service: FileService = Depends(get_file_service),
        export_service: ExportService = Depends(get_export_service),
) -> Response:
    """
    Download a saved transcript, named after the original audio file.

    Requires authentication.
    """
    try:
        file = await service.get_file(file_id)
        document = export_service.export(ExportRequest(text=file.transcript, filename=file.name))
    except (BadRequestError, TranscriptFileNotFoundError, RecordStoreError) as e:
        return _error_response(e)

    logger.info(f"[FilesRouter] Exported file: {file_id} as {document.download_name}")
    return Response(
        content=document.content,
        media_type=document.media_type,
        headers={"Content-Disposition": content_disposition(document)},
    )
