"""
Files service - Business logic for transcript records.
All operations are scoped to the authenticated user.
"""

import logging

from app.auth.schemas import AuthenticatedUser
from app.config import Settings, get_settings
from app.core.exceptions import TranscriptFileNotFoundError
from app.dependencies import CurrentUser
from app.files.repository import FileRepository
from app.files.schemas import FileCreate, FileList, FileRead, FilesDeleted

logger = logging.getLogger(__name__)


class FileService:
    """Service for transcript record business logic with user scoping."""

    def __init__(self, user: AuthenticatedUser, settings: Settings | None = None):
        self.user = user
        self.repository = FileRepository(settings or get_settings(), user.access_token)

    async def list_files(self) -> FileList:
        logger.info(f"[FileService] Listing files for user: {self.user.id}")
        rows = await self.repository.list_by_user(self.user.id)
        files = [FileRead.model_validate(row) for row in rows]
        return FileList(files=files, total=len(files))

    async def get_file(self, file_id: str) -> FileRead:
        """
        Get one transcript record.

        Raises:
            TranscriptFileNotFoundError: If the record does not exist for this user
        """
        row = await self.repository.get_by_id(file_id, self.user.id)
        if row is None:
            raise TranscriptFileNotFoundError(f"File not found: {file_id}")
        return FileRead.model_validate(row)

    async def create_file(self, file_data: FileCreate) -> FileRead:
        logger.info(f"[FileService] Saving file: {file_data.name} for user: {self.user.id}")
        row = await self.repository.create(file_data, self.user.id)
        return FileRead.model_validate(row)

    async def delete_file(self, file_id: str) -> None:
        """
        Delete one transcript record.

        Raises:
            TranscriptFileNotFoundError: If nothing was deleted
        """
        deleted = await self.repository.delete(file_id, self.user.id)
        if deleted == 0:
            raise TranscriptFileNotFoundError(f"File not found: {file_id}")
        logger.info(f"[FileService] Deleted file: {file_id} for user: {self.user.id}")

    async def delete_all_files(self) -> FilesDeleted:
        deleted = await self.repository.delete_all_by_user(self.user.id)
        return FilesDeleted(deleted=deleted)


def get_file_service(user: CurrentUser) -> FileService:
    """Dependency provider for FileService, scoped to the current user."""
    return FileService(user)
