"""
Files repository - Data Access Layer for transcript records.
Talks to the Supabase REST API with the caller's access token, so the
store's own access policies apply. All operations filter by user_id.
"""

import logging
from typing import Any, Optional

import httpx

from app.config import Settings
from app.core.exceptions import RecordStoreError
from app.files.schemas import FileCreate

logger = logging.getLogger(__name__)


class FileRepository:
    """Repository for transcript record CRUD operations with user filtering."""

    def __init__(self, settings: Settings, access_token: str):
        self.table_url = f"{settings.supabase_rest_url}/{settings.supabase_files_table}"
        self.headers = {
            "apikey": settings.supabase_anon_key,
            "Authorization": f"Bearer {access_token}",
        }

    async def _request(
            self,
            method: str,
            params: dict[str, str],
            json: Optional[dict[str, Any]] = None,
            prefer: Optional[str] = None,
    ) -> list[dict[str, Any]]:
        headers = dict(self.headers)
        if prefer:
            headers["Prefer"] = prefer

        async with httpx.AsyncClient() as client:
            try:
                response = await client.request(
                    method,
                    self.table_url,
                    params=params,
                    json=json,
                    headers=headers,
                )
            except httpx.RequestError as e:
                logger.error(f"[FileRepository] Request error: {e}")
                raise RecordStoreError("Failed to connect to record store") from e

        if response.status_code >= 400:
            logger.error(
                f"[FileRepository] {method} failed, status: {response.status_code}, body: {response.text}"
            )
            raise RecordStoreError(f"Record store request failed with status {response.status_code}")

        if not response.content:
            return []
        return response.json()

    async def list_by_user(self, user_id: str) -> list[dict[str, Any]]:
        """
        List all records of a user, newest first.

        Args:
            user_id: Owner user ID

        Returns:
            Raw record rows
        """
        return await self._request(
            "GET",
            params={"select": "*", "user_id": f"eq.{user_id}", "order": "created_at.desc"},
        )

    async def get_by_id(self, file_id: str, user_id: str) -> Optional[dict[str, Any]]:
        rows = await self._request(
            "GET",
            params={"select": "*", "id": f"eq.{file_id}", "user_id": f"eq.{user_id}"},
        )
        return rows[0] if rows else None

    async def create(self, file_data: FileCreate, user_id: str) -> dict[str, Any]:
        """
        Insert a record for a user.

        Returns:
            The created row as stored
        """
        rows = await self._request(
            "POST",
            params={},
            json={**file_data.model_dump(mode="json"), "user_id": user_id},
            prefer="return=representation",
        )
        if not rows:
            raise RecordStoreError("Record store did not return the created record")

        logger.info(f"[FileRepository] Created file: {rows[0].get('id')} for user: {user_id}")
        return rows[0]

    async def delete(self, file_id: str, user_id: str) -> int:
        """Delete one record. Returns the number of rows deleted."""
        rows = await self._request(
            "DELETE",
            params={"id": f"eq.{file_id}", "user_id": f"eq.{user_id}"},
            prefer="return=representation",
        )
        return len(rows)

    async def delete_all_by_user(self, user_id: str) -> int:
        """Delete every record of a user. Returns the number of rows deleted."""
        rows = await self._request(
            "DELETE",
            params={"user_id": f"eq.{user_id}"},
            prefer="return=representation",
        )
        logger.info(f"[FileRepository] Deleted {len(rows)} file(s) for user: {user_id}")
        return len(rows)
