"""
Gemini REST client - single generateContent call with inline audio.
"""

import base64
import logging
from typing import Any

import httpx

from app.config import Settings
from app.core.exceptions import ExternalAPIError

logger = logging.getLogger(__name__)


class GeminiClient:
    """
    Thin async client for the Gemini generateContent endpoint.

    Talks to the REST API over httpx: the service reads the raw HTTP status
    and any `error` object embedded in a 2xx body straight from the decoded
    JSON.
    """

    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: str,
        timeout: float | None = None,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "GeminiClient":
        return cls(
            api_key=settings.google_api_key,
            model=settings.gemini_model,
            base_url=settings.gemini_base_url,
            timeout=settings.gemini_timeout_seconds,
        )

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    async def generate_content(
        self,
        audio_bytes: bytes,
        mime_type: str,
        prompt: str,
    ) -> tuple[int, dict[str, Any]]:
        """
        Send the audio and prompt to Gemini.

        Returns:
            Tuple of (HTTP status code, decoded JSON body). A body that is not
            a JSON object decodes to an empty dict.

        Raises:
            ExternalAPIError: If the request never produced a response
        """
        payload = {
            "contents": [
                {
                    "parts": [
                        {
                            "inlineData": {
                                "mimeType": mime_type,
                                "data": base64.b64encode(audio_bytes).decode("ascii"),
                            }
                        },
                        {"text": prompt},
                    ]
                }
            ]
        }

        logger.info(
            f"[GeminiClient] POST generateContent model={self.model}, "
            f"audio={len(audio_bytes)} bytes, mime={mime_type}"
        )

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    self.endpoint,
                    params={"key": self.api_key},
                    json=payload,
                    headers={"Content-Type": "application/json"},
                )
        except httpx.HTTPError as e:
            logger.error(f"[GeminiClient] Request failed: {e.__class__.__name__}: {e}")
            raise ExternalAPIError(f"Gemini request failed: {e}") from e

        try:
            data = response.json()
        except ValueError:
            logger.warning(
                f"[GeminiClient] Non-JSON response body, status: {response.status_code}"
            )
            data = {}

        if not isinstance(data, dict):
            data = {}

        logger.debug(f"[GeminiClient] Response status: {response.status_code}, keys: {list(data)}")
        return response.status_code, data
