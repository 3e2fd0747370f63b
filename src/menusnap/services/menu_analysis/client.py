"""
Anthropic Messages API client for menu extraction.

Sends one multimodal request (menu photo + extraction prompt) and returns
the model's raw text answer. Retries are left to the caller.
"""

import asyncio
import base64
import logging
import time
from typing import Any

import httpx
from PIL import Image

from menusnap.core.exceptions import (
    ApiError,
    HttpStatusError,
    MalformedEnvelope,
    TransportError,
)
from menusnap.models.menu import MenuItem

from . import image as image_preprocessor
from . import parser
from .prompts import MENU_EXTRACTION_PROMPT

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.anthropic.com/v1/messages"
DEFAULT_MODEL = "claude-sonnet-4-20250514"
DEFAULT_API_VERSION = "2023-06-01"


def _provider_error_message(response: httpx.Response) -> str | None:
    """Return ``error.message`` from an error body, if present."""
    try:
        body = response.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None
    error = body.get("error")
    if isinstance(error, dict) and isinstance(error.get("message"), str):
        return error["message"]
    return None


class MenuExtractionClient:
    """Client for extracting menu items from a photo with a vision model."""

    def __init__(
        self,
        api_key: str,
        *,
        api_url: str = DEFAULT_API_URL,
        model: str = DEFAULT_MODEL,
        api_version: str = DEFAULT_API_VERSION,
        max_tokens: int = 8192,
        timeout: float = 60.0,
        max_image_dimension: int = 2500,
        max_image_bytes: int = 3 * 1024 * 1024,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the extraction client.

        Args:
            api_key: Anthropic API key
            api_url: Messages endpoint URL
            model: Vision-capable model identifier
            api_version: Value of the ``anthropic-version`` header
            max_tokens: Output token ceiling for the response
            timeout: Request timeout in seconds
            max_image_dimension: Longest allowed image side in pixels
            max_image_bytes: Encoded image budget before base64
            transport: Optional httpx transport (used by tests)
        """
        self.api_key = api_key
        self.api_url = api_url
        self.model = model
        self.api_version = api_version
        self.max_tokens = max_tokens
        self.timeout = timeout
        self.max_image_dimension = max_image_dimension
        self.max_image_bytes = max_image_bytes
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "MenuExtractionClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    def build_request_body(self, image_b64: str) -> dict[str, Any]:
        """Build the Messages API payload: one image part plus the prompt."""
        return {
            "model": self.model,
            "max_tokens": self.max_tokens,
            "messages": [
                {
                    "role": "user",
                    "content": [
                        {
                            "type": "image",
                            "source": {
                                "type": "base64",
                                "media_type": image_preprocessor.MEDIA_TYPE,
                                "data": image_b64,
                            },
                        },
                        {"type": "text", "text": MENU_EXTRACTION_PROMPT},
                    ],
                }
            ],
        }

    def _headers(self) -> dict[str, str]:
        return {
            "content-type": "application/json",
            "x-api-key": self.api_key,
            "anthropic-version": self.api_version,
        }

    async def extract_menu(self, image: Image.Image | bytes) -> str:
        """
        Send a menu photo to the model and return its raw text answer.

        Args:
            image: Menu photo as encoded bytes or a PIL image

        Returns:
            Text of the first content block of the response

        Raises:
            ImageEncodingFailed: If the photo cannot fit the byte budget
            TransportError: On connection failures and timeouts
            ApiError: Non-2xx response with a provider error message
            HttpStatusError: Any other non-2xx response
            MalformedEnvelope: 2xx response of an unexpected shape
        """
        start_time = time.time()

        # CPU-bound; finish before the request goes out
        image_data = await asyncio.to_thread(
            image_preprocessor.prepare,
            image,
            self.max_image_dimension,
            self.max_image_bytes,
        )
        image_b64 = base64.b64encode(image_data).decode("utf-8")
        request_body = self.build_request_body(image_b64)

        logger.info(
            f"Sending menu extraction request to {self.model} "
            f"(image: {len(image_data)} bytes, base64: {len(image_b64)} chars)"
        )

        client = await self._get_client()
        try:
            response = await client.post(self.api_url, json=request_body, headers=self._headers())
        except httpx.TimeoutException as e:
            raise TransportError(
                f"Request timed out after {self.timeout}s",
                details={"error": type(e).__name__},
            ) from e
        except httpx.RequestError as e:
            raise TransportError(f"Failed to connect to {self.api_url}: {e}") from e

        if not response.is_success:
            message = _provider_error_message(response)
            logger.warning(
                f"Menu extraction failed with HTTP {response.status_code}: {message or response.text[:200]}"
            )
            if message is not None:
                raise ApiError(message, details={"status_code": response.status_code})
            raise HttpStatusError(response.status_code, details={"body": response.text[:500]})

        try:
            envelope = response.json()
        except ValueError as e:
            raise MalformedEnvelope("Response body is not valid JSON") from e

        text = parser.extract_text(envelope)

        processing_time = int((time.time() - start_time) * 1000)
        logger.info(f"Menu extraction complete: {len(text)} chars in {processing_time}ms")
        logger.debug(f"Raw model response: {text[:500]}...")
        return text

    async def analyze_menu(self, image: Image.Image | bytes) -> list[MenuItem]:
        """Extract and parse menu items, in the order the model listed them."""
        text = await self.extract_menu(image)
        return parser.parse(text)
