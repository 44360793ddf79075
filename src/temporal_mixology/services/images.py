"""
Image generation service.

The Gemini image model answers with content parts; the picture arrives as a
part carrying ``inline_data`` (raw bytes plus a mime type). The first such
part wins and is returned as a ``data:`` URI.
"""

import base64
import logging

from google import genai
from google.genai import types

from temporal_mixology.domain.errors import ImageGenerationFailed

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "image/png"


def image_data_uri(response: types.GenerateContentResponse) -> str | None:
    """Return the first inline image in ``response`` as a data URI."""
    candidates = response.candidates or []
    if not candidates or candidates[0].content is None:
        return None
    for part in candidates[0].content.parts or []:
        inline = part.inline_data
        if inline is None or not inline.data:
            continue
        data = inline.data
        payload = data if isinstance(data, str) else base64.b64encode(data).decode("ascii")
        return f"data:{inline.mime_type or DEFAULT_MIME_TYPE};base64,{payload}"
    return None


class GeminiImageService:
    """Implements ImageGenerator against ``client.aio.models.generate_content``."""

    def __init__(self, client: genai.Client, model: str) -> None:
        self.client = client
        self.model = model

    async def generate(self, instruction: str) -> str:
        logger.info("Requesting image from %s", self.model)
        response = await self.client.aio.models.generate_content(
            model=self.model,
            contents=[types.Content(role="user", parts=[types.Part.from_text(text=instruction)])],
        )
        uri = image_data_uri(response)
        if uri is None:
            raise ImageGenerationFailed()
        logger.info("Image ready (%d bytes encoded)", len(uri))
        return uri
