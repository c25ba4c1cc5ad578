import logging
from dataclasses import dataclass

from .errors import ExtractionError
from .generation_client import GenerationClient
from .generation_request import build_generate_content_request
from .multipart_decoder import DecodedRequest
from .response_extractor import ExtractionFailure, InlineImage, extract_inline_image

RAW_EXCERPT_LIMIT = 2000

logger = logging.getLogger(__name__)


def truncate(text: str, limit: int = RAW_EXCERPT_LIMIT) -> str:
    return text if len(text) <= limit else text[:limit] + "…"


@dataclass
class TryOnService:
    client: GenerationClient

    def dress(self, request: DecodedRequest) -> InlineImage:
        payload = build_generate_content_request(request)
        raw = self.client.generate_content(payload)

        result = extract_inline_image(raw)
        if isinstance(result, ExtractionFailure):
            logger.warning(
                f"No inline image found. Reason: {result.reason}. Raw: {truncate(raw)}"
            )
            raise ExtractionError(result.reason, raw)
        return result
