import logging
import os

from pydantic.dataclasses import dataclass

DEFAULT_MODEL = "gemini-2.5-flash-image-preview"
DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerationSettings:
    api_key: str | None = None
    model: str = DEFAULT_MODEL
    base_url: str = DEFAULT_BASE_URL

    @property
    def endpoint(self) -> str:
        return f"{self.base_url.rstrip('/')}/models/{self.model}:generateContent"

    @classmethod
    def from_env(cls) -> "GenerationSettings":
        api_key = os.getenv("GEMINI_API_KEY_1")
        if not api_key:
            logger.warning("GEMINI_API_KEY_1 is not set, provider calls will be unauthenticated")
        return cls(
            api_key=api_key or None,
            model=os.getenv("GEMINI_IMAGE_MODEL") or DEFAULT_MODEL,
            base_url=os.getenv("GEMINI_BASE_URL") or DEFAULT_BASE_URL,
        )
