import logging
from dataclasses import dataclass

import requests
from injector import inject

from ..services.errors import UpstreamError
from ..services.generation_client import GenerationClient
from ..services.settings import GenerationSettings

logger = logging.getLogger(__name__)


@inject
@dataclass
class GeminiClientOnRequests(GenerationClient):
    settings: GenerationSettings

    def generate_content(self, payload: dict) -> str:
        headers = {"Content-Type": "application/json"}
        if self.settings.api_key:
            headers["x-goog-api-key"] = self.settings.api_key

        response = requests.post(self.settings.endpoint, json=payload, headers=headers)
        if not response.ok:
            logger.error(f"Gemini error {response.status_code}: {response.text}")
            raise UpstreamError(response.status_code, response.text)
        return response.text
