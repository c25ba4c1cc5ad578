from fastapi import APIRouter
from injector import inject

from ..services.settings import GenerationSettings
from .responses import HealthResponse


@inject
class HealthCheckRouter:
    def __init__(self, settings: GenerationSettings) -> None:
        self.settings = settings
        self.router = APIRouter(prefix="/health")
        self.router.get("")(self.do_health_check)

    def do_health_check(self) -> HealthResponse:
        return HealthResponse(
            model=self.settings.model,
            apiKeyConfigured=bool(self.settings.api_key),
        )
