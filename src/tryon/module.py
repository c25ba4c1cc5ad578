from functools import lru_cache

from fastapi import FastAPI
from injector import Binder, Injector, Module, provider, singleton

from .api.health_router import HealthCheckRouter
from .api.router import TryOnRouter
from .clients.gemini_client_requests import GeminiClientOnRequests
from .services.generation_client import GenerationClient
from .services.settings import GenerationSettings
from .services.try_on_service import TryOnService


def wire(binder: Binder):
    binder.bind(GenerationClient, GeminiClientOnRequests)  # type: ignore


class ProductionModule(Module):
    @singleton
    @provider
    def provide_settings(self) -> GenerationSettings:
        return GenerationSettings.from_env()

    @provider
    def provide_try_on_service(self, client: GenerationClient) -> TryOnService:
        return TryOnService(client)

    @singleton
    @provider
    def provide_fastapi_app(
        self,
        router: TryOnRouter,
        health_check_router: HealthCheckRouter,
    ) -> FastAPI:
        app = FastAPI(title="Try-on Gateway")
        app.include_router(router.router)
        app.include_router(health_check_router.router)
        return app


@lru_cache
def provide_injector():
    return Injector([wire, ProductionModule])
