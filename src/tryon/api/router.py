import logging

from fastapi import Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from fastapi.routing import APIRouter
from injector import inject
from starlette.concurrency import run_in_threadpool

from ..services.errors import ClientInputError, ExtractionError, UpstreamError
from ..services.multipart_decoder import decode_try_on_form
from ..services.try_on_service import TryOnService, truncate
from .cors import apply_cors_headers
from .responses import ExtractionFailureResponse

DEFAULT_IMAGE_MEDIA_TYPE = "image/png"

logger = logging.getLogger(__name__)


@inject
class TryOnRouter:
    def __init__(self, service: TryOnService) -> None:
        self.service = service
        self.router = APIRouter()
        self.router.api_route("/api/try-on", methods=["GET", "POST"])(self.try_on)

    async def try_on(self, request: Request) -> Response:
        return apply_cors_headers(await self.build_response(request), request)

    async def build_response(self, request: Request) -> Response:
        try:
            decoded = await decode_try_on_form(request)
            image = await run_in_threadpool(self.service.dress, decoded)
            return Response(
                content=image.data,
                media_type=image.media_type or DEFAULT_IMAGE_MEDIA_TYPE,
            )
        except ClientInputError as e:
            return PlainTextResponse(str(e), status_code=400)
        except UpstreamError as e:
            return PlainTextResponse(e.body, status_code=502)
        except ExtractionError as e:
            body = ExtractionFailureResponse(reason=e.reason, raw=truncate(e.raw))
            return JSONResponse(body.model_dump(), status_code=502)
        except Exception as e:
            logger.error("Unhandled error.")
            logger.exception(e)
            return PlainTextResponse("Server error.", status_code=500)
