from starlette.requests import Request
from starlette.responses import Response


def apply_cors_headers(response: Response, request: Request) -> Response:
    # TODO: validate Origin against an allow-list instead of echoing it back
    response.headers["Access-Control-Allow-Origin"] = request.headers.get("origin") or "*"
    response.headers["Vary"] = "Origin"
    response.headers["Access-Control-Allow-Credentials"] = "true"
    return response
