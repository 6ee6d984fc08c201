"""
FastAPI compiler for wire applications.

    api = from_application(app, title="storefront")

Each exposure becomes one route. FastAPI binds the request model (JSON body
for POST/PUT/PATCH, query string otherwise); outcomes map to responses as:

    Ok(value)                  200, response model dumped by alias
    Error(StorefrontError)     e.status, {"error", "code"[, "fields"]}
    Error(other)               500
    bad JSON / bad shape       400
"""

import inspect
import logging
from typing import Annotated, Any

import fastapi
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from kungfu import Error, Ok

from storefront._errors import MissingField, StorefrontError
from storefront.ops import Runner
from storefront.wire._exposure import Application, Codec, Endpoint, Route, RouteContext

logger = logging.getLogger(__name__)

type RouteHandler = Any


def error_response(error: StorefrontError) -> JSONResponse:
    body: dict[str, Any] = {"error": error.message, "code": error.code}
    if isinstance(error, MissingField):
        body["fields"] = list(error.fields)
    return JSONResponse(body, status_code=error.status)


async def invalid_request(request: fastapi.Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    message = (
        "Invalid JSON body"
        if any(e.get("type") == "json_invalid" for e in errors)
        else "Invalid request"
    )
    logger.info("%s %s rejected: %d invalid fields", request.method, request.url.path, len(errors))
    return JSONResponse({"error": message, "code": "VALIDATION"}, status_code=400)


def route_context(request: fastapi.Request, route: Route) -> RouteContext:
    return RouteContext(
        path_params=dict(request.path_params),
        headers={name: request.headers[name] for name in route.forward if name in request.headers},
    )


def _request_parameter(route: Route, req_cls: Any) -> inspect.Parameter | None:
    if not req_cls.model_fields:
        return None
    if route.has_body:
        # an absent body binds as None and becomes the all-defaults model
        return inspect.Parameter(
            "req",
            inspect.Parameter.KEYWORD_ONLY,
            default=None,
            annotation=Annotated[req_cls | None, fastapi.Body()],
        )
    return inspect.Parameter(
        "req",
        inspect.Parameter.KEYWORD_ONLY,
        annotation=Annotated[req_cls, fastapi.Query()],
    )


def make_handler(route: Route, codec: Codec, runner: Runner) -> RouteHandler:
    req_cls: Any = codec.request
    resp_cls: Any = codec.response

    async def handle(request: fastapi.Request, req: Any = None) -> fastapi.Response:
        if req is None:
            req = req_cls()
        match await runner.run(req.to_domain(route_context(request, route))):
            case Ok(value):
                return JSONResponse(resp_cls.from_domain(value).model_dump(by_alias=True, mode="json"))
            case Error(StorefrontError() as e):
                return error_response(e)
            case Error(e):
                logger.error("%s %s failed: %r", route.method, route.path, e)
                return JSONResponse({"error": "Internal error", "code": None}, status_code=500)

    params = [
        inspect.Parameter("request", inspect.Parameter.POSITIONAL_OR_KEYWORD, annotation=fastapi.Request)
    ]
    if (bound := _request_parameter(route, req_cls)) is not None:
        params.append(bound)
    handle.__signature__ = inspect.Signature(params, return_annotation=fastapi.Response)  # type: ignore[attr-defined]
    handle.__name__ = f"{route.method.lower()}_{req_cls.__name__}"
    return handle


def compile_routes(endp: Endpoint) -> list[tuple[Route, RouteHandler]]:
    return [(route, make_handler(route, codec, endp.runner)) for route, codec in endp.exposures]


def from_application(app: Application, **fastapi_kwargs: Any) -> fastapi.FastAPI:
    api = fastapi.FastAPI(**fastapi_kwargs)
    api.add_exception_handler(RequestValidationError, invalid_request)  # type: ignore[arg-type]
    for endp in app.endpoints:
        for route, handler in compile_routes(endp):
            api.add_api_route(route.path, handler, methods=[route.method])
    return api


__all__ = (
    "error_response",
    "invalid_request",
    "route_context",
    "make_handler",
    "compile_routes",
    "from_application",
)
