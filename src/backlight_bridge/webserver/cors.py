# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Matthias Bilger matthias@bilger.info
from aiohttp import hdrs
from aiohttp import web

ALLOW_HEADERS = (
    "Origin",
    "Content-Length",
    "Content-Type",
    "X-Screen-Height",
    "X-Screen-Width",
    "Authorization",
)
ALLOW_METHODS = ("GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS")
MAX_AGE = 12 * 60 * 60


def _is_preflight(request: web.Request) -> bool:
    return request.method == hdrs.METH_OPTIONS and hdrs.ORIGIN in request.headers


def _add_origin_headers(response: web.StreamResponse, origin: str) -> None:
    response.headers[hdrs.ACCESS_CONTROL_ALLOW_ORIGIN] = origin
    response.headers[hdrs.ACCESS_CONTROL_ALLOW_CREDENTIALS] = "true"
    response.headers.add(hdrs.VARY, hdrs.ORIGIN)


def cors_middleware(
    allow_headers: tuple[str, ...] = ALLOW_HEADERS,
    allow_methods: tuple[str, ...] = ALLOW_METHODS,
    max_age: int = MAX_AGE,
):
    """Allows every origin, echoing it back so credentials are accepted."""

    @web.middleware
    async def middleware(request: web.Request, handler):
        origin = request.headers.get(hdrs.ORIGIN)
        if origin is None:
            return await handler(request)
        if _is_preflight(request):
            response = web.Response(status=204)
            _add_origin_headers(response, origin)
            response.headers[hdrs.ACCESS_CONTROL_ALLOW_METHODS] = ",".join(allow_methods)
            response.headers[hdrs.ACCESS_CONTROL_ALLOW_HEADERS] = ",".join(allow_headers)
            response.headers[hdrs.ACCESS_CONTROL_MAX_AGE] = str(max_age)
            return response
        try:
            response = await handler(request)
        except web.HTTPException as e:
            _add_origin_headers(e, origin)
            raise
        _add_origin_headers(response, origin)
        return response

    return middleware
