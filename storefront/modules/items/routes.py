"""
Retired item endpoints.

The item model was replaced by products; every route here answers 410 Gone
with a pointer to the seller product endpoints, whatever the request carries.
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

router = APIRouter(prefix="/items", tags=["items (deprecated)"])

# path -> (methods, replacement endpoint)
DEPRECATED_ROUTES = {
    "": (["GET", "POST"], "/api/seller/products"),
    "/{item_id}": (["GET", "PATCH", "DELETE"], "/api/seller/products/{id}"),
}


def gone_response(replacement: str) -> JSONResponse:
    return JSONResponse(
        status_code=410,
        content={
            "detail": (
                "This endpoint is deprecated. Item model has been replaced with Product model. "
                f"Please use {replacement} instead."
            ),
            "replacement": replacement,
        },
    )


def _gone_endpoint(replacement: str):
    async def endpoint():
        return gone_response(replacement)
    return endpoint


for _path, (_methods, _replacement) in DEPRECATED_ROUTES.items():
    router.add_api_route(
        _path,
        _gone_endpoint(_replacement),
        methods=_methods,
        status_code=410,
        deprecated=True,
    )
