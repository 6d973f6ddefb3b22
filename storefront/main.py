import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from storefront.config.settings import settings
from storefront.core.dependencies import SessionResolver
from storefront.core.middleware import AuthorizationGateMiddleware, SecurityHeadersMiddleware
from storefront.core.rate_limit import limiter
from storefront.modules.auth import routes as auth_routes
from storefront.modules.orders import routes as orders_routes
from storefront.modules.payments import routes as payments_routes
from storefront.modules.uploads import routes as uploads_routes
from storefront.modules.diagnostics import routes as diagnostics_routes
from storefront.modules.items import routes as items_routes
from storefront.modules.categories import routes as categories_routes
from storefront.modules.cart import routes as cart_routes

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.app_name,
    debug=settings.debug,
    redirect_slashes=False,
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


def _format_validation_errors(exc: RequestValidationError):
    return [
        {
            "field": ".".join(str(part) for part in error["loc"] if part != "body"),
            "message": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors()
    ]


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={"detail": "Validation error", "errors": _format_validation_errors(exc)},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception: %s", exc)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


session_resolver = SessionResolver()
app.add_middleware(AuthorizationGateMiddleware, session_resolver=session_resolver)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include module routes
app.include_router(auth_routes.router, prefix="/api")
app.include_router(orders_routes.router, prefix="/api")
app.include_router(payments_routes.router, prefix="/api")
app.include_router(uploads_routes.router, prefix="/api")
app.include_router(diagnostics_routes.router, prefix="/api")
app.include_router(items_routes.router, prefix="/api")
app.include_router(categories_routes.router, prefix="/api")
app.include_router(cart_routes.router, prefix="/api")


@app.on_event("startup")
async def startup_event():
    logger.info("Application startup")
    if not settings.s3_configured:
        logger.warning("S3 is not configured; upload presigning will fail")


@app.on_event("shutdown")
async def shutdown_event():
    logger.info("Application shutdown")


@app.get("/")
async def root():
    return {"message": "Welcome to storefront-backend", "status": "healthy"}


@app.get("/health")
@limiter.exempt
async def health():
    return {"status": "healthy"}


@app.get("/ready")
@limiter.exempt
async def ready():
    return {"status": "ready"}
