import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from pos_backend.config.settings import settings
from pos_backend.core.errors import (
    AuthError, ConstraintViolation, InvalidRequest, NotFound, PolicyDenied,
    TenancyError, Unauthenticated
)
from pos_backend.core.limiter import limiter
from pos_backend.database.session import Database, init_db
from pos_backend.modules.auth import routes as auth_routes
from pos_backend.modules.provisioning import routes as provisioning_routes
from pos_backend.modules.organizations import routes as organizations_routes
from pos_backend.modules.plans import routes as plans_routes
from pos_backend.modules.plans.service import seed_plan_catalog
from pos_backend.modules.subscriptions import routes as subscriptions_routes
from pos_backend.modules.branches import routes as branches_routes
from pos_backend.modules.menu_items import routes as menu_items_routes

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

# Denied, conflicting and missing rows share generic messages so responses
# never reveal another tenant's data
ERROR_STATUS_CODES = {
    Unauthenticated: 401,
    AuthError: 401,
    PolicyDenied: 403,
    NotFound: 404,
    ConstraintViolation: 409,
    InvalidRequest: 400,
}


@app.exception_handler(TenancyError)
async def tenancy_exception_handler(request: Request, exc: TenancyError):
    status_code = ERROR_STATUS_CODES.get(type(exc), 400)
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthenticated) else None
    return JSONResponse(status_code=status_code, content={"detail": exc.message}, headers=headers)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception: %s", exc)
    if settings.is_production:
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})
    return JSONResponse(status_code=500, content={"detail": str(exc)})


class SecurityHeadersMiddleware:
    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        async def send_with_headers(message):
            if message["type"] == "http.response.start":
                message.setdefault("headers", [])
                message["headers"].extend([
                    (b"X-Content-Type-Options", b"nosniff"),
                    (b"X-Frame-Options", b"DENY"),
                    (b"X-XSS-Protection", b"1; mode=block"),
                ])
            await send(message)

        await self.app(scope, receive, send_with_headers)


app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include module routes
app.include_router(auth_routes.router, prefix="/api/v1")
app.include_router(provisioning_routes.router, prefix="/api/v1")
app.include_router(organizations_routes.router, prefix="/api/v1")
app.include_router(plans_routes.router, prefix="/api/v1")
app.include_router(subscriptions_routes.router, prefix="/api/v1")
app.include_router(branches_routes.router, prefix="/api/v1")
app.include_router(menu_items_routes.router, prefix="/api/v1")


@app.on_event("startup")
async def startup_event():
    logger.info("Application startup")
    init_db()
    session = Database.get_session_factory()()
    try:
        seed_plan_catalog(session)
    finally:
        session.close()


@app.on_event("shutdown")
async def shutdown_event():
    logger.info("Application shutdown")
    Database.reset()


@app.get("/")
async def root():
    return {"message": "Welcome to pos-backend", "status": "healthy"}


@app.get("/health")
@limiter.exempt
async def health():
    return {"status": "healthy"}


@app.get("/ready")
@limiter.exempt
async def ready():
    """Readiness probe: extend here with DB checks if needed."""
    return {"status": "ready"}
