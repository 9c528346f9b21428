from fastapi import FastAPI, Depends, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
import structlog

from iglesia360.config import settings
from iglesia360.database import Store, close_store, get_store, init_store
from iglesia360.exceptions import WorkflowError
from iglesia360.logging_config import setup_logging
from iglesia360.middleware.correlation import CorrelationIdMiddleware

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    logger.info("starting_iglesia360", env=settings.ENVIRONMENT, version=settings.APP_VERSION)
    init_store()
    yield
    close_store()


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    docs_url=None if settings.is_production else "/docs",
    redoc_url=None if settings.is_production else "/redoc",
    lifespan=lifespan,
)


# ---------------------------------------------------------------------------
# Global exception handlers. Every error leaves as the response envelope
# {"success": false, "error": "..."}
# ---------------------------------------------------------------------------

def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


@app.exception_handler(WorkflowError)
async def workflow_exception_handler(request: Request, exc: WorkflowError) -> JSONResponse:
    logger.info("request_rejected", error=type(exc).__name__, message=exc.message)
    return _error(exc.status_code, exc.message)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    detail = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return _error(exc.status_code, detail)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{location}: {first.get('msg')}" if location else first.get("msg")
    else:
        message = "Invalid request"
    logger.info("request_invalid", errors=len(errors))
    return _error(400, message)


app.add_middleware(CorrelationIdMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "X-Requested-With", "X-Request-ID", "X-User-Id"],
)


@app.get("/health", tags=["System"])
async def health(store: Store = Depends(get_store)):
    return {
        "status": "healthy",
        "version": settings.APP_VERSION,
        "checks": {
            "solicitudes": store.solicitudes.count(),
            "ministries": store.ministries.count(),
            "users": store.users.count(),
        },
    }


@app.get("/api/ping", tags=["System"])
async def ping():
    return {"message": settings.PING_MESSAGE}


# --- Routers ---
from iglesia360.routes.auth import router as auth_router, roles_router  # noqa: E402
from iglesia360.routes.users import router as users_router  # noqa: E402
from iglesia360.routes.ministries import router as ministries_router  # noqa: E402
from iglesia360.routes.solicitudes import router as solicitudes_router  # noqa: E402
from iglesia360.routes.approvals import router as approvals_router  # noqa: E402
from iglesia360.routes.audit_logs import router as audit_logs_router  # noqa: E402

app.include_router(auth_router, prefix="/api/auth", tags=["Auth"])
app.include_router(roles_router, prefix="/api/roles", tags=["Roles"])
app.include_router(users_router, prefix="/api/users", tags=["Users"])
app.include_router(ministries_router, prefix="/api/ministries", tags=["Ministries"])
app.include_router(solicitudes_router, prefix="/api/solicitudes", tags=["Solicitudes"])
app.include_router(approvals_router, prefix="/api/solicitudes", tags=["Approvals"])
app.include_router(audit_logs_router, prefix="/api/solicitudes", tags=["Audit Logs"])


def run():
    """Console entry point: serve the app with uvicorn on settings.PORT."""
    import uvicorn

    uvicorn.run("iglesia360.main:app", host="0.0.0.0", port=settings.PORT, reload=settings.DEBUG)
