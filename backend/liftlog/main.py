# liftlog/main.py
import logging
import sys
import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from liftlog.db import Database
from liftlog.errors import (
    ForbiddenError,
    IndexOutOfRangeError,
    LiftLogError,
    NotFoundError,
    ValidationError,
)
from liftlog.routers.exercises import router as exercises_router
from liftlog.routers.workouts import router as workouts_router
from liftlog.settings import Settings, get_settings

log = logging.getLogger("uvicorn")

# Domain error -> HTTP status; the services never pick status codes themselves
ERROR_STATUS: dict[type[LiftLogError], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    IndexOutOfRangeError: status.HTTP_400_BAD_REQUEST,
    ForbiddenError: status.HTTP_403_FORBIDDEN,
    NotFoundError: status.HTTP_404_NOT_FOUND,
}

def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)-8s %(name)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
    )

def _fail(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "message": message})

def _describe(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        field = ".".join(str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path"))
        parts.append(f"{field}: {err.get('msg')}" if field else str(err.get("msg")))
    return "; ".join(parts) or "invalid request"

@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    database = Database(settings.DATABASE_URL).open()
    if settings.CREATE_TABLES:
        database.create_all()
    app.state.database = database
    log.info("LiftLog API starting [%s]", settings.ENV)
    try:
        yield
    finally:
        database.close()
        log.info("LiftLog API shut down")

def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title="LiftLog API",
        version=settings.API_VERSION,
        lifespan=lifespan,
        openapi_tags=[
            {"name": "workouts", "description": "Workout sessions, sets and analytics"},
            {"name": "exercises", "description": "Exercise catalog"},
        ],
    )
    app.state.settings = settings

    # CORS (relax for local dev; tighten origins in prod via env)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def add_request_id_and_log(request: Request, call_next):
        req_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000
        response.headers["X-Request-ID"] = req_id
        log.info("rid=%s %s %s -> %s in %.1fms",
                 req_id, request.method, request.url.path, response.status_code, duration_ms)
        return response

    @app.exception_handler(LiftLogError)
    async def handle_domain_error(request: Request, exc: LiftLogError):
        code = next(
            (code for cls, code in ERROR_STATUS.items() if isinstance(exc, cls)),
            status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
        log.warning("%s %s -> %s: %s", request.method, request.url.path, code, exc.message)
        return _fail(code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        return _fail(status.HTTP_400_BAD_REQUEST, _describe(exc))

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException):
        return _fail(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception):
        log.exception("unhandled error on %s %s", request.method, request.url.path)
        return _fail(status.HTTP_500_INTERNAL_SERVER_ERROR, "internal server error")

    @app.get("/")
    def root():
        return {"success": True, "name": "LiftLog API", "endpoints": {"workouts": "/workouts", "exercises": "/exercises"}}

    @app.get("/ping")
    def ping():
        return {"pong": True}

    @app.get("/healthz")
    def healthz(request: Request):
        # Quick DB sanity check
        try:
            request.app.state.database.ping()
            return {"status": "ok"}
        except Exception as e:
            return {"status": "degraded", "error": str(e)}

    @app.get("/version")
    def version():
        return {"version": settings.API_VERSION}

    # Routers
    app.include_router(workouts_router)
    app.include_router(exercises_router)
    return app

app = create_app()
