# ==========================================================
# main.py — Glossy Transition Campaign Backend
# ==========================================================

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.middleware.sessions import SessionMiddleware

from core.config import get_settings
from core.database import create_tables
from core.exceptions import AppError, InternalError, ValidationError

from users import routes as auth_routes
from social import routes as social_routes
from content import routes as content_routes
from rewards import routes as reward_routes
from campaign import routes as campaign_routes

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

# ==========================================================
# ✅ FASTAPI INITIALIZATION
# ==========================================================
app = FastAPI(title=settings.app_name, version="1.0")

app.add_middleware(
    SessionMiddleware,
    secret_key=settings.session_secret,
    session_cookie=settings.session_cookie,
    max_age=settings.session_max_age,
    https_only=settings.is_production,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ==========================================================
# ✅ DATABASE TABLE CREATION
# ==========================================================
@app.on_event("startup")
async def startup_event():
    await create_tables()
    logger.info("✅ Campaign tables are ready (env=%s)", settings.app_env.value)


# ==========================================================
# ✅ ERROR RESPONSES
# ==========================================================
def _failure(status_code: int, message: str, code: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message, "code": code},
    )


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return _failure(exc.status_code, exc.message, exc.code)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = "Invalid request"
    if errors:
        first = errors[0]
        # Custom validators raise ValueError; surface their text without pydantic's prefix.
        ctx_error = (first.get("ctx") or {}).get("error")
        message = str(ctx_error) if ctx_error else first.get("msg", message)
    error = ValidationError(message)
    return _failure(error.status_code, error.message, error.code)


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception("Database error on %s %s", request.method, request.url.path)
    error = InternalError()
    return _failure(error.status_code, error.message, error.code)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    error = InternalError()
    return _failure(error.status_code, error.message, error.code)


# ==========================================================
# ✅ GENERAL APP INFO
# ==========================================================
@app.get("/")
async def root():
    return {"message": "Glossy Transition Campaign API is running!"}


@app.get("/health")
async def health_check():
    return {"status": "healthy", "message": "Campaign API is operational"}


# ==========================================================
# ✅ INCLUDE ROUTERS
# ==========================================================
app.include_router(auth_routes.router)
app.include_router(social_routes.router)
app.include_router(content_routes.router)
app.include_router(reward_routes.router)
app.include_router(campaign_routes.router)
