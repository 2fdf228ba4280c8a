"""FastAPI application entry point."""
import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from roleplay.config import settings
from roleplay.database import Base, engine
from roleplay.exceptions import AppError

# Import routers
from roleplay.routers import users, sessions, passwords, groups, group_requests

# Import all models so Base.metadata knows about them
from roleplay.models.user import User  # noqa: F401
from roleplay.models.api_token import ApiToken  # noqa: F401
from roleplay.models.password_reset_token import PasswordResetToken  # noqa: F401
from roleplay.models.group import Group, GroupPlayer  # noqa: F401
from roleplay.models.group_request import GroupRequest  # noqa: F401

logging.basicConfig(level=settings.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Roleplay",
    description="Find a tabletop roleplaying group, or gather players for yours",
    version="0.1.0",
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS.split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(users.router, prefix="/users", tags=["Users"])
app.include_router(sessions.router, prefix="/sessions", tags=["Sessions"])
app.include_router(passwords.router, tags=["Passwords"])
app.include_router(groups.router, prefix="/groups", tags=["Groups"])
app.include_router(group_requests.router, prefix="/groups", tags=["GroupRequests"])


@app.exception_handler(AppError)
async def handle_app_error(request: Request, error: AppError):
    """Render domain errors as {message, code, status}."""
    logger.warning("%s %s -> %d %s", request.method, request.url.path, error.status_code, error.message)
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, error: RequestValidationError):
    errors = error.errors()
    first = errors[0] if errors else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = f"{location}: {first.get('msg')}" if location else str(first.get("msg", "invalid payload"))
    return JSONResponse(
        status_code=422,
        content={
            "message": message,
            "code": "BAD_REQUEST",
            "status": 422,
            "errors": [{"field": ".".join(str(p) for p in e.get("loc", ())), "message": e.get("msg")} for e in errors],
        },
    )


@app.exception_handler(StarletteHTTPException)
async def handle_http_error(request: Request, error: StarletteHTTPException):
    return JSONResponse(
        status_code=error.status_code,
        content={"message": str(error.detail), "code": "BAD_REQUEST", "status": error.status_code},
        headers=getattr(error, "headers", None),
    )


@app.on_event("startup")
def on_startup():
    """Create database tables on startup (for SQLite dev mode)."""
    if settings.DATABASE_URL.startswith("sqlite"):
        Base.metadata.create_all(bind=engine)


@app.get("/health")
def health_check():
    return {"status": "ok"}
