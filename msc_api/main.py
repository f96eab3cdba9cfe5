"""
main.py

FastAPI application entry point.

Loaded first when the server starts; wires configuration, logging,
error rendering and routers together.

Main responsibilities:
- create the FastAPI app (engine disposed on shutdown)
- configure logging from settings.LOG_LEVEL
- CORS middleware
- render every error as the JSON envelope
- register the auth / students / events / settings / officer routers
- health and database ping endpoints

Design principles:
- no business logic here, only assembly
- services raise typed errors (msc_api.core.errors); the handlers below
  are the only place that maps them to HTTP responses

Related files:
- msc_api.core.config        : settings
- msc_api.core.errors        : error kinds and status codes
- msc_api.core.responses     : envelope helpers
- msc_api.routers.*          : API routers

"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Depends, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.exceptions import HTTPException as StarletteHTTPException

from msc_api.core import responses
from msc_api.core.config import settings
from msc_api.core.deps import get_db
from msc_api.core.errors import AppError, ErrorKind, ValidationError
from msc_api.db.session import engine
from msc_api.routers import auth, students, events, settings as settings_router, officer

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting MSC membership backend")
    yield
    engine.dispose()
    logger.info("Database engine disposed")


app = FastAPI(title="MSC Membership Backend", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _field_errors(exc: RequestValidationError) -> dict[str, str]:
    errors: dict[str, str] = {}
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path")]
        field = ".".join(loc) or "body"
        msg = err.get("msg", "Invalid value")
        if err.get("type") == "missing":
            msg = f"{field} is required"
        elif msg.startswith("Value error, "):
            msg = msg[len("Value error, "):]
        errors.setdefault(field, msg)
    return errors


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    if isinstance(exc, ValidationError) and exc.errors:
        return responses.validation_error(exc.errors, exc.message)

    headers = {"WWW-Authenticate": "Bearer"} if exc.kind == ErrorKind.AUTHENTICATION else None
    return responses.error(exc.message, exc.status_code, headers=headers)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return responses.validation_error(_field_errors(exc))


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return responses.error(str(exc.detail), exc.status_code, headers=getattr(exc, "headers", None))


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception("Unhandled database error on %s %s", request.method, request.url.path)
    return responses.error("Database error", 500)


app.include_router(auth.router)
app.include_router(students.router)
app.include_router(events.router)
app.include_router(settings_router.router)
app.include_router(officer.router)


@app.get("/health")
def health():
    return {"status": "ok"}


"""
Database ping

- SELECT 1 separates "process alive" from "database reachable"

"""
@app.get("/db-ping")
def db_ping(db: Session = Depends(get_db)):
    value = db.execute(text("SELECT 1")).scalar_one()
    return {"db": "ok", "value": value}
