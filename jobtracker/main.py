# jobtracker/main.py
import logging
from contextlib import asynccontextmanager
from typing import Any

from fastapi import Body, Depends, FastAPI, HTTPException, Query, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from sqlalchemy import text
from sqlalchemy.orm import Session

from .config import settings
from .crud import SqlApplicationStore
from .database import Base, engine, get_db
from .errors import InvalidStatusError, NotFoundError, StorageError, ValidationError
from .schemas import ApplicationOut, ErrorOut, HealthOut
from .service import ApplicationService

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting %s...", settings.APP_NAME)
    # Create tables if they don't exist
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables verified")
    yield
    logger.info("Shutting down...")


app = FastAPI(title=settings.APP_NAME, version="0.1.0", debug=settings.DEBUG, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["GET", "POST", "PATCH", "DELETE"],
    allow_headers=["*"],
)


def get_service(db: Session = Depends(get_db)) -> ApplicationService:
    return ApplicationService(SqlApplicationStore(db))


# Error mapping: the service raises typed errors, HTTP codes are decided here only
def _error(status_code: int, detail: str, errors: list[dict] | None = None) -> JSONResponse:
    body = ErrorOut(detail=detail, errors=errors or [])
    return JSONResponse(status_code=status_code, content=body.model_dump())


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    errors = [{"field": e.field, "message": e.message} for e in exc.errors]
    return _error(422, "Invalid application", errors)


@app.exception_handler(InvalidStatusError)
async def invalid_status_handler(request: Request, exc: InvalidStatusError):
    return _error(422, str(exc), [{"field": "status", "message": str(exc)}])


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    # malformed requests (non-object body, non-integer id) get the same error shape
    errors = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ())]
        field = ".".join(loc[1:]) or (loc[0] if loc else "__root__")
        errors.append({"field": field, "message": err.get("msg", "invalid value")})
    return _error(422, "Invalid request", errors)


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return _error(status.HTTP_404_NOT_FOUND, "Application not found")


@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError):
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Storage error")


@app.get("/health", response_model=HealthOut, tags=["monitoring"])
def health_check(db: Session = Depends(get_db)):
    """
    Checks if the application is healthy, including the database connection.
    """
    try:
        db.execute(text("SELECT 1"))
        return {"status": "ok", "database": "ok"}
    except Exception:
        logger.exception("Health check failed")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Database connection error"
        )


@app.post(
    "/api/applications",
    response_model=ApplicationOut,
    status_code=status.HTTP_201_CREATED,
    responses={422: {"model": ErrorOut}},
    tags=["applications"],
)
def create_application(
    payload: dict[str, Any] = Body(...),
    service: ApplicationService = Depends(get_service),
):
    return service.create(payload)


@app.get("/api/applications", response_model=list[ApplicationOut], tags=["applications"])
def list_applications(
    status_filter: str | None = Query(None, alias="status", description="Exact status to keep"),
    q: str | None = Query(None, description="Case-insensitive text in company, position, notes or tags"),
    service: ApplicationService = Depends(get_service),
):
    """Applications matching both filters, most recently created first."""
    return service.list(status_filter, q)


@app.get(
    "/api/applications/{application_id}",
    response_model=ApplicationOut,
    responses={404: {"model": ErrorOut}},
    tags=["applications"],
)
def get_application(application_id: int, service: ApplicationService = Depends(get_service)):
    return service.get(application_id)


@app.patch(
    "/api/applications/{application_id}",
    response_model=ApplicationOut,
    responses={404: {"model": ErrorOut}, 422: {"model": ErrorOut}},
    tags=["applications"],
)
def update_application(
    application_id: int,
    patch: dict[str, Any] = Body(...),
    service: ApplicationService = Depends(get_service),
):
    return service.update(application_id, patch)


@app.delete(
    "/api/applications/{application_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorOut}},
    tags=["applications"],
)
def delete_application(application_id: int, service: ApplicationService = Depends(get_service)):
    service.remove(application_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
