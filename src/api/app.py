"""HTTP/JSON API for registrations and statistics."""
import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import APIRouter, Depends, FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from src.models.registration import REGISTRATION_TYPES
from src.services import storage_service
from src.services.registration_service import (
    TYPE_FILTER_ALL,
    check_email_availability,
    get_statistics,
    list_registrations,
    register,
)
from src.services.storage_service import RegistrationStore
from src.utils.config import configure_logging
from src.utils.exceptions import DuplicateEmailError, ValidationError

logger = logging.getLogger(__name__)

SORT_KEY_PREFIXES = {"created_at": "date", "name": "name"}

FIELD_LABELS = {
    "name": "Name",
    "email": "Email",
    "registration_type": "Registration type",
    "company": "Company",
    "phone": "Phone",
}


class RegistrationForm(BaseModel):
    """POST body. Fields are optional here so missing ones get the domain error messages."""

    name: Optional[str] = None
    email: Optional[str] = None
    registration_type: Optional[str] = None
    company: Optional[str] = None
    phone: Optional[str] = None


def get_store() -> RegistrationStore:
    """Dependency: the process-wide registration store."""
    return storage_service.get_store()


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    get_store()
    yield


router = APIRouter(prefix="/api")


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _request_error_message(exc: RequestValidationError) -> str:
    """First request error as a user-facing message."""
    for error in exc.errors():
        loc = error.get("loc", ())
        if error.get("type") == "json_invalid":
            return "Request body must be valid JSON"
        if len(loc) >= 2 and loc[0] == "body" and loc[1] in FIELD_LABELS:
            return f"{FIELD_LABELS[loc[1]]} must be text"
    return "Request body must be a JSON object"


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return _error(400, _request_error_message(exc))


def _list_params(type: Optional[str], sort_by: str, order: str):
    """Map lenient query parameters onto a type filter and sort key."""
    type_filter = type if type in REGISTRATION_TYPES else TYPE_FILTER_ALL
    prefix = SORT_KEY_PREFIXES.get(sort_by, SORT_KEY_PREFIXES["created_at"])
    direction = "asc" if order == "ASC" else "desc"
    return type_filter, f"{prefix}-{direction}"


@router.get("/healthz")
def healthz():
    return {"status": "ok"}


@router.post("/registrations")
def create_registration(form: RegistrationForm, store: RegistrationStore = Depends(get_store)):
    try:
        registration_id = register(form.model_dump(), store=store)
    except ValidationError as e:
        return _error(400, str(e))
    except DuplicateEmailError:
        return _error(409, "Email is already registered")
    except Exception:
        logger.exception("Registration error")
        return _error(500, "Failed to create registration")

    return JSONResponse(
        status_code=201,
        content={"success": True, "message": "Registration successful", "id": registration_id},
    )


@router.get("/registrations")
def list_or_check_registrations(
    type: Optional[str] = Query(None, description='Filter: "student" or "professional"'),
    sortBy: str = Query("created_at"),
    order: str = Query("DESC"),
    checkEmail: Optional[str] = Query(None),
    store: RegistrationStore = Depends(get_store),
):
    try:
        if checkEmail:
            return {"available": check_email_availability(checkEmail, store=store)}

        type_filter, sort_key = _list_params(type, sortBy, order)
        registrations = list_registrations(type_filter, sort_key, store=store)
    except Exception:
        logger.exception("Fetch registrations error")
        return _error(500, "Failed to fetch registrations")

    return {"success": True, "data": [r.to_dict() for r in registrations]}


@router.get("/statistics")
def statistics(store: RegistrationStore = Depends(get_store)):
    try:
        stats = get_statistics(store=store)
    except Exception:
        logger.exception("Statistics error")
        return _error(500, "Failed to fetch statistics")

    return {"success": True, "data": stats.to_dict()}


app = FastAPI(title="Conference Registration API", lifespan=lifespan)
app.add_exception_handler(RequestValidationError, request_validation_handler)
app.include_router(router)


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
