"""FastAPI application exposing the category and contact endpoints."""

import logging
from contextlib import asynccontextmanager
from typing import Any, Optional
from uuid import UUID

from fastapi import Depends, FastAPI, File, Form, Query, Request, Response, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse
from pydantic import ValidationError

from config import StorageConfig, get_settings
from contacts_api.db import init_db
from contacts_api.dependencies import (
    get_category_service,
    get_contact_service,
    get_storage_backend,
    get_storage_config,
    init_storage_backend,
)
from contacts_api.exceptions import (
    CategoryExistsError,
    CategoryInUseError,
    ContactsAPIError,
    EmailAlreadyInUseError,
    EntityNotFoundError,
    InvalidFileTypeError,
    PhotoTooLargeError,
)
from contacts_api.schemas import (
    CategoryListResponse,
    CategoryRequest,
    CategoryResponse,
    ContactForm,
    ContactListResponse,
    ContactResponse,
    ErrorResponse,
)
from contacts_api.services import CategoryService, ContactService
from contacts_api.storage import StorageBackend, StorageError, StorageIOError, StorageNotFoundError
from contacts_api.uploads import to_photo_upload

# Get settings and configure logging before anything else
settings = get_settings()
settings.configure_logging()

# Create logger for this module
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown."""
    # Startup
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Debug mode: {settings.debug}")
    logger.info(f"Storage type: {settings.storage_type}")

    # Creates the storage directories; failing here aborts startup
    init_storage_backend(settings.storage_config())
    init_db()

    yield

    # Shutdown
    logger.info("Shutting down application")


# Create FastAPI app with settings
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    debug=settings.debug,
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error(status_code: int, message: str) -> JSONResponse:
    body = ErrorResponse(status=status_code, message=message)
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


_STATUS_BY_ERROR: dict[type, int] = {
    EntityNotFoundError: 404,
    EmailAlreadyInUseError: 400,
    CategoryExistsError: 400,
    InvalidFileTypeError: 400,
    CategoryInUseError: 409,
    PhotoTooLargeError: 413,
}


@app.exception_handler(ContactsAPIError)
async def domain_error_handler(request: Request, exc: ContactsAPIError) -> JSONResponse:
    status_code = _STATUS_BY_ERROR.get(type(exc), 400)
    logger.info(f"{request.method} {request.url.path} rejected ({status_code}): {exc}")
    return _error(status_code, str(exc))


@app.exception_handler(StorageNotFoundError)
async def storage_not_found_handler(request: Request, exc: StorageNotFoundError) -> JSONResponse:
    return _error(404, "The file is not found.")


@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
    logger.error(f"{request.method} {request.url.path} failed in storage: {exc}")
    message = str(exc) if isinstance(exc, StorageIOError) else "Storage error"
    return _error(500, message)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    return _error(400, message.removeprefix("Value error, "))


@app.get("/health")
def health_check() -> dict[str, str]:
    """Simple health-check endpoint."""
    return {
        "status": "ok",
        "environment": settings.environment,
        "version": settings.app_version,
    }


@app.get("/config")
def get_config() -> dict[str, Any]:
    """Get current configuration (non-sensitive values only)."""
    return {
        "app_name": settings.app_name,
        "app_version": settings.app_version,
        "environment": settings.environment,
        "debug": settings.debug,
        "storage_type": settings.storage_type,
        "log_level": settings.log_level,
        "log_json": settings.log_json,
        "max_upload_size": settings.max_upload_size,
    }


# Categories

@app.get("/categories", response_model=CategoryListResponse, tags=["categories"])
def list_categories(
    page: int = Query(0, ge=0),
    size: int = Query(10, ge=1, le=100),
    order_by: str = Query("asc", alias="orderBy"),
    search: Optional[str] = None,
    service: CategoryService = Depends(get_category_service),
) -> CategoryListResponse:
    """List categories sorted by name, optionally filtered by a search term."""
    result = service.list(
        page=page,
        size=size,
        descending=order_by.lower() == "desc",
        search=search,
    )
    return CategoryListResponse(
        categories=[CategoryResponse.model_validate(c) for c in result.items],
        total_items=result.total_items,
        total_pages=result.total_pages,
    )


@app.get("/categories/{category_id}", response_model=CategoryResponse, tags=["categories"])
def show_category(
    category_id: UUID,
    service: CategoryService = Depends(get_category_service),
) -> CategoryResponse:
    return CategoryResponse.model_validate(service.find_by_id(category_id))


@app.post("/categories", response_model=CategoryResponse, status_code=201, tags=["categories"])
def create_category(
    request: CategoryRequest,
    response: Response,
    service: CategoryService = Depends(get_category_service),
) -> CategoryResponse:
    category = service.create(request.name)
    response.headers["Location"] = f"/categories/{category.id}"
    return CategoryResponse.model_validate(category)


@app.put("/categories/{category_id}", status_code=204, tags=["categories"])
def update_category(
    category_id: UUID,
    request: CategoryRequest,
    service: CategoryService = Depends(get_category_service),
) -> Response:
    service.update(category_id, request.name)
    return Response(status_code=204)


@app.delete("/categories/{category_id}", status_code=204, tags=["categories"])
def delete_category(
    category_id: UUID,
    service: CategoryService = Depends(get_category_service),
) -> Response:
    service.delete(category_id)
    return Response(status_code=204)


# Contacts

def contact_form(
    name: str = Form(...),
    email: str = Form(...),
    phone: Optional[str] = Form(None),
    category_id: str = Form(...),
) -> ContactForm:
    """Collect the multipart form fields of a contact request."""
    try:
        return ContactForm(name=name, email=email, phone=phone, category_id=category_id)
    except ValidationError as e:
        raise RequestValidationError(e.errors()) from e


@app.get("/contacts/image/{key}", tags=["contacts"])
def get_contact_image(
    key: str,
    storage: StorageBackend = Depends(get_storage_backend),
) -> Response:
    """Serve a contact photo.

    Local photos are streamed by this service; object store photos are
    answered with a redirect to their CDN URL.
    """
    try:
        location = storage.retrieve(key)
    except ValueError:
        raise StorageNotFoundError(key) from None

    if location.is_remote:
        return RedirectResponse(location.url, status_code=307)
    return Response(content=location.content, media_type=location.media_type)


@app.get("/contacts", response_model=ContactListResponse, tags=["contacts"])
def list_contacts(
    page: int = Query(0, ge=0),
    size: int = Query(10, ge=1, le=100),
    order_by: str = Query("asc", alias="orderBy"),
    search: Optional[str] = None,
    service: ContactService = Depends(get_contact_service),
    storage_config: StorageConfig = Depends(get_storage_config),
) -> ContactListResponse:
    """List contacts sorted by name, optionally filtered by a search term."""
    result = service.list(
        page=page,
        size=size,
        descending=order_by.lower() == "desc",
        search=search,
    )
    return ContactListResponse(
        contacts=[ContactResponse.from_contact(c, storage_config) for c in result.items],
        total_items=result.total_items,
        total_pages=result.total_pages,
    )


@app.get("/contacts/{contact_id}", response_model=ContactResponse, tags=["contacts"])
def show_contact(
    contact_id: UUID,
    service: ContactService = Depends(get_contact_service),
    storage_config: StorageConfig = Depends(get_storage_config),
) -> ContactResponse:
    return ContactResponse.from_contact(service.find_by_id(contact_id), storage_config)


@app.post("/contacts", response_model=ContactResponse, status_code=201, tags=["contacts"])
def create_contact(
    response: Response,
    form: ContactForm = Depends(contact_form),
    photo: Optional[UploadFile] = File(None),
    service: ContactService = Depends(get_contact_service),
    storage_config: StorageConfig = Depends(get_storage_config),
) -> ContactResponse:
    """Create a contact with an optional photo (.jpg, .jpeg or .png)."""
    upload = to_photo_upload(photo, settings.allowed_photo_extensions, settings.max_upload_size)
    contact = service.create(form, upload)
    response.headers["Location"] = f"/contacts/{contact.id}"
    return ContactResponse.from_contact(contact, storage_config)


@app.put("/contacts/{contact_id}", status_code=204, tags=["contacts"])
def update_contact(
    contact_id: UUID,
    form: ContactForm = Depends(contact_form),
    photo: Optional[UploadFile] = File(None),
    service: ContactService = Depends(get_contact_service),
) -> Response:
    """Update a contact. Sending a photo replaces the current one."""
    upload = to_photo_upload(photo, settings.allowed_photo_extensions, settings.max_upload_size)
    service.update(contact_id, form, upload)
    return Response(status_code=204)


@app.delete("/contacts/{contact_id}", status_code=204, tags=["contacts"])
def delete_contact(
    contact_id: UUID,
    service: ContactService = Depends(get_contact_service),
) -> Response:
    service.delete(contact_id)
    return Response(status_code=204)
