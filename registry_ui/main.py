from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from registry_ui.api.router import router
from registry_ui.config import get_settings
from registry_ui.exceptions import ExternalServiceError, RegistryUIError
from registry_ui.utils.logging import get_logger, setup_logging

settings = get_settings()
setup_logging()
logger = get_logger(__name__)

app = FastAPI(title=settings.app_name, version=settings.version, debug=settings.api.debug)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.api.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ExternalServiceError)
async def external_service_error_handler(request: Request, exc: ExternalServiceError):
    logger.error(f"{request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=502, content={"detail": "Bad Gateway"})


@app.exception_handler(RegistryUIError)
async def registry_ui_error_handler(request: Request, exc: RegistryUIError):
    logger.error(f"{request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"detail": "Internal Server Error"})


@app.exception_handler(StarletteHTTPException)
async def method_not_allowed_handler(request: Request, exc: StarletteHTTPException):
    # The registry collection answers 404 to every method it does not serve
    if exc.status_code == 405 and request.url.path == "/api/registry":
        return JSONResponse(status_code=404, content={"detail": "Not Found"})
    return await http_exception_handler(request, exc)


app.include_router(router)

# Mount static files directory
static_dir = Path(__file__).resolve().parent / "static"
app.mount("/static", StaticFiles(directory=str(static_dir)), name="static")


@app.get("/health", tags=["meta"])
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
