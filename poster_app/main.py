# poster_app/main.py
from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request, status
from fastapi.exception_handlers import http_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from poster_app.core.config import get_settings
from poster_app.core.errors import PosterError, ValidationError

# Routers
from poster_app.routers.images import router as images_router

settings = get_settings()

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("uvicorn")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup:
      - Report whether Cloudinary credentials are configured. Missing
        credentials are not fatal; remote calls will fail instead.
      - Report whether the poster template (BASE_IMAGE_PATH) is usable,
        so a missing local file is not mistaken for a Cloudinary failure.
    """
    if settings.has_cloudinary_credentials:
        logger.info(f"✅ Startup: Cloudinary cloud '{settings.CLOUDINARY_CLOUD_NAME}' configured.")
    else:
        logger.warning("⚠️ Startup: Cloudinary credentials missing, image calls will fail.")

    problem = settings.base_image_problem()
    if problem:
        logger.warning(f"⚠️ Startup: {problem}, poster creation will fail.")
    else:
        logger.info(f"✅ Startup: poster template {settings.base_image_source}")
    yield


app = FastAPI(
    title=settings.PROJECT_NAME or "Promo Poster API",
    version="0.1.0",
    lifespan=lifespan,
)


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Error responses ---


@app.exception_handler(PosterError)
async def poster_error_handler(request: Request, exc: PosterError):
    logger.error(f"❌ {request.method} {request.url.path}: {exc.code} {exc}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": "Error", "error": exc.to_dict()},
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = [
        {"field": str(err["loc"][-1]), "message": err["msg"]}
        for err in exc.errors()
    ]
    return await poster_error_handler(request, ValidationError(errors))


@app.exception_handler(StarletteHTTPException)
async def method_not_allowed_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": "Method not allowed"},
            headers=exc.headers,
        )
    return await http_exception_handler(request, exc)


app.include_router(images_router, prefix=settings.API_PREFIX)


@app.get("/")
def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "poster-backend"}
