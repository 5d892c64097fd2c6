from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from dotenv import load_dotenv
import logging

# Load environment variables as early as possible
load_dotenv()

from .config import settings
from .database import create_db_and_tables
from .exceptions import ImageServerError, http_exception_handler, image_server_exception_handler
from .imaging import get_default_image
from .middleware import LoggingMiddleware, ErrorHandlingMiddleware, RequestSizeLimitMiddleware
from .routers import images_router
from .schemas import HealthResponse

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format=settings.LOG_FORMAT
)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info(f"Starting {settings.APP_NAME}...")
    app.state.db_init_ok = True
    app.state.db_init_error = None
    try:
        create_db_and_tables()
        logger.info("Database initialized successfully")
    except Exception as e:
        # Do not crash the app; report via health endpoint
        app.state.db_init_ok = False
        app.state.db_init_error = str(e)
        logger.exception("Database initialization failed")
    # Build the fallback image once, before the first miss needs it
    default_image = get_default_image()
    logger.info(f"Default image ready: {default_image.file_name} ({default_image.size} bytes)")
    yield
    # Shutdown
    logger.info(f"Shutting down {settings.APP_NAME}...")

# Initialize FastAPI
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    debug=settings.DEBUG,
    lifespan=lifespan,
    docs_url=("/docs" if settings.DOCS_ENABLED else None),
    redoc_url=("/redoc" if settings.DOCS_ENABLED else None),
    openapi_url=("/openapi.json" if settings.DOCS_ENABLED else None)
)

# Add custom exception handlers
app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(ImageServerError, image_server_exception_handler)

# Add middleware
app.add_middleware(ErrorHandlingMiddleware)
app.add_middleware(LoggingMiddleware)
app.add_middleware(RequestSizeLimitMiddleware)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins_list,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(images_router.router, prefix=settings.API_PREFIX)

@app.get("/")
def root():
    return {"message": f"{settings.APP_NAME} is running"}

# Health check endpoint
@app.get("/health", response_model=HealthResponse)
def health_check():
    db_ok = getattr(app.state, "db_init_ok", True)
    return HealthResponse(
        status="healthy" if db_ok else "degraded",
        app=settings.APP_NAME,
        version=settings.APP_VERSION,
        database="ok" if db_ok else "unavailable",
        error=getattr(app.state, "db_init_error", None),
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("imageserver.main:app", host=settings.HOST, port=settings.PORT)
