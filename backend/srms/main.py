from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging
from srms.auth import router as auth_router
from srms.otp import router as otp_router
from srms.schools import router as schools_router
from srms.users import router as users_router
from srms.students import router as students_router
from srms.subjects import router as subjects_router
from srms.subject_assignments import router as subject_assignments_router
from srms.marks import router as marks_router
from srms.grading import router as grading_router
from srms.dashboard import router as dashboard_router
from srms.academic_years import router as academic_years_router
from srms.application_settings import router as application_settings_router
from srms.excel import router as excel_router
from srms.health import router as health_router
from srms.config import router as config_router
from srms.config.settings import settings
from mangum import Mangum

# Configure logging for Lambda
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler()]
)

# Force the root logger to INFO level explicitly
logging.getLogger().setLevel(logging.INFO)

# Prevent duplicate logs from uvicorn when running locally
if settings.APP_ENV != 'development':
    logging.getLogger("uvicorn.access").propagate = False
    logging.getLogger("uvicorn.error").propagate = False

logger = logging.getLogger(__name__)

def create_app() -> FastAPI:
    """Create and configure a FastAPI application."""
    logger.info(f"Creating FastAPI app - Environment: {settings.APP_ENV}")

    app = FastAPI(
        title=settings.API_TITLE,
        description=settings.API_DESCRIPTION,
        version=settings.API_VERSION,
        docs_url=settings.API_DOCS_URL,
        redoc_url=settings.API_REDOC_URL,
        openapi_url=settings.API_OPENAPI_URL
    )

    @app.on_event("startup")
    async def startup_event():
        """Run initialization tasks on application startup"""
        logger.info("FastAPI application starting up...")

    # Build allowed origins list
    allowed_origins = [
        "http://localhost:3000",
        "http://localhost:5173", # Vite dev server
        "http://localhost:5174",
    ]

    if settings.FRONTEND_URL:
        allowed_origins.append(settings.FRONTEND_URL)
        # Also add without trailing slash if it exists
        if settings.FRONTEND_URL.endswith("/"):
            allowed_origins.append(settings.FRONTEND_URL.rstrip("/"))

    # For development/testing, allow all origins if specified
    if settings.ALLOW_ALL_ORIGINS:
        allowed_origins = ["*"]

    logger.info(f"CORS allowed origins: {allowed_origins}")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(auth_router.router)
    app.include_router(otp_router.router)
    app.include_router(schools_router.router)
    app.include_router(users_router.router)
    app.include_router(students_router.router)
    app.include_router(subjects_router.router)
    app.include_router(subject_assignments_router.router)
    app.include_router(marks_router.router)
    app.include_router(grading_router.router)
    app.include_router(dashboard_router.router)
    app.include_router(academic_years_router.router)
    app.include_router(application_settings_router.router)
    app.include_router(excel_router.router)
    app.include_router(health_router.router)
    app.include_router(config_router.router)

    logger.info("FastAPI app created successfully")
    return app

_fastapi_app = create_app()

# Conditionally wrap with Mangum for serverless deployment
if settings.APP_ENV != 'development':
    logger.info("Wrapping FastAPI app with Mangum for Lambda")
    app = Mangum(_fastapi_app)
else:
    app = _fastapi_app # Use the raw FastAPI app for local dev

# For local development
if __name__ == '__main__':
    import uvicorn

    port = settings.PORT
    print(f"Starting FastAPI server on port {port}...")
    print(f"Environment: {settings.APP_ENV}")
    print(f"API Documentation: http://localhost:{port}{settings.API_DOCS_URL}")

    uvicorn.run(_fastapi_app,
                host="0.0.0.0",
                port=port,
                log_level="info",
                access_log=False)
