import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from cinelog.routers import health, movies, upload
from cinelog.core.config import get_settings
from cinelog.core.exceptions import BaseAppException, InvalidMovieDataException, NoImageProvidedException
from cinelog.db import Base, engine
from cinelog import models  # ensure models are imported

settings = get_settings()

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Cinelog API",
    description="Movie collection manager with poster uploads",
    version="1.0.0"
)

# CORS middleware configuration
origins_env = settings.CORS_ALLOW_ORIGINS or ""
origins = [o.strip() for o in origins_env.split(",") if o.strip()] or [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

app.include_router(upload.router)
app.include_router(movies.router)
app.include_router(health.router)


@app.exception_handler(BaseAppException)
async def app_exception_handler(request: Request, exc: BaseAppException):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    details = []
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "path", "query")]
        details.append({
            "field": ".".join(location),
            "message": error.get("msg", "Invalid value").removeprefix("Value error, "),
        })
    logger.info(f"Rejected {request.method} {request.url.path}: {details}")
    if request.url.path.rstrip("/") == "/upload":
        # A non-file "image" part is the same client error as a missing file
        error = NoImageProvidedException()
    else:
        error = InvalidMovieDataException(details=details)
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


@app.on_event("startup")
async def init_db():
    # Create tables on first deploy (idempotent)
    if settings.AUTO_CREATE_TABLES:
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables ensured")
