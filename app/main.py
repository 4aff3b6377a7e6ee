import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.routers import health, movies
from app.core.config import get_settings
from app.core.error_handlers import register_exception_handlers
from app.db import Base, engine
from app import models  # ensure models are imported

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Movie Catalog API",
    description="Movie catalog CRUD service with OMDB import",
    version="1.0.0"
)

# CORS middleware configuration
origins_env = settings.CORS_ALLOW_ORIGINS or ""
origins = [o.strip() for o in origins_env.split(",") if o.strip()] or [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(health.router)
app.include_router(movies.router, prefix=settings.API_PREFIX)


@app.on_event("startup")
async def init_db():
    # Local convenience only; deployed schemas are migrated externally
    if settings.AUTO_CREATE_TABLES:
        logger.info("AUTO_CREATE_TABLES enabled, creating missing tables")
        Base.metadata.create_all(bind=engine)
