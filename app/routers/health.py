import logging
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.db import get_db
from app.core.metrics import movies_created

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])

@router.get("/health")
def health():
    return {"status": "ok"}

@router.get("/health/ready")
def readiness(db: Session = Depends(get_db)):
    """Check that the database answers"""
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"Database readiness check failed: {str(e)}")
        return JSONResponse(status_code=503, content={"status": "unavailable", "database": "error"})
    return {"status": "ok", "database": "ok"}

@router.get("/metrics")
def metrics():
    return {"moviesCreated": movies_created.snapshot()}
