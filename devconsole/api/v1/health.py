"""Health check: database connectivity and whether the console schema is migrated."""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from devconsole.core.config import settings
from devconsole.core.database import check_db_connected, get_db, missing_console_tables
from devconsole.schemas.health import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/", response_model=HealthResponse)
def get_health(db: Session = Depends(get_db)) -> HealthResponse:
    """
    Return service health, database connectivity and console schema readiness.
    Used by load balancers and monitoring.
    """
    if not check_db_connected(db):
        return HealthResponse(environment=settings.APP_ENV, database="disconnected")

    try:
        missing = missing_console_tables(db)
    except SQLAlchemyError as e:
        logger.warning("Schema inspection failed: %s", e)
        return HealthResponse(environment=settings.APP_ENV, database="connected")
    return HealthResponse(
        environment=settings.APP_ENV,
        database="connected",
        schema_ready=not missing,
        missing_tables=missing,
    )
