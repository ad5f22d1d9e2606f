# bloglist/routes/health.py

"""Health check route."""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import ORJSONResponse

from bloglist.db import Database
from bloglist.dependencies import get_database
from bloglist.schemas import HealthCheckResponse

router = APIRouter(tags=["🩺 Health"])


@router.get(
    "/health",
    response_class=ORJSONResponse,
    response_model=HealthCheckResponse,
    summary="Health check",
    description="Report service status and database reachability.",
    operation_id="health_check",
)
async def health_check(
    database: Annotated[Database, Depends(get_database)],
) -> HealthCheckResponse:
    database_ok = await database.ping()
    return HealthCheckResponse(
        status="ok" if database_ok else "degraded",
        database="connected" if database_ok else "unreachable",
    )
