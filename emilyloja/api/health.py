"""Health check endpoint with database connectivity check."""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from emilyloja.schemas.health import HealthResponse

router = APIRouter()


@router.get(
    "/health",
    response_model=HealthResponse,
    response_model_exclude_none=True,
    responses={500: {"model": HealthResponse}},
)
def get_health(request: Request) -> HealthResponse | JSONResponse:
    """
    Return service health and database connectivity.
    Answers 500 when the database is not initialized or not reachable.
    """
    database = getattr(request.app.state, "database", None)
    if database is None:
        message = "pool-not-initialized"
    elif database.check_connected():
        return HealthResponse(status="ok", db=True)
    else:
        message = "database-unreachable"
    return JSONResponse(
        status_code=500,
        content=HealthResponse(status="error", db=False, message=message).model_dump(),
    )
