"""
Health check endpoint for the evaluation service.

Description:
This module defines a FastAPI route used by the load balancer and the deploy
pipeline to check that the service is up. It does not touch the database or
the completion service.

Arguments:
- request: An instance of Request, required for rate limiting.

Returns:
- A JSON response with the status of the application, {"status": "ok"}.

Dependencies:
- fastapi: For defining routes.
- app.core.route_limiters: For rate limiting functionality.
- app.schemas.health_response: For defining the response model.
- loguru: For logging information about the health check endpoint.
"""
from fastapi import APIRouter, Request
from app.core.route_limiters import limiter
from app.schemas.health_response import HealthResponse
from loguru import logger

router = APIRouter(
    prefix="/api",
    tags=["health"],
    responses={404: {"description": "Not found"}}
)

@router.get("/health", response_model=HealthResponse)
@limiter.limit("10/minute")  # Custom limit for this endpoint
async def health(request: Request):
    """
    Request parameter is required for rate limiting.
    """
    logger.debug("Health check endpoint called")
    return HealthResponse(status="ok")
