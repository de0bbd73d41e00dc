"""Health endpoint router composition for liveness and call counting."""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse, RedirectResponse

from spaserver.domain import HEALTH_LIVE, HealthReport, RequestCounter


def api_create_health_router(request_counter: RequestCounter) -> APIRouter:
    """Create health-check router backed by a shared request counter.

    Args:
        request_counter: Process-wide counter incremented once per call.

    Returns:
        APIRouter: Router exposing `/api/health` endpoint.

    Raises:
        ValueError: Raised when request_counter is invalid.
    """

    if request_counter is None:
        raise ValueError("request_counter must not be None")

    router = APIRouter(prefix="/api", tags=["health"])

    @router.get("/health")
    def api_health_status() -> JSONResponse:
        """Return liveness state with the updated call counter.

        Returns:
            JSONResponse: Health payload with the counter as a string.

        Raises:
            RuntimeError: This handler does not raise runtime errors.
        """

        report = HealthReport(health=HEALTH_LIVE, counter=str(request_counter.counter_increment()))
        payload = {"health": report.health, "counter": report.counter}
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    # The static mount catches every path, so the trailing-slash form is
    # redirected here instead of relying on router slash redirection.
    @router.get("/health/", include_in_schema=False)
    def api_health_trailing_slash() -> RedirectResponse:
        return RedirectResponse(url="/api/health", status_code=status.HTTP_301_MOVED_PERMANENTLY)

    return router
