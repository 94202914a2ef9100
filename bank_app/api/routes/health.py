"""
Endpoint stanu aplikacji - gotowość po zakończeniu inicjalizacji.
"""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health")
def health(request: Request):
    """Returns 200 once startup bootstrap finished, 503 before."""
    ready = bool(getattr(request.app.state, "ready", False))
    body = {"status": "ok" if ready else "starting", "ready": ready}
    return JSONResponse(status_code=200 if ready else 503, content=body)
