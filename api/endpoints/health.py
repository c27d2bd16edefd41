# api/endpoints/health.py

from fastapi import APIRouter

# --- Setup ---
health_router = APIRouter()


@health_router.get("/health")
@health_router.head("/health")
def health_check():
    """Server health check."""
    return {"status": "ok"}
