"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/geocoding", status_code=status.HTTP_200_OK)
def health_geocoding() -> dict:
    """Check geocoding service health."""
    from ...services.geocoding import check_health

    return {"service": "geocoding", "healthy": check_health()}


@router.get("/health/database", status_code=status.HTTP_200_OK)
def check_database() -> dict:
    """Check database connection and address table status."""
    from ...persistence import addresses as address_store

    if not address_store.get_supabase_client():
        return {
            "configured": False,
            "connected": False,
            "message": "Supabase not configured. Set ADDR_SUPABASE_URL and ADDR_SUPABASE_KEY environment variables.",
        }

    connected = address_store.check_connection()
    return {
        "configured": True,
        "connected": connected,
        "message": "Database connected." if connected else "Database connection error, see server logs.",
    }
