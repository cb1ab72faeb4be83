"""Health check endpoint."""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from franchise_api.app.api.endpoints.franchises import get_store
from franchise_api.app.services.franchise_service import FranchiseStore

router = APIRouter()


@router.get("/health")
async def health(store: FranchiseStore = Depends(get_store)) -> JSONResponse:
    """Report whether the franchise store answers queries."""
    if await store.ping():
        return JSONResponse(status_code=status.HTTP_200_OK, content={"status": "ok"})
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "unavailable"},
    )
