"""
Franchise endpoints.

These routes expose list, get, create, update, delete and search for
franchise records.  Each handler converts every store error into an
``APIError`` so that a failing request never takes the process down:
a missing record is a 404, create and update report any other failure
as a 400, and the remaining operations report store failures as a 500.
"""

from typing import List

from fastapi import APIRouter, Depends, Request, status

from franchise_api.app.api.errors import APIError
from franchise_api.app.schemas.franchise import (
    ErrorResponse,
    FranchiseCreate,
    FranchiseRead,
    FranchiseUpdate,
    MessageResponse,
)
from franchise_api.app.services.exceptions import FranchiseNotFound, FranchiseStoreError
from franchise_api.app.services.franchise_service import FranchiseStore

NOT_FOUND_MESSAGE = "Franchise not found"

router = APIRouter(
    responses={
        status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
    }
)


def get_store(request: Request) -> FranchiseStore:
    """Return the store attached to the application by ``create_app``."""
    return request.app.state.store


def _not_found() -> APIError:
    return APIError(status.HTTP_404_NOT_FOUND, NOT_FOUND_MESSAGE)


@router.get("", response_model=List[FranchiseRead])
@router.get("/", response_model=List[FranchiseRead], include_in_schema=False)
async def list_franchises(store: FranchiseStore = Depends(get_store)) -> List[FranchiseRead]:
    """Return all franchises, newest first."""
    try:
        return await store.list_franchises()
    except FranchiseStoreError as e:
        raise APIError(status.HTTP_500_INTERNAL_SERVER_ERROR, "Error fetching franchises", str(e)) from e


@router.get("/search/{term}", response_model=List[FranchiseRead])
async def search_franchises(
    term: str,
    store: FranchiseStore = Depends(get_store),
) -> List[FranchiseRead]:
    """Return franchises where any text field contains ``term``, ignoring case."""
    try:
        return await store.search_franchises(term)
    except FranchiseStoreError as e:
        raise APIError(status.HTTP_500_INTERNAL_SERVER_ERROR, "Error searching franchises", str(e)) from e


@router.get("/search/", response_model=List[FranchiseRead], include_in_schema=False)
async def search_franchises_empty_term(
    store: FranchiseStore = Depends(get_store),
) -> List[FranchiseRead]:
    # An empty term matches everything.
    return await search_franchises("", store)


@router.get("/{franchise_id}", response_model=FranchiseRead)
async def get_franchise(
    franchise_id: str,
    store: FranchiseStore = Depends(get_store),
) -> FranchiseRead:
    """Retrieve a single franchise by its id.

    A malformed id is reported as a store failure (500), not as 404.
    """
    try:
        return await store.get_franchise(franchise_id)
    except FranchiseNotFound as e:
        raise _not_found() from e
    except FranchiseStoreError as e:
        raise APIError(status.HTTP_500_INTERNAL_SERVER_ERROR, "Error fetching franchise", str(e)) from e


@router.post(
    "",
    response_model=FranchiseRead,
    status_code=status.HTTP_201_CREATED,
    responses={status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}},
)
@router.post(
    "/",
    response_model=FranchiseRead,
    status_code=status.HTTP_201_CREATED,
    include_in_schema=False,
)
async def create_franchise(
    franchise_in: FranchiseCreate,
    store: FranchiseStore = Depends(get_store),
) -> FranchiseRead:
    """Create a franchise.

    ``name``, ``company`` and ``contactName`` are required.  The id and
    ``createdAt`` are generated by the server.
    """
    try:
        return await store.create_franchise(franchise_in)
    except FranchiseStoreError as e:
        raise APIError(status.HTTP_400_BAD_REQUEST, "Error creating franchise", str(e)) from e


@router.put(
    "/{franchise_id}",
    response_model=FranchiseRead,
    responses={status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}},
)
async def update_franchise(
    franchise_id: str,
    franchise_in: FranchiseUpdate,
    store: FranchiseStore = Depends(get_store),
) -> FranchiseRead:
    """Update an existing franchise.

    Partial updates are supported; any unspecified fields remain
    unchanged.  Required fields must still be present afterwards.
    """
    try:
        return await store.update_franchise(franchise_id, franchise_in)
    except FranchiseNotFound as e:
        raise _not_found() from e
    except FranchiseStoreError as e:
        raise APIError(status.HTTP_400_BAD_REQUEST, "Error updating franchise", str(e)) from e


@router.delete("/{franchise_id}", response_model=MessageResponse)
async def delete_franchise(
    franchise_id: str,
    store: FranchiseStore = Depends(get_store),
) -> MessageResponse:
    """Delete a franchise permanently."""
    try:
        await store.delete_franchise(franchise_id)
    except FranchiseNotFound as e:
        raise _not_found() from e
    except FranchiseStoreError as e:
        raise APIError(status.HTTP_500_INTERNAL_SERVER_ERROR, "Error deleting franchise", str(e)) from e
    return MessageResponse(message="Franchise deleted successfully")
