"""
Account management API endpoints.

Serves the demonstration/real partition to account management screens.
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel

from api.dependencies import get_account_store
from shared.exceptions import ValidationError

from .interfaces import IAccountStore
from .models import (
    AccountListing,
    AccountRecord,
    AccountStats,
    BulkDeleteRequest,
    BulkDeleteResult,
    ClassificationResponse,
    Player,
    UserDataPayload,
)
from .exceptions import InvalidIdentityError

router = APIRouter()


class CreateAccountRequest(BaseModel):
    """Request to register a real account."""

    email: str
    id: Optional[str] = None
    name: Optional[str] = None
    gamer_handle: Optional[str] = None


class BulkDeleteResponse(BaseModel):
    """Bulk delete response with a summary message."""

    message: str
    results: BulkDeleteResult


@router.get("", response_model=AccountListing)
async def list_accounts(store: IAccountStore = Depends(get_account_store)) -> AccountListing:
    """
    List demonstration and real accounts.
    """
    return store.list_all()


@router.get("/real", response_model=list[AccountRecord])
async def list_real_accounts(
    store: IAccountStore = Depends(get_account_store),
) -> list[AccountRecord]:
    return store.list_real()


@router.get("/demonstration", response_model=list[AccountRecord])
async def list_demonstration_accounts(
    store: IAccountStore = Depends(get_account_store),
) -> list[AccountRecord]:
    return store.list_demonstration()


@router.get("/stats", response_model=AccountStats)
async def get_account_stats(store: IAccountStore = Depends(get_account_store)) -> AccountStats:
    """
    Account counts plus the five most recently joined real accounts.
    """
    return store.get_stats()


@router.post("", response_model=AccountRecord, status_code=201)
async def create_account(
    request: CreateAccountRequest,
    store: IAccountStore = Depends(get_account_store),
) -> AccountRecord:
    """
    Register a real account.

    An existing real account with the same email is overwritten; a
    demonstration account with the same email becomes real.
    """
    player = Player(
        id=request.id or str(uuid.uuid4()),
        email=request.email,
        name=request.name,
        gamer_handle=request.gamer_handle,
        joined_at=datetime.now(timezone.utc),
    )
    try:
        return store.create_real(player)
    except InvalidIdentityError as e:
        raise HTTPException(status_code=400, detail=e.message)


@router.post("/bulk-delete", response_model=BulkDeleteResponse)
async def bulk_delete_accounts(
    request: BulkDeleteRequest,
    store: IAccountStore = Depends(get_account_store),
) -> BulkDeleteResponse:
    try:
        results = store.bulk_delete(request.emails)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    return BulkDeleteResponse(message=results.message, results=results)


@router.get("/{email}/classification", response_model=ClassificationResponse)
async def classify_account(
    email: str,
    store: IAccountStore = Depends(get_account_store),
) -> ClassificationResponse:
    return ClassificationResponse(email=email.strip(), classification=store.classify(email))


@router.delete("/{email}", status_code=204)
async def delete_account(
    email: str,
    store: IAccountStore = Depends(get_account_store),
) -> Response:
    """
    Delete an account from either partition.
    """
    if not store.delete(email):
        raise HTTPException(status_code=404, detail="Account not found")
    return Response(status_code=204)


@router.put("/{email}/data", status_code=204)
async def save_user_data(
    email: str,
    payload: UserDataPayload,
    store: IAccountStore = Depends(get_account_store),
) -> Response:
    try:
        store.save_user_data(email, payload.data)
    except InvalidIdentityError as e:
        raise HTTPException(status_code=404, detail=e.message)
    return Response(status_code=204)


@router.get("/{email}/data", response_model=UserDataPayload)
async def get_user_data(
    email: str,
    store: IAccountStore = Depends(get_account_store),
) -> UserDataPayload:
    data = store.get_user_data(email)
    if data is None:
        raise HTTPException(status_code=404, detail="No user data")
    return UserDataPayload(data=data)
