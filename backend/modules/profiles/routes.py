"""
Profile API endpoints.

Provides the profile-completion flow: read, complete, and handle checks.
"""

from fastapi import APIRouter, Depends, HTTPException

from api.middleware.auth import get_current_user
from api.dependencies import get_profile_service
from shared.models import AuthenticatedUser

from .interfaces import IProfileService
from .models import HandleAvailability, PlayerProfile, UpdateProfileRequest
from .exceptions import HandleTakenError, InvalidProfileError, ProfileNotFoundError

router = APIRouter()


@router.get("/me", response_model=PlayerProfile)
async def get_my_profile(
    user: AuthenticatedUser = Depends(get_current_user),
    service: IProfileService = Depends(get_profile_service),
) -> PlayerProfile:
    """
    Get the current user's player profile.
    """
    profile = await service.find_profile_by_identity(user.id)
    if profile is None:
        raise HTTPException(status_code=404, detail="Player not found")
    return profile


@router.put("/me", response_model=PlayerProfile)
async def update_my_profile(
    request: UpdateProfileRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IProfileService = Depends(get_profile_service),
) -> PlayerProfile:
    """
    Complete the current user's profile with a name and gamer handle.
    """
    try:
        return await service.update_profile(user.id, request.name, request.gamer_handle)
    except ProfileNotFoundError:
        raise HTTPException(status_code=404, detail="Player not found")
    except HandleTakenError as e:
        raise HTTPException(status_code=409, detail=e.message)
    except InvalidProfileError as e:
        raise HTTPException(status_code=400, detail=e.message)


@router.get("/handles/{gamer_handle}", response_model=HandleAvailability)
async def check_handle(
    gamer_handle: str,
    service: IProfileService = Depends(get_profile_service),
) -> HandleAvailability:
    """
    Check whether a gamer handle is available.
    """
    return await service.check_handle(gamer_handle)
