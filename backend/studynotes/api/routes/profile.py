from fastapi import APIRouter, Depends
from ...schemas import User, UserProfileUpdate, UserResponse
from ...services import ProfileService
from ..dependencies import get_current_user_id, get_profile_service

router = APIRouter(prefix="/profile", tags=["profile"])


@router.put("", response_model=UserResponse)
def update_profile(
    profile_data: UserProfileUpdate,
    user_id: str = Depends(get_current_user_id),
    profile_service: ProfileService = Depends(get_profile_service)
):
    """Update preferred model and/or API key"""
    user = profile_service.update_profile(user_id, profile_data)
    return UserResponse(user=User.from_record(user))
