from typing import Optional
from fastapi import APIRouter, Depends, Response
from ...config import Settings
from ...context import AppContext
from ...core.sessions import SessionRecord
from ...schemas import UserRegister, UserLogin, User, UserResponse, MessageResponse
from ...services import AuthService
from ..dependencies import get_context, get_session_id, get_current_session, get_auth_service

router = APIRouter(prefix="/auth", tags=["auth"])


def _set_session_cookie(response: Response, settings: Settings, session: SessionRecord) -> None:
    response.set_cookie(
        key=settings.session_cookie_name,
        value=session.session_id,
        max_age=settings.session_max_age_days * 24 * 60 * 60,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite=settings.session_cookie_samesite.lower(),
    )


@router.post("/register", response_model=UserResponse)
def register(
    user_data: UserRegister,
    response: Response,
    session_id: Optional[str] = Depends(get_session_id),
    context: AppContext = Depends(get_context),
    auth_service: AuthService = Depends(get_auth_service)
):
    """Register a new user and log them in"""
    user, session = auth_service.register(user_data, previous_session_id=session_id)
    _set_session_cookie(response, context.settings, session)
    return UserResponse(user=User.from_record(user))


@router.post("/login", response_model=UserResponse)
def login(
    user_data: UserLogin,
    response: Response,
    session_id: Optional[str] = Depends(get_session_id),
    context: AppContext = Depends(get_context),
    auth_service: AuthService = Depends(get_auth_service)
):
    """Check credentials and start a session"""
    user, session = auth_service.login(user_data, previous_session_id=session_id)
    _set_session_cookie(response, context.settings, session)
    return UserResponse(user=User.from_record(user))


@router.post("/logout", response_model=MessageResponse)
def logout(
    response: Response,
    session_id: Optional[str] = Depends(get_session_id),
    context: AppContext = Depends(get_context),
    auth_service: AuthService = Depends(get_auth_service)
):
    """End the current session, if any; always clears the cookie"""
    auth_service.logout(session_id)
    response.delete_cookie(
        key=context.settings.session_cookie_name,
        httponly=True,
        secure=context.settings.session_cookie_secure,
        samesite=context.settings.session_cookie_samesite.lower(),
    )
    return MessageResponse(message="Logged out successfully")


@router.get("/me", response_model=UserResponse)
def me(
    session: SessionRecord = Depends(get_current_session),
    auth_service: AuthService = Depends(get_auth_service)
):
    """Current user"""
    return UserResponse(user=User.from_record(auth_service.get_current_user(session.user_id)))
