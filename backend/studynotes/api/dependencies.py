"""
Request-scoped dependencies

Collaborators come from the AppContext stored on the application state;
services are cheap wrappers built per request.
"""
from typing import Optional
from fastapi import Depends, Request
from ..context import AppContext
from ..core.sessions import SessionRecord
from ..exceptions import AuthenticationError
from ..services import AuthService, ProfileService, ProjectService, FileService


def get_context(request: Request) -> AppContext:
    return request.app.state.context


def get_session_id(request: Request, context: AppContext = Depends(get_context)) -> Optional[str]:
    """Opaque session id from the session cookie, if any"""
    return request.cookies.get(context.settings.session_cookie_name)


def get_current_session(
    session_id: Optional[str] = Depends(get_session_id),
    context: AppContext = Depends(get_context),
) -> SessionRecord:
    """Auth guard: the live session for this request, or 401"""
    session = context.sessions.get(session_id)
    if session is None:
        raise AuthenticationError("Authentication required")
    return session


def get_current_user_id(session: SessionRecord = Depends(get_current_session)) -> str:
    return session.user_id


def get_auth_service(context: AppContext = Depends(get_context)) -> AuthService:
    return AuthService(context.storage, context.sessions, context.event_bus)


def get_profile_service(context: AppContext = Depends(get_context)) -> ProfileService:
    return ProfileService(context.storage, context.api_key_cipher)


def get_project_service(context: AppContext = Depends(get_context)) -> ProjectService:
    return ProjectService(context.storage, context.event_bus)


def get_file_service(context: AppContext = Depends(get_context)) -> FileService:
    return FileService(context.storage, context.event_bus)
