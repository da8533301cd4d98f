# services/school_directory/dependencies.py
from typing import Optional

from fastapi import Depends, HTTPException, Request, status

from shared.auth import get_client_id, get_optional_client_id
from services.school_directory.context import Directory
from services.school_directory.schemas.users import UserRecord, UserRole
from services.school_directory.session import Session
from services.school_directory.store import DataStore


def get_directory(request: Request) -> Directory:
    return request.app.state.directory


def get_data(directory: Directory = Depends(get_directory)) -> DataStore:
    return directory.data


def get_session(
    client_id: str = Depends(get_client_id),
    directory: Directory = Depends(get_directory),
) -> Session:
    return directory.session_for(client_id)


def get_optional_session(
    client_id: Optional[str] = Depends(get_optional_client_id),
    directory: Directory = Depends(get_directory),
) -> Optional[Session]:
    if client_id is None:
        return None
    return directory.session_for(client_id)


def get_current_user(session: Session = Depends(get_session)) -> UserRecord:
    user = session.user
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not logged in",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


def require_admin(current_user: UserRecord = Depends(get_current_user)) -> UserRecord:
    if current_user.role != UserRole.ADMIN:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only admins can access this page",
        )
    return current_user


def require_member(current_user: UserRecord = Depends(get_current_user)) -> UserRecord:
    # Saved schools are a regular-user feature; admins use the dashboard
    if current_user.role == UserRole.ADMIN:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admins do not have saved schools",
        )
    return current_user
