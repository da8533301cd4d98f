import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status

from shared.auth import create_access_token, get_optional_client_id
from services.school_directory.context import Directory, new_client_id
from services.school_directory.dependencies import get_current_user, get_directory, get_session
from services.school_directory.schemas.users import (
    LoginRequest,
    ProfileUpdate,
    SignUpRequest,
    TokenResponse,
    UserOut,
    UserRecord,
)
from services.school_directory.session import EmailAlreadyRegistered, Session


router = APIRouter(prefix="/auth", tags=["Auth"])
logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8


def _token_response(client_id: str, user: UserRecord) -> TokenResponse:
    return TokenResponse(
        access_token=create_access_token({"sid": client_id}),
        user=UserOut.model_validate(user.model_dump()),
    )


# --- LOGIN ---
@router.post("/login", response_model=TokenResponse)
async def login(
    payload: LoginRequest,
    directory: Directory = Depends(get_directory),
    client_id: Optional[str] = Depends(get_optional_client_id),
):
    # Keep the caller's client id so its saved schools survive a re-login
    client_id = client_id or new_client_id()
    session = directory.session_for(client_id)

    user = session.login(payload.email, payload.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password.",
        )
    return _token_response(client_id, user)


# --- SIGN UP ---
@router.post("/signup", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def sign_up(
    payload: SignUpRequest,
    directory: Directory = Depends(get_directory),
    client_id: Optional[str] = Depends(get_optional_client_id),
):
    if payload.password != payload.confirm_password:
        raise HTTPException(status_code=400, detail="Passwords do not match.")

    client_id = client_id or new_client_id()
    session = directory.session_for(client_id)
    try:
        user = await session.sign_up(payload.email, payload.password, payload.username)
    except EmailAlreadyRegistered as e:
        raise HTTPException(status_code=400, detail=str(e))

    logger.info("New account registered: %s", user.id)
    return _token_response(client_id, user)


@router.post("/logout")
async def logout(session: Session = Depends(get_session)):
    session.logout()
    return {"message": "Logged out"}


# --- PROFILE ---
@router.get("/me", response_model=UserOut)
async def me(current_user: UserRecord = Depends(get_current_user)):
    return current_user


@router.patch("/profile", response_model=UserOut)
async def update_profile(
    payload: ProfileUpdate,
    session: Session = Depends(get_session),
    current_user: UserRecord = Depends(get_current_user),
):
    changes = {}
    if payload.username is not None and payload.username != current_user.username:
        changes["username"] = payload.username
    if payload.avatar_url is not None and payload.avatar_url != current_user.avatar_url:
        changes["avatar_url"] = payload.avatar_url

    if payload.password:
        if payload.password != payload.confirm_password:
            raise HTTPException(status_code=400, detail="Passwords do not match.")
        if len(payload.password) < MIN_PASSWORD_LENGTH:
            raise HTTPException(
                status_code=400,
                detail=f"Password must be at least {MIN_PASSWORD_LENGTH} characters.",
            )
        changes["password"] = payload.password

    if not changes:
        raise HTTPException(status_code=400, detail="No changes to save.")

    result = await session.update_profile(changes)
    if result is not None and not result.ok:
        logger.warning("Profile for %s saved locally only: %s", current_user.id, result.error)
    return session.user
