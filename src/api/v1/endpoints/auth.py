from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query
import structlog

from ...dependencies import get_auth_service, get_current_user_id
from ....exceptions import FactCheckError
from ....services.auth_service import AuthService
from ..schemas import AuthCallbackResponse, LoginResponse, MessageResponse, UserResponse

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.get("/login", response_model=LoginResponse)
async def login(auth_service: AuthService = Depends(get_auth_service)):
    return LoginResponse(auth_url=auth_service.get_login_url())


@router.get("/callback", response_model=AuthCallbackResponse)
async def callback(
    code: Optional[str] = Query(None, description="Authorization code returned by Google"),
    auth_service: AuthService = Depends(get_auth_service)
):
    if not code:
        raise HTTPException(status_code=400, detail="Authorization code is required")

    try:
        token, user = await auth_service.handle_callback(code)
    except FactCheckError as e:
        logger.error("Failed to handle OAuth callback", error=e.message, error_code=e.error_code)
        raise HTTPException(status_code=500, detail="Failed to authenticate user")

    return AuthCallbackResponse(token=token, user=UserResponse.model_validate(user))


@router.get("/me", response_model=UserResponse)
async def me(
    user_id: str = Depends(get_current_user_id),
    auth_service: AuthService = Depends(get_auth_service)
):
    try:
        user = auth_service.get_user_by_id(user_id)
    except Exception as e:
        logger.error("Failed to get user", user_id=user_id, error=str(e))
        raise HTTPException(status_code=500, detail="Failed to get user information")

    return UserResponse.model_validate(user)


@router.post("/logout", response_model=MessageResponse)
async def logout(user_id: str = Depends(get_current_user_id)):
    # Tokens are stateless; there is nothing to revoke
    logger.info("User logged out", user_id=user_id)
    return MessageResponse(message="Logged out successfully")
