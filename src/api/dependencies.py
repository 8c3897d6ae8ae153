from typing import Optional
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from fastapi import Depends, HTTPException
from sqlalchemy.orm import Session
import structlog

from ..core.database import get_db
from ..exceptions import AuthenticationError
from ..repositories.news_repository import NewsRepository
from ..repositories.user_repository import UserRepository
from ..services.auth_service import AuthService, GoogleOAuthClient
from ..services.news_service import NewsService
from ..services.token_service import TokenService
from ..services.verification_service import VerificationService
from ..config import get_settings

logger = structlog.get_logger(__name__)

security = HTTPBearer(auto_error=False)


def get_user_repository(db: Session = Depends(get_db)) -> UserRepository:
    return UserRepository(db)


def get_news_repository(db: Session = Depends(get_db)) -> NewsRepository:
    return NewsRepository(db)


def get_token_service() -> TokenService:
    settings = get_settings()
    return TokenService(
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        expiration_hours=settings.jwt_expiration_hours
    )


def get_oauth_client() -> GoogleOAuthClient:
    settings = get_settings()
    return GoogleOAuthClient(
        client_id=settings.google_client_id,
        client_secret=settings.google_client_secret,
        redirect_url=settings.google_redirect_url
    )


def get_auth_service(
    user_repository: UserRepository = Depends(get_user_repository),
    oauth_client: GoogleOAuthClient = Depends(get_oauth_client),
    token_service: TokenService = Depends(get_token_service)
) -> AuthService:
    return AuthService(user_repository, oauth_client, token_service)


def get_news_service(repository: NewsRepository = Depends(get_news_repository)) -> NewsService:
    return NewsService(repository)


def get_verification_service() -> VerificationService:
    settings = get_settings()
    return VerificationService(
        api_key=settings.openai_api_key,
        endpoint=settings.openai_endpoint,
        model_name=settings.openai_model_name,
        max_tokens=settings.openai_max_tokens
    )


async def get_current_user_id_optional(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    token_service: TokenService = Depends(get_token_service)
) -> Optional[str]:
    if not credentials or not credentials.credentials:
        return None

    try:
        return token_service.validate_token(credentials.credentials)
    except AuthenticationError:
        return None


async def get_current_user_id(
    user_id: Optional[str] = Depends(get_current_user_id_optional)
) -> str:
    if not user_id:
        raise HTTPException(
            status_code=401,
            detail="Authentication required. Please provide a valid bearer token."
        )
    return user_id
