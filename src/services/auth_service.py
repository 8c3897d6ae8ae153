from dataclasses import dataclass
from typing import Optional, Tuple
from urllib.parse import urlencode

import httpx
import structlog

from ..exceptions import AuthenticationError, UserNotFoundError
from ..models.user import User
from ..repositories.user_repository import UserRepository
from .token_service import TokenService

logger = structlog.get_logger(__name__)

GOOGLE_AUTH_URL = "https://accounts.google.com/o/oauth2/auth"
GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"
GOOGLE_USERINFO_URL = "https://www.googleapis.com/oauth2/v2/userinfo"
GOOGLE_SCOPES = [
    "https://www.googleapis.com/auth/userinfo.email",
    "https://www.googleapis.com/auth/userinfo.profile",
]


@dataclass
class GoogleUserInfo:
    id: str
    email: str
    verified_email: bool
    name: str
    picture: Optional[str] = None


class GoogleOAuthClient:
    """Authorization-code grant against Google's OAuth2 endpoints."""

    def __init__(self, client_id: str, client_secret: str, redirect_url: str, timeout: float = 30.0):
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_url = redirect_url
        self.timeout = timeout

    def authorization_url(self, state: str = "state") -> str:
        params = {
            "client_id": self.client_id,
            "redirect_uri": self.redirect_url,
            "response_type": "code",
            "scope": " ".join(GOOGLE_SCOPES),
            "state": state,
            "access_type": "offline",
        }
        return f"{GOOGLE_AUTH_URL}?{urlencode(params)}"

    async def exchange_code(self, code: str) -> str:
        payload = {
            "code": code,
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "redirect_uri": self.redirect_url,
            "grant_type": "authorization_code",
        }
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(GOOGLE_TOKEN_URL, data=payload)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            raise AuthenticationError(
                f"Failed to exchange code for token: HTTP {e.response.status_code}",
                error_code="OAUTH_EXCHANGE_FAILED",
            )
        except httpx.HTTPError as e:
            raise AuthenticationError(f"Failed to exchange code for token: {e}", error_code="OAUTH_EXCHANGE_FAILED")

        access_token = data.get("access_token")
        if not access_token:
            raise AuthenticationError("Token response did not include an access token", error_code="OAUTH_EXCHANGE_FAILED")
        return access_token

    async def fetch_user_info(self, access_token: str) -> GoogleUserInfo:
        headers = {"Authorization": f"Bearer {access_token}"}
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(GOOGLE_USERINFO_URL, headers=headers)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            raise AuthenticationError(
                f"Failed to get user info: HTTP {e.response.status_code}",
                error_code="OAUTH_USERINFO_FAILED",
            )
        except httpx.HTTPError as e:
            raise AuthenticationError(f"Failed to get user info: {e}", error_code="OAUTH_USERINFO_FAILED")

        if not data.get("id") or not data.get("email"):
            raise AuthenticationError("User info response is missing id or email", error_code="OAUTH_USERINFO_FAILED")

        return GoogleUserInfo(
            id=data["id"],
            email=data["email"],
            verified_email=bool(data.get("verified_email", False)),
            name=data.get("name") or data["email"],
            picture=data.get("picture"),
        )


class AuthService:
    def __init__(self, user_repository: UserRepository, oauth_client: GoogleOAuthClient, token_service: TokenService):
        self.user_repository = user_repository
        self.oauth_client = oauth_client
        self.token_service = token_service

    def get_login_url(self) -> str:
        return self.oauth_client.authorization_url()

    async def handle_callback(self, code: str) -> Tuple[str, User]:
        logger.info("Starting OAuth callback")

        access_token = await self.oauth_client.exchange_code(code)
        user_info = await self.oauth_client.fetch_user_info(access_token)
        logger.info("Fetched Google profile", email=user_info.email)

        user = self._find_or_create_user(user_info)
        token = self.token_service.issue_token(user.id)

        logger.info("OAuth callback completed", user_id=user.id)
        return token, user

    def _find_or_create_user(self, user_info: GoogleUserInfo) -> User:
        try:
            user = self.user_repository.get_by_google_id(user_info.id)
            if user:
                if user.name != user_info.name or user.picture != user_info.picture:
                    user = self.user_repository.update_profile(user, user_info.name, user_info.picture)
                return user

            return self.user_repository.create(
                google_id=user_info.id,
                email=user_info.email,
                name=user_info.name,
                picture=user_info.picture,
            )
        except Exception as e:
            self.user_repository.rollback()
            logger.error("Failed to find or create user", google_id=user_info.id, error=str(e))
            raise AuthenticationError(f"Failed to find or create user: {e}", error_code="USER_PERSISTENCE_FAILED")

    def validate_token(self, token: str) -> str:
        return self.token_service.validate_token(token)

    def get_user_by_id(self, user_id: str) -> User:
        user = self.user_repository.get_by_id(user_id)
        if not user:
            raise UserNotFoundError(user_id)
        return user
