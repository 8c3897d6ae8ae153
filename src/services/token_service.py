from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
import structlog

from ..exceptions import AuthenticationError

logger = structlog.get_logger(__name__)


class TokenService:
    """Issues and validates the signed bearer tokens handed out after login."""

    def __init__(self, secret: str, algorithm: str = "HS256", expiration_hours: int = 24):
        self.secret = secret
        self.algorithm = algorithm
        self.expiration = timedelta(hours=expiration_hours)

    def issue_token(self, user_id: str, now: Optional[datetime] = None) -> str:
        issued_at = now or datetime.now(timezone.utc)
        claims = {
            "sub": user_id,
            "iat": issued_at,
            "exp": issued_at + self.expiration,
        }
        token = jwt.encode(claims, self.secret, algorithm=self.algorithm)
        logger.info("Issued access token", user_id=user_id)
        return token

    def validate_token(self, token: str) -> str:
        """Return the subject (user id) of a valid token."""
        try:
            claims = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require": ["sub", "iat", "exp"]},
            )
        except jwt.ExpiredSignatureError:
            logger.warning("Token validation failed", reason="expired")
            raise AuthenticationError("Token has expired", error_code="TOKEN_EXPIRED")
        except jwt.InvalidTokenError as e:
            logger.warning("Token validation failed", reason=str(e))
            raise AuthenticationError(f"Invalid token: {e}", error_code="INVALID_TOKEN")

        subject = claims.get("sub")
        if not subject:
            raise AuthenticationError("Subject claim not found", error_code="INVALID_TOKEN")
        return subject
