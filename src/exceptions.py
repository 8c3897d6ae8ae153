from typing import Optional, Dict, Any


class FactCheckError(Exception):
    def __init__(self, message: str, error_code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details
        }


class ValidationError(FactCheckError):
    pass


class AuthenticationError(FactCheckError):
    pass


class NotFoundError(FactCheckError):
    pass


class UserNotFoundError(NotFoundError):
    def __init__(self, user_id: str):
        super().__init__(
            message=f"User {user_id} not found",
            error_code="USER_NOT_FOUND",
            details={"user_id": user_id}
        )


class NewsNotFoundError(NotFoundError):
    def __init__(self, news_id: str):
        super().__init__(
            message=f"News {news_id} not found",
            error_code="NEWS_NOT_FOUND",
            details={"news_id": news_id}
        )


class DatabaseError(FactCheckError):
    pass


class ExternalServiceError(FactCheckError):
    pass


class VerificationError(ExternalServiceError):
    pass


class QuotaExceededError(VerificationError):
    pass


class RateLimitExceededError(VerificationError):
    pass


class ModelUpstreamError(VerificationError):
    def __init__(self, message: str, status_code: int, provider_code: Optional[str] = None):
        super().__init__(
            message=message,
            error_code="MODEL_UPSTREAM_ERROR",
            details={"status_code": status_code, "provider_code": provider_code}
        )
        self.status_code = status_code
        self.provider_code = provider_code
